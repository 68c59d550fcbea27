# Copyright 2026 Kind Contributors
# SPDX-License-Identifier: Apache-2.0

"""Factory creation and instance construction.

:func:`define_type` turns a definition into a factory class. The schema and
behavior table are fixed when the factory is created; every call to the
factory then runs the same pass:

1. Initialise the nearest non-factory base class with no arguments.
2. Convert each schema field in declaration order and assign it.
3. Apply the extra-fields policy to input keys the schema does not declare.

The behavior table becomes the class namespace, so it is shared by all
instances. The first conversion error aborts construction and propagates;
no partially built instance reaches the caller.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from kind.conversion.engine import MISSING, convert
from kind.errors import ConversionError, DefinitionError
from kind.factory.definition import Definition, explicit_definition, split_definition
from kind.model.types import OptionalDescriptor, TypeDescriptor

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class ExtraFields(enum.Enum):
    """Policy for input keys that the schema does not declare."""

    ALLOW = "allow"  # copied onto the instance unvalidated
    IGNORE = "ignore"
    FORBID = "forbid"


def define_type(
    definition: Mapping[str, object] | type,
    base: type | None = None,
    *,
    behavior: Mapping[str, object] | None = None,
    name: str | None = None,
    extra: ExtraFields | str = ExtraFields.ALLOW,
) -> type:
    """Create a factory class from a type definition.

    Two forms are accepted. Without *behavior*, *definition* mixes fields and
    members and is split by :func:`~kind.factory.definition.split_definition`.
    With *behavior*, *definition* must contain only types and *behavior*
    supplies the members.

    Args:
        definition: A mapping or a class body declaring fields (and members).
        base: Optional base class. Instances are initialised with
            ``base.__init__(self)`` before any field is assigned and are
            instances of *base*. A base created by :func:`define_type`
            contributes its fields ahead of the definition's own. Defaults to
            the bases of a class definition, or ``object``.
        behavior: Explicit behavior table (functions, properties, ...).
        name: Class name of the factory. Defaults to the definition class
            name, or ``"Kind"`` for mappings.
        extra: Policy for undeclared input keys; ``"allow"`` (default),
            ``"ignore"`` or ``"forbid"``.

    Returns:
        The factory class. Call it with a mapping of raw field values.

    Raises:
        DefinitionError: If the definition is malformed.
    """
    if behavior is None:
        parts = split_definition(definition)
    else:
        parts = explicit_definition(definition, behavior)

    try:
        policy = ExtraFields(extra)
    except ValueError:
        raise DefinitionError(f"Unknown extra-fields policy: {extra!r}") from None

    if base is not None:
        if not isinstance(base, type):
            raise DefinitionError(f"Base must be a class, got {base!r}")
        bases: tuple[type, ...] = (base,)
    elif isinstance(definition, type):
        bases = definition.__bases__
    else:
        bases = (object,)

    factory = _create_factory(
        name or (definition.__name__ if isinstance(definition, type) else "Kind"),
        bases,
        parts,
        policy,
        source=definition if isinstance(definition, type) else None,
    )
    logger.debug(
        "Defined %s with fields %s and members %s",
        factory.__name__,
        list(factory.__kind_schema__),
        list(parts.behavior),
    )
    return factory


def kind(
    cls: type | None = None,
    /,
    *,
    extra: ExtraFields | str = ExtraFields.ALLOW,
) -> Any:
    """Class decorator form of :func:`define_type`.

    Usable bare (``@kind``) or with options (``@kind(extra="forbid")``). The
    decorated class's bases become the factory's bases.
    """

    def wrap(definition: type) -> type:
        return define_type(definition, extra=extra)

    if cls is None:
        return wrap
    return wrap(cls)


def build_instance(
    instance: object,
    schema: Mapping[str, TypeDescriptor],
    data: Mapping[str, Any],
    extra: ExtraFields = ExtraFields.ALLOW,
) -> object:
    """Convert *data* against *schema* and assign the results onto *instance*.

    Fields are processed in schema order so the first offending field in
    declaration order is the one reported. An absent optional field is not
    assigned; an absent required field is assigned ``None``.

    Args:
        instance: The object to populate, already base-initialised.
        schema: Field name to type descriptor.
        data: Raw input values keyed by field name.
        extra: Policy for keys in *data* missing from *schema*.

    Returns:
        The populated *instance*.

    Raises:
        ConversionError: On the first field that fails conversion, or on an
            undeclared key when *extra* is :attr:`ExtraFields.FORBID`.
    """
    for field_name, descriptor in schema.items():
        value = convert(field_name, data.get(field_name, MISSING), descriptor)
        if value is MISSING:
            if isinstance(descriptor, OptionalDescriptor):
                continue
            value = None
        setattr(instance, field_name, value)

    if extra is ExtraFields.IGNORE:
        return instance
    for key, value in data.items():
        if key in schema:
            continue
        if extra is ExtraFields.FORBID:
            raise ConversionError(key, value, "no field", "Field is not declared in the schema")
        if hasattr(type(instance), key):
            raise ConversionError(key, value, "no field", f"Field name collides with member '{key}'")
        setattr(instance, key, value)
    return instance


def schema_of(factory: type) -> Mapping[str, TypeDescriptor]:
    """Return the read-only schema of a factory created by :func:`define_type`."""
    schema = getattr(factory, "__kind_schema__", None)
    if schema is None:
        raise TypeError(f"{factory!r} is not a factory created by define_type()")
    return schema


# ################
# Implementation
# ################


def _create_factory(
    type_name: str,
    bases: tuple[type, ...],
    parts: Definition,
    extra: ExtraFields,
    source: type | None,
) -> type:
    schema = MappingProxyType(_merge_base_schemas(type_name, bases, parts))
    namespace: dict[str, Any] = dict(parts.behavior)
    if source is not None:
        namespace["__module__"] = source.__module__
        if type_name == source.__name__:
            namespace["__qualname__"] = source.__qualname__
        namespace["__doc__"] = source.__doc__
    namespace["__kind_schema__"] = schema
    namespace["__kind_extra__"] = extra
    if "__repr__" not in namespace and all(b.__repr__ is object.__repr__ for b in bases):
        namespace["__repr__"] = _kind_repr
    if "__eq__" not in namespace and all(b.__eq__ is object.__eq__ for b in bases):
        namespace["__eq__"] = _kind_eq
        namespace.setdefault("__hash__", None)
    try:
        factory = type(type_name, bases, namespace)
    except TypeError as exc:
        raise DefinitionError(f"Cannot create type '{type_name}': {exc}") from exc
    factory.__init__ = _make_init(factory, schema, extra)
    return factory


def _merge_base_schemas(
    type_name: str,
    bases: tuple[type, ...],
    parts: Definition,
) -> dict[str, TypeDescriptor]:
    """Return the fields inherited from factory bases followed by the definition's own.

    A redeclared field keeps its inherited position and takes the new type.
    """
    schema: dict[str, TypeDescriptor] = {}
    for base in bases:
        schema.update(getattr(base, "__kind_schema__", {}))
    for member in parts.behavior:
        if member in schema:
            raise DefinitionError(
                f"'{member}' is a field inherited by '{type_name}' and cannot be redeclared as behavior"
            )
    schema.update(parts.schema)
    return schema


def _make_init(
    factory: type,
    schema: Mapping[str, TypeDescriptor],
    extra: ExtraFields,
) -> Callable[..., None]:
    type_name = factory.__name__

    def __init__(self: Any, data: Mapping[str, Any] | None = None, /, **fields: Any) -> None:
        values = _merge_input(type_name, data, fields)
        _init_base(factory, self)
        try:
            build_instance(self, schema, values, extra)
        except ConversionError as exc:
            logger.debug("Construction of %s failed: %s", type_name, exc)
            raise

    __init__.__qualname__ = f"{factory.__qualname__}.__init__"
    return __init__


def _init_base(factory: type, instance: object) -> None:
    """Run the first initializer after *factory* in the MRO that is not a factory's.

    Fields of factory bases are already in the merged schema of *factory*.
    """
    mro = type(instance).__mro__
    for cls in mro[mro.index(factory) + 1 :]:
        if "__kind_schema__" in vars(cls):
            continue
        init = vars(cls).get("__init__")
        if init is not None:
            init(instance)
            return


def _merge_input(type_name: str, data: Mapping[str, Any] | None, fields: dict[str, Any]) -> dict[str, Any]:
    if data is None:
        return fields
    if not isinstance(data, Mapping):
        raise TypeError(f"{type_name}() expects a mapping of field values, got {type(data).__name__}")
    values = dict(data)
    for key in values:
        if not isinstance(key, str):
            raise TypeError(f"{type_name}() field names must be strings, got {key!r}")
    values.update(fields)
    return values


def _kind_repr(self: Any) -> str:
    schema = type(self).__kind_schema__
    state = vars(self)
    ordered = [name for name in schema if name in state]
    ordered += [name for name in state if name not in schema]
    fields = ", ".join(f"{name}={state[name]!r}" for name in ordered)
    return f"{type(self).__name__}({fields})"


def _kind_eq(self: Any, other: object) -> bool:
    if type(other) is not type(self):
        return NotImplemented
    return vars(self) == vars(other)
