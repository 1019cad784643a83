"""Per-type field tables for destination records.

Destination records are dataclasses. The first time a record type is used,
its fields are resolved into a table of FieldSlot entries (name, matching
key, resolved type, zero value) that is cached for the life of the process.
Projection then works from the table instead of re-inspecting the class on
every row.

Table-Named Models expose their table either through a ``table_name()``
classmethod or a ``__tablename__`` class attribute.
"""

from __future__ import annotations

import dataclasses
import types
import typing
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Callable, Protocol, Union, runtime_checkable

from horm.domain.errors import HormError

_MISSING = object()

ZERO_VALUES: dict[type, Any] = {
    int: 0,
    str: "",
    float: 0.0,
    bool: False,
}


@runtime_checkable
class TableNamed(Protocol):
    """A record type that declares its backing table."""

    @classmethod
    def table_name(cls) -> str:
        ...


@dataclass(frozen=True, slots=True)
class FieldSlot:
    """One destination field.

    Attributes:
        name: Attribute name on the record.
        key: Upper-cased name matched against column names.
        type: Resolved field type with Optional unwrapped, or None for
            ``Any`` and unannotated fields.
        optional: True if the annotation admits None.
        init: True if the field is set through ``__init__``.
    """

    name: str
    key: str
    type: type | None
    optional: bool
    init: bool
    default: Any = _MISSING
    default_factory: Callable[[], Any] | None = None

    def zero_value(self) -> Any:
        """Value an unmatched field keeps."""
        if self.default is not _MISSING:
            return self.default
        if self.default_factory is not None:
            return self.default_factory()
        if self.optional or self.type is None:
            return None
        return ZERO_VALUES.get(self.type)


@dataclass(frozen=True, slots=True)
class RecordSchema:
    """Cached field table for one record type."""

    record_type: type
    frozen: bool
    fields: tuple[FieldSlot, ...]


def _unwrap(annotation: Any) -> tuple[type | None, bool]:
    """Split an annotation into (base type, optional)."""
    if annotation is Any or annotation is dataclasses.MISSING:
        return None, True

    origin = typing.get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        members = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        optional = len(members) < len(typing.get_args(annotation))
        if len(members) == 1:
            base, _ = _unwrap(members[0])
            return base, optional
        # Multi-member unions are matched against nothing
        return type(None), optional

    if isinstance(annotation, type):
        return annotation, False
    return type(None), False


def is_record(obj: Any) -> bool:
    """True for dataclass types and instances."""
    return dataclasses.is_dataclass(obj)


@lru_cache(maxsize=None)
def record_schema(record_type: type) -> RecordSchema:
    """Resolve and cache the field table of a dataclass type.

    Raises:
        TypeError: If record_type is not a dataclass type.
    """
    if not (isinstance(record_type, type) and dataclasses.is_dataclass(record_type)):
        raise TypeError(f"destination must be a dataclass, got {record_type!r}")

    try:
        hints = typing.get_type_hints(record_type)
    except NameError:
        # Forward references that cannot be resolved are treated as Any
        hints = {}

    slots = []
    for f in dataclasses.fields(record_type):
        base, optional = _unwrap(hints.get(f.name, Any))
        slots.append(
            FieldSlot(
                name=f.name,
                key=f.name.upper(),
                type=base,
                optional=optional,
                init=f.init,
                default=f.default if f.default is not dataclasses.MISSING else _MISSING,
                default_factory=(
                    f.default_factory
                    if f.default_factory is not dataclasses.MISSING
                    else None
                ),
            )
        )

    frozen = record_type.__dataclass_params__.frozen  # type: ignore[attr-defined]
    return RecordSchema(record_type=record_type, frozen=frozen, fields=tuple(slots))


def table_name_of(model: Any) -> str:
    """Table name of a Table-Named Model (type or instance) or a plain string.

    Raises:
        HormError: If the model declares no table name.
    """
    if isinstance(model, str):
        name = model
    elif isinstance(model, TableNamed) and callable(model.table_name):
        name = model.table_name()
    elif isinstance(getattr(model, "__tablename__", None), str):
        name = model.__tablename__
    else:
        raise HormError(f"{model!r} does not declare a table name")

    if not name:
        raise HormError(f"{model!r} declares an empty table name")
    return name
