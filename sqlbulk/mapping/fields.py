"""Field discovery for arbitrary records.

A :class:`RecordSchema` describes one record type: its fields in declaration order,
which of them the constructor requires, and how to read values from an instance or
build an instance from column values. Descriptors for classes are built once per type
and cached; mappings get a descriptor per instance since their keys are the schema.
"""

import dataclasses
import inspect
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Final, Optional, cast

import msgspec.structs

from sqlbulk.exceptions import RecordShapeError
from sqlbulk.typing import ColumnMapping, ResultRow
from sqlbulk.utils.logging import get_logger
from sqlbulk.utils.type_guards import (
    is_attrs_schema,
    is_dataclass,
    is_mapping,
    is_mapping_type,
    is_msgspec_struct,
    is_named_tuple,
    is_pydantic_model,
)

__all__ = (
    "KIND_ATTRS",
    "KIND_DATACLASS",
    "KIND_MAPPING",
    "KIND_MSGSPEC",
    "KIND_NAMED_TUPLE",
    "KIND_OBJECT",
    "KIND_PYDANTIC",
    "RecordSchema",
    "get_record_schema",
    "map_fields",
    "materialize",
)

logger = get_logger("mapping")

KIND_DATACLASS: Final = "dataclass"
KIND_MSGSPEC: Final = "msgspec"
KIND_ATTRS: Final = "attrs"
KIND_PYDANTIC: Final = "pydantic"
KIND_NAMED_TUPLE: Final = "namedtuple"
KIND_MAPPING: Final = "mapping"
KIND_OBJECT: Final = "object"


@dataclass(frozen=True)
class RecordSchema:
    """Ordered field layout of one record type.

    Args:
        kind: Record kind, one of the ``KIND_*`` constants.
        record_type: The described type.
        field_names: Field names in declaration order.
        required: Fields the constructor cannot default.
        init_names: ``(field name, constructor argument name)`` pairs for fields the
            constructor accepts.
    """

    kind: str
    record_type: type
    field_names: "tuple[str, ...]"
    required: "frozenset[str]" = frozenset()
    init_names: "tuple[tuple[str, str], ...]" = ()

    @property
    def signature(self) -> "tuple[str, ...]":
        """Field signature compared across the records of one batch."""
        return self.field_names

    def value(self, record: Any, field_name: str) -> Any:
        """Read one field value from ``record``."""
        if self.kind == KIND_MAPPING:
            return record[field_name]
        return getattr(record, field_name)

    def items(self, record: Any) -> "list[tuple[str, Any]]":
        """Return ``(field name, value)`` pairs of ``record`` in declaration order."""
        if self.kind == KIND_MAPPING:
            return [(name, record[name]) for name in self.field_names]
        return [(name, getattr(record, name)) for name in self.field_names]

    def construct(self, values: "Mapping[str, Any]") -> Any:
        """Build a record from field values; absent fields keep their defaults."""
        if self.kind == KIND_PYDANTIC:
            return cast("Any", self.record_type).model_validate(dict(values))
        if self.kind == KIND_OBJECT:
            instance = self.record_type()
            for name, value in values.items():
                setattr(instance, name, value)
            return instance
        kwargs = {init_name: values[name] for name, init_name in self.init_names if name in values}
        return self.record_type(**kwargs)


def _dataclass_schema(cls: type) -> RecordSchema:
    fields = dataclasses.fields(cls)
    required = frozenset(
        f.name
        for f in fields
        if f.init and f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING
    )
    return RecordSchema(
        kind=KIND_DATACLASS,
        record_type=cls,
        field_names=tuple(f.name for f in fields),
        required=required,
        init_names=tuple((f.name, f.name) for f in fields if f.init),
    )


def _msgspec_schema(cls: type) -> RecordSchema:
    fields = msgspec.structs.fields(cls)
    return RecordSchema(
        kind=KIND_MSGSPEC,
        record_type=cls,
        field_names=tuple(f.name for f in fields),
        required=frozenset(f.name for f in fields if f.required),
        init_names=tuple((f.name, f.name) for f in fields),
    )


def _attrs_schema(cls: type) -> RecordSchema:
    import attrs

    fields = attrs.fields(cls)
    return RecordSchema(
        kind=KIND_ATTRS,
        record_type=cls,
        field_names=tuple(a.name for a in fields),
        required=frozenset(a.name for a in fields if a.init and a.default is attrs.NOTHING),
        init_names=tuple((a.name, a.alias or a.name) for a in fields if a.init),
    )


def _pydantic_schema(cls: type) -> RecordSchema:
    model_fields = cast("Any", cls).model_fields
    return RecordSchema(
        kind=KIND_PYDANTIC,
        record_type=cls,
        field_names=tuple(model_fields),
        required=frozenset(name for name, info in model_fields.items() if info.is_required()),
        init_names=tuple((name, name) for name in model_fields),
    )


def _named_tuple_schema(cls: type) -> RecordSchema:
    field_names: tuple[str, ...] = cast("Any", cls)._fields
    defaults: dict[str, Any] = cast("Any", cls)._field_defaults
    return RecordSchema(
        kind=KIND_NAMED_TUPLE,
        record_type=cls,
        field_names=field_names,
        required=frozenset(name for name in field_names if name not in defaults),
        init_names=tuple((name, name) for name in field_names),
    )


def _annotated_names(cls: type) -> "tuple[str, ...]":
    names: dict[str, None] = {}
    for klass in reversed(cls.__mro__):
        for name in inspect.get_annotations(klass):
            if not name.startswith("_"):
                names[name] = None
    return tuple(names)


@lru_cache(maxsize=256)
def _schema_for_type(cls: type) -> RecordSchema:
    if is_dataclass(cls):
        schema = _dataclass_schema(cls)
    elif is_msgspec_struct(cls):
        schema = _msgspec_schema(cls)
    elif is_pydantic_model(cls):
        schema = _pydantic_schema(cls)
    elif is_attrs_schema(cls):
        schema = _attrs_schema(cls)
    elif is_named_tuple(cls):
        schema = _named_tuple_schema(cls)
    else:
        names = _annotated_names(cls)
        if not names:
            msg = f"Cannot discover fields of {cls.__qualname__}: declare annotated attributes or use a supported record type"
            raise RecordShapeError(msg)
        schema = RecordSchema(kind=KIND_OBJECT, record_type=cls, field_names=names)
    logger.debug("Built %s record schema for %s with %d fields", schema.kind, cls.__qualname__, len(schema.field_names))
    return schema


def _public_attribute_names(instance: Any) -> "tuple[str, ...]":
    if not hasattr(instance, "__dict__"):
        return ()
    return tuple(name for name in vars(instance) if not name.startswith("_"))


@lru_cache(maxsize=256)
def _schema_for_plain_type(cls: type) -> RecordSchema:
    try:
        return _schema_for_type(cls)
    except RecordShapeError:
        # unannotated classes are described by a default-constructed instance
        try:
            names = _public_attribute_names(cls())
        except TypeError:
            names = ()
        if not names:
            raise
        return RecordSchema(kind=KIND_OBJECT, record_type=cls, field_names=names)


def get_record_schema(record: Any) -> RecordSchema:
    """Return the field layout of a record or record type.

    Args:
        record: A record instance or a record class.

    Raises:
        RecordShapeError: No fields can be discovered for the record.

    Returns:
        The record schema. Class-based schemas are cached per type.
    """
    if is_mapping(record):
        return RecordSchema(kind=KIND_MAPPING, record_type=type(record), field_names=tuple(record.keys()))
    if isinstance(record, type):
        return _schema_for_type(record)
    cls = type(record)
    try:
        return _schema_for_type(cls)
    except RecordShapeError:
        # unannotated plain objects expose their public instance attributes
        names = _public_attribute_names(record)
        if not names:
            raise
        return RecordSchema(kind=KIND_OBJECT, record_type=cls, field_names=names)


def map_fields(record: Any, name_map: "Optional[ColumnMapping]" = None) -> "list[tuple[str, Any]]":
    """Return ``(column name, value)`` pairs for ``record``.

    Args:
        record: Any supported record instance.
        name_map: Optional field name to column name mapping. Fields absent from the
            mapping keep their own name.

    Returns:
        Column name and value pairs in declaration order.
    """
    items = get_record_schema(record).items(record)
    if not name_map:
        return items
    return [(name_map.get(name, name), value) for name, value in items]


def materialize(row: ResultRow, schema_type: "Optional[type[Any]]" = None) -> Any:
    """Build a ``schema_type`` instance from a result row.

    Columns are matched to fields by exact, case-sensitive name. Columns without a
    matching field are ignored and fields without a matching column keep their
    default.

    Args:
        row: Result row keyed by column name.
        schema_type: Target type. ``None`` or a mapping type returns a ``dict``.

    Raises:
        RecordShapeError: A required field has no matching column.

    Returns:
        The materialized record.
    """
    if schema_type is None or is_mapping_type(schema_type):
        return dict(row)
    schema = _schema_for_plain_type(schema_type)
    values = {name: row[name] for name in schema.field_names if name in row}
    missing = schema.required.difference(values)
    if missing:
        msg = f"Cannot build {schema_type.__qualname__}: no column for required field(s) {', '.join(sorted(missing))}"
        raise RecordShapeError(msg)
    return schema.construct(values)
