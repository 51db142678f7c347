"""Multi-row INSERT statement builder.

Builds one ``INSERT INTO ... SELECT ... UNION ALL SELECT ...`` statement covering a
whole batch of uniformly-shaped records, either with bound parameters or with values
rendered inline as literals.
"""

import logging
from collections.abc import Collection, Iterable
from dataclasses import dataclass, field
from typing import Any, Optional, cast

from sqlbulk.config import BulkInsertConfig
from sqlbulk.dialects import VendorProfile, VendorProfileRegistry, get_default_registry
from sqlbulk.exceptions import InvalidArgumentError, ParameterError, RecordShapeError
from sqlbulk.mapping.fields import RecordSchema, get_record_schema
from sqlbulk.mapping.literals import render_literal
from sqlbulk.parameters import Parameter, validate_parameter_name
from sqlbulk.typing import ColumnMapping
from sqlbulk.utils.logging import get_logger, log_with_context

__all__ = ("BulkInsertStatement", "build_multi_insert")

logger = get_logger("builder")

INSERT_TEMPLATE = "INSERT INTO {table} ({columns}) SELECT {selects}{terminator}"
UNION_SEPARATOR = " UNION ALL SELECT "


@dataclass(frozen=True)
class BulkInsertStatement:
    """A built multi-row insert statement.

    Args:
        sql: Statement text. Empty when the batch held no records.
        parameters: Bare parameter name to value, in allocation order. Empty in
            literal mode.
        table_name: Target table as given by the caller.
        columns: Target column names in statement order, shared columns first.
        shared_columns: Target column names whose value is bound or rendered once.
        row_count: Number of rows the statement inserts.
        parameterized: Whether values are bound parameters.
        vendor_id: Vendor the statement was built for.
    """

    sql: str
    parameters: "dict[str, Any]" = field(default_factory=dict)
    table_name: str = ""
    columns: "tuple[str, ...]" = ()
    shared_columns: "tuple[str, ...]" = ()
    row_count: int = 0
    parameterized: bool = True
    vendor_id: str = ""

    @property
    def is_empty(self) -> bool:
        """Whether the statement inserts no rows and must not be executed."""
        return self.row_count == 0

    def to_parameters(self) -> "list[Parameter]":
        """Return the parameter set as input parameters."""
        return [Parameter(name, value) for name, value in self.parameters.items()]


def _validate_shapes(records: "list[Any]", schema: RecordSchema) -> None:
    for index, record in enumerate(records[1:], start=1):
        other = get_record_schema(record)
        if other.kind != schema.kind or other.signature != schema.signature:
            msg = (
                f"Record {index} has fields ({', '.join(other.signature)}) but the batch expects "
                f"({', '.join(schema.signature)})"
            )
            raise RecordShapeError(msg)


def _add_parameter(parameters: "dict[str, Any]", name: str, value: Any) -> None:
    if name in parameters:
        msg = f"Parameter name {name!r} is allocated twice in one statement"
        raise ParameterError(msg)
    parameters[name] = value


def _resolve_profile(
    vendor_id: "Optional[str]", profile: "Optional[VendorProfile]", registry: "Optional[VendorProfileRegistry]"
) -> VendorProfile:
    if (vendor_id is None) == (profile is None):
        msg = "Pass exactly one of vendor_id and profile"
        raise InvalidArgumentError(msg, "vendor_id")
    if profile is not None:
        return profile
    return (registry or get_default_registry()).profile(cast("str", vendor_id))


def build_multi_insert(
    table_name: str,
    records: "Optional[Iterable[Any]]",
    *,
    vendor_id: "Optional[str]" = None,
    profile: "Optional[VendorProfile]" = None,
    registry: "Optional[VendorProfileRegistry]" = None,
    name_map: "Optional[ColumnMapping]" = None,
    shared_columns: "Optional[Collection[str]]" = None,
    parameterized: bool = True,
    config: "Optional[BulkInsertConfig]" = None,
) -> BulkInsertStatement:
    """Build one INSERT statement for a batch of records.

    The first record decides the column set. Shared columns take their value from the
    first record only; in parameterized mode each is bound once under its column name
    and referenced from every row. Per-row columns are bound under sequential names
    (``p0``, ``p1``, ...) from a single counter spanning the whole statement.

    Args:
        table_name: Target table, optionally schema qualified.
        records: Uniformly-shaped records to insert.
        vendor_id: Vendor of the target database, resolved through ``registry``.
        profile: Vendor profile of the target database, used as given. Pass either
            ``profile`` or ``vendor_id``.
        registry: Registry resolving ``vendor_id``. Defaults to the process-wide
            registry.
        name_map: Optional field name to column name mapping.
        shared_columns: Field names whose value is identical across the batch.
        parameterized: Bind values as parameters instead of rendering literals.
        config: Builder configuration.

    Raises:
        InvalidArgumentError: Blank table name, ``None`` records, an unknown shared
            column, two fields mapped to the same column, or not exactly one of
            ``vendor_id`` and ``profile``.
        UnsupportedVendorError: ``vendor_id`` has no registered profile.
        RecordShapeError: Records of the batch expose different fields.
        ParameterError: A derived parameter name is invalid or allocated twice.
        SQLBuilderError: A value cannot be rendered as a literal.

    Returns:
        The statement and its parameter set. A batch without records yields an empty
        statement with ``row_count == 0``.
    """
    if not isinstance(table_name, str) or not table_name.strip():
        msg = "The name must be a legal SQL table name"
        raise InvalidArgumentError(msg, "table_name")
    if records is None:
        msg = "Records must not be None"
        raise InvalidArgumentError(msg, "records")
    profile = _resolve_profile(vendor_id, profile, registry)

    config = config or BulkInsertConfig()
    rows = list(records)
    if not rows:
        logger.debug("Skipping multi-row insert into %s: no records", table_name)
        return BulkInsertStatement(
            sql="", table_name=table_name, parameterized=parameterized, vendor_id=profile.vendor_id
        )

    first = rows[0]
    schema = get_record_schema(first)
    if not schema.field_names:
        msg = "The first record exposes no fields"
        raise RecordShapeError(msg)

    shared_names = set(shared_columns or ())
    unknown = sorted(shared_names.difference(schema.field_names))
    if unknown:
        msg = f"Shared columns {', '.join(unknown)} are not fields of the records"
        raise InvalidArgumentError(msg, "shared_columns")

    mapping = name_map or {}
    shared_fields = tuple(name for name in schema.field_names if name in shared_names)
    row_fields = tuple(name for name in schema.field_names if name not in shared_names)
    columns = tuple(mapping.get(name, name) for name in (*shared_fields, *row_fields))
    if len(set(columns)) != len(columns):
        msg = f"Column names must be unique, got ({', '.join(columns)})"
        raise InvalidArgumentError(msg, "name_map")

    if config.validate_record_shapes:
        _validate_shapes(rows, schema)

    parameters: dict[str, Any] = {}
    shared_tokens: list[str] = []
    for name in shared_fields:
        value = schema.value(first, name)
        if parameterized:
            parameter_name = validate_parameter_name(mapping.get(name, name))
            _add_parameter(parameters, parameter_name, value)
            shared_tokens.append(profile.placeholder(parameter_name))
        else:
            shared_tokens.append(render_literal(value, profile))

    prefix = config.indexed_parameter_prefix
    parameter_index = 0
    selects: list[str] = []
    for row_index, record in enumerate(rows):
        tokens = list(shared_tokens)
        for name in row_fields:
            value = schema.value(record, name)
            if parameterized:
                parameter_name = f"{prefix}{parameter_index}"
                parameter_index += 1
                _add_parameter(parameters, parameter_name, value)
                tokens.append(profile.placeholder(parameter_name))
            else:
                tokens.append(render_literal(value, profile))
        select = ",".join(tokens)
        if row_index > 0 and profile.requires_row_terminal:
            select = f"{select} {profile.row_terminal}"
        selects.append(select)

    sql = INSERT_TEMPLATE.format(
        table=profile.quote_table(table_name),
        columns=",".join(profile.quote_identifier(column) for column in columns),
        selects=UNION_SEPARATOR.join(selects),
        terminator=config.statement_terminator,
    )
    log_with_context(
        logger,
        logging.DEBUG,
        "Built multi-row insert",
        table=table_name,
        vendor=profile.vendor_id,
        rows=len(rows),
        columns=len(columns),
        shared_columns=len(shared_fields),
        parameterized=parameterized,
        parameters=len(parameters),
    )
    return BulkInsertStatement(
        sql=sql,
        parameters=parameters,
        table_name=table_name,
        columns=columns,
        shared_columns=tuple(mapping.get(name, name) for name in shared_fields),
        row_count=len(rows),
        parameterized=parameterized,
        vendor_id=profile.vendor_id,
    )
