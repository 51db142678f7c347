"""Asynchronous generic executor and reader."""

import logging
from collections.abc import Collection, Iterable
from typing import TYPE_CHECKING, Any, Optional, overload

from sqlbulk.builder import BulkInsertStatement, build_multi_insert
from sqlbulk.config import BulkInsertConfig
from sqlbulk.dialects import VendorProfile, VendorProfileRegistry, get_default_registry
from sqlbulk.exceptions import InvalidArgumentError
from sqlbulk.mapping.fields import materialize
from sqlbulk.parameters import Parameter, bind_parameters, parameters_from_object
from sqlbulk.utils.logging import get_logger, log_with_context, statement_preview

if TYPE_CHECKING:
    from sqlbulk.protocols import AsyncRelationalStorage, StatementHandle, StatementPreparer
    from sqlbulk.typing import ColumnMapping, DictRow, ParameterObject, ResultRow, ResultT

__all__ = ("RelationalExecutor",)

logger = get_logger("driver")


def _require_statement(statement: str) -> str:
    if not isinstance(statement, str) or not statement.strip():
        msg = "Statement text must not be blank"
        raise InvalidArgumentError(msg, "statement")
    return statement


class RelationalExecutor:
    """Generic execute and read operations over an async storage primitive.

    Parameters are bound from any supported record or mapping using field names as
    parameter names. Result rows are materialized into the requested type by exact
    column name match. Retries, timeouts, transactions and cancellation belong to the
    storage primitive; its errors propagate unchanged.

    Args:
        storage: Storage primitive executing the statements.
        registry: Vendor profile registry. Defaults to the process-wide registry.
        config: Multi-row insert configuration.
    """

    __slots__ = ("config", "registry", "storage")

    def __init__(
        self,
        storage: "AsyncRelationalStorage",
        *,
        registry: "Optional[VendorProfileRegistry]" = None,
        config: "Optional[BulkInsertConfig]" = None,
    ) -> None:
        self.storage = storage
        self.registry = registry or get_default_registry()
        self.config = config or BulkInsertConfig()

    @property
    def vendor_profile(self) -> VendorProfile:
        """Profile of the storage primitive's vendor."""
        return self.registry.profile(self.storage.vendor_id)

    async def execute(self, statement: str, parameters: "ParameterObject" = None) -> int:
        """Execute a statement and return the affected row count.

        Args:
            statement: Statement text, e.g. an ``INSERT``, ``UPDATE`` or DDL statement.
            parameters: Optional mapping or record whose fields become parameters.

        Returns:
            Number of affected rows reported by the storage primitive.
        """
        _require_statement(statement)
        bound = parameters_from_object(parameters)
        _log_statement("execute", statement, bound)
        return await self.storage.execute(statement, _preparer(bound))

    @overload
    async def read(
        self, statement: str, parameters: "ParameterObject" = None, *, schema_type: None = None
    ) -> "list[DictRow]": ...

    @overload
    async def read(
        self, statement: str, parameters: "ParameterObject" = None, *, schema_type: "type[ResultT]"
    ) -> "list[ResultT]": ...

    async def read(
        self, statement: str, parameters: "ParameterObject" = None, *, schema_type: "Optional[type[Any]]" = None
    ) -> "list[Any]":
        """Execute a query and materialize every result row.

        Args:
            statement: Query text.
            parameters: Optional mapping or record whose fields become parameters.
            schema_type: Type each row is materialized into; ``None`` yields dicts.

        Returns:
            One materialized value per result row.
        """
        _require_statement(statement)
        bound = parameters_from_object(parameters)
        _log_statement("read", statement, bound)

        def _materialize(row: "ResultRow") -> Any:
            return materialize(row, schema_type)

        return await self.storage.read(statement, _preparer(bound), _materialize)

    def build_multi_insert(
        self,
        table_name: str,
        records: "Optional[Iterable[Any]]",
        *,
        name_map: "Optional[ColumnMapping]" = None,
        shared_columns: "Optional[Collection[str]]" = None,
        parameterized: bool = True,
    ) -> BulkInsertStatement:
        """Build a multi-row insert for the storage primitive's vendor without executing it.

        See :func:`sqlbulk.builder.build_multi_insert` for the arguments.
        """
        return build_multi_insert(
            table_name,
            records,
            vendor_id=self.storage.vendor_id,
            registry=self.registry,
            name_map=name_map,
            shared_columns=shared_columns,
            parameterized=parameterized,
            config=self.config,
        )

    async def execute_multi_insert(
        self,
        table_name: str,
        records: "Optional[Iterable[Any]]",
        *,
        name_map: "Optional[ColumnMapping]" = None,
        shared_columns: "Optional[Collection[str]]" = None,
        parameterized: bool = True,
    ) -> int:
        """Insert a batch of records with a single statement.

        A batch without records returns ``0`` without contacting the storage primitive.

        Returns:
            Number of affected rows.
        """
        statement = self.build_multi_insert(
            table_name, records, name_map=name_map, shared_columns=shared_columns, parameterized=parameterized
        )
        if statement.is_empty:
            logger.debug("No rows to insert into %s; storage not contacted", table_name)
            return 0
        logger.debug("Executing multi-row insert into %s (%d rows)", table_name, statement.row_count)
        return await self.storage.execute(statement.sql, _preparer(statement.to_parameters()))


def _log_statement(operation: str, statement: str, parameters: "list[Parameter]") -> None:
    log_with_context(
        logger,
        logging.DEBUG,
        f"Dispatching {operation}",
        sql=statement_preview(statement),
        parameters=len(parameters),
    )


def _preparer(parameters: "list[Parameter]") -> "StatementPreparer":
    def _prepare(handle: "StatementHandle") -> None:
        bind_parameters(handle, parameters)

    return _prepare
