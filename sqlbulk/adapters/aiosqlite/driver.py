"""Storage primitive backed by an aiosqlite connection."""

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

import aiosqlite

from sqlbulk.dialects import VENDOR_SQLITE
from sqlbulk.exceptions import IntegrityError, OperationalError, ParameterError, StorageError
from sqlbulk.parameters import DB_NULL
from sqlbulk.protocols import ParameterDirection
from sqlbulk.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from sqlbulk.protocols import Materializer, StatementPreparer

__all__ = ("AiosqliteStatementHandle", "AiosqliteStorage")

logger = get_logger("adapters.aiosqlite")


class AiosqliteStatementHandle:
    """Collects named parameters for one aiosqlite statement."""

    __slots__ = ("parameters",)

    def __init__(self) -> None:
        self.parameters: dict[str, Any] = {}

    def add_parameter(self, name: str, value: Any, direction: ParameterDirection = ParameterDirection.INPUT) -> None:
        if direction is not ParameterDirection.INPUT:
            msg = f"SQLite supports input parameters only, got {direction.value} parameter {name!r}"
            raise ParameterError(msg)
        self.parameters[name] = None if value is DB_NULL else value


class AiosqliteStorage:
    """Execute statements on an open aiosqlite connection.

    Named placeholders (``@name`` or ``:name``) are bound from a dict keyed by the bare
    parameter name.

    Args:
        connection: Open aiosqlite connection. The caller owns its lifetime.
        vendor_id: Vendor id reported to statement builders.
        autocommit: Commit after every successful ``execute``.
    """

    __slots__ = ("_vendor_id", "autocommit", "connection")

    def __init__(
        self, connection: "aiosqlite.Connection", *, vendor_id: str = VENDOR_SQLITE, autocommit: bool = True
    ) -> None:
        self.connection = connection
        self._vendor_id = vendor_id
        self.autocommit = autocommit

    @property
    def vendor_id(self) -> str:
        return self._vendor_id

    @asynccontextmanager
    async def handle_database_exceptions(self) -> "AsyncGenerator[None, None]":
        """Translate aiosqlite errors into the storage error family."""
        try:
            yield
        except aiosqlite.IntegrityError as e:
            msg = f"SQLite integrity constraint violation: {e}"
            raise IntegrityError(msg) from e
        except aiosqlite.OperationalError as e:
            msg = f"SQLite operational error: {e}"
            raise OperationalError(msg) from e
        except aiosqlite.Error as e:
            msg = f"SQLite error: {e}"
            raise StorageError(msg) from e

    async def execute(self, query: str, prepare: "StatementPreparer") -> int:
        handle = AiosqliteStatementHandle()
        prepare(handle)
        async with self.handle_database_exceptions():
            cursor = await self.connection.execute(query, handle.parameters)
            try:
                affected_rows = cursor.rowcount
            finally:
                await cursor.close()
            if self.autocommit:
                await self.connection.commit()
        logger.debug("Executed statement, %d row(s) affected", affected_rows)
        return affected_rows if affected_rows > 0 else 0

    async def read(self, query: str, prepare: "StatementPreparer", materialize: "Materializer") -> "list[Any]":
        handle = AiosqliteStatementHandle()
        prepare(handle)
        async with self.handle_database_exceptions():
            async with self.connection.execute(query, handle.parameters) as cursor:
                fetched = await cursor.fetchall()
                column_names = [column[0] for column in cursor.description or ()]
        return [materialize(dict(zip(column_names, row))) for row in fetched]
