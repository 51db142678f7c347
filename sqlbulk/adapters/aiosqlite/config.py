"""Aiosqlite connection configuration."""

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, Optional, TypedDict, Union

import aiosqlite
from typing_extensions import NotRequired

from sqlbulk.adapters.aiosqlite.driver import AiosqliteStorage
from sqlbulk.dialects import VENDOR_SQLITE
from sqlbulk.driver import RelationalExecutor
from sqlbulk.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from sqlbulk.config import BulkInsertConfig
    from sqlbulk.dialects import VendorProfileRegistry

__all__ = ("AiosqliteConfig", "AiosqliteConnectionParams")

logger = get_logger("adapters.aiosqlite")

DEFAULT_DATABASE = ":memory:"


class AiosqliteConnectionParams(TypedDict, total=False):
    """TypedDict for aiosqlite connection parameters."""

    database: NotRequired[str]
    timeout: NotRequired[float]
    detect_types: NotRequired[int]
    isolation_level: NotRequired[Optional[str]]
    check_same_thread: NotRequired[bool]
    cached_statements: NotRequired[int]
    uri: NotRequired[bool]


class AiosqliteConfig:
    """Configuration for aiosqlite-backed storage.

    Args:
        connection_config: Connection parameters passed to :func:`aiosqlite.connect`.
        autocommit: Commit after every executed statement.
        vendor_id: Vendor id the storage reports.
        registry: Vendor profile registry used by executors.
        insert_config: Multi-row insert configuration used by executors.
    """

    __slots__ = ("autocommit", "connection_config", "insert_config", "registry", "vendor_id")

    def __init__(
        self,
        *,
        connection_config: "Optional[Union[AiosqliteConnectionParams, dict[str, Any]]]" = None,
        autocommit: bool = True,
        vendor_id: str = VENDOR_SQLITE,
        registry: "Optional[VendorProfileRegistry]" = None,
        insert_config: "Optional[BulkInsertConfig]" = None,
    ) -> None:
        self.connection_config: dict[str, Any] = dict(connection_config or {})
        self.connection_config.setdefault("database", DEFAULT_DATABASE)
        self.autocommit = autocommit
        self.vendor_id = vendor_id
        self.registry = registry
        self.insert_config = insert_config

    async def create_connection(self) -> "aiosqlite.Connection":
        """Open a new connection."""
        return await aiosqlite.connect(**self.connection_config)

    @asynccontextmanager
    async def provide_storage(self) -> "AsyncGenerator[AiosqliteStorage, None]":
        """Open a connection and yield a storage primitive bound to it."""
        connection = await self.create_connection()
        logger.debug("Opened aiosqlite connection to %s", self.connection_config["database"])
        try:
            yield AiosqliteStorage(connection, vendor_id=self.vendor_id, autocommit=self.autocommit)
        finally:
            await connection.close()

    @asynccontextmanager
    async def provide_executor(self) -> "AsyncGenerator[RelationalExecutor, None]":
        """Open a connection and yield an executor over it."""
        async with self.provide_storage() as storage:
            yield RelationalExecutor(storage, registry=self.registry, config=self.insert_config)
