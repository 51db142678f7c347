from sqlbulk.adapters.aiosqlite.config import AiosqliteConfig, AiosqliteConnectionParams
from sqlbulk.adapters.aiosqlite.driver import AiosqliteStatementHandle, AiosqliteStorage

__all__ = ("AiosqliteConfig", "AiosqliteConnectionParams", "AiosqliteStatementHandle", "AiosqliteStorage")
