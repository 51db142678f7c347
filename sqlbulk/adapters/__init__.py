"""Storage primitives for specific database drivers.

Adapters are imported explicitly, e.g. ``from sqlbulk.adapters.aiosqlite import AiosqliteConfig``,
so that their drivers stay optional.
"""
