from sqlbulk.builder._insert import BulkInsertStatement, build_multi_insert

__all__ = ("BulkInsertStatement", "build_multi_insert")
