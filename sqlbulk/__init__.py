"""SQLBulk: vendor-aware multi-row INSERT generation over an async relational executor."""

from sqlbulk import builder, dialects, driver, exceptions, mapping, typing, utils
from sqlbulk.__metadata__ import __version__
from sqlbulk.builder import BulkInsertStatement, build_multi_insert
from sqlbulk.config import BulkInsertConfig
from sqlbulk.dialects import VendorProfile, VendorProfileRegistry, get_default_registry, get_vendor_profile
from sqlbulk.driver import RelationalExecutor
from sqlbulk.exceptions import (
    ImproperConfigurationError,
    IntegrityError,
    InvalidArgumentError,
    OperationalError,
    ParameterError,
    RecordShapeError,
    SQLBuilderError,
    SQLBulkError,
    StorageError,
    UnsupportedVendorError,
)
from sqlbulk.mapping import get_record_schema, map_fields, materialize, render_literal
from sqlbulk.parameters import DB_NULL, Parameter, bind_parameters
from sqlbulk.protocols import AsyncRelationalStorage, ParameterDirection, StatementHandle

__all__ = (
    "DB_NULL",
    "AsyncRelationalStorage",
    "BulkInsertConfig",
    "BulkInsertStatement",
    "ImproperConfigurationError",
    "IntegrityError",
    "InvalidArgumentError",
    "OperationalError",
    "Parameter",
    "ParameterDirection",
    "ParameterError",
    "RecordShapeError",
    "RelationalExecutor",
    "SQLBuilderError",
    "SQLBulkError",
    "StatementHandle",
    "StorageError",
    "UnsupportedVendorError",
    "VendorProfile",
    "VendorProfileRegistry",
    "__version__",
    "bind_parameters",
    "build_multi_insert",
    "builder",
    "dialects",
    "driver",
    "exceptions",
    "get_default_registry",
    "get_record_schema",
    "get_vendor_profile",
    "map_fields",
    "mapping",
    "materialize",
    "render_literal",
    "typing",
    "utils",
)
