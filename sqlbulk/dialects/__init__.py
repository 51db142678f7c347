from sqlbulk.dialects._registry import VendorProfileRegistry, get_default_registry, get_vendor_profile
from sqlbulk.dialects._types import VendorProfile
from sqlbulk.dialects.profiles import (
    VENDOR_DUCKDB,
    VENDOR_MYSQL,
    VENDOR_ORACLE,
    VENDOR_POSTGRES,
    VENDOR_SQLITE,
    VENDOR_SQLSERVER,
)

__all__ = (
    "VENDOR_DUCKDB",
    "VENDOR_MYSQL",
    "VENDOR_ORACLE",
    "VENDOR_POSTGRES",
    "VENDOR_SQLITE",
    "VENDOR_SQLSERVER",
    "VendorProfile",
    "VendorProfileRegistry",
    "get_default_registry",
    "get_vendor_profile",
)
