"""Built-in vendor profiles.

Each entry maps a vendor id to a factory producing its profile. Factories run at most
once per registry, on first request for the vendor.
"""

from collections.abc import Callable
from typing import Final

from sqlbulk.dialects._types import VendorProfile

__all__ = (
    "BUILTIN_PROFILE_FACTORIES",
    "VENDOR_DUCKDB",
    "VENDOR_MYSQL",
    "VENDOR_ORACLE",
    "VENDOR_POSTGRES",
    "VENDOR_SQLITE",
    "VENDOR_SQLSERVER",
)

VENDOR_SQLSERVER: Final = "sqlserver"
VENDOR_POSTGRES: Final = "postgres"
VENDOR_MYSQL: Final = "mysql"
VENDOR_ORACLE: Final = "oracle"
VENDOR_SQLITE: Final = "sqlite"
VENDOR_DUCKDB: Final = "duckdb"


def _sqlserver() -> VendorProfile:
    return VendorProfile(
        vendor_id=VENDOR_SQLSERVER,
        start_quote="[",
        end_quote="]",
        parameter_template="@{name}",
        boolean_literals=("1", "0"),
        binary_template="0x{hex}",
        sqlglot_dialect="tsql",
    )


def _postgres() -> VendorProfile:
    return VendorProfile(
        vendor_id=VENDOR_POSTGRES,
        start_quote='"',
        end_quote='"',
        parameter_template="%({name})s",
        binary_template="'\\x{hex}'::bytea",
        sqlglot_dialect="postgres",
    )


def _mysql() -> VendorProfile:
    return VendorProfile(
        vendor_id=VENDOR_MYSQL,
        start_quote="`",
        end_quote="`",
        parameter_template="%({name})s",
        sqlglot_dialect="mysql",
    )


def _oracle() -> VendorProfile:
    # every SELECT after the first in a UNION ALL chain must name a source
    return VendorProfile(
        vendor_id=VENDOR_ORACLE,
        start_quote='"',
        end_quote='"',
        row_terminal="FROM DUAL",
        parameter_template=":{name}",
        boolean_literals=("1", "0"),
        binary_template="HEXTORAW('{hex}')",
        sqlglot_dialect="oracle",
    )


def _sqlite() -> VendorProfile:
    return VendorProfile(
        vendor_id=VENDOR_SQLITE,
        start_quote='"',
        end_quote='"',
        parameter_template="@{name}",
        boolean_literals=("1", "0"),
        sqlglot_dialect="sqlite",
    )


def _duckdb() -> VendorProfile:
    return VendorProfile(
        vendor_id=VENDOR_DUCKDB,
        start_quote='"',
        end_quote='"',
        parameter_template="${name}",
        binary_template="from_hex('{hex}')",
        sqlglot_dialect="duckdb",
    )


BUILTIN_PROFILE_FACTORIES: "Final[dict[str, Callable[[], VendorProfile]]]" = {
    VENDOR_SQLSERVER: _sqlserver,
    VENDOR_POSTGRES: _postgres,
    VENDOR_MYSQL: _mysql,
    VENDOR_ORACLE: _oracle,
    VENDOR_SQLITE: _sqlite,
    VENDOR_DUCKDB: _duckdb,
}
