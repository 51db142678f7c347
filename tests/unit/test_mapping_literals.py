"""Tests for locale-invariant literal rendering."""

import datetime
import locale
from decimal import Decimal
from enum import Enum, IntEnum
from uuid import UUID

import pytest
from msgspec import UNSET

from sqlbulk.dialects import (
    VENDOR_MYSQL,
    VENDOR_ORACLE,
    VENDOR_POSTGRES,
    VENDOR_SQLITE,
    VENDOR_SQLSERVER,
    VendorProfile,
    get_vendor_profile,
)
from sqlbulk.exceptions import SQLBuilderError
from sqlbulk.mapping import render_literal


class Color(Enum):
    RED = "red"


class Level(IntEnum):
    HIGH = 3


@pytest.fixture
def sqlserver() -> VendorProfile:
    return get_vendor_profile(VENDOR_SQLSERVER)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        pytest.param(None, "NULL", id="none"),
        pytest.param(UNSET, "NULL", id="unset"),
        pytest.param(True, "1", id="true"),
        pytest.param(False, "0", id="false"),
        pytest.param(42, "42", id="int"),
        pytest.param(-7, "-7", id="negative-int"),
        pytest.param(1234.5, "1234.5", id="float"),
        pytest.param(Decimal("1234.50"), "1234.50", id="decimal"),
        pytest.param(Decimal("1E+3"), "1000", id="decimal-exponent"),
        pytest.param("Ann", "'Ann'", id="str"),
        pytest.param("O'Brien", "'O''Brien'", id="quote-escaped"),
        pytest.param("", "''", id="empty-str"),
        pytest.param(datetime.date(2024, 1, 2), "'2024-01-02'", id="date"),
        pytest.param(datetime.datetime(2024, 1, 2, 3, 4, 5), "'2024-01-02 03:04:05'", id="datetime"),
        pytest.param(datetime.time(13, 30), "'13:30:00'", id="time"),
        pytest.param(
            UUID("12345678-1234-5678-1234-567812345678"), "'12345678-1234-5678-1234-567812345678'", id="uuid"
        ),
        pytest.param(b"\x01\xab", "0x01AB", id="bytes"),
        pytest.param(Color.RED, "'red'", id="enum"),
        pytest.param(Level.HIGH, "3", id="int-enum"),
    ],
)
def test_render_sqlserver(value: object, expected: str, sqlserver: VendorProfile) -> None:
    assert render_literal(value, sqlserver) == expected


def test_boolean_literals_follow_vendor() -> None:
    assert render_literal(True, get_vendor_profile(VENDOR_POSTGRES)) == "TRUE"
    assert render_literal(False, get_vendor_profile(VENDOR_ORACLE)) == "0"


@pytest.mark.parametrize(
    ("vendor_id", "expected"),
    [
        (VENDOR_SQLITE, "X'00FF'"),
        (VENDOR_MYSQL, "X'00FF'"),
        (VENDOR_ORACLE, "HEXTORAW('00FF')"),
        (VENDOR_POSTGRES, "'\\x00FF'::bytea"),
    ],
)
def test_binary_literals_follow_vendor(vendor_id: str, expected: str) -> None:
    assert render_literal(bytearray(b"\x00\xff"), get_vendor_profile(vendor_id)) == expected


def test_sqlite_escapes_single_quote() -> None:
    assert render_literal("it's", get_vendor_profile(VENDOR_SQLITE)) == "'it''s'"


@pytest.mark.parametrize("value", [float("nan"), float("inf"), Decimal("NaN"), Decimal("-Infinity")])
def test_non_finite_numbers_rejected(value: object, sqlserver: VendorProfile) -> None:
    with pytest.raises(SQLBuilderError):
        render_literal(value, sqlserver)


def test_unsupported_type_rejected(sqlserver: VendorProfile) -> None:
    with pytest.raises(SQLBuilderError, match="object"):
        render_literal(object(), sqlserver)


COMMA_DECIMAL_LOCALES = ("de_DE.UTF-8", "fr_FR.UTF-8", "nl_NL.UTF-8", "de_DE", "fr_FR")


def _set_comma_decimal_locale() -> bool:
    for name in COMMA_DECIMAL_LOCALES:
        try:
            locale.setlocale(locale.LC_ALL, name)
        except locale.Error:
            continue
        if locale.localeconv()["decimal_point"] == ",":
            return True
    return False


def test_rendering_ignores_process_locale(sqlserver: VendorProfile) -> None:
    previous = locale.setlocale(locale.LC_ALL)
    try:
        if not _set_comma_decimal_locale():
            pytest.skip("no comma-decimal locale is available")
        assert locale.format_string("%.1f", 1.5) == "1,5"
        assert render_literal(1.5, sqlserver) == "1.5"
        assert render_literal(Decimal("1.5"), sqlserver) == "1.5"
        assert render_literal(1234.5, sqlserver) == "1234.5"
        assert render_literal(Decimal("0.25"), sqlserver) == "0.25"
        assert render_literal(datetime.date(2024, 12, 31), sqlserver) == "'2024-12-31'"
    finally:
        locale.setlocale(locale.LC_ALL, previous)


def test_rendering_ignores_locale_conventions(sqlserver: VendorProfile, monkeypatch: pytest.MonkeyPatch) -> None:
    conventions = {**locale.localeconv(), "decimal_point": ",", "thousands_sep": "."}
    monkeypatch.setattr(locale, "localeconv", lambda: conventions)
    monkeypatch.setattr(locale, "str", lambda value: repr(value).replace(".", ","))
    assert render_literal(1.5, sqlserver) == "1.5"
    assert render_literal(Decimal("1.5"), sqlserver) == "1.5"
    assert render_literal(1234567.25, sqlserver) == "1234567.25"
