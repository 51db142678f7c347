"""Locale-invariant SQL literal rendering.

Values are rendered with Python's own locale-independent formatting (``.`` as the
decimal separator, ISO 8601 temporal values) and string escaping is delegated to
sqlglot's generator for the vendor's dialect.
"""

import datetime
import math
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any
from uuid import UUID

from msgspec import UNSET
from sqlglot import exp

from sqlbulk.exceptions import SQLBuilderError

if TYPE_CHECKING:
    from sqlbulk.dialects import VendorProfile

__all__ = ("render_literal", "render_string")

NULL_LITERAL = "NULL"


def render_string(value: str, profile: "VendorProfile") -> str:
    """Render a quoted and escaped string literal for the vendor's dialect."""
    return exp.Literal.string(value).sql(dialect=profile.sqlglot_dialect or None)


def _render_temporal(value: "datetime.date | datetime.time") -> str:
    if isinstance(value, datetime.datetime):
        return value.isoformat(sep=" ")
    return value.isoformat()


def render_literal(value: Any, profile: "VendorProfile") -> str:
    """Render ``value`` as SQL literal text.

    Args:
        value: Python value to render.
        profile: Vendor profile selecting boolean, binary and string syntax.

    Raises:
        SQLBuilderError: The value is a non-finite float or of an unsupported type.

    Returns:
        SQL literal text.
    """
    if value is None or value is UNSET:
        return NULL_LITERAL
    if isinstance(value, bool):
        true_text, false_text = profile.boolean_literals
        return true_text if value else false_text
    if isinstance(value, Enum):
        return render_literal(value.value, profile)
    if isinstance(value, int):
        return str(int(value))
    if isinstance(value, float):
        if not math.isfinite(value):
            msg = f"Cannot render non-finite float {value!r} as a SQL literal"
            raise SQLBuilderError(msg)
        return repr(value)
    if isinstance(value, Decimal):
        if not value.is_finite():
            msg = f"Cannot render non-finite decimal {value!r} as a SQL literal"
            raise SQLBuilderError(msg)
        return format(value, "f")
    if isinstance(value, str):
        return render_string(value, profile)
    if isinstance(value, (datetime.date, datetime.time)):
        return render_string(_render_temporal(value), profile)
    if isinstance(value, UUID):
        return render_string(str(value), profile)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return profile.binary_template.format(hex=bytes(value).hex().upper())
    msg = f"Cannot render value of type {type(value).__qualname__} as a SQL literal"
    raise SQLBuilderError(msg)
