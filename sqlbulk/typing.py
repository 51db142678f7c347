from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Union

from msgspec import UNSET, Struct
from typing_extensions import TypeAlias, TypeVar

from sqlbulk._typing import ATTRS_INSTALLED, PYDANTIC_INSTALLED

# TypeVars with TYPE_CHECKING guard for mypyc compatibility
if TYPE_CHECKING:
    ResultT = TypeVar("ResultT")
    """Type variable for materialized result types."""
else:
    ResultT = Any


ColumnMapping: TypeAlias = "Mapping[str, str]"
"""Field name to column name mapping."""

DictRow: TypeAlias = "dict[str, Any]"
"""A result row keyed by column name."""

ResultRow: TypeAlias = "Mapping[str, Any]"
"""A result row handed to materializers, keyed by column name."""

ParameterObject: TypeAlias = "Union[Mapping[str, Any], Any, None]"
"""A parameter object: a mapping, any supported record, or ``None``.

Represents:
- :type:`Mapping[str, Any]`
- a dataclass, :class:`msgspec.Struct`, attrs class, pydantic model or named tuple
- :type:`None`
"""


__all__ = (
    "ATTRS_INSTALLED",
    "PYDANTIC_INSTALLED",
    "UNSET",
    "ColumnMapping",
    "DictRow",
    "ParameterObject",
    "ResultRow",
    "ResultT",
    "Struct",
)
