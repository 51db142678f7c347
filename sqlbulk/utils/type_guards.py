"""Type guard functions for runtime record-kind detection.

These checks work on both instances and classes, so the field mapper can build a
schema descriptor from either a record or its type.
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from msgspec import Struct

from sqlbulk.typing import ATTRS_INSTALLED, PYDANTIC_INSTALLED

if TYPE_CHECKING:
    from typing_extensions import TypeGuard

__all__ = (
    "is_attrs_schema",
    "is_dataclass",
    "is_dataclass_instance",
    "is_mapping",
    "is_mapping_type",
    "is_msgspec_struct",
    "is_named_tuple",
    "is_pydantic_model",
)


def _as_type(obj: Any) -> type:
    return obj if isinstance(obj, type) else type(obj)


def is_dataclass_instance(obj: Any) -> bool:
    """Check if an object is a dataclass instance.

    Args:
        obj: An object to check.

    Returns:
        True if the object is a dataclass instance.
    """
    return not isinstance(obj, type) and hasattr(type(obj), "__dataclass_fields__")


def is_dataclass(obj: Any) -> bool:
    """Check if an object is a dataclass or dataclass instance.

    Args:
        obj: Value to check.

    Returns:
        bool
    """
    if isinstance(obj, type) and hasattr(obj, "__dataclass_fields__"):
        return True
    return is_dataclass_instance(obj)


def is_msgspec_struct(obj: Any) -> bool:
    """Check if a value is a msgspec struct or struct type.

    Args:
        obj: Value to check.

    Returns:
        bool
    """
    return issubclass(_as_type(obj), Struct)


def is_pydantic_model(obj: Any) -> bool:
    """Check if a value is a pydantic model or model type.

    Args:
        obj: Value to check.

    Returns:
        bool
    """
    if not PYDANTIC_INSTALLED:
        return False
    from pydantic import BaseModel

    return issubclass(_as_type(obj), BaseModel)


def is_attrs_schema(obj: Any) -> bool:
    """Check if a value is an attrs class or attrs instance.

    Args:
        obj: Value to check.

    Returns:
        bool
    """
    if not ATTRS_INSTALLED:
        return False
    import attrs

    return attrs.has(_as_type(obj))


def is_named_tuple(obj: Any) -> bool:
    """Check if a value is a named tuple or named tuple type.

    Args:
        obj: Value to check.

    Returns:
        bool
    """
    cls = _as_type(obj)
    return issubclass(cls, tuple) and hasattr(cls, "_fields")


def is_mapping(obj: Any) -> "TypeGuard[Mapping[str, Any]]":
    """Check if a value is a mapping instance.

    Args:
        obj: Value to check.

    Returns:
        bool
    """
    return isinstance(obj, Mapping)


def is_mapping_type(obj: Any) -> bool:
    """Check if a value is a mapping type, including ``TypedDict`` classes.

    Args:
        obj: Value to check.

    Returns:
        bool
    """
    if not isinstance(obj, type):
        return False
    return issubclass(obj, Mapping) or hasattr(obj, "__total__")
