"""Optional dependency detection.

Record kinds backed by optional libraries are only recognised when the library is
importable. Detection never imports the library eagerly.
"""

from importlib.util import find_spec
from typing import Final

__all__ = ("ATTRS_INSTALLED", "PYDANTIC_INSTALLED", "module_available")


def module_available(module_name: str) -> bool:
    """Return whether ``module_name`` can be imported.

    Args:
        module_name: Top level module name.

    Returns:
        True when the module is installed.
    """
    try:
        return find_spec(module_name) is not None
    except (ImportError, ValueError):
        return False


ATTRS_INSTALLED: Final[bool] = module_available("attrs")
PYDANTIC_INSTALLED: Final[bool] = module_available("pydantic")
