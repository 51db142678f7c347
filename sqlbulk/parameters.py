"""Statement parameters and the parameter binder."""

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Final, Union

from msgspec import UNSET

from sqlbulk.exceptions import ParameterError
from sqlbulk.mapping.fields import map_fields
from sqlbulk.protocols import ParameterDirection, StatementHandle
from sqlbulk.typing import ParameterObject
from sqlbulk.utils.type_guards import is_mapping

__all__ = (
    "DB_NULL",
    "DBNullType",
    "Parameter",
    "ParameterDirection",
    "bind_parameters",
    "parameters_from_object",
    "validate_parameter_name",
)

_PARAMETER_NAME_RE: Final = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class DBNullType(Enum):
    """Sentinel type for an explicit database ``NULL`` parameter value."""

    DB_NULL = 0

    def __repr__(self) -> str:
        return "DB_NULL"

    def __bool__(self) -> bool:
        return False


DB_NULL: Final = DBNullType.DB_NULL
"""Explicit database ``NULL``; bound in place of ``None`` and ``UNSET`` values."""


@dataclass(frozen=True)
class Parameter:
    """A named statement parameter.

    Args:
        name: Bare parameter name, without the vendor placeholder prefix.
        value: Parameter value.
        direction: Parameter direction.
    """

    name: str
    value: Any
    direction: ParameterDirection = ParameterDirection.INPUT

    @property
    def bound_value(self) -> Any:
        """Value handed to the statement, with absent values replaced by ``DB_NULL``."""
        if self.value is None or self.value is UNSET:
            return DB_NULL
        return self.value


def validate_parameter_name(name: str) -> str:
    """Return ``name`` if it is usable as a named placeholder.

    Raises:
        ParameterError: The name is not an identifier.
    """
    if not _PARAMETER_NAME_RE.match(name):
        msg = f"Invalid parameter name {name!r}; parameter names must be identifiers"
        raise ParameterError(msg)
    return name


def parameters_from_object(parameters: ParameterObject) -> "list[Parameter]":
    """Convert a parameter object into parameters named after its fields.

    Args:
        parameters: A mapping, any supported record, or ``None``.

    Returns:
        Input parameters in field order; empty for ``None``.
    """
    if parameters is None:
        return []
    if is_mapping(parameters):
        return [Parameter(validate_parameter_name(str(name)), value) for name, value in parameters.items()]
    return [Parameter(validate_parameter_name(name), value) for name, value in map_fields(parameters)]


def bind_parameters(
    handle: StatementHandle, parameters: "Union[Mapping[str, Any], Iterable[Parameter], None]"
) -> None:
    """Attach parameters to a statement handle.

    Mapping entries are attached as input parameters; ``None`` and ``UNSET`` values
    are attached as :data:`DB_NULL`.

    Args:
        handle: Statement handle provided by the storage primitive.
        parameters: Name to value mapping or parameter sequence.
    """
    if parameters is None:
        return
    if is_mapping(parameters):
        items: Iterable[Parameter] = (Parameter(name, value) for name, value in parameters.items())
    else:
        items = parameters
    for parameter in items:
        handle.add_parameter(parameter.name, parameter.bound_value, parameter.direction)
