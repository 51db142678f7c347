"""Runtime-checkable protocols describing the storage primitive contract.

The storage primitive owns connections, transactions, timeouts and cancellation.
This package only prepares statement text and parameters for it and maps rows
that it streams back.
"""

from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any, Protocol, runtime_checkable

__all__ = ("AsyncRelationalStorage", "Materializer", "ParameterDirection", "StatementHandle", "StatementPreparer")


class ParameterDirection(str, Enum):
    """Direction of a statement parameter."""

    INPUT = "input"
    OUTPUT = "output"
    INPUT_OUTPUT = "input_output"
    RETURN_VALUE = "return_value"


@runtime_checkable
class StatementHandle(Protocol):
    """An executable statement that parameters can be attached to."""

    def add_parameter(self, name: str, value: Any, direction: ParameterDirection = ParameterDirection.INPUT) -> None:
        """Attach a parameter to the statement."""
        ...


StatementPreparer = Callable[[StatementHandle], None]
"""Callback run against the statement handle before execution."""

Materializer = Callable[[Mapping[str, Any]], Any]
"""Callback turning one result row into a result value."""


@runtime_checkable
class AsyncRelationalStorage(Protocol):
    """Contract of the storage primitive.

    ``vendor_id`` names the SQL dialect the primitive talks to and selects the
    vendor profile used when building statements for it.
    """

    @property
    def vendor_id(self) -> str:
        """Vendor identifier of the backing database."""
        ...

    async def execute(self, query: str, prepare: "StatementPreparer") -> int:
        """Execute a statement and return the affected row count."""
        ...

    async def read(self, query: str, prepare: "StatementPreparer", materialize: "Materializer") -> "list[Any]":
        """Execute a query and return one materialized value per result row."""
        ...
