"""Builder configuration."""

import re
from dataclasses import dataclass, replace
from typing import Any, Final

from sqlbulk.exceptions import ImproperConfigurationError

__all__ = ("DEFAULT_INDEXED_PARAMETER_PREFIX", "BulkInsertConfig")

DEFAULT_INDEXED_PARAMETER_PREFIX: Final = "p"

_PREFIX_RE: Final = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class BulkInsertConfig:
    """Options applied when building multi-row insert statements.

    Args:
        indexed_parameter_prefix: Prefix of the sequential per-row parameter names
            (``p`` yields ``p0``, ``p1``, ...).
        validate_record_shapes: Reject batches whose records expose a different field
            signature than the first record.
        statement_terminator: Text appended to the generated statement.
    """

    indexed_parameter_prefix: str = DEFAULT_INDEXED_PARAMETER_PREFIX
    validate_record_shapes: bool = True
    statement_terminator: str = ";"

    def __post_init__(self) -> None:
        if not _PREFIX_RE.match(self.indexed_parameter_prefix):
            msg = f"Invalid parameter prefix {self.indexed_parameter_prefix!r}; expected an identifier."
            raise ImproperConfigurationError(msg)

    def replace(self, **changes: Any) -> "BulkInsertConfig":
        """Return a copy with the given fields changed."""
        return replace(self, **changes)
