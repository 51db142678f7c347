from dataclasses import dataclass
from typing import Optional

__all__ = ("VendorProfile",)


@dataclass(frozen=True)
class VendorProfile:
    """Immutable SQL dialect facts for one database vendor.

    Args:
        vendor_id: Identifier of the vendor, e.g. ``sqlserver``.
        start_quote: Character opening a quoted identifier.
        end_quote: Character closing a quoted identifier.
        row_terminal: Clause appended to every non-first SELECT of a union, or None.
        parameter_template: Placeholder template for a named parameter; ``{name}`` is
            replaced with the bare parameter name.
        boolean_literals: Literal text for ``True`` and ``False``.
        binary_template: Literal template for binary values; ``{hex}`` is replaced with
            the upper-case hex digits.
        sqlglot_dialect: sqlglot dialect used to escape string literals.
    """

    vendor_id: str
    start_quote: str
    end_quote: str
    row_terminal: Optional[str] = None
    parameter_template: str = "@{name}"
    boolean_literals: "tuple[str, str]" = ("TRUE", "FALSE")
    binary_template: str = "X'{hex}'"
    sqlglot_dialect: str = ""

    @property
    def requires_row_terminal(self) -> bool:
        """Whether non-first SELECT clauses need the row-terminal clause."""
        return bool(self.row_terminal)

    def quote_identifier(self, name: str) -> str:
        """Quote a single identifier, doubling embedded end-quote characters."""
        escaped = name.replace(self.end_quote, self.end_quote * 2)
        return f"{self.start_quote}{escaped}{self.end_quote}"

    def quote_table(self, table_name: str) -> str:
        """Quote a possibly schema-qualified table name.

        Each dot-separated part is quoted on its own. Parts already wrapped in the opening
        and closing quote characters are kept as given; any other part is quoted, which
        escapes stray quote characters.
        """
        return ".".join(self._quote_table_part(part.strip()) for part in table_name.strip().split("."))

    def _quote_table_part(self, part: str) -> str:
        if len(part) > 1 and part.startswith(self.start_quote) and part.endswith(self.end_quote):
            return part
        return self.quote_identifier(part)

    def placeholder(self, name: str) -> str:
        """Render the placeholder token referencing parameter ``name``."""
        return self.parameter_template.format(name=name)
