"""Sale validation utilities."""
import re
from datetime import date
from typing import Optional


ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class SaleValidationError(ValueError):
    """Raised when sale input is well-typed but semantically invalid."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


def validate_iso_date(value: str, field: str = "date") -> str:
    """
    Validate a zero-padded ISO calendar date (YYYY-MM-DD).

    Lexicographic comparison of sale dates depends on this exact shape,
    so "2025-1-5" is rejected even though it names a real day.
    """
    if not isinstance(value, str) or not ISO_DATE_PATTERN.match(value):
        raise SaleValidationError(f"{field} must be in YYYY-MM-DD format", field=field)
    try:
        date.fromisoformat(value)
    except ValueError:
        raise SaleValidationError(f"{field} is not a valid calendar date: {value}", field=field)
    return value


def validate_date_range(start_date: Optional[str], end_date: Optional[str]) -> None:
    """Validate optional filter bounds. An inverted range is allowed and matches nothing."""
    if start_date:
        validate_iso_date(start_date, field="startDate")
    if end_date:
        validate_iso_date(end_date, field="endDate")
