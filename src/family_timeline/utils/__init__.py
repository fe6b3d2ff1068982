"""Shared utilities."""

from .dates import (
    DateInput,
    add_years,
    format_display_date,
    is_blank,
    parse_date,
    try_parse_date,
)

__all__ = [
    "DateInput",
    "add_years",
    "format_display_date",
    "is_blank",
    "parse_date",
    "try_parse_date",
]
