"""
Date parsing and formatting for task input fields.
"""

from __future__ import annotations

from datetime import date, datetime, time
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .config import Settings


def get_today() -> datetime:
    """Today at midnight."""
    return datetime.combine(date.today(), time.min)


def parse_date(text: str, settings: "Settings") -> Optional[datetime]:
    """
    Parse user-entered date text.

    Tries the configured date-time input format first, then the date-only
    format. Date-only input resolves to midnight.

    Returns:
        The parsed datetime, or None if the text matches neither format
    """
    raw = text.strip()
    if not raw:
        return None

    formats = settings.date_formats
    for fmt in (formats.input_datetime_format, formats.input_date_format):
        try:
            return datetime.strptime(raw, fmt)
        except ValueError:
            continue
    return None


def date_to_input_text(value: datetime, settings: "Settings") -> str:
    formats = settings.date_formats
    if value.time() == time.min:
        return value.strftime(formats.input_date_format)
    return value.strftime(formats.input_datetime_format)


def date_to_display_text(value: datetime, settings: "Settings") -> str:
    formats = settings.date_formats
    if value.time() == time.min:
        return value.strftime(formats.display_date_format)
    return value.strftime(formats.display_datetime_format)
