"""
services/validation.py
----------------------
Field checks shared by the services. Each helper either returns the cleaned
value or raises ValidationError with a message fit for a form.
"""

import math
from datetime import date, datetime
from typing import Any, Optional

from utils.clock import to_local_naive
from utils.errors import NotFoundError, ValidationError


def require_text(value: Any, message: str) -> str:
    """Return the stripped string, or raise if it is missing or blank."""
    if value is None or not str(value).strip():
        raise ValidationError(message)
    return str(value).strip()


def to_number(value: Any, message: str) -> float:
    """
    Parse a finite number from an int, float or numeric string.

    Raises:
        ValidationError: If the value is missing, boolean, non-numeric or not finite.
    """
    if value is None or isinstance(value, bool):
        raise ValidationError(message)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(message) from None
    if not math.isfinite(number):
        raise ValidationError(message)
    return number


def to_datetime(value: Any) -> Optional[datetime]:
    """
    Normalize a date input to a local naive datetime.

    Accepts datetime, date (midnight) or an ISO-8601 string; None stays None.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return to_local_naive(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        text = str(value).strip().replace("Z", "+00:00")
        return to_local_naive(datetime.fromisoformat(text))
    except ValueError:
        raise ValidationError("Date must be a valid date") from None


def to_record_id(value: Any, kind: str) -> int:
    """
    Convert an opaque identifier from a URL or body to a primary key.

    Anything that cannot be a key cannot name an existing record, so it is
    reported as not found rather than as a validation error.
    """
    try:
        record_id = int(str(value))
    except (TypeError, ValueError):
        raise NotFoundError(f"{kind} not found") from None
    if record_id <= 0:
        raise NotFoundError(f"{kind} not found")
    return record_id
