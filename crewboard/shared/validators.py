"""Shared validation utilities"""

import re
from typing import Optional, Union

TIME_PATTERN = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)(:[0-5]\d)?$")


def normalize_time(value: Optional[str]) -> Optional[str]:
    """
    Normalize a time-of-day string to zero-padded HH:MM.

    Database backends may hand times back with seconds ("08:30:00");
    those are trimmed to the grid label form ("08:30").

    Raises:
        ValueError: If the value is not a 24h time
    """
    if value is None:
        return value
    if not isinstance(value, str):
        raise ValueError(f"Invalid time '{value}', expected HH:MM")

    value = value.strip()
    match = TIME_PATTERN.match(value)
    if not match:
        raise ValueError(f"Invalid time '{value}', expected HH:MM")

    return f"{int(match.group(1)):02d}:{match.group(2)}"


def parse_hours(value: Union[str, int, float, None]) -> Optional[float]:
    """
    Parse a duration in hours, accepting a decimal comma ("1,5").

    Returns:
        Float hours, or None for empty input

    Raises:
        ValueError: If the value is not a number
    """
    if value is None or value == "":
        return None
    if isinstance(value, (int, float)):
        return float(value)

    try:
        return float(str(value).strip().replace(",", "."))
    except ValueError:
        raise ValueError(f"Invalid duration '{value}'") from None


def normalize_phone(phone: Optional[str]) -> Optional[str]:
    """
    Strip separators from a phone number, keeping a leading '+'.

    Raises:
        ValueError: If fewer than 6 digits remain
    """
    if not phone:
        return phone

    phone = phone.strip()
    prefix = "+" if phone.startswith("+") else ""
    digits = re.sub(r"\D", "", phone)

    if len(digits) < 6:
        raise ValueError("Phone number is too short")

    return f"{prefix}{digits}"


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValueError("Invalid email format")

    return email


def dedupe(values) -> list:
    """Drop repeated entries, keeping first occurrence order"""
    seen = set()
    result = []
    for value in values or []:
        if value in seen:
            continue
        seen.add(value)
        result.append(value)
    return result
