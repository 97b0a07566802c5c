"""Input validation rules shared by request schemas and services.

Each check_* function returns an error message or None, so callers can
collect every problem at once and report them together as a list of
field errors.
"""

import re
from datetime import date, datetime, timezone
from typing import Optional

from aftercare.errors import FieldError, ValidationFailed

NAME_MIN = 2
NAME_MAX = 30
PASSWORD_MIN = 8
EMAIL_MAX = 255
PAIN_MIN = 0
PAIN_MAX = 10

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_CALENDAR_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}")


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


def check_name(value: Optional[str], label: str) -> Optional[str]:
    name = (value or "").strip()
    if not name:
        return f"{label} is required"
    if not NAME_MIN <= len(name) <= NAME_MAX:
        return f"{label} must be between {NAME_MIN} and {NAME_MAX} characters"
    return None


def check_email(email: Optional[str]) -> Optional[str]:
    email = normalize_email(email)
    if not email:
        return "Email is required"
    if len(email) > EMAIL_MAX:
        return f"Email must be at most {EMAIL_MAX} characters"
    if not _EMAIL_RE.match(email):
        return "Invalid email format"
    return None


def check_password_strength(password: Optional[str], label: str = "Password") -> Optional[str]:
    if not password:
        return f"{label} is required"
    if len(password) < PASSWORD_MIN:
        return f"{label} must be at least {PASSWORD_MIN} characters long"
    if not (
        re.search(r"[a-z]", password)
        and re.search(r"[A-Z]", password)
        and re.search(r"\d", password)
    ):
        return (
            f"{label} must contain at least one uppercase letter, "
            "one lowercase letter, and one number"
        )
    return None


def check_pain_level(value) -> Optional[str]:
    if isinstance(value, bool) or not isinstance(value, int):
        return "Pain level must be a whole number"
    if not PAIN_MIN <= value <= PAIN_MAX:
        return f"Pain level must be between {PAIN_MIN} and {PAIN_MAX}"
    return None


def parse_calendar_date(value) -> date:
    """Parse "YYYY-MM-DD" or a full ISO 8601 timestamp into a date.

    Raises ValueError with a client-facing message.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValueError("Invalid date format")
    text = value.strip()
    if not _CALENDAR_DATE_RE.match(text):
        raise ValueError("Invalid date format")
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise ValueError("Invalid date format")


def parse_surgery_date(value, today: Optional[date] = None) -> date:
    """Validate a surgery date: present, parseable, not in the future."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationFailed.single("surgeryDate", "Surgery date is required")
    try:
        parsed = parse_calendar_date(value)
    except ValueError as e:
        raise ValidationFailed.single("surgeryDate", str(e))
    if parsed > (today or utc_today()):
        raise ValidationFailed.single(
            "surgeryDate", "Surgery date cannot be in the future"
        )
    return parsed


def recovery_day(surgery_date: Optional[date], today: Optional[date] = None) -> int:
    """Whole days since surgery, never negative. 0 without a surgery date."""
    if surgery_date is None:
        return 0
    return max(0, ((today or utc_today()) - surgery_date).days)


def validate_registration(
    first_name: Optional[str],
    last_name: Optional[str],
    email: Optional[str],
    password: Optional[str],
) -> tuple[str, str, str, str]:
    """Sanitize and validate sign-up input.

    Returns (first_name, last_name, email, password) trimmed and with the
    email lowercased. Raises ValidationFailed listing every bad field.
    """
    errors = []
    for field, message in (
        ("firstName", check_name(first_name, "First name")),
        ("lastName", check_name(last_name, "Last name")),
        ("email", check_email(email)),
        ("password", check_password_strength(password)),
    ):
        if message:
            errors.append(FieldError(field, message))
    if errors:
        raise ValidationFailed(errors[0].message, errors)
    return first_name.strip(), last_name.strip(), normalize_email(email), password
