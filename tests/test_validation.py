"""Input rules shared by schemas and services."""

from datetime import date, datetime, timezone

import pytest

from aftercare import validation
from aftercare.errors import ValidationFailed


# ═══════════════════════════════════════════════════════════
# Names, emails, passwords
# ═══════════════════════════════════════════════════════════


@pytest.mark.parametrize(
    "value, ok",
    [("Al", True), ("  Sarah  ", True), ("A", False), ("", False), ("x" * 31, False)],
)
def test_check_name(value, ok):
    assert (validation.check_name(value, "First name") is None) is ok


def test_check_email():
    assert validation.check_email(" Sarah@Example.COM ") is None
    assert validation.check_email("no-at-sign.com") == "Invalid email format"
    assert validation.check_email("a@b") == "Invalid email format"
    assert validation.check_email("") == "Email is required"


def test_check_email_length_cap():
    local = "a" * (validation.EMAIL_MAX - len("@example.com"))
    assert validation.check_email(f"{local}@example.com") is None
    assert validation.check_email(f"{local}a@example.com") == (
        f"Email must be at most {validation.EMAIL_MAX} characters"
    )


def test_normalize_email():
    assert validation.normalize_email("  Sarah@Example.COM ") == "sarah@example.com"


@pytest.mark.parametrize(
    "password, ok",
    [
        ("Passw0rd", True),
        ("short1A", False),
        ("alllowercase1", False),
        ("ALLUPPERCASE1", False),
        ("NoDigitsHere", False),
    ],
)
def test_password_policy(password, ok):
    assert (validation.check_password_strength(password) is None) is ok


def test_password_label_in_message():
    message = validation.check_password_strength("weak", "New password")
    assert message.startswith("New password")


def test_validate_registration_collects_every_error():
    with pytest.raises(ValidationFailed) as exc:
        validation.validate_registration("S", "", "bad", "weak")
    fields = [e.field for e in exc.value.errors]
    assert fields == ["firstName", "lastName", "email", "password"]


def test_validate_registration_sanitizes():
    result = validation.validate_registration(
        " Sarah ", " Johnson ", " Sarah@X.com ", "Passw0rd"
    )
    assert result == ("Sarah", "Johnson", "sarah@x.com", "Passw0rd")


# ═══════════════════════════════════════════════════════════
# Pain level and dates
# ═══════════════════════════════════════════════════════════


@pytest.mark.parametrize("value", [0, 5, 10])
def test_pain_level_in_range(value):
    assert validation.check_pain_level(value) is None


@pytest.mark.parametrize("value", [-1, 11, 5.5, "5", True, None])
def test_pain_level_rejected(value):
    assert validation.check_pain_level(value) is not None


def test_parse_calendar_date_forms():
    assert validation.parse_calendar_date("2024-01-15") == date(2024, 1, 15)
    assert validation.parse_calendar_date("2024-01-15T10:30:00Z") == date(2024, 1, 15)
    assert validation.parse_calendar_date(datetime(2024, 1, 15, 8)) == date(2024, 1, 15)


@pytest.mark.parametrize(
    "value", ["2024-02-30", "yesterday", "", None, 20240115, "20240115", "2024-W03-1"]
)
def test_parse_calendar_date_invalid(value):
    with pytest.raises(ValueError):
        validation.parse_calendar_date(value)


def test_surgery_date_required():
    with pytest.raises(ValidationFailed) as exc:
        validation.parse_surgery_date(None)
    assert exc.value.errors[0].field == "surgeryDate"


def test_surgery_date_in_future_rejected():
    with pytest.raises(ValidationFailed) as exc:
        validation.parse_surgery_date("2024-01-16", today=date(2024, 1, 15))
    assert "future" in exc.value.message


def test_surgery_date_today_accepted():
    assert validation.parse_surgery_date("2024-01-15", today=date(2024, 1, 15)) == date(
        2024, 1, 15
    )


# ═══════════════════════════════════════════════════════════
# Recovery day
# ═══════════════════════════════════════════════════════════


def test_recovery_day_counts_whole_days():
    assert validation.recovery_day(date(2024, 1, 1), today=date(2024, 1, 15)) == 14


def test_recovery_day_zero_on_surgery_day_and_without_date():
    assert validation.recovery_day(date(2024, 1, 15), today=date(2024, 1, 15)) == 0
    assert validation.recovery_day(None) == 0


def test_recovery_day_never_negative():
    assert validation.recovery_day(date(2024, 2, 1), today=date(2024, 1, 15)) == 0


def test_utc_today_matches_utc_clock():
    assert validation.utc_today() == datetime.now(timezone.utc).date()
