from __future__ import annotations

from datetime import date

import pytest

from registrar.validation import (
    CUSTOMER_PHONE_RE,
    EMAIL_RE,
    STUDENT_ID_RE,
    TREK_PHONE_RE,
    parse_date,
    validate_choice,
    validate_confirm,
    validate_future_date,
    validate_name,
    validate_pattern,
    validate_positive_int,
)


def test_pattern_accepts_trimmed_full_match():
    v = validate_pattern("  SE123456 ", STUDENT_ID_RE, field_name="student ID")
    assert v.ok and v.value == "SE123456"


def test_pattern_rejects_partial_match_with_default_reason():
    v = validate_pattern("SE1234567", STUDENT_ID_RE, field_name="student ID")
    assert not v.ok
    assert v.reason == "Input must match the pattern for student ID!"


def test_pattern_uses_custom_reason_and_rejects_blank():
    assert validate_pattern("X1234", r"[CGK]\d{4}", reason="Wrong format!").reason == "Wrong format!"
    assert validate_pattern("   ", STUDENT_ID_RE).reason == "Input must be a non-empty string!"


@pytest.mark.parametrize(
    "raw, ok",
    [
        ("Nguyen Van An", True),
        ("An", True),
        ("nguyen Van", False),
        ("Nguyen  Van", False),
        ("A", False),
        ("Nguyen Van Anh Tuan Khoa", False),  # 24 chars > 20
    ],
)
def test_validate_name(raw: str, ok: bool):
    assert validate_name(raw, min_len=2, max_len=20).ok is ok


def test_name_reasons():
    assert validate_name("A").reason == "The name must have a length between 2 and 25!"
    assert validate_name("nguyen").reason == "Wrong format for name! Each word must be capitalized."


def test_phone_and_email_patterns():
    assert TREK_PHONE_RE.fullmatch("0201234567")
    assert not CUSTOMER_PHONE_RE.fullmatch("0201234567")
    assert CUSTOMER_PHONE_RE.fullmatch("0912345678")
    assert EMAIL_RE.fullmatch("an.nguyen@fpt.edu.vn")
    assert not EMAIL_RE.fullmatch("an@localhost")


def test_parse_date_is_strict():
    assert parse_date("29/02/2028") == date(2028, 2, 29)
    assert parse_date("30/02/2025") is None
    assert parse_date("1/1/2025") is None
    assert parse_date("2025-01-01") is None


def test_future_date_must_be_after_today():
    today = date(2026, 10, 18)
    assert not validate_future_date("18/10/2026", today=today).ok
    assert validate_future_date("18/10/2026", today=today).reason == "The date must be in the future!"
    v = validate_future_date("19/10/2026", today=today)
    assert v.ok and v.value == date(2026, 10, 19)
    assert validate_future_date("31/11/2026", today=today).reason == "Wrong format or value for date!"


def test_choice_and_positive_int():
    assert validate_choice("3", 1, 9).value == 3
    assert validate_choice("0", 1, 9, field_name="menu choice").reason == "The menu choice must be between 1 and 9!"
    assert validate_choice("two", 1, 9).reason == "Input format must be an integer!"
    assert validate_positive_int("0", field_name="tables").reason == "The tables must be a positive integer!"
    assert validate_positive_int(" 12 ").value == 12


def test_confirm():
    assert validate_confirm("Y").value is True
    assert validate_confirm("n").value is False
    assert validate_confirm("yes").reason == "The input format must be in [y/n]!"


@pytest.mark.parametrize("raw", ["1_000", "٣", "3.0", "0x1", ""])
def test_int_parsing_accepts_plain_ascii_digits_only(raw: str):
    assert validate_choice(raw, 1, 5000).reason == "Input format must be an integer!"


def test_int_parsing_allows_sign_and_padding():
    assert validate_positive_int(" +7 ").value == 7
    assert validate_choice("-1", 1, 9).reason == "The choice must be between 1 and 9!"
