# This project was developed with assistance from AI tools.
"""Tests for KYC validation and mocked salary-slip parsing."""

from datetime import date

from lending import VerificationDetails

from wizard.services.random_source import StubRandomSource
from wizard.services.verification import (
    MOCK_EMPLOYERS,
    normalize_field,
    parse_salary_slip,
    validate_aadhaar,
    validate_dob,
    validate_full_name,
    validate_pan,
    verification_errors,
)

TODAY = date(2026, 10, 19)


class TestFullName:
    def test_valid_collapses_whitespace(self):
        ok, _, val = validate_full_name("  Asha   Verma ")
        assert ok and val == "Asha Verma"

    def test_rejects_short(self):
        ok, msg, _ = validate_full_name(" Al ")
        assert not ok and "3 characters" in msg


class TestDOB:
    def test_iso(self):
        ok, _, val = validate_dob("1990-06-15", today=TODAY)
        assert ok and val == "1990-06-15"

    def test_day_first(self):
        ok, _, val = validate_dob("15/06/1990", today=TODAY)
        assert ok and val == "1990-06-15"

    def test_rejects_minor(self):
        ok, msg, _ = validate_dob("2010-01-01", today=TODAY)
        assert not ok and "18" in msg

    def test_eighteenth_birthday(self):
        ok, _, _ = validate_dob("2008-10-19", today=TODAY)
        assert ok

    def test_rejects_invalid_format(self):
        ok, _, _ = validate_dob("not-a-date", today=TODAY)
        assert not ok


class TestPAN:
    def test_normalizes_case(self):
        ok, _, val = validate_pan("abcde1234f")
        assert ok and val == "ABCDE1234F"

    def test_rejects_wrong_shape(self):
        for value in ("ABCD1234F", "ABCDE12345", "12345ABCDE", ""):
            ok, _, _ = validate_pan(value)
            assert not ok, value


class TestAadhaar:
    def test_strips_spaces(self):
        ok, _, val = validate_aadhaar("1234 5678 9012")
        assert ok and val == "123456789012"

    def test_rejects_short(self):
        ok, msg, _ = validate_aadhaar("12345678901")
        assert not ok and "12 digits" in msg

    def test_rejects_letters(self):
        ok, _, _ = validate_aadhaar("1234abcd9012")
        assert not ok


def test_normalize_field_keeps_invalid_input():
    assert normalize_field("pan", " abc ") == "abc"
    assert normalize_field("pan", "abcde1234f") == "ABCDE1234F"


def test_verification_errors_lists_every_gap():
    errors = verification_errors(VerificationDetails(pan="bad"))
    assert "full_name is required" in errors
    assert "date_of_birth is required" in errors
    assert any(e.startswith("pan:") for e in errors)
    assert "aadhaar is required" in errors
    assert "salary slip is required" in errors


def test_verification_complete():
    details = VerificationDetails(
        full_name="Asha Verma",
        date_of_birth="1990-06-15",
        pan="ABCDE1234F",
        aadhaar="123456789012",
        salary_slip_provided=True,
    )
    assert verification_errors(details) == []


def test_parse_salary_slip():
    income, employer = parse_salary_slip(50_000, StubRandomSource([0.5]))
    assert income == 50_000
    assert employer == MOCK_EMPLOYERS[2]


def test_parse_salary_slip_bounds():
    low, _ = parse_salary_slip(50_000, StubRandomSource([0.0]))
    high, employer = parse_salary_slip(50_000, StubRandomSource([0.999]))
    assert low == 45_000
    assert 54_900 <= high < 55_000
    assert employer == MOCK_EMPLOYERS[-1]
