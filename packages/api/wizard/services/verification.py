# This project was developed with assistance from AI tools.
"""KYC validation and mocked salary-slip parsing for the verification stage.

Field validators are pure functions returning
``(is_valid, error_message, normalized_value)``.
"""

import re
from collections.abc import Callable
from datetime import date, datetime

from lending import VerificationDetails

from .emi import round_half_up
from .random_source import RandomSource

MOCK_EMPLOYERS = (
    "Tata Consultancy Services",
    "Infosys Ltd",
    "Wipro Technologies",
    "Tech Mahindra",
)


def validate_full_name(value: str) -> tuple[bool, str, str | None]:
    name = " ".join(value.split())
    if len(name) < 3:
        return False, "Full name must be at least 3 characters", None
    return True, "", name


def validate_dob(value: str, today: date | None = None) -> tuple[bool, str, str | None]:
    """Validate date of birth. Accepts ISO and day-first formats."""
    formats = ["%Y-%m-%d", "%d/%m/%Y", "%d-%m-%Y"]
    parsed: date | None = None
    for fmt in formats:
        try:
            parsed = datetime.strptime(value.strip(), fmt).date()
            break
        except ValueError:
            continue
    if parsed is None:
        return False, "Could not parse date. Try YYYY-MM-DD or DD/MM/YYYY.", None

    today = today or date.today()
    age = today.year - parsed.year - ((today.month, today.day) < (parsed.month, parsed.day))
    if age < 18:
        return False, "Applicant must be at least 18 years old", None
    if age > 120:
        return False, "Date of birth appears invalid", None
    return True, "", parsed.isoformat()


def validate_pan(value: str) -> tuple[bool, str, str | None]:
    pan = value.strip().upper()
    if not re.fullmatch(r"[A-Z]{5}[0-9]{4}[A-Z]", pan):
        return False, "PAN must be 5 letters, 4 digits, 1 letter (e.g. ABCDE1234F)", None
    return True, "", pan


def validate_aadhaar(value: str) -> tuple[bool, str, str | None]:
    digits = re.sub(r"\s", "", value)
    if not re.fullmatch(r"\d{12}", digits):
        return False, "Aadhaar must be 12 digits", None
    return True, "", digits


def validate_employer(value: str) -> tuple[bool, str, str | None]:
    return True, "", value.strip()


_VALIDATORS: dict[str, Callable[[str], tuple[bool, str, str | None]]] = {
    "full_name": validate_full_name,
    "date_of_birth": validate_dob,
    "pan": validate_pan,
    "aadhaar": validate_aadhaar,
    "employer_name": validate_employer,
}

_REQUIRED_FIELDS = ("full_name", "date_of_birth", "pan", "aadhaar")


def normalize_field(field_name: str, value: str) -> str:
    """Normalized value when valid, otherwise the trimmed input."""
    ok, _, normalized = _VALIDATORS[field_name](value)
    return normalized if ok and normalized is not None else value.strip()


def verification_errors(details: VerificationDetails) -> list[str]:
    """Every reason the verification stage cannot be completed yet."""
    errors: list[str] = []
    for field_name in _REQUIRED_FIELDS:
        value = getattr(details, field_name)
        if not value.strip():
            errors.append(f"{field_name} is required")
            continue
        ok, msg, _ = _VALIDATORS[field_name](value)
        if not ok:
            errors.append(f"{field_name}: {msg}")
    if not details.salary_slip_provided:
        errors.append("salary slip is required")
    return errors


def parse_salary_slip(declared_income: int, rng: RandomSource) -> tuple[int, str]:
    """Mock document parse: income within +/-10% of declared, random employer."""
    parsed_income = round_half_up(declared_income * rng.next_in_range(0.9, 1.1))
    index = int(rng.next_in_range(0, len(MOCK_EMPLOYERS)))
    return parsed_income, MOCK_EMPLOYERS[min(index, len(MOCK_EMPLOYERS) - 1)]
