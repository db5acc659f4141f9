# This project was developed with assistance from AI tools.
"""EMI and amortization calculation logic.

Pure math, no I/O. Shared by the public calculator routes, the
application orchestrator and the eligibility policy's plan synthesis.
"""

import math
from numbers import Real

from lending import EMIResult, ScheduleRow


class InvalidInputError(ValueError):
    """Raised when a calculator input is malformed or out of domain."""


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def _check_inputs(principal, annual_rate, tenure_months) -> None:
    for name, value in (("principal", principal), ("annual_rate", annual_rate)):
        if isinstance(value, bool) or not isinstance(value, Real):
            raise InvalidInputError(f"{name} must be a number, got {value!r}")
        if not math.isfinite(value):
            raise InvalidInputError(f"{name} must be finite, got {value!r}")
    if isinstance(tenure_months, bool) or not isinstance(tenure_months, int):
        raise InvalidInputError(f"tenure_months must be an integer, got {tenure_months!r}")
    if principal <= 0:
        raise InvalidInputError(f"principal must be positive, got {principal}")
    if annual_rate < 0:
        raise InvalidInputError(f"annual_rate must not be negative, got {annual_rate}")
    if tenure_months <= 0:
        raise InvalidInputError(f"tenure_months must be positive, got {tenure_months}")


def _raw_emi(principal: float, monthly_rate: float, tenure_months: int) -> float:
    # EMI = P * r * (1+r)^n / ((1+r)^n - 1)
    if monthly_rate == 0:
        return principal / tenure_months
    compound = (1 + monthly_rate) ** tenure_months
    return principal * monthly_rate * compound / (compound - 1)


def compute_emi(principal: float, annual_rate: float, tenure_months: int) -> EMIResult:
    """Compute the monthly installment and totals for a loan.

    Money is rounded to whole currency units. ``total_payable`` is the
    rounded EMI times the tenure (never below the principal), and the
    percentage shares are taken from the rounded totals.

    Raises:
        InvalidInputError: non-numeric input, non-positive principal or
            tenure, or a negative rate.
    """
    _check_inputs(principal, annual_rate, tenure_months)

    monthly_rate = annual_rate / 12 / 100
    emi = round_half_up(_raw_emi(principal, monthly_rate, tenure_months))
    rounded_principal = round_half_up(principal)

    if monthly_rate == 0:
        total_payable = rounded_principal
    else:
        total_payable = max(emi * tenure_months, rounded_principal)
    total_interest = total_payable - rounded_principal

    if total_interest == 0:
        principal_pct, interest_pct = 100, 0
    else:
        principal_pct = round_half_up(rounded_principal / total_payable * 100)
        interest_pct = round_half_up(total_interest / total_payable * 100)

    return EMIResult(
        emi=emi,
        total_payable=total_payable,
        total_interest=total_interest,
        principal_percentage=principal_pct,
        interest_percentage=interest_pct,
    )


def amortization_schedule(
    principal: float, annual_rate: float, tenure_months: int
) -> list[ScheduleRow]:
    """Month-by-month split of each installment into principal and interest.

    Uses the unrounded installment internally and rounds each row to two
    decimals; the last row absorbs the residual so the closing balance is 0.
    """
    _check_inputs(principal, annual_rate, tenure_months)

    monthly_rate = annual_rate / 12 / 100
    installment = _raw_emi(principal, monthly_rate, tenure_months)
    balance = float(principal)
    rows: list[ScheduleRow] = []

    for month in range(1, tenure_months + 1):
        interest = balance * monthly_rate
        principal_part = installment - interest
        if month == tenure_months:
            principal_part = balance
        closing = max(balance - principal_part, 0.0)
        rows.append(
            ScheduleRow(
                month=month,
                opening_balance=round(balance, 2),
                installment=round(principal_part + interest, 2),
                principal_component=round(principal_part, 2),
                interest_component=round(interest, 2),
                closing_balance=round(closing, 2),
            )
        )
        balance = closing

    return rows


def format_currency(amount: float) -> str:
    """Format a rupee amount with Indian digit grouping, e.g. ``₹9,60,000``."""
    value = round_half_up(abs(amount))
    digits = str(value)
    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        digits = ",".join(groups) + "," + tail
    sign = "-" if amount < 0 else ""
    return f"{sign}₹{digits}"
