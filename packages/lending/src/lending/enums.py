# This project was developed with assistance from AI tools.
"""
Domain enums for the loan origination wizard.

Shared domain types used by both the in-memory records (lending package)
and the Pydantic schemas (wizard package).
"""

import enum


class Stage(str, enum.Enum):
    SALES = "sales"
    VERIFICATION = "verification"
    UNDERWRITING = "underwriting"
    SANCTION = "sanction"

    @classmethod
    def ordered(cls) -> tuple["Stage", ...]:
        """Stages in workflow order."""
        return (cls.SALES, cls.VERIFICATION, cls.UNDERWRITING, cls.SANCTION)

    @property
    def position(self) -> int:
        return Stage.ordered().index(self)


class StageStatus(str, enum.Enum):
    PENDING = "pending"
    CURRENT = "current"
    COMPLETED = "completed"


class LoanType(str, enum.Enum):
    PERSONAL = "personal"
    HOME = "home"
    CAR = "car"
    EDUCATION = "education"
    BUSINESS = "business"


class UnderwritingDecision(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
