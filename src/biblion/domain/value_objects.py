"""Module including value objects used across the domain layer."""

from dataclasses import dataclass
from enum import Enum

DEFAULT_LOAN_PERIOD_DAYS = 14
DEFAULT_MAX_ACTIVE_LOANS = 3


class CopyStatus(Enum):
    """Enumeration of possible copy statuses."""

    AVAILABLE = "available"
    LOANED = "loaned"
    DAMAGED = "damaged"


class LoanState(Enum):
    """Enumeration of possible loan states."""

    ACTIVE = "active"
    COMPLETED = "completed"


@dataclass(frozen=True)
class Book:
    """Value object representing the bibliographic record shared by copies."""

    title: str
    author: str
    publisher: str
    genre: str
    year: int


@dataclass(frozen=True)
class Patron:
    """Value object representing a registered library patron."""

    patron_id: str
    name: str


@dataclass(frozen=True)
class LendingPolicy:
    """Value object holding the lending rules applied by the library.

    Attributes:
        loan_period_days: Days between checkout and the due date.
        max_active_loans: Maximum number of loans a patron may hold at once.
    """

    loan_period_days: int = DEFAULT_LOAN_PERIOD_DAYS
    max_active_loans: int = DEFAULT_MAX_ACTIVE_LOANS
