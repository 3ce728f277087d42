"""Events"""

import abc
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DomainEvent(abc.ABC):
    """Base class for all domain events.
    Requires a way to determine the patron the event concerns.
    """

    @property
    @abc.abstractmethod
    def subject_id(self) -> str:
        """Return the ID of the patron this event concerns."""


@dataclass(frozen=True, slots=True)
class CopyBorrowed(DomainEvent):
    """Event indicating that a copy has been checked out."""

    loan_id: str
    patron_id: str
    copy_id: str
    on: str  # date in ISO format
    due: str  # date in ISO format

    @property
    def subject_id(self) -> str:
        return self.patron_id


@dataclass(frozen=True, slots=True)
class CopyReturned(DomainEvent):
    """Event indicating that a copy has been returned in good condition."""

    loan_id: str
    patron_id: str
    copy_id: str
    on: str  # date in ISO format
    overdue_days: int

    @property
    def subject_id(self) -> str:
        return self.patron_id


@dataclass(frozen=True, slots=True)
class CopyReturnedDamaged(DomainEvent):
    """Event indicating that a copy has been returned damaged."""

    loan_id: str
    patron_id: str
    copy_id: str
    on: str  # date in ISO format
    overdue_days: int

    @property
    def subject_id(self) -> str:
        return self.patron_id


@dataclass(frozen=True, slots=True)
class PenaltyIssued(DomainEvent):
    """Event indicating that a patron has been blocked after a late return."""

    patron_id: str
    start_date: str  # date in ISO format
    duration_days: int
    reason: str

    @property
    def subject_id(self) -> str:
        return self.patron_id
