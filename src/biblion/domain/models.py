"""Entities tracked by the library: copies, loans and penalties."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, timedelta

from biblion.domain import errors
from biblion.domain.value_objects import (
    DEFAULT_LOAN_PERIOD_DAYS,
    Book,
    CopyStatus,
    LoanState,
    Patron,
)

ONE_DAY = timedelta(days=1)


class Copy:
    """A single physical instance of a book.

    The status is the only mutable field and is changed exclusively by the
    library service.
    """

    def __init__(
        self, copy_id: str, book: Book, status: CopyStatus = CopyStatus.AVAILABLE
    ) -> None:
        self.copy_id = copy_id
        self.book = book
        self.status = status

    @property
    def is_available(self) -> bool:
        """True when the copy can be borrowed."""
        return self.status is CopyStatus.AVAILABLE

    def __repr__(self) -> str:
        return f"Copy({self.copy_id!r}, {self.book.title!r}, {self.status.value})"


class Loan:
    """A borrowing transaction between a patron and a copy."""

    # pylint: disable=too-many-arguments
    def __init__(
        self,
        loan_id: str,
        patron: Patron,
        copy: Copy,
        start_date: date,
        *,
        loan_period_days: int = DEFAULT_LOAN_PERIOD_DAYS,
    ) -> None:
        self.loan_id = loan_id
        self.patron = patron
        self.copy = copy
        self.start_date = start_date
        self.loan_period_days = loan_period_days
        self.return_date: date | None = None
        self.state = LoanState.ACTIVE

    @property
    def due_date(self) -> date:
        """Last day on which the copy can be returned without penalty."""
        return self.start_date + timedelta(days=self.loan_period_days)

    @property
    def is_active(self) -> bool:
        """True while the copy has not been returned."""
        return self.state is LoanState.ACTIVE

    def complete(self, return_date: date) -> None:
        """Record the return of the copy.

        Args:
            return_date: The date on which the copy came back.

        Raises:
            LoanAlreadyCompletedError: If the loan was already completed.
        """
        if not self.is_active:
            raise errors.LoanAlreadyCompletedError(self.loan_id)
        self.return_date = return_date
        self.state = LoanState.COMPLETED

    def overdue_days(self, as_of: date) -> int:
        """Return the number of whole days past the due date.

        Completed loans are measured at their return date and ignore ``as_of``;
        active loans are measured at ``as_of``. Partial days count as a full day.

        Args:
            as_of: Reference date used while the loan is still active.

        Returns:
            The overdue day count, never negative.
        """
        effective = self.return_date if self.return_date is not None else as_of
        if effective <= self.due_date:
            return 0
        return max(0, math.ceil((effective - self.due_date) / ONE_DAY))

    def __repr__(self) -> str:
        return (
            f"Loan({self.loan_id!r}, patron={self.patron.patron_id!r}, "
            f"copy={self.copy.copy_id!r}, start={self.start_date}, "
            f"state={self.state.value})"
        )


@dataclass(frozen=True)
class Penalty:
    """A blocking period imposed on a patron after a late return."""

    patron: Patron
    start_date: date
    duration_days: int
    reason: str

    @property
    def ends_on(self) -> date:
        """Last day (inclusive) of the blocking window."""
        return self.start_date + timedelta(days=self.duration_days)

    def covers(self, on: date) -> bool:
        """True if the patron is still blocked by this penalty on ``on``."""
        return on <= self.ends_on
