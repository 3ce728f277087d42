"""Library service: the single entry point for lending operations.

The service owns the loan and penalty ledgers and is the only component that
changes a copy's status or a loan's state. Each public operation runs under one
re-entrant lock per service instance, so the read-check-then-write sequence of
a checkout or return never interleaves with another operation.

All dates are supplied by the caller; nothing here reads the wall clock.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from datetime import date

from biblion.domain import errors, events
from biblion.domain.models import Copy, Loan, Penalty
from biblion.domain.value_objects import CopyStatus, LendingPolicy, Patron
from biblion.interfaces.id_generator import IdGenerator
from biblion.interfaces.ledgers import LoanLedger, PenaltyLedger

logger = logging.getLogger(__name__)

LATE_RETURN_REASON = "late return by {days} days"
DAMAGED_RETURN_REASON = "damaged copy, late by {days} days"


class LibraryService:
    """Orchestrates checkouts, returns and eligibility queries.

    Args:
        loans: Ledger receiving every loan created by the service.
        penalties: Ledger receiving every penalty issued by the service.
        id_generator: Source of loan identifiers.
        policy: Lending rules (loan period and active-loan limit).
    """

    def __init__(
        self,
        loans: LoanLedger,
        penalties: PenaltyLedger,
        id_generator: IdGenerator,
        policy: LendingPolicy | None = None,
    ) -> None:
        self._loans = loans
        self._penalties = penalties
        self._id_generator = id_generator
        self.policy = policy or LendingPolicy()
        self._damaged: list[Copy] = []
        self._events: list[events.DomainEvent] = []
        self._lock = threading.RLock()

    # --- Checkout ---

    def borrow(self, patron: Patron, copy: Copy, on: date) -> Loan:
        """Check a copy out to a patron.

        Args:
            patron: The borrowing patron.
            copy: The copy being borrowed.
            on: The checkout date; the due date is derived from it.

        Returns:
            The new active loan.

        Raises:
            CopyUnavailableError: If the copy is loaned or damaged.
            PatronBlockedError: If the patron has a penalty covering ``on``.
            LoanLimitExceededError: If the patron already holds the maximum
                number of active loans.
        """
        with self._lock:
            try:
                self._check_can_borrow(patron, copy, on)
            except errors.DomainError as exc:
                logger.info("Borrow rejected: %s", exc)
                raise

            loan = Loan(
                self._id_generator.new_id(),
                patron,
                copy,
                on,
                loan_period_days=self.policy.loan_period_days,
            )
            copy.status = CopyStatus.LOANED
            self._loans.add(loan)
            self._events.append(
                events.CopyBorrowed(
                    loan_id=loan.loan_id,
                    patron_id=patron.patron_id,
                    copy_id=copy.copy_id,
                    on=on.isoformat(),
                    due=loan.due_date.isoformat(),
                )
            )
            logger.info(
                "Copy %s borrowed by %s on %s (due %s)",
                copy.copy_id,
                patron.patron_id,
                on.isoformat(),
                loan.due_date.isoformat(),
            )
            return loan

    def _check_can_borrow(self, patron: Patron, copy: Copy, on: date) -> None:
        if copy.status is not CopyStatus.AVAILABLE:
            raise errors.CopyUnavailableError(copy.copy_id, copy.status)
        if self.is_blocked(patron, on):
            raise errors.PatronBlockedError(patron.name)
        limit = self.policy.max_active_loans
        if len(self._loans.active_for_patron(patron.patron_id)) >= limit:
            raise errors.LoanLimitExceededError(patron.name, limit)

    # --- Returns ---

    def return_copy(self, patron: Patron, copy: Copy, on: date) -> Loan:
        """Record the return of a copy in good condition.

        The copy becomes available again. A late return issues a penalty whose
        duration equals the number of overdue days.

        Raises:
            NoActiveLoanError: If the patron holds no active loan for the copy.
        """
        with self._lock:
            loan = self._close_loan(patron, copy, on, CopyStatus.AVAILABLE)
            overdue = loan.overdue_days(on)
            self._events.append(
                events.CopyReturned(
                    loan_id=loan.loan_id,
                    patron_id=patron.patron_id,
                    copy_id=copy.copy_id,
                    on=on.isoformat(),
                    overdue_days=overdue,
                )
            )
            logger.info(
                "Copy %s returned by %s on %s", copy.copy_id, patron.patron_id, on
            )
            if overdue > 0:
                self._issue_penalty(
                    patron, on, overdue, LATE_RETURN_REASON.format(days=overdue)
                )
            return loan

    def return_damaged(self, patron: Patron, copy: Copy, on: date) -> Loan:
        """Record the return of a damaged copy.

        The copy is withdrawn from circulation for good: its status becomes
        damaged and every later borrow of it fails. Lateness is penalized as for
        a normal return.

        Raises:
            NoActiveLoanError: If the patron holds no active loan for the copy.
        """
        with self._lock:
            loan = self._close_loan(patron, copy, on, CopyStatus.DAMAGED)
            self._damaged.append(copy)
            overdue = loan.overdue_days(on)
            self._events.append(
                events.CopyReturnedDamaged(
                    loan_id=loan.loan_id,
                    patron_id=patron.patron_id,
                    copy_id=copy.copy_id,
                    on=on.isoformat(),
                    overdue_days=overdue,
                )
            )
            logger.info(
                "Copy %s returned damaged by %s on %s; withdrawn from circulation",
                copy.copy_id,
                patron.patron_id,
                on,
            )
            if overdue > 0:
                self._issue_penalty(
                    patron, on, overdue, DAMAGED_RETURN_REASON.format(days=overdue)
                )
            return loan

    def _close_loan(
        self, patron: Patron, copy: Copy, on: date, status: CopyStatus
    ) -> Loan:
        loan = self._loans.find_active(patron.patron_id, copy.copy_id)
        if loan is None:
            exc = errors.NoActiveLoanError(patron.name, copy.copy_id)
            logger.info("Return rejected: %s", exc)
            raise exc
        loan.complete(on)
        copy.status = status
        return loan

    def _issue_penalty(
        self, patron: Patron, on: date, duration_days: int, reason: str
    ) -> None:
        penalty = Penalty(
            patron=patron, start_date=on, duration_days=duration_days, reason=reason
        )
        self._penalties.add(penalty)
        self._events.append(
            events.PenaltyIssued(
                patron_id=patron.patron_id,
                start_date=on.isoformat(),
                duration_days=duration_days,
                reason=reason,
            )
        )
        logger.info(
            "Penalty issued to %s: %s (blocked through %s)",
            patron.patron_id,
            reason,
            penalty.ends_on,
        )

    # --- Queries ---

    def is_blocked(self, patron: Patron, on: date) -> bool:
        """True if any of the patron's penalties still covers ``on``."""
        with self._lock:
            return any(
                penalty.covers(on)
                for penalty in self._penalties.for_patron(patron.patron_id)
            )

    def blocked_until(self, patron: Patron, on: date) -> date | None:
        """Return the last blocked day for the patron as seen from ``on``.

        Returns:
            The latest end date among penalties covering ``on``, or None when
            the patron is free to borrow.
        """
        with self._lock:
            ends = [
                penalty.ends_on
                for penalty in self._penalties.for_patron(patron.patron_id)
                if penalty.covers(on)
            ]
            return max(ends, default=None)

    def active_loans(self, patron: Patron) -> Sequence[Loan]:
        """Return the loans the patron currently holds."""
        with self._lock:
            return self._loans.active_for_patron(patron.patron_id)

    def penalties_for(self, patron: Patron) -> Sequence[Penalty]:
        """Return every penalty issued to the patron."""
        with self._lock:
            return self._penalties.for_patron(patron.patron_id)

    @property
    def loans(self) -> Sequence[Loan]:
        """Every loan recorded by the service, in checkout order."""
        with self._lock:
            return self._loans.list()

    @property
    def penalties(self) -> Sequence[Penalty]:
        """Every penalty issued by the service, in issue order."""
        with self._lock:
            return self._penalties.list()

    @property
    def damaged_copies(self) -> tuple[Copy, ...]:
        """Copies returned damaged, in the order they came back."""
        with self._lock:
            return tuple(self._damaged)

    # --- Plumbing ---

    def dequeue_events(self) -> list[events.DomainEvent]:
        """Dequeue all events recorded since the last call to this method."""
        with self._lock:
            recorded = self._events
            self._events = []
            return recorded
