"""Interfaces for the loan and penalty ledgers.

Ledgers are append-only records owned by the library service. They store the
entities themselves; the service mutates loans in place when they complete.
"""

import abc
from collections.abc import Sequence

from biblion.domain.models import Loan, Penalty


class LoanLedger(abc.ABC):
    """Record of every loan, active and completed, in insertion order."""

    @abc.abstractmethod
    def add(self, loan: Loan) -> None:
        """Append a loan to the ledger.

        Args:
            loan (Loan): The newly created loan.
        """

    @abc.abstractmethod
    def find_active(self, patron_id: str, copy_id: str) -> Loan | None:
        """Find the active loan binding a patron to a copy.

        Args:
            patron_id (str): The patron's identifier.
            copy_id (str): The copy's identifier.

        Returns:
            Loan | None: The matching active loan if any, otherwise None.
        """

    @abc.abstractmethod
    def active_for_patron(self, patron_id: str) -> Sequence[Loan]:
        """Return the active loans held by a patron."""

    @abc.abstractmethod
    def list(self) -> Sequence[Loan]:
        """Return every loan in the ledger."""


class PenaltyLedger(abc.ABC):
    """Record of every penalty issued, in insertion order."""

    @abc.abstractmethod
    def add(self, penalty: Penalty) -> None:
        """Append a penalty to the ledger."""

    @abc.abstractmethod
    def for_patron(self, patron_id: str) -> Sequence[Penalty]:
        """Return the penalties issued to a patron."""

    @abc.abstractmethod
    def list(self) -> Sequence[Penalty]:
        """Return every penalty in the ledger."""
