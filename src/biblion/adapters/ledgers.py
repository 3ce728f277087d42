"""In-memory implementations of the ledger interfaces."""

from biblion.domain.models import Loan, Penalty
from biblion.interfaces.ledgers import LoanLedger, PenaltyLedger


class InMemoryLoanLedger(LoanLedger):
    """In-memory implementation of the LoanLedger interface.

    Lookups are linear scans over the list of loans. Nothing is persisted.
    """

    def __init__(self) -> None:
        self._loans: list[Loan] = []

    def add(self, loan: Loan) -> None:
        self._loans.append(loan)

    def find_active(self, patron_id: str, copy_id: str) -> Loan | None:
        return next(
            (
                loan
                for loan in self._loans
                if loan.is_active
                and loan.patron.patron_id == patron_id
                and loan.copy.copy_id == copy_id
            ),
            None,
        )

    def active_for_patron(self, patron_id: str) -> tuple[Loan, ...]:
        return tuple(
            loan
            for loan in self._loans
            if loan.is_active and loan.patron.patron_id == patron_id
        )

    def list(self) -> tuple[Loan, ...]:
        return tuple(self._loans)


class InMemoryPenaltyLedger(PenaltyLedger):
    """In-memory implementation of the PenaltyLedger interface."""

    def __init__(self) -> None:
        self._penalties: list[Penalty] = []

    def add(self, penalty: Penalty) -> None:
        self._penalties.append(penalty)

    def for_patron(self, patron_id: str) -> tuple[Penalty, ...]:
        return tuple(p for p in self._penalties if p.patron.patron_id == patron_id)

    def list(self) -> tuple[Penalty, ...]:
        return tuple(self._penalties)
