"""Fixtures for ledger contract tests."""

from collections.abc import Iterable

import pytest

from biblion.adapters.ledgers import InMemoryLoanLedger, InMemoryPenaltyLedger
from biblion.interfaces.ledgers import LoanLedger, PenaltyLedger


@pytest.fixture(params=["memory"])
def loan_ledger(request: pytest.FixtureRequest) -> Iterable[LoanLedger]:
    """Yield a fresh, empty LoanLedger for the requested backend.

    Extend by adding new identifiers to `params` and branching below.
    """
    match request.param:
        case "memory":
            yield InMemoryLoanLedger()
        case _:
            raise ValueError(f"unknown loan ledger type: {request.param}")


@pytest.fixture(params=["memory"])
def penalty_ledger(request: pytest.FixtureRequest) -> Iterable[PenaltyLedger]:
    """Yield a fresh, empty PenaltyLedger for the requested backend."""
    match request.param:
        case "memory":
            yield InMemoryPenaltyLedger()
        case _:
            raise ValueError(f"unknown penalty ledger type: {request.param}")
