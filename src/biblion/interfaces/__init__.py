"""Outbound ports used by the service layer.

Re-exports the abstract ledgers and the ID generator contract so callers can
import them from a single path.
"""

from .id_generator import IdGenerator
from .ledgers import LoanLedger, PenaltyLedger

__all__ = ["IdGenerator", "LoanLedger", "PenaltyLedger"]
