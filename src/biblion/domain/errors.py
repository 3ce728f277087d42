"""Domain-layer error definitions."""

from biblion.domain.value_objects import CopyStatus

# ============================================================================
#                           General domain errors
# ============================================================================


class DomainError(Exception):
    """Base class for domain-layer errors."""


class InvalidTransitionError(DomainError):
    """Raised when an entity is in an invalid state for the attempted action."""


class LoanAlreadyCompletedError(InvalidTransitionError):
    """Raised when completing a loan that has already been returned."""

    def __init__(self, loan_id: str) -> None:
        super().__init__(f"Loan {loan_id} has already been completed.")
        self.loan_id = loan_id


# ============================================================================
#                           Checkout errors
# ============================================================================


class CopyUnavailableError(DomainError):
    """Raised when borrowing a copy whose status is not available."""

    def __init__(self, copy_id: str, status: CopyStatus) -> None:
        super().__init__(
            f"Copy {copy_id} is not available. Current status: {status.value}."
        )
        self.copy_id = copy_id
        self.status = status


class PatronBlockedError(DomainError):
    """Raised when a patron with an open penalty window tries to borrow."""

    def __init__(self, patron_name: str) -> None:
        super().__init__(f"Patron {patron_name} is blocked and cannot borrow.")
        self.patron_name = patron_name


class LoanLimitExceededError(DomainError):
    """Raised when a patron already holds the maximum number of active loans."""

    def __init__(self, patron_name: str, limit: int) -> None:
        super().__init__(
            f"Patron {patron_name} already has the maximum of {limit} active loans."
        )
        self.patron_name = patron_name
        self.limit = limit


# ============================================================================
#                           Return errors
# ============================================================================


class NoActiveLoanError(DomainError):
    """Raised when returning a copy the patron does not currently hold."""

    def __init__(self, patron_name: str, copy_id: str) -> None:
        super().__init__(
            f"No active loan found for {patron_name} and copy {copy_id}."
        )
        self.patron_name = patron_name
        self.copy_id = copy_id


# Short kinds of the errors raised by checkouts and returns
LENDING_ERROR_KINDS: dict[type[DomainError], str] = {
    CopyUnavailableError: "CopyUnavailable",
    PatronBlockedError: "PatronBlocked",
    LoanLimitExceededError: "LoanLimitExceeded",
    NoActiveLoanError: "NoActiveLoan",
}

# All short kinds, for display
ERROR_KINDS: dict[type[DomainError], str] = {
    **LENDING_ERROR_KINDS,
    LoanAlreadyCompletedError: "LoanAlreadyCompleted",
}


def error_kind(error: DomainError) -> str:
    """Return the short kind name of a domain error (e.g. ``"PatronBlocked"``)."""
    return ERROR_KINDS.get(type(error), type(error).__name__)
