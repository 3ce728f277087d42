"""Service layer handlers."""

import logging
from collections.abc import Callable

from . import commands
from .library import LibraryService

logger = logging.getLogger(__name__)

# ============================================================================
#                       Lending Handlers
# ============================================================================


def borrow_copy(cmd: commands.BorrowCopy, library: LibraryService) -> None:
    """Check a copy out to a patron."""
    loan = library.borrow(cmd.patron, cmd.copy, cmd.on)
    logger.debug("BorrowCopy %s: created loan %s", cmd.copy.copy_id, loan.loan_id)


def return_copy(cmd: commands.ReturnCopy, library: LibraryService) -> None:
    """Record the return of a copy in good condition."""
    loan = library.return_copy(cmd.patron, cmd.copy, cmd.on)
    logger.debug("ReturnCopy %s: completed loan %s", cmd.copy.copy_id, loan.loan_id)


def return_damaged_copy(
    cmd: commands.ReturnDamagedCopy, library: LibraryService
) -> None:
    """Record the return of a damaged copy."""
    loan = library.return_damaged(cmd.patron, cmd.copy, cmd.on)
    logger.debug(
        "ReturnDamagedCopy %s: completed loan %s", cmd.copy.copy_id, loan.loan_id
    )


# ============================================================================
#                       Handler Registry
# ============================================================================


COMMAND_HANDLERS: dict[type, Callable[..., None]] = {
    commands.BorrowCopy: borrow_copy,
    commands.ReturnCopy: return_copy,
    commands.ReturnDamagedCopy: return_damaged_copy,
}
