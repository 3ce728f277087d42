"""Module defining Commands."""

from dataclasses import dataclass
from datetime import date

from biblion.domain.models import Copy
from biblion.domain.value_objects import Patron


@dataclass(frozen=True)
class Command:
    """Base class for all commands."""


@dataclass(frozen=True)
class BorrowCopy(Command):
    """Command to check a copy out to a patron."""

    patron: Patron
    copy: Copy
    on: date


@dataclass(frozen=True)
class ReturnCopy(Command):
    """Command to record the return of a copy in good condition."""

    patron: Patron
    copy: Copy
    on: date


@dataclass(frozen=True)
class ReturnDamagedCopy(Command):
    """Command to record the return of a damaged copy."""

    patron: Patron
    copy: Copy
    on: date
