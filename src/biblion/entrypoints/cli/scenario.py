"""Lending scenario files for the ``biblion replay`` command.

A scenario is a JSON document describing a small library (books, copies and
patrons) and an ordered list of dated steps to run against it::

    {
      "books": {"lotr": {"title": "...", "author": "...", "publisher": "...",
                         "genre": "...", "year": 1954}},
      "copies": [{"id": "EXP001", "book": "lotr"}],
      "patrons": [{"id": "USER001", "name": "Ana"}],
      "steps": [
        {"action": "borrow", "patron": "USER001", "copy": "EXP001",
         "date": "2025-01-01"},
        {"action": "return", "patron": "USER001", "copy": "EXP001",
         "date": "2025-01-20"},
        {"action": "check_blocked", "patron": "USER001", "date": "2025-01-22",
         "expect_blocked": true}
      ]
    }

Steps may name the domain error they expect with ``expect_error`` (one of
CopyUnavailable, PatronBlocked, LoanLimitExceeded, NoActiveLoan); a step
without it is expected to succeed.

Parsing happens in two passes. The document's shape (types, required fields,
dates, actions) is checked by the pydantic models below; references between
sections (a copy's book, a step's patron and copy) and duplicate identifiers
are then resolved while building the domain objects. Both passes report
problems as `ScenarioError` with the location of the offending entry.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    ValidationError,
    field_validator,
    model_validator,
)

from biblion.domain.errors import LENDING_ERROR_KINDS
from biblion.domain.models import Copy
from biblion.domain.value_objects import Book, Patron

# pylint: disable=too-few-public-methods

EXPECTABLE_ERRORS = frozenset(LENDING_ERROR_KINDS.values())


class Action(Enum):
    """Enumeration of the step kinds a scenario can contain."""

    BORROW = "borrow"
    RETURN = "return"
    RETURN_DAMAGED = "return_damaged"
    CHECK_BLOCKED = "check_blocked"


class ScenarioError(ValueError):
    """Raised when a scenario file cannot be read or is malformed."""


# ============================================================================
#                       Document schema
# ============================================================================


class BookEntry(BaseModel):
    """A bibliographic record under the ``books`` key."""

    title: str = Field(..., description="Book title")
    author: str = Field(..., description="Book author")
    publisher: str = Field("", description="Publisher name")
    genre: str = Field("", description="Free-form genre")
    year: int = Field(0, description="Publication year")


class CopyEntry(BaseModel):
    """A physical copy, pointing at a key of ``books``."""

    id: str = Field(..., min_length=1, description="Copy identifier")
    book: str = Field(..., description="Key of the copy's book")


class PatronEntry(BaseModel):
    """A registered patron."""

    id: str = Field(..., min_length=1, description="Patron identifier")
    name: str = Field(..., description="Name shown in messages")


class StepEntry(BaseModel):
    """A dated action plus its optional expectation."""

    model_config = ConfigDict(populate_by_name=True)

    action: Action = Field(..., description="What the step does")
    patron: str = Field(..., description="Acting patron's identifier")
    copy_id: Optional[str] = Field(None, alias="copy", description="Target copy")
    on: date = Field(..., alias="date", description="ISO date of the step")
    expect_error: Optional[str] = Field(None, description="Expected error kind")
    expect_blocked: Optional[StrictBool] = Field(
        None, description="Expected check_blocked answer"
    )

    @field_validator("expect_error")
    @classmethod
    def validate_expect_error(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v not in EXPECTABLE_ERRORS:
            raise ValueError(
                f"unknown error kind {v!r}; expected one of {sorted(EXPECTABLE_ERRORS)}"
            )
        return v

    @model_validator(mode="after")
    def validate_copy_presence(self) -> StepEntry:
        if self.action is not Action.CHECK_BLOCKED and self.copy_id is None:
            raise ValueError("missing required field 'copy'")
        return self


class ScenarioDocument(BaseModel):
    """The whole scenario file."""

    books: dict[str, BookEntry] = Field(default_factory=dict)
    copies: list[CopyEntry] = Field(default_factory=list)
    patrons: list[PatronEntry] = Field(default_factory=list)
    steps: list[StepEntry] = Field(default_factory=list)


# Shape errors reworded in terms of the JSON document
_TYPE_MESSAGES = {
    "model_type": "expected a JSON object",
    "dict_type": "expected a JSON object",
    "list_type": "expected a JSON array",
}

# Top-level sections whose entries are reported by key or position
_SECTION_LABELS = {"books": "book", "copies": "copy", "patrons": "patron", "steps": "step"}


def _location(loc: tuple[int | str, ...]) -> tuple[str, str]:
    """Split a pydantic error location into (entry label, field path)."""
    if len(loc) >= 2 and loc[0] in _SECTION_LABELS:
        label = _SECTION_LABELS[str(loc[0])]
        key = loc[1]
        where = f"{label} {key + 1}" if isinstance(key, int) else f"{label} '{key}'"
        rest = loc[2:]
    else:
        where, rest = "scenario", loc
    return where, ".".join(str(part) for part in rest)


def _describe_validation_error(exc: ValidationError) -> str:
    messages = []
    for err in exc.errors():
        where, field_path = _location(tuple(err["loc"]))
        if err["type"] == "missing":
            messages.append(f"{where}: missing required field '{field_path}'")
            continue
        # validator errors carry the raised ValueError; keep its text as is
        if err["type"] == "value_error":
            detail = str(err["ctx"]["error"])
        else:
            detail = _TYPE_MESSAGES.get(err["type"], err["msg"])
        if field_path:
            messages.append(f"{where}: invalid '{field_path}' ({detail})")
        else:
            messages.append(f"{where}: {detail}")
    return "; ".join(messages)


# ============================================================================
#                       Resolved scenario
# ============================================================================


@dataclass(frozen=True)
class Step:
    """A single dated action of a scenario."""

    number: int
    action: Action
    patron: Patron
    on: date
    copy: Copy | None = None
    expect_error: str | None = None
    expect_blocked: bool | None = None


@dataclass
class Scenario:
    """A parsed scenario: the catalog plus the steps to replay against it."""

    copies: dict[str, Copy] = field(default_factory=dict)
    patrons: dict[str, Patron] = field(default_factory=dict)
    steps: list[Step] = field(default_factory=list)


def _resolve_step(number: int, entry: StepEntry, scenario: Scenario) -> Step:
    where = f"step {number}"
    if entry.patron not in scenario.patrons:
        raise ScenarioError(f"{where}: unknown patron '{entry.patron}'")
    copy = None
    if entry.copy_id is not None:
        if entry.copy_id not in scenario.copies:
            raise ScenarioError(f"{where}: unknown copy '{entry.copy_id}'")
        copy = scenario.copies[entry.copy_id]
    return Step(
        number=number,
        action=entry.action,
        patron=scenario.patrons[entry.patron],
        on=entry.on,
        copy=copy,
        expect_error=entry.expect_error,
        expect_blocked=entry.expect_blocked,
    )


def parse_scenario(data: Any) -> Scenario:
    """Build a Scenario from an already decoded JSON document.

    Raises:
        ScenarioError: On a malformed document, unknown references or
            duplicate identifiers.
    """
    try:
        document = ScenarioDocument.model_validate(data)
    except ValidationError as e:
        raise ScenarioError(_describe_validation_error(e)) from e

    books = {
        key: Book(
            title=entry.title,
            author=entry.author,
            publisher=entry.publisher,
            genre=entry.genre,
            year=entry.year,
        )
        for key, entry in document.books.items()
    }
    scenario = Scenario()

    for entry in document.copies:
        if entry.book not in books:
            raise ScenarioError(f"copy '{entry.id}': unknown book '{entry.book}'")
        if entry.id in scenario.copies:
            raise ScenarioError(f"copy '{entry.id}': duplicate identifier")
        scenario.copies[entry.id] = Copy(entry.id, books[entry.book])

    for entry in document.patrons:
        if entry.id in scenario.patrons:
            raise ScenarioError(f"patron '{entry.id}': duplicate identifier")
        scenario.patrons[entry.id] = Patron(patron_id=entry.id, name=entry.name)

    scenario.steps = [
        _resolve_step(number, entry, scenario)
        for number, entry in enumerate(document.steps, start=1)
    ]
    return scenario


def load_scenario(path: Path) -> Scenario:
    """Read and parse a scenario file.

    Raises:
        ScenarioError: If the file cannot be read, is not UTF-8 encoded JSON,
            or is malformed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ScenarioError(f"{path}: not a UTF-8 text file") from e
    except OSError as e:
        raise ScenarioError(f"{path}: cannot read file ({e.strerror or e})") from e
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ScenarioError(f"{path}: invalid JSON ({e.msg} at line {e.lineno})") from e
    return parse_scenario(data)
