"""Global pytest fixtures for BIBLION."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from biblion.adapters.id_generators import SimpleIdGenerator
from biblion.adapters.ledgers import InMemoryLoanLedger, InMemoryPenaltyLedger
from biblion.domain.models import Copy
from biblion.domain.value_objects import Book, Patron
from biblion.service_layer.library import LibraryService

# pylint: disable=unused-argument,redefined-outer-name

TESTS_ROOT = Path(__file__).parent.resolve()

# Folder name -> marker applied to every test collected below it
FOLDER_MARKERS = ("unit", "integration", "functional", "contract")


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Add the default folder marker (unit, integration, ...) to each item."""
    for item in items:
        path = item.path.resolve()  # pytest>=8: pathlib.Path
        try:
            folder = path.relative_to(TESTS_ROOT).parts[0]
        except (ValueError, IndexError):
            continue
        if folder not in FOLDER_MARKERS:
            continue
        if not any(marker.name == folder for marker in item.iter_markers()):
            item.add_marker(getattr(pytest.mark, folder))


# ============================================================================
#                               Data builders
# ============================================================================


@pytest.fixture
def book() -> Book:
    """A bibliographic record shared by the copies built in tests."""
    return Book(
        title="The Lord of the Rings",
        author="J.R.R. Tolkien",
        publisher="Allen & Unwin",
        genre="Fantasy",
        year=1954,
    )


@pytest.fixture
def make_copy(book: Book) -> Callable[..., Copy]:
    """Factory fixture: build copies with unique, readable identifiers."""
    counter = 0

    def _make_copy(copy_id: str | None = None, of: Book | None = None) -> Copy:
        nonlocal counter
        counter += 1
        return Copy(copy_id or f"EXP{counter:03d}", of or book)

    return _make_copy


@pytest.fixture
def patron() -> Patron:
    """The patron used by most tests."""
    return Patron(patron_id="USER001", name="Joana Silva")


@pytest.fixture
def other_patron() -> Patron:
    """A second patron, for tests involving two borrowers."""
    return Patron(patron_id="USER002", name="Mario Santos")


@pytest.fixture
def library() -> LibraryService:
    """A library service with empty ledgers and sequential loan IDs."""
    return LibraryService(
        loans=InMemoryLoanLedger(),
        penalties=InMemoryPenaltyLedger(),
        id_generator=SimpleIdGenerator(prefix="L"),
    )
