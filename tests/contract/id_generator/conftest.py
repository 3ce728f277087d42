"""Fixtures for id_generator contract tests."""

from collections.abc import Iterable

import pytest

from biblion.adapters.id_generators import SimpleIdGenerator, ULIDGenerator
from biblion.interfaces.id_generator import IdGenerator


@pytest.fixture(params=["ulid", "simple"])
def id_generator(
    request: pytest.FixtureRequest,
) -> Iterable[IdGenerator]:
    """Return a fresh IdGenerator instance for the requested backend.

    Supported params:
      - `"ulid"` → ULIDGenerator
      - `"simple"` → SimpleIdGenerator
    """

    match request.param:
        case "ulid":
            yield ULIDGenerator()
        case "simple":
            yield SimpleIdGenerator()
        case _:
            raise ValueError(f"unknown id generator type: {request.param}")


@pytest.fixture(params=["ulid", "simple"])
def monotonic_id_generators(request: pytest.FixtureRequest) -> Iterable[IdGenerator]:
    """Yield instances of IdGenerators that promise monotonic ID order."""
    match request.param:
        case "ulid":
            yield ULIDGenerator()
        case "simple":
            # zero padding keeps lexicographic order up to 10**length ids
            yield SimpleIdGenerator(prefix="L", length=8)
        case _:
            raise ValueError(f"unknown monotonic id generator type: {request.param}")
