"""Bootstrap the message bus with handlers and the library service."""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from biblion import config
from biblion.adapters.id_generators import SimpleIdGenerator, ULIDGenerator
from biblion.adapters.ledgers import InMemoryLoanLedger, InMemoryPenaltyLedger
from biblion.service_layer.handlers import COMMAND_HANDLERS
from biblion.service_layer.library import LibraryService
from biblion.service_layer.messagebus import MessageBus

if TYPE_CHECKING:
    from biblion.domain.value_objects import LendingPolicy
    from biblion.interfaces.id_generator import IdGenerator
    from biblion.service_layer.commands import Command


ID_GENERATOR_KINDS = ("ulid", "sequential")


@dataclass(frozen=True)
class AppContainer:
    """A class to hold application wiring constants."""

    library: LibraryService
    message_bus: MessageBus


def build_id_generator(kind: str = "ulid") -> IdGenerator:
    """Build a loan ID generator by kind name (see ID_GENERATOR_KINDS)."""
    match kind:
        case "ulid":
            return ULIDGenerator()
        case "sequential":
            return SimpleIdGenerator(prefix="L")
        case _:
            raise ValueError(f"unknown id generator kind: {kind!r}")


def build_library(
    policy: LendingPolicy | None = None, id_generator: IdGenerator | None = None
) -> LibraryService:
    """Build a library service backed by fresh in-memory ledgers."""
    return LibraryService(
        loans=InMemoryLoanLedger(),
        penalties=InMemoryPenaltyLedger(),
        id_generator=id_generator or ULIDGenerator(),
        policy=policy,
    )


def build_message_bus(
    library: LibraryService,
    command_handlers: dict[type[Command], Callable[..., None]],
) -> MessageBus:
    """Build a message bus with injected dependencies."""
    dependencies = {"library": library}
    injected_command_handlers = {
        command_type: inject_dependencies(handler, dependencies)
        for command_type, handler in command_handlers.items()
    }

    return MessageBus(
        library,
        command_handlers=injected_command_handlers,
    )


def bootstrap(
    policy: LendingPolicy | None = None, id_generator: IdGenerator | None = None
) -> AppContainer:
    """Bootstrap the message bus with handlers and a library service.

    Args:
        policy: Lending rules; read from the environment when omitted.
        id_generator: Loan ID source; a ULID generator when omitted.
    """
    library = build_library(policy or config.get_policy(), id_generator)
    message_bus = build_message_bus(library, COMMAND_HANDLERS)

    return AppContainer(
        library=library,
        message_bus=message_bus,
    )


def inject_dependencies(
    handler: Callable, dependencies: Mapping[str, object]
) -> Callable:
    """Inject dependencies into a handler function based on its parameters."""
    params = inspect.signature(handler).parameters
    deps = {
        name: dependency for name, dependency in dependencies.items() if name in params
    }
    return functools.partial(handler, **deps)
