"""Command dispatch for the lending service.

Every state change of the library (borrowing, returning, returning damaged)
enters the service layer as a command routed here. Rejections by the lending
rules are an expected outcome and are logged at INFO with their error kind;
anything else a handler raises is logged with its traceback.
"""

import logging
from collections.abc import Callable
from functools import partial

from biblion.domain.errors import DomainError, error_kind

from .commands import Command
from .library import LibraryService

logger = logging.getLogger(__name__)

# pylint: disable=too-few-public-methods

CommandHandler = Callable[..., None]


class NoHandlerForCommand(LookupError):
    """Raised when a command type has no registered handler."""

    def __init__(self, cmd: Command) -> None:
        super().__init__(f"No handler found for command {type(cmd).__name__}")


class MessageBus:
    """Routes lending commands to their handlers.

    Args:
        library: The LibraryService the handlers were built around, kept here
            so the caller can query the state the commands change.
        command_handlers: Command type to handler. Handlers take the command
            as their only argument; the library is bound beforehand (see
            `biblion.bootstrap`).
    """

    def __init__(
        self,
        library: LibraryService,
        command_handlers: dict[type[Command], CommandHandler],
    ) -> None:
        self.library = library
        self._command_handlers = command_handlers

    def handle(self, cmd: Command) -> None:
        """Run the handler registered for the command's type.

        Raises:
            NoHandlerForCommand: If the command type is not registered.
            DomainError: If the command breaks a lending rule.
        """
        handler = self._command_handlers.get(type(cmd))
        if handler is None:
            logger.error("No handler found for command %s", type(cmd).__name__)
            raise NoHandlerForCommand(cmd)

        handler_name = self._handler_name(handler)
        logger.debug("Handling command %s with handler %s", cmd, handler_name)
        try:
            handler(cmd)
        except DomainError as exc:
            logger.info(
                "Command %s rejected by %s (%s): %s",
                cmd,
                handler_name,
                error_kind(exc),
                exc,
            )
            raise
        except Exception:  # pylint: disable=broad-except
            logger.exception(
                "Exception handling command %s with handler %s", cmd, handler_name
            )
            raise

    @staticmethod
    def _handler_name(handler: CommandHandler) -> str:
        # handlers bound with functools.partial are named after the wrapped function
        target = handler.func if isinstance(handler, partial) else handler
        return getattr(target, "__name__", None) or repr(handler)
