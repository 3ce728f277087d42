"""Logging setup for the BIBLION CLI.

Two sinks are configured by the ``biblion`` command:

- the console, a Rich handler on stderr whose threshold follows ``-v``/``-q``;
- the flight recorder, a memory buffer of DEBUG records that is written to
  ``--log-path`` when a WARNING (a replay step that missed its expectation,
  for instance) is logged, or on exit with ``--force-flush``.

Records are tagged with the number of the scenario step being replayed (see
`replay_step`), so a dumped flight recorder reads as a per-step trace of the
lending decisions.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from importlib.metadata import PackageNotFoundError, version
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

from rich.console import Console
from rich.logging import RichHandler

from biblion import config

if TYPE_CHECKING:
    from logging import Logger

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "biblion"
NO_STEP = "-"

CONSOLE_FORMAT = "%(prefix)s%(message)s"
DEBUG_CONSOLE_FORMAT = "%(asctime)s %(name)s [step %(step)s]: %(message)s"
RECORDER_FORMAT = (
    "[%(asctime)s] [step %(step)s] %(levelname)s %(name)s:%(lineno)d: %(message)s"
)

_current_step: ContextVar[str] = ContextVar("biblion_replay_step", default=NO_STEP)


@contextmanager
def replay_step(number: int) -> Iterator[None]:
    """Tag every record logged inside the block with a scenario step number."""
    token = _current_step.set(str(number))
    try:
        yield
    finally:
        _current_step.reset(token)


def current_step() -> str:
    """Return the step number being replayed, or "-" outside a replay."""
    return _current_step.get()


class RecordContextFilter(logging.Filter):
    """Attach the ``prefix`` and ``step`` attributes used by BIBLION formats.

    ``prefix`` is a bracketed top-level package name ("[click_extra] ") for
    records coming from other libraries and empty for BIBLION's own loggers.
    ``step`` is the current replay step (see `replay_step`).
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith(PROJECT_PREFIX):
            record.prefix = ""
        else:
            # "click_extra.colorize" -> "[click_extra] "
            record.prefix = f"[{record.name.split('.')[0]}] "
        record.step = current_step()
        return True


def config_console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Configure and return the Rich console handler.

    Args:
        level: Minimum level shown on the console (forced to DEBUG in debug mode).
        debug_mode: Show timestamps, logger names, step tags and source paths.
        color: Enable color output when True.

    Returns:
        RichHandler: Handler writing to stderr.
    """

    # Mirrors click-extra's --color / --no-color option
    ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]
    color_system: ColorSystem | None = "auto" if color else None

    console = Console(color_system=color_system, stderr=True)

    if debug_mode:
        level = logging.DEBUG

    handler = RichHandler(
        level=level,
        console=console,
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )

    # Rich renders level and path itself; the format only covers the message
    handler.setFormatter(
        logging.Formatter(fmt=DEBUG_CONSOLE_FORMAT if debug_mode else CONSOLE_FORMAT)
    )
    handler.addFilter(RecordContextFilter())

    return handler


def config_flight_recorder(
    path: Path,
    capacity: int = 2000,
    flush_level: int = logging.WARNING,
    flush_on_close: bool = False,
) -> MemoryHandler:
    """Configure the in-memory flight recorder.

    Up to `capacity` records are buffered and written to `path` when a record
    at `flush_level` or above arrives, or on close when `flush_on_close` is
    set. The file is truncated when the handler is created.

    Returns:
        MemoryHandler: The buffering handler; its target writes `path`.
    """

    file_handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(RECORDER_FORMAT))

    recorder = MemoryHandler(
        capacity=capacity,
        flushLevel=flush_level,
        target=file_handler,
        flushOnClose=flush_on_close,
    )
    # The step is read when the record is buffered, not when it is written
    recorder.addFilter(RecordContextFilter())
    return recorder


def _dist_version(name: str) -> str:
    try:
        return version(name)
    except PackageNotFoundError:  # pragma: no cover
        return "<not installed>"


def _describe_policy() -> str:
    try:
        policy = config.get_policy()
    except config.InvalidPolicySettingError as e:
        return f"<invalid: {e}>"
    return (
        f"loan_period_days={policy.loan_period_days}, "
        f"max_active_loans={policy.max_active_loans}"
    )


def log_startup(
    logger: Logger,
    *,
    app_version: str,
    level: int,
    handlers: list[logging.Handler],
    log_path: Path | None = None,
    flight_capacity: int | None = None,
    flush_on_close: bool = False,
    logger_levels: dict[str, int] | None = None,
) -> None:
    """Log a one-line INFO banner followed by DEBUG diagnostics.

    The diagnostics cover the interpreter, the libraries the CLI is built on,
    the active handlers, the flight recorder (when `flight_capacity` is set),
    per-logger level overrides, and the lending policy read from the
    environment. An invalid policy setting is reported here and raised later
    by the command that needs it.
    """
    logger.info(
        "BIBLION %s - console=%s, flight-recorder=%s",
        app_version,
        logging.getLevelName(level),
        "ON" if flight_capacity is not None else "OFF",
    )

    # Environment
    logger.debug("Python: %s", sys.version.split()[0])
    logger.debug("Platform: %s %s", platform.system(), platform.release())
    logger.debug("PID: %s", os.getpid())
    logger.debug("CWD: %s", Path.cwd())
    for dist in ("click", "click-extra", "rich", "pydantic"):
        logger.debug("%s: %s", dist.title(), _dist_version(dist))

    # Logging setup
    logger.debug("Handlers: %s", [type(h).__name__ for h in handlers])
    if flight_capacity is not None:
        logger.debug(
            "Flight recorder: path=%s, capacity=%s, flush_on_close=%s",
            log_path if log_path else "<none>",
            flight_capacity,
            flush_on_close,
        )
    overrides = {
        name: logging.getLevelName(lvl) for name, lvl in (logger_levels or {}).items()
    }
    logger.debug("Per-logger overrides: %s", overrides or "<none>")

    # Domain settings
    logger.debug("Lending policy: %s", _describe_policy())
