"""BIBLION replay command.

Runs a lending scenario (see `biblion.entrypoints.cli.scenario`) against a
fresh in-memory library and prints one transcript line per step to stdout.

Behavior
- Each step is dispatched through the message bus; domain errors are reported
  as the step's outcome rather than aborting the replay.
- A step "matches" when its outcome agrees with its expectation
  (``expect_error`` / ``expect_blocked``; success when neither is given).
- Each mismatch is logged as a WARNING tagged with its step number.
- Exit status is 1 when any step does not match, 0 otherwise.

Failure modes
- Unreadable or malformed scenario → ``ClickException``.
- Invalid ``BIBLION_LOAN_PERIOD_DAYS`` / ``BIBLION_MAX_ACTIVE_LOANS`` → ``ClickException``.
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from pathlib import Path
from typing import TYPE_CHECKING

import click

from biblion import config
from biblion.bootstrap import ID_GENERATOR_KINDS, bootstrap, build_id_generator
from biblion.domain.errors import DomainError, error_kind
from biblion.logging import replay_step
from biblion.service_layer import commands

from .helpers import error, success, warn
from .scenario import Action, ScenarioError, Step, load_scenario

if TYPE_CHECKING:
    from biblion.bootstrap import AppContainer

logger = logging.getLogger(__name__)

STEP_COMMANDS: dict[Action, type[commands.Command]] = {
    Action.BORROW: commands.BorrowCopy,
    Action.RETURN: commands.ReturnCopy,
    Action.RETURN_DAMAGED: commands.ReturnDamagedCopy,
}


def describe(step: Step) -> str:
    """Return a one-line human description of a step."""
    target = f" {step.copy.copy_id}" if step.copy is not None else ""
    return f"{step.action.value} {step.patron.patron_id}{target} @ {step.on.isoformat()}"


def expected_outcome(step: Step) -> str:
    """Return the outcome a step expects, in transcript terms."""
    if step.action is Action.CHECK_BLOCKED:
        return "blocked" if step.expect_blocked else "not blocked"
    return step.expect_error or "ok"


def run_step(app: AppContainer, step: Step) -> tuple[str, bool]:
    """Run a single step against the application.

    Returns:
        A pair of the outcome text and whether it matched the expectation.
    """
    if step.action is Action.CHECK_BLOCKED:
        until = app.library.blocked_until(step.patron, step.on)
        blocked = until is not None
        outcome = f"blocked through {until.isoformat()}" if until else "not blocked"
        return outcome, step.expect_blocked is None or step.expect_blocked == blocked

    cmd = STEP_COMMANDS[step.action](patron=step.patron, copy=step.copy, on=step.on)
    try:
        app.message_bus.handle(cmd)
    except DomainError as exc:
        kind = error_kind(exc)
        return f"{kind}: {exc}", kind == step.expect_error
    return "ok", step.expect_error is None


@click.command()
@click.argument(
    "scenario_path",
    metavar="SCENARIO",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--fail-fast/--keep-going",
    default=False,
    show_default=True,
    help="Stop at the first step whose outcome does not match its expectation.",
)
@click.option(
    "--show-events",
    is_flag=True,
    default=False,
    help="Print the domain events recorded during the replay.",
)
@click.option(
    "--ids",
    "id_kind",
    type=click.Choice(ID_GENERATOR_KINDS, case_sensitive=False),
    default="sequential",
    show_default=True,
    help="Loan ID scheme: deterministic sequential IDs or monotonic ULIDs.",
)
@click.pass_context
def replay(
    ctx: click.Context,
    scenario_path: Path,
    fail_fast: bool,
    show_events: bool,
    id_kind: str,
) -> None:
    """Replay a lending scenario file and check each step's outcome."""
    try:
        scenario = load_scenario(scenario_path)
    except ScenarioError as e:
        raise click.ClickException(str(e)) from e
    try:
        policy = config.get_policy()
    except config.InvalidPolicySettingError as e:
        raise click.ClickException(str(e)) from e

    logger.info(
        "Replaying %s: %d copies, %d patrons, %d steps",
        scenario_path,
        len(scenario.copies),
        len(scenario.patrons),
        len(scenario.steps),
    )
    logger.debug("Loan IDs: %s", id_kind.lower())
    app = bootstrap(policy=policy, id_generator=build_id_generator(id_kind.lower()))

    mismatches = 0
    for step in scenario.steps:
        with replay_step(step.number):
            outcome, matched = run_step(app, step)
            click.echo(f"{step.number:>3}. {describe(step)} -> {outcome}")
            if not matched:
                # WARNING also dumps the flight recorder
                logger.warning(
                    "Step %d did not match: expected %s, got %s",
                    step.number,
                    expected_outcome(step),
                    outcome,
                )
        if not matched:
            mismatches += 1
            if fail_fast:
                warn(f"Stopped after step {step.number} (--fail-fast).")
                break

    if show_events:
        for event in app.library.dequeue_events():
            click.echo(f"     {type(event).__name__} {asdict(event)}")

    if mismatches:
        error(f"{mismatches} step(s) did not match their expected outcome.")
        ctx.exit(1)
    success(f"Replayed {len(scenario.steps)} step(s); all outcomes matched.")
