"""Configuration utilities for BIBLION.

This module centralizes the environment-driven settings of the lending policy.
"""

import os
from collections.abc import Mapping

from biblion.domain.value_objects import (
    DEFAULT_LOAN_PERIOD_DAYS,
    DEFAULT_MAX_ACTIVE_LOANS,
    LendingPolicy,
)

__all__ = ["LendingPolicy", "InvalidPolicySettingError", "get_policy"]

LOAN_PERIOD_ENV = "BIBLION_LOAN_PERIOD_DAYS"  # pragma: no mutate
MAX_ACTIVE_LOANS_ENV = "BIBLION_MAX_ACTIVE_LOANS"  # pragma: no mutate


class InvalidPolicySettingError(ValueError):
    """Raised when a lending-policy environment variable is not a positive integer."""

    def __init__(self, name: str, value: str) -> None:
        super().__init__(f"{name} must be a positive integer, got {value!r}.")
        self.name = name
        self.value = value


def _positive_int(env: Mapping[str, str], name: str, default: int) -> int:
    if not (raw := env.get(name, "").strip()):
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise InvalidPolicySettingError(name, raw) from e
    if value <= 0:
        raise InvalidPolicySettingError(name, raw)
    return value


def get_policy(env: Mapping[str, str] | None = None) -> LendingPolicy:
    """Build the lending policy from the environment.

    Args:
        env: Mapping to read settings from. Defaults to `os.environ`.

    Returns:
        A `LendingPolicy` using `BIBLION_LOAN_PERIOD_DAYS` and
        `BIBLION_MAX_ACTIVE_LOANS` when set, the defaults (14 days, 3 loans)
        otherwise.

    Raises:
        InvalidPolicySettingError: If a variable is set to anything other than
            a positive integer.
    """
    env = os.environ if env is None else env
    return LendingPolicy(
        loan_period_days=_positive_int(
            env, LOAN_PERIOD_ENV, DEFAULT_LOAN_PERIOD_DAYS
        ),
        max_active_loans=_positive_int(
            env, MAX_ACTIVE_LOANS_ENV, DEFAULT_MAX_ACTIVE_LOANS
        ),
    )
