"""
What the pipeline does when a transaction fetch fails transiently.

FailurePolicy is a tagged variant: SkipAndContinue or AbortAndReturnPartial.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

DEFAULT_COOLDOWN_SEC = 10.0
FAILURE_POLICY_NAMES = ("skip", "abort")


@dataclass(frozen=True)
class SkipAndContinue:
    """Wait cooldown_sec, then move on to the next signature. The failed one is not retried."""

    cooldown_sec: float = DEFAULT_COOLDOWN_SEC

    def __post_init__(self) -> None:
        if self.cooldown_sec < 0:
            raise ValueError("cooldown_sec must be >= 0")

    @property
    def name(self) -> str:
        return "skip"


@dataclass(frozen=True)
class AbortAndReturnPartial:
    """Stop the run at the failing signature and return what was accumulated before it."""

    @property
    def name(self) -> str:
        return "abort"


FailurePolicy = Union[SkipAndContinue, AbortAndReturnPartial]


def failure_policy_from_name(name: str, cooldown_sec: float = DEFAULT_COOLDOWN_SEC) -> FailurePolicy:
    """Build a policy from its configuration name ("skip" or "abort")."""
    key = (name or "").strip().lower()
    if key == "skip":
        return SkipAndContinue(cooldown_sec=cooldown_sec)
    if key == "abort":
        return AbortAndReturnPartial()
    raise ValueError(f"Unknown failure policy: {name!r}")
