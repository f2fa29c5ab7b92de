"""contextgate exception hierarchy.

All contextgate-specific exceptions inherit from ContextGateError.
A failing verdict is not an exception; only broken call contracts are.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from contextgate.models.verdict import Verdict


class ContextGateError(Exception):
    """Base exception for all contextgate errors."""


class InvalidInputError(ContextGateError):
    """Raised when a pack argument is absent or not pack-shaped.

    Callers own the existence of both packs; the verifier refuses to
    invent a verdict for a missing one.
    """

    def __init__(self, role: str, value: object, detail: str | None = None) -> None:
        self.role = role
        self.value = value
        self.detail = detail
        if detail is not None:
            msg = f"has malformed entries: {detail}"
        elif value is None:
            msg = "is None"
        else:
            msg = f"is not a context pack (got {type(value).__name__})"
        super().__init__(f"Invalid input: '{role}' pack {msg}")


class ConfigError(ContextGateError):
    """Raised when gate configuration values are invalid."""


class RetryExhaustedError(ContextGateError):
    """All compression attempts were rejected by the fidelity gate."""

    def __init__(
        self,
        attempts: int,
        last_diagnosis: str,
        last_verdict: Verdict | None = None,
    ) -> None:
        self.attempts = attempts
        self.last_diagnosis = last_diagnosis
        self.last_verdict = last_verdict
        super().__init__(
            f"All {attempts} compression attempts rejected. "
            f"Last diagnosis: {last_diagnosis}"
        )
