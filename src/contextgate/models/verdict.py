"""Verdict model for the fidelity gate.

A Verdict keeps every diagnostic the gate computed, not just the boolean,
so retry logic can tell "not small enough" apart from "lost required
state" and react differently.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class ReasonCode(str, enum.Enum):
    """Stable machine-readable failure tokens.

    Declaration order is the order codes appear in a verdict.
    """

    CONSTRAINTS_LOST = "constraints_lost"
    PENDING_TODOS_LOST = "pending_todos_lost"
    EVIDENCE_REFS_LOST = "evidence_refs_lost"
    SAVING_BELOW_THRESHOLD = "saving_below_threshold"

    def __str__(self) -> str:
        return self.value


REASON_SEPARATOR = ","


@dataclass(frozen=True)
class Verdict:
    """Result of comparing a before/after context pack pair.

    Attributes:
        passed: Whether the compressed pack may replace the original.
        saving_ratio: ``(before_length - after_length) / before_length``.
            Negative when the pack grew; 0.0 when the original rendered
            to empty text.
        missing_constraints: An active constraint was dropped.
        missing_pending_todos: A pending todo id was dropped.
        missing_evidence_refs: An execution evidence span id was dropped.
        reason_codes: Failure tokens in fixed order; empty when passed.
        required_saving_ratio: The threshold actually applied, after the
            default was substituted for a non-positive request.
        before_length: Code-point length of the original's rendered text.
        after_length: Code-point length of the compressed pack's text.
    """

    passed: bool
    saving_ratio: float
    missing_constraints: bool
    missing_pending_todos: bool
    missing_evidence_refs: bool
    reason_codes: tuple[ReasonCode, ...] = ()
    required_saving_ratio: float = 0.0
    before_length: int = 0
    after_length: int = 0

    @property
    def reason(self) -> str:
        """Reason codes joined into one comma-delimited string."""
        return REASON_SEPARATOR.join(code.value for code in self.reason_codes)

    @property
    def lost_state(self) -> bool:
        """Whether any preservation check failed (as opposed to only the ratio)."""
        return (
            self.missing_constraints
            or self.missing_pending_todos
            or self.missing_evidence_refs
        )

    def as_validation(self) -> tuple[bool, str | None]:
        """Return ``(ok, diagnosis)``, the pair compress_with_feedback() records."""
        if self.passed:
            return True, None
        return False, self.reason

    def to_dict(self) -> dict:
        """Plain-JSON view, e.g. for structured logs."""
        return {
            "passed": self.passed,
            "saving_ratio": self.saving_ratio,
            "required_saving_ratio": self.required_saving_ratio,
            "missing_constraints": self.missing_constraints,
            "missing_pending_todos": self.missing_pending_todos,
            "missing_evidence_refs": self.missing_evidence_refs,
            "reason_codes": [code.value for code in self.reason_codes],
            "before_length": self.before_length,
            "after_length": self.after_length,
        }

    def __str__(self) -> str:
        if self.passed:
            return "passed"
        return f"failed: {self.reason}"

    def pprint(self) -> None:
        """Pretty-print this verdict using rich formatting."""
        from contextgate.formatting import pprint_verdict

        pprint_verdict(self)
