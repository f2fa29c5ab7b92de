"""Caller-side helpers that act on fidelity verdicts.

The verifier only judges. These helpers do what the agent loop does with
the judgement: keep the original pack on failure, stamp the compressed
pack on success, and optionally drive an external compressor through a
bounded number of attempts, handing it the previous verdict as feedback.

Flow of compress_with_feedback():
    1. after = compress(before, feedback)   (feedback is None at first)
    2. verdict = verify(before, after, ratio)
    3. If passed: return the accepted GateResult
    4. If attempts are used up: raise or return the rejection
    5. feedback = verdict; goto 1
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Optional

from contextgate.exceptions import RetryExhaustedError
from contextgate.models.config import GateConfig
from contextgate.models.pack import ContextPack
from contextgate.models.verdict import Verdict
from contextgate.verifier import verify

logger = logging.getLogger(__name__)

Compressor = Callable[[ContextPack, Optional[Verdict]], ContextPack]


@dataclass(frozen=True)
class GateResult:
    """Outcome of running a compressed pack through the gate.

    Attributes:
        pack: The pack the caller should continue with. The stamped
            compressed pack when accepted, the untouched original otherwise.
        accepted: Whether the compressed pack replaced the original.
        verdict: The verdict of the last attempt.
        attempts: Number of compression attempts made (1 for a single gate).
        history: Diagnoses of rejected attempts, or None if none were rejected.
    """

    pack: ContextPack
    accepted: bool
    verdict: Verdict
    attempts: int = 1
    history: list[str] | None = None

    def __repr__(self) -> str:
        status = "accepted" if self.accepted else "rejected"
        return (
            f"GateResult({status}, saving={self.verdict.saving_ratio:.3f}, "
            f"attempts={self.attempts})"
        )


def apply_verdict(
    before: ContextPack, after: ContextPack, verdict: Verdict
) -> GateResult:
    """Pick the pack to continue with according to verdict.

    Neither input is modified. An accepted pack is a copy of after with
    its compression fields set from the verdict.
    """
    if not verdict.passed:
        return GateResult(pack=before, accepted=False, verdict=verdict)
    stamped = after.model_copy(
        update={
            "compression_saving_ratio": verdict.saving_ratio,
            "compression_quality_pass": True,
        },
        deep=True,
    )
    return GateResult(pack=stamped, accepted=True, verdict=verdict)


def gate_compression(
    before: ContextPack,
    after: ContextPack,
    required_saving_ratio: float | None = None,
    *,
    config: GateConfig | None = None,
) -> GateResult:
    """Verify after against before and apply the verdict.

    A positive required_saving_ratio wins over config; None, zero or a
    negative value defers to config, then to the default.
    """
    ratio = _resolve_ratio(required_saving_ratio, config)
    verdict = verify(before, after, ratio)
    result = apply_verdict(before, after, verdict)
    if result.accepted:
        logger.info(
            "Accepted compressed pack (saving %.3f)", verdict.saving_ratio
        )
    return result


def compress_with_feedback(
    before: ContextPack,
    compress: Compressor,
    *,
    config: GateConfig | None = None,
    max_attempts: int | None = None,
) -> GateResult:
    """Call compress until its output passes the gate or attempts run out.

    Args:
        before: The pack currently in use. Never modified.
        compress: External compressor, called as ``compress(before, feedback)``
            where feedback is None on the first attempt and the previous
            rejected Verdict afterwards.
        config: Threshold and attempt settings. Defaults to GateConfig().
        max_attempts: Overrides config.max_attempts when given.

    Returns:
        The accepted GateResult, or, when every attempt was rejected and
        config.raise_on_exhaustion is False, the last rejection (whose
        pack is before).

    Raises:
        RetryExhaustedError: If every attempt was rejected and
            config.raise_on_exhaustion is True.
        ValueError: If max_attempts is less than 1.
    """
    config = config or GateConfig()
    attempts_allowed = max_attempts if max_attempts is not None else config.max_attempts
    if attempts_allowed < 1:
        raise ValueError(f"max_attempts must be >= 1, got {attempts_allowed}")

    ratio = config.effective_saving_ratio
    history: list[str] = []
    feedback: Verdict | None = None

    for attempt_num in range(1, attempts_allowed + 1):
        after = compress(before, feedback)
        verdict = verify(before, after, ratio)
        ok, diagnosis = verdict.as_validation()

        if ok:
            result = apply_verdict(before, after, verdict)
            logger.info(
                "Accepted compressed pack on attempt %d (saving %.3f)",
                attempt_num,
                verdict.saving_ratio,
            )
            return GateResult(
                pack=result.pack,
                accepted=True,
                verdict=verdict,
                attempts=attempt_num,
                history=history if history else None,
            )

        history.append(diagnosis)
        logger.debug(
            "Compression attempt %d/%d rejected: %s",
            attempt_num,
            attempts_allowed,
            diagnosis,
        )
        feedback = verdict

    logger.warning(
        "Compression rejected after %d attempt(s); keeping original pack (%s)",
        attempts_allowed,
        history[-1],
    )
    if config.raise_on_exhaustion:
        raise RetryExhaustedError(
            attempts=attempts_allowed,
            last_diagnosis=history[-1],
            last_verdict=feedback,
        )
    return GateResult(
        pack=before,
        accepted=False,
        verdict=feedback,
        attempts=attempts_allowed,
        history=history,
    )


def _resolve_ratio(
    required_saving_ratio: float | None, config: GateConfig | None
) -> float:
    if required_saving_ratio is not None and required_saving_ratio > 0:
        return required_saving_ratio
    if config is not None:
        return config.effective_saving_ratio
    return 0.0
