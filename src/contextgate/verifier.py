"""Fidelity verifier for compressed context packs.

verify() compares a pack before and after compression and decides whether
the compressed one may replace the original. It checks two things only:
the rendered text shrank by at least the required ratio, and no active
constraint, pending todo id or evidence span id present before went
missing. It does not look at what the text means.

The function is pure: no I/O beyond a debug log record, no mutation of
its inputs, equal verdicts for equal inputs.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import NamedTuple

from contextgate.exceptions import InvalidInputError
from contextgate.models.config import (
    DEFAULT_REQUIRED_SAVING_RATIO,
    resolve_required_saving_ratio,
)
from contextgate.models.verdict import ReasonCode, Verdict
from contextgate.protocols import PackLike

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_REQUIRED_SAVING_RATIO",
    "text_length",
    "saving_ratio",
    "verify",
]


def text_length(text: str) -> int:
    """Length of text in Unicode code points.

    Counts code points, not UTF-8 bytes, UTF-16 units or grapheme
    clusters. Every threshold is expressed against this unit.
    """
    return len(text)


def saving_ratio(before_length: int, after_length: int) -> float:
    """Fractional reduction from before_length to after_length.

    0.0 when before_length is zero. Negative when the text grew.
    """
    if before_length <= 0:
        return 0.0
    return (before_length - after_length) / before_length


def verify(
    before: PackLike,
    after: PackLike,
    required_saving_ratio: float = 0.0,
) -> Verdict:
    """Decide whether after may replace before.

    Args:
        before: The pack currently in use.
        after: The compressed candidate.
        required_saving_ratio: Minimum acceptable shrinkage in (0, 1].
            Non-positive values fall back to DEFAULT_REQUIRED_SAVING_RATIO.

    Returns:
        A Verdict with all four checks evaluated, even when several fail.

    Raises:
        InvalidInputError: If either pack is None, not pack-shaped, or holds
            entries without string identifiers.
    """
    _require_pack("before", before)
    _require_pack("after", after)

    required = resolve_required_saving_ratio(required_saving_ratio)
    before_len = text_length(before.approx_text())
    after_len = text_length(after.approx_text())
    saving = saving_ratio(before_len, after_len)

    before_ids = _pack_identifiers("before", before)
    after_ids = _pack_identifiers("after", after)
    missing_constraints = not before_ids.constraints <= after_ids.constraints
    missing_todos = not before_ids.todos <= after_ids.todos
    missing_evidence = not before_ids.evidence <= after_ids.evidence
    saving_ok = saving >= required

    reasons: list[ReasonCode] = []
    if missing_constraints:
        reasons.append(ReasonCode.CONSTRAINTS_LOST)
    if missing_todos:
        reasons.append(ReasonCode.PENDING_TODOS_LOST)
    if missing_evidence:
        reasons.append(ReasonCode.EVIDENCE_REFS_LOST)
    if not saving_ok:
        reasons.append(ReasonCode.SAVING_BELOW_THRESHOLD)

    verdict = Verdict(
        passed=(
            not missing_constraints
            and not missing_todos
            and not missing_evidence
            and saving_ok
        ),
        saving_ratio=saving,
        missing_constraints=missing_constraints,
        missing_pending_todos=missing_todos,
        missing_evidence_refs=missing_evidence,
        reason_codes=tuple(reasons),
        required_saving_ratio=required,
        before_length=before_len,
        after_length=after_len,
    )
    logger.debug(
        "Fidelity check: saving %.3f (required %.3f), %d -> %d code points, reasons=%r",
        saving,
        required,
        before_len,
        after_len,
        verdict.reason,
    )
    return verdict


class _PackIdentifiers(NamedTuple):
    constraints: set[str]
    todos: set[str]
    evidence: set[str]


def _require_pack(role: str, pack: object) -> None:
    if pack is None or not isinstance(pack, PackLike):
        raise InvalidInputError(role, pack)


def _pack_identifiers(role: str, pack: PackLike) -> _PackIdentifiers:
    """Collect the identifiers the preservation checks compare.

    Raises:
        InvalidInputError: If an entry lacks its identifier or the
            identifier is not a string.
    """
    try:
        return _PackIdentifiers(
            constraints=_identifier_set(pack.active_constraints),
            todos=_identifier_set(item.memory_id for item in pack.pending_todos),
            evidence=_identifier_set(ev.span_id for ev in pack.execution_evidence),
        )
    except (AttributeError, TypeError) as exc:
        raise InvalidInputError(role, pack, detail=str(exc)) from exc


def _identifier_set(values: Iterable[str]) -> set[str]:
    """Trimmed, non-empty identifiers; duplicates collapse."""
    stripped = (v.strip() for v in values)
    return {v for v in stripped if v}
