"""Protocol definitions for contextgate.

The verifier reads packs through these structural interfaces, so any
provider object with the right shape can be checked without converting
it to a ContextPack first.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, runtime_checkable


class TodoLike(Protocol):
    memory_id: str


class EvidenceLike(Protocol):
    span_id: str


@runtime_checkable
class PackLike(Protocol):
    """What the fidelity gate needs from a context pack."""

    active_constraints: Iterable[str]
    pending_todos: Iterable[TodoLike]
    execution_evidence: Iterable[EvidenceLike]

    def approx_text(self) -> str:
        """Deterministic plain-text rendering used for size measurement."""
        ...
