"""Shared test fixtures for contextgate.

Provides a pack builder that pads the rendered text to an exact
code-point length, plus a few ready-made packs.
"""

from __future__ import annotations

import pytest

from contextgate.models.pack import ContextPack, ExecutionEvidence, MemoryItem


def make_pack(
    text_length: int | None = None,
    *,
    constraints: list[str] | None = None,
    todos: list[str] | None = None,
    evidence: list[str] | None = None,
    pad_char: str = "x",
) -> ContextPack:
    """Build a pack with the given identifiers.

    When text_length is given, system_contract is padded so that
    ``len(pack.approx_text()) == text_length``.
    """
    fields = {
        "active_constraints": list(constraints or []),
        "pending_todos": [MemoryItem(memory_id=i) for i in todos or []],
        "execution_evidence": [ExecutionEvidence(span_id=i) for i in evidence or []],
    }
    if text_length is None:
        return ContextPack(**fields)

    probe = ContextPack(system_contract=pad_char, **fields)
    pad = text_length - len(probe.approx_text()) + 1
    if pad < 1:
        raise ValueError(f"text_length {text_length} too small for the given fields")
    pack = ContextPack(system_contract=pad_char * pad, **fields)
    assert len(pack.approx_text()) == text_length
    return pack


@pytest.fixture
def full_pack() -> ContextPack:
    """A pack with every gate-relevant collection populated."""
    return make_pack(
        500,
        constraints=["must keep tests", "must not delete files"],
        todos=["todo_1", "todo_2"],
        evidence=["span_1", "span_2"],
    )


@pytest.fixture
def empty_pack() -> ContextPack:
    return ContextPack()
