"""Context pack models.

A ContextPack is a snapshot of an agent's working state at one point in
time: the prompt envelope it carries between reasoning steps. The models
here are plain pydantic models so packs can be loaded straight from the
JSON the agent runtime exchanges.

Only a handful of fields matter to the fidelity gate (constraints, todo
ids, evidence span ids and the rendered text length). Everything else is
carried so a full pack round-trips and renders faithfully.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field


class MemoryScope(str, enum.Enum):
    """Lifetime bucket of a memory item."""

    WORKING = "working"
    EPISODIC = "episodic"
    LONG_TERM = "long_term"


class MemoryKind(str, enum.Enum):
    """What a memory item records."""

    FACT = "fact"
    CONSTRAINT = "constraint"
    DECISION = "decision"
    TODO = "todo"
    ARTIFACT = "artifact"


class MemoryItem(BaseModel):
    """A semantic memory entry. Identity is ``memory_id``."""

    memory_id: str = ""
    thread_id: str = ""
    scope: MemoryScope = MemoryScope.WORKING
    kind: MemoryKind = MemoryKind.FACT
    content: str = ""
    source_refs_json: str = ""
    importance: float = 0.0
    freshness: float = 0.0
    confidence: float = 0.0
    created_at_unix_ms: int = 0
    updated_at_unix_ms: int = 0


class DialogueTurn(BaseModel):
    """One user/assistant exchange."""

    turn_id: str = ""
    run_id: str = ""
    user_message_id: str = ""
    assistant_message_id: str = ""
    user_text: str = ""
    assistant_text: str = ""
    created_at_unix_ms: int = 0


class ExecutionEvidence(BaseModel):
    """Reference to evidence captured during execution. Identity is ``span_id``."""

    span_id: str = ""
    run_id: str = ""
    kind: str = ""
    name: str = ""
    status: str = ""
    summary: str = ""
    payload_json: str = ""
    started_at_unix_ms: int = 0
    ended_at_unix_ms: int = 0


class AttachmentManifest(BaseModel):
    """Model-facing attachment summary."""

    name: str = ""
    mime_type: str = ""
    url: str = ""
    mode: str = ""


class ContextPack(BaseModel):
    """The canonical model context envelope.

    Every field defaults to empty, so ``ContextPack()`` is a valid,
    structurally empty pack.
    """

    thread_id: str = ""
    run_id: str = ""
    system_contract: str = ""
    objective: str = ""
    active_constraints: list[str] = Field(default_factory=list)
    recent_dialogue: list[DialogueTurn] = Field(default_factory=list)
    execution_evidence: list[ExecutionEvidence] = Field(default_factory=list)
    pending_todos: list[MemoryItem] = Field(default_factory=list)
    retrieved_long_term_memory: list[MemoryItem] = Field(default_factory=list)
    attachments_manifest: list[AttachmentManifest] = Field(default_factory=list)
    thread_snapshot: str = ""
    estimated_input_tokens: int = 0
    compression_saving_ratio: float = 0.0
    compression_quality_pass: bool = False
    context_sections_token_usage: dict[str, int] = Field(default_factory=dict)

    def approx_text(self) -> str:
        """Render the pack as plain text for size measurement.

        Deterministic and not round-trippable. The header fields are kept
        even when empty; constraints are kept verbatim; everything else
        contributes only its trimmed, non-empty text.
        """
        parts = [
            self.system_contract.strip(),
            self.objective.strip(),
            self.thread_snapshot.strip(),
        ]
        parts.extend(self.active_constraints)
        for turn in self.recent_dialogue:
            parts.extend(_non_empty(turn.user_text, turn.assistant_text))
        parts.extend(_non_empty(*(ev.summary for ev in self.execution_evidence)))
        parts.extend(_non_empty(*(mem.content for mem in self.pending_todos)))
        parts.extend(
            _non_empty(*(mem.content for mem in self.retrieved_long_term_memory))
        )
        return "\n".join(parts).strip()


def _non_empty(*texts: str) -> list[str]:
    stripped = (t.strip() for t in texts)
    return [t for t in stripped if t]
