"""Domain models for contextgate."""

from contextgate.models.config import (
    DEFAULT_REQUIRED_SAVING_RATIO,
    GateConfig,
    resolve_required_saving_ratio,
)
from contextgate.models.pack import (
    AttachmentManifest,
    ContextPack,
    DialogueTurn,
    ExecutionEvidence,
    MemoryItem,
    MemoryKind,
    MemoryScope,
)
from contextgate.models.verdict import ReasonCode, Verdict

__all__ = [
    "AttachmentManifest",
    "ContextPack",
    "DEFAULT_REQUIRED_SAVING_RATIO",
    "DialogueTurn",
    "ExecutionEvidence",
    "GateConfig",
    "MemoryItem",
    "MemoryKind",
    "MemoryScope",
    "ReasonCode",
    "Verdict",
    "resolve_required_saving_ratio",
]
