"""contextgate: fidelity gate for compressed agent context packs.

An agent that rewrites its own context to save tokens must not quietly
forget what it is bound by, what it still has to do, or what evidence it
has already gathered. contextgate checks a compressed pack against the
original before the swap happens.
"""

from contextgate._version import __version__

# Core entry point
from contextgate.verifier import DEFAULT_REQUIRED_SAVING_RATIO, verify

# Pack models
from contextgate.models.pack import (
    AttachmentManifest,
    ContextPack,
    DialogueTurn,
    ExecutionEvidence,
    MemoryItem,
    MemoryKind,
    MemoryScope,
)

# Verdict and configuration
from contextgate.models.verdict import ReasonCode, Verdict
from contextgate.models.config import GateConfig, resolve_required_saving_ratio

# Protocols
from contextgate.protocols import PackLike

# Gate helpers
from contextgate.gate import (
    GateResult,
    apply_verdict,
    compress_with_feedback,
    gate_compression,
)

# Exceptions
from contextgate.exceptions import (
    ConfigError,
    ContextGateError,
    InvalidInputError,
    RetryExhaustedError,
)

__all__ = [
    "__version__",
    "AttachmentManifest",
    "ConfigError",
    "ContextGateError",
    "ContextPack",
    "DEFAULT_REQUIRED_SAVING_RATIO",
    "DialogueTurn",
    "ExecutionEvidence",
    "GateConfig",
    "GateResult",
    "InvalidInputError",
    "MemoryItem",
    "MemoryKind",
    "MemoryScope",
    "PackLike",
    "ReasonCode",
    "RetryExhaustedError",
    "Verdict",
    "apply_verdict",
    "compress_with_feedback",
    "gate_compression",
    "resolve_required_saving_ratio",
    "verify",
]
