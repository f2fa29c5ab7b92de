"""Configuration model for the compression gate.

GateConfig holds the knobs a caller tunes around the verifier: the
saving threshold, how many compression attempts to make, and whether
running out of attempts is an error.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, ValidationError

from contextgate.exceptions import ConfigError

#: Minimum shrinkage applied when the caller asks for a non-positive ratio.
DEFAULT_REQUIRED_SAVING_RATIO = 0.35


def resolve_required_saving_ratio(value: float | None) -> float:
    """Return the threshold to enforce for a requested ratio.

    ``None``, zero, negative and NaN values mean "not set" and resolve to
    :data:`DEFAULT_REQUIRED_SAVING_RATIO`; anything else is used as given.
    """
    if value is None or not value > 0:
        return DEFAULT_REQUIRED_SAVING_RATIO
    return value


class GateConfig(BaseModel):
    """Per-caller gate configuration."""

    model_config = {"frozen": True}

    # <= 0 = use the default
    required_saving_ratio: float = Field(default=0.0, allow_inf_nan=False)
    max_attempts: int = Field(default=3, ge=1)
    raise_on_exhaustion: bool = False

    @property
    def effective_saving_ratio(self) -> float:
        return resolve_required_saving_ratio(self.required_saving_ratio)

    @classmethod
    def from_dict(cls, d: dict | None) -> GateConfig:
        """Build a config from a plain mapping.

        Returns the defaults when d is None.

        Raises:
            ConfigError: If any value fails validation.
        """
        if d is None:
            return cls()
        try:
            return cls.model_validate(d)
        except ValidationError as exc:
            raise ConfigError(f"Invalid gate config: {exc}") from exc
