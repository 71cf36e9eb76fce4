from __future__ import annotations

import operator
from dataclasses import asdict, dataclass, fields


DEFAULT_MAX_STEPS = 100_000


@dataclass(frozen=True)
class ModelConfig:
    """Construction parameters for `MarkovModel`.

    Attributes:
        window_length: Context size in characters
        seed: Any integer seed for the model's random stream; None seeds from system entropy
        max_steps: Upper bound on characters sampled by one `generate` call
    """

    window_length: int
    seed: int | None = None
    max_steps: int = DEFAULT_MAX_STEPS

    def __post_init__(self) -> None:
        # Integer-like values (e.g. numpy integers) are stored as plain ints.
        object.__setattr__(self, "window_length", _as_int("window_length", self.window_length))
        object.__setattr__(self, "max_steps", _as_int("max_steps", self.max_steps))
        if self.window_length < 1:
            raise ValueError("window_length must be >= 1")
        if self.max_steps < 1:
            raise ValueError("max_steps must be >= 1")
        if self.seed is not None:
            object.__setattr__(self, "seed", _as_int("seed", self.seed))

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ModelConfig":
        """Create a ModelConfig from a dictionary, ignoring unknown keys."""
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in config_dict.items() if k in names})

    def to_dict(self) -> dict:
        return asdict(self)


def _as_int(name: str, value: object) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    try:
        return operator.index(value)
    except TypeError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None
