"""
Engine configuration for the tiered chess opponent.
"""

import os
from dataclasses import dataclass, fields
from typing import Optional


@dataclass
class EngineConfig:
    """Configuration for move selection across all difficulty tiers.

    This dataclass keeps every tuning constant of the opponent in one place
    so that the UCI front end, tests and embedding applications share the
    same defaults.
    """

    # Deep search
    hard_depth: int = 4
    """Search depth (plies) for the hard tier and the expert fallback"""

    # Easy tier
    easy_capture_bias: float = 0.3
    """Probability of picking among captures when any exist"""

    # Medium tier
    medium_rerank_probability: float = 0.2
    """Probability of sampling from the top-N one-ply moves instead of the best"""

    medium_top_n: int = 3
    """Number of top-ranked moves the medium tier samples from"""

    # Expert tier (external analysis process)
    expert_depth: int = 18
    """Depth budget sent to the external engine"""

    expert_movetime_ms: int = 1000
    """Time budget in milliseconds sent to the external engine"""

    request_timeout_grace_ms: int = 2000
    """Extra time allowed on top of the movetime before a request is abandoned"""

    engine_path: Optional[str] = None
    """Path to the UCI engine binary (None = auto-detect)"""

    engine_threads: int = 1
    """Threads option passed to the external engine"""

    engine_hash_mb: int = 64
    """Hash size option (MB) passed to the external engine"""

    # Reproducibility
    random_seed: Optional[int] = None
    """Seed for the easy/medium tier random generator (None for random)"""

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.hard_depth < 1:
            raise ValueError(f"hard_depth must be at least 1, got {self.hard_depth}")

        for name in ("easy_capture_bias", "medium_rerank_probability"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {value}")

        if self.medium_top_n < 1:
            raise ValueError(f"medium_top_n must be positive, got {self.medium_top_n}")

        if self.expert_depth < 1:
            raise ValueError(f"expert_depth must be positive, got {self.expert_depth}")

        if self.expert_movetime_ms <= 0:
            raise ValueError(
                f"expert_movetime_ms must be positive, got {self.expert_movetime_ms}"
            )

        if self.request_timeout_grace_ms < 0:
            raise ValueError(
                f"request_timeout_grace_ms must be non-negative, got {self.request_timeout_grace_ms}"
            )

        if self.engine_threads < 1:
            raise ValueError(f"engine_threads must be positive, got {self.engine_threads}")

        if self.engine_hash_mb < 1:
            raise ValueError(f"engine_hash_mb must be positive, got {self.engine_hash_mb}")

    @property
    def request_timeout(self) -> float:
        """Seconds to wait for one external analysis request."""
        return (self.expert_movetime_ms + self.request_timeout_grace_ms) / 1000.0

    @classmethod
    def from_env(cls, prefix: str = "CHESS_OPPONENT_", environ=None) -> "EngineConfig":
        """
        Build a config with overrides read from environment variables.

        A field ``hard_depth`` is read from ``CHESS_OPPONENT_HARD_DEPTH`` and so on.
        Unset variables keep the dataclass default.

        Args:
            prefix: Environment variable prefix
            environ: Mapping to read from (default: os.environ)

        Returns:
            EngineConfig with overrides applied

        Raises:
            ValueError: If a variable cannot be converted or fails validation
        """
        environ = os.environ if environ is None else environ
        overrides = {}

        for f in fields(cls):
            raw = environ.get(prefix + f.name.upper())
            if raw is None:
                continue

            if f.name in ("engine_path",):
                overrides[f.name] = raw or None
            elif f.name == "random_seed":
                overrides[f.name] = int(raw) if raw else None
            elif f.name in ("easy_capture_bias", "medium_rerank_probability"):
                overrides[f.name] = float(raw)
            else:
                overrides[f.name] = int(raw)

        return cls(**overrides)

    def __repr__(self) -> str:
        """String representation of config."""
        return (
            f"EngineConfig(\n"
            f"  Hard: depth={self.hard_depth}\n"
            f"  Easy: capture_bias={self.easy_capture_bias}\n"
            f"  Medium: rerank_probability={self.medium_rerank_probability}, top_n={self.medium_top_n}\n"
            f"  Expert: depth={self.expert_depth}, movetime={self.expert_movetime_ms}ms, "
            f"engine={self.engine_path or 'auto'}\n"
            f"  Seed: {self.random_seed}\n"
            f")"
        )
