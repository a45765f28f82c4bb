"""
Difficulty tiers and their display metadata.
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple


class DifficultyTier(str, Enum):
    """Skill tier requested by the caller. Each maps to one strategy."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXPERT = "expert"

    @classmethod
    def parse(cls, value) -> "DifficultyTier":
        """
        Convert a tier name (case-insensitive) or tier to a DifficultyTier.

        Raises:
            ValueError: If the value names no tier
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            names = ", ".join(t.value for t in cls)
            raise ValueError(f"Unknown difficulty tier {value!r} (expected one of: {names})") from None

    @property
    def info(self) -> "TierInfo":
        return TIER_INFO[self]


@dataclass(frozen=True)
class TierInfo:
    """Human-readable tier metadata. Display only, never used in play."""

    label: str
    description: str
    elo: str


TIER_INFO: Dict[DifficultyTier, TierInfo] = {
    DifficultyTier.EASY: TierInfo(
        label="Beginner",
        description="Plays random moves, grabbing material now and then",
        elo="~400",
    ),
    DifficultyTier.MEDIUM: TierInfo(
        label="Casual",
        description="Picks the best-looking move one ply ahead, with occasional slips",
        elo="~1000",
    ),
    DifficultyTier.HARD: TierInfo(
        label="Club Player",
        description="Searches four plies deep with alpha-beta pruning",
        elo="~1500",
    ),
    DifficultyTier.EXPERT: TierInfo(
        label="Master",
        description="Delegates to a full-strength analysis engine",
        elo="2500+",
    ),
}

# Cosmetic delay ranges in seconds; a single value means a fixed delay
THINKING_DELAYS: Dict[DifficultyTier, Tuple[float, float]] = {
    DifficultyTier.EASY: (0.3, 0.8),
    DifficultyTier.MEDIUM: (0.5, 1.5),
    DifficultyTier.HARD: (0.8, 2.3),
    DifficultyTier.EXPERT: (0.2, 0.2),
}


def thinking_delay(tier, rng: Optional[random.Random] = None) -> float:
    """
    Randomized delay (seconds) before a UI reveals the opponent's move.

    Purely cosmetic; it has no effect on which move is chosen. The expert
    tier gets a small fixed delay because the external engine already
    takes time.

    Args:
        tier: DifficultyTier or tier name
        rng: Random generator (default: module-level random)

    Returns:
        Delay in seconds
    """
    low, high = THINKING_DELAYS[DifficultyTier.parse(tier)]
    if low == high:
        return low
    return (rng or random).uniform(low, high)
