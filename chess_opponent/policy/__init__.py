"""
Move policy module.

Key Components:
    - DifficultyTier: Closed enumeration easy / medium / hard / expert
    - TierInfo / TIER_INFO: Display label, description and ELO per tier
    - MoveSelector: select_move(board, tier) dispatching to one strategy
    - thinking_delay: Cosmetic per-tier delay for UIs
"""

from chess_opponent.policy.selector import MoveSelector
from chess_opponent.policy.tiers import TIER_INFO, DifficultyTier, TierInfo, thinking_delay

__all__ = ["MoveSelector", "DifficultyTier", "TierInfo", "TIER_INFO", "thinking_delay"]
