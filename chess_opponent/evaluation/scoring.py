"""
Score interpretation helpers.

Turns raw centipawn scores into numbers a UI can show: a win probability
for the side the score favours, a per-move accuracy percentage, and a
display-safe clamp for the forced-mate sentinels.
"""

import math

from chess_opponent.evaluation.base import MATE_SCORE

# Lichess win-probability slope
WIN_PROBABILITY_K = 0.00368208


def win_probability(centipawns: float) -> float:
    """
    Convert a centipawn score to a win probability (0-100).

    Uses the logistic curve published by Lichess. Mate sentinels saturate
    to 0 or 100.

    Args:
        centipawns: Score from the perspective of the player of interest

    Returns:
        Win probability in percent
    """
    if centipawns >= MATE_SCORE:
        return 100.0
    if centipawns <= -MATE_SCORE:
        return 0.0
    return 50 + 50 * (2 / (1 + math.exp(-WIN_PROBABILITY_K * centipawns)) - 1)


def move_accuracy(cp_loss: float) -> float:
    """
    Accuracy of a move (0-100) from its centipawn loss.

    Args:
        cp_loss: Centipawns lost relative to the best move (>= 0)

    Returns:
        Accuracy in percent, 100 for a loss of zero or less
    """
    if cp_loss <= 0:
        return 100.0
    accuracy = 103.1668 * math.exp(-0.04354 * cp_loss) - 3.1669
    return max(0.0, min(100.0, accuracy))


def clamp_score(score: float, limit: int = 10000) -> int:
    """
    Clamp a score for display, mapping mate sentinels to +/-limit.

    Args:
        score: Evaluation in centipawns
        limit: Maximum absolute value

    Returns:
        Integer centipawns in [-limit, limit]
    """
    return int(max(-limit, min(limit, score)))
