"""
Abstract Evaluator Interface

This module defines the abstract base class for all position evaluators.
By defining a common interface, the search and the move policy can use
any evaluator without modification.

Key Principles:
    1. Evaluators are stateless
    2. evaluate() always returns centipawns from White's perspective
    3. Positive = White advantage, Negative = Black advantage
    4. Checkmate positions return the +/-MATE_SCORE sentinels

Convention:
    - Material values in centipawns (pawn = 100, queen = 900)
    - Return 0 for drawn positions
    - Return values are from White's perspective (negate for Black)
"""

from abc import ABC, abstractmethod
import chess
from typing import Optional


# Forced-mate sentinel magnitude. No material + positional score comes close.
MATE_SCORE = 100000.0


class Evaluator(ABC):
    """
    Abstract base class for position evaluation.

    All evaluator implementations must inherit from this class and implement
    the evaluate() method. This ensures compatibility with the search algorithm.

    Methods:
        evaluate(board): Returns position evaluation in centipawns
    """

    @abstractmethod
    def evaluate(self, board: chess.Board) -> float:
        """
        Evaluate a chess position from White's perspective.

        Args:
            board: python-chess Board object to evaluate

        Returns:
            float: Evaluation in centipawns
        """
        pass

    def is_draw(self, board: chess.Board) -> bool:
        """
        Check if position is a draw by rule.

        Draws that don't require evaluation:
            - Stalemate
            - Insufficient material
            - Fifty-move rule
            - Threefold repetition

        Args:
            board: python-chess Board object

        Returns:
            bool: True if position is drawn, False otherwise
        """
        return (
            board.is_stalemate()
            or board.is_insufficient_material()
            or board.is_fifty_moves()
            or board.is_repetition(3)
        )

    def is_terminal(self, board: chess.Board) -> bool:
        """True if the position is checkmate or drawn."""
        return board.is_checkmate() or self.is_draw(board)

    def evaluate_terminal(self, board: chess.Board) -> Optional[float]:
        """
        Evaluate terminal positions (checkmate, stalemate, draw).

        Args:
            board: python-chess Board object

        Returns:
            float: Evaluation if terminal position
            None: If position is not terminal
        """
        if board.is_checkmate():
            # The side to move is the one that got mated
            if board.turn == chess.WHITE:
                return -MATE_SCORE
            else:
                return MATE_SCORE

        if self.is_draw(board):
            return 0.0

        return None

    def __repr__(self) -> str:
        """String representation of evaluator."""
        return f"{self.__class__.__name__}()"
