"""
Evaluation Module

This module provides position evaluation functions for the opponent.
Evaluators are SWAPPABLE: the search and the move policy work with any
evaluator that implements the base interface.

Key Components:
    - Evaluator (ABC): Abstract base class defining the evaluation interface
    - ClassicalEvaluator: Material + piece-square tables + mobility
    - evaluate: Module-level shortcut using a default ClassicalEvaluator
    - scoring: Win probability / accuracy helpers for display

Data Flow:
    chess.Board → evaluator.evaluate() → float (centipawns)
                                          Positive = White advantage
                                          Negative = Black advantage
"""

from chess_opponent.evaluation.base import Evaluator, MATE_SCORE
from chess_opponent.evaluation.classical import ClassicalEvaluator, PIECE_VALUES, evaluate
from chess_opponent.evaluation.scoring import win_probability, move_accuracy, clamp_score

__all__ = [
    'Evaluator',
    'ClassicalEvaluator',
    'MATE_SCORE',
    'PIECE_VALUES',
    'evaluate',
    'win_probability',
    'move_accuracy',
    'clamp_score',
]
