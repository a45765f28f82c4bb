"""
Classical Piece-Square Table Evaluation

This module implements the opponent's static evaluation function using:
    1. Material counting (piece values)
    2. Piece-Square Tables (positional bonuses/penalties)
    3. Mobility of the side to move

Evaluation Components:
    - Material: P=100, N=320, B=330, R=500, Q=900, K=0
    - Position: PST bonuses for each piece type (middlegame king table)
    - Mobility: 2 centipawns per legal move of the side to move, signed
      by that side's colour

Reference:
    Simplified Evaluation Function
    https://www.chessprogramming.org/Simplified_Evaluation_Function
"""

import chess
import numpy as np
from chess_opponent.evaluation.base import Evaluator

#fmt: off
# ============================================================================
# Material Values (centipawns)
# ============================================================================

PIECE_VALUES = {
    chess.PAWN: 100,
    chess.KNIGHT: 320,
    chess.BISHOP: 330,
    chess.ROOK: 500,
    chess.QUEEN: 900,
    chess.KING: 0,
}

MOBILITY_WEIGHT = 2


# ============================================================================
# Piece-Square Tables (PSTs)
# ============================================================================
# Values are from White's perspective (row 0 = rank 8, row 7 = rank 1).
# Black pieces read the vertically mirrored row.
# ============================================================================

# Pawn PST: Encourage central pawns, reward advancement
PAWN_TABLE = np.array([
    [  0,   0,   0,   0,   0,   0,   0,   0],  # Rank 8
    [ 50,  50,  50,  50,  50,  50,  50,  50],  # Rank 7
    [ 10,  10,  20,  30,  30,  20,  10,  10],  # Rank 6
    [  5,   5,  10,  25,  25,  10,   5,   5],  # Rank 5
    [  0,   0,   0,  20,  20,   0,   0,   0],  # Rank 4
    [  5,  -5, -10,   0,   0, -10,  -5,   5],  # Rank 3
    [  5,  10,  10, -20, -20,  10,  10,   5],  # Rank 2
    [  0,   0,   0,   0,   0,   0,   0,   0],  # Rank 1
], dtype=np.int32)

# Knight PST: "Knights on the rim are dim"
KNIGHT_TABLE = np.array([
    [-50, -40, -30, -30, -30, -30, -40, -50],
    [-40, -20,   0,   0,   0,   0, -20, -40],
    [-30,   0,  10,  15,  15,  10,   0, -30],
    [-30,   5,  15,  20,  20,  15,   5, -30],
    [-30,   0,  15,  20,  20,  15,   0, -30],
    [-30,   5,  10,  15,  15,  10,   5, -30],
    [-40, -20,   0,   5,   5,   0, -20, -40],
    [-50, -40, -30, -30, -30, -30, -40, -50],
], dtype=np.int32)

# Bishop PST: Prefer long diagonals, avoid corners
BISHOP_TABLE = np.array([
    [-20, -10, -10, -10, -10, -10, -10, -20],
    [-10,   0,   0,   0,   0,   0,   0, -10],
    [-10,   0,   5,  10,  10,   5,   0, -10],
    [-10,   5,   5,  10,  10,   5,   5, -10],
    [-10,   0,  10,  10,  10,  10,   0, -10],
    [-10,  10,  10,  10,  10,  10,  10, -10],
    [-10,   5,   0,   0,   0,   0,   5, -10],
    [-20, -10, -10, -10, -10, -10, -10, -20],
], dtype=np.int32)

# Rook PST: Seventh rank and central files
ROOK_TABLE = np.array([
    [  0,   0,   0,   0,   0,   0,   0,   0],
    [  5,  10,  10,  10,  10,  10,  10,   5],
    [ -5,   0,   0,   0,   0,   0,   0,  -5],
    [ -5,   0,   0,   0,   0,   0,   0,  -5],
    [ -5,   0,   0,   0,   0,   0,   0,  -5],
    [ -5,   0,   0,   0,   0,   0,   0,  -5],
    [ -5,   0,   0,   0,   0,   0,   0,  -5],
    [  0,   0,   0,   5,   5,   0,   0,   0],
], dtype=np.int32)

# Queen PST: Mild central preference
QUEEN_TABLE = np.array([
    [-20, -10, -10,  -5,  -5, -10, -10, -20],
    [-10,   0,   0,   0,   0,   0,   0, -10],
    [-10,   0,   5,   5,   5,   5,   0, -10],
    [ -5,   0,   5,   5,   5,   5,   0,  -5],
    [  0,   0,   5,   5,   5,   5,   0,  -5],
    [-10,   5,   5,   5,   5,   5,   0, -10],
    [-10,   0,   5,   0,   0,   0,   0, -10],
    [-20, -10, -10,  -5,  -5, -10, -10, -20],
], dtype=np.int32)

# King PST (Middlegame): Stay behind the pawn shield, prefer castled squares
KING_TABLE = np.array([
    [-30, -40, -40, -50, -50, -40, -40, -30],
    [-30, -40, -40, -50, -50, -40, -40, -30],
    [-30, -40, -40, -50, -50, -40, -40, -30],
    [-30, -40, -40, -50, -50, -40, -40, -30],
    [-20, -30, -30, -40, -40, -30, -30, -20],
    [-10, -20, -20, -20, -20, -20, -20, -10],
    [ 20,  20,   0,   0,   0,   0,  20,  20],
    [ 20,  30,  10,   0,   0,  10,  30,  20],
], dtype=np.int32)
#fmt: on

PIECE_SQUARE_TABLES = {
    chess.PAWN: PAWN_TABLE,
    chess.KNIGHT: KNIGHT_TABLE,
    chess.BISHOP: BISHOP_TABLE,
    chess.ROOK: ROOK_TABLE,
    chess.QUEEN: QUEEN_TABLE,
    chess.KING: KING_TABLE,
}


def piece_square_bonus(piece_type: int, square: int, color: bool) -> int:
    """
    Look up the positional bonus for a piece on a square.

    Args:
        piece_type: chess.PAWN ... chess.KING
        square: Square index (0 = a1, 63 = h8)
        color: chess.WHITE or chess.BLACK

    Returns:
        Bonus in centipawns from the piece owner's point of view
    """
    rank = chess.square_rank(square)
    file = chess.square_file(square)

    # Tables are authored from White's side: row 0 is rank 8
    row = 7 - rank if color == chess.WHITE else rank

    return int(PIECE_SQUARE_TABLES[piece_type][row, file])


class ClassicalEvaluator(Evaluator):
    """
    Classical evaluation using material, piece-square tables and mobility.

    The mobility term only counts the side to move: White's moves add,
    Black's moves subtract. It is not a two-sided mobility difference.
    """

    def __init__(self, mobility_weight: int = MOBILITY_WEIGHT):
        self.mobility_weight = mobility_weight

    def material_and_position(self, board: chess.Board) -> int:
        """Signed sum of material + PST over every occupied square."""
        score = 0

        for square, piece in board.piece_map().items():
            value = PIECE_VALUES[piece.piece_type] + piece_square_bonus(
                piece.piece_type, square, piece.color
            )

            if piece.color == chess.WHITE:
                score += value
            else:
                score -= value

        return score

    def mobility(self, board: chess.Board) -> int:
        """Mobility term for the side to move."""
        moves = board.legal_moves.count() * self.mobility_weight
        return moves if board.turn == chess.WHITE else -moves

    def evaluate(self, board: chess.Board) -> float:
        """
        Evaluate position using material + PST + mobility.

        Args:
            board: Chess board to evaluate

        Returns:
            float: Evaluation in centipawns (White's perspective)
        """
        terminal_score = self.evaluate_terminal(board)
        if terminal_score is not None:
            return terminal_score

        return float(self.material_and_position(board) + self.mobility(board))

    def __repr__(self) -> str:
        return f"ClassicalEvaluator(mobility_weight={self.mobility_weight})"


_default_evaluator = ClassicalEvaluator()


def evaluate(board: chess.Board) -> float:
    """Evaluate a position with the default classical evaluator."""
    return _default_evaluator.evaluate(board)
