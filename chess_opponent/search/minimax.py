"""
Minimax Search with Alpha-Beta Pruning

This module implements the deep-search strategy of the opponent.
Minimax explores the game tree to find the best move, and alpha-beta
pruning skips branches that cannot change the result.

Key Concepts:
    - Minimax: Recursive algorithm that assumes optimal play by both sides
    - Alpha-Beta: Optimization that prunes branches that can't affect result
    - Move Ordering: Captures and checks first to maximize pruning

The search mutates the caller's board with push/pop and always restores it
before returning, including when a branch raises.

References:
    - Minimax: https://www.chessprogramming.org/Minimax
    - Alpha-Beta: https://www.chessprogramming.org/Alpha-Beta
    - Move Ordering: https://www.chessprogramming.org/Move_Ordering
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, NamedTuple, Optional

import chess

from chess_opponent.evaluation.base import Evaluator, MATE_SCORE
from chess_opponent.evaluation.classical import ClassicalEvaluator, PIECE_VALUES

logger = logging.getLogger(__name__)

HARD_DEPTH = 4  # Plies searched by the hard tier

CAPTURE_WEIGHT = 10
CHECK_BONUS = 50

_default_evaluator = ClassicalEvaluator()


class SearchResult(NamedTuple):
    """Score of a node and the move that produced it (None at leaves)."""

    score: float
    move: Optional[chess.Move]


@dataclass
class SearchStats:
    """Counters filled in by search() when passed in."""

    nodes: int = 0
    cutoffs: int = 0


def get_piece_value(piece_type: Optional[int]) -> int:
    """
    Get piece value for move ordering.

    Args:
        piece_type: chess.PAWN, chess.KNIGHT, etc.

    Returns:
        Piece value in centipawns (0 for None / king)
    """
    if piece_type is None:
        return 0
    return PIECE_VALUES.get(piece_type, 0)


def move_order_score(board: chess.Board, move: chess.Move) -> int:
    """
    Ordering key for a move. Higher score = searched earlier.

    Captures score by the value of the captured piece, checks add a flat
    bonus on top.
    """
    score = 0

    if board.is_capture(move):
        if board.is_en_passant(move):
            victim = chess.PAWN
        else:
            victim = board.piece_type_at(move.to_square)
        score += CAPTURE_WEIGHT * get_piece_value(victim)

    if board.gives_check(move):
        score += CHECK_BONUS

    return score


def order_moves(board: chess.Board, moves: Iterable[chess.Move]) -> List[chess.Move]:
    """
    Order moves to improve alpha-beta pruning efficiency.

    The sort is stable: moves with equal scores keep generation order.
    Ordering never changes the minimax value, only which branches get cut.

    Args:
        board: Current board position
        moves: Legal moves to order

    Returns:
        Sorted list of moves (most promising first)
    """
    return sorted(moves, key=lambda move: move_order_score(board, move), reverse=True)


def _search(
    board: chess.Board,
    depth: int,
    alpha: float,
    beta: float,
    maximizing: bool,
    evaluator: Evaluator,
    stats: Optional[SearchStats],
) -> SearchResult:
    """
    Recursive alpha-beta. Mated leaves score beyond the sentinel by the
    remaining depth, so a mate found closer to the root outranks a slower
    one (and the mated side prefers the slower one).
    """
    if stats is not None:
        stats.nodes += 1

    if depth <= 0 or evaluator.is_terminal(board):
        score = evaluator.evaluate(board)
        if abs(score) >= MATE_SCORE:
            remaining = max(depth, 0)
            score = score + remaining if score > 0 else score - remaining
        return SearchResult(score, None)

    best_score = -float("inf") if maximizing else float("inf")
    best_move = None

    for move in order_moves(board, board.legal_moves):
        board.push(move)
        try:
            score = _search(board, depth - 1, alpha, beta, not maximizing, evaluator, stats).score
        finally:
            board.pop()

        if maximizing:
            if score > best_score:
                best_score = score
                best_move = move
            alpha = max(alpha, best_score)
        else:
            if score < best_score:
                best_score = score
                best_move = move
            beta = min(beta, best_score)

        if beta <= alpha:
            if stats is not None:
                stats.cutoffs += 1
            break

    return SearchResult(best_score, best_move)


def search(
    board: chess.Board,
    depth: int,
    alpha: float,
    beta: float,
    maximizing: bool,
    evaluator: Optional[Evaluator] = None,
    stats: Optional[SearchStats] = None,
) -> SearchResult:
    """
    Minimax search with alpha-beta pruning.

    Args:
        board: Current chess position (mutated and restored)
        depth: Remaining search depth in plies
        alpha: Best score guaranteed to the maximizer so far
        beta: Best score guaranteed to the minimizer so far
        maximizing: True if the side to move wants the highest score (White)
        evaluator: Position evaluation function (default: ClassicalEvaluator)
        stats: Optional counters for nodes and cutoffs

    Returns:
        SearchResult(score, move). The move is None at depth 0 and in
        terminal positions. Forced mates are reported as exactly
        +MATE_SCORE / -MATE_SCORE.

    Algorithm:
        1. Leaf (depth 0 or terminal) → evaluate position
        2. Order legal moves (captures, checks)
        3. For each move: push, recurse (depth - 1), pop
        4. Keep the first move reaching the best score, faster mates first
        5. Prune once beta <= alpha
    """
    if evaluator is None:
        evaluator = _default_evaluator

    score, move = _search(board, depth, alpha, beta, maximizing, evaluator, stats)

    if score >= MATE_SCORE:
        score = MATE_SCORE
    elif score <= -MATE_SCORE:
        score = -MATE_SCORE

    return SearchResult(score, move)


def find_best_move(
    board: chess.Board,
    depth: int = HARD_DEPTH,
    evaluator: Optional[Evaluator] = None,
    stats: Optional[SearchStats] = None,
) -> SearchResult:
    """
    Search the current position with a full window.

    Args:
        board: Current chess position
        depth: Search depth (higher = stronger but slower)
        evaluator: Position evaluation function
        stats: Optional counters for nodes and cutoffs

    Returns:
        SearchResult(score, move); move is None when there are no legal moves
    """
    maximizing = board.turn == chess.WHITE

    result = search(
        board,
        depth,
        -float("inf"),
        float("inf"),
        maximizing,
        evaluator,
        stats,
    )

    best = result.move.uci() if result.move else None
    logger.debug(f"Search depth={depth}: best={best} score={result.score:.1f}")
    return result
