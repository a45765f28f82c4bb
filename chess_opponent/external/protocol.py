"""
Request/response types for the external analysis process.

The external engine answers with a move in long-algebraic form
(origin + destination + optional promotion letter, e.g. ``e2e4``,
``e7e8q``). The answer is never trusted as-is: it is matched against the
legal moves of the position before it is used.
"""

import re
from dataclasses import dataclass
from typing import Optional, Tuple

import chess

LONG_ALGEBRAIC = re.compile(r"^([a-h][1-8])([a-h][1-8])([qrbn])?$")


@dataclass(frozen=True)
class AnalysisRequest:
    """Position (FEN) plus the depth and time budget for one request."""

    position: str
    depth: int
    movetime_ms: int


@dataclass(frozen=True)
class AnalysisResponse:
    """Best move returned by the external engine (None if it had none)."""

    best_move: Optional[str]


def parse_long_algebraic(text: str) -> Tuple[int, int, Optional[int]]:
    """
    Parse a long-algebraic move string.

    Args:
        text: Move such as "e2e4" or "e7e8q" (case-insensitive)

    Returns:
        Tuple of (from_square, to_square, promotion_piece_type or None)

    Raises:
        ValueError: If the string is not a well-formed long-algebraic move
    """
    match = LONG_ALGEBRAIC.match(text.strip().lower())
    if not match:
        raise ValueError(f"Malformed long-algebraic move: {text!r}")

    from_square = chess.parse_square(match.group(1))
    to_square = chess.parse_square(match.group(2))

    promotion = None
    if match.group(3):
        promotion = chess.Piece.from_symbol(match.group(3)).piece_type

    return from_square, to_square, promotion


def resolve_move(board: chess.Board, text: str) -> Optional[chess.Move]:
    """
    Find the legal move in ``board`` that a long-algebraic string names.

    Only legal moves starting on the parsed origin square are considered.
    A promotion letter must match the promotion piece; a missing letter
    only matches non-promoting moves.

    Args:
        board: Position the move is played in
        text: Long-algebraic move string

    Returns:
        The matching legal move, or None if no legal move matches

    Raises:
        ValueError: If ``text`` is malformed
    """
    from_square, to_square, promotion = parse_long_algebraic(text)

    for move in board.generate_legal_moves(from_mask=chess.BB_SQUARES[from_square]):
        if move.to_square == to_square and move.promotion == promotion:
            return move

    return None
