"""
Search Module

This module implements the deep-search strategy: minimax with alpha-beta
pruning over the caller's board, with capture/check move ordering.

Key Components:
    - search: Core recursive search returning (score, move)
    - find_best_move: Root-level full-window search for the side to move
    - order_moves: Move ordering heuristic
    - SearchResult / SearchStats: Result tuple and optional counters
"""

from chess_opponent.search.minimax import (
    HARD_DEPTH,
    SearchResult,
    SearchStats,
    find_best_move,
    order_moves,
    search,
)

__all__ = ['HARD_DEPTH', 'SearchResult', 'SearchStats', 'find_best_move', 'order_moves', 'search']
