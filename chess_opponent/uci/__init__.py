"""
UCI Protocol Interface

This module exposes the tiered opponent over the Universal Chess Interface
(UCI), so it can be loaded into any chess GUI.

Protocol Flow:
    GUI → "uci"
    Engine → "id name ChessOpponent 0.1.0"
    Engine → "option name Difficulty type combo default hard var easy ..."
    Engine → "uciok"
    GUI → "setoption name Difficulty value medium"
    GUI → "isready"
    Engine → "readyok"
    GUI → "position startpos moves e2e4"
    GUI → "go"
    Engine → "info string tier medium eval 31 winprob 52.9 time 12"
    Engine → "bestmove e7e5"

Reference:
    UCI Protocol: https://www.chessprogramming.org/UCI
"""

from chess_opponent.uci.interface import UCIEngine

__all__ = ['UCIEngine']
