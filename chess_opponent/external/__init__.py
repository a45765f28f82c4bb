"""
External analysis module.

Bridge to a separate high-strength engine process (Stockfish over UCI).

Key Components:
    - ExternalEngineAdapter: async request_move() returning a DelegationResult
    - AnalysisTransport / UciEngineTransport: backend factories
    - AnalysisSession / UciEngineSession: one connection per request
    - AnalysisRequest / AnalysisResponse: request/response types
    - resolve_move: Match a long-algebraic answer against the legal moves
"""

from chess_opponent.external.adapter import DelegationResult, ExternalEngineAdapter
from chess_opponent.external.protocol import (
    AnalysisRequest,
    AnalysisResponse,
    parse_long_algebraic,
    resolve_move,
)
from chess_opponent.external.transport import (
    AnalysisSession,
    AnalysisTransport,
    UciEngineSession,
    UciEngineTransport,
    find_engine_binary,
)

__all__ = [
    "DelegationResult",
    "ExternalEngineAdapter",
    "AnalysisRequest",
    "AnalysisResponse",
    "parse_long_algebraic",
    "resolve_move",
    "AnalysisSession",
    "AnalysisTransport",
    "UciEngineSession",
    "UciEngineTransport",
    "find_engine_binary",
]
