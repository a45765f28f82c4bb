"""
Shared fixtures: positions and fake external-engine transports.
"""

import asyncio

import chess
import pytest

from chess_opponent.external import (
    AnalysisResponse,
    AnalysisSession,
    AnalysisTransport,
    ExternalEngineAdapter,
)


# Ra8# is the only check for White
MATE_IN_ONE_WHITE = "6k1/5ppp/8/8/8/8/8/R6K w - - 0 1"

# Qa8# mates at once; Ne7+ is a check searched earlier that only
# leads to a slower mate
MATE_IN_ONE_AMONG_CHECKS = "6k1/5ppp/6P1/3N4/8/8/Q4PPP/6K1 w - - 0 1"

# Fool's mate, Black to play Qh4#
MATE_IN_ONE_BLACK = "rnbqkbnr/pppp1ppp/8/4p3/6P1/5P2/PPPPP2P/RNBQKBNR b KQkq - 0 2"

# White is in check from the rook; Ka2 is the only legal move
FORCED_MOVE = "8/8/8/8/8/2k5/8/K6r w - - 0 1"

# White to move and checkmated
WHITE_CHECKMATED = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"

# Black to move and checkmated
BLACK_CHECKMATED = "R5k1/5ppp/8/8/8/8/8/7K b - - 1 1"

STALEMATE = "k7/2Q5/1K6/8/8/8/8/8 b - - 0 1"


class FakeTransport(AnalysisTransport):
    """Scripted transport: answers with ``best_move`` or raises ``error``."""

    def __init__(self, best_move=None, ready=True, error=None, delay=0.0):
        self.best_move = best_move
        self.ready = ready
        self.error = error
        self.delay = delay
        self.requests = []
        self.sessions = 0
        self.closed = 0

    def session(self):
        self.sessions += 1
        return FakeSession(self)


class FakeSession(AnalysisSession):
    """Session that reports everything back to its FakeTransport."""

    def __init__(self, transport):
        self.transport = transport

    async def is_ready(self) -> bool:
        return self.transport.ready

    async def analyse(self, request):
        self.transport.requests.append(request)
        if self.transport.delay:
            await asyncio.sleep(self.transport.delay)
        if self.transport.error is not None:
            raise self.transport.error
        return AnalysisResponse(best_move=self.transport.best_move)

    async def close(self) -> None:
        self.transport.closed += 1


@pytest.fixture
def failing_adapter():
    """Adapter whose backend always errors."""
    return ExternalEngineAdapter(FakeTransport(error=RuntimeError("engine crashed")))


@pytest.fixture
def unavailable_adapter():
    """Adapter whose backend never becomes ready."""
    return ExternalEngineAdapter(FakeTransport(ready=False))


@pytest.fixture
def start_board():
    return chess.Board()
