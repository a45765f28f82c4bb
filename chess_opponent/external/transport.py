"""
Transports to the external high-strength analysis process.

A transport knows how to reach one analysis backend and hands out one
AnalysisSession per request. The adapter only talks to these two
interfaces, so tests and embedding applications can plug in their own
backend.

UciEngineTransport drives a UCI binary (Stockfish by default) through
python-chess' asyncio engine API. Each session owns its own process,
started on demand and shut down by close(), so concurrent requests never
share an engine or an event loop.
"""

import logging
import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import chess
import chess.engine

from chess_opponent.external.protocol import AnalysisRequest, AnalysisResponse

logger = logging.getLogger(__name__)

ENGINE_CANDIDATES = [
    "stockfish",
    "/usr/local/bin/stockfish",
    "/usr/bin/stockfish",
    "/usr/games/stockfish",
    "/opt/homebrew/bin/stockfish",
]


def find_engine_binary(engine_path: Optional[str] = None) -> str:
    """
    Locate the UCI engine binary.

    Args:
        engine_path: Explicit path (None = auto-detect Stockfish)

    Returns:
        Path to the engine binary

    Raises:
        FileNotFoundError: If no binary can be found
    """
    if engine_path is not None:
        if Path(engine_path).exists():
            return engine_path
        found = shutil.which(engine_path)
        if found:
            return found
        raise FileNotFoundError(f"UCI engine binary not found at: {engine_path}")

    for candidate in ENGINE_CANDIDATES:
        path = shutil.which(candidate)
        if path:
            return path

    raise FileNotFoundError(
        "Stockfish not found. Install with: brew install stockfish (macOS) "
        "or apt install stockfish (Linux)"
    )


class AnalysisSession(ABC):
    """One request's connection to a backend. Never shared between requests."""

    @abstractmethod
    async def is_ready(self) -> bool:
        """Return True if the backend can take a request right now."""

    @abstractmethod
    async def analyse(self, request: AnalysisRequest) -> AnalysisResponse:
        """Send one request and wait for its best move."""

    async def close(self) -> None:
        """Release whatever this session acquired."""


class AnalysisTransport(ABC):
    """Factory for sessions with an external analysis backend."""

    @abstractmethod
    def session(self) -> AnalysisSession:
        """Create a fresh session owned by a single request."""


class UciEngineSession(AnalysisSession):
    """A single UCI engine process, alive from is_ready() until close()."""

    def __init__(self, engine_path: Optional[str], threads: int, hash_mb: int):
        self.engine_path = engine_path
        self.threads = threads
        self.hash_mb = hash_mb
        self._engine: Optional[chess.engine.UciProtocol] = None

    async def _start(self) -> chess.engine.UciProtocol:
        path = find_engine_binary(self.engine_path)
        _, self._engine = await chess.engine.popen_uci(path)
        engine = self._engine

        options = {}
        if "Threads" in engine.options:
            options["Threads"] = self.threads
        if "Hash" in engine.options:
            options["Hash"] = self.hash_mb
        if options:
            await engine.configure(options)

        logger.debug(f"Started UCI engine {engine.id.get('name', path)}")
        return engine

    async def is_ready(self) -> bool:
        """
        Start the engine process and confirm it answers ``isready``.

        The process stays up for the following analyse() call.
        """
        try:
            engine = self._engine if self._engine is not None else await self._start()
            await engine.ping()
            return True
        except FileNotFoundError as e:
            logger.info(f"External engine unavailable: {e}")
        except (OSError, chess.engine.EngineError) as e:
            logger.warning(f"External engine failed readiness check: {e}")

        await self.close()
        return False

    async def analyse(self, request: AnalysisRequest) -> AnalysisResponse:
        """
        Ask the engine for its best move under a depth and time limit.

        Raises:
            chess.engine.EngineError: On protocol errors
            chess.engine.EngineTerminatedError: If the process dies
        """
        engine = self._engine if self._engine is not None else await self._start()

        board = chess.Board(request.position)
        limit = chess.engine.Limit(depth=request.depth, time=request.movetime_ms / 1000.0)
        result = await engine.play(board, limit)

        best_move = result.move.uci() if result.move is not None else None
        return AnalysisResponse(best_move=best_move)

    async def close(self) -> None:
        """Quit the engine process if one is running."""
        engine, self._engine = self._engine, None
        if engine is None:
            return
        try:
            await engine.quit()
        except chess.engine.EngineError as e:
            logger.debug(f"Engine did not quit cleanly: {e}")


class UciEngineTransport(AnalysisTransport):
    """Talk to a UCI engine binary through chess.engine."""

    def __init__(
        self,
        engine_path: Optional[str] = None,
        threads: int = 1,
        hash_mb: int = 64,
    ):
        """
        Args:
            engine_path: Path to the UCI binary (None = auto-detect)
            threads: Value for the engine's Threads option
            hash_mb: Value for the engine's Hash option (MB)
        """
        self.engine_path = engine_path
        self.threads = threads
        self.hash_mb = hash_mb

    def session(self) -> UciEngineSession:
        """Start-on-demand session; each one runs its own engine process."""
        return UciEngineSession(self.engine_path, self.threads, self.hash_mb)
