"""
External Engine Adapter

Asynchronous bridge between the move policy and the high-strength
analysis process. request_move() never raises: every failure mode
(engine missing, timeout, transport error, malformed or illegal answer)
comes back as a failed DelegationResult, and the caller decides how to
degrade.

Request Flow:
    1. session = transport.session()    (one per request)
    2. session.is_ready()               → "unavailable" if False
    3. session.analyse(request)         → bounded by asyncio.wait_for
    4. resolve_move(board, best_move)   → "no-move" / "malformed" / "illegal"
    5. session.close()                  (always)
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

import chess

from chess_opponent.external.protocol import AnalysisRequest, resolve_move
from chess_opponent.external.transport import AnalysisTransport, UciEngineTransport

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_GRACE = 2.0  # seconds on top of the movetime budget


@dataclass(frozen=True)
class DelegationResult:
    """Outcome of one delegation: a legal move, or the reason there is none."""

    move: Optional[chess.Move] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.move is not None

    @classmethod
    def success(cls, move: chess.Move) -> "DelegationResult":
        return cls(move=move)

    @classmethod
    def failure(cls, reason: str) -> "DelegationResult":
        return cls(reason=reason)


class ExternalEngineAdapter:
    """
    Delegate move selection to an external analysis process.

    Attributes:
        transport: Backend connection (default: UciEngineTransport)
        timeout_grace: Seconds allowed beyond the movetime budget
    """

    def __init__(
        self,
        transport: Optional[AnalysisTransport] = None,
        timeout_grace: float = DEFAULT_TIMEOUT_GRACE,
    ):
        self.transport = transport if transport is not None else UciEngineTransport()
        self.timeout_grace = timeout_grace

    def _timeout(self, movetime_ms: int) -> float:
        return movetime_ms / 1000.0 + self.timeout_grace

    async def request_move(
        self,
        board: chess.Board,
        depth: int,
        movetime_ms: int,
        timeout: Optional[float] = None,
    ) -> DelegationResult:
        """
        Ask the external engine for a move in ``board``.

        The caller's board is not touched; a private copy is used to
        validate the answer.

        Args:
            board: Position to play in
            depth: Depth budget for the external engine
            movetime_ms: Time budget in milliseconds
            timeout: Seconds allowed per step (default: movetime + timeout_grace)

        Returns:
            DelegationResult with a legal move, or a failure reason
        """
        position = board.copy(stack=False)
        if timeout is None:
            timeout = self._timeout(movetime_ms)
        session = None

        try:
            session = self.transport.session()
            ready = await asyncio.wait_for(session.is_ready(), timeout)
            if not ready:
                logger.warning("External engine not ready; delegation skipped")
                return DelegationResult.failure("unavailable")

            request = AnalysisRequest(
                position=position.fen(),
                depth=depth,
                movetime_ms=movetime_ms,
            )
            response = await asyncio.wait_for(session.analyse(request), timeout)

            return self._resolve(position, response.best_move)

        except asyncio.TimeoutError:
            logger.warning(f"External engine timed out after {timeout:.1f}s")
            return DelegationResult.failure("timeout")
        except Exception as e:
            logger.warning(f"External engine request failed: {e}", exc_info=True)
            return DelegationResult.failure("error")
        finally:
            if session is not None:
                try:
                    await session.close()
                except Exception as e:
                    logger.debug(f"Session close failed: {e}")

    def _resolve(self, board: chess.Board, best_move: Optional[str]) -> DelegationResult:
        """Match the engine's answer against the legal moves."""
        if not best_move:
            logger.warning("External engine returned no move")
            return DelegationResult.failure("no-move")

        try:
            move = resolve_move(board, best_move)
        except ValueError as e:
            logger.warning(f"External engine returned a malformed move: {e}")
            return DelegationResult.failure("malformed")

        if move is None:
            logger.warning(f"External engine move {best_move} is not legal in {board.fen()}")
            return DelegationResult.failure("illegal")

        logger.debug(f"External engine chose {move.uci()}")
        return DelegationResult.success(move)
