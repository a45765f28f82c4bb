"""
Move Policy / Difficulty Selector

Maps a requested difficulty tier to one of four move-selection strategies:

    easy   → random move, biased toward captures
    medium → one-ply evaluation with occasional top-N sampling
    hard   → minimax with alpha-beta pruning (HARD_DEPTH plies)
    expert → external analysis engine, falling back to hard

Every strategy returns either a legal move of the given position or None
when the side to move has no legal moves. Telling checkmate from
stalemate is left to the caller.
"""

import asyncio
import logging
import random
from typing import List, Optional, Tuple

import chess

from chess_opponent.config import EngineConfig
from chess_opponent.evaluation.base import Evaluator
from chess_opponent.evaluation.classical import ClassicalEvaluator
from chess_opponent.external.adapter import DelegationResult, ExternalEngineAdapter
from chess_opponent.external.transport import UciEngineTransport
from chess_opponent.policy.tiers import DifficultyTier
from chess_opponent.search.minimax import SearchStats, find_best_move

logger = logging.getLogger(__name__)


class MoveSelector:
    """
    Choose the opponent's next move for a difficulty tier.

    Attributes:
        config: Tuning constants for every tier
        evaluator: Position evaluator shared by medium and hard
        adapter: External engine adapter used by expert
        rng: Random generator for easy and medium
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        evaluator: Optional[Evaluator] = None,
        adapter: Optional[ExternalEngineAdapter] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config if config is not None else EngineConfig()
        self.evaluator = evaluator if evaluator is not None else ClassicalEvaluator()

        if adapter is None:
            transport = UciEngineTransport(
                engine_path=self.config.engine_path,
                threads=self.config.engine_threads,
                hash_mb=self.config.engine_hash_mb,
            )
            adapter = ExternalEngineAdapter(transport)
        self.adapter = adapter

        self.rng = rng if rng is not None else random.Random(self.config.random_seed)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def select_move(self, board: chess.Board, tier) -> Optional[chess.Move]:
        """
        Choose a move for the side to move.

        The expert tier runs its external request on a fresh event loop;
        use select_move_async() from inside a running loop.

        Args:
            board: Position to play in (restored before returning)
            tier: DifficultyTier or tier name

        Returns:
            A legal move, or None if there are no legal moves

        Raises:
            ValueError: If tier names no difficulty tier
        """
        tier = DifficultyTier.parse(tier)

        if tier is DifficultyTier.EXPERT:
            return asyncio.run(self.select_move_async(board, tier))

        return self._select_local(board, tier)

    async def select_move_async(self, board: chess.Board, tier) -> Optional[chess.Move]:
        """Coroutine form of select_move()."""
        tier = DifficultyTier.parse(tier)

        if tier is DifficultyTier.EXPERT:
            return await self.expert_move(board)

        return self._select_local(board, tier)

    def _select_local(self, board: chess.Board, tier: DifficultyTier) -> Optional[chess.Move]:
        logger.debug(f"Selecting {tier.value} move in {board.fen()}")

        if tier is DifficultyTier.EASY:
            return self.easy_move(board)
        elif tier is DifficultyTier.MEDIUM:
            return self.medium_move(board)
        elif tier is DifficultyTier.HARD:
            return self.hard_move(board)
        else:
            raise ValueError(f"{tier.value} is not a local strategy")

    # ------------------------------------------------------------------
    # Strategies
    # ------------------------------------------------------------------

    def easy_move(self, board: chess.Board) -> Optional[chess.Move]:
        """Random move; captures are preferred with probability easy_capture_bias."""
        moves = list(board.legal_moves)
        if not moves:
            return None

        captures = [move for move in moves if board.is_capture(move)]
        if captures and self.rng.random() < self.config.easy_capture_bias:
            return self.rng.choice(captures)

        return self.rng.choice(moves)

    def _one_ply_scores(self, board: chess.Board) -> List[Tuple[chess.Move, float]]:
        scores = []
        for move in list(board.legal_moves):
            board.push(move)
            try:
                scores.append((move, self.evaluator.evaluate(board)))
            finally:
                board.pop()
        return scores

    def medium_move(self, board: chess.Board) -> Optional[chess.Move]:
        """
        Best one-ply move, or with probability medium_rerank_probability a
        uniform pick among the medium_top_n best.

        The two paths each run their own pass over the moves.
        """
        white = board.turn == chess.WHITE

        best_move = None
        best_score = -float("inf") if white else float("inf")
        for move, score in self._one_ply_scores(board):
            if (white and score > best_score) or (not white and score < best_score):
                best_score = score
                best_move = move

        if best_move is None:
            return None

        if self.rng.random() < self.config.medium_rerank_probability:
            ranked = sorted(self._one_ply_scores(board), key=lambda item: item[1], reverse=white)
            top = [move for move, _ in ranked[: self.config.medium_top_n]]
            return self.rng.choice(top)

        return best_move

    def hard_move(
        self,
        board: chess.Board,
        depth: Optional[int] = None,
        stats: Optional[SearchStats] = None,
    ) -> Optional[chess.Move]:
        """
        Alpha-beta search at config.hard_depth (or ``depth``).

        Raises:
            ValueError: If depth is less than 1
        """
        depth = self.config.hard_depth if depth is None else depth
        if depth < 1:
            raise ValueError(f"hard_move depth must be >= 1, got {depth}")
        return find_best_move(board, depth, self.evaluator, stats).move

    async def expert_move(self, board: chess.Board) -> Optional[chess.Move]:
        """External engine move, or the hard move if delegation fails."""
        if not any(board.legal_moves):
            return None

        result: DelegationResult = await self.adapter.request_move(
            board,
            depth=self.config.expert_depth,
            movetime_ms=self.config.expert_movetime_ms,
            timeout=self.config.request_timeout,
        )

        if result.ok:
            logger.info(f"Expert move from external engine: {result.move.uci()}")
            return result.move

        logger.warning(f"Expert delegation failed ({result.reason}); falling back to hard")
        return self.hard_move(board)
