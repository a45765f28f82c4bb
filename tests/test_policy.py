"""
Unit Tests for the Move Policy

Tests for tier dispatch and each move-selection strategy:
    - easy: capture-biased random moves
    - medium: one-ply evaluation with top-N sampling
    - hard: alpha-beta search
    - expert: external delegation with fallback to hard
"""

import asyncio
import random
from unittest.mock import MagicMock

import chess
import pytest

from chess_opponent.config import EngineConfig
from chess_opponent.evaluation import ClassicalEvaluator
from chess_opponent.external import ExternalEngineAdapter
from chess_opponent.policy import (
    TIER_INFO,
    DifficultyTier,
    MoveSelector,
    TierInfo,
    thinking_delay,
)
from chess_opponent.policy.tiers import THINKING_DELAYS
from chess_opponent.search import find_best_move

from tests.conftest import (
    BLACK_CHECKMATED,
    FORCED_MOVE,
    MATE_IN_ONE_AMONG_CHECKS,
    MATE_IN_ONE_BLACK,
    MATE_IN_ONE_WHITE,
    STALEMATE,
    WHITE_CHECKMATED,
    FakeTransport,
)

ALL_TIERS = list(DifficultyTier)

# White king is checked by the pawn on d2 and can take it
ONE_CAPTURE = "4k3/8/8/8/8/8/3p4/4K3 w - - 0 1"


def scripted_rng(value):
    """Random source whose random() returns ``value`` and choice() takes the first item."""
    rng = MagicMock()
    rng.random.return_value = value
    rng.choice.side_effect = lambda seq: seq[0]
    return rng


@pytest.fixture
def selector(failing_adapter):
    """Seeded, shallow selector whose expert tier always has to fall back."""
    return MoveSelector(EngineConfig(random_seed=7, hard_depth=2), adapter=failing_adapter)


class TestDifficultyTier:
    """Tests for the tier enumeration and its metadata."""

    @pytest.mark.parametrize("name", ["easy", "MEDIUM", " Hard ", "expert"])
    def test_parse_names(self, name):
        assert DifficultyTier.parse(name).value == name.strip().lower()

    def test_parse_tier_is_identity(self):
        assert DifficultyTier.parse(DifficultyTier.HARD) is DifficultyTier.HARD

    def test_unknown_tier_raises(self):
        with pytest.raises(ValueError, match="grandmaster"):
            DifficultyTier.parse("grandmaster")

    def test_every_tier_has_info(self):
        assert set(TIER_INFO) == set(DifficultyTier)
        for tier in DifficultyTier:
            assert isinstance(tier.info, TierInfo)
            assert tier.info.label and tier.info.description and tier.info.elo

    def test_tiers_are_strings(self):
        assert DifficultyTier.EASY == "easy"


class TestThinkingDelay:
    """Tests for the cosmetic per-tier delay."""

    @pytest.mark.parametrize("tier", ["easy", "medium", "hard"])
    def test_delay_within_range(self, tier):
        low, high = THINKING_DELAYS[DifficultyTier(tier)]
        rng = random.Random(1)

        for _ in range(50):
            assert low <= thinking_delay(tier, rng) <= high

    def test_expert_delay_is_fixed(self):
        assert thinking_delay("expert") == 0.2
        assert thinking_delay(DifficultyTier.EXPERT, random.Random(3)) == 0.2

    def test_delays_scale_with_tier(self):
        assert THINKING_DELAYS[DifficultyTier.EASY][1] < THINKING_DELAYS[DifficultyTier.HARD][1]


class TestSelectMoveContract:
    """Properties that hold for every tier."""

    @pytest.mark.parametrize("tier", ALL_TIERS)
    @pytest.mark.parametrize(
        "fen",
        [
            chess.STARTING_FEN,
            "r1bqkbnr/pppp1ppp/2n5/4p3/4P3/5N2/PPPP1PPP/RNBQKB1R w KQkq - 2 3",
            MATE_IN_ONE_BLACK,
            ONE_CAPTURE,
        ],
    )
    def test_returns_legal_move(self, selector, tier, fen):
        board = chess.Board(fen)

        move = selector.select_move(board, tier)

        assert move in board.legal_moves
        board.push(move)
        assert board.is_valid()

    @pytest.mark.parametrize("tier", ALL_TIERS)
    @pytest.mark.parametrize("fen", [WHITE_CHECKMATED, BLACK_CHECKMATED, STALEMATE])
    def test_no_legal_moves_returns_none(self, selector, tier, fen):
        board = chess.Board(fen)

        assert selector.select_move(board, tier) is None

    @pytest.mark.parametrize("tier", ALL_TIERS)
    def test_forced_move_all_tiers(self, selector, tier):
        """With one legal move every tier must play it."""
        board = chess.Board(FORCED_MOVE)

        assert selector.select_move(board, tier) == chess.Move.from_uci("a1a2")

    @pytest.mark.parametrize("tier", ALL_TIERS)
    def test_board_is_restored(self, selector, tier):
        board = chess.Board("r1bqkbnr/pppp1ppp/2n5/4p3/4P3/5N2/PPPP1PPP/RNBQKB1R w KQkq - 2 3")
        fen = board.fen()

        selector.select_move(board, tier)

        assert board.fen() == fen
        assert board.move_stack == []

    def test_unknown_tier_raises(self, selector):
        with pytest.raises(ValueError):
            selector.select_move(chess.Board(), "impossible")

    def test_async_entry_point(self, selector):
        board = chess.Board(MATE_IN_ONE_WHITE)

        move = asyncio.run(selector.select_move_async(board, "hard"))

        assert move == chess.Move.from_uci("a1a8")


class TestEasyTier:
    """Tests for capture-biased random selection."""

    def test_starting_position(self):
        """Every easy move from the start is one of the 20 legal openings."""
        board = chess.Board()
        legal = set(board.legal_moves)
        assert len(legal) == 20

        for seed in range(25):
            selector = MoveSelector(EngineConfig(random_seed=seed))
            assert selector.select_move(board, "easy") in legal

    def test_capture_branch(self):
        board = chess.Board(ONE_CAPTURE)
        selector = MoveSelector(rng=scripted_rng(0.0))

        assert selector.easy_move(board) == chess.Move.from_uci("e1d2")
        selector.rng.choice.assert_called_once_with([chess.Move.from_uci("e1d2")])

    def test_uniform_branch(self):
        board = chess.Board(ONE_CAPTURE)
        selector = MoveSelector(rng=scripted_rng(0.99))

        move = selector.easy_move(board)

        assert selector.rng.choice.call_args.args[0] == list(board.legal_moves)
        assert move == list(board.legal_moves)[0]

    def test_no_captures_skips_bias_roll(self):
        board = chess.Board()
        selector = MoveSelector(rng=scripted_rng(0.0))

        selector.easy_move(board)

        selector.rng.random.assert_not_called()

    def test_capture_frequency(self):
        """About 30% bias plus the uniform share of the single capture."""
        board = chess.Board(ONE_CAPTURE)
        selector = MoveSelector(EngineConfig(random_seed=123))
        capture = chess.Move.from_uci("e1d2")
        expected = 0.3 + 0.7 / board.legal_moves.count()

        hits = sum(selector.easy_move(board) == capture for _ in range(2000))

        assert abs(hits / 2000 - expected) < 0.05


class TestMediumTier:
    """Tests for one-ply evaluation with occasional top-N sampling."""

    def test_best_move_path(self):
        board = chess.Board(MATE_IN_ONE_WHITE)
        selector = MoveSelector(rng=scripted_rng(0.99))

        assert selector.medium_move(board) == chess.Move.from_uci("a1a8")

    def test_black_minimises(self):
        board = chess.Board(MATE_IN_ONE_BLACK)
        selector = MoveSelector(rng=scripted_rng(0.99))

        assert selector.medium_move(board) == chess.Move.from_uci("d8h4")

    def test_rerank_path_samples_top_three(self):
        board = chess.Board("r1bqkbnr/pppp1ppp/2n5/4p3/4P3/5N2/PPPP1PPP/RNBQKB1R w KQkq - 2 3")
        evaluator = ClassicalEvaluator()
        selector = MoveSelector(evaluator=evaluator, rng=scripted_rng(0.0))

        selector.medium_move(board)

        candidates = selector.rng.choice.call_args.args[0]
        assert len(candidates) == 3

        scores = []
        for move in board.legal_moves:
            board.push(move)
            scores.append(evaluator.evaluate(board))
            board.pop()
        top_three = sorted(scores, reverse=True)[:3]

        for move in candidates:
            board.push(move)
            assert evaluator.evaluate(board) in top_three
            board.pop()

    def test_rerank_with_fewer_moves_than_top_n(self):
        board = chess.Board(FORCED_MOVE)
        selector = MoveSelector(rng=scripted_rng(0.0))

        assert selector.medium_move(board) == chess.Move.from_uci("a1a2")
        assert selector.rng.choice.call_args.args[0] == [chess.Move.from_uci("a1a2")]

    def test_rerank_probability_zero_is_greedy(self):
        board = chess.Board(MATE_IN_ONE_WHITE)
        selector = MoveSelector(EngineConfig(medium_rerank_probability=0.0, random_seed=1))

        for _ in range(10):
            assert selector.medium_move(board) == chess.Move.from_uci("a1a8")


class TestHardTier:
    """Tests for the deep-search tier."""

    def test_default_depth(self):
        assert MoveSelector().config.hard_depth == 4

    def test_mate_in_one(self, failing_adapter):
        board = chess.Board(MATE_IN_ONE_WHITE)
        selector = MoveSelector(adapter=failing_adapter)

        move = selector.select_move(board, "hard")

        assert move == chess.Move.from_uci("a1a8")
        board.push(move)
        assert board.is_checkmate()

    def test_prefers_immediate_mate_over_slower_checks(self, failing_adapter):
        board = chess.Board(MATE_IN_ONE_AMONG_CHECKS)
        selector = MoveSelector(adapter=failing_adapter)

        move = selector.select_move(board, "hard")

        assert move == chess.Move.from_uci("a2a8")
        board.push(move)
        assert board.is_checkmate()

    def test_matches_search_at_configured_depth(self):
        board = chess.Board("r1bqkbnr/pppp1ppp/2n5/4p3/4P3/5N2/PPPP1PPP/RNBQKB1R w KQkq - 2 3")
        selector = MoveSelector(EngineConfig(hard_depth=2))

        assert selector.select_move(board, "hard") == find_best_move(board, 2).move

    def test_depth_override(self):
        board = chess.Board(MATE_IN_ONE_BLACK)
        selector = MoveSelector()

        assert selector.hard_move(board, depth=1) == chess.Move.from_uci("d8h4")

    @pytest.mark.parametrize("depth", [0, -1])
    def test_non_positive_depth_rejected(self, selector, depth):
        board = chess.Board()

        with pytest.raises(ValueError):
            selector.hard_move(board, depth=depth)

        assert board.fen() == chess.STARTING_FEN


class TestExpertTier:
    """Tests for delegation and fallback."""

    def test_uses_external_move(self):
        transport = FakeTransport(best_move="g1f3")
        selector = MoveSelector(
            EngineConfig(expert_depth=12, expert_movetime_ms=300),
            adapter=ExternalEngineAdapter(transport),
        )
        board = chess.Board()

        assert selector.select_move(board, "expert") == chess.Move.from_uci("g1f3")

        request = transport.requests[0]
        assert request.position == chess.STARTING_FEN
        assert request.depth == 12
        assert request.movetime_ms == 300

    @pytest.mark.parametrize(
        "fen",
        [
            MATE_IN_ONE_WHITE,
            MATE_IN_ONE_BLACK,
            "r1bqkbnr/pppp1ppp/2n5/4p3/4P3/5N2/PPPP1PPP/RNBQKB1R w KQkq - 2 3",
        ],
    )
    def test_failure_falls_back_to_hard(self, failing_adapter, fen):
        config = EngineConfig(hard_depth=3)
        selector = MoveSelector(config, adapter=failing_adapter)
        board = chess.Board(fen)

        assert selector.select_move(board, "expert") == selector.select_move(board, "hard")

    def test_unavailable_falls_back_to_hard(self, unavailable_adapter):
        selector = MoveSelector(adapter=unavailable_adapter)
        board = chess.Board(MATE_IN_ONE_WHITE)

        assert selector.select_move(board, "expert") == chess.Move.from_uci("a1a8")

    def test_illegal_answer_falls_back_to_hard(self):
        selector = MoveSelector(adapter=ExternalEngineAdapter(FakeTransport(best_move="e2e5")))
        board = chess.Board(MATE_IN_ONE_WHITE)

        assert selector.select_move(board, "expert") == chess.Move.from_uci("a1a8")

    def test_no_delegation_without_legal_moves(self):
        transport = FakeTransport(best_move="e2e4")
        selector = MoveSelector(adapter=ExternalEngineAdapter(transport))

        assert selector.select_move(chess.Board(STALEMATE), "expert") is None
        assert transport.requests == []

    def test_async_expert_inside_running_loop(self):
        transport = FakeTransport(best_move="e7e5")
        selector = MoveSelector(adapter=ExternalEngineAdapter(transport))
        board = chess.Board()
        board.push_san("e4")

        async def play():
            return await selector.select_move_async(board, DifficultyTier.EXPERT)

        assert asyncio.run(play()) == chess.Move.from_uci("e7e5")

    def test_request_timeout_comes_from_config(self, caplog):
        transport = FakeTransport(best_move="g1f3", delay=0.5)
        config = EngineConfig(hard_depth=2, expert_movetime_ms=10, request_timeout_grace_ms=0)
        selector = MoveSelector(config, adapter=ExternalEngineAdapter(transport))
        board = chess.Board()

        with caplog.at_level("WARNING", logger="chess_opponent"):
            move = selector.select_move(board, "expert")

        assert "timed out" in caplog.text
        assert move == selector.hard_move(board)
        assert transport.closed == 1
