"""
UCI Protocol Implementation

This module exposes the tiered opponent over the Universal Chess Interface
(UCI), so any chess GUI can play against it at a chosen difficulty.

UCI Commands Supported:
    - uci: Identify engine and list options
    - isready: Synchronization check
    - setoption name Difficulty value <easy|medium|hard|expert>
    - ucinewgame: Start new game
    - position: Set board position
    - go: Select a move ("go depth N" overrides the hard-tier depth)
    - stop: Wait for the running selection
    - quit: Shutdown engine

Threading:
    - Main thread: Listen for UCI commands
    - Selection thread: Run the tier strategy on a copy of the board

References:
    - UCI Protocol: https://www.chessprogramming.org/UCI
"""

import chess
import sys
import threading
import logging
import time
from pathlib import Path
from typing import Optional

from chess_opponent.config import EngineConfig
from chess_opponent.evaluation.scoring import clamp_score, win_probability
from chess_opponent.policy.selector import MoveSelector
from chess_opponent.policy.tiers import DifficultyTier
from chess_opponent.search.minimax import SearchStats

LOG_DIR = Path.home() / ".chess_opponent"


def setup_logger(debug=True):
    """
    Setup file-based logger for UCI debugging.

    stdout belongs to the protocol, so the package logger writes to
    ~/.chess_opponent/engine.log instead.

    Args:
        debug: If True, log at DEBUG level; otherwise INFO level

    Returns:
        Configured logger instance
    """
    LOG_DIR.mkdir(exist_ok=True)
    log_file = LOG_DIR / "engine.log"

    logger = logging.getLogger("chess_opponent")
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    logger.handlers.clear()

    handler = logging.FileHandler(log_file, mode='w')
    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%H:%M:%S'
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


class UCIEngine:
    """
    UCI front end for the tiered opponent.

    Attributes:
        board: Current chess position
        tier: Difficulty used by "go"
        selector: Move policy doing the actual work
        searching: Flag indicating if a selection is in progress
        search_thread: Background thread for the selection
    """

    def __init__(self, config: Optional[EngineConfig] = None, selector=None, debug=True):
        """
        Initialize UCI engine.

        Args:
            config: Engine configuration (default: EngineConfig.from_env())
            selector: Move selector (default: MoveSelector(config))
            debug: Enable debug logging (default: True)
        """
        self.config = config if config is not None else EngineConfig.from_env()
        self.selector = selector if selector is not None else MoveSelector(self.config)
        self.board = chess.Board()
        self.tier = DifficultyTier.HARD

        self.searching = False
        self.search_thread: Optional[threading.Thread] = None

        self.name = "ChessOpponent"
        self.version = "0.1.0"
        self.author = "chess-opponent developers"

        self.logger = setup_logger(debug=debug)
        self.logger.info("=== ChessOpponent Engine Started ===")
        self.logger.info(f"Log file: {LOG_DIR / 'engine.log'}")
        self.logger.debug(repr(self.config))

    def run(self):
        """
        Main UCI command loop.

        Listens for UCI commands on stdin and responds on stdout.
        Runs until 'quit' command is received or stdin closes.
        """
        while True:
            try:
                command = input().strip()

                if not command:
                    continue

                self.logger.debug(f">>> {command}")

                tokens = command.split()
                cmd = tokens[0].lower()

                if cmd == "uci":
                    self.handle_uci()

                elif cmd == "isready":
                    self.handle_isready()

                elif cmd == "setoption":
                    self.handle_setoption(tokens)

                elif cmd == "ucinewgame":
                    self.handle_ucinewgame()

                elif cmd == "position":
                    self.handle_position(tokens)

                elif cmd == "go":
                    self.handle_go(tokens)

                elif cmd == "stop":
                    self.handle_stop()

                elif cmd == "quit":
                    self.handle_quit()
                    break

                else:
                    # Unknown commands are ignored
                    self.logger.debug(f"Unknown command ignored: {command}")

            except EOFError:
                self.logger.info("EOF received, shutting down")
                break
            except Exception as e:
                self.logger.error(f"Command error: {e}", exc_info=True)
                print(f"# Error: {e}", file=sys.stderr)

    def _send(self, line: str):
        print(line)
        sys.stdout.flush()
        self.logger.debug(f"<<< {line}")

    def handle_uci(self):
        """
        Handle 'uci' command - identify engine.

        Response:
            id name ChessOpponent 0.1.0
            id author ...
            option name Difficulty type combo default hard var easy ...
            uciok
        """
        self.logger.info("Handling: uci")

        tiers = " ".join(f"var {t.value}" for t in DifficultyTier)

        self._send(f"id name {self.name} {self.version}")
        self._send(f"id author {self.author}")
        self._send(f"option name Difficulty type combo default {self.tier.value} {tiers}")
        self._send("uciok")

    def handle_isready(self):
        """Handle 'isready' command - synchronization."""
        self.logger.info("Handling: isready")
        self._send("readyok")

    def handle_setoption(self, tokens):
        """
        Handle 'setoption name <name> value <value>'.

        Only the Difficulty option is recognised; others are ignored.
        """
        try:
            name_index = tokens.index("name")
            value_index = tokens.index("value")
        except ValueError:
            self.logger.warning(f"Malformed setoption: {' '.join(tokens)}")
            return

        name = " ".join(tokens[name_index + 1:value_index])
        value = " ".join(tokens[value_index + 1:])

        if name.lower() != "difficulty":
            self.logger.debug(f"Ignoring unknown option: {name}")
            return

        try:
            self.tier = DifficultyTier.parse(value)
        except ValueError as e:
            self.logger.error(str(e))
            print(f"# {e}", file=sys.stderr)
            return

        self.logger.info(f"Difficulty set to {self.tier.value} ({self.tier.info.label})")

    def handle_ucinewgame(self):
        """Handle 'ucinewgame' command - reset for new game."""
        self.logger.info("Handling: ucinewgame - resetting board")
        self.board = chess.Board()

    def handle_position(self, tokens):
        """
        Handle 'position' command - set board position.

        Formats:
            position startpos
            position startpos moves e2e4 e7e5
            position fen <FEN string>
            position fen <FEN string> moves e2e4

        Args:
            tokens: Command tokens (e.g., ['position', 'startpos', 'moves', 'e2e4'])
        """
        self.logger.info(f"Handling: position {' '.join(tokens[1:])}")

        if len(tokens) < 2:
            self.logger.warning("Position command with insufficient arguments")
            return

        if tokens[1] == "startpos":
            self.board = chess.Board()
            move_index = 2
        elif tokens[1] == "fen":
            try:
                moves_index = tokens.index("moves")
                fen = " ".join(tokens[2:moves_index])
                move_index = moves_index
            except ValueError:
                fen = " ".join(tokens[2:])
                move_index = len(tokens)

            try:
                self.board = chess.Board(fen)
            except ValueError as e:
                self.logger.error(f"Invalid FEN: {e}")
                print(f"# Invalid FEN: {e}", file=sys.stderr)
                return
        else:
            self.logger.warning(f"Unknown position type: {tokens[1]}")
            return

        if move_index < len(tokens) and tokens[move_index] == "moves":
            for move_str in tokens[move_index + 1:]:
                try:
                    move = chess.Move.from_uci(move_str)
                except ValueError as e:
                    self.logger.error(f"Invalid move format: {move_str} - {e}")
                    print(f"# Invalid move format: {move_str} - {e}", file=sys.stderr)
                    break

                if move not in self.board.legal_moves:
                    self.logger.error(f"Illegal move: {move_str}")
                    print(f"# Illegal move: {move_str}", file=sys.stderr)
                    break

                self.board.push(move)

        self.logger.debug(f"Full FEN: {self.board.fen()}")

    def handle_go(self, tokens):
        """
        Handle 'go' command - select a move on a background thread.

        Formats:
            go
            go depth 3 (hard tier depth override)

        Time controls are accepted and ignored: each tier has its own
        budget.
        """
        self.logger.info(f"Handling: go {' '.join(tokens[1:])}")

        depth = None
        if "depth" in tokens:
            i = tokens.index("depth")
            if i + 1 < len(tokens):
                try:
                    depth = int(tokens[i + 1])
                except ValueError:
                    self.logger.warning(f"Invalid depth: {tokens[i + 1]}")
                if depth is not None and depth < 1:
                    self.logger.warning(f"Ignoring non-positive depth: {depth}")
                    depth = None

        self.handle_stop()

        # The selection thread gets its own copy of the board
        board_copy = self.board.copy()

        self.searching = True
        self.search_thread = threading.Thread(
            target=self._search_thread,
            args=(board_copy, self.tier, depth),
        )
        self.search_thread.start()

    def _choose(
        self,
        board: chess.Board,
        tier: DifficultyTier,
        depth: Optional[int],
        stats: SearchStats,
    ):
        if tier is DifficultyTier.HARD:
            return self.selector.hard_move(board, depth, stats)
        return self.selector.select_move(board, tier)

    def _search_thread(self, board: chess.Board, tier: DifficultyTier, depth: Optional[int]):
        """
        Background thread for move selection.

        Output:
            info string tier <tier> eval <cp> winprob <pct> time <ms> [nodes <n> cutoffs <n>]
            bestmove <move>
        """
        start_time = time.time()

        try:
            stats = SearchStats()
            move = self._choose(board, tier, depth, stats)
            elapsed_ms = int((time.time() - start_time) * 1000)

            if move is None:
                self.logger.info("No legal moves; sending null move")
                self._send("bestmove 0000")
                return

            board.push(move)
            try:
                score = self.selector.evaluator.evaluate(board)
            finally:
                board.pop()

            mover_score = score if board.turn == chess.WHITE else -score
            search_info = f" nodes {stats.nodes} cutoffs {stats.cutoffs}" if stats.nodes else ""
            self.logger.info(
                f"Selection complete: tier={tier.value} move={move.uci()} "
                f"score={score:.1f} time={elapsed_ms}ms nodes={stats.nodes} cutoffs={stats.cutoffs}"
            )

            self._send(
                f"info string tier {tier.value} eval {clamp_score(mover_score)} "
                f"winprob {win_probability(mover_score):.1f} time {elapsed_ms}{search_info}"
            )
            self._send(f"bestmove {move.uci()}")

        except Exception as e:
            elapsed_time = time.time() - start_time
            self.logger.error(f"Selection error after {elapsed_time:.3f}s: {e}", exc_info=True)
            print(f"# Search error: {e}", file=sys.stderr)

            legal_moves = list(board.legal_moves)
            if legal_moves:
                fallback_move = legal_moves[0].uci()
                self.logger.warning(f"Using fallback move: {fallback_move}")
                self._send(f"bestmove {fallback_move}")
            else:
                self._send("bestmove 0000")

        finally:
            self.searching = False
            self.logger.debug("Selection thread finished")

    def handle_stop(self):
        """
        Handle 'stop' command.

        Selections cannot be interrupted, so this waits for the running one
        to post its bestmove.
        """
        if self.search_thread and self.search_thread.is_alive():
            self.logger.debug("Waiting for selection thread to finish")
            self.search_thread.join()

    def handle_quit(self):
        """Handle 'quit' command - shutdown engine."""
        self.logger.info("Handling: quit - shutting down engine")
        self.handle_stop()
        self.logger.info("=== ChessOpponent Engine Stopped ===")


def main():
    """Run the UCI command loop on stdin/stdout."""
    engine = UCIEngine()
    engine.run()
