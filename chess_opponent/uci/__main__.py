"""
Main entry point for running the opponent as a UCI engine.

Usage:
    python -m chess_opponent.uci
"""

from chess_opponent.uci.interface import main

if __name__ == "__main__":
    main()
