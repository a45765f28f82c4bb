"""
Chess Opponent

Move-selection engine for an automated chess opponent. Given any legal
position and a difficulty tier, it picks the next move.

## Architecture

1. **evaluation**: Static position evaluation
   - Abstract Evaluator interface (swappable design)
   - ClassicalEvaluator: material, piece-square tables, mobility
   - Score helpers: win probability, move accuracy

2. **search**: Minimax with alpha-beta pruning
   - Capture/check move ordering
   - Board mutated with push/pop and always restored

3. **policy**: Difficulty tiers
   - easy / medium / hard / expert strategies
   - Cosmetic per-tier thinking delay

4. **external**: Asynchronous bridge to a full-strength UCI engine
   - Silent fallback to the hard tier on any failure

5. **uci**: UCI front end with a Difficulty option

## Quick Start

```python
import chess
from chess_opponent import MoveSelector

selector = MoveSelector()
board = chess.Board()
move = selector.select_move(board, "medium")
print(move.uci())
```

### As a UCI Engine

```bash
python -m chess_opponent.uci
```
"""

__version__ = "0.1.0"
__license__ = "MIT"

from chess_opponent.config import EngineConfig
from chess_opponent.evaluation import ClassicalEvaluator, Evaluator, evaluate
from chess_opponent.search import SearchResult, find_best_move, search
from chess_opponent.policy import DifficultyTier, MoveSelector, thinking_delay
from chess_opponent.external import DelegationResult, ExternalEngineAdapter

__all__ = [
    'EngineConfig',
    'Evaluator',
    'ClassicalEvaluator',
    'evaluate',
    'SearchResult',
    'search',
    'find_best_move',
    'DifficultyTier',
    'MoveSelector',
    'thinking_delay',
    'DelegationResult',
    'ExternalEngineAdapter',
]
