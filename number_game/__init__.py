"""
Number game solver: two players take numbers from either end of a sequence.

- `search.best_move`: alpha-beta minimax decision for any position
- `tree.build_tree`: exhaustive annotated game tree and its optimal path
- `runner.GameRunner`: turn-based play with interactive or automated roles
"""

from .errors import IllegalConfiguration, InvalidInput, InvalidMove, NumberGameError
from .state import (DEFAULT_SEQUENCE, GameState, Outcome, Role, Side, apply_move,
                    index_parity_sums, outcome, parse_sequence)
from .search import SearchResult, SearchStats, best_move, best_move_for
from .tree import GameNode, TREE_LENGTH_LIMIT, build_tree, optimal_path
from .runner import GamePhase, GameRunner, TurnRecord, analyse, simulate_game

__version__ = "0.1.0"

__all__ = [
    "NumberGameError", "InvalidInput", "InvalidMove", "IllegalConfiguration",
    "DEFAULT_SEQUENCE", "GameState", "Outcome", "Role", "Side",
    "apply_move", "outcome", "parse_sequence", "index_parity_sums",
    "SearchResult", "SearchStats", "best_move", "best_move_for",
    "GameNode", "TREE_LENGTH_LIMIT", "build_tree", "optimal_path",
    "GamePhase", "GameRunner", "TurnRecord", "analyse", "simulate_game",
]
