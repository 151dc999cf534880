import logging
import math
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

from .state import GameState, Role, Side, apply_move

logger = logging.getLogger(__name__)

Path = Tuple[Side, ...]

# Called as factory(state, path, taken, value, children) once a position is
# fully evaluated; children arrive already built, left before right.
NodeFactory = Callable[[GameState, Path, Optional[int], int, list], object]


@dataclass
class SearchStats:
    algorithm: str
    visited: int = 0
    prunes: int = 0
    time_s: float = 0.0
    pruned_paths: List[Path] = field(default_factory=list)


@dataclass(frozen=True)
class SearchResult:
    value: int
    move: Optional[Side]
    stats: SearchStats = field(compare=False, repr=False)


# =========================
# Shared minimax recursion
# =========================
def _minimax(state: GameState, path: Path, taken: Optional[int],
             alpha: float, beta: float, prune: bool, stats: SearchStats,
             factory: Optional[NodeFactory]):
    """
    Alternating minimax over `state`, scored as score_max - score_min.

    Returns (value, move, node). `node` is whatever `factory` built for this
    position, or None when no factory is given. Left is explored first and
    kept unless right is strictly better for the role to move.
    """
    stats.visited += 1
    if state.is_terminal:
        value = state.differential
        node = factory(state, path, taken, value, []) if factory else None
        return value, None, node

    maximizing = state.to_move is Role.MAX
    left_taken = state.sequence[0]
    value, _, left_node = _minimax(apply_move(state, Side.LEFT), path + (Side.LEFT,), left_taken,
                                   alpha, beta, prune, stats, factory)
    move = Side.LEFT
    children = [left_node]
    if maximizing:
        alpha = max(alpha, value)
    else:
        beta = min(beta, value)

    if prune and alpha >= beta:
        stats.prunes += 1
        stats.pruned_paths.append(path + (Side.RIGHT,))
    else:
        right_taken = state.sequence[-1]
        right_value, _, right_node = _minimax(apply_move(state, Side.RIGHT), path + (Side.RIGHT,),
                                              right_taken, alpha, beta, prune, stats, factory)
        children.append(right_node)
        if (maximizing and right_value > value) or (not maximizing and right_value < value):
            value, move = right_value, Side.RIGHT

    node = factory(state, path, taken, value, children) if factory else None
    return value, move, node


def evaluate(state: GameState, prune: bool = True, factory: Optional[NodeFactory] = None,
             algorithm: Optional[str] = None):
    """Run the shared recursion from `state`; returns (value, move, node, stats)."""
    if factory is not None and prune:
        raise ValueError("Materialising a tree requires prune=False.")
    stats = SearchStats(algorithm or ("Alpha–Beta" if prune else "Minimax"))
    t0 = time.perf_counter()
    value, move, node = _minimax(state, (), None, -math.inf, math.inf, prune, stats, factory)
    stats.time_s = time.perf_counter() - t0
    return value, move, node, stats

# =========================
# Search engine
# =========================
def best_move(sequence: Sequence[int], score_max: int = 0, score_min: int = 0,
              role_to_move: Role = Role.MAX, prune: bool = True) -> SearchResult:
    """
    Value-optimal move for `role_to_move` from the given position.

    `value` is always score_max - score_min at the end of optimal play, no
    matter which role is asked. `move` is None only for an empty sequence.
    """
    state = GameState(tuple(sequence), score_max, score_min, role_to_move)
    value, move, _, stats = evaluate(state, prune=prune)
    logger.debug("best_move %s for %s: value=%s move=%s visited=%d prunes=%d",
                 list(state.sequence), role_to_move.value, value,
                 move.value if move else None, stats.visited, stats.prunes)
    return SearchResult(value, move, stats)


def best_move_for(state: GameState, prune: bool = True) -> SearchResult:
    return best_move(state.sequence, state.score_max, state.score_min, state.to_move, prune=prune)
