"""
Exhaustive game tree for the number game.

Every position is expanded (no pruning) and kept in memory, so this is for
explaining and visualising small sequences. Use `search.best_move` to decide
moves on longer ones.
"""
import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple

from .errors import InvalidInput
from .search import Path, evaluate
from .state import GameState, Role, Side, validate_sequence

logger = logging.getLogger(__name__)

# 2**21 - 1 nodes at this length; beyond it the tree gets too big to hold.
TREE_LENGTH_LIMIT = 20


@dataclass
class GameNode:
    sequence: Tuple[int, ...]
    to_move: Role
    score_max: int
    score_min: int
    path: Path = ()
    taken: Optional[int] = None       # value removed by the move that produced this node
    minimax: Optional[int] = None
    is_optimal: bool = False
    children: List["GameNode"] = field(default_factory=list)

    @property
    def move(self) -> Optional[Side]:
        return self.path[-1] if self.path else None

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def depth(self) -> int:
        return len(self.path)

    def child(self, side: Side) -> "GameNode":
        for c in self.children:
            if c.move is side:
                return c
        raise KeyError(side)

    def optimal_children(self) -> List["GameNode"]:
        return [c for c in self.children if c.is_optimal]


def _make_node(state: GameState, path: Path, taken: Optional[int], value: int,
               children: List[GameNode]) -> GameNode:
    for c in children:
        c.is_optimal = c.minimax == value
    return GameNode(state.sequence, state.to_move, state.score_max, state.score_min,
                    path=path, taken=taken, minimax=value, children=children)


def build_tree(sequence: Sequence[int], starting_role: Role = Role.MAX,
               limit: Optional[int] = TREE_LENGTH_LIMIT) -> GameNode:
    seq = validate_sequence(sequence)
    if limit is not None and len(seq) > limit:
        raise InvalidInput(f"Sequences longer than {limit} numbers are too large for the full tree.")
    _, _, root, stats = evaluate(GameState(seq, 0, 0, starting_role), prune=False,
                                 factory=_make_node, algorithm="Full tree")
    logger.debug("built tree for %s: %d nodes in %.3fs", list(seq), stats.visited, stats.time_s)
    return root


def optimal_path(root: GameNode) -> List[GameNode]:
    """Root-to-leaf line that always takes the first (leftmost) optimal child."""
    path = [root]
    node = root
    while node.children:
        nxt = next((c for c in node.children if c.is_optimal), None)
        if nxt is None:
            break
        path.append(nxt)
        node = nxt
    return path


def iter_nodes(root: GameNode) -> Iterator[GameNode]:
    """Pre-order walk, left subtree before right."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def count_nodes(root: GameNode) -> int:
    return sum(1 for _ in iter_nodes(root))


def find_node(root: GameNode, path: Path) -> GameNode:
    node = root
    for side in path:
        node = node.child(side)
    return node
