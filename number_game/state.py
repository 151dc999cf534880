from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Tuple

from .errors import InvalidInput, InvalidMove

# =========================
# Roles, sides, outcomes
# =========================
class Role(Enum):
    MAX = "max"   # acts to increase score_max - score_min
    MIN = "min"   # acts to decrease it

    @property
    def other(self) -> "Role":
        return Role.MIN if self is Role.MAX else Role.MAX

    @property
    def label(self) -> str:
        return "Player 1" if self is Role.MAX else "Player 2"


class Side(Enum):
    LEFT = "left"
    RIGHT = "right"


class Outcome(Enum):
    MAX_WINS = "max"
    MIN_WINS = "min"
    TIE = "tie"

    @property
    def winner(self):
        """Winning role, or None for a tie."""
        if self is Outcome.MAX_WINS:
            return Role.MAX
        if self is Outcome.MIN_WINS:
            return Role.MIN
        return None


DEFAULT_SEQUENCE: Tuple[int, ...] = (1, 2, 7, 5)
MIN_SEQUENCE_LENGTH = 2

# =========================
# Game state
# =========================
@dataclass(frozen=True)
class GameState:
    sequence: Tuple[int, ...]
    score_max: int = 0
    score_min: int = 0
    to_move: Role = Role.MAX

    @classmethod
    def new(cls, sequence: Iterable[int], starting_role: Role = Role.MAX) -> "GameState":
        return cls(validate_sequence(sequence), 0, 0, starting_role)

    @property
    def is_terminal(self) -> bool:
        return len(self.sequence) == 0

    @property
    def differential(self) -> int:
        return self.score_max - self.score_min

    def score_of(self, role: Role) -> int:
        return self.score_max if role is Role.MAX else self.score_min

    def peek(self, side: Side) -> int:
        """Value that taking from `side` would add to the mover's score."""
        if self.is_terminal:
            raise InvalidMove("No numbers left to take.")
        if side is Side.LEFT:
            return self.sequence[0]
        if side is Side.RIGHT:
            return self.sequence[-1]
        raise InvalidMove(f"Unknown side {side!r}; expected left or right.")


def apply_move(state: GameState, side: Side) -> GameState:
    """Remove one end of the sequence, credit the mover, and pass the turn."""
    if state.is_terminal:
        raise InvalidMove("The game is over: the sequence is empty.")
    taken = state.peek(side)
    rest = state.sequence[1:] if side is Side.LEFT else state.sequence[:-1]
    if state.to_move is Role.MAX:
        return GameState(rest, state.score_max + taken, state.score_min, Role.MIN)
    return GameState(rest, state.score_max, state.score_min + taken, Role.MAX)


def outcome(score_max: int, score_min: int) -> Outcome:
    if score_max > score_min:
        return Outcome.MAX_WINS
    if score_min > score_max:
        return Outcome.MIN_WINS
    return Outcome.TIE

# =========================
# Input handling
# =========================
def validate_sequence(values: Iterable[int]) -> Tuple[int, ...]:
    seq = tuple(values)
    for v in seq:
        if isinstance(v, bool) or not isinstance(v, int):
            raise InvalidInput(f"Sequence entries must be integers, got {v!r}.")
        if v < 0:
            raise InvalidInput(f"Sequence entries must be non-negative, got {v}.")
    if len(seq) < MIN_SEQUENCE_LENGTH:
        raise InvalidInput(f"Sequence must have at least {MIN_SEQUENCE_LENGTH} numbers.")
    return seq


def parse_sequence(text: str) -> Tuple[int, ...]:
    """Parse a comma-separated list such as "1, 2, 7, 5"."""
    if text is None or not text.strip():
        raise InvalidInput("Enter comma-separated non-negative numbers, e.g. 1,2,7,5.")
    values = []
    for token in text.split(","):
        token = token.strip()
        try:
            values.append(int(token))
        except ValueError:
            raise InvalidInput(f"Not a whole number: {token!r}.") from None
    return validate_sequence(values)


def format_sequence(seq: Iterable[int]) -> str:
    return "[" + ", ".join(str(v) for v in seq) + "]"


def index_parity_sums(seq: Iterable[int]) -> Tuple[int, int]:
    """(sum of even-indexed entries, sum of odd-indexed entries)."""
    seq = tuple(seq)
    return sum(seq[0::2]), sum(seq[1::2])
