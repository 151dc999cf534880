"""
Turn-based game runner.

A runner owns one live GameState. Each role gets a move source: interactive
(moves come from `play`) or automated (moves come from the search engine via
`play_automated`). Every accepted move is appended to the history; rejected
moves raise InvalidMove and leave the runner untouched.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from .errors import IllegalConfiguration, InvalidMove
from .search import SearchResult, best_move_for
from .state import GameState, Outcome, Role, Side, apply_move, format_sequence, outcome

logger = logging.getLogger(__name__)


class GamePhase(Enum):
    IN_PROGRESS = "in_progress"
    OVER = "over"


@dataclass(frozen=True)
class TurnRecord:
    role: Role
    side: Side
    taken: int


class GameRunner:
    def __init__(self, sequence: Optional[Iterable[int]], starting_role: Optional[Role],
                 automated: Iterable[Role] = (Role.MIN,), prune: bool = True):
        if sequence is None:
            raise IllegalConfiguration("No starting sequence was set.")
        if not isinstance(starting_role, Role):
            raise IllegalConfiguration("No starting role was set.")
        self._state = GameState.new(sequence, starting_role)
        self._initial = self._state.sequence
        self._starting_role = starting_role
        self._automated = frozenset(automated)
        self._prune = prune
        self._history: List[TurnRecord] = []
        self._phase = GamePhase.IN_PROGRESS
        self._outcome: Optional[Outcome] = None
        self.last_search: Optional[SearchResult] = None

    def reset(self, sequence: Optional[Iterable[int]] = None,
              starting_role: Optional[Role] = None) -> "GameRunner":
        """Fresh runner; this one is left as it was."""
        return GameRunner(self._initial if sequence is None else sequence,
                          starting_role or self._starting_role,
                          automated=self._automated, prune=self._prune)

    # ---- read-only views ----
    @property
    def state(self) -> GameState:
        return self._state

    @property
    def initial_sequence(self) -> Tuple[int, ...]:
        return self._initial

    @property
    def starting_role(self) -> Role:
        return self._starting_role

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def is_over(self) -> bool:
        return self._phase is GamePhase.OVER

    @property
    def outcome(self) -> Optional[Outcome]:
        return self._outcome

    @property
    def history(self) -> Tuple[TurnRecord, ...]:
        return tuple(self._history)

    @property
    def to_move(self) -> Role:
        return self._state.to_move

    def is_automated(self, role: Role) -> bool:
        return role in self._automated

    @property
    def automated_turn(self) -> bool:
        return not self.is_over and self.is_automated(self._state.to_move)

    # ---- transitions ----
    def play(self, role: Role, side: Side) -> TurnRecord:
        """Apply an interactive move for `role`."""
        self._check_turn(role)
        if self.is_automated(role):
            raise InvalidMove(f"{role.label} is played by the computer.")
        return self._apply(side)

    def play_automated(self) -> TurnRecord:
        """Ask the search engine for the current role's move and apply it."""
        role = self._state.to_move
        self._check_turn(role)
        if not self.is_automated(role):
            raise InvalidMove(f"{role.label} is waiting for an interactive move.")
        result = best_move_for(self._state, prune=self._prune)
        self.last_search = result
        return self._apply(result.move)

    def advance(self) -> List[TurnRecord]:
        """Play automated moves until an interactive role must move or the game ends."""
        played = []
        while self.automated_turn:
            played.append(self.play_automated())
        return played

    def run_to_end(self) -> List[TurnRecord]:
        if not {Role.MAX, Role.MIN} <= self._automated:
            raise IllegalConfiguration("run_to_end needs both roles automated.")
        return self.advance()

    def _check_turn(self, role: Role) -> None:
        if self.is_over:
            raise InvalidMove("The game is already over.")
        if role is not self._state.to_move:
            raise InvalidMove(f"It is {self._state.to_move.label}'s turn, not {role.label}'s.")

    def _apply(self, side: Side) -> TurnRecord:
        role = self._state.to_move
        taken = self._state.peek(side)
        self._state = apply_move(self._state, side)
        record = TurnRecord(role, side, taken)
        self._history.append(record)
        logger.info("%s takes %d from the %s; remaining %s; scores %d-%d",
                    role.label, taken, side.value, format_sequence(self._state.sequence),
                    self._state.score_max, self._state.score_min)
        if self._state.is_terminal:
            self._phase = GamePhase.OVER
            self._outcome = outcome(self._state.score_max, self._state.score_min)
            logger.info("game over: %s (%d-%d)", self._outcome.value,
                        self._state.score_max, self._state.score_min)
        return record


def simulate_game(sequence: Iterable[int], starting_role: Role = Role.MAX,
                  prune: bool = True) -> GameRunner:
    """Both roles play optimally from the start; returns the finished runner."""
    runner = GameRunner(sequence, starting_role, automated=(Role.MAX, Role.MIN), prune=prune)
    runner.run_to_end()
    return runner


@dataclass(frozen=True)
class Analysis:
    sequence: Tuple[int, ...]
    first: Role
    move: Side
    taken: int
    value: int

    @property
    def verdict(self) -> str:
        """Whether the first mover can guarantee a win, a tie, or neither."""
        margin = self.value if self.first is Role.MAX else -self.value
        if margin > 0:
            return "win"
        if margin == 0:
            return "tie"
        return "loss"


def analyse(sequence: Iterable[int], first: Role = Role.MAX) -> Analysis:
    state = GameState.new(sequence, first)
    result = best_move_for(state)
    return Analysis(state.sequence, first, result.move, state.peek(result.move), result.value)
