"""
Tests for game state, move application and input parsing.
"""

import pytest

from number_game.errors import InvalidInput, InvalidMove
from number_game.state import (GameState, Outcome, Role, Side, apply_move, index_parity_sums,
                               outcome, parse_sequence, validate_sequence)


class TestApplyMove:

    def test_left_credits_mover_and_flips_turn(self, classic):
        s = apply_move(GameState.new(classic), Side.LEFT)
        assert s.sequence == (2, 7, 5)
        assert (s.score_max, s.score_min) == (1, 0)
        assert s.to_move is Role.MIN

    def test_right_credits_min_role(self):
        s = apply_move(GameState((3, 9), 1, 0, Role.MIN), Side.RIGHT)
        assert s.sequence == (3,)
        assert (s.score_max, s.score_min) == (1, 9)
        assert s.to_move is Role.MAX

    def test_input_state_untouched(self, classic):
        s0 = GameState.new(classic)
        apply_move(s0, Side.RIGHT)
        assert s0 == GameState(classic, 0, 0, Role.MAX)

    def test_empty_sequence_is_invalid_move(self):
        with pytest.raises(InvalidMove):
            apply_move(GameState((), 3, 4, Role.MAX), Side.LEFT)

    def test_unknown_side_is_invalid_move(self, classic):
        with pytest.raises(InvalidMove):
            apply_move(GameState.new(classic), "left")

    def test_conservation_along_any_line(self, classic):
        s = GameState.new(classic)
        total = sum(classic)
        for side in (Side.RIGHT, Side.LEFT, Side.RIGHT, Side.LEFT):
            s = apply_move(s, side)
            assert s.score_max + s.score_min + sum(s.sequence) == total
        assert s.is_terminal


class TestOutcome:

    @pytest.mark.parametrize("a, b, expected", [
        (8, 7, Outcome.MAX_WINS),
        (3, 10, Outcome.MIN_WINS),
        (5, 5, Outcome.TIE),
        (0, 0, Outcome.TIE),
    ])
    def test_outcome(self, a, b, expected):
        assert outcome(a, b) is expected

    def test_winner_roles(self):
        assert Outcome.MAX_WINS.winner is Role.MAX
        assert Outcome.MIN_WINS.winner is Role.MIN
        assert Outcome.TIE.winner is None


class TestParsing:

    @pytest.mark.parametrize("text, expected", [
        ("1,2,7,5", (1, 2, 7, 5)),
        (" 4 , 1 ", (4, 1)),
        ("0,0", (0, 0)),
    ])
    def test_valid(self, text, expected):
        assert parse_sequence(text) == expected

    @pytest.mark.parametrize("text", [
        "1,2,-1",     # negative value
        "1,two,3",    # non-numeric
        "1.5,2",      # not a whole number
        "7",          # too short
        "",           # nothing
        "1,,2",       # empty token
    ])
    def test_rejected(self, text):
        with pytest.raises(InvalidInput):
            parse_sequence(text)

    def test_invalid_input_is_value_error(self):
        with pytest.raises(ValueError):
            parse_sequence("1,2,-1")

    def test_validate_rejects_bools_and_floats(self):
        with pytest.raises(InvalidInput):
            validate_sequence([True, 2])
        with pytest.raises(InvalidInput):
            validate_sequence([1.0, 2])


def test_index_parity_sums(classic):
    assert index_parity_sums(classic) == (8, 7)
    assert index_parity_sums((5,)) == (5, 0)


def test_role_helpers():
    assert Role.MAX.other is Role.MIN
    assert Role.MIN.other is Role.MAX
    assert Role.MAX.label == "Player 1"
