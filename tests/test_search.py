"""
Tests for the alpha-beta search engine.
"""

import pytest

from number_game.search import best_move, evaluate
from number_game.state import GameState, Role, Side, index_parity_sums
from number_game.tree import build_tree


class TestScenarios:

    def test_classic_opening(self, classic):
        r = best_move(classic, 0, 0, Role.MAX)
        assert (r.value, r.move) == (1, Side.LEFT)

    def test_two_numbers(self):
        r = best_move([4, 1], 0, 0, Role.MAX)
        assert (r.value, r.move) == (3, Side.LEFT)

    def test_greedy_is_not_optimal(self):
        # Taking 5 exposes the 7.
        r = best_move([1, 2, 7, 5])
        assert r.move is Side.LEFT

    def test_min_role_value_keeps_fixed_perspective(self):
        r = best_move([4, 1], 0, 0, Role.MIN)
        assert (r.value, r.move) == (-3, Side.LEFT)

    def test_scores_carry_into_value(self):
        r = best_move([4, 1], 10, 2, Role.MAX)
        assert r.value == 8 + 3

    def test_right_chosen_when_strictly_better(self):
        r = best_move([1, 9], 0, 0, Role.MAX)
        assert (r.value, r.move) == (8, Side.RIGHT)

    def test_empty_sequence_has_no_move(self):
        r = best_move([], 6, 4, Role.MIN)
        assert (r.value, r.move) == (2, None)

    @pytest.mark.parametrize("role, value", [(Role.MAX, 1), (Role.MIN, -1)])
    def test_tied_root_prefers_left(self, role, value):
        # Both ends of [2, 1, 0, 2] lead to the same value.
        seq = (2, 1, 0, 2)
        tree = build_tree(seq, role)
        assert all(c.is_optimal for c in tree.children)
        r = best_move(seq, 0, 0, role)
        assert (r.value, r.move) == (value, Side.LEFT)


class TestPruning:

    def test_pruning_is_transparent(self, sequences):
        for seq in sequences:
            for role in Role:
                pruned = best_move(seq, 0, 0, role, prune=True)
                full = best_move(seq, 0, 0, role, prune=False)
                assert pruned.value == full.value, seq
                assert pruned.move == full.move, seq

    def test_full_search_visits_every_position(self, classic):
        r = best_move(classic, prune=False)
        assert r.stats.visited == 2 ** (len(classic) + 1) - 1
        assert r.stats.prunes == 0
        assert r.stats.algorithm == "Minimax"

    def test_pruning_saves_work(self, classic):
        r = best_move(classic)
        assert r.stats.prunes > 0
        assert r.stats.visited < 2 ** (len(classic) + 1) - 1
        assert len(r.stats.pruned_paths) == r.stats.prunes
        assert all(p[-1] is Side.RIGHT for p in r.stats.pruned_paths)

    def test_materialising_requires_full_search(self, classic):
        with pytest.raises(ValueError):
            evaluate(GameState.new(classic), prune=True, factory=lambda *a: None)


class TestEquivalence:

    def test_matches_exhaustive_tree(self, sequences):
        for seq in sequences:
            for role in Role:
                assert best_move(seq, 0, 0, role).value == build_tree(seq, role).minimax, seq

    def test_deterministic(self, sequences):
        for seq in sequences[:10]:
            assert best_move(seq) == best_move(seq)

    def test_even_length_first_player_never_loses(self, sequences):
        for seq in sequences:
            if len(seq) % 2:
                continue
            even, odd = index_parity_sums(seq)
            assert best_move(seq).value >= abs(even - odd), seq

    def test_role_swap_mirrors_value(self, sequences):
        for seq in sequences:
            assert best_move(seq, 0, 0, Role.MIN).value == -best_move(seq, 0, 0, Role.MAX).value
