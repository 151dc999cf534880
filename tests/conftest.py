"""
Pytest fixtures for number game tests.
"""

import random

import matplotlib
matplotlib.use("Agg")

import pytest

from number_game.tree import build_tree


@pytest.fixture
def classic():
    """The worked example from the rules page."""
    return (1, 2, 7, 5)


@pytest.fixture
def classic_tree(classic):
    return build_tree(classic)


def random_sequences(count=40, min_len=2, max_len=8, top=9, seed=1234):
    rng = random.Random(seed)
    return [tuple(rng.randint(0, top) for _ in range(rng.randint(min_len, max_len)))
            for _ in range(count)]


@pytest.fixture
def sequences():
    """Deterministic batch of small sequences, ties included (values 0..9)."""
    return random_sequences()
