"""
Tests for the console driver.
"""

import pytest

from number_game.cli import run_cli


def _feed(monkeypatch, answers):
    it = iter(answers)
    monkeypatch.setattr("builtins.input", lambda prompt="": next(it))


def test_simulate(capsys):
    assert run_cli(["--sequence", "1,2,7,5"]) == 0
    out = capsys.readouterr().out
    assert "Turn 1: Player 1 takes 1 from left" in out
    assert "Turn 3: Player 1 takes 7 from left" in out
    assert "Player 1: 8" in out
    assert "Player 2: 7" in out
    assert "Winner: Player 1" in out


def test_simulate_without_pruning_same_result(capsys):
    run_cli(["--sequence", "1,2,7,5"])
    pruned = capsys.readouterr().out
    run_cli(["--sequence", "1,2,7,5", "--no-prune"])
    assert capsys.readouterr().out == pruned


def test_analyse(capsys):
    assert run_cli(["--mode", "analyse", "--sequence", "1, 2, 7, 5"]) == 0
    out = capsys.readouterr().out
    assert "best first move: Take 1 from the left" in out
    assert "Expected outcome value: 1" in out
    assert "guarantee a win? Yes" in out


def test_analyse_tie(capsys):
    run_cli(["--mode", "analyse", "--sequence", "3,3"])
    assert "can force a tie" in capsys.readouterr().out


@pytest.mark.parametrize("text", ["1,2,-1", "5", "a,b"])
def test_invalid_sequence(capsys, text):
    assert run_cli(["--sequence", text]) == 2
    assert "Invalid sequence" in capsys.readouterr().err


def test_play_human_first(monkeypatch, capsys):
    _feed(monkeypatch, ["x", "l"])
    assert run_cli(["--mode", "play", "--sequence", "4,1"]) == 0
    out = capsys.readouterr().out
    assert "Please type l or r." in out
    assert "Turn 1: Player 1 takes 4 from left" in out
    assert "Turn 2: Player 2 takes 1 from left" in out
    assert "Winner: Player 1" in out


def test_play_computer_first(monkeypatch, capsys):
    _feed(monkeypatch, ["right"])
    assert run_cli(["--mode", "play", "--sequence", "4,1", "--human", "min"]) == 0
    out = capsys.readouterr().out
    assert "You are Player 2" in out
    assert "Turn 1: Player 1 takes 4 from left" in out
    assert "Turn 2: Player 2 takes 1 from right" in out
