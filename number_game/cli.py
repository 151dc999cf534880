import argparse
import logging
import sys
import time

from .errors import InvalidInput, InvalidMove, NumberGameError
from .runner import GameRunner, TurnRecord, analyse, simulate_game
from .state import Role, Side, format_sequence, parse_sequence

VERDICTS = {
    "win": "Yes",
    "tie": "No, but can force a tie",
    "loss": "No",
}


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Number game: take from either end, minimax opponent")
    p.add_argument("--sequence", default="1,2,7,5", help="comma-separated non-negative numbers")
    p.add_argument("--mode", choices=["simulate", "play", "analyse"], default="simulate",
                   help="optimal self-play, play against the computer, or just the best first move")
    p.add_argument("--first", choices=["max", "min"], default="max", help="role that moves first")
    p.add_argument("--human", choices=["max", "min"], default="max", help="your role in play mode")
    p.add_argument("--no-prune", action="store_true", help="search without alpha-beta pruning")
    p.add_argument("--delay", type=float, default=0.0, help="seconds the computer 'thinks' per move")
    p.add_argument("--log-level", default="WARNING", help="logging level (DEBUG, INFO, ...)")
    return p.parse_args(argv)


def print_turn(n: int, record: TurnRecord, runner: GameRunner) -> None:
    s = runner.state
    print(f"Turn {n}: {record.role.label} takes {record.taken} from {record.side.value}")
    print(f"  Remaining: {format_sequence(s.sequence)}")
    print(f"  Scores - P1: {s.score_max}, P2: {s.score_min}")


def print_result(runner: GameRunner) -> None:
    s = runner.state
    winner = runner.outcome.winner
    print("\nFinal scores:")
    print(f"Player 1: {s.score_max}")
    print(f"Player 2: {s.score_min}")
    print(f"Winner: {winner.label if winner else 'Tie'}")


def read_human_side(runner: GameRunner) -> Side:
    s = runner.state
    while True:
        raw = input(f"{format_sequence(s.sequence)}  take [l]eft ({s.sequence[0]}) "
                    f"or [r]ight ({s.sequence[-1]}): ").strip().lower()
        if raw in ("l", "left"):
            return Side.LEFT
        if raw in ("r", "right"):
            return Side.RIGHT
        print("Please type l or r.")


def run_play(runner: GameRunner, delay: float) -> None:
    turn = 0
    while not runner.is_over:
        if runner.automated_turn:
            if delay:
                time.sleep(delay)
            record = runner.play_automated()
        else:
            try:
                record = runner.play(runner.to_move, read_human_side(runner))
            except InvalidMove as e:
                print(f"Illegal move: {e}")
                continue
        turn += 1
        print_turn(turn, record, runner)
    print_result(runner)


def run_cli(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
                        format="%(asctime)s %(levelname)s: %(message)s")
    try:
        seq = parse_sequence(args.sequence)
    except InvalidInput as e:
        print(f"Invalid sequence: {e}", file=sys.stderr)
        return 2

    first = Role(args.first)
    prune = not args.no_prune
    try:
        if args.mode == "analyse":
            a = analyse(seq, first)
            print(f"For sequence {format_sequence(seq)}:")
            print(f"{first.label}'s best first move: Take {a.taken} from the {a.move.value}")
            print(f"Expected outcome value: {a.value}")
            print(f"Can {first.label} guarantee a win? {VERDICTS[a.verdict]}")
        elif args.mode == "simulate":
            print("Starting sequence:", format_sequence(seq))
            runner = simulate_game(seq, first, prune=prune)
            print("\nGame simulation with optimal play:")
            for i, record in enumerate(runner.history, 1):
                print(f"Turn {i}: {record.role.label} takes {record.taken} from {record.side.value}")
            print_result(runner)
        else:
            human = Role(args.human)
            runner = GameRunner(seq, first, automated=(human.other,), prune=prune)
            print(f"You are {human.label}. {first.label} moves first.")
            run_play(runner, args.delay)
    except NumberGameError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def main():
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
