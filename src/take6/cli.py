"""
Command-line interface for bot-vs-bot Take 6 matches.

Usage examples (after installing the package):

    python -m take6.cli play --bots smart,easy,easy,easy --seed 7
    python -m take6.cli simulate --bots smart,easy,easy --matches 200 \\
        --output runs/smart_vs_easy.json
"""
from __future__ import annotations

import argparse
import logging
import random
from pathlib import Path
from typing import List, Optional

from .agents import DIFFICULTIES, make_agent
from .game import Game
from .match import DEFAULT_MAX_ROUNDS, TurnLogEntry, format_log_entry, run_match
from .simulate import SimulationConfig, format_summary, run_simulation, summary_to_json


def _parse_bots(value: str) -> List[str]:
    bots = [b.strip().lower() for b in value.split(",") if b.strip()]
    unknown = [b for b in bots if b not in DIFFICULTIES]
    if unknown:
        raise argparse.ArgumentTypeError(
            f"unknown bot(s) {', '.join(unknown)}; choose from {', '.join(DIFFICULTIES)}"
        )
    return bots


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--bots",
        type=_parse_bots,
        default=["smart", "easy", "easy", "easy"],
        help='Comma-separated bot per seat, e.g. "smart,easy,easy" (2-10 seats).',
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Random seed for shuffling and bot choices.",
    )
    parser.add_argument(
        "--max-rounds",
        type=int,
        default=DEFAULT_MAX_ROUNDS,
        help="Stop a match after this many rounds even if nobody reached 66.",
    )


def _add_play_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "play",
        help="Play one match between bots and print every turn.",
    )
    _add_common_arguments(parser)
    parser.set_defaults(func=_cmd_play)


def _cmd_play(args: argparse.Namespace) -> None:
    rng = random.Random(args.seed)
    names = [f"{d.capitalize()} {i + 1}" for i, d in enumerate(args.bots)]
    agents = [
        make_agent(d, name=names[i], seed=args.seed + i) for i, d in enumerate(args.bots)
    ]
    turn_counter = {"round": 0, "turn": 0}

    def on_turn(game: Game, entries: List[TurnLogEntry]) -> None:
        if game.round_number != turn_counter["round"]:
            turn_counter["round"] = game.round_number
            turn_counter["turn"] = 0
            print(f"=== Round {game.round_number} ===")
        turn_counter["turn"] += 1
        print(f"[turn {turn_counter['turn']}]")
        for entry in entries:
            print(f"  {format_log_entry(entry)}")

    result = run_match(names, agents, rng=rng, max_rounds=args.max_rounds, on_turn=on_turn)

    print()
    print(f"Final scores after {result.rounds_played} rounds:")
    for player, score in zip(result.game.players, result.scores):
        print(f"  {player.name:<10} {score:>3} bull heads")
    if result.winner is not None:
        print(f"Winner: {result.winner.name}")


def _add_simulate_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "simulate",
        help="Play many matches and report per-seat statistics.",
    )
    _add_common_arguments(parser)
    parser.add_argument(
        "--matches",
        type=int,
        default=100,
        help="Number of matches to play.",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Optional path of a JSON file receiving the summary.",
    )
    parser.set_defaults(func=_cmd_simulate)


def _cmd_simulate(args: argparse.Namespace) -> None:
    cfg = SimulationConfig(
        difficulties=list(args.bots),
        matches=args.matches,
        seed=args.seed,
        max_rounds=args.max_rounds,
    )
    summary = run_simulation(cfg)
    print(format_summary(summary))

    if args.output:
        out_path = Path(args.output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(summary_to_json(summary), encoding="utf-8")
        print(f"Saved summary to {out_path.resolve()}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="take6", description="Take 6 bot matches and simulations.")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_play_parser(subparsers)
    _add_simulate_parser(subparsers)
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    if not hasattr(args, "func"):
        parser.print_help()
        return
    try:
        args.func(args)
    except ValueError as exc:
        parser.error(str(exc))


if __name__ == "__main__":
    main()
