"""
Batch simulation of bot-vs-bot matches.

``run_simulation`` plays ``cfg.matches`` full matches with one bot per seat and
reports per-seat score statistics, win counts and an Elo rating derived from
the final scores (fewer bull heads is better). Summaries can be exported as
JSON for later comparison.
"""
from __future__ import annotations

import json
import logging
import math
import random
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Sequence

import numpy as np

from .agents import DIFFICULTIES, make_agent
from .game import MAX_PLAYERS, MIN_PLAYERS
from .match import DEFAULT_MAX_ROUNDS, run_match

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1
INITIAL_ELO = 1500.0


@dataclass
class SimulationConfig:
    """Configuration for a batch of matches."""

    difficulties: List[str] = field(default_factory=lambda: ["smart", "easy", "easy", "easy"])
    matches: int = 100
    seed: int = 0
    max_rounds: int = DEFAULT_MAX_ROUNDS
    # ELO update parameters
    elo_k_factor: float = 16.0
    elo_margin_scale: float = 10.0

    def validate(self) -> None:
        if not MIN_PLAYERS <= len(self.difficulties) <= MAX_PLAYERS:
            raise ValueError(
                f"Need {MIN_PLAYERS}-{MAX_PLAYERS} bots, got {len(self.difficulties)}"
            )
        unknown = [d for d in self.difficulties if d not in DIFFICULTIES]
        if unknown:
            raise ValueError(f"Unknown bot difficulties: {unknown}")
        if self.matches < 1:
            raise ValueError("matches must be at least 1")
        if self.max_rounds < 1:
            raise ValueError("max_rounds must be at least 1")


@dataclass
class SeatStats:
    seat: int
    name: str
    difficulty: str
    mean_score: float
    std_score: float
    min_score: int
    max_score: int
    wins: int
    win_rate: float
    elo: float


@dataclass
class SimulationSummary:
    config: SimulationConfig
    seats: List[SeatStats]
    mean_rounds: float
    mean_turns: float


def _expected_score(rating_a: float, rating_b: float) -> float:
    """Expected score of A vs B under standard Elo."""
    return 1.0 / (1.0 + 10 ** ((rating_b - rating_a) / 400.0))


def update_elo_pairwise(
    ratings: Sequence[float],
    final_scores: Sequence[float],
    k_factor: float = 16.0,
    margin_scale: float = 10.0,
) -> List[float]:
    """
    New Elo ratings after one multi-player match, treated as pairwise comparisons.

    For each ordered pair (i, j) the margin ``score_j - score_i`` (penalty points,
    so lower is better for i) is mapped to a result in (0, 1) with a logistic
    curve; deltas are accumulated over all pairs and applied once.
    """
    n = len(ratings)
    assert len(final_scores) == n

    deltas = [0.0 for _ in range(n)]
    for i in range(n):
        for j in range(n):
            if i == j:
                continue
            diff = final_scores[j] - final_scores[i]
            result_ij = 1.0 / (1.0 + math.exp(-diff / margin_scale))
            deltas[i] += k_factor * (result_ij - _expected_score(ratings[i], ratings[j]))

    return [r + d for r, d in zip(ratings, deltas)]


def run_simulation(cfg: SimulationConfig) -> SimulationSummary:
    cfg.validate()
    rng = random.Random(cfg.seed)
    n = len(cfg.difficulties)
    names = [f"{d.capitalize()} {i + 1}" for i, d in enumerate(cfg.difficulties)]

    all_scores = np.zeros((cfg.matches, n), dtype=np.int64)
    wins = np.zeros(n, dtype=np.int64)
    rounds = np.zeros(cfg.matches, dtype=np.int64)
    turns = np.zeros(cfg.matches, dtype=np.int64)
    ratings = [INITIAL_ELO] * n

    for m in range(cfg.matches):
        agents = [
            make_agent(d, name=names[i], seed=rng.randrange(2**32))
            for i, d in enumerate(cfg.difficulties)
        ]
        result = run_match(names, agents, rng=rng, max_rounds=cfg.max_rounds)
        all_scores[m] = result.scores
        rounds[m] = result.rounds_played
        turns[m] = result.turns_played
        if result.winner is not None:
            wins[result.winner.index] += 1
        ratings = update_elo_pairwise(
            ratings,
            result.scores,
            k_factor=cfg.elo_k_factor,
            margin_scale=cfg.elo_margin_scale,
        )
        if (m + 1) % 10 == 0 or m + 1 == cfg.matches:
            logger.info(
                "Match %d/%d, mean scores so far: %s",
                m + 1,
                cfg.matches,
                all_scores[: m + 1].mean(axis=0).round(1).tolist(),
            )

    seats = [
        SeatStats(
            seat=i,
            name=names[i],
            difficulty=cfg.difficulties[i],
            mean_score=float(all_scores[:, i].mean()),
            std_score=float(all_scores[:, i].std()),
            min_score=int(all_scores[:, i].min()),
            max_score=int(all_scores[:, i].max()),
            wins=int(wins[i]),
            win_rate=float(wins[i]) / cfg.matches,
            elo=float(ratings[i]),
        )
        for i in range(n)
    ]
    return SimulationSummary(
        config=cfg,
        seats=seats,
        mean_rounds=float(rounds.mean()),
        mean_turns=float(turns.mean()),
    )


def format_summary(summary: SimulationSummary) -> str:
    lines = [
        f"{summary.config.matches} matches, "
        f"{summary.mean_rounds:.2f} rounds / {summary.mean_turns:.1f} turns on average",
        f"{'seat':<4} {'bot':<10} {'mean':>7} {'std':>6} {'min':>4} {'max':>4} {'wins':>5} {'rate':>6} {'elo':>7}",
    ]
    for s in summary.seats:
        lines.append(
            f"{s.seat:<4} {s.name:<10} {s.mean_score:>7.2f} {s.std_score:>6.2f} "
            f"{s.min_score:>4} {s.max_score:>4} {s.wins:>5} {s.win_rate:>6.1%} {s.elo:>7.1f}"
        )
    return "\n".join(lines)


def summary_to_dict(summary: SimulationSummary) -> Dict[str, Any]:
    """Serialize a summary to a JSON-compatible dict."""
    return {
        "schema_version": SCHEMA_VERSION,
        "exported_at": datetime.now(timezone.utc).isoformat(),
        "config": asdict(summary.config),
        "mean_rounds": summary.mean_rounds,
        "mean_turns": summary.mean_turns,
        "seats": [asdict(s) for s in summary.seats],
    }


def summary_to_json(summary: SimulationSummary) -> str:
    return json.dumps(summary_to_dict(summary), indent=2)


__all__ = [
    "SCHEMA_VERSION",
    "INITIAL_ELO",
    "SimulationConfig",
    "SeatStats",
    "SimulationSummary",
    "update_elo_pairwise",
    "run_simulation",
    "format_summary",
    "summary_to_dict",
    "summary_to_json",
]
