"""
Headless orchestration: turns, rounds and whole matches between agents.

Each step maps to one engine call, in the order a UI would make them:
``initialize_round`` -> ``select_card_for_player`` for every seat ->
``all_players_ready`` -> resolution -> ``is_round_complete`` / ``is_game_over``
-> ``get_winner``. The game value is passed explicitly; nothing is kept
between calls.

Resolution is replayed card by card (``resolve_step``) so that a too-low card
without a pre-chosen row can ask its agent for a row against the board as it
is at that moment. When every too-low card already carries a row, the result
is identical to ``resolve_round``.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

from .agents import Policy
from .board import PlacementKind, ResolvedPlacement, ordered_placements, resolve_step
from .deck import total_bull_heads
from .errors import NotAllReadyError
from .game import (
    Game,
    all_players_ready,
    apply_resolution,
    create_game,
    get_winner,
    initialize_round,
    is_game_over,
    is_round_complete,
    scores,
    select_card_for_player,
)
from .player import Player

logger = logging.getLogger(__name__)

DEFAULT_MAX_ROUNDS = 50


@dataclass(frozen=True)
class TurnLogEntry:
    """One revealed card and what it did. ``row`` is 0-based."""

    player_name: str
    player_index: int
    card: int
    action: str  # "placed" | "sixth-card" | "took-row"
    row: int
    penalty_cards: int = 0
    bull_heads: int = 0


def describe_resolution(game: Game, results: Sequence[ResolvedPlacement]) -> List[TurnLogEntry]:
    entries: List[TurnLogEntry] = []
    for result in results:
        player = game.players[result.player_index]
        entries.append(
            TurnLogEntry(
                player_name=player.name,
                player_index=player.index,
                card=result.card.number,
                action=result.kind.value,
                row=result.row_index,
                penalty_cards=len(result.taken),
                bull_heads=total_bull_heads(result.taken),
            )
        )
    return entries


def format_log_entry(entry: TurnLogEntry) -> str:
    row = entry.row + 1
    if entry.action == PlacementKind.PLACED.value:
        return f"{entry.player_name} placed {entry.card} in row {row}"
    if entry.action == PlacementKind.SIXTH_CARD.value:
        return (
            f"{entry.player_name} played {entry.card} as the sixth card of row {row} "
            f"and took {entry.penalty_cards} cards ({entry.bull_heads} bull heads)"
        )
    return (
        f"{entry.player_name} played {entry.card} too low and took row {row}: "
        f"{entry.penalty_cards} cards ({entry.bull_heads} bull heads)"
    )


def collect_selections(game: Game, agents: Sequence[Policy]) -> Game:
    """Ask every seat without a pending selection for its card."""
    for player in game.players:
        if player.selected_card is not None:
            continue
        decision = agents[player.index].choose_card(player, game.board)
        game = select_card_for_player(game, player.index, decision.card, decision.chosen_row)
    return game


def resolve_turn_stepwise(
    game: Game,
    agents: Sequence[Policy],
) -> Tuple[Game, List[ResolvedPlacement]]:
    """Resolve the committed cards one at a time, lowest first."""
    if not all_players_ready(game):
        raise NotAllReadyError("Not all players have selected cards")

    board = game.board
    results: List[ResolvedPlacement] = []
    for placement in ordered_placements(game.selections):
        step = resolve_step(board, placement)
        if step.needs_row_selection:
            player: Player = game.players[placement.player_index]
            row = agents[placement.player_index].choose_row(player, board)
            logger.debug("%s chooses row %d for too-low card %d", player.name, row, placement.card.number)
            step = resolve_step(board, placement._replace(chosen_row=row))
        board = step.board
        results.append(
            ResolvedPlacement(
                player_index=placement.player_index,
                card=placement.card,
                row_index=step.row_index,
                taken=step.taken,
                kind=step.kind,
                board=board,
            )
        )

    return apply_resolution(game, board, results), results


def play_turn(game: Game, agents: Sequence[Policy]) -> Tuple[Game, List[TurnLogEntry]]:
    """Collect one card per seat and resolve them."""
    game = collect_selections(game, agents)
    resolved, results = resolve_turn_stepwise(game, agents)
    return resolved, describe_resolution(game, results)


TurnCallback = Callable[[Game, List[TurnLogEntry]], None]


def play_round(
    game: Game,
    agents: Sequence[Policy],
    rng: random.Random | None = None,
    on_turn: TurnCallback | None = None,
) -> Tuple[Game, List[TurnLogEntry]]:
    """
    Deal a new round and play turns until the hands are empty or somebody
    reaches the game-over score.
    """
    game = initialize_round(game, rng=rng)
    log: List[TurnLogEntry] = []
    while not is_round_complete(game):
        game, entries = play_turn(game, agents)
        log.extend(entries)
        if on_turn is not None:
            on_turn(game, entries)
        if is_game_over(game):
            break
    logger.debug("Round %d finished, scores=%s", game.round_number, scores(game))
    return game, log


@dataclass
class MatchResult:
    game: Game
    rounds_played: int
    turns_played: int
    winner: Optional[Player]
    log: List[TurnLogEntry] = field(default_factory=list)

    @property
    def scores(self) -> List[int]:
        return scores(self.game)


def run_match(
    player_names: Sequence[str],
    agents: Sequence[Policy],
    rng: random.Random | None = None,
    max_rounds: int = DEFAULT_MAX_ROUNDS,
    on_turn: TurnCallback | None = None,
) -> MatchResult:
    """
    Play rounds until the game is over (or ``max_rounds`` rounds were played).
    """
    if len(agents) != len(player_names):
        raise ValueError(
            f"Need one agent per player: {len(player_names)} players, {len(agents)} agents"
        )
    if rng is None:
        rng = random.Random()

    game = create_game(player_names)
    log: List[TurnLogEntry] = []
    turns = 0
    while not is_game_over(game) and game.round_number < max_rounds:
        game, round_log = play_round(game, agents, rng=rng, on_turn=on_turn)
        log.extend(round_log)
        turns += len(round_log) // len(game.players)

    winner = get_winner(game)
    logger.info(
        "Match over after %d rounds: scores=%s, winner=%s",
        game.round_number,
        scores(game),
        winner.name if winner else None,
    )
    return MatchResult(
        game=game,
        rounds_played=game.round_number,
        turns_played=turns,
        winner=winner,
        log=log,
    )


__all__ = [
    "DEFAULT_MAX_ROUNDS",
    "TurnLogEntry",
    "describe_resolution",
    "format_log_entry",
    "collect_selections",
    "resolve_turn_stepwise",
    "play_turn",
    "play_round",
    "MatchResult",
    "run_match",
]
