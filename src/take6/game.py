"""
Game aggregate: players + board across rounds.

A round deals 10 cards to every player and lasts 10 turns. In each turn every
player commits one card (``select_card_for_player``); once everybody is ready
``resolve_round`` resolves all committed cards at once, lowest first, and adds
the taken cards to the penalty piles. The game ends as soon as someone reaches
66 bull heads; the lowest score wins.

Every function takes a ``Game`` and returns a new one; nothing is stored
between calls.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from .board import (
    ROW_COUNT,
    Board,
    Placement,
    Resolution,
    ResolvedPlacement,
    create_board,
    resolve_many,
)
from .deal import CARDS_PER_PLAYER, deal_round
from .deck import Card
from .errors import (
    InvalidPlayerCountError,
    InvalidPlayerIndexError,
    InvalidRowIndexError,
    NoSelectionError,
    NotAllReadyError,
)
from .player import (
    Player,
    add_penalty_cards,
    add_to_hand,
    calculate_score,
    clear_selection,
    create_player,
    select_card,
)

logger = logging.getLogger(__name__)

MIN_PLAYERS = 2
MAX_PLAYERS = 10
GAME_OVER_SCORE = 66


class GamePhase(Enum):
    CREATED = "created"
    ROUND_IN_PROGRESS = "round_in_progress"
    ROUND_RESOLVED = "round_resolved"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class Game:
    players: Tuple[Player, ...]
    board: Board = Board()
    round_number: int = 0
    selections: Tuple[Placement, ...] = ()
    leftover: Tuple[Card, ...] = ()


def create_game(player_names: Sequence[str]) -> Game:
    if not MIN_PLAYERS <= len(player_names) <= MAX_PLAYERS:
        raise InvalidPlayerCountError(
            f"Must have {MIN_PLAYERS}-{MAX_PLAYERS} players, got {len(player_names)}"
        )
    players = tuple(create_player(name, i) for i, name in enumerate(player_names))
    return Game(players=players)


def initialize_round(game: Game, rng: random.Random | None = None) -> Game:
    """Shuffle a fresh deck, lay out the four rows and deal 10 cards to everyone."""
    deal = deal_round(len(game.players), rng=rng)
    players = tuple(
        replace(player, hand=tuple(deal.hands[i]), selected_card=None)
        for i, player in enumerate(game.players)
    )
    round_number = game.round_number + 1
    logger.debug(
        "Round %d: rows start with %s",
        round_number,
        [c.number for c in deal.starting_cards],
    )
    return replace(
        game,
        players=players,
        board=create_board(deal.starting_cards),
        round_number=round_number,
        selections=(),
        leftover=tuple(deal.leftover),
    )


def get_player(game: Game, player_index: int) -> Player:
    if not 0 <= player_index < len(game.players):
        raise InvalidPlayerIndexError(f"Invalid player index: {player_index}")
    return game.players[player_index]


def _replace_player(game: Game, player: Player) -> Tuple[Player, ...]:
    return tuple(player if p.index == player.index else p for p in game.players)


def get_selection(game: Game, player_index: int) -> Optional[Placement]:
    for selection in game.selections:
        if selection.player_index == player_index:
            return selection
    return None


def select_card_for_player(
    game: Game,
    player_index: int,
    card: Card,
    chosen_row: Optional[int] = None,
) -> Game:
    """
    Commit ``card`` for a player. ``chosen_row`` is only used if the card turns
    out to be too low when the turn is resolved.
    """
    player = get_player(game, player_index)
    if chosen_row is not None and not 0 <= chosen_row < ROW_COUNT:
        raise InvalidRowIndexError(chosen_row)

    updated = select_card(player, card)
    selections = tuple(s for s in game.selections if s.player_index != player_index)
    selections += (Placement(player_index=player_index, card=card, chosen_row=chosen_row),)
    return replace(game, players=_replace_player(game, updated), selections=selections)


def cancel_selection(game: Game, player_index: int) -> Game:
    """Put a player's committed card back in their hand so they can pick again."""
    player = get_player(game, player_index)
    if player.selected_card is None:
        raise NoSelectionError(f"{player.name} has not selected a card")
    updated = clear_selection(add_to_hand(player, [player.selected_card]))
    selections = tuple(s for s in game.selections if s.player_index != player_index)
    return replace(game, players=_replace_player(game, updated), selections=selections)


def set_chosen_row_for_player(game: Game, player_index: int, chosen_row: int) -> Game:
    """Set or change the row a player takes if their card is too low."""
    player = get_player(game, player_index)
    if not isinstance(chosen_row, int) or not 0 <= chosen_row < len(game.board.rows):
        raise InvalidRowIndexError(chosen_row)
    if player.selected_card is None:
        raise NoSelectionError(f"{player.name} has not selected a card")
    if get_selection(game, player_index) is None:
        raise NoSelectionError(f"No selection stored for player {player_index}")

    selections = tuple(
        s._replace(chosen_row=chosen_row) if s.player_index == player_index else s
        for s in game.selections
    )
    return replace(game, selections=selections)


def all_players_ready(game: Game) -> bool:
    """Every player has a selected card and a stored selection."""
    if not all(p.selected_card is not None for p in game.players):
        return False
    stored = {s.player_index for s in game.selections}
    return all(p.index in stored for p in game.players)


def apply_resolution(
    game: Game,
    board: Board,
    results: Sequence[ResolvedPlacement],
) -> Game:
    """
    Finish a turn: install the final board, add taken cards to penalty piles and
    clear every selection.
    """
    taken: Dict[int, List[Card]] = {}
    for result in results:
        taken.setdefault(result.player_index, []).extend(result.taken)

    players = []
    for player in game.players:
        updated = clear_selection(player)
        cards = taken.get(player.index)
        if cards:
            updated = add_penalty_cards(updated, cards)
        players.append(updated)

    return replace(game, players=tuple(players), board=board, selections=())


def resolve_round_detailed(game: Game) -> Tuple[Game, Resolution]:
    """Like ``resolve_round`` but also returns the per-card resolution."""
    if not all_players_ready(game):
        raise NotAllReadyError("Not all players have selected cards")

    resolution = resolve_many(game.board, game.selections)
    for result in resolution.results:
        if result.taken:
            logger.debug(
                "%s takes %d cards (%s) with %d",
                game.players[result.player_index].name,
                len(result.taken),
                result.kind.value,
                result.card.number,
            )
    return apply_resolution(game, resolution.board, resolution.results), resolution


def resolve_round(game: Game) -> Game:
    """Resolve every committed card of the turn, lowest first."""
    updated, _ = resolve_round_detailed(game)
    return updated


def is_round_complete(game: Game) -> bool:
    return all(len(p.hand) == 0 for p in game.players)


def scores(game: Game) -> List[int]:
    return [calculate_score(p) for p in game.players]


def is_game_over(game: Game) -> bool:
    return any(score >= GAME_OVER_SCORE for score in scores(game))


def get_winner(game: Game) -> Optional[Player]:
    """Player with the lowest score; the earliest index wins ties."""
    winner: Optional[Player] = None
    for player in game.players:
        if winner is None or calculate_score(player) < calculate_score(winner):
            winner = player
    return winner


def game_phase(game: Game) -> GamePhase:
    if game.round_number == 0:
        return GamePhase.CREATED
    if is_game_over(game):
        return GamePhase.GAME_OVER
    if is_round_complete(game):
        return GamePhase.ROUND_RESOLVED
    return GamePhase.ROUND_IN_PROGRESS


__all__ = [
    "MIN_PLAYERS",
    "MAX_PLAYERS",
    "CARDS_PER_PLAYER",
    "GAME_OVER_SCORE",
    "GamePhase",
    "Game",
    "create_game",
    "initialize_round",
    "get_player",
    "get_selection",
    "select_card_for_player",
    "cancel_selection",
    "set_chosen_row_for_player",
    "all_players_ready",
    "apply_resolution",
    "resolve_round_detailed",
    "resolve_round",
    "is_round_complete",
    "scores",
    "is_game_over",
    "get_winner",
    "game_phase",
]
