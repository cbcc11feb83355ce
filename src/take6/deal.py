"""
Shuffling and distribution.

Cards are dealt one at a time, round-robin: player 0 gets deck[0], player 1
gets deck[1], ..., player 0 gets deck[num_players], and so on. Tests rely on
this order, so it is part of the contract.

A round uses the first 4 cards of the shuffled pack as row starters and deals
10 cards to every player from the rest; whatever is left over is kept only for
bookkeeping.
"""
from __future__ import annotations

import random
from typing import NamedTuple, Sequence

from .deck import Card, make_deck_104
from .errors import InsufficientCardsError, InvalidHandSizeError, InvalidPlayerCountError

STARTING_ROW_CARDS = 4
CARDS_PER_PLAYER = 10


def shuffle_deck(deck: Sequence[Card], rng: random.Random | None = None) -> list[Card]:
    """Return a shuffled copy of ``deck``; the input is never modified."""
    if rng is None:
        rng = random.Random()
    shuffled = list(deck)
    rng.shuffle(shuffled)
    return shuffled


def deal_cards(deck: Sequence[Card], num_players: int, cards_per_player: int) -> list[list[Card]]:
    """Deal ``cards_per_player`` cards to each of ``num_players`` players, round-robin."""
    if num_players <= 0:
        raise InvalidPlayerCountError(f"Invalid number of players: {num_players}")
    if cards_per_player <= 0:
        raise InvalidHandSizeError(f"Invalid cards per player: {cards_per_player}")

    needed = num_players * cards_per_player
    if len(deck) < needed:
        raise InsufficientCardsError(needed, len(deck))

    hands: list[list[Card]] = [[] for _ in range(num_players)]
    for i in range(needed):
        hands[i % num_players].append(deck[i])
    return hands


class RoundDeal(NamedTuple):
    """Result of dealing one round: row starters, player hands, undealt remainder."""

    starting_cards: list[Card]
    hands: list[list[Card]]
    leftover: list[Card]


def deal_round(
    num_players: int,
    rng: random.Random | None = None,
    deck: Sequence[Card] | None = None,
) -> RoundDeal:
    """
    Shuffle a full deck (or ``deck`` if given), take the 4 row starters and deal
    10 cards to each player from the remainder.
    """
    if deck is None:
        deck = make_deck_104()
    shuffled = shuffle_deck(deck, rng=rng)

    starting_cards = shuffled[:STARTING_ROW_CARDS]
    remainder = shuffled[STARTING_ROW_CARDS:]
    hands = deal_cards(remainder, num_players, CARDS_PER_PLAYER)

    return RoundDeal(
        starting_cards=starting_cards,
        hands=hands,
        leftover=remainder[num_players * CARDS_PER_PLAYER:],
    )


__all__ = [
    "STARTING_ROW_CARDS",
    "CARDS_PER_PLAYER",
    "RoundDeal",
    "shuffle_deck",
    "deal_cards",
    "deal_round",
]
