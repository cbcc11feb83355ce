"""
Player state: hand, pending selection and penalty pile.

Players are immutable; every helper returns an updated copy.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Optional, Tuple

from .deck import Card, total_bull_heads
from .errors import AlreadySelectedError, CardNotInHandError


@dataclass(frozen=True)
class Player:
    name: str
    index: int
    hand: Tuple[Card, ...] = ()
    penalty_cards: Tuple[Card, ...] = ()
    selected_card: Optional[Card] = None

    @property
    def score(self) -> int:
        return calculate_score(self)


def create_player(name: str, index: int) -> Player:
    return Player(name=name, index=index)


def has_card(player: Player, card: Card) -> bool:
    return card in player.hand


def can_select_card(player: Player, card: Card) -> bool:
    return player.selected_card is None and has_card(player, card)


def add_to_hand(player: Player, cards: Iterable[Card]) -> Player:
    return replace(player, hand=player.hand + tuple(cards))


def remove_from_hand(player: Player, card: Card) -> Player:
    if not has_card(player, card):
        raise CardNotInHandError(f"Card {card.number} is not in {player.name}'s hand")
    hand = list(player.hand)
    hand.remove(card)
    return replace(player, hand=tuple(hand))


def select_card(player: Player, card: Card) -> Player:
    """Commit ``card`` for this turn: it leaves the hand until the turn is resolved."""
    if player.selected_card is not None:
        raise AlreadySelectedError(f"{player.name} has already selected a card")
    if not has_card(player, card):
        raise CardNotInHandError(f"Cannot select card {card.number}: not in {player.name}'s hand")
    return replace(remove_from_hand(player, card), selected_card=card)


def clear_selection(player: Player) -> Player:
    return replace(player, selected_card=None)


def add_penalty_cards(player: Player, cards: Iterable[Card]) -> Player:
    return replace(player, penalty_cards=player.penalty_cards + tuple(cards))


def calculate_score(player: Player) -> int:
    """Total bull heads in the penalty pile (lower is better)."""
    return total_bull_heads(player.penalty_cards)


def sorted_hand(player: Player) -> list[Card]:
    return sorted(player.hand)


__all__ = [
    "Player",
    "create_player",
    "has_card",
    "can_select_card",
    "add_to_hand",
    "remove_from_hand",
    "select_card",
    "clear_selection",
    "add_penalty_cards",
    "calculate_score",
    "sorted_hand",
]
