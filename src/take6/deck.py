"""
Take 6 deck: 104 cards numbered 1..104, each carrying a fixed penalty
("bull heads"). 55 is worth 7, doubles (11, 22, ...) 5, multiples of ten 3,
other multiples of five 2, every other card 1.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .errors import InvalidCardNumberError

MIN_CARD_NUMBER = 1
MAX_CARD_NUMBER = 104
DECK_SIZE = MAX_CARD_NUMBER - MIN_CARD_NUMBER + 1


def is_valid_card_number(number: int) -> bool:
    return MIN_CARD_NUMBER <= number <= MAX_CARD_NUMBER


def bull_heads_for(number: int) -> int:
    """Penalty of a card number. Rules are checked in order; the first match wins."""
    if number == 55:
        return 7
    if number % 11 == 0:
        return 5
    if number % 10 == 0:
        return 3
    if number % 5 == 0:
        return 2
    return 1


@dataclass(frozen=True, order=True)
class Card:
    """
    A single card. Equality, hashing and ordering only look at ``number``
    (numbers are unique within a deck); ``bull_heads`` is derived from it.
    """

    number: int
    bull_heads: int = field(init=False, compare=False)

    def __post_init__(self) -> None:
        if not is_valid_card_number(self.number):
            raise InvalidCardNumberError(self.number)
        object.__setattr__(self, "bull_heads", bull_heads_for(self.number))

    @property
    def penalty(self) -> int:
        return self.bull_heads

    def __str__(self) -> str:
        head_text = "bull head" if self.bull_heads == 1 else "bull heads"
        return f"Card {self.number} ({self.bull_heads} {head_text})"

    def __repr__(self) -> str:
        return f"Card({self.number})"


def make_card(number: int) -> Card:
    return Card(number)


def can_place_after(card: Card, after: Card) -> bool:
    """True if ``card`` may follow ``after`` in a row (strictly higher number)."""
    return card.number > after.number


def total_bull_heads(cards: Iterable[Card]) -> int:
    return sum(c.bull_heads for c in cards)


def make_deck_104() -> list[Card]:
    """Build the full deck in ascending order (1..104)."""
    return [Card(n) for n in range(MIN_CARD_NUMBER, MAX_CARD_NUMBER + 1)]


def is_deck_valid(deck: Iterable[Card]) -> bool:
    """True if ``deck`` holds exactly the 104 cards 1..104, each once."""
    numbers = [c.number for c in deck]
    if len(numbers) != DECK_SIZE:
        return False
    return set(numbers) == set(range(MIN_CARD_NUMBER, MAX_CARD_NUMBER + 1))


__all__ = [
    "MIN_CARD_NUMBER",
    "MAX_CARD_NUMBER",
    "DECK_SIZE",
    "Card",
    "bull_heads_for",
    "is_valid_card_number",
    "make_card",
    "can_place_after",
    "total_bull_heads",
    "make_deck_104",
    "is_deck_valid",
]
