"""Smoke tests for cards, the deck and dealing."""
import random

import pytest

from take6.deal import deal_cards, deal_round, shuffle_deck
from take6.deck import Card, bull_heads_for, is_deck_valid, make_card, make_deck_104, total_bull_heads
from take6.errors import (
    InsufficientCardsError,
    InvalidCardNumberError,
    InvalidHandSizeError,
    InvalidPlayerCountError,
)


def test_bull_heads_precedence():
    assert bull_heads_for(55) == 7
    assert bull_heads_for(11) == 5
    assert bull_heads_for(66) == 5
    assert bull_heads_for(10) == 3
    assert bull_heads_for(100) == 3
    assert bull_heads_for(5) == 2
    assert bull_heads_for(95) == 2
    assert bull_heads_for(1) == 1
    assert bull_heads_for(104) == 1


def test_full_deck_penalty_total():
    # 1×7 + 8×5 + 10×3 + 9×2 + 76×1
    assert total_bull_heads(make_deck_104()) == 171


def test_card_number_validation():
    with pytest.raises(InvalidCardNumberError):
        make_card(0)
    with pytest.raises(InvalidCardNumberError):
        Card(105)
    assert make_card(104).number == 104


def test_card_equality_and_order():
    assert Card(42) == make_card(42)
    assert Card(42).penalty == Card(42).bull_heads == 1
    assert sorted([Card(30), Card(2), Card(17)]) == [Card(2), Card(17), Card(30)]
    assert Card(3) < Card(4)
    assert len({Card(7), Card(7), Card(8)}) == 2


def test_card_str():
    assert str(Card(55)) == "Card 55 (7 bull heads)"
    assert str(Card(1)) == "Card 1 (1 bull head)"


def test_deck_104():
    deck = make_deck_104()
    assert len(deck) == 104
    assert [c.number for c in deck] == list(range(1, 105))
    assert is_deck_valid(deck)


def test_deck_validity_rejects_bad_decks():
    deck = make_deck_104()
    assert not is_deck_valid(deck[:-1])
    assert not is_deck_valid(deck[:-1] + [Card(1)])


def test_shuffle_preserves_cards_and_input():
    deck = make_deck_104()
    before = list(deck)
    shuffled = shuffle_deck(deck, rng=random.Random(42))
    assert shuffled is not deck
    assert deck == before
    assert sorted(shuffled) == before
    assert is_deck_valid(shuffled)


def test_deal_round_robin():
    hands = deal_cards(make_deck_104(), 4, 10)
    assert [c.number for c in hands[0]] == [1, 5, 9, 13, 17, 21, 25, 29, 33, 37]
    assert [c.number for c in hands[1]] == [2, 6, 10, 14, 18, 22, 26, 30, 34, 38]
    assert [c.number for c in hands[3]][-1] == 40


def test_deal_failures():
    deck = make_deck_104()
    with pytest.raises(InsufficientCardsError):
        deal_cards(deck[:39], 4, 10)
    with pytest.raises(InvalidPlayerCountError):
        deal_cards(deck, 0, 10)
    with pytest.raises(InvalidHandSizeError):
        deal_cards(deck, 4, 0)


def test_deal_round():
    deal = deal_round(4, rng=random.Random(7))
    assert len(deal.starting_cards) == 4
    assert all(len(h) == 10 for h in deal.hands)
    assert len(deal.leftover) == 104 - 4 - 40
    all_cards = list(deal.starting_cards) + list(deal.leftover)
    for h in deal.hands:
        all_cards.extend(h)
    assert is_deck_valid(all_cards)


def test_deal_round_player_limit():
    deal = deal_round(10, rng=random.Random(1))
    assert deal.leftover == []
    with pytest.raises(InsufficientCardsError):
        deal_round(11, rng=random.Random(1))
