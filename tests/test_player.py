"""Tests for player hand, selection and penalty pile helpers."""
import pytest

from take6.deck import Card
from take6.errors import AlreadySelectedError, CardNotInHandError
from take6.player import (
    add_penalty_cards,
    add_to_hand,
    calculate_score,
    can_select_card,
    create_player,
    remove_from_hand,
    select_card,
    sorted_hand,
)


def _player_with(*numbers):
    return add_to_hand(create_player("Alice", 0), [Card(n) for n in numbers])


def test_create_player():
    p = create_player("Alice", 2)
    assert p.name == "Alice"
    assert p.index == 2
    assert p.hand == ()
    assert p.penalty_cards == ()
    assert p.selected_card is None
    assert calculate_score(p) == 0


def test_select_card_moves_card_out_of_hand():
    p = _player_with(7, 42, 13)
    assert can_select_card(p, Card(42))
    selected = select_card(p, Card(42))
    assert selected.selected_card == Card(42)
    assert Card(42) not in selected.hand
    assert len(selected.hand) == 2
    # input untouched
    assert p.selected_card is None and len(p.hand) == 3


def test_select_card_failures():
    p = _player_with(7, 42)
    with pytest.raises(CardNotInHandError):
        select_card(p, Card(8))
    selected = select_card(p, Card(7))
    assert not can_select_card(selected, Card(42))
    with pytest.raises(AlreadySelectedError):
        select_card(selected, Card(42))


def test_remove_from_hand():
    p = _player_with(7, 42)
    assert remove_from_hand(p, Card(7)).hand == (Card(42),)
    with pytest.raises(CardNotInHandError):
        remove_from_hand(p, Card(1))


def test_penalty_pile_and_score():
    p = create_player("Bob", 1)
    p = add_penalty_cards(p, [Card(55), Card(10)])
    p = add_penalty_cards(p, [Card(1)])
    assert len(p.penalty_cards) == 3
    assert calculate_score(p) == 7 + 3 + 1
    assert p.score == 11


def test_sorted_hand():
    p = _player_with(30, 2, 17)
    assert [c.number for c in sorted_hand(p)] == [2, 17, 30]
