"""Tests for the game aggregate: rounds, selections, resolution and scoring."""
import random
from dataclasses import replace

import pytest

from take6.board import Board, cheapest_row
from take6.deck import Card, is_deck_valid
from take6.errors import (
    AlreadySelectedError,
    InvalidPlayerCountError,
    InvalidPlayerIndexError,
    InvalidRowIndexError,
    NoSelectionError,
    NotAllReadyError,
    RowChoiceRequiredError,
)
from take6.game import (
    GamePhase,
    all_players_ready,
    cancel_selection,
    create_game,
    game_phase,
    get_selection,
    get_winner,
    initialize_round,
    is_game_over,
    is_round_complete,
    resolve_round,
    resolve_round_detailed,
    scores,
    select_card_for_player,
    set_chosen_row_for_player,
)
from take6.player import add_penalty_cards, sorted_hand


def _board(*rows):
    return Board(rows=tuple(tuple(Card(n) for n in row) for row in rows))


def _game_with(hands, rows):
    """Two-or-more player game with fixed hands and board."""
    game = create_game([f"P{i}" for i in range(len(hands))])
    players = tuple(
        replace(p, hand=tuple(Card(n) for n in hand)) for p, hand in zip(game.players, hands)
    )
    return replace(game, players=players, board=_board(*rows), round_number=1)


def _with_penalties(game, piles):
    players = tuple(
        add_penalty_cards(p, [Card(n) for n in pile]) for p, pile in zip(game.players, piles)
    )
    return replace(game, players=players)


def test_create_game_player_count():
    with pytest.raises(InvalidPlayerCountError):
        create_game(["solo"])
    with pytest.raises(InvalidPlayerCountError):
        create_game([f"P{i}" for i in range(11)])
    assert len(create_game(["a", "b"]).players) == 2
    game = create_game([f"P{i}" for i in range(10)])
    assert [p.index for p in game.players] == list(range(10))
    assert game.round_number == 0
    assert game_phase(game) is GamePhase.CREATED


def test_initialize_round():
    game = initialize_round(create_game(["a", "b", "c", "d"]), rng=random.Random(3))
    assert game.round_number == 1
    assert all(len(row) == 1 for row in game.board.rows)
    assert all(len(p.hand) == 10 for p in game.players)
    assert len(game.leftover) == 104 - 4 - 40
    all_cards = [row[0] for row in game.board.rows] + list(game.leftover)
    for p in game.players:
        all_cards.extend(p.hand)
    assert is_deck_valid(all_cards)
    assert game_phase(game) is GamePhase.ROUND_IN_PROGRESS

    again = initialize_round(game, rng=random.Random(4))
    assert again.round_number == 2


def test_selection_and_readiness():
    game = _game_with([[25, 60], [5, 70]], [[10], [20], [30], [40]])
    assert not all_players_ready(game)
    with pytest.raises(NotAllReadyError):
        resolve_round(game)

    game = select_card_for_player(game, 0, Card(25))
    assert game.players[0].selected_card == Card(25)
    assert not all_players_ready(game)
    with pytest.raises(NotAllReadyError):
        resolve_round(game)

    game = select_card_for_player(game, 1, Card(5), chosen_row=0)
    assert all_players_ready(game)

    with pytest.raises(AlreadySelectedError):
        select_card_for_player(game, 1, Card(70))
    with pytest.raises(InvalidPlayerIndexError):
        select_card_for_player(game, 2, Card(70))


def test_ready_requires_stored_selection():
    game = _game_with([[25], [5]], [[10], [20], [30], [40]])
    game = select_card_for_player(game, 0, Card(25))
    game = select_card_for_player(game, 1, Card(5), chosen_row=0)
    # drop the stored selection of player 1 while keeping the selected card
    game = replace(game, selections=tuple(s for s in game.selections if s.player_index == 0))
    assert game.players[1].selected_card == Card(5)
    assert not all_players_ready(game)


def test_resolve_round_applies_penalties():
    game = _game_with([[25, 60], [5, 70]], [[10], [20], [30], [40]])
    game = select_card_for_player(game, 0, Card(25))
    game = select_card_for_player(game, 1, Card(5), chosen_row=0)

    resolved, resolution = resolve_round_detailed(game)

    # 5 resolves first and takes row 0; 25 then follows 20.
    assert [r.card.number for r in resolution.results] == [5, 25]
    assert [c.number for c in resolved.board.rows[0]] == [5]
    assert [c.number for c in resolved.board.rows[1]] == [20, 25]
    assert [c.number for c in resolved.players[1].penalty_cards] == [10]
    assert scores(resolved) == [0, 3]
    assert resolved.selections == ()
    assert all(p.selected_card is None for p in resolved.players)
    assert resolved.players[0].hand == (Card(60),)
    assert resolve_round(game) == resolved


def test_resolve_round_without_row_for_too_low_card():
    game = _game_with([[25], [5]], [[10], [20], [30], [40]])
    game = select_card_for_player(game, 0, Card(25))
    game = select_card_for_player(game, 1, Card(5))
    with pytest.raises(RowChoiceRequiredError):
        resolve_round(game)


def test_set_chosen_row_for_player():
    game = _game_with([[25], [5]], [[10], [20], [30], [40]])
    with pytest.raises(NoSelectionError):
        set_chosen_row_for_player(game, 1, 2)

    game = select_card_for_player(game, 0, Card(25))
    game = select_card_for_player(game, 1, Card(5))
    with pytest.raises(InvalidRowIndexError):
        set_chosen_row_for_player(game, 1, 4)
    with pytest.raises(InvalidPlayerIndexError):
        set_chosen_row_for_player(game, 5, 0)

    game = set_chosen_row_for_player(game, 1, 2)
    assert get_selection(game, 1).chosen_row == 2
    resolved = resolve_round(game)
    assert [c.number for c in resolved.players[1].penalty_cards] == [30]


def test_reselection_replaces_stored_selection():
    game = _game_with([[25, 35], [5]], [[10], [20], [30], [40]])
    game = select_card_for_player(game, 0, Card(25))
    game = cancel_selection(game, 0)
    assert game.players[0].selected_card is None
    assert Card(25) in game.players[0].hand
    assert get_selection(game, 0) is None

    game = select_card_for_player(game, 0, Card(35))
    assert [s.card for s in game.selections if s.player_index == 0] == [Card(35)]
    with pytest.raises(NoSelectionError):
        cancel_selection(game, 1)


def test_full_round_empties_hands():
    game = initialize_round(create_game(["a", "b", "c", "d"]), rng=random.Random(11))
    for _ in range(10):
        assert not is_round_complete(game)
        for p in game.players:
            game = select_card_for_player(game, p.index, sorted_hand(p)[0], cheapest_row(game.board))
        game = resolve_round(game)
    assert is_round_complete(game)
    # no card is lost: 4 row starters + 40 dealt
    on_board = sum(len(row) for row in game.board.rows)
    in_piles = sum(len(p.penalty_cards) for p in game.players)
    assert on_board + in_piles == 44


def test_game_over_threshold():
    game = create_game(["a", "b", "c"])
    # 7 + 8*5 + 6*3 = 65
    pile_65 = [55, 11, 22, 33, 44, 66, 77, 88, 99, 10, 20, 30, 40, 50, 60]
    almost = _with_penalties(game, [pile_65, [], []])
    assert scores(almost) == [65, 0, 0]
    assert not is_game_over(almost)

    over = _with_penalties(game, [pile_65 + [1], [], []])
    assert scores(over)[0] == 66
    assert is_game_over(over)
    assert game_phase(replace(over, round_number=1)) is GamePhase.GAME_OVER


def test_winner_lowest_score_first_index_on_ties():
    game = _with_penalties(create_game(["a", "b", "c"]), [[11], [10], [20]])
    assert scores(game) == [5, 3, 3]
    assert get_winner(game).index == 1

    tied = _with_penalties(create_game(["a", "b"]), [[], []])
    assert get_winner(tied).index == 0
