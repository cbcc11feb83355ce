"""Take 6 rules engine, bot policies and headless match runner."""

__version__ = "0.1.0"

from .errors import (
    Take6Error,
    InvalidCardNumberError,
    InvalidPlayerCountError,
    InvalidHandSizeError,
    InvalidPlayerIndexError,
    InvalidRowIndexError,
    InvalidBoardError,
    RowNotPlaceableError,
    RowChoiceRequiredError,
    CardNotInHandError,
    AlreadySelectedError,
    NoSelectionError,
    NotAllReadyError,
    EmptyHandError,
    InsufficientCardsError,
)
from .deck import Card, bull_heads_for, make_card, make_deck_104, is_deck_valid, total_bull_heads
from .deal import shuffle_deck, deal_cards, deal_round, RoundDeal
from .board import (
    Board,
    Placement,
    PlacementKind,
    ResolvedPlacement,
    Resolution,
    create_board,
    row_for_card,
    can_place,
    place_card,
    take_row,
    cheapest_row,
    resolve_step,
    resolve_many,
)
from .player import Player, create_player, select_card, add_penalty_cards, calculate_score
from .game import (
    Game,
    GamePhase,
    create_game,
    initialize_round,
    select_card_for_player,
    set_chosen_row_for_player,
    all_players_ready,
    resolve_round,
    is_round_complete,
    is_game_over,
    get_winner,
)
from .agents import (
    Bot,
    BotDecision,
    RandomAgent,
    GreedyAgent,
    select_card_easy,
    select_card_smart,
    make_agent,
)
from .match import MatchResult, play_turn, play_round, run_match
