"""
Bot policies and the agent interface used by the match runner.

Two policies are provided as plain functions ``(bot, player, board) ->
BotDecision``:

- Easy: picks a uniformly random card from the hand.
- Smart: greedy penalty minimiser evaluated against the current board.

Neither function mutates its inputs nor resolves anything; the decision is fed
to ``select_card_for_player`` exactly as a human choice would be.

The small ``Policy`` protocol wraps them for headless play:
``choose_card(player, board)`` and ``choose_row(player, board)``. The latter is
asked at resolution time, against the board as it is when the too-low card is
revealed.
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Literal, NamedTuple, Optional, Protocol

from .board import MAX_ROW_LENGTH, ROW_COUNT, Board, cheapest_row, row_for_card
from .deck import Card, total_bull_heads
from .errors import EmptyHandError
from .player import Player

BotDifficulty = Literal["easy", "smart"]
DIFFICULTIES = ("easy", "smart")


@dataclass(frozen=True)
class Bot:
    name: str
    difficulty: BotDifficulty


class BotDecision(NamedTuple):
    card: Card
    chosen_row: Optional[int] = None


def create_easy_bot(name: str) -> Bot:
    return Bot(name=name, difficulty="easy")


def create_smart_bot(name: str) -> Bot:
    return Bot(name=name, difficulty="smart")


def select_card_easy(
    bot: Bot,
    player: Player,
    board: Optional[Board],
    rng: random.Random | None = None,
) -> BotDecision:
    """Pick a random card from the hand."""
    if not player.hand:
        raise EmptyHandError(f"{bot.name} has no cards in hand")
    rng = rng or random.Random()
    return BotDecision(card=rng.choice(player.hand))


def select_card_easy_with_row_hint(
    bot: Bot,
    player: Player,
    board: Optional[Board],
    rng: random.Random | None = None,
) -> BotDecision:
    """
    Easy pick plus a random row if the card is already too low on ``board``.

    The row is only a hint: whether the card is really too low depends on the
    cards revealed before it in the same turn.
    """
    rng = rng or random.Random()
    decision = select_card_easy(bot, player, board, rng=rng)
    if board is not None and not board.is_empty() and row_for_card(board, decision.card) is None:
        return decision._replace(chosen_row=rng.randrange(ROW_COUNT))
    return decision


def select_card_smart(bot: Bot, player: Player, board: Optional[Board]) -> BotDecision:
    """
    Greedy choice against the current board:

    1. the lowest card that lands in a row with room;
    2. otherwise the sixth card taking the cheapest row, unless a too-low card
       could take a strictly cheaper row instead;
    3. otherwise the lowest too-low card, taking the cheapest row.

    Cards played by the other players in the same turn are not anticipated.
    """
    if not player.hand:
        raise EmptyHandError(f"{bot.name} has no cards in hand")

    hand = sorted(player.hand)
    if board is None or board.is_empty():
        return BotDecision(card=hand[0])

    safe: List[Card] = []
    sixth: List[Card] = []
    too_low: List[Card] = []
    for card in hand:
        target = row_for_card(board, card)
        if target is None:
            too_low.append(card)
        elif len(board.rows[target]) >= MAX_ROW_LENGTH:
            sixth.append(card)
        else:
            safe.append(card)

    if safe:
        return BotDecision(card=safe[0])

    if sixth:
        best_card = sixth[0]
        min_penalty: Optional[int] = None
        for card in sixth:
            penalty = total_bull_heads(board.rows[row_for_card(board, card)])
            if min_penalty is None or penalty < min_penalty:
                min_penalty = penalty
                best_card = card

        if too_low:
            row = cheapest_row(board)
            if total_bull_heads(board.rows[row]) < min_penalty:
                return BotDecision(card=too_low[0], chosen_row=row)

        return BotDecision(card=best_card)

    return BotDecision(card=too_low[0], chosen_row=cheapest_row(board))


class Policy(Protocol):
    """Decision-maker for one seat."""

    name: str

    def choose_card(self, player: Player, board: Board) -> BotDecision:
        """Pick the card to commit this turn (optionally with a row hint)."""

    def choose_row(self, player: Player, board: Board) -> int:
        """Pick the row to take when the committed card turns out too low."""


@dataclass
class RandomAgent:
    """
    Easy bot: random card. A too-low card takes the cheapest row, the default
    for every automated row choice; the random row only exists as a hint
    attached when ``row_hints`` is set.

    Usage:
        agent = RandomAgent(name="Bot 1", seed=42)
        decision = agent.choose_card(player, board)
    """

    name: str = "Easy bot"
    seed: int | None = None
    row_hints: bool = False
    bot: Bot = field(init=False, repr=False, compare=False)
    _rng: random.Random = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._rng = random.Random(self.seed)
        self.bot = create_easy_bot(self.name)

    def choose_card(self, player: Player, board: Board) -> BotDecision:
        if self.row_hints:
            return select_card_easy_with_row_hint(self.bot, player, board, rng=self._rng)
        return select_card_easy(self.bot, player, board, rng=self._rng)

    def choose_row(self, player: Player, board: Board) -> int:
        return cheapest_row(board)


@dataclass
class GreedyAgent:
    """Smart bot: greedy card choice, cheapest row when forced to take one."""

    name: str = "Smart bot"
    bot: Bot = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.bot = create_smart_bot(self.name)

    def choose_card(self, player: Player, board: Board) -> BotDecision:
        return select_card_smart(self.bot, player, board)

    def choose_row(self, player: Player, board: Board) -> int:
        return cheapest_row(board)


def make_agent(difficulty: str, name: str | None = None, seed: int | None = None) -> Policy:
    if difficulty == "easy":
        return RandomAgent(name=name or "Easy bot", seed=seed)
    if difficulty == "smart":
        return GreedyAgent(name=name or "Smart bot")
    raise ValueError(f"Unknown bot difficulty: {difficulty!r} (expected one of {DIFFICULTIES})")


__all__ = [
    "BotDifficulty",
    "DIFFICULTIES",
    "Bot",
    "BotDecision",
    "create_easy_bot",
    "create_smart_bot",
    "select_card_easy",
    "select_card_easy_with_row_hint",
    "select_card_smart",
    "Policy",
    "RandomAgent",
    "GreedyAgent",
    "make_agent",
]
