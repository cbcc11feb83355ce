"""
The four-row board and the placement rules.

- A card goes to the row whose last card is the highest one still below it.
- A card lower than every row end is "too low": its player must take a row of
  their choice, and the card becomes that row's only card.
- A row holds at most five cards; the player whose card would be the sixth
  takes the five and the card starts the row again.

All cards revealed in one turn are resolved together, lowest number first,
each one against the board left by the previous ones.

Boards are immutable: every operation returns a new ``Board``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence, Tuple

from .deck import Card, total_bull_heads
from .errors import (
    InvalidBoardError,
    InvalidRowIndexError,
    RowChoiceRequiredError,
    RowNotPlaceableError,
)

logger = logging.getLogger(__name__)

ROW_COUNT = 4
MAX_ROW_LENGTH = 5

Row = Tuple[Card, ...]


class PlacementKind(Enum):
    """How a single card ended up on the board."""

    PLACED = "placed"
    SIXTH_CARD = "sixth-card"
    TOOK_ROW = "took-row"


@dataclass(frozen=True)
class Board:
    """Four rows of cards; row cards are strictly increasing."""

    rows: Tuple[Row, ...] = ((),) * ROW_COUNT

    @classmethod
    def empty(cls) -> "Board":
        return cls()

    def row(self, row_index: int) -> Row:
        _check_row_index(self, row_index)
        return self.rows[row_index]

    def last_card(self, row_index: int) -> Optional[Card]:
        row = self.row(row_index)
        return row[-1] if row else None

    def is_empty(self) -> bool:
        return all(len(row) == 0 for row in self.rows)

    def row_penalties(self) -> List[int]:
        return [total_bull_heads(row) for row in self.rows]

    def with_row(self, row_index: int, row: Row) -> "Board":
        _check_row_index(self, row_index)
        rows = list(self.rows)
        rows[row_index] = tuple(row)
        return Board(rows=tuple(rows))

    def __str__(self) -> str:
        lines = []
        for i, row in enumerate(self.rows):
            cards = " ".join(f"{c.number:>3}" for c in row)
            lines.append(f"Row {i + 1}: {cards}  [{total_bull_heads(row)}]")
        return "\n".join(lines)


class Placement(NamedTuple):
    """One player's committed card for the turn, with an optional row for the too-low case."""

    player_index: int
    card: Card
    chosen_row: Optional[int] = None


class PlacementResult(NamedTuple):
    board: Board
    taken: Tuple[Card, ...]


class StepResult(NamedTuple):
    """
    Outcome of resolving a single placement.

    ``needs_row_selection`` is set (and the board left untouched) when the card is
    too low and the placement carries no row.
    """

    board: Board
    taken: Tuple[Card, ...]
    row_index: Optional[int]
    kind: Optional[PlacementKind]
    needs_row_selection: bool = False


class ResolvedPlacement(NamedTuple):
    player_index: int
    card: Card
    row_index: int
    taken: Tuple[Card, ...]
    kind: PlacementKind
    board: Board  # board right after this card


class Resolution(NamedTuple):
    board: Board
    results: List[ResolvedPlacement]
    taken_by_player: Dict[int, List[Card]]


def _check_row_index(board: Board, row_index: int) -> None:
    if not isinstance(row_index, int) or not 0 <= row_index < len(board.rows):
        raise InvalidRowIndexError(row_index)


def create_board(starting_cards: Sequence[Card]) -> Board:
    """Start a board with one card per row."""
    if len(starting_cards) != ROW_COUNT:
        raise InvalidBoardError(
            f"Must have exactly {ROW_COUNT} starting cards, got {len(starting_cards)}"
        )
    return Board(rows=tuple((card,) for card in starting_cards))


def row_bull_heads(board: Board, row_index: int) -> int:
    return total_bull_heads(board.row(row_index))


def cheapest_row(board: Board) -> int:
    """Row with the fewest bull heads; the lowest index wins ties."""
    best_row = 0
    best_heads: Optional[int] = None
    for i, heads in enumerate(board.row_penalties()):
        if best_heads is None or heads < best_heads:
            best_row = i
            best_heads = heads
    return best_row


def is_row_full(board: Board, row_index: int) -> bool:
    return len(board.row(row_index)) >= MAX_ROW_LENGTH


def row_for_card(board: Board, card: Card) -> Optional[int]:
    """
    Row the card must go to: among rows ending below ``card``, the one with the
    highest last card. ``None`` when the card is lower than every row end.
    """
    best_row: Optional[int] = None
    best_last: Optional[Card] = None
    for i, row in enumerate(board.rows):
        if not row:
            continue
        last = row[-1]
        if card.number > last.number and (best_last is None or last.number > best_last.number):
            best_row = i
            best_last = last
    return best_row


def is_too_low(board: Board, card: Card) -> bool:
    return row_for_card(board, card) is None


def can_place(board: Board, row_index: int, card: Card) -> bool:
    """True if ``card`` can be appended to the row without taking it."""
    row = board.row(row_index)
    if not row:
        return False
    if len(row) >= MAX_ROW_LENGTH:
        return False
    return card.number > row[-1].number


def place_card(board: Board, row_index: int, card: Card) -> PlacementResult:
    """
    Append ``card`` to a row. If the row already holds five cards they are taken
    and the row restarts with ``card``.
    """
    row = board.row(row_index)
    if not row:
        raise RowNotPlaceableError(f"Row {row_index} is empty")
    if card.number <= row[-1].number:
        raise RowNotPlaceableError(
            f"Card {card.number} cannot follow {row[-1].number} in row {row_index}"
        )

    if len(row) >= MAX_ROW_LENGTH:
        logger.debug("Card %d is the sixth card of row %d", card.number, row_index)
        return PlacementResult(board.with_row(row_index, (card,)), tuple(row))

    return PlacementResult(board.with_row(row_index, row + (card,)), ())


def take_row(board: Board, row_index: int, card: Card) -> PlacementResult:
    """Take every card of a row and restart it with ``card``."""
    taken = board.row(row_index)
    return PlacementResult(board.with_row(row_index, (card,)), tuple(taken))


def ordered_placements(placements: Iterable[Placement]) -> List[Placement]:
    """Placements in resolution order: lowest card first."""
    return sorted(placements, key=lambda p: p.card.number)


def resolve_step(board: Board, placement: Placement) -> StepResult:
    """Resolve one placement against ``board``."""
    target = row_for_card(board, placement.card)

    if target is None:
        if placement.chosen_row is None:
            return StepResult(
                board=board,
                taken=(),
                row_index=None,
                kind=None,
                needs_row_selection=True,
            )
        new_board, taken = take_row(board, placement.chosen_row, placement.card)
        logger.debug(
            "Player %d takes row %d with too-low card %d (%d cards)",
            placement.player_index,
            placement.chosen_row,
            placement.card.number,
            len(taken),
        )
        return StepResult(new_board, taken, placement.chosen_row, PlacementKind.TOOK_ROW)

    new_board, taken = place_card(board, target, placement.card)
    kind = PlacementKind.SIXTH_CARD if taken else PlacementKind.PLACED
    return StepResult(new_board, taken, target, kind)


def resolve_many(board: Board, placements: Iterable[Placement]) -> Resolution:
    """
    Resolve a whole turn: placements are applied in ascending card order, each
    against the board produced by the previous ones.

    Raises ``RowChoiceRequiredError`` if a too-low card has no chosen row. Since
    boards are immutable, the input board is untouched on failure.
    """
    current = board
    results: List[ResolvedPlacement] = []
    ordered = ordered_placements(placements)
    taken_by_player: Dict[int, List[Card]] = {p.player_index: [] for p in ordered}

    for placement in ordered:
        step = resolve_step(current, placement)
        if step.needs_row_selection:
            raise RowChoiceRequiredError(placement.card, placement.player_index)
        current = step.board
        results.append(
            ResolvedPlacement(
                player_index=placement.player_index,
                card=placement.card,
                row_index=step.row_index,
                taken=step.taken,
                kind=step.kind,
                board=current,
            )
        )
        taken_by_player[placement.player_index].extend(step.taken)

    return Resolution(board=current, results=results, taken_by_player=taken_by_player)


__all__ = [
    "ROW_COUNT",
    "MAX_ROW_LENGTH",
    "Row",
    "Board",
    "PlacementKind",
    "Placement",
    "PlacementResult",
    "StepResult",
    "ResolvedPlacement",
    "Resolution",
    "create_board",
    "row_bull_heads",
    "cheapest_row",
    "is_row_full",
    "row_for_card",
    "is_too_low",
    "can_place",
    "place_card",
    "take_row",
    "ordered_placements",
    "resolve_step",
    "resolve_many",
]
