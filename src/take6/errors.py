"""
Typed failures raised by the Take 6 engine.

Every error derives from ``Take6Error`` (a ``ValueError``), so callers can
either guard a single failure kind or catch the whole family. Nothing in the
engine retries or clamps: an error always means the caller asked for
something the rules do not allow.
"""
from __future__ import annotations


class Take6Error(ValueError):
    """Base class for all engine failures."""


# Construction / validation


class InvalidCardNumberError(Take6Error):
    def __init__(self, number: int):
        self.number = number
        super().__init__(f"Card number must be between 1 and 104, got {number}")


class InvalidPlayerCountError(Take6Error):
    pass


class InvalidHandSizeError(Take6Error):
    pass


class InvalidPlayerIndexError(Take6Error):
    pass


class InvalidRowIndexError(Take6Error):
    def __init__(self, row_index: int):
        self.row_index = row_index
        super().__init__(f"Row index must be between 0 and 3, got {row_index}")


class InvalidBoardError(Take6Error):
    pass


# State preconditions


class RowNotPlaceableError(Take6Error):
    pass


class RowChoiceRequiredError(Take6Error):
    """A too-low card reached resolution without a chosen row."""

    def __init__(self, card, player_index: int):
        self.card = card
        self.player_index = player_index
        super().__init__(
            f"Player {player_index} must choose a row for too-low card {card.number}"
        )


class CardNotInHandError(Take6Error):
    pass


class AlreadySelectedError(Take6Error):
    pass


class NoSelectionError(Take6Error):
    pass


class NotAllReadyError(Take6Error):
    pass


class EmptyHandError(Take6Error):
    pass


# Resources


class InsufficientCardsError(Take6Error):
    def __init__(self, needed: int, available: int):
        self.needed = needed
        self.available = available
        super().__init__(f"Not enough cards in deck: need {needed}, have {available}")


__all__ = [
    "Take6Error",
    "InvalidCardNumberError",
    "InvalidPlayerCountError",
    "InvalidHandSizeError",
    "InvalidPlayerIndexError",
    "InvalidRowIndexError",
    "InvalidBoardError",
    "RowNotPlaceableError",
    "RowChoiceRequiredError",
    "CardNotInHandError",
    "AlreadySelectedError",
    "NoSelectionError",
    "NotAllReadyError",
    "EmptyHandError",
    "InsufficientCardsError",
]
