from __future__ import annotations

from typing import Iterable

from .board import Board
from .card import Card, STACKS, card_rank


def is_stack_done(cards: Iterable[Card]) -> bool:
    """
    True when a stack, given top card first, is empty or strictly increases
    in rank going down.
    """
    above = None
    for card in cards:
        if above is not None and card_rank(above) >= card_rank(card):
            return False
        above = card
    return True


def is_done(board: Board) -> bool:
    """The game is done when every stack is ordered by rank. Foundations do not matter."""
    return all(is_stack_done(board.iter_stack(p)) for p in range(STACKS))
