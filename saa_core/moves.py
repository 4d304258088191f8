from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Union

from .board import Board
from .card import Card, STACKS, SUITS, card_label, card_rank, card_suit
from .errors import IllegalMove

Segment = Union[str, Card]  # status text piece, or a card to render inline

EMPTY_SOURCE = 'source stack is empty'
SAME_STACK = 'source and destination are the same stack'
NOT_SUCCESSOR = 'card is not the successor of its foundation'
RANK_MISMATCH = 'destination top is not exactly one rank higher'


@dataclass(frozen=True)
class MoveResult:
    """Outcome of a move attempt. destination None means the foundation."""
    success: bool
    moved_card: Optional[Card]
    reason: Optional[str]  # violated condition, None on success
    source: int
    destination: Optional[int]

    def segments(self) -> List[Segment]:
        """The status sentence for this result, with cards left for the display to render."""
        c = self.moved_card
        src = str(self.source + 1)
        if c is None:
            return [f'There is no card in stack {src}.']
        if self.destination is None:
            verb = ' was' if self.success else ' cannot be'
            return ['The ', c, verb + ' moved to the foundation.']
        dst = str(self.destination + 1)
        if self.reason == SAME_STACK:
            return ['The ', c, f' is already on stack {src}.']
        if self.success:
            return ['Moved the ', c, f' from stack {src} to stack {dst}.']
        return ['The ', c, f' cannot be moved from stack {src} to stack {dst}.']

    def describe(self) -> str:
        return ''.join(card_label(s) if isinstance(s, int) else s for s in self.segments())


def _check_stack(p: int) -> None:
    if not 0 <= p < STACKS:
        raise IndexError(f'stack index out of range: {p}')


def move_to_foundation(board: Board, src: int) -> MoveResult:
    """Moves the top card of a stack onto its suit's foundation, if it is the next card there."""
    _check_stack(src)
    c = board.top_card(src)
    if c is None:
        return MoveResult(False, None, EMPTY_SOURCE, src, None)
    suit = card_suit(c)
    if c != board.foundation_ref(suit) + SUITS:
        return MoveResult(False, c, NOT_SUCCESSOR, src, None)
    board.pop_card(src)
    board.foundation_set(suit, c)
    return MoveResult(True, c, None, src, None)


def move_to_stack(board: Board, src: int, dst: int) -> MoveResult:
    """
    Moves the top card of src onto dst. Allowed when dst is empty or its top
    card is exactly one rank higher than the moved card.
    """
    _check_stack(src)
    _check_stack(dst)
    c = board.top_card(src)
    if c is None:
        return MoveResult(False, None, EMPTY_SOURCE, src, dst)
    if src == dst:
        return MoveResult(False, c, SAME_STACK, src, dst)
    d = board.top_card(dst)
    if d is not None and card_rank(d) != card_rank(c) + 1:
        return MoveResult(False, c, RANK_MISMATCH, src, dst)
    board.pop_card(src)
    board.push_card(dst, c)
    return MoveResult(True, c, None, src, dst)


def apply_move(board: Board, src: int, dst: Optional[int]) -> MoveResult:
    """Applies a move (dst None for the foundation) and raises IllegalMove if it is not allowed."""
    if dst is None:
        result = move_to_foundation(board, src)
    else:
        result = move_to_stack(board, src, dst)
    if not result.success:
        raise IllegalMove(result)
    return result
