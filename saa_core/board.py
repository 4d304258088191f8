from __future__ import annotations

from collections import Counter
from typing import Iterator, List, Optional, Sequence, Tuple

from .card import Card, MAX_RANKS, STACKS, SUITS, card_label, card_rank, card_suit, check_rank_count, deck, make_card
from .pool import CardPool, NIL

Stack = Tuple[Card, ...]  # bottom to top


class Board:
    """The game state: eight stacks of cards and one foundation per suit."""

    def __init__(self, rank_count: int = MAX_RANKS, pool: Optional[CardPool] = None) -> None:
        self.rank_count = check_rank_count(rank_count)
        self.pool = pool if pool is not None else CardPool()
        self._heads: List[int] = [NIL] * STACKS
        self._foundation: List[Card] = list(range(SUITS))

    @property
    def card_count(self) -> int:
        return self.rank_count * SUITS

    # Stacks

    def push_card(self, p: int, card: Card) -> None:
        self._heads[p] = self.pool.acquire(card, self._heads[p])

    def pop_card(self, p: int) -> Card:
        handle = self._heads[p]
        if handle == NIL:
            raise IndexError(f'pop from empty stack {p}')
        card = self.pool.card(handle)
        self._heads[p] = self.pool.successor(handle)
        self.pool.release(handle)
        return card

    def top_card(self, p: int) -> Optional[Card]:
        handle = self._heads[p]
        if handle == NIL:
            return None
        return self.pool.card(handle)

    def is_empty(self, p: int) -> bool:
        return self._heads[p] == NIL

    def iter_stack(self, p: int) -> Iterator[Card]:
        """Iterates over a stack from its top card down."""
        handle = self._heads[p]
        while handle != NIL:
            yield self.pool.card(handle)
            handle = self.pool.successor(handle)

    def stack_len(self, p: int) -> int:
        return sum(1 for _ in self.iter_stack(p))

    def stack_cards(self, p: int) -> Stack:
        """The cards of a stack ordered bottom to top."""
        cards = list(self.iter_stack(p))
        cards.reverse()
        return tuple(cards)

    def stacks(self) -> Tuple[Stack, ...]:
        return tuple(self.stack_cards(p) for p in range(STACKS))

    # Foundations

    def foundation_ref(self, suit: int) -> Card:
        return self._foundation[suit]

    def foundation_set(self, suit: int, card: Card) -> None:
        self._foundation[suit] = card

    def foundations(self) -> Tuple[Card, ...]:
        return tuple(self._foundation)

    # Whole-board operations

    def clear(self, rank_count: Optional[int] = None) -> None:
        """Makes the board ready for a new deal."""
        if rank_count is not None:
            self.rank_count = check_rank_count(rank_count)
        self.pool.reset()
        self._heads = [NIL] * STACKS
        self._foundation = list(range(SUITS))

    def load(self, rank_count: int, foundations: Sequence[Card], stacks: Sequence[Sequence[Card]]) -> None:
        """Replaces the board contents. Stacks are given bottom to top."""
        if len(foundations) != SUITS or len(stacks) != STACKS:
            raise ValueError('Board needs 4 foundations and 8 stacks')
        self.clear(rank_count)
        for s, card in enumerate(foundations):
            self._foundation[s] = card
        for p, cards in enumerate(stacks):
            for card in cards:
                self.push_card(p, card)

    def accounted_cards(self) -> List[Card]:
        """Cards on the stacks plus every card consumed into a foundation, sorted."""
        cards: List[Card] = [c for p in range(STACKS) for c in self.iter_stack(p)]
        for s, top in enumerate(self._foundation):
            cards.extend(make_card(rank, s) for rank in range(1, card_rank(top) + 1))
        cards.sort()
        return cards

    def is_consistent(self) -> bool:
        """True when every card of the deck is accounted for exactly once."""
        for s, top in enumerate(self._foundation):
            if card_suit(top) != s or not 0 <= card_rank(top) <= self.rank_count:
                return False
        cards = self.accounted_cards()
        return Counter(cards) == Counter(deck(self.rank_count))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self.rank_count == other.rank_count
            and self.foundations() == other.foundations()
            and self.stacks() == other.stacks()
        )

    def __repr__(self) -> str:
        return f'Board(rank_count={self.rank_count}, foundations={self.foundations()}, stacks={self.stacks()})'

    def pretty(self) -> str:
        """Generates a human-readable rendering: foundations, then stacks as columns."""
        lines: List[str] = []
        lines.append('Foundations: ' + ' '.join(card_label(c) for c in self._foundation))
        lines.append('  '.join(f' {p + 1}' for p in range(STACKS)))
        columns = self.stacks()
        depth = max((len(col) for col in columns), default=0)
        for row in range(depth):
            cells = [card_label(col[row]) if row < len(col) else '  ' for col in columns]
            lines.append('  '.join(cells).rstrip())
        return '\n'.join(lines)
