from __future__ import annotations

import logging
from typing import List

from .card import Card, MAX_CARDS
from .errors import PoolExhausted

NIL = -1  # handle that ends a chain of cells

logger = logging.getLogger(__name__)


class CardPool:
    """
    Fixed-capacity arena of card cells addressed by integer handle.

    Each cell holds a card and the handle of the cell below it, so a stack is
    a chain of handles starting at its top card. Unused cells are threaded
    on a free list; acquire and release are both O(1). A cell always belongs
    to exactly one stack position, and ownership moves explicitly on
    push/pop, so running out of cells means the card accounting is broken.
    """

    def __init__(self, capacity: int = MAX_CARDS) -> None:
        if capacity <= 0:
            raise ValueError('Pool capacity must be positive')
        self._capacity = capacity
        self._cards: List[Card] = [0] * capacity
        self._rest: List[int] = [NIL] * capacity
        self._free = NIL
        self._in_use = 0
        self.reset()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def in_use(self) -> int:
        return self._in_use

    def reset(self) -> None:
        """Returns every cell to the free list."""
        for i in range(self._capacity - 1):
            self._rest[i] = i + 1
        self._rest[self._capacity - 1] = NIL
        self._free = 0
        self._in_use = 0

    def acquire(self, card: Card, successor: int) -> int:
        handle = self._free
        if handle == NIL:
            logger.error('card pool exhausted with %d cells in use', self._in_use)
            raise PoolExhausted('Cannot get space.')
        self._free = self._rest[handle]
        self._cards[handle] = card
        self._rest[handle] = successor
        self._in_use += 1
        return handle

    def release(self, handle: int) -> None:
        self._rest[handle] = self._free
        self._free = handle
        self._in_use -= 1

    def card(self, handle: int) -> Card:
        return self._cards[handle]

    def successor(self, handle: int) -> int:
        return self._rest[handle]
