from __future__ import annotations

import logging
import random
import time
from typing import List, Optional

from .board import Board
from .card import Card, STACKS, deck
from .errors import ClockUnavailable

logger = logging.getLogger(__name__)


def clock_seed() -> int:
    """Seed derived from the local wall clock: seconds since the start of the hour of the day."""
    try:
        now = time.localtime()
    except (OverflowError, OSError, ValueError) as e:
        raise ClockUnavailable('Cannot initialize random number generator using the timer.') from e
    return now.tm_sec + 60 * now.tm_min + 60 * 60 * now.tm_hour


def shuffle(rank_count: int, seed: Optional[int] = None, rng: Optional[random.Random] = None) -> List[Card]:
    """Builds the deck for rank_count ranks and applies a uniform random permutation."""
    cards = deck(rank_count)
    if rng is None:
        rng = random.Random(clock_seed() if seed is None else seed)
    for i in range(len(cards) - 1, 0, -1):
        j = rng.randrange(i + 1)
        cards[i], cards[j] = cards[j], cards[i]
    return cards


def deal(board: Board, rank_count: Optional[int] = None, seed: Optional[int] = None,
         rng: Optional[random.Random] = None) -> List[Card]:
    """
    Clears the board and deals a freshly shuffled deck onto it.

    Card i goes to stack i mod 8, so later cards end up on top.
    Returns the shuffled deck in dealing order.
    """
    board.clear(rank_count)
    cards = shuffle(board.rank_count, seed=seed, rng=rng)
    for i, card in enumerate(cards):
        board.push_card(i % STACKS, card)
    logger.debug('dealt %d cards (%d ranks)', len(cards), board.rank_count)
    return cards
