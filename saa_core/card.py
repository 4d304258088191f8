from __future__ import annotations

from typing import List

Card = int  # rank * SUITS + suit; 0..3 are the per-suit blank cards

SUITS = 4
STACKS = 2 * SUITS
MIN_RANKS = 5
MAX_RANKS = 13
MAX_CARDS = MAX_RANKS * SUITS

SUIT_CHARS = 'CDHS'
RANK_CHARS = '-A23456789TJQK'


def card_rank(card: Card) -> int:
    """Rank of a card: 1 for an ace through 13 for a king, 0 for a blank."""
    return card // SUITS


def card_suit(card: Card) -> int:
    return card % SUITS


def make_card(rank: int, suit: int) -> Card:
    return rank * SUITS + suit


def check_rank_count(rank_count: int) -> int:
    """Validates a rank count and returns it unchanged."""
    if not MIN_RANKS <= rank_count <= MAX_RANKS:
        raise ValueError(f'Number of ranks must be between {MIN_RANKS} and {MAX_RANKS}, got {rank_count}')
    return rank_count


def deck(rank_count: int) -> List[Card]:
    """The ordered deck for a game using the given number of ranks."""
    check_rank_count(rank_count)
    return [i + SUITS for i in range(rank_count * SUITS)]


def card_label(card: Card) -> str:
    """Two-character text form of a card, suit first: 'CA', 'HT', 'S-'."""
    rank = card_rank(card)
    if card < 0 or rank >= len(RANK_CHARS):
        return '??'
    return SUIT_CHARS[card_suit(card)] + RANK_CHARS[rank]
