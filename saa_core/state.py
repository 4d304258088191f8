from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional

from .board import Board
from .card import Card, MAX_RANKS
from .deal import deal
from .save import SAVE_FILE_NAME


@dataclass
class Game:
    """The single game owned by an interpreter: board, save file and shuffle source."""
    board: Board = field(default_factory=Board)
    save_path: str = SAVE_FILE_NAME
    rng: Optional[random.Random] = None  # None seeds every shuffle from the clock

    @classmethod
    def new(cls, rank_count: int = MAX_RANKS, save_path: Optional[str] = None, seed: Optional[int] = None) -> 'Game':
        rng = random.Random(seed) if seed is not None else None
        return cls(board=Board(rank_count), save_path=save_path or SAVE_FILE_NAME, rng=rng)

    @property
    def rank_count(self) -> int:
        return self.board.rank_count

    def new_deal(self, rank_count: Optional[int] = None) -> List[Card]:
        return deal(self.board, rank_count, rng=self.rng)
