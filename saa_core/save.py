from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from typing import List, Tuple

from .board import Board, Stack
from .card import Card, MAX_RANKS, MIN_RANKS, STACKS, SUITS
from .errors import CorruptSaveFile, SaveOpenFailed, SaveWriteFailed

SAVE_FILE_NAME = 'saa.sav'
MAGIC_NUMBER = 13921

# Host-native int; save files do not move between architectures.
INT = struct.Struct('i')

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SaveRecord:
    """A decoded save file. Stacks are ordered bottom to top."""
    rank_count: int
    foundations: Tuple[Card, ...]
    stacks: Tuple[Stack, ...]


def encode_board(board: Board) -> bytes:
    """
    Serializes a board:
      magic, card count, foundation[4],
      then for each of the 8 stacks: length, cards bottom to top.
    """
    fields: List[int] = [MAGIC_NUMBER, board.card_count]
    fields.extend(board.foundations())
    for cards in board.stacks():
        fields.append(len(cards))
        fields.extend(cards)
    return b''.join(INT.pack(v) for v in fields)


class _Reader:
    def __init__(self, data: bytes) -> None:
        self.data = data
        self.offset = 0

    def int(self) -> int:
        if self.offset + INT.size > len(self.data):
            raise CorruptSaveFile('Read error.')
        (value,) = INT.unpack_from(self.data, self.offset)
        self.offset += INT.size
        return value


def decode_board(data: bytes) -> SaveRecord:
    """Parses and validates a save file image. Raises CorruptSaveFile."""
    reader = _Reader(data)
    if len(data) < INT.size or reader.int() != MAGIC_NUMBER:
        raise CorruptSaveFile('Bad save file format.')
    card_count = reader.int()
    foundations = tuple(reader.int() for _ in range(SUITS))
    stacks: List[Stack] = []
    for _ in range(STACKS):
        length = reader.int()
        if length < 0 or length > card_count:
            raise CorruptSaveFile(f'Bad stack length {length}.')
        stacks.append(tuple(reader.int() for _ in range(length)))

    if card_count % SUITS != 0 or not MIN_RANKS <= card_count // SUITS <= MAX_RANKS:
        raise CorruptSaveFile(f'Bad card count {card_count}.')
    record = SaveRecord(rank_count=card_count // SUITS, foundations=foundations, stacks=tuple(stacks))
    _validate(record)
    return record


def _validate(record: SaveRecord) -> None:
    """Rejects records whose cards do not make up the deck exactly once."""
    top = record.rank_count * SUITS + SUITS - 1
    for s, card in enumerate(record.foundations):
        if card % SUITS != s or not 0 <= card <= top:
            raise CorruptSaveFile(f'Bad foundation card {card}.')
    for cards in record.stacks:
        for card in cards:
            if not SUITS <= card <= top:
                raise CorruptSaveFile(f'Bad card {card}.')
    if sum(len(cards) for cards in record.stacks) > record.rank_count * SUITS:
        raise CorruptSaveFile('Too many cards.')
    probe = Board(record.rank_count)
    probe.load(record.rank_count, record.foundations, record.stacks)
    if not probe.is_consistent():
        raise CorruptSaveFile('Cards do not match the deck.')


def save_game(board: Board, path: str = SAVE_FILE_NAME) -> None:
    """Writes the board to path. The file is not replaced atomically."""
    data = encode_board(board)
    try:
        f = open(path, 'wb')
    except OSError as e:
        raise SaveOpenFailed(f'Cannot open {path}.') from e
    try:
        with f:
            f.write(data)
    except OSError as e:
        raise SaveWriteFailed('Write failed.') from e
    logger.info('saved game to %s (%d bytes)', path, len(data))


def read_save(path: str = SAVE_FILE_NAME) -> SaveRecord:
    try:
        f = open(path, 'rb')
    except OSError as e:
        raise SaveOpenFailed(f'Cannot open {path}.') from e
    try:
        with f:
            data = f.read()
    except OSError as e:
        raise CorruptSaveFile('Read error.') from e
    return decode_board(data)


def restore_game(board: Board, path: str = SAVE_FILE_NAME) -> None:
    """Reloads board from path in place. On any error the board is left untouched."""
    record = read_save(path)
    board.load(record.rank_count, record.foundations, record.stacks)
    logger.info('restored game from %s (%d ranks)', path, record.rank_count)
