from __future__ import annotations

# Facade module that re-exports the Streets and Alleys core.
# Used by the Flask app, the tools and the tests.
# Single-responsibility modules live under saa_core/*.

from saa_core.card import (
    Card,
    SUITS,
    STACKS,
    MIN_RANKS,
    MAX_RANKS,
    MAX_CARDS,
    card_rank,
    card_suit,
    card_label,
    make_card,
    deck,
)
from saa_core.pool import CardPool, NIL
from saa_core.board import Board
from saa_core.deal import clock_seed, shuffle, deal
from saa_core.moves import MoveResult, move_to_foundation, move_to_stack, apply_move
from saa_core.done import is_stack_done, is_done
from saa_core.save import (
    MAGIC_NUMBER,
    SAVE_FILE_NAME,
    SaveRecord,
    encode_board,
    decode_board,
    read_save,
    save_game,
    restore_game,
)
from saa_core.state import Game
from saa_core.interpreter import CommandInterpreter, Display, Outcome, Phase
from saa_core.errors import (
    SaaError,
    FatalError,
    PoolExhausted,
    ClockUnavailable,
    SaveFileError,
    SaveOpenFailed,
    SaveWriteFailed,
    CorruptSaveFile,
    InvalidCommand,
    IllegalMove,
)


def main() -> int:
    # CLI driver delegated to saa_core.cli
    from saa_core.cli import main as _main
    return _main()


if __name__ == '__main__':
    raise SystemExit(main())
