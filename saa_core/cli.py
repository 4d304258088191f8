from __future__ import annotations

import argparse
import curses
import logging
import sys
from typing import List, NoReturn, Optional

from .card import MAX_RANKS, MIN_RANKS
from .config import configure_logging, save_path, seed_from_env
from .errors import FatalError
from .interpreter import CommandInterpreter, Outcome
from .keys import EOF, HELP_TEXT, RANK_KEYS
from .screen import CursesDisplay
from .state import Game

logger = logging.getLogger(__name__)


class _UsageParser(argparse.ArgumentParser):
    """Prints the game help and usage on any command line error, then exits with status 1."""

    def error(self, message: str) -> NoReturn:
        sys.stderr.write(HELP_TEXT)
        sys.stderr.write(f'\n{message}\n')
        self.exit(1, f'Usage: {self.prog} [number_of_ranks].\n'
                     f'The number of ranks must be between {MIN_RANKS} and {MAX_RANKS}.\n')


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = _UsageParser(prog='saa', description='Streets and Alleys solitaire')
    parser.add_argument('ranks', nargs='?', type=int, default=MAX_RANKS,
                        help=f'Number of ranks to play with ({MIN_RANKS}-{MAX_RANKS}, default {MAX_RANKS})')
    args = parser.parse_args(argv)
    if not MIN_RANKS <= args.ranks <= MAX_RANKS:
        parser.error(f'bad number of ranks: {args.ranks}')
    return args


def _change_ranks(display: CursesDisplay, current: int) -> Optional[int]:
    """Asks for a new game size. Returns the rank count to play next, or None to exit."""
    display.show_frame(commands=False)
    while True:
        display.clear_status_line()
        display.write_status('Changing the number of ranks used in a game.')
        display.clear_prompt_line()
        display.write_prompt('Press one of 5,..., 9, t, j, q, k to select the largest rank. ')
        key = display.read_key()
        if key in RANK_KEYS:
            return RANK_KEYS[key]
        display.clear_status_line()
        display.write_status('Bad input.')
        display.clear_prompt_line()
        display.write_prompt('Type space to try again, x to exit program, others play game. ')
        key = display.read_key()
        if key == ' ':
            continue
        if key in ('x', EOF):
            return None
        return current


def _ask_next_game(display: CursesDisplay, current: int) -> Optional[int]:
    display.clear_prompt_line()
    display.write_prompt('Press space to play again, x to exit, or r to change game size. ')
    while True:
        key = display.read_key()
        if key in ('x', EOF):
            return None
        if key == ' ':
            return current
        if key == 'r':
            return _change_ranks(display, current)


def play(window: 'curses.window', rank_count: int, path: str, seed: Optional[int] = None) -> None:
    """Plays games until the player exits."""
    display = CursesDisplay(window)
    game = Game.new(rank_count, save_path=path, seed=seed)
    interpreter = CommandInterpreter(game, display)
    next_ranks: Optional[int] = rank_count
    while next_ranks is not None:
        game.new_deal(next_ranks)
        display.show_frame()
        interpreter.render_board()
        outcome = interpreter.run()
        if outcome is Outcome.REDEAL:
            next_ranks = game.rank_count
            continue
        display.clear_status_line()
        display.write_status('You won!' if outcome is Outcome.WON else 'You lose.')
        next_ranks = _ask_next_game(display, game.rank_count)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging()
    path = save_path()
    logger.info('starting with %d ranks, save file %s', args.ranks, path)
    try:
        curses.wrapper(play, args.ranks, path, seed_from_env())
    except FatalError as e:
        logger.critical('fatal: %s', e)
        print(f'saa: {e}', file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
