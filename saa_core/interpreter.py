from __future__ import annotations

import logging
from enum import Enum
from typing import Mapping, Optional, Protocol, Sequence

from .card import Card, STACKS, card_suit
from .done import is_done
from .errors import CorruptSaveFile, InvalidCommand, SaveFileError
from .keys import EOF, KEY_ALIASES
from .moves import MoveResult, Segment, move_to_foundation, move_to_stack
from .save import restore_game, save_game
from .state import Game

logger = logging.getLogger(__name__)

BAD_INPUT = 'Bad input.  Type ? for help.'


class Display(Protocol):
    """Everything the interpreter needs from a screen. Stacks are passed bottom to top."""

    def render_card(self, card: Card) -> None: ...
    def render_stack(self, index: int, cards: Sequence[Card]) -> None: ...
    def render_foundation(self, suit: int, card: Card) -> None: ...
    def clear_status_line(self) -> None: ...
    def clear_prompt_line(self) -> None: ...
    def write_status(self, text: str) -> None: ...
    def write_prompt(self, text: str) -> None: ...
    def read_key(self) -> str: ...
    def show_help(self) -> None: ...


class Phase(Enum):
    AWAITING_SOURCE = 'source'
    AWAITING_DESTINATION = 'destination'


class Outcome(Enum):
    CONTINUE = 'continue'
    QUIT = 'quit'
    WON = 'won'
    REDEAL = 'redeal'


def _stack_index(key: str) -> int:
    if len(key) == 1 and '1' <= key <= str(STACKS):
        return int(key) - 1
    raise InvalidCommand(key)


class CommandInterpreter:
    """
    Two-phase command loop: pick a source stack, then a destination
    (0 for the foundation, 1-8 for a stack). The only state kept here is the
    selected source; the board lives in the Game.
    """

    def __init__(self, game: Game, display: Display, aliases: Optional[Mapping[str, str]] = None) -> None:
        self.game = game
        self.display = display
        self.aliases = KEY_ALIASES if aliases is None else aliases
        self.phase = Phase.AWAITING_SOURCE
        self.source: Optional[int] = None

    # Game loop

    def run(self) -> Outcome:
        """Plays the current deal until it is won, quit, or a redeal is requested."""
        self.reset()
        if is_done(self.game.board):
            return Outcome.WON
        while True:
            self.prompt()
            key = self.display.read_key()
            outcome = self.handle_key(self.aliases.get(key, key))
            if outcome is not Outcome.CONTINUE:
                logger.info('game ended: %s', outcome.value)
                return outcome

    def reset(self) -> None:
        self.phase = Phase.AWAITING_SOURCE
        self.source = None

    def prompt(self) -> None:
        d = self.display
        d.clear_prompt_line()
        if self.phase is Phase.AWAITING_SOURCE or self.source is None:
            d.write_prompt('Move from stack ')
            return
        card = self.game.board.top_card(self.source)
        d.write_prompt('Move ')
        if card is not None:
            d.render_card(card)
        d.write_prompt(f' from stack {self.source + 1} to ')

    def handle_key(self, key: str) -> Outcome:
        """Processes one command, already translated through the key aliases."""
        if key == EOF or key == 'q':
            return Outcome.QUIT
        if key in ('r', 's', '?'):
            self.reset()
            if key == 'r':
                return self.restore()
            if key == 's':
                self.save()
            else:
                self.help()
            return Outcome.CONTINUE
        try:
            if self.phase is Phase.AWAITING_SOURCE:
                return self._select_source(key)
            return self._select_destination(key)
        except InvalidCommand as e:
            logger.debug('%s in %s phase', e, self.phase.value)
            self._status(BAD_INPUT)
            return Outcome.CONTINUE

    def _select_source(self, key: str) -> Outcome:
        p = _stack_index(key)
        if self.game.board.is_empty(p):
            self._status(f'There is no card in stack {p + 1}.')
            return Outcome.CONTINUE
        self.source = p
        self.phase = Phase.AWAITING_DESTINATION
        return Outcome.CONTINUE

    def _select_destination(self, key: str) -> Outcome:
        if self.source is None:
            raise RuntimeError('no source stack selected')
        board = self.game.board
        if key == '0':
            result = move_to_foundation(board, self.source)
        else:
            result = move_to_stack(board, self.source, _stack_index(key))
        self.reset()
        self._report(result)
        if result.success and is_done(board):
            return Outcome.WON
        return Outcome.CONTINUE

    # Rendering

    def render_board(self) -> None:
        board = self.game.board
        for s, card in enumerate(board.foundations()):
            self.display.render_foundation(s, card)
        for p, cards in enumerate(board.stacks()):
            self.display.render_stack(p, cards)

    def _status(self, *segments: Segment) -> None:
        self.display.clear_status_line()
        for seg in segments:
            if isinstance(seg, str):
                self.display.write_status(seg)
            else:
                self.display.render_card(seg)

    def _report(self, result: MoveResult) -> None:
        board = self.game.board
        if result.success:
            self.display.render_stack(result.source, board.stack_cards(result.source))
            if result.destination is None:
                suit = card_suit(result.moved_card)
                self.display.render_foundation(suit, board.foundation_ref(suit))
            else:
                self.display.render_stack(result.destination, board.stack_cards(result.destination))
        else:
            logger.debug('illegal move: %s', result.reason)
        self._status(*result.segments())

    # Save, restore, help

    def _confirm(self, question: str) -> bool:
        self.display.clear_prompt_line()
        self.display.write_prompt(question)
        return self.display.read_key() == ' '

    def save(self) -> None:
        path = self.game.save_path
        if not self._confirm(f'Type space to save game in file {path}. '):
            self._status('The saving of the game was aborted.')
            return
        try:
            save_game(self.game.board, path)
        except SaveFileError as e:
            logger.warning('save to %s failed: %s', path, e)
            self._status(f'Save error: {e}  Game not saved.')
            return
        self._status('Game saved.')

    def restore(self) -> Outcome:
        path = self.game.save_path
        if not self._confirm(f'Type space to restore game in file {path}. '):
            self._status('The restoration of the old game was aborted.')
            return Outcome.CONTINUE
        try:
            restore_game(self.game.board, path)
        except CorruptSaveFile as e:
            logger.warning('restore from %s failed: %s', path, e)
            self._status(f'Restore error: {e}')
            if self._confirm('Type space for a fresh deal, any other key to keep playing. '):
                return Outcome.REDEAL
            return Outcome.CONTINUE
        except SaveFileError as e:
            logger.warning('restore from %s failed: %s', path, e)
            self._status(f'Restore error: {e}  Game not restored.')
            return Outcome.CONTINUE
        self.render_board()
        self._status(f'Game restored from {path}.')
        if is_done(self.game.board):
            return Outcome.WON
        return Outcome.CONTINUE

    def help(self) -> None:
        self.display.show_help()
        self.render_board()
        self._status('Fresh display.  Type ? for help.')
