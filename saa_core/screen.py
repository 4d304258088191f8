from __future__ import annotations

import curses
from typing import Sequence

from .card import Card, STACKS, SUITS, card_label
from .errors import FatalError
from .keys import ABOUT_TEXT, EOF, HELP_TEXT, TITLE

# Heights of the screen areas, bottom up.
PROMPT_HEIGHT = 1
STATUS_HEIGHT = 1
COMMAND_HEIGHT = 2
BOARD_HEIGHT = 19
TITLE_HEIGHT = 1

STACK_INDENT = 11  # column of the foundation column
CARD_SIZE = 6      # columns used by one card


class CursesDisplay:
    """Curses implementation of the interpreter's Display, laid out from the bottom of the window."""

    def __init__(self, window: 'curses.window') -> None:
        self.w = window
        self.rows, self.cols = window.getmaxyx()
        self.prompt_row = self.rows - PROMPT_HEIGHT
        self.status_row = self.prompt_row - STATUS_HEIGHT
        self.command_row = self.status_row - COMMAND_HEIGHT
        self.board_row = self.command_row - BOARD_HEIGHT
        self.title_row = self.board_row - TITLE_HEIGHT
        if self.title_row < 0:
            raise FatalError(f'Cannot initialize screen: need {self.rows - self.title_row} rows, have {self.rows}.')

    # Low-level helpers

    def _put(self, y: int, x: int, text: str) -> None:
        if 0 <= y < self.rows and 0 <= x and x + len(text) < self.cols:
            self.w.addstr(y, x, text)

    def _add(self, text: str) -> None:
        """Writes at the cursor, cut to the room left on the line."""
        _, x = self.w.getyx()
        room = self.cols - x - 1
        if room > 0:
            self.w.addstr(text[:room])

    def _stack_column(self, p: int) -> int:
        return STACK_INDENT + CARD_SIZE * (p + 1)

    # Display contract

    def render_card(self, card: Card) -> None:
        self._add(card_label(card))

    def render_stack(self, index: int, cards: Sequence[Card]) -> None:
        """
        Draws a stack bottom up. A stack taller than the board area keeps its
        top cards visible and shows '+N' in the bottom row for the N cards hidden.
        """
        x = self._stack_column(index)
        for h in range(1, BOARD_HEIGHT + 1):
            self._put(self.command_row - h, x, '   ')
        shown = list(cards)
        first = 1
        if len(shown) > BOARD_HEIGHT:
            hidden = len(shown) - (BOARD_HEIGHT - 1)
            self._put(self.command_row - 1, x, f'+{hidden}')
            shown = shown[hidden:]
            first = 2
        for h, card in enumerate(shown, start=first):
            self._put(self.command_row - h, x, card_label(card))

    def render_foundation(self, suit: int, card: Card) -> None:
        self._put(self.command_row - 2 * (suit + 1), self._stack_column(-1), card_label(card))

    def clear_status_line(self) -> None:
        self.w.move(self.status_row, STACK_INDENT)
        self.w.clrtoeol()

    def clear_prompt_line(self) -> None:
        self.w.move(self.prompt_row, STACK_INDENT)
        self.w.clrtoeol()

    def write_status(self, text: str) -> None:
        self._add(text)

    def write_prompt(self, text: str) -> None:
        self._add(text)

    def read_key(self) -> str:
        self.w.refresh()
        ch = self.w.getch()
        if ch < 0:
            return EOF
        if ch > 255:
            # Function keys come back by name, which no command matches
            return curses.keyname(ch).decode('ascii', 'replace')
        return chr(ch)

    def show_help(self) -> None:
        self._page(HELP_TEXT, 'Type space for more about the program. ')
        if self.w.getch() == ord(' '):
            self._page(ABOUT_TEXT, 'Type any character to continue the game. ')
            self.w.getch()
        self.show_frame()

    # Frames used by the outer loop

    def _page(self, text: str, question: str) -> None:
        self.w.clear()
        for y, line in enumerate(text.splitlines()):
            self._put(y, 0, line)
        self._put(self.prompt_row, 0, question)
        self.w.refresh()

    def show_frame(self, commands: bool = True) -> None:
        """Clears the screen and draws the title, labels and status/prompt fields."""
        self.w.clear()
        self._put(self.title_row, STACK_INDENT, TITLE)
        if commands:
            self._put(self.command_row, 0, 'Commands:')
            for p in range(-1, STACKS):
                self._put(self.command_row, self._stack_column(p), f'{p + 1},')
            self._put(self.command_row, self._stack_column(STACKS), 'q, r, s, or ?.')
            for s in range(SUITS):
                self.render_foundation(s, s)
        self._put(self.status_row, 0, 'Status:')
        self._put(self.prompt_row, 0, 'Prompt:')
        if commands:
            self.clear_status_line()
            self.write_status('Fresh display.  Type ? for help.')
