from __future__ import annotations

from typing import Dict

EOF = ''  # what a display returns from read_key at end of input

# Aliases for use when there is no numeric keypad.
KEY_ALIASES: Dict[str, str] = {
    ' ': '0',
    'j': '1',
    'k': '2',
    'l': '3',
    ';': '4',
    'u': '5',
    'i': '6',
    'o': '7',
    'p': '8',
}


# Keys offered when changing the size of a game, mapped to the largest rank.
RANK_KEYS: Dict[str, int] = {
    '5': 5,
    '6': 6,
    '7': 7,
    '8': 8,
    '9': 9,
    't': 10,
    'j': 11,
    'q': 12,
    'k': 13,
}


TITLE = 'Streets and Alleys'

HELP_TEXT = """\
       Streets and Alleys

There are eight stacks of cards and a foundation for each suit.  A
card may be moved from the top of a stack to its foundation or to
the top of another stack.  The object of the game is to order the
cards in each stack so that each card is covered only by cards of
lesser rank. The ace has the smallest rank and the king has the
greatest rank.

A card may be moved to its foundation when the card's predecessor of
the same suit is there.  A card may be moved to a stack when the top
card of the stack has rank one greater than the card being moved.  A
card can always be moved to an empty stack.

Commands:                              Command Aliases:

  0    Select a foundation.              <space> = 0,
  1-8  Select a stack.                   j = 1, k = 2, l = 3, ; = 4,
  q    Quit the game.                    u = 5, i = 6, o = 7, p = 8.
  r    Restore a game from a file.
  s    Save a game in a file.
  ?    Print this help and then refresh screen.
"""

ABOUT_TEXT = """\
The program normally uses 52 cards or 13 ranks.  A full sized game is
quite difficult, so beginners should play smaller games.  The number
of ranks used in a game can be selected by quitting out of the current
game and typing r at the restart game prompt.  Alternatively, the
program can be given a command line argument specifying the number of
ranks to be used.
"""
