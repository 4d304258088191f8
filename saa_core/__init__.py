"""
Streets and Alleys core Python package.

This package contains the game-state engine for the Streets and Alleys
solitaire plus the thin terminal and command line layers built on it.
Modules:
- card.py: card encoding and labels
- pool.py: CardPool (fixed-capacity cell arena)
- board.py: Board
- deal.py: shuffle and deal
- moves.py: move legality and execution
- done.py: win detection
- save.py: binary save/restore codec
- state.py: Game aggregate
- interpreter.py: two-phase command interpreter
- keys.py, screen.py, cli.py: input tables, curses display, CLI
- errors.py, config.py: exception types, environment settings and logging setup
"""
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
