#!/usr/bin/env python3
"""
Reader for Streets and Alleys save files (saa.sav).

- Decodes the binary layout: magic, card count, foundation[4], then
  8 x (length, cards bottom to top), host-native ints
- Validates that the cards make up the deck exactly once
- Outputs the board in text or JSON

Usage examples:
  python tools/read_save.py
  python tools/read_save.py --file saves/saa.sav --format json
"""
from __future__ import annotations

import argparse
import json
import os
import sys
from typing import List, Optional

from game import (
    Board,
    CorruptSaveFile,
    SAVE_FILE_NAME,
    SaveOpenFailed,
    card_label,
    is_done,
    read_save,
)


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Read and pretty-print a Streets and Alleys save file")
    p.add_argument("--file", default=os.getenv("SAA_SAVE_FILE") or SAVE_FILE_NAME, help=f"Path to the save file (default: {SAVE_FILE_NAME})")
    p.add_argument("--format", choices=["text", "json"], default="text", help="Output format (text/json)")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    try:
        rec = read_save(args.file)
    except SaveOpenFailed as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except CorruptSaveFile as e:
        print(f"error: {args.file}: {e}", file=sys.stderr)
        return 1

    board = Board(rec.rank_count)
    board.load(rec.rank_count, rec.foundations, rec.stacks)

    if args.format == "json":
        obj = {
            "file": args.file,
            "ranks": rec.rank_count,
            "foundations": [card_label(c) for c in rec.foundations],
            "stacks": [[card_label(c) for c in cards] for cards in rec.stacks],
            "done": is_done(board),
        }
        sys.stdout.write(json.dumps(obj) + "\n")
        return 0

    print(f"file: {args.file}")
    print(f"  ranks={rec.rank_count} cards={rec.rank_count * 4} done={is_done(board)}")
    print("\n".join("  " + line for line in board.pretty().splitlines()))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
