#!/usr/bin/env python3
"""Generate stickers.json from a directory of PNG stickers.

Usage:
    python generate_stickers.py [--dir stickers] [--out stickers.json]

Stickers are grouped by the letters before the first digit of their file
name, e.g. ``party-hat03.png`` lands in "Party Hat".
"""
import argparse
import logging
import sys

from catalog import build_feed_from_directory, write_feed
from models import CATALOG_FILE, STICKERS_DIR


def main(argv=None):
    parser = argparse.ArgumentParser(description="Build the sticker catalog feed")
    parser.add_argument("--dir", default=STICKERS_DIR, help="Directory of .png stickers")
    parser.add_argument("--out", default=CATALOG_FILE, help="Where to write the JSON feed")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    try:
        feed = build_feed_from_directory(args.dir)
    except OSError as e:
        print(f"Could not read {args.dir}: {e}", file=sys.stderr)
        return 1
    write_feed(feed, args.out)
    count = sum(len(g["items"]) for g in feed)
    print(f"Wrote {count} stickers in {len(feed)} categories to {args.out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
