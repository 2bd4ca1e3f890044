#!/usr/bin/env python3

""" Master console script and primary entry point for the Plojo program. """

import sys

from plojo.util.entrypoints import EntryPoint, EntryPointSelector

ENTRY_POINTS = {
    "console": EntryPoint("plojo.main_console", "main", "Translate strokes from standard input (default)."),
    "replay":  EntryPoint("plojo.main_replay",  "main", "Replay a stroke log and report changed translations."),
}


def main() -> int:
    loader = EntryPointSelector(ENTRY_POINTS, default_mode="console")
    return loader.main()


if __name__ == '__main__':
    sys.exit(main())
