""" Package for Plojo, a real-time steno translation engine. Strokes come in one at a time, and every stroke may
    change the meaning of the strokes before it. The engine keeps the recent past open to revision and sends
    the screen the smallest edit that turns the old text into the new.

    options - Anything using Plojo, including the built-in entry points, starts by creating the main
    container with configuration options, which reside here.

    resource - The key layout that defines valid strokes, the steno dictionaries, the user config file,
    and the stroke log are all loaded from disk by this package.

    plojo - Contains the primary program components. Intended to be used directly by applications i.e. as a library.

        dictionary - Parses entries in the Plover dictionary language into translations and looks up exact
        stroke sequences. Translations are tuples of text, command, and format actions (see translation).

        translator - Holds the stroke history as groups of strokes translated together. Each stroke is
        looked up together with the groups before it, and the longest match replaces the groups it covers.
        Undo and the retroactive space work on whole groups (see history).

        render - Flattens the history into text, joining suffixes with spelling rules (see orthography) and
        applying case and spacing. Unchanged groups at the start are not rendered again.

        corrector - Compares the new text with the last and produces backspaces and an insert. Commands from
        new groups are collected so that each one is only ever sent once.

        engine - Runs each stroke through the whole pipeline under a lock and delivers the result to an
        output sink (see output). Sink failures are logged and survived.

    machine - Reads strokes typed as text, standing in for a steno machine driver.

    __main__ - When plojo is run directly as a script, the first command-line argument is used to choose an
    entry point: console (strokes from standard input) or replay (re-run a stroke log). """

from plojo.options import PlojoOptions
from plojo.plojo import Plojo
