""" Module for stroke input from a text stream, standing in for a steno machine driver. """

from typing import Any, Callable, Iterator, TextIO

from .resource.keys import StenoKeyConverter, Stroke


class StdinMachine:
    """ Reads strokes in RTFCRE form from lines of text. Strokes are separated by whitespace or the stroke
        delimiter. Anything that is not a valid stroke is logged and skipped before it reaches the engine. """

    def __init__(self, converter:StenoKeyConverter, log:Callable[[str], Any], *, sep="/") -> None:
        self._converter = converter  # Parses and validates RTFCRE strokes.
        self._log = log              # Receives a message for every rejected stroke.
        self._sep = sep              # Stroke delimiter.
        self.rejected = 0            # Number of invalid strokes skipped so far.

    def parse_line(self, line:str) -> Iterator[Stroke]:
        """ Yield every valid stroke on a line of input. """
        for token in line.replace(self._sep, " ").split():
            try:
                yield self._converter.stroke(token)
            except ValueError as e:
                self.rejected += 1
                self._log(f"Rejected input: {e}")

    def run(self, stream:TextIO, callback:Callable[[Stroke], Any]) -> int:
        """ Send every stroke from <stream> to <callback> until the stream ends. Return the number sent. """
        count = 0
        for line in stream:
            for stroke in self.parse_line(line):
                callback(stroke)
                count += 1
        return count
