""" Module for thread-safe line logging to files and system streams. """

import sys
from threading import Lock
from time import strftime
from typing import TextIO


class StreamLogger:
    """ Line logger for pre-opened text streams. Strokes may arrive from a machine thread while the main thread
        is still logging startup messages, so every write is serialized with a lock. """

    def __init__(self, *streams:TextIO, time_fmt="[%b %d %Y %H:%M:%S]: ", repeat_mark="*") -> None:
        self._streams = streams          # One or more writable/appendable text streams for logging.
        self._time_fmt = time_fmt        # Format for timestamps using time.strftime. If None, do not add timestamps.
        self._repeat_mark = repeat_mark  # Mark to replace repeated messages. If None, log all messages fully.
        self._last_message = ""          # Most recent unique message string.
        self._lock = Lock()              # Lock to ensure only one thread writes to the streams at a time.

    def _format(self, message:str) -> str:
        """ Shorten <message> to the repeat mark if it is identical to the last one, then add a timestamp. """
        if self._repeat_mark is not None:
            if message == self._last_message:
                message = self._repeat_mark
            else:
                self._last_message = message
        if self._time_fmt is not None:
            message = strftime(self._time_fmt) + message
        return message + '\n'

    def log(self, message:str) -> None:
        """ Write <message> to every stream in turn and flush so nothing is lost in a buffer on a crash. """
        with self._lock:
            line = self._format(message)
            for stream in self._streams:
                try:
                    stream.write(line)
                    stream.flush()
                except (OSError, ValueError):
                    # A closed or broken stream must not stop the message from reaching the others.
                    continue


def open_logger(*filenames:str, encoding='utf-8', to_stdout=False, to_stderr=False, **kwargs) -> StreamLogger:
    """ Open a logger that appends to text files and/or prints to system streams.
        Log files will remain open until the program is closed. """
    streams = [open(f, 'a', encoding=encoding) for f in filenames]
    if to_stdout:
        streams.append(sys.stdout)
    if to_stderr:
        streams.append(sys.stderr)
    return StreamLogger(*streams, **kwargs)
