""" Module for output sinks, which deliver edits and commands to wherever the text is being typed. """

import sys
from typing import List, TextIO

from .corrector import Backspace, Insert, OutputOps
from .translation import Command


class OutputError(Exception):
    """ Raised by a sink when it cannot deliver an operation. """


class IOutputSink:
    """ Interface for delivering output. Operations must be applied in the order they are sent. """

    def send_backspaces(self, count:int) -> None:
        raise NotImplementedError

    def send_string(self, text:str) -> None:
        raise NotImplementedError

    def send_command(self, command:Command) -> None:
        raise NotImplementedError

    def send(self, ops:OutputOps) -> None:
        """ Send text edits in order, then commands in order. """
        for edit in ops.edits:
            if isinstance(edit, Backspace):
                self.send_backspaces(edit.count)
            elif isinstance(edit, Insert):
                self.send_string(edit.text)
            else:
                raise TypeError(f"Unknown edit type: {type(edit).__name__}")
        for command in ops.commands:
            self.send_command(command)


class StdoutSink(IOutputSink):
    """ Prints one line for every operation. Useful for testing a machine or dictionary without typing anything. """

    def __init__(self, stream:TextIO=None) -> None:
        self._stream = stream or sys.stdout  # Text stream for printed operations.

    def _print(self, line:str) -> None:
        try:
            self._stream.write(line + "\n")
            self._stream.flush()
        except OSError as e:
            raise OutputError(f"Could not write to output stream: {e}") from e

    def send_backspaces(self, count:int) -> None:
        self._print(f"backspace {count}")

    def send_string(self, text:str) -> None:
        self._print(f"type {text!r}")

    def send_command(self, command:Command) -> None:
        self._print(f"{command.kind} {command.args}")


class TextBufferSink(IOutputSink):
    """ Emulates a text field in memory. Backspacing past the start of the field is an error. """

    def __init__(self, text="") -> None:
        self.text = text    # Current contents of the emulated text field.
        self.commands = []  # Every command received, in order.

    def send_backspaces(self, count:int) -> None:
        if count > len(self.text):
            raise OutputError(f"Cannot delete {count} characters from a buffer of length {len(self.text)}.")
        self.text = self.text[:len(self.text) - count]

    def send_string(self, text:str) -> None:
        self.text += text

    def send_command(self, command:Command) -> None:
        self.commands.append(command)

    def command_args(self) -> List[str]:
        return [c.args for c in self.commands]
