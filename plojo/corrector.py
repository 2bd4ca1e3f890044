""" Module for turning changes in rendered output into the smallest set of edits for the screen. """

import os
from typing import List, NamedTuple, Tuple, Union

from .render import RenderedState
from .translation import Command


class Backspace(NamedTuple):
    """ Delete characters before the cursor. """
    count: int


class Insert(NamedTuple):
    """ Type text at the cursor. """
    text: str


Edit = Union[Backspace, Insert]


class OutputOps(NamedTuple):
    """ Everything to send for one change in state. Text edits always go out before commands. """

    edits: Tuple[Edit, ...] = ()
    commands: Tuple[Command, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.edits or self.commands)


def correction(prev_text:str, cur_text:str) -> List[Edit]:
    """ Return the edits that change <prev_text> into <cur_text>: backspace to the longest common prefix,
        then type the rest. No other pair of one backspace and one insert does it with fewer keystrokes. """
    prefix_len = len(os.path.commonprefix([prev_text, cur_text]))
    edits = []
    n_deleted = len(prev_text) - prefix_len
    if n_deleted:
        edits.append(Backspace(n_deleted))
    inserted = cur_text[prefix_len:]
    if inserted:
        edits.append(Insert(inserted))
    return edits


class Corrector:
    """ Computes output for each new rendered state and dispatches every command exactly once. """

    def __init__(self) -> None:
        self._emitted = 0  # Characters currently on screen that were typed by this corrector.

    def emitted(self) -> int:
        return self._emitted

    def _bound(self, edits:List[Edit]) -> List[Edit]:
        """ Never delete more than was typed. Text that was on the screen before we started is not ours. """
        bounded = []
        for edit in edits:
            if isinstance(edit, Backspace):
                count = min(edit.count, self._emitted)
                if not count:
                    continue
                edit = Backspace(count)
                self._emitted -= count
            else:
                self._emitted += len(edit.text)
            bounded.append(edit)
        return bounded

    def dispatch(self, previous:RenderedState, current:RenderedState) -> OutputOps:
        """ Diff the visible text of two states and collect commands that have not been sent yet.
            Commands are marked as dispatched on their groups as they are collected. """
        edits = self._bound(correction(previous.text, current.text))
        commands = []
        for group, i, command in current.new_commands(previous):
            if i not in group.dispatched:
                group.dispatched.add(i)
                commands.append(command)
        return OutputOps(tuple(edits), tuple(commands))
