""" Module for the stroke history: the sequence of stroke groups that make up the text still open to revision. """

from itertools import count
from typing import Iterator, List, Sequence

from .resource.keys import StrokeSequence
from .translation import Command, has_text, Translation


class StrokeGroup:
    """ One or more strokes translated together as a unit. Undo removes one whole group at a time. """

    def __init__(self, strokes:StrokeSequence, translation:Translation, generation:int) -> None:
        self.strokes = strokes          # Strokes that produced this group, in order.
        self.translation = translation  # Actions for the entire group.
        self.generation = generation    # Unique, increasing number assigned when the group was created.
        self.dispatched = set()         # Indices of commands in the translation that were already sent.

    def __repr__(self) -> str:
        keys = "/".join(map(str, self.strokes))
        return f"<StrokeGroup {keys} #{self.generation}: {self.translation!r}>"

    def has_text(self) -> bool:
        """ Return True if this group puts any characters on the screen by itself. """
        return has_text(self.translation)

    def commands(self) -> Iterator[tuple]:
        """ Yield (index, command) for every command in the translation. """
        for i, action in enumerate(self.translation):
            if isinstance(action, Command):
                yield i, action

    def dispatched_commands(self) -> List[Command]:
        return [action for i, action in self.commands() if i in self.dispatched]

    def inherit_dispatched(self, subsumed:Sequence["StrokeGroup"]) -> None:
        """ Mark commands equal to ones already sent by the groups this one replaced.
            Each sent command can only cover one command here. """
        sent = [c for group in subsumed for c in group.dispatched_commands()]
        for i, action in self.commands():
            if action in sent:
                sent.remove(action)
                self.dispatched.add(i)


class History:
    """ Ordered stroke groups with edits only at or near the tail. """

    def __init__(self) -> None:
        self._groups = []           # Stroke groups from oldest to newest.
        self._counter = count(1)    # Source of group generation numbers.
        self.last_generation = 0    # Generation number of the most recently created group.

    def __len__(self) -> int:
        return len(self._groups)

    def groups(self) -> List[StrokeGroup]:
        return self._groups[:]

    def new_group(self, strokes:StrokeSequence, translation:Translation) -> StrokeGroup:
        """ Create a group with the next generation number. It is not added to the history. """
        self.last_generation = next(self._counter)
        return StrokeGroup(strokes, translation, self.last_generation)

    def append(self, group:StrokeGroup) -> None:
        self._groups.append(group)

    def pop(self, n=1) -> List[StrokeGroup]:
        """ Remove and return up to <n> groups from the tail in their original order. """
        if n <= 0:
            return []
        popped = self._groups[-n:]
        del self._groups[-n:]
        return popped

    def last_text_index(self) -> int:
        """ Return the index of the last group that produces text, or -1 if there isn't one. """
        for i in range(len(self._groups) - 1, -1, -1):
            if self._groups[i].has_text():
                return i
        return -1

    def drop_oldest(self, n:int) -> List[StrokeGroup]:
        """ Remove and return the <n> oldest groups. They can no longer be revised. """
        dropped = self._groups[:n]
        del self._groups[:n]
        return dropped
