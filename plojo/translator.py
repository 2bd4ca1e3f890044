""" Module for resolving strokes into translations against the stroke history. """

from typing import Iterable, List, Optional, Tuple

from .dictionary import StenoDictionary
from .history import History, StrokeGroup
from .render import ActionRenderer, RenderContext, RenderedState
from .resource.keys import Stroke, StrokeSequence
from .translation import EngineCommand, engine_commands, Text, TextMode, Translation

# Used for retroactive spaces when the space stroke has no dictionary entry.
DEFAULT_SPACE_TRANSLATION = (Text(" ", TextMode.ATTACHED, attach_next=True),)


class Translator:
    """ Owns the stroke history and finds the longest dictionary match for each new stroke.

        Each match is tried over whole groups: the new stroke alone, then with the strokes of the last group,
        then the last two groups, and so on up to the lookback limit. The longest match wins and replaces
        the groups it covers. A stroke with no match at any length becomes its own group of literal text.
        Undo removes exactly one group. """

    def __init__(self, dictionary:StenoDictionary, renderer:ActionRenderer, *, lookback=10, history_size=50,
                 undo_strokes:Iterable[Stroke]=(), add_space_strokes:Iterable[Stroke]=(),
                 space_stroke:Stroke=None) -> None:
        self._dictionary = dictionary                     # Read-only translation lookup.
        self._renderer = renderer                         # Renders the history into text.
        self._max_strokes = max(1, min(lookback, dictionary.longest_key))  # Longest stroke sequence to try.
        self._history_size = history_size                 # Groups kept open to revision before being committed.
        self._undo_strokes = set(undo_strokes)            # Strokes that undo the last group.
        self._add_space_strokes = set(add_space_strokes)  # Strokes that add a space before the last word.
        self._space_stroke = space_stroke                 # Stroke whose translation is used as a retroactive space.
        self._history = History()                         # Groups that are still open to revision.
        self._base = RenderContext()                      # Rendered text of groups that can no longer be revised.
        self.state = RenderedState("", self._base, [], [], [], 0)  # State after the last operation.
        self.last_translation = None                      # Dictionary translation for the last stroke, if any.
        self._engine_ops = {EngineCommand.UNDO: self.undo,
                            EngineCommand.RETRO_ADD_SPACE: self.retrospective_add_space,
                            EngineCommand.CLEAR_HISTORY: self.clear_history,
                            EngineCommand.TOGGLE_SPACE_AFTER: self.toggle_space_after}

    def groups(self) -> List[StrokeGroup]:
        return self._history.groups()

    def _render(self) -> RenderedState:
        history = self._history
        self.state = self._renderer.render(history.groups(), self._base, history.last_generation, self.state)
        return self.state

    def _candidates(self, stroke:Stroke) -> List[Tuple[int, StrokeSequence]]:
        """ Return (number of groups covered, strokes) for every group-aligned window ending with <stroke>. """
        strokes = (stroke,)
        candidates = [(0, strokes)]
        for n, group in enumerate(reversed(self._history.groups()), 1):
            # A retroactive space with no strokes would be covered without changing the window.
            if not group.strokes or len(strokes) + len(group.strokes) > self._max_strokes:
                break
            strokes = (*group.strokes, *strokes)
            candidates.append((n, strokes))
        return candidates

    def _lookup(self, stroke:Stroke) -> Tuple[int, StrokeSequence, Optional[Translation]]:
        """ Find the longest window with a translation. Longer windows are always tried first. """
        candidates = self._candidates(stroke)
        for n, strokes in reversed(candidates):
            translation = self._dictionary.lookup(strokes)
            if translation is not None:
                return n, strokes, translation
        return 0, (stroke,), None

    @staticmethod
    def _fallback(stroke:Stroke) -> Translation:
        """ Untranslated strokes show their keys. Number strokes lose the hyphen and glue together. """
        if stroke.is_number():
            return (Text(stroke.rtfcre.replace("-", ""), TextMode.GLUED),)
        return (Text(stroke.rtfcre),)

    def translate(self, stroke:Stroke) -> RenderedState:
        """ Add a stroke to the history and return the new rendered state. """
        self.last_translation = None
        if stroke in self._undo_strokes:
            return self.undo()
        if stroke in self._add_space_strokes:
            return self.retrospective_add_space()
        n, strokes, translation = self._lookup(stroke)
        self.last_translation = translation
        if translation is None:
            translation = self._fallback(stroke)
        commands = engine_commands(translation)
        history = self._history
        subsumed = history.pop(n)
        if commands:
            state = self.state
            for name in commands:
                state = self._engine_ops[name]()
            if not n:
                return state
            return self._render()
        group = history.new_group(strokes, translation)
        group.inherit_dispatched(subsumed)
        history.append(group)
        return self._render()

    def undo(self) -> RenderedState:
        """ Remove the last group. Nothing happens with an empty history. """
        if not self._history.pop():
            return self.state
        return self._render()

    def _space_translation(self) -> Tuple[StrokeSequence, Translation]:
        stroke = self._space_stroke
        if stroke is None:
            return (), DEFAULT_SPACE_TRANSLATION
        translation = self._dictionary.lookup((stroke,))
        return (stroke,), translation or DEFAULT_SPACE_TRANSLATION

    def retrospective_add_space(self) -> RenderedState:
        """ Insert a space group before the last group that produced text. The new group may be undone like
            any other. Groups without text after that point (such as key commands) are skipped over. """
        history = self._history
        index = history.last_text_index()
        if index < 0:
            return self.state
        after = history.pop(len(history) - index)
        strokes, translation = self._space_translation()
        history.append(history.new_group(strokes, translation))
        for group in after:
            history.append(group)
        return self._render()

    def clear_history(self) -> RenderedState:
        """ Commit every group. Nothing before this point may be undone or combined with new strokes. """
        history = self._history
        self._base = self._renderer.fold(self._base, history.drop_oldest(len(history)))
        return self._render()

    def toggle_space_after(self) -> RenderedState:
        """ Switch between spaces before and after words. Visible text is re-rendered in the new mode. """
        renderer = self._renderer
        renderer.space_after = not renderer.space_after
        return self._render()

    def compact(self) -> None:
        """ Commit the oldest groups beyond the history size limit and trim old committed text.
            This must only be done after the current state has been sent. The visible text may only lose
            a prefix, and the current state is replaced so that the next diff starts from the same text. """
        history = self._history
        excess = max(len(history) - self._history_size, 0)
        renderer = self._renderer
        base = renderer.trim(renderer.fold(self._base, history.drop_oldest(excess)))
        if base is not self._base:
            self._base = base
            self._render()
