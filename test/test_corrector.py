""" Unit tests for output correction and command dispatch. """

import pytest

from plojo.corrector import Backspace, correction, Corrector, Insert, OutputOps
from plojo.history import History
from plojo.orthography import Orthography
from plojo.render import ActionRenderer, RenderContext, RenderedState
from plojo.translation import Command, CommandKind, Text

from . import CONVERTER


@pytest.mark.parametrize("prev_text, cur_text, expected", [
    ("", "", []),
    ("", " pre", [Insert(" pre")]),
    (" pre", " prefix", [Insert("fix")]),
    (" prefix", " pre", [Backspace(3)]),
    (" cat", " cats", [Insert("s")]),
    (" stop", " stopped", [Insert("ped")]),
    (" test", " Test", [Backspace(4), Insert("Test")]),
    (" hello", " hello", []),
    (" abc", "", [Backspace(4)]),
])
def test_correction(prev_text, cur_text, expected) -> None:
    """ Edits keep the longest common prefix and retype only the rest. """
    assert correction(prev_text, cur_text) == expected


def test_correction_applies() -> None:
    """ Applying the edits to the old text always gives the new text. """
    for prev_text, cur_text in [(" a b c", " a x"), ("", " new"), (" same", " same"), (" é", " e")]:
        text = prev_text
        for edit in correction(prev_text, cur_text):
            if isinstance(edit, Backspace):
                text = text[:-edit.count]
            else:
                text += edit.text
        assert text == cur_text


def _state(text, generation=0, commands=()) -> RenderedState:
    return RenderedState(text, RenderContext(), [], [], list(commands), generation)


def test_deletion_bounded() -> None:
    """ Text that was never typed is never deleted. """
    corrector = Corrector()
    ops = corrector.dispatch(_state(" existing"), _state(" ex"))
    assert ops == OutputOps()
    assert not ops
    ops = corrector.dispatch(_state(" ex"), _state(" example"))
    assert ops.edits == (Insert("ample"),)
    assert corrector.emitted() == 5
    ops = corrector.dispatch(_state(" example"), _state(""))
    assert ops.edits == (Backspace(5),)
    assert corrector.emitted() == 0


def test_commands_dispatched_once() -> None:
    renderer = ActionRenderer(Orthography())
    history = History()
    keys = Command(CommandKind.KEYS, "Return")
    corrector = Corrector()
    empty = renderer.render([], RenderContext(), 0)
    group = history.new_group(CONVERTER.strokes("R-R"), (keys,))
    history.append(group)
    first = renderer.render(history.groups(), empty.base, history.last_generation, empty)
    ops = corrector.dispatch(empty, first)
    assert ops == OutputOps((), (keys,))
    assert group.dispatched == {0}
    # The same state can never send the command again.
    assert not corrector.dispatch(empty, first)
    # A new group with the same command inherits the sent mark when it replaces the old one.
    history.pop()
    combined = history.new_group(CONVERTER.strokes("R-R/R-R"), (keys, Text("x")))
    combined.inherit_dispatched([group])
    history.append(combined)
    second = renderer.render(history.groups(), first.base, history.last_generation, first)
    ops = corrector.dispatch(first, second)
    assert ops.commands == ()
    assert ops.edits == (Insert(" x"),)
