""" Module for the actions that make up a dictionary translation.

    A translation is an ordered tuple of actions. There are exactly three kinds:
    Text    - a fragment of output text, with rules for how it joins the fragments around it.
    Command - a side effect that is not text, such as a key combination or an engine operation.
    Format  - a change to the case or spacing of the text before or after it.
    Code that walks a translation must handle all three and reject anything else with a TypeError. """

from typing import NamedTuple, Tuple, Union


class TextMode:
    """ Ways a text fragment may join the text before it. """
    LITERAL = "literal"    # Separated from the previous fragment by a space.
    ATTACHED = "attached"  # Joined to the previous fragment with no space (and orthography rules if enabled).
    GLUED = "glued"        # Joined with no space to a previous glued fragment, otherwise separated like literal.


class Text(NamedTuple):
    """ A fragment of output text. """

    text: str
    mode: str = TextMode.LITERAL  # How the fragment joins the text before it.
    attach_next: bool = False     # If True, the following fragment is joined with no space.
    orthography: bool = False     # If True, an attached fragment merges with the previous word by spelling rules.
    carry_case: bool = False      # If True, pending case formatting skips this fragment and applies to the next.


class CommandKind:
    """ Destinations for commands. """
    KEYS = "keys"      # A key combination to send to the application through the output sink.
    ENGINE = "engine"  # An operation on the translator itself. Never stored in history or sent to the sink.


class EngineCommand:
    """ Names of translator operations that a dictionary entry may invoke. """
    UNDO = "undo"
    RETRO_ADD_SPACE = "retro_add_space"
    CLEAR_HISTORY = "clear_history"
    TOGGLE_SPACE_AFTER = "toggle_space_after"
    ALL = frozenset([UNDO, RETRO_ADD_SPACE, CLEAR_HISTORY, TOGGLE_SPACE_AFTER])


class Command(NamedTuple):
    """ A non-text side effect. Commands compare by value, so two identical commands in different groups are equal. """

    kind: str  # One of the CommandKind constants.
    args: str  # Key combination string or engine command name.


class FormatFlag:
    """ Case and spacing modifiers. _NEXT flags change the state for upcoming text.
        _PREV flags change text that has already been rendered. """
    CAPITALIZE_NEXT = "capitalize_next"
    UPPER_NEXT = "upper_next"
    LOWER_NEXT = "lower_next"
    CAPITALIZE_PREV = "capitalize_prev"
    UPPER_PREV = "upper_prev"
    LOWER_PREV = "lower_prev"
    SUPPRESS_SPACE_PREV = "suppress_space_prev"
    RESET = "reset"


class Format(NamedTuple):
    """ A case or space modifier. """

    flag: str  # One of the FormatFlag constants.


Action = Union[Text, Command, Format]
Translation = Tuple[Action, ...]


def has_text(translation:Translation) -> bool:
    """ Return True if the translation contains any non-empty text fragment. """
    return any(isinstance(action, Text) and action.text for action in translation)


def engine_commands(translation:Translation) -> Tuple[str, ...]:
    """ Return the names of the engine commands in a translation. """
    return tuple(action.args for action in translation
                 if isinstance(action, Command) and action.kind == CommandKind.ENGINE)


def encode_translation(translation:Translation) -> list:
    """ Convert a translation into a JSON-compatible list, with each action as a list starting with its type name. """
    encoded = []
    for action in translation:
        if not isinstance(action, (Text, Command, Format)):
            raise TypeError(f"Unknown action type: {type(action).__name__}")
        encoded.append([type(action).__name__, *action])
    return encoded
