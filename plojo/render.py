""" Module for rendering stroke groups into the text they produce and the commands they carry. """

from typing import List, NamedTuple, Sequence, Tuple

from .history import StrokeGroup
from .orthography import Orthography
from .translation import Action, Command, Format, FormatFlag, Text, TextMode, Translation

SPACE = " "
UPPER = "upper"
LOWER = "lower"
# Characters besides letters and digits that count as part of a word when changing the case of the previous word.
WORD_CHARS = "-_"


class FormatState(NamedTuple):
    """ Formatting that applies to the next text fragment. """

    suppress_space: bool = False  # If True, the next fragment joins with no space.
    capitalize: bool = False      # If True, the first letter of the next fragment is capitalized.
    case: str = ""                # UPPER or LOWER to force the case of the entire next fragment.
    glued: bool = False           # If True, the previous fragment was glued text.


class RenderContext(NamedTuple):
    """ Rendered text up to some point along with the formatting state at that point. """

    text: str = ""
    state: FormatState = FormatState()
    start: bool = True  # If True, the text holds everything since the start of the session.


# (group, index within its translation, command)
CommandRef = Tuple[StrokeGroup, int, Command]


class RenderedState:
    """ The output of rendering a stroke history: visible text plus every command in order.
        Also holds the context after each group so that the next render can skip unchanged groups. """

    def __init__(self, text:str, base:RenderContext, contexts:List[RenderContext], generations:List[int],
                 commands:List[CommandRef], generation:int) -> None:
        self.text = text                # Visible text produced since the base context, including the base text.
        self.base = base                # Context that rendering started from.
        self.contexts = contexts        # Context after each group.
        self.generations = generations  # Generation number of each group.
        self.commands = commands        # References to every command in the groups.
        self.generation = generation    # Latest generation number issued when this state was rendered.

    def new_commands(self, previous:"RenderedState") -> List[CommandRef]:
        """ Return commands from groups created after <previous> was rendered. """
        return [ref for ref in self.commands if ref[0].generation > previous.generation]


def capitalize_first(word:str) -> str:
    return word[:1].upper() + word[1:]


def find_last_word(text:str) -> int:
    """ Return the index where the last word starts. A word is made of letters, digits, hyphens and underscores. """
    for i in range(len(text) - 1, -1, -1):
        c = text[i]
        if not (c.isalnum() or c in WORD_CHARS):
            return i + 1
    return 0


def find_last_word_space(text:str) -> int:
    """ Return the index after the last whitespace character, or 0 if there is none. """
    for i in range(len(text) - 1, -1, -1):
        if text[i].isspace():
            return i + 1
    return 0


def find_last_alpha_run(text:str) -> int:
    """ Return the index after the last character that is not a letter. """
    for i in range(len(text) - 1, -1, -1):
        if not text[i].isalpha():
            return i + 1
    return 0


class ActionRenderer:
    """ Flattens stroke groups into text. Rendering is a pure function of the groups and the base context. """

    def __init__(self, orthography:Orthography, *, space_after=False, capitalize_after_symbols=True,
                 tail_size=100) -> None:
        self._orthography = orthography  # Spelling rules for attached suffixes.
        self.space_after = space_after   # If True, spaces are placed after words instead of before.
        self._find_prev_word = find_last_word if capitalize_after_symbols else find_last_word_space
        self._tail_size = tail_size      # Characters of committed text to keep for changes to the previous word.

    def _change_prev(self, text:str, flag:str) -> str:
        """ Apply a formatting flag to text that was already rendered. """
        if flag == FormatFlag.SUPPRESS_SPACE_PREV:
            i = find_last_word_space(text)
            if i > 0 and text[i - 1] == SPACE:
                text = text[:i - 1] + text[i:]
            return text
        i = self._find_prev_word(text)
        word = text[i:]
        if flag == FormatFlag.CAPITALIZE_PREV:
            word = capitalize_first(word)
        elif flag == FormatFlag.UPPER_PREV:
            word = word.upper()
        elif flag == FormatFlag.LOWER_PREV:
            word = word.lower()
        else:
            raise ValueError(f"Unknown format flag: {flag}")
        return text[:i] + word

    @staticmethod
    def _change_next(state:FormatState, flag:str) -> FormatState:
        if flag == FormatFlag.CAPITALIZE_NEXT:
            return state._replace(capitalize=True)
        if flag == FormatFlag.UPPER_NEXT:
            return state._replace(case=UPPER)
        if flag == FormatFlag.LOWER_NEXT:
            return state._replace(case=LOWER)
        if flag == FormatFlag.RESET:
            return FormatState()
        raise ValueError(f"Unknown format flag: {flag}")

    def _add_text(self, text:str, state:FormatState, action:Text) -> RenderContext:
        """ Join a text fragment to the rendered text according to its mode and the current state. """
        word = action.text
        suppress_space = state.suppress_space
        capitalize = state.capitalize
        next_state = FormatState(suppress_space=action.attach_next)
        if action.carry_case:
            next_state = next_state._replace(capitalize=capitalize, case=state.case)
            capitalize = False
        mode = action.mode
        if mode == TextMode.GLUED:
            next_state = next_state._replace(glued=True)
            if state.glued:
                suppress_space = True
        elif mode == TextMode.ATTACHED:
            # A fragment that already asked for no space joins literally (prefix + suffix is not respelled).
            if not suppress_space:
                suppress_space = True
                if action.orthography:
                    i = find_last_alpha_run(text)
                    if i < len(text):
                        text = text[:i] + self._orthography.add_suffix(text[i:], word)
                    else:
                        text += word
                    return RenderContext(text, next_state)
        elif mode != TextMode.LITERAL:
            raise ValueError(f"Unknown text mode: {mode}")
        if not suppress_space:
            text += SPACE
        if capitalize:
            word = capitalize_first(word)
        if state.case == UPPER:
            word = word.upper()
        elif state.case == LOWER:
            word = word.lower()
        return RenderContext(text + word, next_state)

    def _apply(self, context:RenderContext, action:Action) -> RenderContext:
        if isinstance(action, Text):
            return self._add_text(context.text, context.state, action)._replace(start=context.start)
        if isinstance(action, Format):
            if action.flag.endswith("_prev"):
                return context._replace(text=self._change_prev(context.text, action.flag))
            return context._replace(state=self._change_next(context.state, action.flag))
        if isinstance(action, Command):
            return context
        raise TypeError(f"Unknown action type: {type(action).__name__}")

    def advance(self, context:RenderContext, translation:Translation) -> RenderContext:
        """ Render every action in a translation starting from <context>. """
        for action in translation:
            context = self._apply(context, action)
        return context

    def visible_text(self, context:RenderContext) -> str:
        """ Return text as it should appear on screen. Rendering always puts spaces before words.
            In space-after mode, the leading space of the session is dropped and one is added at the end
            unless the next fragment will attach to it. """
        text = context.text
        if self.space_after and text:
            if context.start and text.startswith(SPACE):
                text = text[1:]
            if not context.state.suppress_space:
                text += SPACE
        return text

    def render(self, groups:Sequence[StrokeGroup], base:RenderContext, generation:int,
               previous:RenderedState=None) -> RenderedState:
        """ Render all groups after <base>. If a <previous> state from the same base is given,
            start from the last context shared with it instead of from the beginning. """
        generations = [g.generation for g in groups]
        contexts = []
        if previous is not None and previous.base is base:
            for old_gen, new_gen in zip(previous.generations, generations):
                if old_gen != new_gen:
                    break
                contexts.append(previous.contexts[len(contexts)])
        context = contexts[-1] if contexts else base
        for group in groups[len(contexts):]:
            context = self.advance(context, group.translation)
            contexts.append(context)
        commands = [(g, i, c) for g in groups for i, c in g.commands()]
        return RenderedState(self.visible_text(context), base, contexts, generations, commands, generation)

    def fold(self, base:RenderContext, groups:Sequence[StrokeGroup]) -> RenderContext:
        """ Render <groups> permanently into a new base context. """
        for group in groups:
            base = self.advance(base, group.translation)
        return base

    def trim(self, context:RenderContext) -> RenderContext:
        """ Keep only enough of a base context's text for changes to the previous word.
            The tail is cut at whitespace when possible so that it starts at a word boundary. """
        text = context.text
        if len(text) <= self._tail_size:
            return context
        tail = text[-self._tail_size:]
        for i, c in enumerate(tail):
            if c.isspace():
                tail = tail[i:]
                break
        return RenderContext(tail, context.state, False)
