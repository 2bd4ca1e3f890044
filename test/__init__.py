""" Test package for the Plojo steno engine. __init__.py loads common test resources and builds test components. """

from typing import List, Mapping

from plojo import Plojo, PlojoOptions
from plojo.corrector import Corrector
from plojo.dictionary import DictionaryParser, merge_entries, StenoDictionary
from plojo.engine import StenoEngine
from plojo.orthography import Orthography
from plojo.output import OutputError, TextBufferSink
from plojo.render import ActionRenderer
from plojo.translator import Translator
from plojo.util.exception import CompositeExceptionHandler, ExceptionLogger, RecoverableExceptionFilter

# Only the built-in key layout is loaded here. Nothing is read from or written to the user's data directory.
_plojo = Plojo(PlojoOptions(), parse_args=False)
KEYMAP = _plojo.keymap
CONVERTER = _plojo.converter
del _plojo

PARSER = DictionaryParser(CONVERTER)


def build_dictionary(raw:Mapping[str, str]) -> StenoDictionary:
    entries, skipped = PARSER.parse_entries(raw)
    assert not skipped
    return merge_entries([entries])


def build_translator(raw:Mapping[str, str], *, space_after=False, capitalize_after_symbols=True,
                     undo_strokes=("*",), add_space_strokes=(), space_stroke="S-P", **kwargs) -> Translator:
    renderer = ActionRenderer(Orthography(), space_after=space_after,
                              capitalize_after_symbols=capitalize_after_symbols)
    return Translator(build_dictionary(raw), renderer,
                      undo_strokes=[CONVERTER.stroke(s) for s in undo_strokes],
                      add_space_strokes=[CONVERTER.stroke(s) for s in add_space_strokes],
                      space_stroke=CONVERTER.stroke(space_stroke) if space_stroke else None,
                      **kwargs)


class EngineFixture:
    """ An engine writing to an in-memory text field, with every logged message saved. """

    def __init__(self, raw:Mapping[str, str], sink=None, **kwargs) -> None:
        self.messages = []
        self.recorded = []
        self.sink = sink or TextBufferSink()
        self.translator = build_translator(raw, **kwargs)
        handler = CompositeExceptionHandler()
        handler.add(ExceptionLogger(self.messages.append))
        handler.add(RecoverableExceptionFilter(OutputError))
        self.engine = StenoEngine(self.translator, Corrector(), self.sink, handler,
                                  log=self.messages.append,
                                  record=lambda stroke, translation: self.recorded.append((stroke, translation)))

    def strokes(self, s:str) -> List:
        """ Send strokes separated by whitespace or slashes and return the output for each one. """
        return [self.engine.stroke(CONVERTER.stroke(k)) for k in s.replace("/", " ").split()]

    def text(self) -> str:
        return self.sink.text
