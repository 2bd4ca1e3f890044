import os
from typing import List

from plojo.corrector import Corrector
from plojo.dictionary import DictionaryParser, StenoDictionary
from plojo.engine import StenoEngine, StrokeRecorder
from plojo.options import PlojoOptions
from plojo.orthography import Orthography
from plojo.output import IOutputSink, OutputError
from plojo.render import ActionRenderer
from plojo.resource.config import Configuration
from plojo.resource.io import PlojoResourceIO, StrokeLogWriter
from plojo.resource.keys import converter_from_keymap, StenoKeyConverter, StenoKeyLayout, Stroke
from plojo.translator import Translator
from plojo.util.exception import CompositeExceptionHandler, ExceptionLogger, RecoverableExceptionFilter
from plojo.util.log import open_logger, StreamLogger

# Every user setting in the CFG file: (section_name, default, description).
CONFIG_OPTIONS = [
    ("translator_lookback", 10,
     "Maximum number of strokes in one dictionary lookup."),
    ("translator_history_size", 50,
     "Number of stroke groups kept open to undo and revision."),
    ("translator_undo_strokes", ["*"],
     "Strokes that undo the last stroke group."),
    ("translator_add_space_strokes", [],
     "Strokes that insert a space before the last word."),
    ("translator_space_stroke", "S-P",
     "Stroke whose translation is inserted as a retroactive space."),
    ("render_space_after", False,
     "Put spaces after words instead of before them."),
    ("render_capitalize_after_symbols", True,
     "When capitalizing the previous word, skip symbols before it, e.g. '(word' -> '(Word'."),
]


class Plojo:
    """ Container/factory for all common components, and the basis for using Plojo as a library. """

    def __init__(self, opts:PlojoOptions=None, *, parse_args=True) -> None:
        """ Start with the bare minimum of components and create the rest on demand. """
        if opts is None:
            opts = PlojoOptions()
        if parse_args:
            opts.parse()
        self._opts = opts

    class Component:
        """ Property-like descriptor to create a component if it does not exist, then save it over the attribute. """

        def __init__(self, func) -> None:
            self._func = func

        def __get__(self, instance, owner=None) -> object:
            value = self._func(instance)
            setattr(instance, self._func.__name__, value)
            return value

    @Component
    def logger(self) -> StreamLogger:
        """ Open a thread-safe logger that writes to both stdout and a log file. """
        log_path = self._opts.log_path()
        return open_logger(log_path, to_stdout=True)

    @Component
    def exception_handler(self) -> CompositeExceptionHandler:
        """ Every exception is logged with a traceback. Only output failures are survivable. """
        handler = CompositeExceptionHandler()
        handler.add(ExceptionLogger(self.logger.log))
        handler.add(RecoverableExceptionFilter(OutputError))
        return handler

    @Component
    def resource_io(self) -> PlojoResourceIO:
        return PlojoResourceIO()

    @Component
    def keymap(self) -> StenoKeyLayout:
        """ Load and verify the built-in key layout. """
        keymap_path = self._opts.keymap_path()
        return self.resource_io.load_keymap(keymap_path)

    @Component
    def converter(self) -> StenoKeyConverter:
        """ Build the converter that parses and validates RTFCRE strokes. """
        return converter_from_keymap(self.keymap)

    @Component
    def config(self) -> Configuration:
        """ Load user settings, or save the defaults if there is no config file yet. """
        cfg_path = self._opts.config_path()
        config = Configuration(cfg_path)
        for key, default, desc in CONFIG_OPTIONS:
            config.add_option(key, default, desc)
        if os.path.exists(cfg_path):
            config.read()
        else:
            self.logger.log(f"Writing default config to {cfg_path}.")
            config.write()
        return config

    @Component
    def dictionary(self) -> StenoDictionary:
        """ Load and merge every dictionary. Entries with invalid strokes are skipped and reported. """
        parser = DictionaryParser(self.converter)
        paths = self._opts.dictionary_paths()
        dictionary, skipped = self.resource_io.load_dictionaries(parser, *paths)
        if skipped:
            self.logger.log(f"Skipped {len(skipped)} entries with invalid strokes, e.g. {skipped[0]!r}.")
        self.logger.log(f"Loaded {len(dictionary)} entries from {len(paths)} dictionaries.")
        return dictionary

    def _config_strokes(self, key:str) -> List[Stroke]:
        return [self.converter.stroke(s) for s in self.config[key]]

    def build_translator(self) -> Translator:
        """ Build a new translator with an empty history using the current settings. """
        config = self.config
        renderer = ActionRenderer(Orthography(),
                                  space_after=config["render_space_after"],
                                  capitalize_after_symbols=config["render_capitalize_after_symbols"])
        space_stroke = config["translator_space_stroke"]
        return Translator(self.dictionary, renderer,
                          lookback=config["translator_lookback"],
                          history_size=config["translator_history_size"],
                          undo_strokes=self._config_strokes("translator_undo_strokes"),
                          add_space_strokes=self._config_strokes("translator_add_space_strokes"),
                          space_stroke=self.converter.stroke(space_stroke) if space_stroke else None)

    def build_engine(self, sink:IOutputSink, *, record:StrokeRecorder=None) -> StenoEngine:
        """ Build an engine with a new translator that sends all output to <sink>.
            Strokes go to the stroke log file if one is configured and no other <record> callback is given. """
        opts = self._opts
        log = self.logger.log if opts.verbose else None
        if record is None:
            stroke_log_path = opts.stroke_log_path()
            if stroke_log_path:
                record = StrokeLogWriter(stroke_log_path)
        return StenoEngine(self.build_translator(), Corrector(), sink, self.exception_handler,
                           log=log, record=record)
