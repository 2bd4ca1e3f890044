""" Module for the steno engine, which runs each stroke through the whole pipeline as one unit. """

from threading import Lock
from typing import Any, Callable, Optional

from .corrector import Corrector, OutputOps
from .output import IOutputSink, OutputError
from .render import RenderedState
from .resource.keys import Stroke
from .translation import Translation
from .translator import Translator
from .util.exception import ExceptionHandler

StrokeRecorder = Callable[[Stroke, Optional[Translation]], Any]


class StenoEngine:
    """ Serializes strokes and undo requests: translate -> render -> correct -> send.
        The lock is held until the sink has received every operation for a stroke,
        so output from two strokes never interleaves. """

    def __init__(self, translator:Translator, corrector:Corrector, sink:IOutputSink,
                 exc_handler:ExceptionHandler, *, log:Callable[[str], Any]=None, record:StrokeRecorder=None) -> None:
        self._translator = translator    # Stroke history and dictionary lookup.
        self._corrector = corrector      # Turns state changes into edits and commands.
        self._sink = sink                # Receives all output.
        self._exc_handler = exc_handler  # Decides whether output failures may be survived.
        self._log = log                  # Optional logger for every stroke and its output.
        self._record = record            # Optional callback to save each stroke and its translation.
        self._lock = Lock()

    def _run(self, operation:Callable[[], RenderedState]) -> OutputOps:
        """ Apply an operation to the translator and send the difference to the sink.
            If the sink fails, the failure is reported and the engine keeps its new state.
            The screen may then be out of sync, but later corrections are still computed consistently. """
        translator = self._translator
        previous = translator.state
        current = operation()
        ops = self._corrector.dispatch(previous, current)
        try:
            self._sink.send(ops)
        except OutputError as e:
            if not self._exc_handler.handle(e):
                raise
        translator.compact()
        return ops

    def stroke(self, stroke:Stroke) -> OutputOps:
        """ Process one stroke to completion. """
        with self._lock:
            translator = self._translator
            ops = self._run(lambda: translator.translate(stroke))
            if self._record is not None:
                self._record(stroke, translator.last_translation)
            if self._log is not None:
                self._log(f"{stroke.rtfcre} -> {list(ops.edits)} {list(ops.commands)}")
            return ops

    def undo(self) -> OutputOps:
        """ Undo the last stroke group, independent of any configured undo stroke. """
        with self._lock:
            return self._run(self._translator.undo)

    def text(self) -> str:
        """ Return the text the engine believes is on screen (only the uncommitted tail after compaction). """
        with self._lock:
            return self._translator.state.text
