from functools import wraps
import json
from typing import Any, Callable, Iterator, List, Optional, Tuple

from .keys import StenoKeyLayout
from ..dictionary import DictionaryParser, merge_entries, StenoDictionary
from ..translation import encode_translation, Translation
from ..util.json import CSONDecoder, decoding_context


class TextFileIO:

    def __init__(self, *, encoding='utf-8') -> None:
        self._encoding = encoding  # Character encoding. UTF-8 must be explicitly set on some platforms.

    def read(self, filename:str) -> str:
        """ Load a text file into a string. """
        with open(filename, 'r', encoding=self._encoding) as fp:
            return fp.read()

    def append(self, filename:str, s:str) -> None:
        """ Add a string to the end of a text file, creating it if necessary. """
        with open(filename, 'a', encoding=self._encoding) as fp:
            fp.write(s)


class ResourceIOError(Exception):
    """ General exception for any resource IO or decoding error. """


def try_load(func:Callable) -> Callable:
    """ Decorator to re-raise I/O and parsing exceptions with more general error messages for the end-user. """
    @wraps(func)
    def load(self, filename:str, *args, **kwargs) -> Any:
        try:
            return func(self, filename, *args, **kwargs)
        except OSError as e:
            raise ResourceIOError(filename + ' is inaccessible or missing.') from e
        except (TypeError, ValueError) as e:
            raise ResourceIOError(f'{filename} is not formatted correctly: {e}') from e
        except (AssertionError, KeyError) as e:
            raise ResourceIOError(filename + ' is incomplete or corrupt.') from e
    return load


class StrokeLogWriter:
    """ Appends one JSON line per stroke: its RTFCRE keys and the dictionary translation (or null if none). """

    def __init__(self, filename:str, io:TextFileIO=None) -> None:
        self._filename = filename      # Path to the stroke log file.
        self._io = io or TextFileIO()  # IO for text files.

    def __call__(self, stroke:Any, translation:Optional[Translation]) -> None:
        encoded = None if translation is None else encode_translation(translation)
        line = json.dumps({"stroke": str(stroke), "translation": encoded}, ensure_ascii=False)
        self._io.append(self._filename, line + "\n")


# One stroke log entry: RTFCRE stroke string and the translation recorded for it (as encoded JSON, or None).
StrokeLogEntry = Tuple[str, Optional[list]]


class PlojoResourceIO:
    """ Top-level IO for steno resources. """

    def __init__(self, io:TextFileIO=None, *, comment_prefix="#") -> None:
        self._io = io or TextFileIO()                                    # IO for text files.
        self._cson_decoder = CSONDecoder(comment_prefix=comment_prefix)  # Decoder for JSON with comments.

    def _load_json_dict(self, filename:str) -> dict:
        """ Load a string dict from a UTF-8 JSON-based file. CSON files may have full-line comments. """
        s = self._io.read(filename)
        try:
            if filename.endswith(".cson"):
                d = self._cson_decoder.decode(s)
            else:
                d = json.loads(s)
        except json.JSONDecodeError as e:
            raise ValueError(f'JSON decoding error: ...{decoding_context(e)}...') from None
        if not isinstance(d, dict):
            raise TypeError(filename + ' does not contain a string dictionary.')
        return d

    @try_load
    def load_keymap(self, filename:str) -> StenoKeyLayout:
        """ Load and verify a steno key layout from CSON. """
        d = self._load_json_dict(filename)
        keymap = StenoKeyLayout(**d)
        keymap.verify()
        return keymap

    @try_load
    def _load_dictionary(self, filename:str, parser:DictionaryParser) -> Tuple[dict, List[str]]:
        d = self._load_json_dict(filename)
        return parser.parse_entries(d)

    def load_dictionaries(self, parser:DictionaryParser, *filenames:str) -> Tuple[StenoDictionary, List[str]]:
        """ Load and merge steno dictionaries from JSON files. Later files override earlier ones.
            Also return the keys from every file that could not be parsed as strokes. """
        entry_dicts = []
        skipped = []
        for filename in filenames:
            entries, bad_keys = self._load_dictionary(filename, parser)
            entry_dicts.append(entries)
            skipped += bad_keys
        return merge_entries(entry_dicts), skipped

    @try_load
    def load_stroke_log(self, filename:str) -> List[StrokeLogEntry]:
        """ Load every entry of a stroke log in order. """
        return list(self._iter_stroke_log(self._io.read(filename)))

    @staticmethod
    def _iter_stroke_log(s:str) -> Iterator[StrokeLogEntry]:
        for line in s.splitlines():
            if line.strip():
                obj = json.loads(line)
                yield obj["stroke"], obj["translation"]
