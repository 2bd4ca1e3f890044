""" Module for steno dictionaries: parsing entry text into translations and looking up stroke sequences. """

import re
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .resource.keys import StenoKeyConverter, Stroke
from .translation import Action, Command, CommandKind, EngineCommand, Format, FormatFlag, \
    Text, TextMode, Translation

# Dictionary keys are tuples of strokes in s-keys format.
DictionaryKey = Tuple[str, ...]


class StenoDictionary:
    """ Read-only table of translations keyed by stroke sequences. Safe to share between threads. """

    def __init__(self, entries:Mapping[DictionaryKey, Translation]=None) -> None:
        self._entries = dict(entries or {})                          # Translations by s-keys tuple.
        self.longest_key = max(map(len, self._entries), default=0)  # Stroke count of the longest entry.

    def __len__(self) -> int:
        return len(self._entries)

    def lookup(self, strokes:Sequence[Stroke]) -> Optional[Translation]:
        """ Return the translation for exactly this sequence of strokes, or None if there isn't one. """
        key = tuple([s.skeys for s in strokes])
        return self._entries.get(key)


class DictionaryParser:
    """ Parses dictionary entries written in the RTFCRE/Plover dictionary language.

        Translation text is a series of literal text and {meta} atoms:
        {^}, {^ed}, {pre^}   - attach to the previous and/or next word (with spelling rules for suffixes).
        {suffix:ed}          - the same as {^ed}.
        {&a}                 - glue to other glued text (fingerspelling).
        {.} {?} {!}          - sentence punctuation, capitalizing the next word.
        {,} {:} {;}          - attached punctuation.
        {-|} {<} {>}         - capitalize, uppercase or lowercase the next word.
        {*-|} {*<} {*>}      - the same for the previous word.
        {*!}                 - remove the space before the previous word.
        {~|text}             - text that passes pending case formatting on to the next word.
        {}                   - reset formatting.
        {#keys}              - send a key combination.
        {PLOJO:command}      - run an engine command. This must be the whole translation.
        Braces inside text are escaped with a backslash. Any other meta is treated as literal text. """

    _ATOM_RX = re.compile(r"(?:\\[{}]|[^{}])+|\{(?:\\[{}]|[^{}])*\}")
    _DIGITS_RX = re.compile(r"^[0-9]+$")

    STOP_PUNCTUATION = {".", "?", "!"}
    MID_PUNCTUATION = {",", ":", ";"}
    FORMAT_METAS = {"-|":  FormatFlag.CAPITALIZE_NEXT,
                    "<":   FormatFlag.UPPER_NEXT,
                    ">":   FormatFlag.LOWER_NEXT,
                    "*-|": FormatFlag.CAPITALIZE_PREV,
                    "*<":  FormatFlag.UPPER_PREV,
                    "*>":  FormatFlag.LOWER_PREV,
                    "*!":  FormatFlag.SUPPRESS_SPACE_PREV,
                    "":    FormatFlag.RESET}
    ENGINE_PREFIX = "PLOJO:"
    SUFFIX_PREFIX = "suffix:"

    def __init__(self, converter:StenoKeyConverter) -> None:
        self._converter = converter  # Parses and normalizes RTFCRE dictionary keys.

    @staticmethod
    def _unescape(s:str) -> str:
        return s.replace("\\{", "{").replace("\\}", "}")

    def _parse_text(self, text:str) -> List[Action]:
        text = self._unescape(text).strip()
        if not text:
            return []
        if self._DIGITS_RX.match(text):
            return [Text(text, TextMode.GLUED)]
        return [Text(text)]

    def _parse_meta(self, meta:str) -> List[Action]:
        """ Parse the contents of one {meta} atom. """
        meta = meta.strip()
        if meta in self.STOP_PUNCTUATION:
            return [Text(meta, TextMode.ATTACHED), Format(FormatFlag.CAPITALIZE_NEXT)]
        if meta in self.MID_PUNCTUATION:
            return [Text(meta, TextMode.ATTACHED)]
        if meta in self.FORMAT_METAS:
            return [Format(self.FORMAT_METAS[meta])]
        if meta.startswith("&"):
            return [Text(self._unescape(meta[1:]), TextMode.GLUED)]
        if meta.startswith("#"):
            return [Command(CommandKind.KEYS, meta[1:].strip())]
        if meta.upper().startswith(self.ENGINE_PREFIX):
            name = meta[len(self.ENGINE_PREFIX):].strip().lower()
            if name not in EngineCommand.ALL:
                raise ValueError(f'Unknown engine command: "{name}"')
            return [Command(CommandKind.ENGINE, name)]
        if meta.startswith(self.SUFFIX_PREFIX):
            text = self._unescape(meta[len(self.SUFFIX_PREFIX):])
            return [Text(text, TextMode.ATTACHED, False, bool(text))]
        if meta == "^":
            return [Text("", TextMode.ATTACHED, True)]
        # Attach markers may sit on either side of the carry marker, as in {^~|"} and {~|"^}.
        attach_prev = meta.startswith("^")
        meta = meta[attach_prev:]
        carry_case = meta.startswith("~|")
        if carry_case:
            meta = meta[2:]
        attach_next = meta.endswith("^")
        if attach_next:
            meta = meta[:-1]
        if not (attach_prev or attach_next or carry_case):
            # Unsupported meta. Show its contents so the user can see what went wrong.
            return [Text(self._unescape(meta))]
        text = self._unescape(meta)
        mode = TextMode.ATTACHED if attach_prev else TextMode.LITERAL
        return [Text(text, mode, attach_next, attach_prev and bool(text), carry_case)]

    def parse(self, s:str) -> Translation:
        """ Parse the text of one dictionary entry into a translation. """
        actions = []
        for atom in self._ATOM_RX.findall(s):
            if atom.startswith("{") and atom.endswith("}"):
                actions += self._parse_meta(atom[1:-1])
            else:
                actions += self._parse_text(atom)
        if len(actions) > 1 and any(isinstance(a, Command) and a.kind == CommandKind.ENGINE for a in actions):
            raise ValueError(f'Engine commands must be the only action in an entry: "{s}"')
        return tuple(actions)

    def parse_entries(self, raw:Mapping[str, str]) -> Tuple[Dict[DictionaryKey, Translation], List[str]]:
        """ Parse a raw dictionary of RTFCRE keys and entry text.
            Return the parsed entries along with every key that could not be read as strokes. """
        entries = {}
        skipped = []
        for keys, text in raw.items():
            try:
                strokes = self._converter.strokes(keys)
            except ValueError:
                skipped.append(keys)
                continue
            if not isinstance(text, str):
                raise TypeError(f'Entry for "{keys}" is not a string.')
            entries[tuple([s.skeys for s in strokes])] = self.parse(text)
        return entries, skipped


def merge_entries(entry_dicts:Iterable[Mapping[DictionaryKey, Translation]]) -> StenoDictionary:
    """ Build one dictionary from several. Entries in later dictionaries override earlier ones. """
    merged = {}
    for d in entry_dicts:
        merged.update(d)
    return StenoDictionary(merged)
