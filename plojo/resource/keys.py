from collections import defaultdict
from typing import Container, Mapping, NamedTuple, Tuple

from . import FrozenStruct


class StenoKeyLayout(FrozenStruct):
    """ Contains all sections and characters required in a standard steno key layout.
        There are two general string-based formats of steno keys:
        s-keys - Internal format. Each key is a unique character. Lowercase letters are used for right-side keys.
                 Two strokes are equal exactly when their s-keys strings are equal, so this format is used
                 for dictionary keys and stroke comparison.
        RTFCRE - Older format defined in the "RTF Court Reporting Extensions" specification.
                 Keys are all uppercase, hyphen delimits left vs. right side of the board.
                 Center keys may also delimit the sides, in which case the hyphen is omitted.
                 Number strokes are written with digits in place of the number key and the keys it modifies.
                 Steno dictionaries and stroke input are in this format. """

    AliasMap = Mapping[str, str]

    sep: str           # Stroke delimiter. This is the same in either format.
    split: str         # RTFCRE board split delimiter.
    number: str        # The number key. It turns certain keys into digits when pressed with them.
    special: str       # A single special-cased s-key (the asterisk).
    left: str          # Left-side keys. These are the same in either format.
    center: str        # Center keys. These are the same in either format.
    right: str         # Right-side RTFCRE keys.
    aliases: AliasMap  # Mapping of digit characters to the s-keys they stand for.

    def verify(self) -> None:
        """ Test various properties of the layout for correctness. """
        left = set(self.left)
        center = set(self.center)
        right = set(self.right)
        right_skeys = set(self.right.lower())
        normal_key_set = left | center | right
        # The center keys must not share any characters with the sides.
        assert not center & left
        assert not center & right
        # The left and right sides must not share characters after casing.
        assert not left & right_skeys
        # The special and number keys must be normal keys previously defined.
        assert self.special in normal_key_set
        assert self.number in normal_key_set
        # The delimiters must *not* be previously defined keys.
        assert self.sep not in normal_key_set
        assert self.split not in normal_key_set
        # Each alias must map an otherwise unused character to the number key plus exactly one other s-key.
        s_keys_set = left | center | right_skeys
        for k, v in self.aliases.items():
            assert k not in s_keys_set
            assert len(v) == 2
            assert v[0] == self.number
            assert v[1] in s_keys_set


class Stroke(NamedTuple):
    """ One chord of simultaneously pressed steno keys. Immutable and hashable.
        Two strokes with the same keys are equal no matter how they were typed. """

    skeys: str   # Keys in canonical s-keys form and steno order.
    rtfcre: str  # Keys in canonical RTFCRE form, as shown to the user and written in dictionaries.

    def __str__(self) -> str:
        return self.rtfcre

    def is_number(self) -> bool:
        """ Return True if the stroke is written only with digits (and possibly a hyphen). """
        rtfcre = self.rtfcre
        return any(c.isdigit() for c in rtfcre) and all(c.isdigit() or c == "-" for c in rtfcre)


StrokeSequence = Tuple[Stroke, ...]


class StenoKeyConverter:
    """ Steno key converter with pre-computed fields for fast membership tests and string conversion.
        Any string that cannot be read as a valid chord is rejected with a ValueError. """

    def __init__(self, sep:str, split:str, number:str, center_keys:Container[str], right_skeys:Container[str],
                 sk_order:Mapping[str, int], aliases:Mapping[int, str], digits:Mapping[str, str]) -> None:
        self._sep = sep                  # Stroke delimiter. This is the same in either format.
        self._split = split              # RTFCRE board split delimiter.
        self._number = number            # Number key s-key. It is never shown when digits are shown.
        self._center_keys = center_keys  # Contains all center keys and center digits.
        self._right_skeys = right_skeys  # Contains all right-side s-keys and right-side digits.
        self._sk_order = sk_order        # Dictionary of valid s-keys mapped to steno ordinals.
        self._aliases = aliases          # Translates digits and s-keys with str.translate. Other characters map to !.
        self._digits = digits            # Maps each s-key that has a number form to its digit.

    def _stroke_convert_case(self, s:str) -> str:
        """ Convert a case-insensitive RTFCRE stroke into case-sensitive LC/r s-keys. """
        s = s.upper()
        # If there's a hyphen, split the string there and rejoin with right side lowercase.
        if self._split in s:
            left, right = s.rsplit(self._split, 1)
            return left + right.lower()
        # If there's no hyphen, we must search for the split point between C and R.
        # The last center key in the string (if any) is the place to split, so start looking from the right end.
        for k in reversed(s):
            if k in self._center_keys:
                left, right = s.rsplit(k, 1)
                return left + k + right.lower()
        # If there are no center keys, it is narrowed to L (left side only). No modifications are necessary.
        return s

    def _stroke_rtfcre_to_skeys(self, s:str) -> str:
        """ Translate an RTFCRE stroke into s-keys format. This involves lowercasing the right side,
            replacing digits, filtering duplicates, and sorting by steno order. """
        skeys = self._stroke_convert_case(s).translate(self._aliases)
        if not skeys or "!" in skeys:
            raise ValueError(f'Invalid steno stroke: "{s}"')
        unique_skeys = set(skeys)
        return "".join(sorted(unique_skeys, key=self._sk_order.__getitem__))

    def _stroke_skeys_to_rtfcre(self, s:str) -> str:
        """ Replace keys with digits if the number key is pressed with any of them.
            Find the first right-side key in the stroke (if there is one).
            If it doesn't follow a center key, insert a hyphen before it. """
        if s.startswith(self._number) and any(k in self._digits for k in s):
            s = "".join([self._digits.get(k, k) for k in s[1:]])
        for i, k in enumerate(s):
            if k in self._right_skeys:
                if not i or s[i - 1] not in self._center_keys:
                    s = s[:i] + self._split + s[i:]
                return s.upper()
        return s

    def stroke(self, s:str) -> Stroke:
        """ Parse a single RTFCRE stroke and return it in canonical form. """
        skeys = self._stroke_rtfcre_to_skeys(s.strip())
        return Stroke(skeys, self._stroke_skeys_to_rtfcre(skeys))

    def strokes(self, s:str) -> StrokeSequence:
        """ Parse a sequence of RTFCRE strokes separated by the stroke delimiter. """
        return tuple(map(self.stroke, s.split(self._sep)))

    def rtfcre_to_skeys(self, s:str) -> str:
        """ Transform an RTFCRE steno key string to s-keys. """
        return self._sep.join([self._stroke_rtfcre_to_skeys(k) for k in s.split(self._sep)])

    def skeys_to_rtfcre(self, s:str) -> str:
        """ Transform an s-keys string back to RTFCRE. """
        return self._sep.join([self._stroke_skeys_to_rtfcre(k) for k in s.split(self._sep)])


def converter_from_keymap(keymap:StenoKeyLayout) -> StenoKeyConverter:
    """ Use a key layout to compute the necessary fields for a converter. Use sets for the fastest membership tests. """
    left = keymap.left
    center = keymap.center
    right_skeys = keymap.right.lower()
    skeys = [*left, *center, *right_skeys]
    sk_order = {sk: i for i, sk in enumerate(skeys)}
    aliases = dict(zip(skeys, skeys), **keymap.aliases)
    alias_trans = defaultdict(lambda: "!", str.maketrans(aliases))
    digits = {v[1:]: k for k, v in keymap.aliases.items()}
    center_set = {*center, *[d for k, d in digits.items() if k in center]}
    right_set = {*right_skeys, *[d for k, d in digits.items() if k in right_skeys]}
    return StenoKeyConverter(keymap.sep, keymap.split, keymap.number, center_set, right_set,
                             sk_order, alias_trans, digits)
