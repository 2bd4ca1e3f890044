""" Module for English spelling rules used when a suffix is attached to a word. """

import re
from typing import Iterable, Tuple

# Each rule is matched against "<word> ^ <suffix>" and replaced with the combined word. The first match wins.
ORTHOGRAPHY_RULES = [
    # artistic + ly = artistically
    (r'^(.*[aeiou]c) \^ ly$', r'\1ally'),
    # establish + s = establishes (sibilant pluralization)
    (r'^(.*(?:s|sh|x|z|zh)) \^ s$', r'\1es'),
    # speech + s = speeches (soft ch pluralization)
    (r'^(.*(?:oa|ea|i|ee|oo|au|ou|l|n|(?<![gin]a)r|t)ch) \^ s$', r'\1es'),
    # cherry + s = cherries (consonant + y pluralization)
    (r'^(.+[bcdfghjklmnpqrstvwxz])y \^ s$', r'\1ies'),
    # die + ing = dying
    (r'^(.+)ie \^ ing$', r'\1ying'),
    # metallurgy + ist = metallurgist
    (r'^(.+[cdfghlmnpr])y \^ ist$', r'\1ist'),
    # beauty + ful = beautiful (y -> i)
    (r'^(.+[bcdfghjklmnpqrstvwxz])y \^ ([a-hj-xz].*)$', r'\1i\2'),
    # write + en = written
    (r'^(.+)([t])e \^ en$', r'\1\2\2en'),
    # make + ing = making, argue + ing = arguing (silent e elision)
    (r'^(.+[bcdfghjklmnpqrstuvwxz])e \^ ([aeiouy].*)$', r'\1\2'),
    # stop + ed = stopped (consonant doubling)
    (r'^(.*(?:[bcdfghjklmnprstvwxyz]|qu)[aeiou])([bcdfgklmnprtvz]) \^ ([aeiouy].*)$', r'\1\2\2\3'),
]


class Orthography:
    """ Combines a word with a suffix using the first matching spelling rule, or plain concatenation. """

    def __init__(self, rules:Iterable[Tuple[str, str]]=ORTHOGRAPHY_RULES) -> None:
        self._rules = [(re.compile(pattern, re.I), repl) for pattern, repl in rules]  # Compiled rules in order.

    def add_suffix(self, word:str, suffix:str) -> str:
        """ Only the first word of a multi-word suffix takes part in the rules.
            A word and suffix with no matching rule are simply joined. """
        suffix, sep, rest = suffix.partition(" ")
        if word and suffix:
            joined = f"{word} ^ {suffix}"
            for rx, repl in self._rules:
                match = rx.match(joined)
                if match is not None:
                    return match.expand(repl) + sep + rest
        return word + suffix + sep + rest
