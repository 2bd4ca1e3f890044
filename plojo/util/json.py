""" Module for special JSON codecs. """

from json import JSONDecodeError, JSONDecoder
from typing import Union

JSONType = Union[None, bool, int, float, str, tuple, list, dict]  # Python types supported by json module.


class CSONDecoder(JSONDecoder):
    """ Reads non-standard JSON with full-line comments (CSON = commented JSON). """

    def __init__(self, *, comment_prefix="#", **kwargs) -> None:
        super().__init__(**kwargs)
        self._comment_prefix = comment_prefix  # Prefix for comment lines.

    def decode(self, s:str, *args, **kwargs) -> JSONType:
        """ Decode a non-standard JSON string with full-line comments.
            JSON doesn't care about leading or trailing whitespace, so strip every line first. """
        lines = s.split("\n")
        stripped_line_iter = map(str.strip, lines)
        data_lines = [line for line in stripped_line_iter
                      if line and not line.startswith(self._comment_prefix)]
        s = "\n".join(data_lines)
        return super().decode(s, *args, **kwargs)


def decoding_context(e:JSONDecodeError, width=20) -> str:
    """ Return the characters around a decoding error with a marker at the failure point.
        The error's own line number refers to the stripped document, so it is not reported. """
    i = e.pos
    before = e.doc[max(i - width, 0):i]
    after = e.doc[i:i + width]
    return repr(before + '<<!>>' + after)[1:-1]
