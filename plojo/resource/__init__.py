""" Package for steno resources loaded from disk: the key layout, dictionaries, and configuration. """

from types import SimpleNamespace
from typing import NoReturn


class FrozenStruct(SimpleNamespace):
    """ Immutable attribute-based data structure. """

    def _raise_on_mutate(self, *args) -> NoReturn:
        raise AttributeError('Structure is immutable.')

    __setattr__ = __delattr__ = _raise_on_mutate
