""" Module for finding the dictionaries listed in a Plover user configuration. """

from configparser import ConfigParser
import json
import os
from typing import Iterator


class PloverConfig:
    """ Reads the dictionary list from a Plover config file. """

    DEFAULT_FILENAME = "plover.cfg"
    SYSTEM_SECTION = "System: English Stenotype"

    def __init__(self, base_path=".") -> None:
        self._base_path = base_path    # Base for relative file paths.
        self._parser = ConfigParser()

    def read(self, filename:str=None) -> None:
        """ Parse a Plover config file. A missing file leaves the parser empty. """
        cfg_path = os.path.join(self._base_path, filename or self.DEFAULT_FILENAME)
        self._parser.read(cfg_path, encoding='utf-8')

    def dictionary_paths(self) -> Iterator[str]:
        """ Yield a full file path for each enabled dictionary, lowest priority first. """
        # The config value is a string, but it must be decoded as a JSON array of objects.
        value = self._parser[self.SYSTEM_SECTION]['dictionaries']
        dictionary_specs = json.loads(value)
        # Plover lists dictionaries from highest to lowest priority, but later files override earlier ones here.
        for spec in reversed(dictionary_specs):
            if not spec.get('enabled', True):
                continue
            # The paths start out relative to the location of the config file. Make them absolute.
            yield os.path.join(self._base_path, spec['path'])


def find_dictionaries(user_dir:str, cfg_filename:str=None, *, ext=".json") -> Iterator[str]:
    """ Load a Plover config file from a user data directory and yield file paths for the dictionaries.
        If <ext> is not None, only yield paths with that file extension.
        Raise KeyError if the config has no dictionary list, or ValueError if the list is malformed. """
    config = PloverConfig(user_dir)
    config.read(cfg_filename)
    for path in config.dictionary_paths():
        if ext is None or path.endswith(ext):
            yield path
