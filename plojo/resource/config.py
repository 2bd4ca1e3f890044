""" Module for user configuration options stored in the .cfg file format. """

import ast
from configparser import ConfigParser
from typing import Any


class Configuration:
    """ Contains config options with their defaults and descriptions. """

    def __init__(self, filename:str) -> None:
        self._filename = filename  # Full name of valid file in CFG format.
        self._data = {}            # Contains all raw config values by a combined section/option string key.
        self._info = []            # Section, name, and description for each option (required for CFG format).

    def add_option(self, key:str, default:Any=None, desc:str="") -> None:
        """ Add an option under <key> and start it with the <default> value.
            <key> - split by first underscore into:
                sect - Category/section where option is found in a CFG file.
                name - Name of individual option under this category.
            <desc> - Comment string describing the option. """
        if key not in self._data:
            sect, name = key.split("_", 1)
            self._data[key] = default
            self._info.append((key, sect, name, desc))

    def __getitem__(self, key:str) -> Any:
        return self._data[key]

    def read(self) -> None:
        """ Read config settings from a file in .cfg format and update the values of each config option.
            Try to evaluate each string as a Python object using AST. This fixes crap like bool('False') = True.
            Strings that are read as names will throw an error, in which case they should be left as-is. """
        parser = ConfigParser()
        with open(self._filename, 'r', encoding='utf-8') as fp:
            parser.read_file(fp)
        for key, sect, name, _ in self._info:
            if sect in parser:
                page = parser[sect]
                if name in page:
                    value = page[name]
                    try:
                        value = ast.literal_eval(value)
                    except (SyntaxError, ValueError):
                        pass
                    self._data[key] = value

    def write(self) -> None:
        """ Save the values of each config option to a file in .cfg format by section and name.
            Descriptions are written as comments above each option. """
        parser = ConfigParser(comment_prefixes=("#",), allow_no_value=True)
        parser.optionxform = str
        for key, sect, name, desc in self._info:
            if sect not in parser:
                parser.add_section(sect)
            if desc:
                parser.set(sect, "# " + desc)
            parser.set(sect, name, repr(self._data[key]))
        with open(self._filename, 'w', encoding='utf-8') as fp:
            parser.write(fp)
