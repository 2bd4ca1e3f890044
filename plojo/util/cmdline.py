""" Module for user-configurable command-line options. """

import os
import sys
from typing import Any, Iterable, List

# Argument strings accepted as values for boolean flags.
_BOOL_STRINGS = {"1": True, "true": True, "yes": True, "on": True,
                 "0": False, "false": False, "no": False, "off": False}


class CmdlineOption:
    """ One --key option. Its arguments are converted to the type of its default value. """

    def __init__(self, key:str, desc="No description.", opt_type=str) -> None:
        self.key = key             # Option key (the name prefixed with --).
        self.desc = desc           # Description to be displayed in help.
        self._opt_type = opt_type  # Data type to be produced if the option is specified.

    def _multiargs(self) -> bool:
        """ If True, multiple command-line arguments are combined in a string collection. """
        return issubclass(self._opt_type, (tuple, list, set))

    def __call__(self, *args:str) -> Any:
        """ Convert argument strings to the type required by this option and return it.
            A boolean flag is turned on by its key alone, or set explicitly with one argument. """
        opt_type = self._opt_type
        if opt_type is bool:
            if not args:
                return True
            if len(args) == 1 and args[0].lower() in _BOOL_STRINGS:
                return _BOOL_STRINGS[args[0].lower()]
            raise ValueError(f'Option {self.key} takes no argument or a boolean, got {" ".join(args)}.')
        if self._multiargs():
            return opt_type(args)
        if len(args) != 1:
            raise ValueError(f'Option {self.key} takes exactly one argument, got {len(args)}.')
        return opt_type(*args)

    def usage(self) -> str:
        if self._opt_type is bool:
            return self.key
        if self._multiargs():
            return self.key + '=<str> [<str> ...]'
        return f'{self.key}=<{self._opt_type.__name__}>'


class CmdlineOptions:
    """ Namespace class for CmdlineOption objects. Option values are accessed as instance attributes.
        Unparsed options will fall back to default values. """

    HELP_KEYS = ('-h', '--help')

    def __init__(self, app_description="Command line application.") -> None:
        self._app_description = app_description  # App description shown in command-line help.
        self._options = {}  # Contains all option objects keyed by their destination attributes.
        self._extras = []   # Arguments left over from the last parse.

    def __getattr__(self, name:str) -> Any:
        raise AttributeError(f'"{name}" is not the name of a valid command-line option.')

    def add(self, name:str, default:Any=None, desc="No description.") -> None:
        """ Add a new option and set its attribute to be the default value (until parsed).
            Since attribute names cannot have hyphens, they are replaced with underscores. """
        opt_type = str if default is None else type(default)
        attr_name = name.replace("-", "_")
        self._options[attr_name] = CmdlineOption("--" + name, desc, opt_type)
        setattr(self, attr_name, default)

    def format_help(self, script_name:str) -> str:
        """ Return the description, a usage line, and one line per option. """
        opts = list(self._options.values())
        usage = "".join([f' [{opt.usage()}]' for opt in opts])
        rows = [(opt.usage(), opt.desc) for opt in opts]
        rows.append((", ".join(self.HELP_KEYS), "Show this help message and exit."))
        col_width = max([len(keys) for keys, _ in rows]) + 2
        lines = [self._app_description,
                 f'usage: {script_name}{usage}',
                 "",
                 *[keys.ljust(col_width) + desc for keys, desc in rows],
                 ""]
        return '\n'.join(lines)

    def parse(self, argv:Iterable[str]=None) -> None:
        """
        Parse command line options into instance attributes and save any leftovers as extras.
        Arguments are taken from <argv> if provided, otherwise from sys.argv.
        Option keys start with '-'. The first argument may follow the key after '=', and the rest follow
        it delimited by spaces. Arguments before the first option go straight into extras:

          script   extra               2 args                    flag       1 arg
        |*******| |*****| [   key   ] |-------------| [  key  ] [ key ] |---|
        plojo.exe console --dictionaries=a.json b.json --verbose --log=x.log
        """
        script, *argv = (argv or sys.argv)
        opts_by_key = {opt.key: attr for attr, opt in self._options.items()}
        extras = []
        groups = []
        for s in argv:
            if s.startswith('-'):
                groups.append([s])
            elif groups:
                groups[-1].append(s)
            else:
                extras.append(s)
        values = {}
        for s, *args in groups:
            k, *eq = s.split('=', 1)
            if k in self.HELP_KEYS:
                sys.stdout.write(self.format_help(os.path.basename(script or "")))
                sys.exit(0)
            attr = opts_by_key.get(k)
            if attr is None:
                extras += [s, *args]
            else:
                values[attr] = self._options[attr](*eq, *args)
        self.__dict__.update(values)
        self._extras = extras

    def extras(self) -> List[str]:
        """ Return every argument the last parse could not match to an option. """
        return self._extras[:]
