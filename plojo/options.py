from typing import List

from plojo.resource.io import ResourceIOError
from plojo.resource.plover import find_dictionaries
from plojo.util.cmdline import CmdlineOptions
from plojo.util.path import module_directory, PrefixPathConverter, user_data_directory

# The name of the root package is used as a default path for built-in assets and user files.
ROOT_PACKAGE = __package__.split(".", 1)[0]
PLOVER_APP_NAME = "plover"


class PlojoOptions(CmdlineOptions):
    """ Contains all command-line options necessary to build essential components. """

    ASSET_PATH_PREFIX = ":/"           # Prefix that indicates built-in assets.
    USER_PATH_PREFIX = "~/"            # Prefix that indicates local user app data.
    PLOVER_SENTINEL = "$PLOVER_DICTS"  # Sentinel pattern to load the user's Plover dictionaries.

    def __init__(self, app_description="Running Plojo as a library (should never be seen).") -> None:
        super().__init__(app_description)
        self.add("log", self.USER_PATH_PREFIX + "status.log",
                 "Text file to log status and exceptions.")
        self.add("keymap", self.ASSET_PATH_PREFIX + "assets/key_layout.cson",
                 "CSON file with static steno key layout data.")
        self.add("dictionaries", [self.ASSET_PATH_PREFIX + "assets/main.json"],
                 f"JSON dictionary files to load on start. Later files override earlier ones. "
                 f"{self.PLOVER_SENTINEL} loads the dictionaries from the user's Plover config.")
        self.add("config", self.USER_PATH_PREFIX + "config.cfg",
                 "Config CFG/INI file to load at start (created with defaults if missing).")
        self.add("stroke-log", "",
                 "JSON lines file to append every stroke and its translation to. Disabled if empty.")
        self.add("verbose", False,
                 "Log every stroke along with the edits and commands it produced.")
        converter = PrefixPathConverter()
        asset_path = module_directory(ROOT_PACKAGE)
        converter.add(self.ASSET_PATH_PREFIX, asset_path)
        user_path = user_data_directory(ROOT_PACKAGE)
        converter.add(self.USER_PATH_PREFIX, user_path)
        self._convert_path = converter.convert

    def convert_path(self, path:str, *, make_dirs=False) -> str:
        """ Expand asset and user path prefixes in an arbitrary path option. """
        return self._convert_path(path, make_dirs=make_dirs)

    def keymap_path(self) -> str:
        return self._convert_path(self.keymap)

    def log_path(self) -> str:
        """ Return the path for the log file, creating empty directories to its location if necessary. """
        return self._convert_path(self.log, make_dirs=True)

    def dictionary_paths(self) -> List[str]:
        """ Return a list of full file paths to the steno dictionaries in override order. """
        filenames = []
        for f in self.dictionaries:
            if f == self.PLOVER_SENTINEL:
                plover_user_path = user_data_directory(PLOVER_APP_NAME)
                try:
                    filenames += find_dictionaries(plover_user_path)
                except (KeyError, ValueError) as e:
                    raise ResourceIOError(f"No dictionary list found in Plover config at {plover_user_path}.") from e
            else:
                filenames.append(self._convert_path(f))
        return filenames

    def config_path(self) -> str:
        """ Return the full file path to the config file, adding directories if it doesn't exist. """
        return self._convert_path(self.config, make_dirs=True)

    def stroke_log_path(self) -> str:
        """ Return the full file path to the stroke log, or an empty string if stroke logging is disabled. """
        if not self.stroke_log:
            return ""
        return self._convert_path(self.stroke_log, make_dirs=True)
