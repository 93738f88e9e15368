""" Module for tree options stored in the .cfg file format. """

import ast
from configparser import ConfigParser
from typing import Any, Dict

from .log import open_logger, StreamLogger
from .tree import LogFunc, RadixTree, RadixTreeError

ConfigDict = Dict[str, Any]
NestedConfigDict = Dict[str, ConfigDict]


class ConfigError(RadixTreeError):
    """ Raised if a config option has a value we can't use. """


def eval_str(s:str) -> Any:
    """ Try to evaluate a string as a Python object using ast.literal_eval. This fixes crap like bool('False') = True.
        Strings that are read as names will throw an error, in which case they should be left as-is. """
    try:
        return ast.literal_eval(s)
    except (SyntaxError, ValueError):
        return s


class ConfigIO:
    """ Performs file I/O and data type conversion on the contents of CFG files. """

    def __init__(self, *, from_str=eval_str, to_str=repr, encoding='utf-8') -> None:
        self._from_str = from_str  # Converts input strings to other values (default uses ast.literal_eval).
        self._to_str = to_str      # Converts output values back to strings (default uses repr to round-trip).
        self._encoding = encoding  # Character encoding of CFG files.

    def read(self, filename:str) -> NestedConfigDict:
        """ Read config settings from a file in .cfg format into a nested mapping. """
        parser = ConfigParser()
        with open(filename, 'r', encoding=self._encoding) as fp:
            parser.read_file(fp)
        options = {}
        for sect in parser.sections():
            page = options[sect] = {}
            for name, s in parser[sect].items():
                page[name] = self._from_str(s)
        return options

    def write(self, filename:str, options:NestedConfigDict) -> None:
        """ Save a nested mapping of config options to a file in .cfg format by section and name. """
        parser = ConfigParser()
        for sect, page in options.items():
            if page:
                parser.add_section(sect)
                for name, value in page.items():
                    parser.set(sect, name, self._to_str(value))
        with open(filename, 'w', encoding=self._encoding) as fp:
            parser.write(fp)


class TreeConfig(ConfigDict):
    """ Radix tree options corresponding to one section of a CFG file. Missing options take their defaults. """

    SECTION = "radix_tree"
    DEFAULTS = {"default":       None,   # Value returned by get_value() for missing keys.
                "log_file":      "",     # If set, append tree diagnostics to this file.
                "log_to_stderr": False}  # If True, print tree diagnostics to stderr as well.

    def __init__(self, filename:str, sect=SECTION, *, io:ConfigIO=None) -> None:
        super().__init__(self.DEFAULTS)
        self._filename = filename    # Full name of valid file in CFG format.
        self._sect = sect            # Name of our CFG file section.
        self._io = io or ConfigIO()  # Performs whole reads/writes to CFG files.

    def read(self) -> bool:
        """ Try to read config options from the CFG file. Return True if successful. """
        try:
            cfg = self._io.read(self._filename)
        except OSError:
            return False
        options = cfg.get(self._sect)
        if options:
            self.update(options)
        return True

    def write(self) -> bool:
        """ Write the current config options to the original CFG file. Return True if successful. """
        try:
            self._io.write(self._filename, {self._sect: self})
            return True
        except OSError:
            return False

    def open_logger(self) -> StreamLogger:
        """ Open a logger for every log destination configured. It may have no streams at all. """
        log_file = self["log_file"]
        if not isinstance(log_file, str):
            raise ConfigError(f"log_file must be a file path, not {log_file!r}.")
        filenames = [log_file] if log_file else []
        return open_logger(*filenames, to_stderr=bool(self["log_to_stderr"]))


def build_tree(config:TreeConfig, *args, log:LogFunc=None) -> RadixTree:
    """ Create a tree with options from <config>, optionally filled with items from <args>.
        <log> - diagnostic callable, usually from a logger opened with config.open_logger().
                The caller owns that logger and must close it when the tree is no longer needed. """
    return RadixTree(*args, default=config["default"], log=log)
