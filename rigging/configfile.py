"""
Rigging config-file parser and discovery.

Format (one setting per line)
    # comment (only where a name could start)
    name = value
    flag

- names are ASCII letters, digits, '_' and '-'; blanks before a name, around '=' and
  before the value are skipped; the value runs verbatim to the end of the line.
- a line ends at '\\n', '\\r' or the end of the input.

Semantics
- a bare name counts a flag and is a MissingArgumentError for a value option.
- 'name = value' is an OptionDoesNotAcceptArgumentError for a flag. For a single-valued
  option the first occurrence wins: an option already seen (earlier in the file, or on
  the command line parsed before) keeps its value. Multi-valued options append.
- 'name =' with nothing after it is ignored.
- any other character where a name, '=' or a comment is expected is an
  InvalidConfigFileError. Faults carry the 1-based line number in options["line"].
"""
import itertools
import os
import pathlib
import re

from .faults import *
from .utils import *

logger = getlogger(__name__)

_EOL = re.compile(r"\r\n?|\n")


def _isname(char):
    return char is not None and char.isascii() and (char.isalnum() or char in "_-")


def _line(text, index):
    return 1 + len(_EOL.findall(text, 0, index))


def _read(registry, source):
    if isinstance(source, os.PathLike):
        try:
            with open(source, "rb") as file:
                source = file.read()
        except OSError as error:
            logger.debug("cannot open config file %s: %s", source, error)
            return None
    elif hasattr(source, "read"):
        source = source.read()
    if isinstance(source, bytes | bytearray):
        try:
            source = bytes(source).decode("utf-8")
        except UnicodeDecodeError as error:
            registry.trigger(InvalidConfigFileError(
                "config file is not valid utf-8 text",
                title="invalid config file",
                code=FaultCode.INVALID_CONFIG_FILE,
                line=_line(bytes(source)[:error.start].decode("utf-8"), error.start),
                hint=str(error),
                docs=getdoc(FaultCode.INVALID_CONFIG_FILE)
            ))
    if not isinstance(source, str):
        raise TypeError("parseconfig() source must be a string, bytes or a readable file")
    return source


def _resolve(registry, name, line):
    if (option := registry.resolve(name)) is not None and option.name == name:
        return option
    if registry.ignore_unknown:
        logger.debug("skipping unknown option %r at line %d", name, line)
        return None

    suggestions = registry.suggest(name)
    registry.trigger(UnknownOptionError(
        "unknown option %r at line %d" % (name, line),
        title="unknown option",
        code=FaultCode.UNKNOWN_OPTION,
        input=name,
        line=line,
        suggestions=suggestions,
        hint="did you mean %r?" % suggestions[0] if suggestions else "remove or fix the line",
        docs=getdoc(FaultCode.UNKNOWN_OPTION)
    ))


def _invalid(registry, char, line):
    registry.trigger(InvalidConfigFileError(
        "unexpected character %r at line %d" % (char, line),
        title="invalid config file",
        code=FaultCode.INVALID_CONFIG_FILE,
        line=line,
        hint="write one 'name = value', 'name' or '# comment' per line",
        docs=getdoc(FaultCode.INVALID_CONFIG_FILE)
    ))


def _complete_name(registry, name, line):
    if (option := _resolve(registry, name, line)) is not None:
        # flags are counted; value options fail without being counted
        registry.record_occurrence(option, count=option.flag, line=line)


def _complete_value(registry, name, value, line):
    if (option := _resolve(registry, name, line)) is None:
        return
    if option.flag:
        registry.record_occurrence(option, value, count=False, line=line)
    elif value and (option.count == 0 or option.multi):
        registry.record_occurrence(option, value, line=line)
    else:
        logger.debug("ignoring %r for option %r at line %d", value, name, line)


def parseconfig(registry, source, /):
    """
    parse config-file content into a registry.

    source
    - str: the content itself.
    - bytes: utf-8 encoded content.
    - a readable file object (text or binary mode).
    - a filesystem path (os.PathLike); a file that cannot be opened is skipped.
    """
    if (text := _read(registry, source)) is None:
        return

    state = "name-start"
    name = ""
    start = 0
    line = 1

    # None marks the end of the input, which also ends the last line
    for index, char in enumerate(itertools.chain(text, [None])):
        eoln = char is None or char in "\r\n"

        match state:
            case "name-start":
                if _isname(char):
                    start = index
                    state = "name"
                elif char == "#":
                    state = "comment"
                elif not eoln and char not in " \t":
                    _invalid(registry, char, line)

            case "comment":
                if eoln:
                    state = "name-start"

            case "name" if not _isname(char):
                name = text[start:index]
                if eoln:
                    _complete_name(registry, name, line)
                    state = "name-start"
                elif char == "=":
                    state = "value-start"
                elif char in " \t":
                    state = "assign"
                else:
                    _invalid(registry, char, line)

            case "assign":
                if char == "=":
                    state = "value-start"
                elif eoln:
                    _complete_name(registry, name, line)
                    state = "name-start"
                elif char not in " \t":
                    _invalid(registry, char, line)

            case "value-start":
                if eoln:
                    _complete_value(registry, name, "", line)
                    state = "name-start"
                elif char not in " \t":
                    start = index
                    state = "value"

            case "value":
                if eoln:
                    _complete_value(registry, name, text[start:index], line)
                    state = "name-start"

        # "\r\n" ends a single line
        if char == "\n" or char == "\r" and text[index + 1:index + 2] != "\n":
            line += 1

    logger.debug("parsed %d line(s) of config text", line)


def discover(registry, option, filename, directories, /):
    """
    locate a config file, parse it and return its path.

    behavior
    - when the registry has a value for 'option', that value replaces 'filename'.
    - each directory is tried in order; the first file that opens is parsed.
    - nothing found: ConfigFileNotFoundError when the name came from 'option',
      otherwise None.
    """
    directories = list(directories)
    explicit = registry.has(option)
    if explicit:
        filename = str(registry.get(option))

    for directory in directories:
        path = pathlib.Path(directory) / filename
        try:
            with open(path, "rb") as file:
                content = file.read()
        except OSError as error:
            logger.debug("cannot open config file %s: %s", path, error)
            continue
        logger.debug("parsing config file %s", path)
        parseconfig(registry, content)
        return path

    if explicit:
        registry.trigger(ConfigFileNotFoundError(
            "config file %r not found" % filename,
            title="config file not found",
            code=FaultCode.CONFIG_FILE_NOT_FOUND,
            input=option,
            filename=filename,
            directories=[str(directory) for directory in directories],
            hint="check the value given to %r" % option,
            docs=getdoc(FaultCode.CONFIG_FILE_NOT_FOUND)
        ))
    logger.debug("no config file %r found", filename)
    return None


__all__ = (
    "parseconfig",
    "discover",
)
