"""
Rigging option registry: owns the descriptors, answers typed queries, renders help.

What this module provides
- Registry: an ordered, fixed-shape collection of Option descriptors plus the operands
  collected while parsing, the usage line, the ignore_unknown policy and the runtime
  options used when a fault is surfaced (shell, fancy, colorful).
  • resolve(): name/short lookup (first match in insertion order).
  • record_occurrence(): the single place where raw text becomes a stored value.
  • has()/count()/get(): typed queries (checked projection of the stored kind).
  • width()/format_help()/print_help(): aligned help text wrapped with rigging.text.
  • parse()/parse_config_file()/discover_config_file(): entry points into the parsers.

- Global holder (optional)
  • init(*options, **options), instance(), reset(): explicit lifecycle around one
    process-wide Registry; nothing is constructed lazily.

Quick start
    from rigging import Registry, flag, option, multiple

    registry = Registry(
        flag("verbose,v", "be chatty"),
        option("level", int, 1, "how hard to try"),
        multiple("include,I", descr="extra search directories"),
        usage="usage: tool [options] file...",
    )
    registry.parse(sys.argv)
    if registry.has("verbose"):
        ...
    level = registry.get("level", int)

Query projection
- get(name) returns the stored value as is (a fresh list for multi options).
- get(name, int | float | str | pathlib.Path) checks the stored kind; multi options are
  projected with list or list[T]. A mismatch is a WrongTypeCastError, a query type
  outside that set an InvalidParameterTypeError.
"""
import copy
import difflib
import io
import types

from rich.console import Console

from .commandline import parseargs
from .configfile import parseconfig, discover
from .faults import *
from .options import Option
from .text import wrap
from .utils import *
from .values import Kind

logger = getlogger(__name__)


def _kindof(type):
    try:
        return Kind.of(type)
    except TypeError:
        return None


def _typename(type):
    if isinstance(type, types.GenericAlias) or not hasattr(type, "__name__"):
        return str(type)
    return type.__name__


class Registry:
    """
    Ordered collection of option descriptors with their parse results.

    The registry copies every descriptor it is given, so it exclusively owns the
    descriptors it reports; their shape never changes after construction, only
    their occurrence counts and values do.
    """

    def __init__(
            self,
            *options,
            usage=Unset,
            ignore_unknown=False,
            shell=False,
            fancy=False,
            colorful=True
    ):
        if not isinstance(usage, str | Unset):
            raise TypeError("registry 'usage' must be a string")

        self._options = []
        self._names = {}
        self._shorts = {}
        for option in options:
            if not isinstance(option, Option):
                raise TypeError("registry options must be Option instances, not %r" % type(option).__name__)
            if option.name in self._names:
                raise ValueError("duplicate option name %r" % option.name)
            if option.short is not None and option.short in self._shorts:
                raise ValueError("duplicate short option name %r" % option.short)
            option = copy.copy(option)
            self._options.append(option)
            self._names[option.name] = option
            if option.short is not None:
                self._shorts[option.short] = option

        self._operands = []
        self._usage = coalesce(usage, "")
        self._prog = None
        self.ignore_unknown = bool(ignore_unknown)
        self.shell = bool(shell)
        self.fancy = bool(fancy)
        self.colorful = bool(colorful)

    @property
    def options(self):
        """
        Snapshots of the owned descriptors, parse state included, in insertion order.

        Changing a snapshot never reaches the registry.
        """
        return tuple(copy.deepcopy(option) for option in self._options)

    operands = property(lambda self: list(self._operands))
    usage = property(lambda self: self._usage)

    @property
    def prog(self):
        """
        Program name shown in fault headers (argv[0] once a vector was parsed).
        """
        return self._prog

    @prog.setter
    def prog(self, prog):
        if not isinstance(prog, str | None):
            raise TypeError("registry 'prog' must be a string")
        self._prog = prog

    def __repr__(self):
        return "registry(options=%r, operands=%r)" % ([option.name for option in self._options], self._operands)

    def __rich_repr__(self):
        yield "options", self.options
        yield "operands", self.operands
        yield "usage", self.usage
        yield "ignore_unknown", self.ignore_unknown

    # ------------------------------------------------------------------ lookups

    def resolve(self, name, /):
        """
        Return the descriptor for a long name or a short character, or None.

        A one-character string is looked up as a short name first, then as a long name.
        """
        if not isinstance(name, str):
            raise TypeError("resolve() argument must be a string")
        if len(name) == 1 and (option := self._shorts.get(name)) is not None:
            return option
        return self._names.get(name)

    def suggest(self, name, /):
        """
        Return up to five known names close to an unknown one.
        """
        return difflib.get_close_matches(name, self._names.keys(), 5)

    def _lookup(self, name):
        if (option := self.resolve(name)) is not None:
            return option
        suggestions = self.suggest(name)
        self.trigger(UnknownOptionError(
            "unknown option %r" % name,
            title="unknown option",
            code=FaultCode.UNKNOWN_OPTION,
            input=name,
            suggestions=suggestions,
            hint="did you mean %r?" % suggestions[0] if suggestions else "check the spelling of the option name",
            docs=getdoc(FaultCode.UNKNOWN_OPTION)
        ))

    def add_operand(self, operand, /):
        if not isinstance(operand, str):
            raise TypeError("add_operand() argument must be a string")
        self._operands.append(operand)

    # -------------------------------------------------------------- occurrences

    def record_occurrence(self, option, argument=Unset, /, *, count=True, **context):
        """
        Record one occurrence of an option, with its raw argument if any.

        behavior
        - count=True increments the occurrence count first; parsers that already
          counted the option (to make it visible as seen) pass count=False.
        - flags given an argument fail with OptionDoesNotAcceptArgumentError.
        - value options without argument fail with MissingArgumentError.
        - the argument is converted with the option's kind; single values overwrite,
          multi values append. Conversion failures become InvalidArgumentError.

        extra keyword context (e.g. line=3) is attached to any fault raised.
        """
        where = " at line %d" % context["line"] if "line" in context else ""
        if isinstance(option, str):
            option = self._lookup(option)
        if count:
            option.observe()

        if option.flag:
            if argument is not Unset:
                self.trigger(OptionDoesNotAcceptArgumentError(
                    "option %r does not accept an argument%s" % (option.name, where),
                    title="option does not accept an argument",
                    code=FaultCode.OPTION_DOES_NOT_ACCEPT_ARGUMENT,
                    input=option.name,
                    argument=argument,
                    hint="remove the value given to %r" % option.name,
                    docs=getdoc(FaultCode.OPTION_DOES_NOT_ACCEPT_ARGUMENT),
                    **context
                ))
            return

        if argument is Unset:
            self.trigger(MissingArgumentError(
                "missing argument for option %r%s" % (option.name, where),
                title="missing argument for option",
                code=FaultCode.MISSING_ARGUMENT_FOR_OPTION,
                input=option.name,
                hint="provide a value (e.g., --%s=value)" % option.name,
                docs=getdoc(FaultCode.MISSING_ARGUMENT_FOR_OPTION),
                **context
            ))

        try:
            option.assign(argument)
        except (ValueError, OverflowError) as error:
            self.trigger(InvalidArgumentError(
                "invalid argument %r for option %r%s" % (argument, option.name, where),
                title="invalid argument",
                code=FaultCode.INVALID_ARGUMENT,
                input=option.name,
                argument=argument,
                hint="expected a value of type %s (%s)" % (option.kind.value, error),
                docs=getdoc(FaultCode.INVALID_ARGUMENT),
                **context
            ))
        logger.debug("recorded %r for option %r", argument, option.name)

    # ------------------------------------------------------------------ queries

    def has(self, name, /):
        """
        Tell whether an option was seen or has a default (False for unknown names).
        """
        if (option := self.resolve(name)) is None:
            return False
        return option.count > 0 or option.has_default

    def count(self, name, /):
        """
        Return how often an option was seen (0 for unknown names).
        """
        if (option := self.resolve(name)) is None:
            return 0
        return option.count

    def get(self, name, type=Unset, /):
        """
        Return the value of an option, optionally checked against a query type.

        raises
        - UnknownOptionError: no option by that name.
        - NoParameterError: the option is a flag.
        - OptionNotSpecifiedError: a single-valued option was neither seen nor defaulted.
        - InvalidParameterTypeError: the query type is not a supported value type.
        - WrongTypeCastError: the query type does not match the stored kind.
        """
        option = self._lookup(name)

        if option.flag:
            self.trigger(NoParameterError(
                "option %r is a flag and has no value" % option.name,
                title="no parameter",
                code=FaultCode.NO_PARAMETER,
                input=option.name,
                hint="use has(%r) or count(%r) instead" % (option.name, option.name),
                docs=getdoc(FaultCode.NO_PARAMETER)
            ))

        if not option.multi and option.count == 0 and not option.has_default:
            self.trigger(OptionNotSpecifiedError(
                "option %r was not specified" % option.name,
                title="option not specified",
                code=FaultCode.OPTION_NOT_SPECIFIED,
                input=option.name,
                hint="check has(%r) before asking for its value" % option.name,
                docs=getdoc(FaultCode.OPTION_NOT_SPECIFIED)
            ))

        if type is not Unset:
            self._project(option, type)
        return option.value

    def _project(self, option, type):
        if type is list:
            multi, kind = True, option.kind
        elif isinstance(type, types.GenericAlias) and type.__origin__ is list and len(type.__args__) == 1:
            multi, kind = True, _kindof(type.__args__[0])
        elif isinstance(type, types.GenericAlias):
            multi, kind = False, None
        else:
            multi, kind = False, _kindof(type)

        if kind is None:
            self.trigger(InvalidParameterTypeError(
                "%r is not a supported query type" % (type,),
                title="invalid parameter type",
                code=FaultCode.INVALID_PARAMETER_TYPE,
                input=option.name,
                query=type,
                hint="query with int, float, str, pathlib.Path or list[...] of them",
                docs=getdoc(FaultCode.INVALID_PARAMETER_TYPE)
            ))

        if multi != option.multi or kind is not option.kind:
            stored = ("list[%s]" if option.multi else "%s") % option.kind.type.__name__
            self.trigger(WrongTypeCastError(
                "option %r holds %s, not %s" % (option.name, stored, _typename(type)),
                title="wrong type cast",
                code=FaultCode.WRONG_TYPE_CAST,
                input=option.name,
                query=type,
                hint="query %r as %s" % (option.name, stored),
                docs=getdoc(FaultCode.WRONG_TYPE_CAST)
            ))

    # --------------------------------------------------------------------- help

    @staticmethod
    def _width(option):
        width = len(option.name)
        if width <= 1:
            width = 2
        elif option.short is not None:
            width += 7
        if not option.flag:
            width += 4
            if option.has_default:
                width += 4 + len(option.kind.render(option.default))
        return width + 6

    def width(self):
        """
        Return the column needed to fit the widest visible option's name part.
        """
        return max((self._width(option) for option in self._options if not option.hidden), default=0)

    def format_help(self, width, /):
        """
        Render the usage line and one aligned block per visible option.

        layout (per option)
        - two spaces, then "-x [ --name ]", "--name" or "-x", then " arg" for value
          options and " (=default)" when a default exists.
        - the description starts at column min(width(), width // 2), on the next line
          when the name part does not fit, and is wrapped at width - column.
        """
        if not isinstance(width, int) or isinstance(width, bool):
            raise TypeError("format_help() argument must be an integer")
        if width < 1:
            raise ValueError("format_help() argument must be a positive integer")

        column = min(self.width(), width // 2)
        output = io.StringIO()

        if self._usage:
            output.write(self._usage + "\n")

        for option in self._options:
            if option.hidden:
                continue

            if option.short is None:
                head = "  --" + option.name
            elif len(option.name) > 1:
                head = "  -%s [ --%s ]" % (option.short, option.name)
            else:
                head = "  -" + option.short
            if not option.flag:
                head += " arg"
                if option.has_default:
                    head += " (=%s)" % option.kind.render(option.default)
            output.write(head)

            leading = column
            if len(head) + 2 > column:
                output.write("\n")
            else:
                leading = column - len(head)

            for line in wrap(option.descr, max(width - column, 1)):
                line = line.rstrip()
                output.write((" " * leading + line if line else "") + "\n")
                leading = column

        return output.getvalue()

    def print_help(self, file=Unset, width=Unset):
        """
        Write the help text to a file (default: the terminal, through rich).

        width defaults to the terminal width rich detects.
        """
        console = Console()
        text = self.format_help(coalesce(width, console.width))
        if file is Unset:
            console.out(text, end="", highlight=False)
        else:
            file.write(text)

    # ------------------------------------------------------------------ parsing

    def parse(self, argv, /):
        """
        Parse an argument vector (argv[0] is the program name); see rigging.commandline.
        """
        parseargs(self, argv)
        return self

    def parse_config_file(self, source, /):
        """
        Parse config-file text, bytes, a readable file or a path; see rigging.configfile.
        """
        parseconfig(self, source)
        return self

    def discover_config_file(self, option, filename, directories, /):
        """
        Locate and parse a config file; returns its path or None (see configfile.discover).
        """
        return discover(self, option, filename, directories)

    # ------------------------------------------------------------------- faults

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this registry's runtime options (prog, shell, fancy, colorful).
        """
        trigger(fault, **options, prog=self._prog, shell=self.shell, fancy=self.fancy, colorful=self.colorful)


_instance = None


def init(*options, **kwargs):
    """
    Build the process-wide registry, replacing any previous one.
    """
    global _instance
    _instance = Registry(*options, **kwargs)
    return _instance


def instance():
    """
    Return the process-wide registry; RuntimeError until init() was called.
    """
    if _instance is None:
        raise RuntimeError("rigging registry is not initialized (call rigging.init() first)")
    return _instance


def reset():
    """
    Drop the process-wide registry.
    """
    global _instance
    _instance = None


__all__ = (
    # Classes
    "Registry",

    # Global holder
    "init",
    "instance",
    "reset",
)
