"""
Rigging argument-vector parser.

parseargs(registry, argv) walks argv[1:] once, left to right, with two states:

- options: tokens starting with '-' are options, anything else is an operand
  (operands and options may interleave).
  • '--' switches to the operands state and is consumed.
  • '-' alone is an operand.
  • '--name' / '--name=value': long option. A value option takes the inline value,
    else the next token (whatever it looks like).
  • '-abc': short options, one character at a time. Flags are counted; the first value
    option takes the rest of the token, or the next token when nothing is left, and
    ends the cluster.
- operands: every remaining token is an operand, verbatim.

Unknown names are skipped when registry.ignore_unknown is set and fail with
UnknownOptionError otherwise. Parsing is fail-fast: the first fault stops it.
"""
import collections
import os.path

from .faults import *
from .utils import *

logger = getlogger(__name__)


def _unknown(registry, name, input):
    """
    skip an unknown option (ignore_unknown) or report it with close-match suggestions.
    """
    if registry.ignore_unknown:
        logger.debug("skipping unknown option %r", input)
        return

    suggestions = registry.suggest(name)
    try:
        hint = "did you mean %r?" % ("--" + suggestions[0])
    except IndexError:
        hint = "check the spelling, or ask for the help text to see all options"
    registry.trigger(UnknownOptionError(
        "unknown option %r" % input,
        title="unknown option",
        code=FaultCode.UNKNOWN_OPTION,
        input=name,
        suggestions=suggestions,
        hint=hint,
        docs=getdoc(FaultCode.UNKNOWN_OPTION)
    ))


def _parse_long(registry, token, tokens):
    name, equals, value = token[2:].partition("=")
    value = value if equals else Unset

    if (option := registry.resolve(name)) is None or len(name) == 1 and option.name != name:
        return _unknown(registry, name, token)

    if option.flag:
        return registry.record_occurrence(option, value)

    if value == "":
        registry.trigger(EmptyInlineValueWarning(
            "empty inline value for option %r" % ("--" + option.name),
            title="empty inline value",
            code=FaultCode.EMPTY_INLINE_VALUE,
            input=option.name,
            hint="add a value after '=' (for example: --%s=<value>) or pass it after a space" % option.name,
            docs=getdoc(FaultCode.EMPTY_INLINE_VALUE)
        ))
        value = Unset

    # counted before the value is bound, so the option reads as seen even on failure
    option.observe()
    if value is Unset and tokens:
        value = tokens.popleft()
    registry.record_occurrence(option, value, count=False)


def _parse_short(registry, token, tokens):
    cluster = token[1:]
    for index, char in enumerate(cluster):
        if (option := registry.resolve(char)) is None:
            _unknown(registry, char, "-" + char)
            continue

        if option.flag:
            registry.record_occurrence(option)
            continue

        option.observe()
        value = cluster[index + 1:] or Unset
        if value is Unset and tokens:
            value = tokens.popleft()
        registry.record_occurrence(option, value, count=False)
        break


def parseargs(registry, argv, /):
    """
    parse an argument vector into a registry.

    contract
    - argv[0] is the program name: it is not parsed and becomes registry.prog.
    - operands are appended to registry.operands in encounter order.
    - faults surface through registry.trigger (raised unless the registry is in shell mode).
    """
    tokens = collections.deque(argv)
    if not tokens:
        return
    if not isinstance(prog := tokens.popleft(), str):
        raise TypeError("parseargs() argument vector must contain strings")
    registry.prog = os.path.basename(prog) or prog

    state = "options"
    while tokens:
        if not isinstance(token := tokens.popleft(), str):
            raise TypeError("parseargs() argument vector must contain strings")

        if state == "operands" or token == "-" or not token.startswith("-"):
            registry.add_operand(token)
        elif token == "--":
            state = "operands"
        elif token.startswith("--"):
            _parse_long(registry, token, tokens)
        else:
            _parse_short(registry, token, tokens)

    logger.debug("parsed %d operand(s) from %r", len(registry.operands), registry.prog)


__all__ = (
    "parseargs",
)
