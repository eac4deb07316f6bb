"""
Rigging text layout: line-break classification and optimal paragraph wrapping.

Overview
- classify(char)
  • Map a character (or a byte value) to its line-break class. Only ASCII is modelled,
    following the Unicode Line Breaking Algorithm; everything from 128 upwards is
    treated as alphabetic.

- breaks(line)
  • Scan one paragraph left to right and list the offsets where a line may end
    (break opportunities). The paragraph end is always the last offset.

- wrap(text, width)
  • Split text on newlines and wrap each paragraph independently. Line boundaries are
    chosen among the break opportunities by dynamic programming, minimizing the sum of
    squared shortfalls (width - used) over every line but the last one of a paragraph.

Notes
- Emitted lines are raw slices of the input: trailing blanks at a break stay on the
  line they follow; they only count as unused width while costing a layout.
- A segment wider than the target width is only taken when nothing shorter starts at
  the same offset (an unbreakable word), so wrapping always terminates.

Quick example
    >>> wrap("The quick brown fox jumps over the lazy dog", 15)
    ['The quick ', 'brown fox ', 'jumps over the ', 'lazy dog']
"""
from enum import IntEnum

from .utils import getlogger

logger = getlogger(__name__)


class LineBreakClass(IntEnum):
    """
    line-break classes for the ASCII range (subset of UAX #14).

    the first fifteen members index the pair table; MB and SP are handled by the
    scanner itself and never looked up.
    """
    OP = 0   # open punctuation
    CL = 1   # close punctuation
    CP = 2   # close parenthesis
    QU = 3   # quotation
    EX = 4   # exclamation/interrogation
    SY = 5   # symbol allowing break after
    IS = 6   # infix numeric separator
    PR = 7   # prefix numeric
    PO = 8   # postfix numeric
    NU = 9   # numeric
    AL = 10  # alphabetic
    HY = 11  # hyphen
    BA = 12  # break after
    CM = 13  # combining mark
    WJ = 14  # word joiner
    MB = 15  # mandatory break
    SP = 16  # space


class BreakAction(IntEnum):
    """
    outcome of the pair table for two adjacent (non-space) classes.
    """
    DIRECT = 0                # break allowed
    INDIRECT = 1              # break allowed only when spaces separate the pair
    PROHIBITED = 2            # no break
    COMBINING_INDIRECT = 3    # combining mark after an indirect break
    COMBINING_PROHIBITED = 4  # combining mark after a prohibited break


OP, CL, CP, QU, EX, SY, IS, PR, PO, NU, AL, HY, BA, CM, WJ, MB, SP = LineBreakClass
DBK, IBK, PBK, CIB, CPB = BreakAction

_CLASSES = (
    CM, CM, CM, CM, CM, CM, CM, CM,
    CM, BA, MB, MB, MB, SP, CM, CM,
    CM, CM, CM, CM, CM, CM, CM, CM,
    CM, CM, CM, CM, CM, CM, CM, CM,
    SP, EX, QU, AL, PR, PO, AL, QU,
    OP, CP, AL, PR, IS, HY, IS, SY,
    NU, NU, NU, NU, NU, NU, NU, NU,
    NU, NU, IS, IS, AL, AL, AL, EX,
    AL, AL, AL, AL, AL, AL, AL, AL,
    AL, AL, AL, AL, AL, AL, AL, AL,
    AL, AL, AL, AL, AL, AL, AL, AL,
    AL, AL, AL, OP, PR, CP, AL, AL,
    AL, AL, AL, AL, AL, AL, AL, AL,
    AL, AL, AL, AL, AL, AL, AL, AL,
    AL, AL, AL, AL, AL, AL, AL, AL,
    AL, AL, AL, OP, BA, CL, AL, CM,
)

_ACTIONS = (
    #     OP   CL   CP   QU   EX   SY   IS   PR   PO   NU   AL   HY   BA   CM   WJ
    (PBK, PBK, PBK, PBK, PBK, PBK, PBK, PBK, PBK, PBK, PBK, PBK, PBK, CPB, PBK),  # OP
    (DBK, PBK, PBK, IBK, PBK, PBK, PBK, IBK, IBK, DBK, DBK, IBK, IBK, CIB, PBK),  # CL
    (DBK, PBK, PBK, IBK, PBK, PBK, PBK, IBK, IBK, IBK, IBK, IBK, IBK, CIB, PBK),  # CP
    (PBK, PBK, PBK, IBK, PBK, PBK, PBK, IBK, IBK, IBK, IBK, IBK, IBK, CIB, PBK),  # QU
    (DBK, PBK, PBK, IBK, PBK, PBK, PBK, DBK, DBK, DBK, DBK, IBK, IBK, CIB, PBK),  # EX
    (DBK, PBK, PBK, IBK, PBK, PBK, PBK, DBK, DBK, IBK, DBK, IBK, IBK, CIB, PBK),  # SY
    (DBK, PBK, PBK, IBK, PBK, PBK, PBK, DBK, DBK, IBK, IBK, IBK, IBK, CIB, PBK),  # IS
    (IBK, PBK, PBK, IBK, PBK, PBK, PBK, DBK, DBK, IBK, IBK, IBK, IBK, CIB, PBK),  # PR
    (IBK, PBK, PBK, IBK, PBK, PBK, PBK, DBK, DBK, IBK, IBK, IBK, IBK, CIB, PBK),  # PO
    (DBK, PBK, PBK, IBK, PBK, PBK, PBK, IBK, IBK, IBK, IBK, IBK, IBK, CIB, PBK),  # NU
    (DBK, PBK, PBK, IBK, PBK, PBK, PBK, DBK, DBK, IBK, IBK, IBK, IBK, CIB, PBK),  # AL
    (DBK, PBK, PBK, IBK, PBK, PBK, PBK, DBK, DBK, IBK, DBK, IBK, IBK, CIB, PBK),  # HY
    (DBK, PBK, PBK, IBK, PBK, PBK, PBK, DBK, DBK, DBK, DBK, IBK, IBK, CIB, PBK),  # BA
    (DBK, PBK, PBK, IBK, PBK, PBK, PBK, DBK, DBK, IBK, IBK, IBK, IBK, CIB, PBK),  # CM
    (IBK, PBK, PBK, IBK, PBK, PBK, PBK, IBK, IBK, IBK, IBK, IBK, IBK, CIB, PBK),  # WJ
)

# what std::isspace accepts in the "C" locale
_BLANKS = " \t\n\v\f\r"


def classify(char, /):
    """
    return the line-break class of a character.

    accepts a one-character string or an integer code point/byte value.
    codes from 128 upwards are alphabetic (no multi-byte awareness).
    """
    if isinstance(char, str):
        if len(char) != 1:
            raise TypeError("classify() expected a single character, got a string of length %d" % len(char))
        char = ord(char)
    elif not isinstance(char, int) or isinstance(char, bool):
        raise TypeError("classify() argument must be a character or an integer")
    if char < 0:
        raise ValueError("classify() argument must not be negative")
    return _CLASSES[char] if char < 128 else AL


def action(before, after, /):
    """
    look up the pair table for two adjacent classes (neither may be MB or SP).
    """
    return _ACTIONS[before][after]


def _advance(line, start):
    """
    return the offset of the first break opportunity after 'start'.
    """
    end = len(line)
    if start == end:
        return start

    # a blank opening the scan cannot take part in an indirect break
    if (cls := classify(line[start])) is SP:
        cls = WJ
    ncls = cls

    index = start
    while (index := index + 1) < end and cls is not MB:
        previous = ncls
        ncls = classify(line[index])

        if ncls is MB:
            index += 1
            break
        if ncls is SP:
            continue

        brk = _ACTIONS[cls][ncls]
        if brk is DBK or (brk is IBK and previous is SP):
            break

        cls = ncls

    return min(index, end)


def breaks(line, /):
    """
    list the break opportunities of a single paragraph.

    the result is strictly increasing, excludes offset 0 and always ends with
    len(line) when the line is not empty.
    """
    if not isinstance(line, str):
        raise TypeError("breaks() argument must be a string")
    offsets = []
    offset = 0
    while offset < len(line):
        offsets.append(offset := _advance(line, offset))
    return offsets


def _wrapline(line, width):
    offsets = [0, *breaks(line)]
    count = len(offsets) - 1

    minima = [0] + [None] * count
    previous = [0] * (count + 1)

    for i in range(count):
        for j in range(i + 1, count + 1):
            used = offsets[j] - offsets[i]

            # the first opportunity is always admissible, even when it overflows
            if used > width and j > i + 1:
                break

            trimmed = len(line[offsets[i]:offsets[j]].rstrip(_BLANKS))

            cost = minima[i]
            if j < count:  # the last line may be short
                cost += (width - trimmed) ** 2

            if minima[j] is None or cost < minima[j]:
                minima[j] = cost
                previous[j] = i

    lines = []
    j = count
    while j > 0:
        i = previous[j]
        lines.append(line[offsets[i]:offsets[j]])
        j = i
    lines.reverse()
    return lines


def wrap(text, width, /):
    """
    wrap text into lines of at most 'width' characters where possible.

    contract
    - text is split on '\\n'; every paragraph is wrapped on its own and an empty
      paragraph becomes one empty line, so the result is never empty.
    - lines are slices of the input (trailing blanks at a break are kept).
    - a line only exceeds 'width' when an unbreakable run is longer than 'width'.

    raises
    - TypeError for a non-string text or a non-integer width.
    - ValueError for a width below 1.
    """
    if not isinstance(text, str):
        raise TypeError("wrap() first argument must be a string")
    if not isinstance(width, int) or isinstance(width, bool):
        raise TypeError("wrap() second argument must be an integer")
    if width < 1:
        raise ValueError("wrap() second argument must be a positive integer")

    lines = []
    for paragraph in text.split("\n"):
        if not paragraph:
            lines.append(paragraph)
        else:
            lines.extend(_wrapline(paragraph, width))
    logger.debug("wrapped %d character(s) into %d line(s) at width %d", len(text), len(lines), width)
    return lines


__all__ = (
    "LineBreakClass",
    "BreakAction",
    "classify",
    "action",
    "breaks",
    "wrap",
)
