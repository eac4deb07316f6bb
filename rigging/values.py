"""
Rigging value kinds: the closed set of types an option can store.

Overview
- Kind
  • Tag of a stored value: INTEGER (int), FLOAT (float), STRING (str), PATH (pathlib.Path).
    Every value option carries exactly one kind; conversion from command-line/config text,
    default validation, query projection and help rendering are all selected by it.

- scan(text)
  • Stand-alone numeric text scanner (sign, digits, fraction, exponent) producing a float.
    FLOAT conversion goes through it; it is kept independent so it can be exercised on
    its own.

Errors
- Conversions raise ValueError for malformed text and OverflowError for values out of
  range; the registry reports both as InvalidArgumentError for the option at hand.

Quick examples
    >>> Kind.of(int).convert("42")
    42
    >>> Kind.FLOAT.render(0.5)
    '0.5'
    >>> scan("-1.5e3")
    -1500.0
"""
import builtins
import math
import pathlib
import re
from enum import StrEnum

_INTEGER = re.compile(r"[+-]?[0-9]+")

# decimal exponents beyond these bounds cannot be represented as a float
_MAX_EXPONENT = 310
_MIN_EXPONENT = -330


def scan(text, /):
    """
    convert numeric text to a float with a small state machine.

    grammar
    - [sign] digits [ '.' [digits] ] [ ('e' | 'E') [sign] digits ]
    - [sign] '.' digits [ exponent ]

    contract
    - the whole text must be consumed and the mantissa needs at least one digit.
    - the result is correctly rounded (integer arithmetic until the final division).
    - ValueError for malformed text, OverflowError when the magnitude does not fit.
    """
    if not isinstance(text, str):
        raise TypeError("scan() argument must be a string")

    state = "sign"
    sign = 1
    mantissa = 0
    digits = 0
    fraction = 0
    exponent_sign = 1
    exponent = 0
    exponent_digits = 0

    for char in text:
        match state:
            case "sign":
                if char == "-":
                    sign = -1
                    state = "integer"
                elif char == "+":
                    state = "integer"
                elif "0" <= char <= "9":
                    mantissa = ord(char) - 48
                    digits = 1
                    state = "integer"
                elif char == ".":
                    state = "fraction"
                else:
                    raise ValueError("invalid numeric text %r" % text)
            case "integer":
                if "0" <= char <= "9":
                    mantissa = 10 * mantissa + ord(char) - 48
                    digits += 1
                elif char in "eE":
                    state = "exponent-sign"
                elif char == ".":
                    state = "fraction"
                else:
                    raise ValueError("invalid numeric text %r" % text)
            case "fraction":
                if "0" <= char <= "9":
                    mantissa = 10 * mantissa + ord(char) - 48
                    digits += 1
                    fraction += 1
                elif char in "eE":
                    state = "exponent-sign"
                else:
                    raise ValueError("invalid numeric text %r" % text)
            case "exponent-sign":
                if char == "-":
                    exponent_sign = -1
                    state = "exponent"
                elif char == "+":
                    state = "exponent"
                elif "0" <= char <= "9":
                    exponent = ord(char) - 48
                    exponent_digits = 1
                    state = "exponent"
                else:
                    raise ValueError("invalid numeric text %r" % text)
            case "exponent":
                if "0" <= char <= "9":
                    exponent = 10 * exponent + ord(char) - 48
                    exponent_digits += 1
                else:
                    raise ValueError("invalid numeric text %r" % text)

    if not digits:
        raise ValueError("invalid numeric text %r" % text)
    if state in ("exponent-sign", "exponent") and not exponent_digits:
        raise ValueError("invalid numeric text %r" % text)

    if mantissa == 0:
        return math.copysign(0.0, sign)

    scale = exponent_sign * exponent - fraction
    magnitude = len(str(mantissa)) + scale
    if magnitude > _MAX_EXPONENT:
        raise OverflowError("numeric text %r is out of range" % text)
    if magnitude < _MIN_EXPONENT:
        return math.copysign(0.0, sign)

    if scale >= 0:
        value = float(mantissa * 10 ** scale)
    else:
        value = mantissa / 10 ** -scale

    if math.isinf(value):
        raise OverflowError("numeric text %r is out of range" % text)
    return math.copysign(value, sign)


def _integer(text):
    if not _INTEGER.fullmatch(text):
        raise ValueError("invalid integer text %r" % text)
    return int(text)


class Kind(StrEnum):
    """
    tag of a storable option value.

    members
    - INTEGER: int (decimal text, optional sign)
    - FLOAT: float (through scan())
    - STRING: str (verbatim)
    - PATH: pathlib.Path (verbatim text wrapped in a path)
    """
    INTEGER = "int"
    FLOAT = "float"
    STRING = "str"
    PATH = "path"

    @classmethod
    def of(cls, type, /):
        """
        return the kind storing values of the given Python type.

        bool is rejected explicitly even though it is an int subclass.
        """
        for kind in cls:
            if type is kind.type:
                return kind
        if isinstance(type, builtins.type) and issubclass(type, pathlib.PurePath):
            return cls.PATH
        raise TypeError("unsupported option type %r (expected int, float, str or pathlib.Path)" % (type,))

    @property
    def type(self):
        return _TYPES[self]

    def accepts(self, value, /):
        """
        tell whether a Python value can be stored under this kind.

        integers are accepted for FLOAT (see coerce()); bool never is.
        """
        if isinstance(value, bool):
            return False
        if self is Kind.PATH:
            return isinstance(value, pathlib.PurePath)
        if self is Kind.FLOAT:
            return isinstance(value, int | float)
        return isinstance(value, self.type)

    def coerce(self, value, /):
        """
        normalize an accepted Python value to the exact stored type.
        """
        if not self.accepts(value):
            raise TypeError("%r cannot be stored as %s" % (value, self.value))
        return self.type(value)

    def convert(self, text, /):
        """
        convert raw command-line or config-file text to a value of this kind.
        """
        if not isinstance(text, str):
            raise TypeError("convert() argument must be a string")
        return _CONVERTERS[self](text)

    def render(self, value, /):
        """
        render a value the way help text shows defaults.
        """
        if self is Kind.FLOAT:
            # shortest text that reads back as the same float
            return repr(value).removesuffix(".0")
        return str(value)


_TYPES = {
    Kind.INTEGER: int,
    Kind.FLOAT: float,
    Kind.STRING: str,
    Kind.PATH: pathlib.Path,
}

_CONVERTERS = {
    Kind.INTEGER: _integer,
    Kind.FLOAT: scan,
    Kind.STRING: str,
    Kind.PATH: pathlib.Path,
}


__all__ = (
    "Kind",
    "scan",
)
