r"""
Rigging option descriptors and factories.

Overview
- Option[_T]
  • One named option: a presence-only flag, a single-valued option or a multi-valued
    option, with an optional one-character short name, a description, a hidden bit
    and (single-valued only) a typed default.
  • Carries its own parse state: an occurrence count that only grows and the stored
    value (None, a value, or a list of values for multi options).

- Factories
  • flag(name, descr): presence-only switch, e.g. flag("verbose,v").
  • option(name, type, default, descr): single-valued option; later values overwrite.
  • multiple(name, type, descr): multi-valued option; every occurrence appends.

- Introspection & representation
  • OptionType metaclass provides stable __repr__/__rich_repr__ and exposes the fields
    declared in __introspectable__ as read-only properties (see utils.mirror).

Naming
- "name" gives a long name only, "name,x" adds the short name x, and a one-character
  name ("v") is both the long and the short name.
- Names must match r"[A-Za-z0-9][A-Za-z0-9_-]*"; short names are one alphanumeric char.

Validation highlights
- type: int, float, str or pathlib.Path (or a Kind); flags take no type.
- default: must be storable under the option's kind; flags and multi options take none.
- descr: a string; defaults to "".

Quick example:
    >>> from rigging.options import flag, option, multiple
    >>> verbose = flag("verbose,v", "be chatty")
    >>> level = option("level", int, 1, "how hard to try")
    >>> include = multiple("include,I", str)
    >>> level.default, level.count
    (1, 0)

Public API
- Classes: Option
- Factories: flag, option, multiple
"""
import copy
import functools
import operator
import re

from .utils import *
from .values import Kind

_NAME = re.compile(r"[A-Za-z0-9][A-Za-z0-9_-]*")
_SHORT = re.compile(r"[A-Za-z0-9]")


class OptionType(type):
    """
    Metaclass that turns option classes into introspectable descriptors.

    Responsibilities
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics.
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages.
    - __displayable__ (if set) narrows which properties are shown by __rich_repr__;
      otherwise __introspectable__ is used.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - option(name='verbose', short='v', kind=None, ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield a sequence of (name, object) pairs for pretty printers.
            """
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_naming(cls, metadata, /):
    """
    Internal: split and validate the "long[,x]" name specification.

    The dict is mutated in place: 'name' becomes the long name and 'short' is added.
    """
    if not isinstance(naming := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} name must be a string")

    name, comma, short = naming.partition(",")
    if not name:
        raise ValueError(f"{cls.__typename__} name cannot be empty")
    if not _NAME.fullmatch(name):
        raise ValueError(f"{cls.__typename__} name {name!r} is not a valid option name")

    if comma:
        if not _SHORT.fullmatch(short):
            raise ValueError(f"{cls.__typename__} short name {short!r} must be a single letter or digit")
    elif len(name) == 1:
        short = name
    else:
        short = Unset

    metadata["name"] = name
    metadata["short"] = short


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate kind/default/descr against the option shape.

    Rules
    - flags: no type, no default; kind is None.
    - value options: type defaults to str and must map to a Kind.
    - multi options: no default.
    - default, when given, must be storable under the kind and is normalized
      to the kind's exact type (an int default for a float option becomes a float).
    """
    if not isinstance(descr := metadata["descr"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    metadata["descr"] = coalesce(descr, "")

    if metadata["flag"]:
        if metadata["multi"]:
            raise TypeError(f"{cls.__typename__} cannot be both a flag and multi-valued")
        if metadata["kind"] is not Unset:
            raise TypeError(f"flag {cls.__typename__} cannot specify a 'type'")
        if metadata["default"] is not Unset:
            raise TypeError(f"flag {cls.__typename__} cannot specify a 'default'")
        metadata["kind"] = None
        return

    kind = coalesce(metadata["kind"], str)
    metadata["kind"] = kind = kind if isinstance(kind, Kind) else Kind.of(kind)

    if (default := metadata["default"]) is Unset:
        return
    if metadata["multi"]:
        raise TypeError(f"multi-valued {cls.__typename__} cannot specify a 'default'")
    if not kind.accepts(default):
        raise TypeError(f"{cls.__typename__} 'default' must be a valid {kind.value} value")
    metadata["default"] = kind.coerce(default)


class Option[_T](metaclass=OptionType):
    """
    Named option descriptor with its parse state.

    Option[_T] records what an option looks like (names, kind, default, help text)
    and what the parsers saw of it (occurrence count and stored value). Descriptors
    are owned by exactly one registry: registries store copies of what they receive.

    Properties
    - The names listed in __introspectable__ are exposed as read-only attributes.
      'default' and 'value' report None when absent; a multi option's 'value' is
      a fresh list on every access.
    """

    __introspectable__ = (
        "name",
        "short",
        "kind",
        "flag",
        "multi",
        "hidden",
        "descr",
        "default",
        "count",
        "value",
    )
    __displayable__ = (
        "name",
        "short",
        "kind",
        "flag",
        "multi",
        "hidden",
        "descr",
        "default",
    )

    def __new__(
            cls,
            name,
            /,
            type=Unset,
            default=Unset,
            descr=Unset,
            *,
            flag=False,
            multi=False,
            hidden=False
    ):
        """
        Construct an Option with the provided metadata.

        Parameters
        - name: str, "long" or "long,x" (see module docs).
        - type: int | float | str | pathlib.Path | Kind; value options only (default str).
        - default: value of the option's type; single-valued options only.
        - descr: str, help text (default "").
        - flag: presence-only option.
        - multi: every occurrence appends a value.
        - hidden: suppress from help output.
        """
        metadata = {
            "name": name,
            "kind": type,
            "default": default,
            "descr": descr,
            "flag": bool(flag),
            "multi": bool(multi),
            "hidden": bool(hidden),
        }
        _sanitize_naming(cls, metadata)
        _sanitize_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)

        self._count = 0
        self._value = [] if self._multi else self._default
        return self

    @property
    def has_default(self):
        return self._default is not Unset

    def observe(self):
        """
        Record one more occurrence.
        """
        self._count += 1

    def assign(self, text, /):
        """
        Convert raw text with the option's kind and store it.

        Single-valued options overwrite, multi-valued options append. Raises
        TypeError for flags, ValueError/OverflowError when the text does not convert.
        """
        if self._flag:
            raise TypeError(f"flag {self._name!r} does not take a value")
        value = self._kind.convert(text)
        if self._multi:
            self._value.append(value)
        else:
            self._value = value

    def __copy__(self):
        clone = super().__new__(type(self))
        for name in type(self).__displayable__:
            setattr(clone, "_" + name, getattr(self, "_" + name))
        clone._count = 0
        clone._value = [] if self._multi else self._default
        return clone

    def __deepcopy__(self, memo):
        # unlike copy.copy(), keeps the parse state
        clone = self.__copy__()
        clone._count = self._count
        clone._value = copy.deepcopy(self._value, memo)
        return clone


def flag(name, descr=Unset, *, hidden=False):
    """
    Build a presence-only option.

    Examples
    - flag("verbose,v", "be chatty")
    - flag("debug", hidden=True)
    """
    return Option(name, descr=descr, flag=True, hidden=hidden)


def option(name, type=str, default=Unset, descr=Unset, *, hidden=False):
    """
    Build a single-valued option; a later occurrence overwrites the earlier one.

    Examples
    - option("output,o", pathlib.Path)
    - option("level", int, 1, "how hard to try")
    """
    return Option(name, type, default, descr, hidden=hidden)


def multiple(name, type=str, descr=Unset, *, hidden=False):
    """
    Build a multi-valued option; every occurrence appends one value.
    """
    return Option(name, type, descr=descr, multi=True, hidden=hidden)


__all__ = (
    # Classes
    "Option",

    # Factories
    "flag",
    "option",
    "multiple",
)

del OptionType
