"""
Cardinals utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the arguments, registry and faults layers.

Overview
- UnsetType / Unset
  • Singleton sentinel for "no value stored" without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default; legitimate falsey values are kept.

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated callables.

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr).

- ordinal(number)
  • "first", "second", ... "11th" labels for 1-based positions.

- isgoodname(name)
  • Pure predicate for positional argument names.

- log / debug / enable_logging()
  • The package logger ("cardinals"), silent unless the host configures logging.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> isgoodname("file-name")
    True
"""
import builtins
import functools
import logging
import re
from collections.abc import Sequence, Mapping, Set
from typing import final


LOG_FORMAT = "%(name)s.%(module)s.%(funcName)s: %(message)s"

log = logging.getLogger("cardinals")
debug = log.debug


def enable_logging(level=logging.DEBUG):
    """
    Install a basic logging configuration showing the package traces.

    Registration and parsing emit debug records on the "cardinals" logger;
    they are invisible until the host (or this helper) configures logging.
    """
    logging.basicConfig(level=level, format=LOG_FORMAT)


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    The value slot of an argument may legitimately hold None (a handler can
    return it), so "nothing stored yet" needs its own marker.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset".
    - Non-subclassable and a singleton per process.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in annotations (e.g., str | UnsetType).
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        """
        Support reversed PEP 604 unions when UnsetType appears on the right.
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values like None, 0, "" or [] are returned as-is; only Unset is
    replaced.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - rename(callable, name) -> callable, renamed in place.
    - rename(name) -> decorator applying the name to a future callable.
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _immortalize(object):
    """
    Recursively copy container values so callers cannot mutate the source.

    Strings are left alone, Unset becomes None, anything else is returned as-is.
    """
    if isinstance(object, Sequence) and not isinstance(object, str):
        return list(map(_immortalize, object))
    elif isinstance(object, Mapping):
        return dict(zip(object.keys(), map(_immortalize, object.values())))
    elif isinstance(object, Set):
        return set(map(_immortalize, object))
    else:
        return coalesce(object)


def mirror(name, /):
    """
    Define a read-only property that mirrors the private attribute "_{name}".

    Containers are copied on every read and Unset reads as None.

    Example
    - Given self._index, declare index = mirror("index") to expose it safely.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _immortalize(getattr(self, "_" + name))

    return property(getter)


@functools.cache
def ordinal(number, /):
    """
    Return a human-friendly ordinal label for a 1-based position.

    - 1..10 are rendered as words ("first"…"tenth").
    - Other numbers use numeric ordinals with correct English suffixes.
    """
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass

    # 11th, 12th, 13th (and 111th, 112th, 113th, ...)
    if 10 < number % 100 < 20:
        return f"{number}th"

    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


def isgoodname(name, /):
    """
    Tell whether a positional argument name is acceptable.

    A good name is a string that, once trimmed, starts with an ASCII letter
    followed by letters, digits, dashes or underscores. The check has no
    side effects; callers trim the stored name themselves.

    Examples
    - isgoodname("files")     -> True
    - isgoodname(" out_dir ") -> True
    - isgoodname("2nd")       -> False
    - isgoodname("")          -> False
    """
    if not isinstance(name, str):
        return False
    return re.fullmatch(r"[A-Za-z][A-Za-z0-9_-]*", name.strip()) is not None


Unset = UnsetType()
"""
Internal sentinel for "no value stored".

Notes
- Singleton: there is only one Unset instance.
- Distinct from None: equality and identity checks must not treat it as None.
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "ordinal",
    "isgoodname",
    "enable_logging",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
