r"""
Cardinals positional argument definitions.

Overview
- Argument: one positional argument definition plus its value slot.
  • Identity: name (unique in its container), show_name (display alias),
    description (help text consumed elsewhere).
  • Shape: required/optional, single or arrayed (absorbs every remaining token).
  • Hooks: validator (may transform or reject a raw value while binding) and
    handler (transforms the value when it is stored and again on every read).
  • Index: 0-based position, assigned once by the owning container.

- argument(...): factory building an Argument (same signature).
- parse_rule(rule): split a "description;required;default" rule string.

Lifecycle
- Construction never validates; a definition can be built incrementally.
- Configuration is fluent: with_value / with_validator / with_handler /
  set_arrayed / with_fn all return the same Argument.
- finalize() trims and validates the name and defaults show_name; the
  container calls it on registration.
- Once the owning container has parsed, the definition is sealed: every
  configuration call raises SealedArgumentError. The value slot stays
  readable forever.

Value shapes
- bind_value() accepts a single string or a sequence of strings (arrayed).
- Hooks are the extension point; they may turn the value into anything.
- Typed accessors (string/integer/floating/boolean/array/split) interpret the
  value best-effort and never raise on content.

Quick example:
    >>> files = argument("files", "input files", True, True)
    >>> files.with_handler(lambda paths: sorted(paths)).finalize()
    argument(name='files', show_name='files', required=True, arrayed=True, index=None)
"""
import functools
import operator
import re
from collections.abc import Sequence

from .faults import *
from .utils import *
from .utils import debug


class ArgumentType(type):
    """
    Metaclass that makes argument definitions introspectable.

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property
      mirroring the private "_{name}" field (see mirror()).
    - Provide stable __repr__/__rich_repr__ implementations; __displayable__
      (if set) narrows the fields shown, otherwise __introspectable__ is used.
    - Derive __typename__ from the class name ("Argument" -> "argument") for
      messages and representations.
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
            - argument(name='file', show_name='file', required=True, ...)
            """
            fields = ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            return f"{type(self).__typename__}({fields})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers such as rich.
            """
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


_TRUTHY = frozenset({"1", "on", "yes", "true", "required"})


def _checkhook(cls, kind, hook):
    if hook is not None and not callable(hook):
        raise TypeError(f"{cls.__typename__} {kind!r} must be callable")


class Argument(metaclass=ArgumentType):
    """
    A positional argument definition and its value slot.

    Parameters
    - name: str
      Identifier unique within the owning container. Validated by finalize().
    - description: str
      Free text for help renderers.
    - required: bool
      Omitting a required argument is a parse error. Required arguments must
      be registered before any optional one.
    - arrayed: bool
      Consume every remaining token as a list. At most one per container and
      always the last registered.
    - value: Any (keyword-only)
      Default stored in the slot until a token is bound.
    - show_name: str (keyword-only)
      Display alias; defaults to name on finalize().
    - validator: Callable[[Any], Any] | None (keyword-only)
      Called with the raw value while binding; its return value replaces the
      raw value, any exception it raises rejects the value.
    - handler: Callable[[Any], Any] | None (keyword-only)
      Applied to the value before storing it and again by get_value().

    Properties
    - The names in __introspectable__ are exposed as read-only attributes.
      index is None until the argument is registered.
    """

    __introspectable__ = (
        "name",
        "show_name",
        "description",
        "required",
        "arrayed",
        "index",
        "validator",
        "handler",
    )

    __displayable__ = (
        "name",
        "show_name",
        "required",
        "arrayed",
        "index",
    )

    def __init__(
            self,
            name,
            /,
            description="",
            required=False,
            arrayed=False,
            *,
            value=Unset,
            show_name=Unset,
            validator=None,
            handler=None
    ):
        if not isinstance(description, str):
            raise TypeError(f"{type(self).__typename__} 'description' must be a string")
        _checkhook(type(self), "validator", validator)
        _checkhook(type(self), "handler", handler)

        self._name = name
        self._description = description
        self._show_name = show_name
        self._required = bool(required)
        self._arrayed = bool(arrayed)
        self._index = Unset
        self._value = value
        self._validator = validator
        self._handler = handler
        self._sealed = False

    def _unsealed(self, operation):
        if self._sealed:
            raise SealedArgumentError(
                f"cannot call {operation}() on argument {self._name!r} after its command was parsed",
                title="sealed argument",
                code=FaultCode.SEALED_ARGUMENT,
                argument=self,
                hint="configure arguments before parsing",
                docs=getdoc(FaultCode.SEALED_ARGUMENT),
            )
        return self

    def with_value(self, value, /):
        """
        Store a default value in the slot (hooks are not applied).
        """
        self._unsealed("with_value")._value = value
        return self

    def with_validator(self, validator, /):
        _checkhook(type(self), "validator", validator)
        self._unsealed("with_validator")._validator = validator
        return self

    def with_handler(self, handler, /):
        _checkhook(type(self), "handler", handler)
        self._unsealed("with_handler")._handler = handler
        return self

    def set_arrayed(self):
        """
        Make this argument consume every remaining token.

        Raises
        - SealedArgumentError: once registered, the container has already
          checked the argument's shape.
        """
        self._unsealed("set_arrayed")
        if self._index is not Unset and not self._arrayed:
            raise SealedArgumentError(
                f"cannot make argument {self._name!r} arrayed after it was registered",
                title="sealed argument",
                code=FaultCode.SEALED_ARGUMENT,
                argument=self,
                hint="pass arrayed=True when declaring the argument",
                docs=getdoc(FaultCode.SEALED_ARGUMENT),
            )
        self._arrayed = True
        return self

    def with_fn(self, fn, /):
        """
        Run a configuration callback on this argument; None is a no-op.

        Example
        - argument("port").with_fn(lambda x: x.with_value("8080"))
        """
        self._unsealed("with_fn")
        if fn is not None:
            fn(self)
        return self

    def finalize(self):
        """
        Trim and validate the name, then default show_name to it.

        Raises
        - TypeError: when the name is not a string.
        - EmptyArgumentNameError: when the name is empty after trimming.
        - InvalidArgumentNameError: when the name is not a letter followed by
          letters, digits, dashes or underscores.

        Calling it again is harmless.
        """
        if not isinstance(self._name, str):
            raise TypeError(f"{type(self).__typename__} name must be a string")
        elif not (name := self._name.strip()):
            raise EmptyArgumentNameError(
                "the command argument name cannot be empty",
                title="empty argument name",
                code=FaultCode.EMPTY_ARGUMENT_NAME,
                argument=self,
                hint="give every positional argument a name",
                docs=getdoc(FaultCode.EMPTY_ARGUMENT_NAME),
            )
        elif not isgoodname(name):
            raise InvalidArgumentNameError(
                f"the argument name {name!r} is invalid",
                title="invalid argument name",
                code=FaultCode.INVALID_ARGUMENT_NAME,
                argument=self,
                hint="start with a letter and use only letters, digits, '-' or '_'",
                docs=getdoc(FaultCode.INVALID_ARGUMENT_NAME),
            )

        self._name = name
        if not self._show_name:
            self._show_name = name
        return self

    @property
    def help_name(self):
        """
        Display label for usage lines: show_name, plus "..." when arrayed.
        """
        name = coalesce(self._show_name) or self._name
        return name + "..." if self._arrayed else name

    @property
    def position(self):
        """
        1-based position, or None while unregistered.
        """
        return None if self._index is Unset else self._index + 1

    def bind_value(self, value, /):
        """
        Validate, transform and store a raw value.

        Steps
        1. The validator (if any) is called with the raw value; its result
           replaces the value. Any exception it raises is wrapped into an
           InvalidArgumentValueError and the slot is left untouched.
        2. The handler (if any) is applied to the value.
        3. The result is stored in the slot.

        Parameters
        - value: str | Sequence[str]
          One token, or the tail of tokens for an arrayed argument.
        """
        if isinstance(value, Sequence) and not isinstance(value, str):
            if not all(isinstance(token, str) for token in value):
                raise TypeError(f"{type(self).__typename__} tokens must be strings")
            value = list(value)
        elif not isinstance(value, str):
            raise TypeError(f"{type(self).__typename__} value must be a string or a sequence of strings")

        if self._validator is not None:
            try:
                value = self._validator(value)
            except Exception as exception:
                where = f" at {ordinal(self.position)} position" if self.position else ""
                raise InvalidArgumentValueError(
                    f"invalid value for the argument {self.help_name!r}{where}: {exception}",
                    title="invalid argument value",
                    code=FaultCode.INVALID_ARGUMENT_VALUE,
                    argument=self,
                    position=self.position,
                    exception=exception,
                    hint="check the value given for %s" % self.help_name,
                    docs=getdoc(FaultCode.INVALID_ARGUMENT_VALUE),
                ) from exception

        if self._handler is not None:
            value = self._handler(value)

        debug("Bound %r to %r", value, self._name)
        self._value = value

    def get_value(self):
        """
        Return the stored value, re-applying the handler on every read.

        An empty slot reads as None and the handler is not called for it.
        """
        if self._value is Unset:
            return None
        if self._handler is not None:
            return self._handler(self._value)
        return self._value

    value = property(get_value)

    def has_value(self):
        return self._value is not Unset

    def reset(self):
        """
        Empty the value slot (the definition itself is unchanged).
        """
        self._value = Unset

    def string(self):
        match value := self.get_value():
            case None:
                return ""
            case str():
                return value
            case Sequence():
                return ",".join(map(str, value))
            case _:
                return str(value)

    def integer(self):
        match value := self.get_value():
            case bool() | int() | float():
                try:
                    return int(value)
                except (ValueError, OverflowError):
                    return 0
            case str():
                try:
                    return int(value.strip())
                except ValueError:
                    return 0
            case _:
                return 0

    def floating(self):
        match value := self.get_value():
            case bool() | int() | float():
                return float(value)
            case str():
                try:
                    return float(value.strip())
                except ValueError:
                    return 0.0
            case _:
                return 0.0

    def boolean(self):
        match value := self.get_value():
            case bool():
                return value
            case int() | float():
                return value != 0
            case str():
                return value.strip().lower() in _TRUTHY - {"required"}
            case _:
                return False

    def array(self):
        """
        The value as a list of strings.

        A single string becomes a one-item list and an empty slot an empty list.
        """
        match value := self.get_value():
            case None:
                return []
            case str():
                return [value]
            case Sequence():
                return list(map(str, value))
            case _:
                return [str(value)]

    strings = array

    def split(self, separator=",", /):
        """
        Split a single string value on separator, dropping blank parts.

        Sequence values are returned like array().
        """
        if isinstance(value := self.get_value(), str):
            return [part.strip() for part in value.split(separator) if part.strip()]
        return self.array()


def argument(name, /, description="", required=False, arrayed=False, **options):
    """
    Build an Argument; keyword options are forwarded unchanged.

    Usage:
        argument("name", "description")
        argument("name", "description", True)        # required
        argument("names", "description", True, True)  # required and arrayed
    """
    return Argument(name, description, required, arrayed, **options)


def parse_rule(rule, /):
    """
    Split a simple rule string into its description, required flag and default.

    Format
    - "description;required;default", every field optional and trimmed.
    - required is truthy for "required", "true", "yes", "on" or "1".
    - an empty default is reported as Unset.

    Examples
    - parse_rule("input file;required") -> ("input file", True, Unset)
    - parse_rule("output;false;out.txt") -> ("output", False, "out.txt")
    """
    if not isinstance(rule, str):
        raise TypeError("parse_rule() argument must be a string")

    fields = [field.strip() for field in rule.split(";", 2)]
    fields += [""] * (3 - len(fields))
    description, required, default = fields
    return description, required.lower() in _TRUTHY, default or Unset


__all__ = (
    "Argument",
    "argument",
    "parse_rule",
)
