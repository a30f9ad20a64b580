"""
Cardinals registry: the ordered positional arguments of one command.

What this module provides
- Arguments: an ordered registry of Argument definitions owned by a command.
  • Registration phase: add_argument() / add_arg() / add_arg_by_rule()
    validate each definition, enforce the structural invariants and assign
    its 0-based index.
  • Parse phase: parse_args(tokens) binds the positional tokens left over by
    the option parser, once, in index order.
  • Queries for help renderers and command bodies: args, arg(name),
    arg_by_index(index), has_arg(name), has_args().

Invariants (checked on registration, violations raise ConfigurationError)
- Argument names are unique within a registry.
- At most one arrayed argument exists and it is the last one registered.
- A required argument is never registered after an optional one.
- index equals registration order and never changes.

Parsing rules
- For the argument at 1-based position p, when fewer than p tokens exist,
  a required argument fails with MissingArgumentError and an optional one
  stops the pass (later optional arguments stay unset).
- An arrayed argument binds the whole tail of tokens.
- A validator rejection aborts the pass; earlier bindings are kept.
- With validate_num enabled, unconsumed tokens raise TooManyArgumentsError.

Quick start
    from cardinals import Arguments

    arguments = Arguments("greet")
    arguments.add_arg("name", "who to greet", True)
    arguments.add_arg("tags", "extra labels", False, True)
    arguments.parse_args(["alice", "a", "b"])
    arguments.arg("tags").array()  # ["a", "b"]
"""
from .arguments import Argument, parse_rule
from .faults import *
from .utils import *
from .utils import debug


class Arguments:
    """
    Ordered positional arguments for a command.

    Parameters
    - name: str
      Owning command name, used in diagnostics only.
    - validate_num: bool (keyword-only)
      Reject tokens left over after every argument was bound.

    State
    - Registration is only valid before the first parse_args() call; after
      it, registration and argument configuration raise SealedArgumentError.
    """

    def __init__(self, name="", /, *, validate_num=False):
        if not isinstance(name, str):
            raise TypeError("arguments 'name' must be a string")
        self.name = name
        self.validate_num = bool(validate_num)
        self._args = []
        self._indexes = {}
        self._has_array_arg = False
        self._has_optional_arg = False
        self._parsed = False

    def __repr__(self):
        return f"arguments(name={self.name!r}, args={self._args!r})"

    def __rich_repr__(self):
        yield "name", self.name
        yield "validate_num", self.validate_num
        yield "args", tuple(self._args)

    def __len__(self):
        return len(self._args)

    def __iter__(self):
        return iter(tuple(self._args))

    def __contains__(self, name):
        return self.has_arg(name)

    @property
    def args(self):
        """
        All definitions in index order.
        """
        return tuple(self._args)

    has_array_arg = mirror("has_array_arg")
    has_optional_arg = mirror("has_optional_arg")
    parsed = mirror("parsed")

    def add_argument(self, argument, /):
        """
        Register a definition and return it.

        Steps
        1. finalize() the name (empty/invalid names raise) and reject duplicates.
        2. Reject any argument once an arrayed one exists.
        3. Reject a required argument after an optional one.
        4. Assign index = number of registered arguments and record it.
        5. Update the optional/arrayed markers.

        Raises
        - TypeError: when argument is not an Argument.
        - ConfigurationError subclasses for every broken invariant.
        """
        if not isinstance(argument, Argument):
            raise TypeError("add_argument() argument must be an Argument")
        if self._parsed:
            raise SealedArgumentError(
                f"cannot add argument {argument.name!r} to command {self.name!r} after parsing",
                title="sealed arguments",
                code=FaultCode.SEALED_ARGUMENT,
                command=self.name,
                argument=argument,
                hint="declare every argument before parsing",
                docs=getdoc(FaultCode.SEALED_ARGUMENT),
            )

        name = argument.finalize().name
        if argument.index is not None and self._args[argument.index:argument.index + 1] != [argument]:
            raise DuplicatedArgumentError(
                f"the argument {name!r} is already registered in another command",
                title="duplicated argument",
                code=FaultCode.DUPLICATED_ARGUMENT,
                command=self.name,
                argument=argument,
                hint="build a new argument for every command",
                docs=getdoc(FaultCode.DUPLICATED_ARGUMENT),
            )
        if name in self._indexes:
            raise DuplicatedArgumentError(
                f"the argument name {name!r} already exists in command {self.name!r}",
                title="duplicated argument",
                code=FaultCode.DUPLICATED_ARGUMENT,
                command=self.name,
                argument=argument,
                hint="give every positional argument a distinct name",
                docs=getdoc(FaultCode.DUPLICATED_ARGUMENT),
            )

        if self._has_array_arg:
            raise ArgumentAfterArrayedError(
                f"have defined an array argument, you cannot add argument {name!r}",
                title="argument after arrayed",
                code=FaultCode.ARGUMENT_AFTER_ARRAYED,
                command=self.name,
                argument=argument,
                hint="the arrayed argument consumes every remaining token and must be the last one",
                docs=getdoc(FaultCode.ARGUMENT_AFTER_ARRAYED),
            )

        if argument.required and self._has_optional_arg:
            raise RequiredAfterOptionalError(
                f"required argument {name!r} cannot be defined after optional argument",
                title="required after optional",
                code=FaultCode.REQUIRED_AFTER_OPTIONAL,
                command=self.name,
                argument=argument,
                hint="declare required arguments first",
                docs=getdoc(FaultCode.REQUIRED_AFTER_OPTIONAL),
            )

        argument._index = len(self._args)
        self._indexes[name] = argument._index
        self._args.append(argument)

        if not argument.required:
            self._has_optional_arg = True
        if argument.arrayed:
            self._has_array_arg = True

        debug("Added %r to %r", argument, self.name)
        return argument

    def add_arg(self, name, /, description="", required=False, arrayed=False, **options):
        """
        Build an Argument and register it.

        Usage:
            arguments.add_arg("name", "description")
            arguments.add_arg("name", "description", True)        # required
            arguments.add_arg("names", "description", True, True)  # required and arrayed
        """
        return self.add_argument(Argument(name, description, required, arrayed, **options))

    def add_arg_by_rule(self, name, rule, /):
        """
        Register an argument described by a "description;required;default" rule.

        Example
        - arguments.add_arg_by_rule("dir", "working directory;false;.")
        """
        description, required, default = parse_rule(rule)
        argument = Argument(name, description, required)
        if default is not Unset:
            argument.with_value(default)
        return self.add_argument(argument)

    def has_arg(self, name, /):
        return name in self._indexes

    def has_args(self):
        return bool(self._indexes)

    def arg(self, name, /):
        """
        Return the definition registered under name.

        Raises
        - UnknownArgumentError: the name was never registered.
        """
        try:
            return self._args[self._indexes[name]]
        except (KeyError, TypeError):
            raise UnknownArgumentError(
                f"get not exists argument {name!r}",
                title="unknown argument",
                code=FaultCode.UNKNOWN_ARGUMENT,
                command=self.name,
                name=name,
                hint="only registered argument names can be looked up",
                docs=getdoc(FaultCode.UNKNOWN_ARGUMENT),
            ) from None

    def arg_by_index(self, index, /):
        """
        Return the definition at a 0-based index.

        Raises
        - ArgumentIndexError: index is negative or not below len(self).
        """
        if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < len(self._args):
            raise ArgumentIndexError(
                f"get not exists argument #{index}",
                title="argument index out of range",
                code=FaultCode.ARGUMENT_INDEX_OUT_OF_RANGE,
                command=self.name,
                index=index,
                hint="indices run from 0 to %d" % (len(self._args) - 1) if self._args else "no arguments are registered",
                docs=getdoc(FaultCode.ARGUMENT_INDEX_OUT_OF_RANGE),
            )
        return self._args[index]

    def parse_args(self, tokens, /):
        """
        Bind positional tokens to the registered arguments, in index order.

        behavior
        - walks the definitions once; the argument at 1-based position p binds
          tokens[p - 1], or tokens[p - 1:] when arrayed.
        - missing tokens: a required argument raises MissingArgumentError, an
          optional one ends the walk.
        - a validator rejection propagates as InvalidArgumentValueError and
          stops the walk; arguments bound before it keep their values.
        - with validate_num, unconsumed tokens raise TooManyArgumentsError.

        The registry is sealed as soon as parsing starts, whatever the outcome.
        """
        tokens = list(tokens)
        self._parsed = True
        for argument in self._args:
            argument._sealed = True

        debug("Parsing %r for %r", tokens, self.name)
        remaining = len(tokens)
        position = 0
        for argument in self._args:
            position = argument.index + 1
            if position > remaining:
                if argument.required:
                    raise MissingArgumentError(
                        f"must set value for the argument {argument.show_name!r} at {ordinal(position)} position",
                        title="missing argument",
                        code=FaultCode.MISSING_ARGUMENT,
                        command=self.name,
                        argument=argument,
                        position=position,
                        hint="provide a value for %s" % argument.help_name,
                        docs=getdoc(FaultCode.MISSING_ARGUMENT),
                    )
                break

            try:
                if argument.arrayed:
                    argument.bind_value(tokens[argument.index:])
                    # the arrayed argument absorbs every remaining token
                    remaining = position
                else:
                    argument.bind_value(tokens[argument.index])
            except InvalidArgumentValueError as fault:
                raise fault.__replace__(command=self.name) from fault.__cause__

        if self.validate_num and remaining > position:
            leftovers = tokens[position:]
            raise TooManyArgumentsError(
                f"entered too many arguments: {leftovers!r}",
                title="too many arguments",
                code=FaultCode.TOO_MANY_ARGUMENTS,
                command=self.name,
                tokens=leftovers,
                position=position + 1,
                hint="remove the extra values or quote values containing spaces",
                docs=getdoc(FaultCode.TOO_MANY_ARGUMENTS),
            )


__all__ = (
    "Arguments",
)
