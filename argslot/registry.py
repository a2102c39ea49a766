"""
argslot schema registry: declare the command-line interface, parse argv, report.

What this module provides
- Registry: holds the flag, positional and command tables, the current command
  context, the residual argv and the recorded parse error. Every declaration
  returns a stable handle (a typed slot) that the parser fills in later.
- A process-wide default registry with module-level functions mirroring the
  Registry methods (init, command, flag_*, pos_*, name_of, free_list, parse_args,
  print_usage, print_error, format_usage, format_error).

Quick start
    import argslot

    argslot.init(["prog", "-v", "42"], desc="demo")
    verbose = argslot.flag_bool("v", "verbose", desc="enable verbose output")
    retries = argslot.flag_uint("r", "retries", 3, meta_var="N", desc="number of retries")
    id = argslot.pos_uint("id", required=True, desc="the ID to process")

    if not argslot.parse_args():
        argslot.print_error()
        raise SystemExit(1)
    print(verbose.value, retries.value, id.value)  # True 3 42

Declaration order matters: positionals bind in the order they were declared within
their command, and every help section lists entities in declaration order.

Misuse of the declaration API (full tables, duplicate names, a flag without names,
a positional after a list positional, declaring before init()) raises SchemaError
or one of its subclasses immediately.
"""
import sys
import warnings
from collections import deque

from .arguments import Flag, Positional
from .commands import Command
from .engine import Parser
from .faults import SchemaError, CapacityError, DuplicateNameError, SchemaWarning
from .usage import usage, diagnostic, render
from .utils import *
from .values import *

FLAG_CAPACITY = 128
POSITIONAL_CAPACITY = 128
COMMAND_CAPACITY = 64
PRINT_WIDTH = 24


def _positive(name, value, /):
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"registry {name!r} must be an integer")
    if value < 1:
        raise ValueError(f"registry {name!r} must be a positive integer")
    return value


def _materialize(options, /):
    # strings and non-iterables are rejected later by the record sanitizer
    if isinstance(options, str) or not hasattr(options, "__iter__"):
        return options
    return tuple(options)


class Registry:
    """
    Declaration tables plus parse state for one command-line interface.

    Knobs (keyword-only)
    - flag_capacity: maximum number of flags across all commands (default 128).
    - positional_capacity: maximum number of positionals across all commands (default 128).
    - command_capacity: maximum number of commands, root included (default 64).
    - print_width: column at which help descriptions start (default 24).
    - list_capacity: initial backing capacity of every list slot (default 6).
    - colorful: style usage and diagnostics with the rich palette (default False).

    Lifecycle
    - init(argv) resets the tables, records argv and creates the root command.
    - declarations (command, flag_*, pos_*) fill the tables.
    - parse_args() consumes argv once and fills the slots.
    - print_usage()/print_error() report on the current command context.
    """

    def __init__(
            self,
            *,
            flag_capacity=FLAG_CAPACITY,
            positional_capacity=POSITIONAL_CAPACITY,
            command_capacity=COMMAND_CAPACITY,
            print_width=PRINT_WIDTH,
            list_capacity=LIST_CAPACITY,
            colorful=False
    ):
        self.flag_capacity = _positive("flag_capacity", flag_capacity)
        self.positional_capacity = _positive("positional_capacity", positional_capacity)
        self.command_capacity = _positive("command_capacity", command_capacity)
        self.print_width = _positive("print_width", print_width)
        self.list_capacity = _positive("list_capacity", list_capacity)
        self.colorful = bool(colorful)
        self._flags = []
        self._positionals = []
        self._commands = []
        self._root = None
        self._context = None
        self._rest = deque()
        self._error = None

    # ── Introspection ───────────────────────────────────────────────────────

    flags = mirror("flags")
    positionals = mirror("positionals")
    commands = mirror("commands")
    root = mirror("root")
    context = mirror("context")
    error = mirror("error")
    rest = mirror("rest")

    def __repr__(self):
        return "Registry(root=%r, flags=%d, positionals=%d, commands=%d)" % (
            getattr(self._root, "name", None), len(self._flags), len(self._positionals), len(self._commands)
        )

    # ── Declaration ─────────────────────────────────────────────────────────

    def init(self, argv=Unset, /, *, desc=Unset, help=True):
        """
        Reset the registry and create the root command from argv[0].

        Parameters
        - argv: Sequence[str] | Unset
          the full argument vector, program name first (sys.argv when Unset).
        - desc: str | Unset
          program description shown under the synopsis.
        - help: bool
          attach a `-h/--help` flag to the root command.

        Returns
        - Command: the root command.
        """
        argv = list(nullify(argv, sys.argv))
        if not argv:
            raise SchemaError("init() argv must contain at least the program name")
        if not all(isinstance(token, str) for token in argv):
            raise TypeError("init() argv must be a sequence of strings")

        self._flags = []
        self._positionals = []
        self._commands = []
        self._error = None
        self._rest = deque(argv)
        self._root = None
        self._context = None

        self._root = self._new_command(argv[0], None, nullify(desc), help)
        self._context = self._root
        return self._root

    def command(self, name, /, *, desc=Unset, help=True, command=Unset):
        """
        Declare a sub-command under `command` (the root when Unset).

        Returns
        - BoolSlot: the command's `selected` bit, also usable as a `command=` handle
          for declarations owned by this sub-command.
        """
        parent = self._resolve(command)
        if not isinstance(name, str):
            raise TypeError("command name must be a string")
        for sibling in self._commands:
            if sibling.parent is parent and sibling.name == name:
                raise DuplicateNameError(f"command {parent.name!r} already has a sub-command named {name!r}")
        return self._new_command(name, parent, nullify(desc), help).slot

    def flag_bool(self, short_name, long_name=None, /, *, meta_var=Unset, desc=Unset, command=Unset):
        """
        Declare a presence-only flag; its slot becomes True when the flag appears.
        """
        return self._new_flag(ValueType.BOOL, short_name, long_name, BoolSlot(False),
                              meta_var=meta_var, desc=desc, command=command)

    def flag_uint(self, short_name, long_name=None, default=0, /, *, meta_var=Unset, desc=Unset, command=Unset):
        """
        Declare a flag taking a base-10 unsigned 64-bit integer value.
        """
        return self._new_flag(ValueType.UINT, short_name, long_name, UintSlot(default),
                              meta_var=meta_var, desc=desc, command=command)

    def flag_str(self, short_name, long_name=None, default=None, /, *, meta_var=Unset, desc=Unset, command=Unset):
        """
        Declare a flag taking a string value (the argv token itself).
        """
        return self._new_flag(ValueType.STR, short_name, long_name, StrSlot(default),
                              meta_var=meta_var, desc=desc, command=command)

    def flag_enum(self, short_name, long_name, options, default=0, /, *, meta_var=Unset, desc=Unset, command=Unset):
        """
        Declare a flag whose value must be one of `options`; the slot holds the index.

        The usage screen shows `meta_var` when given, the `{a,b,c}` choices otherwise.
        """
        options = _materialize(options)
        return self._new_flag(ValueType.ENUM, short_name, long_name, EnumSlot(options, default),
                              meta_var=meta_var, desc=desc, command=command, options=options)

    def flag_list(self, short_name, long_name=None, /, *, meta_var=Unset, desc=Unset, command=Unset):
        """
        Declare a repeatable flag; every occurrence appends its value to the list.
        """
        return self._new_flag(ValueType.LIST, short_name, long_name, ArgList(self.list_capacity),
                              meta_var=meta_var, desc=desc, command=command)

    def pos_uint(self, name, default=0, /, *, required=Required.OPTIONAL, desc=Unset, command=Unset):
        """
        Declare a positional unsigned integer.
        """
        return self._new_positional(ValueType.UINT, name, UintSlot(default),
                                    required=required, desc=desc, command=command)

    def pos_str(self, name, default=None, /, *, required=Required.OPTIONAL, desc=Unset, command=Unset):
        """
        Declare a positional string.
        """
        return self._new_positional(ValueType.STR, name, StrSlot(default),
                                    required=required, desc=desc, command=command)

    def pos_enum(self, name, options, default=0, /, *, required=Required.OPTIONAL, desc=Unset, command=Unset):
        """
        Declare a positional restricted to `options`; the slot holds the index.
        """
        options = _materialize(options)
        return self._new_positional(ValueType.ENUM, name, EnumSlot(options, default),
                                    required=required, desc=desc, command=command, options=options)

    def pos_list(self, name, /, *, required=Required.OPTIONAL, desc=Unset, command=Unset):
        """
        Declare a positional that absorbs every remaining value of its command.

        It must be the last positional of its command; declaring another positional
        after it raises SchemaError.
        """
        return self._new_positional(ValueType.LIST, name, ArgList(self.list_capacity),
                                    required=required, desc=desc, command=command)

    def name_of(self, slot, /):
        """
        Reverse lookup: the declared name behind a slot handle.

        Flags answer their long name (falling back to the short one), positionals
        their name. Unknown handles answer None.
        """
        for flag in self._flags:
            if flag.slot is slot:
                return flag.long_name if flag.long_name is not None else flag.short_name
        for positional in self._positionals:
            if positional.slot is slot:
                return positional.name
        return None

    @staticmethod
    def free_list(list, /):
        """
        Release a list slot's backing buffer (the strings it aliased are untouched).
        """
        if not isinstance(list, ArgList):
            raise TypeError("free_list() argument must be an argument list")
        list.free()

    # ── Parsing ─────────────────────────────────────────────────────────────

    def parse_args(self):
        """
        Consume the residual argv and fill every slot.

        Returns
        - True on success.
        - False on the first input error; the error is kept in `error` for
          print_error()/format_error().

        The context's help flag prints usage to standard output and exits with
        status 0 before any positional enforcement.
        """
        self._require_root()
        return Parser(self).run()

    def shift(self):
        """
        pop the next residual argv token, or None once argv is exhausted.
        """
        return self._rest.popleft() if self._rest else None

    def select(self, command, /):
        """
        mark `command` selected and make it the command context.
        """
        if command not in self._commands:
            raise SchemaError("select() argument must be a command of this registry")
        command.slot.value = True
        self._context = command

    def _record(self, error, /):
        self._error = error

    # ── Reporting ───────────────────────────────────────────────────────────

    def format_usage(self):
        """
        Return the usage screen of the current command context as plain text.
        """
        self._require_root()
        return usage(self).plain

    def print_usage(self, file=None, /):
        """
        Print the usage screen to `file` (standard output by default).
        """
        self._require_root()
        render(usage(self), file, colorful=self.colorful)

    def format_error(self):
        """
        Return the one-line diagnostic of the recorded error (with trailing newline).
        """
        return diagnostic(self).plain

    def print_error(self, file=None, /):
        """
        Print the one-line diagnostic to `file` (standard error by default).
        """
        render(diagnostic(self), file, colorful=self.colorful, stderr=True)

    # ── Internals ───────────────────────────────────────────────────────────

    def _require_root(self):
        if self._root is None:
            raise SchemaError("init() must be called before declaring or parsing arguments")

    def _resolve(self, command):
        """
        map a `command=` handle (Unset, a selected-bit slot or a Command) to its Command.
        """
        if isinstance(command, Command):
            if command not in self._commands:
                raise SchemaError(f"command {command.name!r} does not belong to this registry")
            return command
        self._require_root()
        if command is Unset or command is None:
            return self._root
        if isinstance(command, BoolSlot):
            for candidate in self._commands:
                if candidate.slot is command:
                    return candidate
            raise SchemaError("'command' handle does not belong to any declared command")
        raise TypeError("'command' must be a command handle returned by command()")

    def _new_command(self, name, parent, desc, help):
        if len(self._commands) >= self.command_capacity:
            raise CapacityError("command capacity (%d) exhausted" % self.command_capacity)
        command = Command(name, parent=parent, desc=desc)
        self._commands.append(command)
        if parent is not None:
            parent._count("command")
        if help:
            command._attach_help(self._new_flag(
                ValueType.BOOL, "h", "help", BoolSlot(False),
                desc="show this help message and exit", command=command
            ))
        return command

    def _new_flag(self, type, short_name, long_name, slot, /, *, meta_var=Unset, desc=Unset, command=Unset, options=None):
        owner = self._resolve(command)
        if len(self._flags) >= self.flag_capacity:
            raise CapacityError("flag capacity (%d) exhausted" % self.flag_capacity)
        flag = Flag(type, short_name, long_name, slot,
                    command=owner, meta_var=meta_var, desc=desc, options=options)
        for other in self._flags:
            if other.command is not owner:
                continue
            if flag.short_name is not None and other.short_name == flag.short_name:
                raise DuplicateNameError(f"command {owner.name!r} already has a flag '-{flag.short_name}'")
            if flag.long_name is not None and other.long_name == flag.long_name:
                raise DuplicateNameError(f"command {owner.name!r} already has a flag '--{flag.long_name}'")
        self._flags.append(flag)
        owner._count("flag")
        return slot

    def _new_positional(self, type, name, slot, /, *, required=Required.OPTIONAL, desc=Unset, command=Unset, options=None):
        owner = self._resolve(command)
        if len(self._positionals) >= self.positional_capacity:
            raise CapacityError("positional capacity (%d) exhausted" % self.positional_capacity)
        positional = Positional(type, name, slot,
                                command=owner, required=required, desc=desc, options=options)
        siblings = [other for other in self._positionals if other.command is owner]
        for other in siblings:
            if other.name == positional.name:
                raise DuplicateNameError(f"command {owner.name!r} already has a positional {positional.name!r}")
            if other.type is ValueType.LIST:
                raise SchemaError(f"positional {positional.name!r} cannot follow the list positional {other.name!r}")
        if positional.required.enforced and any(not other.required.enforced for other in siblings):
            warnings.warn(
                f"required positional {positional.name!r} follows an optional one in command {owner.name!r}; "
                "it is only reached after every earlier positional is filled",
                SchemaWarning,
                stacklevel=3,
            )
        self._positionals.append(positional)
        owner._count("positional")
        return slot


# Process-wide registry used by the module-level functions below.
_default = Registry()


def default_registry():
    """
    Return the process-wide registry the module-level functions operate on.
    """
    return _default


def init(argv=Unset, /, *, desc=Unset, help=True, **knobs):
    """
    Replace the process-wide registry and initialize it (see Registry.init).

    Keyword knobs (flag_capacity, print_width, colorful, ...) configure the new registry.
    """
    global _default
    _default = Registry(**knobs)
    return _default.init(argv, desc=desc, help=help)


def _delegate(name, /):
    @rename(name)
    def delegate(*args, **kwargs):
        return getattr(_default, name)(*args, **kwargs)
    delegate.__doc__ = getattr(Registry, name).__doc__
    delegate.__module__ = __name__
    return delegate


command = _delegate("command")
flag_bool = _delegate("flag_bool")
flag_uint = _delegate("flag_uint")
flag_str = _delegate("flag_str")
flag_enum = _delegate("flag_enum")
flag_list = _delegate("flag_list")
pos_uint = _delegate("pos_uint")
pos_str = _delegate("pos_str")
pos_enum = _delegate("pos_enum")
pos_list = _delegate("pos_list")
name_of = _delegate("name_of")
free_list = _delegate("free_list")
parse_args = _delegate("parse_args")
print_usage = _delegate("print_usage")
print_error = _delegate("print_error")
format_usage = _delegate("format_usage")
format_error = _delegate("format_error")


__all__ = (
    "FLAG_CAPACITY",
    "POSITIONAL_CAPACITY",
    "COMMAND_CAPACITY",
    "PRINT_WIDTH",
    "Registry",
    "default_registry",
    "init",
    "command",
    "flag_bool",
    "flag_uint",
    "flag_str",
    "flag_enum",
    "flag_list",
    "pos_uint",
    "pos_str",
    "pos_enum",
    "pos_list",
    "name_of",
    "free_list",
    "parse_args",
    "print_usage",
    "print_error",
    "format_usage",
    "format_error",
)
