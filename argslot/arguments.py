r"""
argslot argument records: flags and positionals.

Overview
- Flag: a named argument introduced by `-short` and/or `--long`. Bool flags take no
  value; every other type consumes the next argv token.
- Positional: an unnamed argument bound by declaration order within its command.

Both records are created by the registry at declaration time and live for the
rest of the program. Their public fields are read-only views (see ArgumentType);
the parsed value lives in the `slot` handed back to the declaring code.

Metadata (sanitized on construction)
- Shared
  • type: ValueType
  • desc: str | None (help text, trimmed; empty strings become None)
  • options: tuple[str | None, ...] | None (enum option list, None entries are skipped)
  • command: owning Command
- Flag only
  • short_name / long_name: bare names (no leading dashes). At least one must be
    present; an empty string counts as absent.
  • meta_var: str | None (placeholder shown in help)
- Positional only
  • name: mandatory bare name
  • required: Required
  • seen: set by the engine when a value is bound

Validation highlights
- Names must not start with '-' and must not contain whitespace.
- Enum option lists must not be empty and must hold strings (or None holes).
"""
import functools
import operator
import re

from .faults import SchemaError
from .utils import *
from .values import ValueType, Required


class ArgumentType(type):
    """
    Metaclass wiring read-only properties and stable representations.

    - Every name listed in __introspectable__ becomes a mirror() property over the
      private "_{name}" backing field.
    - __typename__ is derived from the class name (camel-case split with hyphens).
    - __repr__/__rich_repr__ walk __displayable__ (or __introspectable__).
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        namespace = namespace | {
            "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
        } | {
            field: mirror(field) for field in namespace.get("__introspectable__", ())
        }
        self = super().__new__(cls, name, bases, namespace, **options)

        @rename("__repr__")
        def __repr__(self):
            return "%s(%s)" % (
                type(self).__typename__,
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__())),
            )
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for field in nullify(type(self).__displayable__, type(self).__introspectable__):
                yield field, getattr(self, field)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_name(cls, name, /, *, optional=False):
    """
    Internal: validate a bare argument name and normalize "absent" to None.
    """
    if name is None or name is Unset:
        if optional:
            return None
        raise SchemaError(f"{cls.__typename__} must have a name")
    if not isinstance(name, str):
        raise TypeError(f"{cls.__typename__} names must be strings")
    if not name:
        if optional:
            return None
        raise SchemaError(f"{cls.__typename__} name cannot be empty")
    if name.startswith("-"):
        raise SchemaError(f"{cls.__typename__} name {name!r} must not start with '-' (dashes are added when parsing)")
    if re.search(r"\s", name):
        raise SchemaError(f"{cls.__typename__} name {name!r} must not contain whitespace")
    return name


def _sanitize_desc(cls, desc, /):
    if desc is None or desc is Unset:
        return None
    if not isinstance(desc, str):
        raise TypeError(f"{cls.__typename__} 'desc' must be a string")
    return desc.strip() or None


def _sanitize_options(cls, type, options, /):
    if type is not ValueType.ENUM:
        if options is not None:
            raise SchemaError(f"only enum {cls.__typename__}s accept options")
        return None
    if isinstance(options, str):
        raise TypeError(f"{cls.__typename__} options must be a sequence of strings, not a string")
    try:
        options = tuple(options)
    except TypeError:
        raise TypeError(f"{cls.__typename__} options must be a sequence of strings") from None
    if not options:
        raise SchemaError(f"enum {cls.__typename__} must have at least one option")
    if not all(option is None or isinstance(option, str) for option in options):
        raise TypeError(f"{cls.__typename__} options must be strings (or None for unused entries)")
    if all(option is None for option in options):
        raise SchemaError(f"enum {cls.__typename__} must have at least one usable option")
    return options


class Flag(metaclass=ArgumentType):
    """
    Named argument record (`-s`, `--long`).
    """
    __introspectable__ = (
        "type",
        "short_name",
        "long_name",
        "meta_var",
        "desc",
        "options",
        "command",
    )
    __displayable__ = (
        "type",
        "short_name",
        "long_name",
        "meta_var",
        "desc",
        "options",
    )
    __slots__ = tuple("_" + field for field in __introspectable__) + ("_slot",)

    def __init__(self, type, short_name, long_name, slot, /, *, command, meta_var=None, desc=None, options=None):
        self._type = ValueType(type)
        self._short_name = _sanitize_name(Flag, short_name, optional=True)
        self._long_name = _sanitize_name(Flag, long_name, optional=True)
        if self._short_name is None and self._long_name is None:
            raise SchemaError("flag must have a short name, a long name, or both")
        if meta_var is not None and meta_var is not Unset and not isinstance(meta_var, str):
            raise TypeError("flag 'meta_var' must be a string")
        self._meta_var = nullify(meta_var) or None
        self._desc = _sanitize_desc(Flag, desc)
        self._options = _sanitize_options(Flag, self._type, options)
        self._command = command
        self._slot = slot

    @property
    def slot(self):
        return self._slot

    @property
    def spellings(self):
        """
        the argv spellings that select this flag, short first.
        """
        spellings = []
        if self._short_name is not None:
            spellings.append("-" + self._short_name)
        if self._long_name is not None:
            spellings.append("--" + self._long_name)
        return tuple(spellings)

    @property
    def display_name(self):
        """
        the spelling used in diagnostics (long preferred).
        """
        if self._long_name is not None:
            return "--" + self._long_name
        return "-" + self._short_name

    @property
    def takes_value(self):
        return self._type is not ValueType.BOOL


class Positional(metaclass=ArgumentType):
    """
    Positional argument record, bound by declaration order.
    """
    __introspectable__ = (
        "type",
        "name",
        "desc",
        "required",
        "options",
        "command",
    )
    __displayable__ = (
        "type",
        "name",
        "desc",
        "required",
        "options",
        "seen",
    )
    __slots__ = tuple("_" + field for field in __introspectable__) + ("_slot", "seen")

    def __init__(self, type, name, slot, /, *, command, required=Required.OPTIONAL, desc=None, options=None):
        self._type = ValueType(type)
        if self._type is ValueType.BOOL:
            raise SchemaError("positional arguments cannot be booleans")
        self._name = _sanitize_name(Positional, name)
        self._desc = _sanitize_desc(Positional, desc)
        self._required = Required.coerce(required)
        self._options = _sanitize_options(Positional, self._type, options)
        self._command = command
        self._slot = slot
        self.seen = False

    @property
    def slot(self):
        return self._slot

    @property
    def accepts(self):
        """
        whether the engine may bind another token to this positional.

        list positionals absorb every remaining value, so they are never exhausted.
        """
        return self._type is ValueType.LIST or not self.seen


__all__ = (
    "Flag",
    "Positional",
)
