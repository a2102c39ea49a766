"""
argslot parse engine: value converters and the parse state machine.

Converters
- parse_uint(token):  base-10 digits only; empty or trailing garbage → INVALID_NUMBER,
  beyond 2**64 - 1 → INTEGER_OVERFLOW.
- parse_str(token):   the token itself (aliased, never copied).
- parse_enum(token, options): index of the exact option match; None options are skipped;
  a miss → UNKNOWN_ENUM.
- parse_list_entry(token, list): append to an ArgList; a failed grow → ALLOC.
Every converter raises NO_VALUE when the token is None (argv ran out).

State machine
- argv[0] is consumed first: the root command becomes selected and is the context.
- Each further token is classified (see scanners) and acted on:
  • the context's help flag → usage on standard output, exit status 0;
  • any other flag → value parsed per type (non-bool flags shift the next token);
  • a child command → selected, becomes the new context (the context never pops);
  • a positional → bound to the next accepting positional of the context;
  • nothing → UNKNOWN with the token recorded.
- When argv is exhausted, every REQUIRED positional of the final context must be seen.

The first error aborts the parse; Parser.run() records it on the registry and
returns False.
"""
import re
import sys

from .arguments import Flag
from .faults import ErrorKind, ParseError
from .scanners import TokenKind, Match, classify
from .values import UINT_MAX, ValueType

_DIGITS = re.compile(r"[0-9]+")

# Decimal digits of UINT_MAX; longer significant digit runs always overflow.
_UINT_DIGITS = len(str(UINT_MAX))


def parse_uint(token, /):
    if token is None:
        raise ParseError(ErrorKind.NO_VALUE)
    if not _DIGITS.fullmatch(token):
        raise ParseError(ErrorKind.INVALID_NUMBER, token=token)
    if len(token.lstrip("0")) > _UINT_DIGITS:
        raise ParseError(ErrorKind.INTEGER_OVERFLOW, token=token)
    value = int(token)
    if value > UINT_MAX:
        raise ParseError(ErrorKind.INTEGER_OVERFLOW, token=token)
    return value


def parse_str(token, /):
    if token is None:
        raise ParseError(ErrorKind.NO_VALUE)
    return token


def parse_enum(token, options, /):
    if token is None:
        raise ParseError(ErrorKind.NO_VALUE)
    for index, option in enumerate(options):
        if option is None:
            continue
        if option == token:
            return index
    raise ParseError(ErrorKind.UNKNOWN_ENUM, token=token)


def parse_list_entry(token, list, /):
    if token is None:
        raise ParseError(ErrorKind.NO_VALUE)
    try:
        list.append(token)
    except MemoryError:
        raise ParseError(ErrorKind.ALLOC) from None


def convert(argument, token, /):
    """
    convert `token` per the argument's type and store it in the argument's slot.

    errors raised by the converters are tagged with the offending argument.
    """
    try:
        match argument.type:
            case ValueType.BOOL:
                argument.slot.value = True
            case ValueType.UINT:
                argument.slot.value = parse_uint(token)
            case ValueType.STR:
                argument.slot.value = parse_str(token)
            case ValueType.ENUM:
                argument.slot.value = parse_enum(token, argument.options)
            case ValueType.LIST:
                parse_list_entry(token, argument.slot)
            case _:
                raise RuntimeError("unexpected value type")
    except ParseError as error:
        if isinstance(argument, Flag):
            error.flag = argument
        else:
            error.positional = argument
        raise


class Parser:
    """
    Single-pass, left-to-right consumer of a registry's residual argv.
    """

    def __init__(self, registry, /):
        self.registry = registry

    def shift(self):
        """
        pop the next residual token, or None when argv is exhausted.
        """
        return self.registry.shift()

    def run(self):
        """
        parse the residual argv; record the first failure and report success.
        """
        registry = self.registry
        try:
            self._parse()
        except ParseError as error:
            error.colorful = registry.colorful
            registry._record(error)
            return False
        registry._record(None)
        return True

    def _parse(self):
        registry = self.registry

        # argv[0] names the program: it selects the root command.
        if self.shift() is not None:
            registry.select(registry.root)

        while (token := self.shift()) is not None:
            match classify(registry, token):
                case Match(kind=TokenKind.SHORT_FLAG | TokenKind.LONG_FLAG, target=flag):
                    if flag is registry.context.help_flag:
                        registry.print_usage(sys.stdout)
                        sys.exit(0)
                    convert(flag, self.shift() if flag.takes_value else None)
                case Match(kind=TokenKind.COMMAND, target=command):
                    registry.select(command)
                case Match(kind=TokenKind.POSITIONAL, target=positional):
                    convert(positional, token)
                    positional.seen = True
                case _:
                    raise ParseError(ErrorKind.UNKNOWN, token=token)

        for positional in registry.positionals:
            if positional.command is not registry.context:
                continue
            if positional.required.enforced and not positional.seen:
                raise ParseError(ErrorKind.NO_VALUE, positional=positional)


__all__ = (
    "parse_uint",
    "parse_str",
    "parse_enum",
    "parse_list_entry",
    "convert",
    "Parser",
)
