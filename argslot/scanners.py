"""
argslot token scanners.

Each scanner classifies one raw argv token against the registry's current
command context. They are consulted in this order by classify():

1. short flag   `-x`      remainder equals a flag's short name
2. long flag    `--name`  remainder equals a flag's long name
3. sub-command  `name`    equals a child command of the context
4. positional             the next positional of the context still accepting values

Only the context's own flags are considered; ancestors' flags are not inherited.
"""
from enum import IntEnum
from typing import NamedTuple


class TokenKind(IntEnum):
    SHORT_FLAG = 1
    LONG_FLAG = 2
    COMMAND = 3
    POSITIONAL = 4
    UNKNOWN = 5


class Match(NamedTuple):
    kind: TokenKind
    target: object = None


def short_flag(registry, token, /):
    if not token.startswith("-"):
        return None
    name = token[1:]
    for flag in registry.flags:
        if flag.command is not registry.context or flag.short_name is None:
            continue
        if flag.short_name == name:
            return flag
    return None


def long_flag(registry, token, /):
    if not token.startswith("--"):
        return None
    name = token[2:]
    for flag in registry.flags:
        # flags without a long name can never match a `--` token
        if flag.command is not registry.context or flag.long_name is None:
            continue
        if flag.long_name == name:
            return flag
    return None


def subcommand(registry, token, /):
    for command in registry.commands:
        if command.parent is registry.context and command.name == token:
            return command
    return None


def positional(registry, /):
    """
    the first positional of the context that still accepts a value, or None.
    """
    for positional in registry.positionals:
        if positional.command is registry.context and positional.accepts:
            return positional
    return None


def classify(registry, token, /):
    """
    classify a token in the registry's current context.

    returns a Match whose target is the Flag, Command or Positional to act on;
    UNKNOWN carries no target.
    """
    if (flag := short_flag(registry, token)) is not None:
        return Match(TokenKind.SHORT_FLAG, flag)
    if (flag := long_flag(registry, token)) is not None:
        return Match(TokenKind.LONG_FLAG, flag)
    if (command := subcommand(registry, token)) is not None:
        return Match(TokenKind.COMMAND, command)
    if (argument := positional(registry)) is not None:
        return Match(TokenKind.POSITIONAL, argument)
    return Match(TokenKind.UNKNOWN)


__all__ = (
    "TokenKind",
    "Match",
    "short_flag",
    "long_flag",
    "subcommand",
    "positional",
    "classify",
)
