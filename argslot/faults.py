"""
argslot faults (parse errors, schema errors, warnings) and rendering.

Scope
- ErrorKind: canonical, stable identifiers for every input-derived parse failure.
- ParseError: the single recorded (kind, flag/positional, token) triple of a failed
  parse. It knows how to render itself as the one-line diagnostic, either as plain
  text (plain, str()) that keeps the raw token, or as styled rich Text (__rich__).
- SchemaError / CapacityError / DuplicateNameError: programming errors raised eagerly
  while the schema is being declared.
- SchemaWarning: soft schema smells surfaced through the warnings module.

Diagnostic shape
    Error: <kind>[ for flag --<name>| for positional argument <name>][ got '<token>'][ expected {a,b,c}]

Unknown tokens are the exception: no flag or positional context exists, so the
message reports only the token ("Error: Unknown option <token>").

Styling
- The palette may be overridden by a __styles__ mapping in __main__; styles are only
  applied when the owning registry is colorful.
"""
from collections import defaultdict
from enum import IntEnum

from rich.text import Text


class ErrorKind(IntEnum):
    """
    canonical parse error kinds (stable identifiers).

    exactly one kind is recorded per failed parse; NONE means no failure happened.
    """
    NONE             = 0
    UNKNOWN          = 1
    UNKNOWN_ENUM     = 2
    NO_VALUE         = 3
    INVALID_NUMBER   = 4
    INTEGER_OVERFLOW = 5
    ALLOC            = 6

    @property
    def title(self):
        return _TITLES[self]


_TITLES = {
    ErrorKind.NONE: "No errors parsing arguments",
    ErrorKind.UNKNOWN: "Unknown option",
    ErrorKind.UNKNOWN_ENUM: "Unknown enum option",
    ErrorKind.NO_VALUE: "No value provided",
    ErrorKind.INVALID_NUMBER: "Invalid number",
    ErrorKind.INTEGER_OVERFLOW: "Integer overflow",
    ErrorKind.ALLOC: "Allocating",
}


def styles():
    """
    resolve the diagnostic palette, honoring a __styles__ override in __main__.
    """
    return defaultdict(str, {
        "error-label": "bold #FF4DA6",  # friendly pinky "Error:"
        "error-kind": "bold #E6E6F0",  # near-white kind title
        "error-target": "bold #00E5FF",  # neon cyan flag/positional name
        "error-token": "#FFD600",  # amber offending token
        "error-choice": "bold #9CE19C",  # gentle green expected options
    } | getattr(__import__("__main__"), "__styles__", {}))


class ParseError(Exception):
    """
    A failed parse: what went wrong, on which argument, with which token.

    Attributes
    - kind: ErrorKind
    - flag: the offending Flag record, or None
    - positional: the offending Positional record, or None
    - token: the offending raw argv string, or None (e.g. a missing value)
    """

    def __init__(self, kind, /, *, flag=None, positional=None, token=None, colorful=False):
        if not isinstance(kind, ErrorKind):
            raise TypeError("ParseError() argument must be an error kind")
        self.kind = kind
        self.flag = flag
        self.positional = positional
        self.token = token
        self.colorful = colorful
        super().__init__(kind, flag, positional, token)

    @property
    def argument(self):
        return self.flag if self.flag is not None else self.positional

    def fragments(self):
        """
        yield the diagnostic as (text, style name) pairs, raw tokens untouched.
        """
        if self.kind is ErrorKind.NONE:
            yield self.kind.title + "\n", None
            return

        yield "Error:", "error-label"
        yield " ", None
        yield self.kind.title, "error-kind"

        if self.kind is ErrorKind.UNKNOWN:
            yield " ", None
            yield str(self.token), "error-token"
            yield "\n", None
            return

        if self.flag is not None:
            yield " for flag ", None
            yield self.flag.display_name, "error-target"
        elif self.positional is not None:
            yield " for positional argument ", None
            yield self.positional.name, "error-target"

        if self.token is not None:
            yield " got '", None
            yield self.token, "error-token"
            yield "'", None

        argument = self.argument
        if argument is not None and argument.options is not None:
            yield " expected {", None
            for index, option in enumerate(option for option in argument.options if option is not None):
                if index:
                    yield ",", None
                yield option, "error-choice"
            yield "}", None

        yield "\n", None

    @property
    def plain(self):
        """
        the diagnostic line (trailing newline included) exactly as typed by the user.
        """
        return "".join(fragment for fragment, _ in self.fragments())

    def __rich__(self):
        palette = styles()
        text = Text()
        for fragment, name in self.fragments():
            text.append(fragment, palette[name] if self.colorful and name else "")
        return text

    def __str__(self):
        return self.plain.rstrip("\n")

    def __repr__(self):
        return "%s(%s, flag=%r, positional=%r, token=%r)" % (
            type(self).__name__, self.kind.name, self.flag, self.positional, self.token
        )


class SchemaError(ValueError):
    """
    Misuse of the declaration API (a bug in the declaring program).
    """


class CapacityError(SchemaError):
    """
    A flag, positional or command table is full.
    """


class DuplicateNameError(SchemaError):
    """
    A name is declared twice in the same command scope.
    """


class SchemaWarning(UserWarning):
    """
    A schema that is valid but probably not what was intended.
    """


__all__ = (
    "ErrorKind",
    "ParseError",
    "SchemaError",
    "CapacityError",
    "DuplicateNameError",
    "SchemaWarning",
)
