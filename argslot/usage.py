"""
argslot usage screen and diagnostics renderer.

Layout of the usage screen (always for the registry's current command context)

    usage: prog build [command] [options] file [extra] [rest...]

    <command description>

    commands:
      <name>                <description>

    positional arguments:
      <name> {a,b}          <description>

    options:
      -s, --long META       <description>

- The synopsis lists the full command path, then `[command]` when the context has
  children, `[options]` when it has flags, then every positional in declaration order:
  `[name]` optional, `[name...]` optional list, `name` required (or appear-required),
  `name [name...]` required list.
- Each section appears only when non-empty. Descriptions start at the print width
  column; a label that reaches the column pushes its description to the next line.
- Entities without a description render their label alone.

Rendering
- usage() builds rich Text; diagnostic() returns the ParseError, whose plain text
  keeps the offending token exactly as typed.
- render() writes the plain text verbatim unless the registry is colorful; colorful
  output goes through a rich Console with the palette below (override any entry
  with a __styles__ mapping in __main__).
"""
import sys
from collections import defaultdict

from rich.console import Console
from rich.protocol import rich_cast
from rich.segment import Segments
from rich.text import Text

from .faults import ErrorKind, ParseError
from .values import Required, ValueType


def styles():
    """
    resolve the usage palette, honoring a __styles__ override in __main__.
    """
    return defaultdict(str, {
        "usage-label": "bold #00E6FF",  # CYAN → signature info color
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "usage-section": "bold #36C5F0",  # SKY-BLUE → softer than cyan
        "description-section": "italic #A3A3A3",  # Neutral gray
        "group-label": "bold #FFFFFF",  # Pure white headers
        "command-name": "bold #36C5F0",  # Sky-blue subcommands
        "positional-name": "bold #FFD600",  # AMBER for parameters
        "flag-name": "bold #22C55E",  # GREEN for flags
        "metavar": "bold #FFD600",
        "choice": "bold #FF4D94",  # MAGENTA → choices stand out
        "argument-description": "#9CA3AF",  # Muted gray
    } | getattr(__import__("__main__"), "__styles__", {}))


class _Styler:
    def __init__(self, colorful):
        self.colorful = colorful
        self.palette = styles() if colorful else None

    def __call__(self, name):
        return self.palette[name] if self.colorful else ""


def choices(options, style="", /):
    """
    render `{a,b,c}` skipping None option entries.
    """
    return Text.assemble(
        "{",
        Text(",").join(Text(option, style) for option in options if option is not None),
        "}",
    )


def synopsis(registry, styler, /):
    context = registry.context
    line = Text()
    line.append("usage", styler("usage-label")).append(":")
    for index, command in enumerate(context.path):
        line.append(" ").append(command.name, styler("program-name" if index == 0 else "usage-section"))
    if context.command_count:
        line.append(" [command]")
    if context.flag_count:
        line.append(" [options]")

    for positional in registry.positionals:
        if positional.command is not context:
            continue
        name = positional.name
        listed = positional.type is ValueType.LIST
        if positional.required is Required.OPTIONAL:
            line.append(" [%s...]" % name if listed else " [%s]" % name)
        else:
            line.append(" ").append(name, styler("positional-name"))
            if listed:
                line.append(" [%s...]" % name)
    return line.append("\n\n")


def flag_label(flag, styler, /):
    label = Text("  ")
    label.append(Text(", ").join(Text(spelling, styler("flag-name")) for spelling in flag.spellings))
    if flag.meta_var is not None:
        label.append(" ").append(flag.meta_var, styler("metavar"))
    elif flag.type is ValueType.ENUM:
        label.append(" ").append(choices(flag.options, styler("choice")))
    return label


def positional_label(positional, styler, /):
    label = Text("  ")
    label.append(positional.name, styler("positional-name"))
    if positional.type is ValueType.ENUM:
        label.append(" ").append(choices(positional.options, styler("choice")))
    return label


def command_label(command, styler, /):
    return Text("  ").append(command.name, styler("command-name"))


def entry(label, desc, width, styler, /):
    """
    one two-column row: the label, then the description starting at `width`.
    """
    row = label.copy()
    if desc is None:
        return row.append("\n")
    column = len(row)
    if column >= width:
        row.append("\n")
        column = 0
    row.append(" " * (width - column))
    return row.append(desc, styler("argument-description")).append("\n")


def usage(registry, /):
    """
    build the usage screen for the registry's current command context.
    """
    styler = _Styler(registry.colorful)
    context = registry.context
    width = registry.print_width

    text = synopsis(registry, styler)

    if context.desc:
        text.append(context.desc, styler("description-section")).append("\n\n")

    if context.command_count:
        text.append("commands", styler("group-label")).append(":\n")
        for command in registry.commands:
            if command.parent is context:
                text.append(entry(command_label(command, styler), command.desc, width, styler))
        text.append("\n")

    if context.positional_count:
        text.append("positional arguments", styler("group-label")).append(":\n")
        for positional in registry.positionals:
            if positional.command is context:
                text.append(entry(positional_label(positional, styler), positional.desc, width, styler))
        text.append("\n")

    if context.flag_count:
        text.append("options", styler("group-label")).append(":\n")
        for flag in registry.flags:
            if flag.command is context:
                text.append(entry(flag_label(flag, styler), flag.desc, width, styler))

    return text


def diagnostic(registry, /):
    """
    the recorded ParseError, or a no-error placeholder when the last parse succeeded.
    """
    if (error := registry.error) is None:
        error = ParseError(ErrorKind.NONE, colorful=registry.colorful)
    return error


def render(renderable, file=None, /, *, colorful=False, stderr=False):
    """
    print a renderable to `file` (or standard output/error).

    plain output writes `renderable.plain` verbatim. colorful output goes through a
    rich Console, emitting the rendered segments directly so nothing is wrapped
    and tabs are not expanded.
    """
    if not colorful:
        sink = file if file is not None else (sys.stderr if stderr else sys.stdout)
        sink.write(renderable.plain)
        return
    console = Console(file=file, stderr=stderr, highlight=False, markup=False, emoji=False, soft_wrap=True)
    text = rich_cast(renderable)
    console.print(Segments(text.render(console)), end="")


__all__ = (
    "usage",
    "diagnostic",
    "render",
)
