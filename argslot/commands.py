"""
argslot command nodes.

A Command is one node of the sub-command tree. Exactly one root ("program")
command exists per registry; it has no parent and takes its name from argv[0].

Responsibilities
- Identity: name, description, parent link.
- Selection: the `selected` BoolSlot handed back by Registry.command(); the engine
  sets it when the command's name is scanned in its parent's context.
- Bookkeeping for the usage renderer: counters of owned flags, positionals and
  child commands, plus the auto-attached help flag (if any).

Commands never inherit flags from their ancestors: each node owns a
self-contained schema, so a short name may be reused freely across commands.
"""
from .arguments import ArgumentType
from .faults import SchemaError
from .values import BoolSlot


class Command(metaclass=ArgumentType):
    """
    Sub-command tree node.
    """
    __introspectable__ = (
        "name",
        "desc",
        "parent",
        "help_flag",
        "flag_count",
        "positional_count",
        "command_count",
    )
    __displayable__ = (
        "name",
        "desc",
        "selected",
        "flag_count",
        "positional_count",
        "command_count",
    )
    __slots__ = tuple("_" + field for field in __introspectable__) + ("_slot",)

    def __init__(self, name, /, *, parent=None, desc=None):
        if not isinstance(name, str):
            raise TypeError("command name must be a string")
        # the root takes argv[0] verbatim; only sub-commands need a name to be scanned
        if not name and parent is not None:
            raise SchemaError("sub-command name cannot be empty")
        if parent is not None and not isinstance(parent, Command):
            raise TypeError("command parent must be a command")
        if desc is not None and not isinstance(desc, str):
            raise TypeError("command 'desc' must be a string")
        self._name = name
        self._desc = (desc.strip() or None) if desc is not None else None
        self._parent = parent
        self._help_flag = None
        self._flag_count = 0
        self._positional_count = 0
        self._command_count = 0
        self._slot = BoolSlot(False)

    @property
    def slot(self):
        return self._slot

    @property
    def selected(self):
        return self._slot.value

    @property
    def root(self):
        """
        Return the topmost command of this node's hierarchy.
        """
        command = self
        while command.parent is not None:
            command = command.parent
        return command

    @property
    def path(self):
        """
        Return the full ancestry from root to this command as a tuple.
        """
        path = [command := self]
        while command.parent is not None:
            path.append(command := command.parent)
        return tuple(reversed(path))

    @property
    def route(self):
        """
        the space-joined command path, e.g. "prog build".
        """
        return " ".join(step.name for step in self.path)

    def _attach_help(self, flag):
        if self._help_flag is not None:
            raise SchemaError(f"command {self._name!r} already has a help flag")
        self._help_flag = flag

    def _count(self, kind):
        field = "_%s_count" % kind
        setattr(self, field, getattr(self, field) + 1)


__all__ = (
    "Command",
)
