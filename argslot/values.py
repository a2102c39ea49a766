"""
argslot value model: argument types, requiredness and result slots.

Overview
- ValueType: the discriminant of every flag/positional (bool, uint, str, enum, list).
- Required: tri-state requiredness of positionals (optional, required, appear-required).
- Slots: typed, mutable result cells handed back by every declaration call.
  • BoolSlot, UintSlot, StrSlot, EnumSlot hold a single `value` plus the declared `default`.
  • ArgList is the list "slot" itself: an ordered, append-on-repeat sequence of the
    raw argv strings, with an explicit backing capacity that grows by doubling.

Handles are stable: the registry keeps a reference to every slot it hands out and
writes into it while parsing, so callers read results through the same object they
received at declaration time.

Quick example
    >>> retries = UintSlot(3)
    >>> retries.value
    3
    >>> files = ArgList(2)
    >>> files.append("a.c"); files.append("b.c"); files.append("c.c")
    >>> list(files), files.capacity
    (['a.c', 'b.c', 'c.c'], 4)
"""
from collections.abc import Sequence
from enum import IntEnum

# Largest value a uint slot can hold (64-bit unsigned range).
UINT_MAX = 2 ** 64 - 1

# Default initial capacity of a list's backing buffer.
LIST_CAPACITY = 6


class ValueType(IntEnum):
    """
    discriminant of a flag or positional value.
    """
    BOOL = 0
    UINT = 1
    STR = 2
    ENUM = 3
    LIST = 4

    @property
    def label(self):
        return self.name.lower()


class Required(IntEnum):
    """
    requiredness of a positional argument.

    - OPTIONAL: the default is used when the value is absent; shown as [name].
    - REQUIRED: parsing fails with a no-value error when absent; shown as name.
    - APPEAR_REQUIRED: enforced like OPTIONAL, rendered like REQUIRED.
    """
    OPTIONAL = 0
    REQUIRED = 1
    APPEAR_REQUIRED = 2

    @classmethod
    def coerce(cls, value, /):
        """
        normalize booleans (False → OPTIONAL, True → REQUIRED) and members.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            return cls.REQUIRED if value else cls.OPTIONAL
        if isinstance(value, int):
            return cls(value)
        raise TypeError("requiredness must be a Required member or a boolean")

    @property
    def enforced(self):
        return self is Required.REQUIRED

    @property
    def bracketed(self):
        return self is Required.OPTIONAL


class Slot:
    """
    Base result cell. `value` is what the parser wrote (or the default).
    """
    __slots__ = ("value", "_default")
    __valuetype__ = None

    def __init__(self, default, /):
        self.value = default
        self._default = default

    @property
    def default(self):
        return self._default

    @property
    def type(self):
        return type(self).__valuetype__

    def reset(self):
        """
        restore the declared default.
        """
        self.value = self._default

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, self.value)

    def __rich_repr__(self):
        yield "value", self.value
        yield "default", self._default


class BoolSlot(Slot):
    __slots__ = ()
    __valuetype__ = ValueType.BOOL

    def __init__(self, default=False, /):
        super().__init__(bool(default))

    def __bool__(self):
        return bool(self.value)


class UintSlot(Slot):
    __slots__ = ()
    __valuetype__ = ValueType.UINT

    def __init__(self, default=0, /):
        if isinstance(default, bool) or not isinstance(default, int):
            raise TypeError("uint default must be an integer")
        if not 0 <= default <= UINT_MAX:
            raise ValueError("uint default must be within the 64-bit unsigned range")
        super().__init__(default)

    def __int__(self):
        return self.value

    def __index__(self):
        return self.value


class StrSlot(Slot):
    __slots__ = ()
    __valuetype__ = ValueType.STR

    def __init__(self, default=None, /):
        if default is not None and not isinstance(default, str):
            raise TypeError("str default must be a string or None")
        super().__init__(default)

    def __str__(self):
        return str(self.value)


class EnumSlot(Slot):
    """
    Enum result cell. `value` is the zero-based index into `options`.

    Indices outside the option list are allowed as "unset" sentinels; `choice`
    yields None for them (and for None option entries).
    """
    __slots__ = ("_options",)
    __valuetype__ = ValueType.ENUM

    def __init__(self, options, default=0, /):
        if isinstance(default, bool) or not isinstance(default, int):
            raise TypeError("enum default must be an integer index")
        super().__init__(default)
        self._options = tuple(options)

    @property
    def options(self):
        return self._options

    @property
    def choice(self):
        if 0 <= self.value < len(self._options):
            return self._options[self.value]
        return None

    def __int__(self):
        return self.value

    def __index__(self):
        return self.value

    def __rich_repr__(self):
        yield from super().__rich_repr__()
        yield "choice", self.choice


class ArgList(Sequence):
    """
    Ordered, growable list of raw argv strings (duplicates allowed).

    The backing buffer starts empty; the first append allocates `initial`
    entries and every later overflow doubles it. `free()` drops the buffer
    without touching the strings it referenced; the list can be reused after.
    """
    __slots__ = ("_buffer", "_size", "_capacity", "_initial")
    __valuetype__ = ValueType.LIST

    def __init__(self, initial=LIST_CAPACITY, /):
        if isinstance(initial, bool) or not isinstance(initial, int):
            raise TypeError("list capacity must be an integer")
        if initial < 1:
            raise ValueError("list capacity must be a positive integer")
        self._buffer = []
        self._size = 0
        self._capacity = 0
        self._initial = initial

    @property
    def type(self):
        return ValueType.LIST

    @property
    def default(self):
        return ()

    @property
    def value(self):
        return self.items

    @property
    def items(self):
        return tuple(self._buffer[:self._size])

    @property
    def size(self):
        return self._size

    @property
    def capacity(self):
        return self._capacity

    def append(self, item, /):
        """
        append one string, growing the buffer geometrically when full.

        raises MemoryError when the buffer cannot be grown; the list keeps the
        items it already held.
        """
        if not isinstance(item, str):
            raise TypeError("list items must be strings")
        if self._size == self._capacity:
            capacity = self._capacity << 1 if self._capacity else self._initial
            buffer = [None] * capacity
            buffer[:self._size] = self._buffer[:self._size]
            self._buffer, self._capacity = buffer, capacity
        self._buffer[self._size] = item
        self._size += 1

    def free(self):
        """
        release the backing buffer (size and capacity drop to zero).
        """
        self._buffer = []
        self._size = 0
        self._capacity = 0

    reset = free

    def __len__(self):
        return self._size

    def __getitem__(self, index, /):
        if isinstance(index, slice):
            return list(self._buffer[:self._size][index])
        if not -self._size <= index < self._size:
            raise IndexError("list index out of range")
        return self._buffer[index % self._size]

    def __eq__(self, other):
        if isinstance(other, ArgList | list | tuple):
            return list(self) == list(other)
        return NotImplemented

    __hash__ = object.__hash__

    def __repr__(self):
        return "ArgList(%r)" % list(self)

    def __rich_repr__(self):
        yield "items", list(self)
        yield "capacity", self._capacity


__all__ = (
    "UINT_MAX",
    "LIST_CAPACITY",
    "ValueType",
    "Required",
    "Slot",
    "BoolSlot",
    "UintSlot",
    "StrSlot",
    "EnumSlot",
    "ArgList",
)
