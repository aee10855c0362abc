"""Format argument variants, native value conversion and the argument cursor."""

from __future__ import annotations

import ctypes
from dataclasses import dataclass
from functools import singledispatch
from typing import ClassVar, Iterable, Optional, Sequence, Union

from wprintf.error_msg import UnsupportedArgumentError


@dataclass(frozen=True)
class Arg:
    """Base of the closed set of renderable argument kinds."""

    arg_type: ClassVar[str] = "unknown"


@dataclass(frozen=True)
class SInt(Arg):
    arg_type: ClassVar[str] = "sint"

    value: int


@dataclass(frozen=True)
class UInt(Arg):
    arg_type: ClassVar[str] = "uint"

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise UnsupportedArgumentError(self.value, f"UInt payload must be non-negative, got {self.value}")


@dataclass(frozen=True)
class Float(Arg):
    arg_type: ClassVar[str] = "float"

    value: float


@dataclass(frozen=True)
class Char(Arg):
    """A single narrow (byte) character."""

    arg_type: ClassVar[str] = "char"

    value: bytes

    def __post_init__(self) -> None:
        if len(self.value) != 1:
            raise UnsupportedArgumentError(self.value, "Char payload must be exactly one byte")


@dataclass(frozen=True)
class WChar(Arg):
    """A single code point."""

    arg_type: ClassVar[str] = "wchar"

    value: str

    def __post_init__(self) -> None:
        if len(self.value) != 1:
            raise UnsupportedArgumentError(self.value, "WChar payload must be exactly one code point")


@dataclass(frozen=True)
class Str(Arg):
    """Narrow text, UTF-8 encoded."""

    arg_type: ClassVar[str] = "str"

    value: bytes


@dataclass(frozen=True)
class WStr(Arg):
    """Wide text."""

    arg_type: ClassVar[str] = "wstr"

    value: str


@dataclass(frozen=True)
class Pointer(Arg):
    """An opaque address for %p."""

    arg_type: ClassVar[str] = "pointer"

    address: int

    def __post_init__(self) -> None:
        if self.address < 0:
            raise UnsupportedArgumentError(self.address, "Pointer address must be non-negative")


ArgLike = Union[Arg, bool, int, float, str, bytes, bytearray, ctypes._SimpleCData]


@singledispatch
def to_arg(value: object) -> Arg:
    """Convert a native value into exactly one argument variant."""
    raise UnsupportedArgumentError(value)


@to_arg.register
def _(value: Arg) -> Arg:
    return value


@to_arg.register
def _(value: bool) -> Arg:
    return SInt(int(value))


@to_arg.register
def _(value: int) -> Arg:
    return SInt(value)


@to_arg.register
def _(value: float) -> Arg:
    return Float(value)


@to_arg.register
def _(value: str) -> Arg:
    return WStr(value)


@to_arg.register(bytes)
@to_arg.register(bytearray)
def _(value) -> Arg:
    return Str(bytes(value))


_SIGNED_CTYPES = (
    ctypes.c_byte,
    ctypes.c_short,
    ctypes.c_int,
    ctypes.c_long,
    ctypes.c_longlong,
    ctypes.c_ssize_t,
    ctypes.c_bool,
)
_UNSIGNED_CTYPES = (
    ctypes.c_ubyte,
    ctypes.c_ushort,
    ctypes.c_uint,
    ctypes.c_ulong,
    ctypes.c_ulonglong,
    ctypes.c_size_t,
)
_FLOAT_CTYPES = (ctypes.c_float, ctypes.c_double, ctypes.c_longdouble)

for _ctype in _SIGNED_CTYPES:
    to_arg.register(_ctype, lambda value: SInt(int(value.value)))
for _ctype in _UNSIGNED_CTYPES:
    to_arg.register(_ctype, lambda value: UInt(int(value.value)))
for _ctype in _FLOAT_CTYPES:
    to_arg.register(_ctype, lambda value: Float(float(value.value)))


@to_arg.register
def _(value: ctypes.c_char) -> Arg:
    return Char(value.value)


@to_arg.register
def _(value: ctypes.c_wchar) -> Arg:
    return WChar(value.value)


@to_arg.register
def _(value: ctypes.c_char_p) -> Arg:
    if value.value is None:
        raise UnsupportedArgumentError(value, "NULL c_char_p cannot be formatted")
    return Str(value.value)


@to_arg.register
def _(value: ctypes.c_wchar_p) -> Arg:
    if value.value is None:
        raise UnsupportedArgumentError(value, "NULL c_wchar_p cannot be formatted")
    return WStr(value.value)


@to_arg.register
def _(value: ctypes.c_void_p) -> Arg:
    return Pointer(value.value or 0)


def to_args(values: Iterable[ArgLike]) -> tuple[Arg, ...]:
    """Convert call-site values in order."""
    return tuple(to_arg(value) for value in values)


class ArgList:
    """Fixed-length argument sequence with a forward-only consumption cursor."""

    def __init__(self, args: Sequence[Arg]):
        self._args = tuple(args)
        self._cursor = 0

    def __len__(self) -> int:
        return len(self._args)

    @property
    def consumed(self) -> int:
        return self._cursor

    def remaining(self) -> int:
        return len(self._args) - self._cursor

    def next(self) -> Optional[Arg]:
        """Return the next argument and advance, or None when exhausted."""
        if self._cursor >= len(self._args):
            return None
        arg = self._args[self._cursor]
        self._cursor += 1
        return arg

    def __repr__(self) -> str:
        return f"ArgList(consumed={self._cursor}, total={len(self._args)})"
