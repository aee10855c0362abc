from __future__ import annotations

import ctypes

import pytest

from wprintf.args import (
    ArgList,
    Char,
    Float,
    Pointer,
    SInt,
    Str,
    UInt,
    WChar,
    WStr,
    to_arg,
    to_args,
)
from wprintf.error_msg import UnsupportedArgumentError


@pytest.mark.unit
@pytest.mark.parametrize(
    "value, expected",
    [
        (True, SInt(1)),
        (5, SInt(5)),
        (-(2**70), SInt(-(2**70))),
        (1.5, Float(1.5)),
        ("x", WStr("x")),
        (b"x", Str(b"x")),
        (bytearray(b"ab"), Str(b"ab")),
        (UInt(3), UInt(3)),
    ],
)
def test_python_values(value, expected):
    assert to_arg(value) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    "value, expected",
    [
        (ctypes.c_int(-3), SInt(-3)),
        (ctypes.c_longlong(2**40), SInt(2**40)),
        (ctypes.c_bool(True), SInt(1)),
        (ctypes.c_uint(7), UInt(7)),
        (ctypes.c_size_t(9), UInt(9)),
        (ctypes.c_ubyte(255), UInt(255)),
        (ctypes.c_double(2.5), Float(2.5)),
        (ctypes.c_float(0.5), Float(0.5)),
        (ctypes.c_char(b"a"), Char(b"a")),
        (ctypes.c_wchar("é"), WChar("é")),
        (ctypes.c_char_p(b"hi"), Str(b"hi")),
        (ctypes.c_wchar_p("hi"), WStr("hi")),
        (ctypes.c_void_p(4096), Pointer(4096)),
        (ctypes.c_void_p(None), Pointer(0)),
    ],
)
def test_ctypes_values(value, expected):
    assert to_arg(value) == expected


@pytest.mark.unit
def test_variants_are_distinct():
    assert SInt(1) != UInt(1)
    assert Str(b"a") != WStr("a")
    assert SInt.arg_type == "sint" and WStr.arg_type == "wstr"


@pytest.mark.unit
@pytest.mark.parametrize("value", [object(), None, [1], {"a": 1}, ctypes.c_char_p(None)])
def test_unsupported_values(value):
    with pytest.raises(UnsupportedArgumentError) as excinfo:
        to_arg(value)
    assert isinstance(excinfo.value, TypeError)


@pytest.mark.unit
def test_variant_payload_validation():
    with pytest.raises(UnsupportedArgumentError):
        UInt(-1)
    with pytest.raises(UnsupportedArgumentError):
        Char(b"ab")
    with pytest.raises(UnsupportedArgumentError):
        WChar("")
    with pytest.raises(UnsupportedArgumentError):
        Pointer(-8)


@pytest.mark.unit
def test_to_args_preserves_order():
    assert to_args([1, "a", 2.0]) == (SInt(1), WStr("a"), Float(2.0))


@pytest.mark.unit
def test_arglist_cursor():
    args = ArgList(to_args([1, 2]))
    assert len(args) == 2
    assert args.remaining() == 2
    assert args.next() == SInt(1)
    assert args.consumed == 1
    assert args.remaining() == 1
    assert args.next() == SInt(2)
    assert args.remaining() == 0


@pytest.mark.unit
def test_arglist_exhaustion_does_not_move_cursor():
    args = ArgList([])
    assert args.next() is None
    assert args.next() is None
    assert args.consumed == 0
    assert args.remaining() == 0
