"""Template interpretation: walks a template and renders each directive into a sink."""

from __future__ import annotations

import logging
import math
import re
from typing import Optional, Union

from wprintf.args import Arg, ArgList, Char, Float, Pointer, SInt, Str, UInt, WChar, WStr
from wprintf.error_msg import OperationResult, RenderError, TemplateSyntaxError
from wprintf.locale import Locale
from wprintf.output import OutputSink
from wprintf.parser import Directive, Template, parse_template

logger = logging.getLogger("wprintf.engine")

_LEADING_DIGITS = re.compile(r"(\d*)(.*)", re.DOTALL)

# Bit widths that the hh/h length modifiers narrow integers to; others are 64-bit.
_LENGTH_BITS = {"hh": 8, "h": 16}
_DEFAULT_BITS = 64


def render(template: Union[Template, str], args: ArgList, sink: OutputSink) -> OperationResult[int]:
    """
    Render a template through a sink, consuming arguments left to right

    Args:
        template: A literal Template or a runtime template string
        args: The argument cursor, advanced once per consumed argument
        sink: Destination for literal runs and rendered directives

    Returns:
        OperationResult whose data is the number of code points written, or
        whose error describes why rendering stopped. Text written before a
        failure stays in the target.
    """
    start = sink.written
    try:
        pieces = template.pieces if isinstance(template, Template) else parse_template(template)
        for piece in pieces:
            if isinstance(piece, str):
                sink.write(piece)
            else:
                sink.write(render_directive(piece, args, sink.locale))
    except (TemplateSyntaxError, RenderError) as exc:
        logger.debug("Rendering stopped after %d args: %s", args.consumed, exc.msg)
        return OperationResult[int](success=False, error=exc.msg)
    return OperationResult[int](success=True, data=sink.written - start)


def render_directive(directive: Directive, args: ArgList, locale: Locale) -> str:
    """Render one directive, pulling width, precision and value from args"""
    left = directive.has_flag("-")
    width = directive.width
    if directive.width_from_arg:
        width = _int_value(_take(args, directive), directive)
        if width < 0:
            left = True
            width = -width
    precision = directive.precision
    if directive.precision_from_arg:
        requested = _int_value(_take(args, directive), directive)
        precision = requested if requested >= 0 else None

    arg = _take(args, directive)
    conversion = directive.conversion
    if conversion in "di":
        return _format_signed(arg, directive, width, precision, left, locale)
    if conversion in "uoxX":
        return _format_unsigned(arg, directive, width, precision, left, locale)
    if conversion in "eEfFgG":
        return _format_float(arg, directive, width, precision, left, locale)
    if conversion in "cC":
        return _pad(_char_value(arg, directive), width, left)
    if conversion in "sS":
        text = _text_value(arg, directive)
        if precision is not None:
            text = text[:precision]
        return _pad(text, width, left)
    # %p
    if not isinstance(arg, Pointer):
        raise _mismatch(directive, arg, "a pointer")
    text = f"0x{arg.address:x}" if arg.address else "(nil)"
    return _pad(text, width, left)


def _take(args: ArgList, directive: Directive) -> Arg:
    arg = args.next()
    if arg is None:
        raise RenderError(
            f"missing argument {args.consumed + 1} for {directive.to_syntax()}"
        )
    return arg


def _mismatch(directive: Directive, arg: Arg, expected: str) -> RenderError:
    return RenderError(
        f"{directive.to_syntax()} expects {expected}, got {arg.arg_type} argument"
    )


def _int_value(arg: Arg, directive: Directive) -> int:
    if isinstance(arg, (SInt, UInt)):
        return arg.value
    raise _mismatch(directive, arg, "an integer")


def _char_value(arg: Arg, directive: Directive) -> str:
    if isinstance(arg, WChar):
        return arg.value
    if isinstance(arg, Char):
        return arg.value.decode("latin-1")
    if isinstance(arg, (WStr, Str)):
        text = _text_value(arg, directive)
        if len(text) == 1:
            return text
    elif isinstance(arg, (SInt, UInt)):
        try:
            return chr(arg.value)
        except (ValueError, OverflowError):
            raise RenderError(f"{directive.to_syntax()} got invalid code point {arg.value}") from None
    raise _mismatch(directive, arg, "a single character")


def _text_value(arg: Arg, directive: Directive) -> str:
    if isinstance(arg, WStr):
        return arg.value
    if isinstance(arg, Str):
        try:
            return arg.value.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise RenderError(f"{directive.to_syntax()} got narrow text that is not UTF-8: {exc.reason}") from None
    raise _mismatch(directive, arg, "a string")


def _sign(negative: bool, directive: Directive) -> str:
    if negative:
        return "-"
    if directive.has_flag("+"):
        return "+"
    if directive.has_flag(" "):
        return " "
    return ""


def _apply_precision(digits: str, value: int, precision: Optional[int]) -> str:
    if precision is None:
        return digits
    if precision == 0 and value == 0:
        return ""
    return digits.zfill(precision)


def _format_signed(arg, directive, width, precision, left, locale) -> str:
    value = _int_value(arg, directive)
    bits = _LENGTH_BITS.get(directive.length)
    if bits is None and isinstance(arg, UInt) and value >> (_DEFAULT_BITS - 1):
        # Unsigned payloads with the top bit set read back as negative 64-bit values.
        bits = _DEFAULT_BITS
    if bits is not None:
        half = 1 << (bits - 1)
        value = ((value + half) % (1 << bits)) - half
    digits = _apply_precision(str(abs(value)), value, precision)
    if directive.has_flag("'"):
        digits = locale.apply_grouping(digits)
    zero = directive.has_flag("0") and precision is None
    return _pad_number(_sign(value < 0, directive), digits, width, left, zero)


def _format_unsigned(arg, directive, width, precision, left, locale) -> str:
    value = _int_value(arg, directive)
    bits = _LENGTH_BITS.get(directive.length, _DEFAULT_BITS)
    if value < 0 or bits != _DEFAULT_BITS:
        value &= (1 << bits) - 1
    conversion = directive.conversion
    prefix = ""
    if conversion == "u":
        digits = _apply_precision(str(value), value, precision)
        if directive.has_flag("'"):
            digits = locale.apply_grouping(digits)
    elif conversion == "o":
        digits = _apply_precision(format(value, "o"), value, precision)
        if directive.has_flag("#") and not digits.startswith("0"):
            digits = "0" + digits
    else:
        digits = _apply_precision(format(value, conversion), value, precision)
        if directive.has_flag("#") and value:
            prefix = "0" + conversion
    zero = directive.has_flag("0") and precision is None
    return _pad_number(prefix, digits, width, left, zero)


def _format_float(arg, directive, width, precision, left, locale) -> str:
    if isinstance(arg, Float):
        value = arg.value
    elif isinstance(arg, (SInt, UInt)):
        value = float(arg.value)
    else:
        raise _mismatch(directive, arg, "a floating-point number")

    conversion = directive.conversion
    sign = _sign(math.copysign(1.0, value) < 0, directive)
    if not math.isfinite(value):
        body = "inf" if math.isinf(value) else "nan"
        if conversion.isupper():
            body = body.upper()
        return _pad(sign + body, width, left)

    alternate = "#" if directive.has_flag("#") else ""
    digits = 6 if precision is None else precision
    body = format(abs(value), f"{alternate}.{digits}{conversion.lower()}")
    if conversion.isupper():
        body = body.upper()
    int_part, rest = _LEADING_DIGITS.match(body).groups()
    if directive.has_flag("'") and conversion not in "eE":
        int_part = locale.apply_grouping(int_part)
    body = int_part + rest.replace(".", locale.decimal_point, 1)
    return _pad_number(sign, body, width, left, directive.has_flag("0"))


def _pad_number(prefix: str, digits: str, width: Optional[int], left: bool, zero: bool) -> str:
    if width and zero and not left:
        fill = width - len(prefix) - len(digits)
        if fill > 0:
            digits = "0" * fill + digits
    return _pad(prefix + digits, width, left)


def _pad(text: str, width: Optional[int], left: bool) -> str:
    if not width or len(text) >= width:
        return text
    if left:
        return text.ljust(width)
    return text.rjust(width)
