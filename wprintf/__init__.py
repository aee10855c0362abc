"""printf-family formatting of wide text with pluggable locales."""

from wprintf.args import (
    Arg,
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
from wprintf.error_msg import (
    FormatPanic,
    OperationResult,
    SinkReleasedError,
    TemplateSyntaxError,
    UnsupportedArgumentError,
    WPrintfException,
)
from wprintf.locale import C_LOCALE, Locale
from wprintf.output import OutputSink, bind
from wprintf.parser import Template, literal
from wprintf.printf import (
    FormatResult,
    format_with_c_locale,
    format_with_locale,
    sprintf,
    sprintf_to,
    try_format_with_locale,
)
from wprintf.version import __version__

__all__ = [
    "Arg",
    "ArgList",
    "C_LOCALE",
    "Char",
    "Float",
    "FormatPanic",
    "FormatResult",
    "Locale",
    "OperationResult",
    "OutputSink",
    "Pointer",
    "SInt",
    "SinkReleasedError",
    "Str",
    "Template",
    "TemplateSyntaxError",
    "UInt",
    "UnsupportedArgumentError",
    "WChar",
    "WPrintfException",
    "WStr",
    "__version__",
    "bind",
    "format_with_c_locale",
    "format_with_locale",
    "literal",
    "sprintf",
    "sprintf_to",
    "to_arg",
    "to_args",
    "try_format_with_locale",
]
