"""sprintf entry points and call conventions.

Two layers live here:

- the dispatch entry points (``try_format_with_locale``, ``format_with_locale``,
  ``format_with_c_locale``) which build the argument cursor, bind the sink and
  delegate to the engine;
- the call conventions (``sprintf``, ``sprintf_to``) which are what callers
  normally use. A ``Template`` is a literal validated where it is defined; a
  plain ``str`` is a runtime template validated when the call runs. Both render
  identically.

Rendering failures and unconsumed arguments are contract violations at the
call site, so everything except ``try_format_with_locale`` escalates them as
``FormatPanic`` instead of returning an error value.
"""

from __future__ import annotations

import io
import logging
from typing import Optional, Sequence, Union

from wprintf.args import ArgLike, ArgList, to_args
from wprintf.engine import render
from wprintf.error_msg import FormatPanic, OperationResult
from wprintf.locale import C_LOCALE, Locale
from wprintf.output import TextTarget, bind
from wprintf.parser import Template

logger = logging.getLogger("wprintf.printf")

TemplateLike = Union[Template, str]


class FormatResult(OperationResult[int]):
    """Result of a non-raising format call.

    ``unconsumed`` is the number of arguments left over after an otherwise
    successful render, and 0 for engine failures.
    """

    def __init__(
        self,
        success: bool,
        data: Optional[int] = None,
        error: Optional[str] = None,
        unconsumed: int = 0,
    ):
        super().__init__(success, data, error)
        self.unconsumed = unconsumed


def _template_text(template: TemplateLike) -> str:
    if isinstance(template, Template):
        return template.text
    if isinstance(template, str):
        return template
    raise TypeError(f"Format template must be a Template or str, got {type(template).__name__}")


def try_format_with_locale(
    target: TextTarget, template: TemplateLike, locale: Locale, args: Sequence[ArgLike]
) -> FormatResult:
    """Render into target and report failures as a result instead of raising.

    The result's data is the number of code points written. Unconsumed
    arguments turn an otherwise successful render into a failure.
    """
    text = _template_text(template)
    arglist = ArgList(to_args(args))
    logger.debug("Formatting %r with %d args in locale %s", text, len(arglist), locale.name)
    with bind(target, locale) as sink:
        rendered = render(template, arglist, sink)

    unconsumed = arglist.remaining()
    if not rendered.success:
        result = FormatResult(False, rendered.data, rendered.error)
    elif unconsumed > 0:
        result = FormatResult(False, rendered.data, f"{unconsumed} unconsumed args", unconsumed)
    else:
        return FormatResult(True, rendered.data)
    logger.debug("Formatting %r failed: %s", text, result.error)
    return result


def format_with_locale(
    target: TextTarget, template: TemplateLike, locale: Locale, args: Sequence[ArgLike]
) -> None:
    """The sprintf entry point. Prefer ``sprintf``/``sprintf_to``."""
    result = try_format_with_locale(target, template, locale, args)
    if result.success:
        return
    text = _template_text(template)
    if result.unconsumed:
        logger.error("sprintf had %d unconsumed args for format string: %s", result.unconsumed, text)
    else:
        logger.error('sprintf reported error "%s" with format string: %s', result.error, text)
    raise FormatPanic(result.error or "unknown error", text, unconsumed=result.unconsumed)


def format_with_c_locale(target: TextTarget, template: TemplateLike, args: Sequence[ArgLike]) -> None:
    format_with_locale(target, template, C_LOCALE, args)


def sprintf_to(target: TextTarget, template: TemplateLike, *args: ArgLike) -> None:
    """Write the formatted text into target, in the C locale."""
    format_with_c_locale(target, template, args)


def sprintf(template: TemplateLike, *args: ArgLike) -> str:
    """Return the formatted text as a new string, in the C locale.

    Example:
    - ``sprintf("Hello, %s!", "world")`` -> ``"Hello, world!"``
    """
    target = io.StringIO()
    sprintf_to(target, template, *args)
    return target.getvalue()
