"""
wprintf error types and the non-raising operation result
"""

from typing import Generic, Optional, TypeVar

# Type variable for generic types
T = TypeVar('T')


class WPrintfException(Exception):
    """Base exception for wprintf, optionally carrying the offending template"""

    def __init__(self, msg: str, template: Optional[str] = None):
        self.msg = msg
        self.template = template
        super().__init__(self.format_message())

    def format_message(self) -> str:
        if self.template is None:
            return self.msg
        return f"{self.msg} with format string: {self.template}"


class TemplateSyntaxError(WPrintfException):
    """A literal template contains a malformed conversion directive"""


class RenderError(WPrintfException):
    """A directive could not be satisfied by the supplied arguments"""


class FormatPanic(WPrintfException):
    """Fatal escalation of a rendering failure or an argument count mismatch.

    Raised by the fatal entry points; callers are not expected to recover
    from it, since a mismatched template is a defect at the call site.
    """

    def __init__(self, reason: str, template: str, unconsumed: int = 0):
        self.reason = reason
        self.unconsumed = unconsumed
        if unconsumed:
            msg = f"sprintf had {unconsumed} unconsumed args"
        else:
            msg = f'sprintf reported error "{reason}"'
        super().__init__(msg, template)


class UnsupportedArgumentError(WPrintfException, TypeError):
    """A value has no conversion to a renderable argument"""

    def __init__(self, value: object, message: Optional[str] = None):
        type_name = f"{type(value).__module__}.{type(value).__name__}"
        self.value_type = type_name
        super().__init__(message or f"Value type '{type_name}' cannot be used as a format argument")


class SinkReleasedError(WPrintfException, RuntimeError):
    """Write attempted through a sink after its rendering call ended"""


class OperationResult(Generic[T]):
    """Wrapper for operation results with success/error handling"""

    def __init__(
        self, success: bool, data: Optional[T] = None, error: Optional[str] = None
    ):
        self.success = success
        self.data = data
        self.error = error

    def __repr__(self) -> str:
        if self.success:
            return f"OperationResult(success=True, data={self.data!r})"
        return f"OperationResult(success=False, error={self.error!r})"
