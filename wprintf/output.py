"""Output sinks binding a text target to a locale for one rendering call."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Callable, Iterator, MutableSequence, Protocol, Union

from wprintf.error_msg import SinkReleasedError
from wprintf.locale import Locale


class TextWriter(Protocol):
    def write(self, text: str, /) -> Any: ...


TextTarget = Union[TextWriter, MutableSequence[str]]


def _writer_for(target: TextTarget) -> Callable[[str], Any]:
    write = getattr(target, "write", None)
    if callable(write):
        return write
    if isinstance(target, list):
        return target.append
    raise TypeError(
        f"Format target of type '{type(target).__name__}' has no write() and is not a list"
    )


class OutputSink:
    """Forwards rendered text to the target; exposes the bound locale."""

    def __init__(self, target: TextTarget, locale: Locale):
        self._write = _writer_for(target)
        self.locale = locale
        self.written = 0
        self._released = False

    def write(self, text: str) -> None:
        if self._released:
            raise SinkReleasedError("write through an output sink after its call returned")
        if text:
            self._write(text)
            self.written += len(text)

    def release(self) -> None:
        self._released = True

    @property
    def released(self) -> bool:
        return self._released


@contextmanager
def bind(target: TextTarget, locale: Locale) -> Iterator[OutputSink]:
    """Bind target and locale into a sink valid only inside the ``with`` block."""
    sink = OutputSink(target, locale)
    try:
        yield sink
    finally:
        sink.release()
