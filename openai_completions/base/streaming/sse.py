"""Server-sent event framing.

Turns the text of a ``text/event-stream`` response body (the chunks of
``httpx.Response.iter_text()``) into :class:`ServerSentEvent` records:

- lines end at ``\\r\\n``, ``\\n`` or ``\\r`` and blank lines are kept;
- ``data:`` lines accumulate and are joined with ``\\n``;
- a blank line dispatches the pending event;
- lines starting with ``:`` are comments (keep-alives) and are skipped;
- ``event:``, ``id:`` and ``retry:`` fields are recorded;
- a single space after the colon is stripped, as the SSE format requires.

Events without any ``data`` line are not dispatched. Data still pending when
the body ends is flushed as a final event, since some gateways omit the
trailing blank line.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class ServerSentEvent:
    """One decoded SSE event."""

    data: str
    event: Optional[str] = None
    id: Optional[str] = None
    retry: Optional[int] = None


class SSEDecoder:
    """Incremental line-oriented SSE decoder (one instance per response)."""

    def __init__(self) -> None:
        self._data: List[str] = []
        self._event: Optional[str] = None
        self._id: Optional[str] = None
        self._retry: Optional[int] = None

    def decode(self, line: str) -> Optional[ServerSentEvent]:
        """Feed one line; return an event when ``line`` completes one."""
        line = line.rstrip("\r\n")
        if not line:
            return self._dispatch()
        if line.startswith(":"):
            return None

        field, _, value = line.partition(":")
        if value.startswith(" "):
            value = value[1:]

        if field == "data":
            self._data.append(value)
        elif field == "event":
            self._event = value
        elif field == "id":
            if "\0" not in value:
                self._id = value
        elif field == "retry":
            if value.isdigit():
                self._retry = int(value)
        return None

    def flush(self) -> Optional[ServerSentEvent]:
        """Dispatch whatever is pending at end of body."""
        return self._dispatch()

    def _dispatch(self) -> Optional[ServerSentEvent]:
        if not self._data:
            self._event = None
            return None
        sse = ServerSentEvent(
            data="\n".join(self._data),
            event=self._event,
            id=self._id,
            retry=self._retry,
        )
        self._data = []
        self._event = None
        # id and retry persist across events
        return sse


def iter_lines(chunks: Iterable[str]) -> Iterator[str]:
    """Split decoded text chunks into lines, keeping blank lines.

    A ``\\r\\n`` pair split across two chunks still counts as one line break.
    """
    buffer = ""
    for chunk in chunks:
        if not chunk:
            continue
        buffer += chunk
        held_cr = buffer.endswith("\r")
        if held_cr:
            buffer = buffer[:-1]
        parts = _LINE_BREAK.split(buffer)
        buffer = parts.pop()
        yield from parts
        if held_cr:
            buffer += "\r"
    if buffer:
        yield buffer[:-1] if buffer.endswith("\r") else buffer


def iter_sse_events(lines: Iterable[str]) -> Iterator[ServerSentEvent]:
    """Yield events decoded from ``lines``, flushing at end of input."""
    decoder = SSEDecoder()
    for line in lines:
        sse = decoder.decode(line)
        if sse is not None:
            yield sse
    tail = decoder.flush()
    if tail is not None:
        yield tail


__all__ = ["ServerSentEvent", "SSEDecoder", "iter_lines", "iter_sse_events"]
