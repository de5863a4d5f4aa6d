"""Unit tests for SSE line splitting and event framing."""
from __future__ import annotations

from openai_completions.base.streaming import ServerSentEvent, iter_lines, iter_sse_events


def _events(text_chunks):
    return list(iter_sse_events(iter_lines(text_chunks)))


def test_data_lines_dispatch_on_blank_line():
    events = _events(['data: {"a": 1}\n\ndata: [DONE]\n\n'])
    assert [e.data for e in events] == ['{"a": 1}', "[DONE]"]  # nosec B101 - pytest assert


def test_frames_split_across_chunks():
    events = _events(["da", "ta: hel", "lo\n", "\n", "data: world\r", "\n\r\n"])
    assert [e.data for e in events] == ["hello", "world"]  # nosec B101 - pytest assert


def test_multiline_data_is_joined_with_newline():
    events = _events(["data: one\ndata: two\n\n"])
    assert events == [ServerSentEvent(data="one\ntwo")]  # nosec B101 - pytest assert


def test_comments_and_fields():
    events = _events([": keep-alive\n\nevent: delta\nid: 7\nretry: 1500\ndata:x\n\n"])
    assert events == [ServerSentEvent(data="x", event="delta", id="7", retry=1500)]  # nosec B101 - pytest assert


def test_events_without_data_are_not_dispatched():
    assert _events(["event: ping\n\n\n\n"]) == []  # nosec B101 - pytest assert


def test_pending_data_is_flushed_at_end_of_body():
    events = _events(["data: tail"])
    assert [e.data for e in events] == ["tail"]  # nosec B101 - pytest assert


def test_only_one_leading_space_is_stripped():
    events = _events(["data:  padded\n\n"])
    assert events[0].data == " padded"  # nosec B101 - pytest assert


def test_iter_lines_keeps_blank_lines():
    assert list(iter_lines(["a\n\nb\r\n\r\nc"])) == ["a", "", "b", "", "c"]  # nosec B101 - pytest assert
