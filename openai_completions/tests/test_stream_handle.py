"""Background stream handle: threading, waiting and cancellation."""
from __future__ import annotations

import json
import threading

from openai_completions.base.streaming import (
    ChatCompletionExtractor,
    CompletionEventSourceListener,
    CompletionStream,
    StreamState,
)
from stream_helpers import RecordingListener, chat_delta


def _decoder(listener):
    return CompletionEventSourceListener(listener, ChatCompletionExtractor(), client_code="chat.completion")


def test_start_runs_on_worker_thread_and_wait_returns():
    listener = RecordingListener()
    seen_threads = []

    def runner(handle):
        seen_threads.append(threading.current_thread().name)
        handle.decoder.on_event(json.dumps(chat_delta(content="hi")))
        handle.decoder.on_event("[DONE]")

    stream = CompletionStream(_decoder(listener), runner).start()
    assert stream.wait(5.0)  # nosec B101 - pytest assert
    assert stream.done and stream.state is StreamState.COMPLETE  # nosec B101 - pytest assert
    assert listener.completed == ["hi"]  # nosec B101 - pytest assert
    assert seen_threads == ["completion-stream-chat.completion"]  # nosec B101 - pytest assert


def test_cancel_while_running_moves_to_cancelled_without_callbacks():
    listener = RecordingListener()
    started = threading.Event()
    release = threading.Event()

    def runner(handle):
        handle.decoder.on_event(json.dumps(chat_delta(content="a")))
        started.set()
        release.wait(5.0)
        handle.decoder.on_event(json.dumps(chat_delta(content="b")))
        handle.decoder.on_event("[DONE]")

    stream = CompletionStream(_decoder(listener), runner).start()
    assert started.wait(5.0)  # nosec B101 - pytest assert
    stream.cancel("user")
    release.set()
    assert stream.wait(5.0)  # nosec B101 - pytest assert
    assert stream.state is StreamState.CANCELLED  # nosec B101 - pytest assert
    assert stream.accumulated == "a"  # nosec B101 - pytest assert
    assert listener.messages == ["a"]  # nosec B101 - pytest assert
    assert listener.completed == [] and listener.errors == []  # nosec B101 - pytest assert
    stream.cancel("again")


def test_cancel_after_completion_is_a_no_op():
    listener = RecordingListener()
    stream = CompletionStream(_decoder(listener), lambda h: h.decoder.on_event("[DONE]")).run()
    stream.cancel()
    assert stream.state is StreamState.COMPLETE  # nosec B101 - pytest assert
    assert listener.completed == [""]  # nosec B101 - pytest assert
