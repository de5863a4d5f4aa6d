"""End-to-end client tests against an ``httpx.MockTransport`` server.

Covers URL and header construction for OpenAI and Azure, request bodies,
streamed chat and text completions, and error responses.
"""
from __future__ import annotations

import httpx
import pytest

from openai_completions import (
    AzureClient,
    AzureClientRequestParams,
    ChatCompletionMessage,
    ChatCompletionModel,
    ChatCompletionRequest,
    OpenAIClient,
    StreamState,
    TextCompletionModel,
    TextCompletionRequest,
)
from openai_completions.base.cancellation import CancellationToken
from openai_completions.base.errors import DEFAULT_ERROR

from stream_helpers import (
    RecordingListener,
    RecordingTransport,
    chat_delta,
    json_response,
    sse_body,
    sse_response,
    text_delta,
)

AZURE_PARAMS = AzureClientRequestParams("TEST_RESOURCE", "TEST_DEPLOYMENT_ID", "TEST_API_VERSION")
HELLO_CHAT = sse_body(chat_delta(role="assistant"), chat_delta(content="Hello"), chat_delta(content="!"))


def _chat_request(**overrides) -> ChatCompletionRequest:
    builder = ChatCompletionRequest.builder([ChatCompletionMessage(role="user", content="TEST_PROMPT")])
    for name, value in overrides.items():
        getattr(builder, f"set_{name}")(value)
    return builder.build()


def test_openai_chat_completion_streams_and_completes():
    transport = RecordingTransport(sse_response(HELLO_CHAT))
    client = OpenAIClient(
        api_key="TEST_API_KEY", organization="TEST_ORG", host="http://testserver", http_client=transport.client()
    ).build_chat_completion_client()
    listener = RecordingListener()

    handle = client.execute(_chat_request(model=ChatCompletionModel.GPT_4), listener)

    assert listener.messages == ["", "Hello", "!"]  # nosec B101 - pytest assert
    assert listener.completed == ["Hello!"]  # nosec B101 - pytest assert
    assert handle.state is StreamState.COMPLETE and handle.done  # nosec B101 - pytest assert
    request = transport.last
    assert request.method == "POST"  # nosec B101 - pytest assert
    assert str(request.url) == "http://testserver/v1/chat/completions"  # nosec B101 - pytest assert
    assert request.headers["Authorization"] == "Bearer TEST_API_KEY"  # nosec B101 - pytest assert
    assert request.headers["OpenAI-Organization"] == "TEST_ORG"  # nosec B101 - pytest assert
    assert request.headers["Accept"] == "text/event-stream"  # nosec B101 - pytest assert
    body = transport.body()
    assert body["model"] == "gpt-4"  # nosec B101 - pytest assert
    assert body["stream"] is True  # nosec B101 - pytest assert
    assert body["messages"] == [{"role": "user", "content": "TEST_PROMPT"}]  # nosec B101 - pytest assert


def test_openai_text_completion_without_organization_header():
    transport = RecordingTransport(sse_response(sse_body(text_delta("He"), text_delta("llo"), text_delta("!"))))
    client = OpenAIClient(
        api_key="TEST_API_KEY", host="http://testserver/", http_client=transport.client()
    ).build_text_completion_client()
    listener = RecordingListener()

    client.execute(TextCompletionRequest.builder("Say hello").build(), listener)

    assert listener.completed == ["Hello!"]  # nosec B101 - pytest assert
    assert str(transport.last.url) == "http://testserver/v1/completions"  # nosec B101 - pytest assert
    assert "OpenAI-Organization" not in transport.last.headers  # nosec B101 - pytest assert
    body = transport.body()
    assert body["model"] == "text-davinci-003"  # nosec B101 - pytest assert
    assert "stop" not in body  # nosec B101 - pytest assert


def test_azure_chat_completion_with_active_directory_auth():
    transport = RecordingTransport(sse_response(HELLO_CHAT))
    client = AzureClient(
        "TEST_API_KEY",
        AZURE_PARAMS,
        active_directory_authentication=True,
        host="http://testserver",
        http_client=transport.client(),
    ).build_chat_completion_client()
    listener = RecordingListener()

    request = _chat_request(
        model=ChatCompletionModel.GPT_3_5,
        max_tokens=500,
        temperature=0.5,
        presence_penalty=0.1,
        frequency_penalty=0.1,
    )
    client.stream(request, listener).wait(5)

    assert "".join(listener.messages) == "Hello!"  # nosec B101 - pytest assert
    assert listener.completed == ["Hello!"]  # nosec B101 - pytest assert
    sent = transport.last
    assert sent.url.path == "/openai/deployments/TEST_DEPLOYMENT_ID/chat/completions"  # nosec B101 - pytest assert
    assert sent.url.params["api-version"] == "TEST_API_VERSION"  # nosec B101 - pytest assert
    assert sent.headers["Authorization"] == "Bearer TEST_API_KEY"  # nosec B101 - pytest assert
    assert "api-key" not in sent.headers  # nosec B101 - pytest assert
    body = transport.body()
    assert [body[k] for k in ("model", "temperature", "stream", "max_tokens", "frequency_penalty", "presence_penalty")] == [  # nosec B101 - pytest assert
        "gpt-3.5-turbo",
        0.5,
        True,
        500,
        0.1,
        0.1,
    ]


def test_azure_text_completion_uses_api_key_header():
    transport = RecordingTransport(sse_response(sse_body(text_delta("He"), text_delta("llo"), text_delta("!"))))
    client = AzureClient(
        "TEST_API_KEY", AZURE_PARAMS, host="http://testserver", http_client=transport.client()
    ).build_text_completion_client()
    listener = RecordingListener()

    request = (
        TextCompletionRequest.builder("TEST_PROMPT")
        .set_model(TextCompletionModel.DAVINCI)
        .set_stop([" Human:", " AI:"])
        .set_max_tokens(1000)
        .set_temperature(0.1)
        .set_presence_penalty(0.2)
        .set_frequency_penalty(0.2)
        .build()
    )
    client.execute(request, listener)

    assert listener.completed == ["Hello!"]  # nosec B101 - pytest assert
    sent = transport.last
    assert sent.url.path == "/openai/deployments/TEST_DEPLOYMENT_ID/completions"  # nosec B101 - pytest assert
    assert sent.headers["api-key"] == "TEST_API_KEY"  # nosec B101 - pytest assert
    assert "Authorization" not in sent.headers  # nosec B101 - pytest assert
    body = transport.body()
    assert [body[k] for k in ("model", "prompt", "stop", "temperature", "stream", "max_tokens", "frequency_penalty", "presence_penalty")] == [  # nosec B101 - pytest assert
        "text-davinci-003",
        "TEST_PROMPT",
        [" Human:", " AI:"],
        0.1,
        True,
        1000,
        0.2,
        0.2,
    ]


def test_azure_default_host_uses_resource_name():
    client = AzureClient("TEST_API_KEY", AZURE_PARAMS).build_chat_completion_client()
    assert client.url == (  # nosec B101 - pytest assert
        "https://TEST_RESOURCE.openai.azure.com/openai/deployments/TEST_DEPLOYMENT_ID"
        "/chat/completions?api-version=TEST_API_VERSION"
    )


def test_invalid_token_flat_error_response():
    transport = RecordingTransport(json_response(401, {"statusCode": 401, "message": "Token is invalid"}))
    client = AzureClient(
        "TEST_API_KEY", AZURE_PARAMS, host="http://testserver", http_client=transport.client()
    ).build_chat_completion_client()
    listener = RecordingListener()

    handle = client.execute(_chat_request(), listener)

    assert [e.message for e in listener.errors] == ["Token is invalid"]  # nosec B101 - pytest assert
    assert listener.messages == [] and listener.completed == []  # nosec B101 - pytest assert
    assert handle.state is StreamState.ERROR  # nosec B101 - pytest assert
    assert len(transport.requests) == 1  # nosec B101 - pytest assert


def test_invalid_resource_nested_error_response():
    transport = RecordingTransport(
        json_response(404, {"error": {"message": "Resource not found", "code": "404"}})
    )
    client = AzureClient(
        "TEST_API_KEY", AZURE_PARAMS, host="http://testserver", http_client=transport.client()
    ).build_chat_completion_client()
    listener = RecordingListener()

    client.execute(_chat_request(), listener)

    assert [e.message for e in listener.errors] == ["Resource not found"]  # nosec B101 - pytest assert
    assert listener.errors[0].code == "404"  # nosec B101 - pytest assert


def test_unparseable_error_body_gives_default_error():
    transport = RecordingTransport(httpx.Response(502, text="<html>Bad Gateway</html>"))
    client = OpenAIClient(
        api_key="TEST_API_KEY", host="http://testserver", http_client=transport.client()
    ).build_chat_completion_client()
    listener = RecordingListener()

    client.execute(_chat_request(), listener)

    assert listener.errors == [DEFAULT_ERROR]  # nosec B101 - pytest assert


def test_connection_failure_gives_default_error():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    transport = RecordingTransport(refuse)
    client = OpenAIClient(
        api_key="TEST_API_KEY", host="http://testserver", http_client=transport.client()
    ).build_chat_completion_client()
    listener = RecordingListener()

    handle = client.execute(_chat_request(), listener)

    assert listener.errors == [DEFAULT_ERROR]  # nosec B101 - pytest assert
    assert handle.state is StreamState.ERROR  # nosec B101 - pytest assert


def test_stream_ending_without_done_logs_and_fires_nothing(log_capture):
    transport = RecordingTransport(sse_response(sse_body(chat_delta(content="cut"), done=False)))
    client = OpenAIClient(
        api_key="TEST_API_KEY", host="http://testserver", http_client=transport.client()
    ).build_chat_completion_client()
    listener = RecordingListener()

    handle = client.execute(_chat_request(), listener)

    assert listener.messages == ["cut"]  # nosec B101 - pytest assert
    assert listener.completed == [] and listener.errors == []  # nosec B101 - pytest assert
    assert handle.state is StreamState.STREAMING  # nosec B101 - pytest assert
    assert "stream.closed_without_terminal" in log_capture.event_names()  # nosec B101 - pytest assert
    assert "stream.start" in log_capture.event_names()  # nosec B101 - pytest assert


def test_cancel_from_listener_stops_stream_without_callbacks():
    transport = RecordingTransport(
        sse_response(sse_body(chat_delta(content="one"), chat_delta(content="two"), chat_delta(content="three")))
    )
    client = OpenAIClient(
        api_key="TEST_API_KEY", host="http://testserver", http_client=transport.client()
    ).build_chat_completion_client()
    token = CancellationToken()

    class CancelAfterFirst(RecordingListener):
        def on_message(self, message: str) -> None:
            super().on_message(message)
            token.cancel("enough")

    listener = CancelAfterFirst()
    handle = client.execute(_chat_request(), listener, token=token)

    assert listener.messages == ["one"]  # nosec B101 - pytest assert
    assert listener.completed == [] and listener.errors == []  # nosec B101 - pytest assert
    assert handle.state is StreamState.CANCELLED  # nosec B101 - pytest assert
    assert token.reason == "enough"  # nosec B101 - pytest assert


def test_missing_api_key_raises():
    with pytest.raises(ValueError):
        OpenAIClient()
    with pytest.raises(ValueError):
        AzureClient(params=AZURE_PARAMS)


def test_azure_missing_deployment_settings_raise():
    with pytest.raises(ValueError, match="deployment_id"):
        AzureClient("TEST_API_KEY")
