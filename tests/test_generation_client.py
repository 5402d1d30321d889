"""
Test GenerationClient request shape and failure translation

requests.post is patched; no network access.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from unittest.mock import MagicMock, patch

import pytest
import requests

from docinterview.errors import UpstreamError
from docinterview.utils.generation_client import GenerationClient

POST_TARGET = "docinterview.utils.generation_client.requests.post"


def make_response(body=None, status_error=None, json_error=None):
    response = MagicMock()
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = body
    return response


def completion_body(content):
    return {
        "choices": [{"message": {"role": "assistant", "content": content}}],
        "usage": {"prompt_tokens": 12, "completion_tokens": 5},
    }


def test_request_shape():
    client = GenerationClient(api_key="sk-test", base_url="https://llm.example/v1/", model="m-1", timeout=9)

    with patch(POST_TARGET, return_value=make_response(completion_body("Hi"))) as post:
        client.complete("system text", "user text", temperature=0.2, max_tokens=42)

    args, kwargs = post.call_args
    assert args[0] == "https://llm.example/v1/chat/completions"
    assert kwargs["json"] == {
        "model": "m-1",
        "messages": [
            {"role": "system", "content": "system text"},
            {"role": "user", "content": "user text"},
        ],
        "temperature": 0.2,
        "max_tokens": 42,
    }
    assert kwargs["headers"]["Authorization"] == "Bearer sk-test"
    assert kwargs["timeout"] == 9


def test_returns_content_verbatim():
    client = GenerationClient(api_key="sk-test")

    with patch(POST_TARGET, return_value=make_response(completion_body("  What is it?  "))):
        assert client.complete("s", "u") == "  What is it?  "


@pytest.mark.parametrize("body", [
    {},
    {"choices": []},
    {"choices": [{}]},
    {"choices": [{"message": {}}]},
    {"choices": [{"message": {"content": None}}]},
    ["not", "a", "dict"],
])
def test_missing_content_is_none(body):
    client = GenerationClient(api_key="sk-test")

    with patch(POST_TARGET, return_value=make_response(body)):
        assert client.complete("s", "u") is None


def test_http_error_status():
    client = GenerationClient(api_key="sk-test")
    response = make_response(status_error=requests.HTTPError("401 Unauthorized"))

    with patch(POST_TARGET, return_value=response):
        with pytest.raises(UpstreamError):
            client.complete("s", "u")


def test_network_failure():
    client = GenerationClient(api_key="sk-test")

    with patch(POST_TARGET, side_effect=requests.ConnectionError("refused")):
        with pytest.raises(UpstreamError):
            client.complete("s", "u")


def test_malformed_body():
    client = GenerationClient(api_key="sk-test")

    with patch(POST_TARGET, return_value=make_response(json_error=ValueError("bad json"))):
        with pytest.raises(UpstreamError):
            client.complete("s", "u")


def test_missing_key_fails_at_call_time():
    client = GenerationClient(api_key=None)
    assert not client.is_configured()

    with patch(POST_TARGET) as post:
        with pytest.raises(UpstreamError):
            client.complete("s", "u")
        post.assert_not_called()


def test_diagnostics():
    client = GenerationClient(api_key="sk-test", model="m-2")

    with patch(POST_TARGET, return_value=make_response(completion_body("ok"))):
        result = client.complete("s", "u", return_diagnostics=True)

    assert result["text"] == "ok"
    assert result["diagnostics"]["prompt_tokens"] == 12
    assert result["diagnostics"]["completion_tokens"] == 5
    assert result["diagnostics"]["model"] == "m-2"


def test_client_info_hides_key():
    info = GenerationClient(api_key="sk-secret").get_client_info()

    assert info["configured"] is True
    assert "sk-secret" not in str(info)
