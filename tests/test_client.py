"""Tests for the completion client."""

import json

import httpx
import pytest
from conftest import run

from document_qa.client import CompletionClient
from document_qa.config import CompletionConfig
from document_qa.exceptions import ServiceError


def completion_body(content: str) -> dict:
    return {"choices": [{"index": 0, "message": {"role": "assistant", "content": content}}]}


def make_client(handler, **config) -> CompletionClient:
    return CompletionClient(
        config=CompletionConfig(base_url="https://llm.test/v1", **config),
        transport=httpx.MockTransport(handler),
    )


async def complete_once(client: CompletionClient, credential: str = "sk-test") -> str:
    async with client:
        return await client.complete("system text", "user text", credential)


class TestComplete:
    def test_returns_first_choice_content(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=completion_body("Blue"))

        assert run(complete_once(make_client(handler))) == "Blue"

        assert seen["url"] == "https://llm.test/v1/chat/completions"
        assert seen["auth"] == "Bearer sk-test"
        assert seen["body"] == {
            "model": "gpt-4",
            "messages": [
                {"role": "system", "content": "system text"},
                {"role": "user", "content": "user text"},
            ],
        }

    def test_temperature_sent_when_configured(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=completion_body("ok"))

        run(complete_once(make_client(handler, model="gpt-4o-mini", temperature=0.0)))

        assert seen["body"]["model"] == "gpt-4o-mini"
        assert seen["body"]["temperature"] == 0.0

    def test_error_status_raises_with_service_message(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"error": {"message": "Incorrect API key provided"}})

        with pytest.raises(ServiceError) as exc_info:
            run(complete_once(make_client(handler), credential="bad"))

        assert exc_info.value.status == 401
        assert exc_info.value.message == "Incorrect API key provided"

    def test_error_without_json_body_uses_reason(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="<html>bad gateway</html>")

        with pytest.raises(ServiceError) as exc_info:
            run(complete_once(make_client(handler)))

        assert exc_info.value.status == 502
        assert exc_info.value.message == "Bad Gateway"

    def test_transport_failure_has_no_status(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ServiceError) as exc_info:
            run(complete_once(make_client(handler)))

        assert exc_info.value.status is None

    def test_malformed_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"choices": []})

        with pytest.raises(ServiceError, match="Malformed"):
            run(complete_once(make_client(handler)))

    def test_no_retry_on_failure(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503, json={"error": {"message": "overloaded"}})

        with pytest.raises(ServiceError):
            run(complete_once(make_client(handler)))

        assert len(calls) == 1
