import asyncio
import json
from types import SimpleNamespace

import anthropic
import httpx
import pytest

from ecoscan.adapters.vision.claude_vision import ClaudeVision, image_block
from ecoscan.adapters.vision.mock_vision import MockVision
from ecoscan.adapters.vision.openai_vision import OpenAIVision
from ecoscan.adapters.vision.prompts import SYSTEM_PROMPT, USER_INSTRUCTION
from ecoscan.orchestrator.errors import UpstreamError
from ecoscan.services.api import make_vision
from ecoscan.services.config import Config
from ecoscan.services.normalize import parse_reply

from conftest import IMAGE


def _openai(handler, status, config):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return OpenAIVision(status, config, client=client)


def test_openai_request_shape(status, config):
    seen = {}

    def handler(request):
        seen["auth"] = request.headers["authorization"]
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"choices": [{"message": {"content": "{}"}}]})

    asyncio.run(_openai(handler, status, config).classify(IMAGE))

    body = seen["body"]
    assert seen["auth"] == "Bearer test-key"
    assert seen["url"] == config.openai_api_url
    assert body["model"] == "gpt-4o-mini"
    assert body["max_tokens"] == 800
    assert body["temperature"] == 0.1
    assert [m["role"] for m in body["messages"]] == ["system", "user"]
    assert body["messages"][0]["content"] == SYSTEM_PROMPT
    text, image = body["messages"][1]["content"]
    assert text == {"type": "text", "text": USER_INSTRUCTION}
    assert image == {"type": "image_url", "image_url": {"url": IMAGE, "detail": "low"}}


def test_prompt_names_schema_and_enumeration():
    for key in ("objectName", "classification", "confidence", "environmentalImpact", "educationalFacts"):
        assert key in SYSTEM_PROMPT
    assert "reusable, recyclable, non-recyclable" in SYSTEM_PROMPT


def test_openai_returns_raw_content(status, config):
    def handler(request):
        return httpx.Response(200, json={"choices": [{"message": {"content": "not json at all"}}]})

    assert asyncio.run(_openai(handler, status, config).classify(IMAGE)) == "not json at all"


def test_openai_error_status_carries_provider_message(status, config):
    def handler(request):
        return httpx.Response(401, json={"error": {"message": "Incorrect API key provided"}})

    with pytest.raises(UpstreamError) as exc:
        asyncio.run(_openai(handler, status, config).classify(IMAGE))
    assert str(exc.value) == "Incorrect API key provided"
    assert exc.value.status_code == 401


def test_openai_error_without_body_uses_generic_message(status, config):
    def handler(request):
        return httpx.Response(502, text="Bad Gateway")

    with pytest.raises(UpstreamError, match="OpenAI API error"):
        asyncio.run(_openai(handler, status, config).classify(IMAGE))


def test_openai_unreachable(status, config):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamError, match="connection refused"):
        asyncio.run(_openai(handler, status, config).classify(IMAGE))


def test_claude_image_block_from_data_uri():
    block = image_block("data:image/jpeg;base64,/9j/4AAQ")
    assert block == {
        "type": "image",
        "source": {"type": "base64", "media_type": "image/jpeg", "data": "/9j/4AAQ"},
    }


def test_claude_image_block_from_url():
    block = image_block("https://example.org/can.jpg")
    assert block["source"] == {"type": "url", "url": "https://example.org/can.jpg"}


class _FakeMessages:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.kwargs = None

    async def create(self, **kwargs):
        self.kwargs = kwargs
        if self.error is not None:
            raise self.error
        return SimpleNamespace(content=[SimpleNamespace(type="text", text=self.text)])


def test_claude_classify(status):
    messages = _FakeMessages(text='{"objectName": "Can"}')
    cfg = Config(anthropic_api_key="k", vision_adapter="claude")
    vision = ClaudeVision(status, cfg, client=SimpleNamespace(messages=messages))

    assert asyncio.run(vision.classify(IMAGE)) == '{"objectName": "Can"}'
    assert messages.kwargs["system"] == SYSTEM_PROMPT
    assert messages.kwargs["max_tokens"] == 800
    content = messages.kwargs["messages"][0]["content"]
    assert content[0] == {"type": "text", "text": USER_INSTRUCTION}
    assert content[1]["source"]["media_type"] == "image/png"


def test_claude_connection_error_is_upstream(status):
    err = anthropic.APIConnectionError(request=httpx.Request("POST", "https://api.anthropic.com/v1/messages"))
    cfg = Config(anthropic_api_key="k", vision_adapter="claude")
    vision = ClaudeVision(status, cfg, client=SimpleNamespace(messages=_FakeMessages(error=err)))
    with pytest.raises(UpstreamError):
        asyncio.run(vision.classify(IMAGE))


def test_mock_vision_replies_parse(status):
    vision = MockVision(status)
    for _ in range(5):
        assert parse_reply(asyncio.run(vision.classify(IMAGE))) is not None


def test_make_vision_selects_adapter(status):
    assert isinstance(make_vision(Config(vision_adapter="mock"), status), MockVision)
    assert isinstance(make_vision(Config(vision_adapter="openai"), status), OpenAIVision)
    assert isinstance(make_vision(Config(vision_adapter="nope"), status), OpenAIVision)
    assert isinstance(make_vision(Config(vision_adapter="claude", anthropic_api_key="k"), status), ClaudeVision)
