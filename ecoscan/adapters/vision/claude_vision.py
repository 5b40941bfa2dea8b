"""
Claude vision adapter (Anthropic Messages API).

Same prompt and generation bounds as the OpenAI adapter. Anthropic takes the
system prompt as a separate field and wants images as base64 blocks, so the
incoming data URI is split into media type and payload here.

Requires ANTHROPIC_API_KEY (env or .env) and VISION_ADAPTER=claude.
"""
import re
import anthropic
from ecoscan.adapters.vision.base import VisionAdapter
from ecoscan.adapters.vision.prompts import SYSTEM_PROMPT, USER_INSTRUCTION
from ecoscan.orchestrator.errors import UpstreamError

_DATA_URI = re.compile(r"^data:(?P<media>[\w/+.-]+);base64,(?P<data>.+)$", re.DOTALL)


def image_block(image: str) -> dict:
    m = _DATA_URI.match(image.strip())
    if m:
        return {
            "type": "image",
            "source": {"type": "base64", "media_type": m["media"], "data": m["data"]},
        }
    # Not a data URI: assume a fetchable URL
    return {"type": "image", "source": {"type": "url", "url": image}}


class ClaudeVision(VisionAdapter):
    name = "claude"

    def __init__(self, status_store, config, client=None):
        self.status = status_store
        self.config = config
        self._client = client or anthropic.AsyncAnthropic(
            api_key=config.anthropic_api_key, timeout=config.timeout, max_retries=0,
        )
        if config.anthropic_api_key:
            self.status.log(f"claude_vision: ready ({config.claude_model})")
        else:
            self.status.log("claude_vision: ANTHROPIC_API_KEY not set, provider calls will fail")

    async def classify(self, image: str) -> str:
        self.status.log("claude_vision: starting analysis")
        try:
            message = await self._client.messages.create(
                model=self.config.claude_model,
                max_tokens=self.config.max_tokens,
                temperature=self.config.temperature,
                system=SYSTEM_PROMPT,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": USER_INSTRUCTION},
                            image_block(image),
                        ],
                    }
                ],
            )
        except anthropic.APIStatusError as e:
            self.status.log(f"claude_vision: HTTP {e.status_code} — {e.message}")
            raise UpstreamError(e.message, status_code=e.status_code) from e
        except anthropic.APIError as e:
            self.status.log(f"claude_vision: API error: {e}")
            raise UpstreamError(str(e)) from e

        raw = "".join(b.text for b in message.content if getattr(b, "type", None) == "text")
        self.status.log(f"claude_vision: raw='{raw[:200]}'")
        return raw
