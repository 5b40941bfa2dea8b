"""
OpenAI vision adapter (chat completions, gpt-4o-mini by default).

Any OpenAI-compatible endpoint works: point OPENAI_API_URL at it.
Uses httpx directly, no SDK needed.
"""
import httpx
from ecoscan.adapters.vision.base import VisionAdapter
from ecoscan.adapters.vision.prompts import SYSTEM_PROMPT, USER_INSTRUCTION
from ecoscan.orchestrator.errors import UpstreamError


class OpenAIVision(VisionAdapter):
    name = "openai"

    def __init__(self, status_store, config, client: httpx.AsyncClient | None = None):
        self.status = status_store
        self.config = config
        self._client = client
        if config.openai_api_key:
            self.status.log(f"openai_vision: ready (model={config.openai_model})")
        else:
            self.status.log("openai_vision: OPENAI_API_KEY not set, provider calls will fail")

    def build_payload(self, image: str) -> dict:
        cfg = self.config
        return {
            "model": cfg.openai_model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": USER_INSTRUCTION},
                        {
                            "type": "image_url",
                            "image_url": {"url": image, "detail": cfg.image_detail},
                        },
                    ],
                },
            ],
            "max_tokens": cfg.max_tokens,
            "temperature": cfg.temperature,
            "top_p": cfg.top_p,
        }

    async def classify(self, image: str) -> str:
        headers = {
            "Authorization": f"Bearer {self.config.openai_api_key}",
            "Content-Type": "application/json",
        }
        payload = self.build_payload(image)
        self.status.log("openai_vision: starting analysis")
        try:
            if self._client is not None:
                resp = await self._client.post(self.config.openai_api_url, json=payload, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self.config.timeout) as client:
                    resp = await client.post(self.config.openai_api_url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            self.status.log(f"openai_vision: transport error: {e}")
            raise UpstreamError(str(e) or type(e).__name__) from e

        if not resp.is_success:
            msg = _provider_message(resp)
            self.status.log(f"openai_vision: HTTP {resp.status_code} — {msg[:300]}")
            raise UpstreamError(msg, status_code=resp.status_code)

        try:
            raw = resp.json()["choices"][0]["message"]["content"] or ""
        except (ValueError, KeyError, IndexError, TypeError) as e:
            self.status.log(f"openai_vision: unexpected response shape: {e}")
            raise UpstreamError("OpenAI API error") from e
        self.status.log(f"openai_vision: raw='{raw[:200]}'")
        return raw


def _provider_message(resp: httpx.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        data = None
    err = data.get("error") if isinstance(data, dict) else None
    if isinstance(err, dict) and err.get("message"):
        return err["message"]
    if isinstance(err, str) and err:
        return err
    return "OpenAI API error"
