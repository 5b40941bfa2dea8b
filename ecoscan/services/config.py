"""
Runtime configuration.

Values come from the process environment, optionally seeded from a .env
file (python-dotenv, existing variables win). The resulting Config is
passed explicitly to the vision adapters, the API app factory and the
client adapter; nothing reads os.environ after start-up.
"""
import os
from dataclasses import dataclass
from dotenv import load_dotenv

OPENAI_API_URL = "https://api.openai.com/v1/chat/completions"
OPENAI_MODEL   = "gpt-4o-mini"
CLAUDE_MODEL   = "claude-haiku-4-5-20251001"
SERVICE_URL    = "http://127.0.0.1:8000"


@dataclass(frozen=True)
class Config:
    openai_api_key: str | None = None
    openai_api_url: str = OPENAI_API_URL
    openai_model: str = OPENAI_MODEL
    anthropic_api_key: str | None = None
    claude_model: str = CLAUDE_MODEL
    # openai | claude | mock
    vision_adapter: str = "openai"
    # Generation bounds: short, structured, near-deterministic output
    max_tokens: int = 800
    temperature: float = 0.1
    top_p: float = 0.9
    image_detail: str = "low"
    service_url: str = SERVICE_URL
    timeout: float = 60.0

    @classmethod
    def from_env(cls, dotenv_path: str | None = ".env") -> "Config":
        if dotenv_path:
            load_dotenv(dotenv_path=dotenv_path, override=False)
        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            openai_api_url=os.getenv("OPENAI_API_URL", OPENAI_API_URL),
            openai_model=os.getenv("OPENAI_MODEL", OPENAI_MODEL),
            anthropic_api_key=os.getenv("ANTHROPIC_API_KEY") or None,
            claude_model=os.getenv("CLAUDE_MODEL", CLAUDE_MODEL),
            vision_adapter=os.getenv("VISION_ADAPTER", "openai").lower(),
            service_url=os.getenv("ECOSCAN_SERVICE_URL", SERVICE_URL).rstrip("/"),
            timeout=float(os.getenv("ECOSCAN_TIMEOUT", "60")),
        )

    def provider_key_set(self) -> bool:
        if self.vision_adapter == "claude":
            return bool(self.anthropic_api_key)
        if self.vision_adapter == "mock":
            return True
        return bool(self.openai_api_key)
