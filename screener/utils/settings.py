"""
Startup configuration for the LLM gateway.

Read once from the environment (and `.env`) and handed to the evaluator through
a FastAPI dependency, so tests can inject fake credentials.
"""
import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from screener.utils.exceptions import ConfigurationError

load_dotenv()

DEFAULT_GATEWAY_URL = "https://ai.gateway.lovable.dev/v1"
DEFAULT_MODEL = "google/gemini-2.5-flash"
DEFAULT_QUESTIONS_MODEL = "google/gemini-3-flash-preview"


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class GatewaySettings(BaseModel):
    """LLM gateway connection settings"""
    api_key: str = Field(min_length=1, description="Bearer token for the gateway")
    base_url: str = Field(default=DEFAULT_GATEWAY_URL, description="Gateway base URL")
    model: str = Field(default=DEFAULT_MODEL, description="Model used for resume analysis")
    questions_model: str = Field(default=DEFAULT_QUESTIONS_MODEL, description="Model used for screening questions")
    timeout: float = Field(default=60.0, gt=0, le=300, description="Request timeout in seconds")
    fallback_enabled: bool = Field(
        default=True,
        description="Substitute the local fallback scorer on 402/429/5xx instead of surfacing the error",
    )

    @property
    def completions_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/chat/completions"


def load_gateway_settings() -> GatewaySettings:
    """Build GatewaySettings from the environment. Missing API key is fatal."""
    api_key = os.getenv("LLM_GATEWAY_API_KEY", "").strip()
    if not api_key:
        raise ConfigurationError("LLM_GATEWAY_API_KEY not configured", config_key="LLM_GATEWAY_API_KEY")

    return GatewaySettings(
        api_key=api_key,
        base_url=os.getenv("LLM_GATEWAY_URL", DEFAULT_GATEWAY_URL),
        model=os.getenv("LLM_MODEL", DEFAULT_MODEL),
        questions_model=os.getenv("LLM_QUESTIONS_MODEL", DEFAULT_QUESTIONS_MODEL),
        timeout=float(os.getenv("LLM_TIMEOUT", "60")),
        fallback_enabled=_env_flag("LLM_FALLBACK_ENABLED", True),
    )


@lru_cache(maxsize=1)
def get_gateway_settings() -> GatewaySettings:
    """FastAPI dependency returning the process-wide settings"""
    return load_gateway_settings()
