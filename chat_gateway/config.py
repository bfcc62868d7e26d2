from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

DEFAULT_MODELS = {
    "gemini": "gemini-1.5-flash",
    "openai": "gpt-3.5-turbo",
    "anthropic": "claude-3-sonnet-20240229",
}

# provider -> environment variable holding its API key
CREDENTIAL_ENV_VARS = {
    "gemini": "GEMINI_API_KEY",
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}

DEFAULT_UPSTREAM_TIMEOUT = 30.0
DEFAULT_MOCK_DELAY_MS = (1000, 3000)


@dataclass(frozen=True)
class GatewaySettings:
    gemini_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None
    gemini_model: str = DEFAULT_MODELS["gemini"]
    openai_model: str = DEFAULT_MODELS["openai"]
    anthropic_model: str = DEFAULT_MODELS["anthropic"]
    upstream_timeout: float = DEFAULT_UPSTREAM_TIMEOUT
    mock_delay_ms: Tuple[int, int] = DEFAULT_MOCK_DELAY_MS

    def api_key_for(self, provider: str) -> Optional[str]:
        return getattr(self, f"{provider}_api_key", None)

    def model_for(self, provider: str) -> Optional[str]:
        return getattr(self, f"{provider}_model", None)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _float(value: Optional[str], default: float) -> float:
    try:
        parsed = float(value) if value is not None else default
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _int(value: Optional[str], default: int) -> int:
    try:
        parsed = int(value) if value is not None else default
    except ValueError:
        return default
    return parsed if parsed >= 0 else default


def get_settings(environ: Optional[Mapping[str, str]] = None) -> GatewaySettings:
    """Read settings from the environment. Called per request; nothing is cached."""
    env = os.environ if environ is None else environ
    lo = _int(_clean(env.get("MOCK_DELAY_MIN_MS")), DEFAULT_MOCK_DELAY_MS[0])
    hi = _int(_clean(env.get("MOCK_DELAY_MAX_MS")), DEFAULT_MOCK_DELAY_MS[1])
    return GatewaySettings(
        gemini_api_key=_clean(env.get(CREDENTIAL_ENV_VARS["gemini"])),
        openai_api_key=_clean(env.get(CREDENTIAL_ENV_VARS["openai"])),
        anthropic_api_key=_clean(env.get(CREDENTIAL_ENV_VARS["anthropic"])),
        gemini_model=_clean(env.get("GEMINI_MODEL")) or DEFAULT_MODELS["gemini"],
        openai_model=_clean(env.get("OPENAI_MODEL")) or DEFAULT_MODELS["openai"],
        anthropic_model=_clean(env.get("ANTHROPIC_MODEL")) or DEFAULT_MODELS["anthropic"],
        upstream_timeout=_float(_clean(env.get("UPSTREAM_TIMEOUT_SECONDS")), DEFAULT_UPSTREAM_TIMEOUT),
        mock_delay_ms=(min(lo, hi), max(lo, hi)),
    )
