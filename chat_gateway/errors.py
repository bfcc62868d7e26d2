from __future__ import annotations
from typing import Any, Dict, Optional

REDACTED = "API_KEY_HIDDEN"
_MAX_BODY_CHARS = 500


def redact(text: Optional[str], secret: Optional[str]) -> str:
    """Replace every occurrence of `secret` in `text`."""
    if not text:
        return ""
    if not secret:
        return text
    return text.replace(secret, REDACTED)


class GatewayError(Exception):
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_body(self) -> Dict[str, Any]:
        return {"error": self.message}


class ValidationError(GatewayError):
    """Inbound request is malformed or incomplete. Never reaches an adapter."""

    status_code = 400


class InternalError(GatewayError):
    def __init__(self) -> None:
        super().__init__("Internal server error")


class ProviderError(GatewayError):
    """Any failure attributable to the selected provider; rendered with fallback=true."""

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(message)
        self.provider = provider

    def to_body(self) -> Dict[str, Any]:
        return {
            "error": f"LLM API error: {self.message}",
            "provider": self.provider,
            "fallback": True,
        }


class MissingCredentialError(ProviderError):
    def __init__(self, provider: str, label: str, env_var: str) -> None:
        super().__init__(
            provider,
            f"{label} API key not provided. Please add {env_var} to your "
            "environment variables or pass apiKey in the request.",
        )
        self.env_var = env_var


class UpstreamError(ProviderError):
    def __init__(self, provider: str, label: str, upstream_status: Optional[int], body: str = "") -> None:
        body = (body or "").strip()
        if len(body) > _MAX_BODY_CHARS:
            body = body[:_MAX_BODY_CHARS] + "..."
        if upstream_status is None:
            message = f"{label} API request failed"
        else:
            message = f"{label} API error: {upstream_status}"
        if body:
            message = f"{message} - {body}"
        super().__init__(provider, message)
        self.upstream_status = upstream_status
        self.body = body


class UpstreamTimeoutError(ProviderError):
    def __init__(self, provider: str, label: str, timeout: float) -> None:
        super().__init__(provider, f"{label} API did not respond within {timeout:g}s")
        self.timeout = timeout


class MalformedResponseError(ProviderError):
    def __init__(self, provider: str, label: str, detail: str = "") -> None:
        message = f"Invalid response format from {label} API"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(provider, message)
