from __future__ import annotations
from typing import Any, Dict

from chat_gateway.providers.base import HTTPProvider
from chat_gateway.providers.openai import SYSTEM_PROMPT
from chat_gateway.providers.types import ProviderName, ProviderRequest, history

ANTHROPIC_API = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"


class AnthropicProvider(HTTPProvider):
    name = ProviderName.ANTHROPIC
    label = "Anthropic"

    def build_url(self, req: ProviderRequest) -> str:
        return ANTHROPIC_API

    def build_headers(self, req: ProviderRequest) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": req.api_key or "",
            "anthropic-version": ANTHROPIC_VERSION,
        }

    @staticmethod
    def system_text(req: ProviderRequest) -> str:
        """First system message in the history wins; later ones are dropped."""
        for m in req.conversation:
            if m.role == "system":
                return m.content or SYSTEM_PROMPT
        return SYSTEM_PROMPT

    def build_payload(self, req: ProviderRequest) -> Dict[str, Any]:
        messages = history(req, exclude_system=True) + [{"role": "user", "content": req.message}]
        return {
            "model": self.model,
            "max_tokens": 1000,
            "system": self.system_text(req),
            "messages": messages,
        }

    def parse_reply(self, data: Dict[str, Any]) -> str:
        return data["content"][0]["text"]
