from __future__ import annotations
from typing import Any, Dict

from chat_gateway.providers.base import HTTPProvider
from chat_gateway.providers.types import ProviderName, ProviderRequest, history

OPENAI_API = "https://api.openai.com/v1/chat/completions"
SYSTEM_PROMPT = "You are a helpful AI assistant."


class OpenAIProvider(HTTPProvider):
    name = ProviderName.OPENAI
    label = "OpenAI"

    def build_url(self, req: ProviderRequest) -> str:
        return OPENAI_API

    def build_headers(self, req: ProviderRequest) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {req.api_key}",
            "Content-Type": "application/json",
        }

    def build_payload(self, req: ProviderRequest) -> Dict[str, Any]:
        messages = (
            [{"role": "system", "content": SYSTEM_PROMPT}]
            + history(req)
            + [{"role": "user", "content": req.message}]
        )
        return {
            "model": self.model,
            "messages": messages,
            "temperature": 0.7,
            "max_tokens": 1000,
        }

    def parse_reply(self, data: Dict[str, Any]) -> str:
        return data["choices"][0]["message"]["content"]
