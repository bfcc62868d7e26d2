from __future__ import annotations
from typing import Any, Dict, List

from chat_gateway.providers.base import HTTPProvider
from chat_gateway.providers.types import ProviderName, ProviderRequest

GEMINI_API = "https://generativelanguage.googleapis.com/v1/models/{model}:generateContent"

GENERATION_CONFIG = {
    "temperature": 0.7,
    "topK": 40,
    "topP": 0.95,
    "maxOutputTokens": 1024,
}


class GeminiProvider(HTTPProvider):
    name = ProviderName.GEMINI
    label = "Gemini"

    def build_url(self, req: ProviderRequest) -> str:
        return GEMINI_API.format(model=self.model)

    def build_params(self, req: ProviderRequest) -> Dict[str, str]:
        return {"key": req.api_key or ""}

    def build_payload(self, req: ProviderRequest) -> Dict[str, Any]:
        # Gemini has no system turn in `contents`; system messages are dropped
        contents: List[Dict[str, Any]] = []
        for m in req.conversation:
            if m.role in ("user", "assistant"):
                contents.append({
                    "parts": [{"text": m.content}],
                    "role": "user" if m.role == "user" else "model",
                })
        contents.append({"parts": [{"text": req.message}], "role": "user"})
        return {"contents": contents, "generationConfig": dict(GENERATION_CONFIG)}

    def parse_reply(self, data: Dict[str, Any]) -> str:
        return data["candidates"][0]["content"]["parts"][0]["text"]

    def response_meta(self, data: Dict[str, Any]) -> Dict[str, Any]:
        meta = super().response_meta(data)
        meta["candidates"] = len(data.get("candidates", []))
        return meta
