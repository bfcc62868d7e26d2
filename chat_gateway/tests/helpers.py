from __future__ import annotations
import json
from typing import Any, Dict, List, Optional

import httpx


class RecordingUpstream:
    """httpx transport double: records every request and answers with a canned reply."""

    def __init__(self, status_code: int = 200, body: Any = None, exc: Optional[Exception] = None) -> None:
        self.status_code = status_code
        self.body = body if body is not None else {}
        self.exc = exc
        self.requests: List[httpx.Request] = []
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if isinstance(self.body, (str, bytes)):
            return httpx.Response(self.status_code, content=self.body)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def called(self) -> bool:
        return bool(self.requests)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Dict[str, Any]:
        return json.loads(self.last.content)


def reply_body(provider: str, text: str) -> Dict[str, Any]:
    if provider == "gemini":
        return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}
    if provider == "openai":
        return {"model": "gpt-3.5-turbo", "choices": [{"index": 0, "message": {"role": "assistant", "content": text}}]}
    if provider == "anthropic":
        return {"model": "claude-3-sonnet-20240229", "content": [{"type": "text", "text": text}]}
    raise KeyError(provider)
