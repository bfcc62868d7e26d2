from __future__ import annotations
import asyncio
import logging
import time
from typing import Any, Dict, Optional

import httpx

from chat_gateway.config import DEFAULT_UPSTREAM_TIMEOUT
from chat_gateway.errors import (
    MalformedResponseError,
    UpstreamError,
    UpstreamTimeoutError,
    redact,
)
from chat_gateway.providers.types import ProviderName, ProviderRequest, ProviderResponse
from chat_gateway.schemas import SchemaValidator

logger = logging.getLogger(__name__)


class HTTPProvider:
    """
    One upstream LLM API. Subclasses describe the wire format
    (url, headers, payload, reply extraction); `chat` performs exactly one
    POST and turns every failure into a ProviderError subclass.
    """

    name: ProviderName
    label: str

    def __init__(
        self,
        model: str,
        timeout: float = DEFAULT_UPSTREAM_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        validator: Optional[SchemaValidator] = None,
    ) -> None:
        self.model = model
        self.timeout = timeout
        self.transport = transport
        self.validator = validator or SchemaValidator()

    def build_url(self, req: ProviderRequest) -> str:
        raise NotImplementedError

    def build_params(self, req: ProviderRequest) -> Dict[str, str]:
        return {}

    def build_headers(self, req: ProviderRequest) -> Dict[str, str]:
        return {"Content-Type": "application/json"}

    def build_payload(self, req: ProviderRequest) -> Dict[str, Any]:
        raise NotImplementedError

    def parse_reply(self, data: Dict[str, Any]) -> str:
        raise NotImplementedError

    def response_meta(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return {k: data[k] for k in ("model", "usage", "usageMetadata") if k in data}

    async def _post(
        self,
        url: str,
        payload: Dict[str, Any],
        headers: Dict[str, str],
        params: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            return await asyncio.wait_for(
                client.post(url, params=params or None, json=payload, headers=headers),
                timeout=self.timeout,
            )

    async def chat(self, req: ProviderRequest) -> ProviderResponse:
        provider = self.name.value
        url = self.build_url(req)
        safe_url = redact(url, req.api_key)
        t0 = time.perf_counter()
        try:
            r = await self._post(url, self.build_payload(req), self.build_headers(req), self.build_params(req))
        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.error("%s API timeout after %ss url=%s", self.label, self.timeout, safe_url)
            raise UpstreamTimeoutError(provider, self.label, self.timeout) from None
        except httpx.HTTPError as e:
            detail = redact(str(e), req.api_key)
            logger.error("%s API transport error url=%s error=%s", self.label, safe_url, detail)
            raise UpstreamError(provider, self.label, None, detail) from None
        latency_ms = int((time.perf_counter() - t0) * 1000)

        if not r.is_success:
            body = redact(r.text, req.api_key)
            logger.error(
                "%s API error status=%s reason=%s url=%s latency_ms=%d",
                self.label, r.status_code, r.reason_phrase, safe_url, latency_ms,
            )
            raise UpstreamError(provider, self.label, r.status_code, body)

        try:
            data = r.json()
        except ValueError:
            raise MalformedResponseError(provider, self.label, "body is not JSON") from None
        errors = self.validator.validate(provider, data)
        if errors:
            logger.error("%s API response failed shape check: %s", self.label, "; ".join(errors))
            raise MalformedResponseError(provider, self.label, errors[0])

        content = self.parse_reply(data)
        logger.info("%s API ok model=%s latency_ms=%d reply_len=%d", self.label, self.model, latency_ms, len(content))
        return ProviderResponse(content=content, latency_ms=latency_ms, provider_meta=self.response_meta(data))
