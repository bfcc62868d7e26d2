from __future__ import annotations
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from chat_gateway.config import CREDENTIAL_ENV_VARS, GatewaySettings
from chat_gateway.errors import (
    GatewayError,
    InternalError,
    MissingCredentialError,
    ProviderError,
    ValidationError,
)
from chat_gateway.models import ChatErrorResponse, ChatRequest, ChatResponse
from chat_gateway.providers.registry import ProviderRegistry
from chat_gateway.providers.types import ProviderName, ProviderRequest

logger = logging.getLogger(__name__)


@dataclass
class GatewayResult:
    status_code: int
    body: Dict[str, Any]

    @property
    def ok(self) -> bool:
        return self.status_code == 200

    @classmethod
    def from_error(cls, exc: GatewayError) -> "GatewayResult":
        body = ChatErrorResponse(**exc.to_body()).model_dump(exclude_none=True)
        return cls(exc.status_code, body)


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ChatGateway:
    """
    Normalizes one chat request, dispatches it to the selected provider and
    wraps the outcome in the uniform success/error envelope.

    Stateless: the caller resubmits the whole conversation every time and
    credentials come from the request or from `settings`, never from a cache.
    """

    def __init__(self, settings: Optional[GatewaySettings] = None, registry: Optional[ProviderRegistry] = None) -> None:
        self.settings = settings or GatewaySettings()
        self.registry = registry or ProviderRegistry(self.settings)

    def resolve_credential(self, provider: ProviderName, api_key: Optional[str]) -> Optional[str]:
        if not provider.requires_credential:
            return None
        if api_key:
            return api_key
        key = self.settings.api_key_for(provider.value)
        if not key:
            adapter = self.registry.get(provider)
            raise MissingCredentialError(provider.value, adapter.label, CREDENTIAL_ENV_VARS[provider.value])
        return key

    async def chat(self, payload: Any) -> GatewayResult:
        try:
            return await self._chat(payload)
        except ValidationError as e:
            logger.info("rejected chat request: %s", e.message)
            return GatewayResult.from_error(e)
        except Exception:
            logger.exception("chat request failed outside provider dispatch")
            return GatewayResult.from_error(InternalError())

    async def _chat(self, payload: Any) -> GatewayResult:
        req = ChatRequest.parse(payload)
        provider = self.registry.resolve(req.provider)
        try:
            api_key = self.resolve_credential(provider, req.api_key)
            adapter = self.registry.get(provider)
            resp = await adapter.chat(
                ProviderRequest(message=req.message, conversation=tuple(req.conversation), api_key=api_key)
            )
        except ProviderError as e:
            logger.warning("provider=%s failed: %s", provider.value, e.message)
            return GatewayResult.from_error(e)
        except Exception:
            logger.exception("provider=%s raised unexpectedly", provider.value)
            return GatewayResult.from_error(ProviderError(provider.value, "Unexpected provider failure"))

        logger.info(
            "provider=%s turns=%d message_len=%d latency_ms=%d",
            provider.value, len(req.conversation), len(req.message), resp.latency_ms,
        )
        body = ChatResponse(response=resp.content, timestamp=_utcnow(), provider=provider.value)
        return GatewayResult(200, body.model_dump())
