from __future__ import annotations
import logging
from typing import Any, Dict, Optional

import httpx

from chat_gateway.config import GatewaySettings
from chat_gateway.providers.anthropic import AnthropicProvider
from chat_gateway.providers.gemini import GeminiProvider
from chat_gateway.providers.mock import DelayStrategy, MockProvider, random_delay
from chat_gateway.providers.openai import OpenAIProvider
from chat_gateway.providers.types import ProviderName
from chat_gateway.schemas import SchemaValidator

logger = logging.getLogger(__name__)


class ProviderRegistry:
    def __init__(
        self,
        settings: Optional[GatewaySettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        mock_delay: Optional[DelayStrategy] = None,
        validator: Optional[SchemaValidator] = None,
    ) -> None:
        s = settings or GatewaySettings()
        validator = validator or SchemaValidator()
        self._providers: Dict[ProviderName, Any] = {
            ProviderName.MOCK: MockProvider(delay=mock_delay or random_delay(s.mock_delay_ms)),
            ProviderName.GEMINI: GeminiProvider(s.gemini_model, s.upstream_timeout, transport, validator),
            ProviderName.OPENAI: OpenAIProvider(s.openai_model, s.upstream_timeout, transport, validator),
            ProviderName.ANTHROPIC: AnthropicProvider(s.anthropic_model, s.upstream_timeout, transport, validator),
        }

    @staticmethod
    def resolve(provider: Optional[str]) -> ProviderName:
        """Map a requested provider name onto a supported one; anything unknown runs as mock."""
        try:
            return ProviderName(provider or ProviderName.MOCK.value)
        except ValueError:
            logger.warning("unknown provider %r requested; using mock", provider)
            return ProviderName.MOCK

    def get(self, provider: ProviderName | str):
        if not isinstance(provider, ProviderName):
            provider = self.resolve(provider)
        return self._providers[provider]
