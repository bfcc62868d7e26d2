from __future__ import annotations
import random
from typing import Callable, Optional

import pytest

from chat_gateway.config import GatewaySettings
from chat_gateway.gateway import ChatGateway
from chat_gateway.providers.mock import no_delay
from chat_gateway.providers.registry import ProviderRegistry
from chat_gateway.tests.helpers import RecordingUpstream


@pytest.fixture
def upstream() -> RecordingUpstream:
    return RecordingUpstream()


@pytest.fixture
def make_gateway() -> Callable[..., ChatGateway]:
    def _make(settings: Optional[GatewaySettings] = None, upstream: Optional[RecordingUpstream] = None) -> ChatGateway:
        s = settings or GatewaySettings()
        registry = ProviderRegistry(
            s,
            transport=upstream.transport if upstream else None,
            mock_delay=no_delay,
        )
        return ChatGateway(s, registry)

    return _make


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1234)
