from __future__ import annotations
import asyncio
import logging
import random
import time
from typing import Awaitable, Callable, Optional, Tuple

from chat_gateway.config import DEFAULT_MOCK_DELAY_MS
from chat_gateway.providers.types import ProviderName, ProviderRequest, ProviderResponse

logger = logging.getLogger(__name__)

GREETING_REPLY = "Hello! It's great to meet you. How can I assist you today?"
HELP_REPLY = "I'm here to help! What specific topic or question would you like to explore?"
THANKS_REPLY = "You're very welcome! I'm glad I could help. Is there anything else you'd like to know?"

GENERIC_REPLIES = (
    "That's an interesting question! Let me help you with that.",
    "I understand what you're asking. Here's what I think...",
    "Great question! Based on what you've shared, I'd suggest...",
    "I'd be happy to help you with that. Here's my perspective...",
    "That's a good point. Let me provide some insights on that topic.",
)

DelayStrategy = Callable[[], Awaitable[None]]


def random_delay(delay_ms: Tuple[int, int] = DEFAULT_MOCK_DELAY_MS, rng: Optional[random.Random] = None) -> DelayStrategy:
    """Sleep a uniformly sampled number of milliseconds to emulate upstream latency."""
    lo, hi = delay_ms
    pick = rng or random

    async def _sleep() -> None:
        await asyncio.sleep(pick.uniform(lo, hi) / 1000.0)

    return _sleep


async def no_delay() -> None:
    return None


def pick_mock_reply(message: str, rng: Optional[random.Random] = None) -> str:
    # plain substring checks: "hi" also matches "this" or "which"
    text = (message or "").lower()
    if "hello" in text or "hi" in text:
        return GREETING_REPLY
    if "help" in text:
        return HELP_REPLY
    if "thank" in text:
        return THANKS_REPLY
    return (rng or random).choice(GENERIC_REPLIES)


class MockProvider:
    """Local stand-in for a real LLM. Never fails and needs no credential."""

    name = ProviderName.MOCK
    label = "Mock"
    model = "mock"

    def __init__(self, delay: Optional[DelayStrategy] = None, rng: Optional[random.Random] = None) -> None:
        self.delay = delay or random_delay(rng=rng)
        self.rng = rng

    async def chat(self, req: ProviderRequest) -> ProviderResponse:
        t0 = time.perf_counter()
        await self.delay()
        content = pick_mock_reply(req.message, self.rng)
        latency_ms = int((time.perf_counter() - t0) * 1000)
        logger.debug("mock reply latency_ms=%d", latency_ms)
        return ProviderResponse(content=content, latency_ms=latency_ms, provider_meta={"mock": True})
