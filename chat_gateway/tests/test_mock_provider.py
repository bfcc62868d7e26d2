import random

import pytest

from chat_gateway.providers.mock import (
    GENERIC_REPLIES,
    GREETING_REPLY,
    HELP_REPLY,
    THANKS_REPLY,
    MockProvider,
    no_delay,
    pick_mock_reply,
    random_delay,
)
from chat_gateway.providers.types import ProviderRequest


@pytest.mark.parametrize("message", ["Hello there", "HELLO", "oh hi", "Hi, I need help", "hi and thank you"])
def test_greeting_wins(message):
    assert pick_mock_reply(message) == GREETING_REPLY


@pytest.mark.parametrize("message", ["Can you HELP me?", "need some help please"])
def test_help_reply(message):
    assert pick_mock_reply(message) == HELP_REPLY


def test_help_beats_thanks():
    assert pick_mock_reply("help, and thank you") == HELP_REPLY


@pytest.mark.parametrize("message", ["Thank you!", "THANKS a lot"])
def test_thanks_reply(message):
    assert pick_mock_reply(message) == THANKS_REPLY


def test_substring_match_is_literal():
    # "this" contains "hi"
    assert pick_mock_reply("what is this") == GREETING_REPLY


def test_no_keyword_picks_from_fixed_pool(seeded_rng):
    seen = {pick_mock_reply("Tell me about the weather", seeded_rng) for _ in range(200)}
    assert seen <= set(GENERIC_REPLIES)
    assert len(seen) > 1


def test_no_keyword_is_reproducible_with_seed():
    a = [pick_mock_reply("weather report", random.Random(7)) for _ in range(3)]
    b = [pick_mock_reply("weather report", random.Random(7)) for _ in range(3)]
    assert a == b


@pytest.mark.asyncio
async def test_mock_provider_runs_delay_strategy():
    calls = []

    async def fake_delay():
        calls.append(1)

    provider = MockProvider(delay=fake_delay)
    resp = await provider.chat(ProviderRequest(message="hello"))
    assert calls == [1]
    assert resp.content == GREETING_REPLY
    assert resp.provider_meta == {"mock": True}


@pytest.mark.asyncio
async def test_random_delay_samples_within_range(monkeypatch):
    slept = []

    async def fake_sleep(seconds):
        slept.append(seconds)

    monkeypatch.setattr("chat_gateway.providers.mock.asyncio.sleep", fake_sleep)
    delay = random_delay((1000, 3000), rng=random.Random(3))
    for _ in range(20):
        await delay()
    assert len(slept) == 20
    assert all(1.0 <= s <= 3.0 for s in slept)


@pytest.mark.asyncio
async def test_no_delay_returns_immediately():
    assert await no_delay() is None
