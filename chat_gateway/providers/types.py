from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from chat_gateway.models import ChatMessage


class ProviderName(str, Enum):
    MOCK = "mock"
    GEMINI = "gemini"
    OPENAI = "openai"
    ANTHROPIC = "anthropic"

    @property
    def requires_credential(self) -> bool:
        return self is not ProviderName.MOCK


@dataclass(frozen=True)
class ProviderRequest:
    message: str
    conversation: Sequence[ChatMessage] = ()
    api_key: Optional[str] = None


@dataclass
class ProviderResponse:
    content: str
    latency_ms: int
    provider_meta: Dict[str, Any] = field(default_factory=dict)


def history(req: ProviderRequest, exclude_system: bool = False) -> List[Dict[str, str]]:
    """Conversation as plain role/content dicts, oldest first."""
    return [
        {"role": m.role, "content": m.content}
        for m in req.conversation
        if not (exclude_system and m.role == "system")
    ]
