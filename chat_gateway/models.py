from __future__ import annotations
from collections.abc import Mapping
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from chat_gateway.errors import ValidationError

Role = Literal["user", "assistant", "system"]

MESSAGE_REQUIRED = "Message is required"


class ChatMessage(BaseModel):
    # the widget also sends id/timestamp per message; those are dropped
    model_config = ConfigDict(frozen=True, extra="ignore")

    role: Role
    content: str


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    message: str = Field(..., min_length=1)
    conversation: List[ChatMessage] = Field(default_factory=list)
    provider: str = "mock"
    api_key: Optional[str] = Field(default=None, alias="apiKey")

    @field_validator("conversation", mode="before")
    @classmethod
    def _default_conversation(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("provider", mode="before")
    @classmethod
    def _default_provider(cls, v: Any) -> Any:
        # anything that is not a provider name string is routed like an unknown name
        return v if isinstance(v, str) and v else "mock"

    @classmethod
    def parse(cls, payload: Any) -> "ChatRequest":
        """
        Validate a raw JSON payload. The message check runs first so a request
        without a message always fails with the same error, whatever else it holds.
        Error text lists offending fields only, never their values.
        """
        if not isinstance(payload, Mapping) or not payload.get("message"):
            raise ValidationError(MESSAGE_REQUIRED)
        try:
            return cls.model_validate(dict(payload))
        except PydanticValidationError as e:
            fields = sorted({".".join(str(p) for p in err["loc"]) or "body" for err in e.errors()})
            raise ValidationError(f"Invalid chat request: {', '.join(fields)}") from None


class ChatResponse(BaseModel):
    response: str
    timestamp: str
    provider: str


class ChatErrorResponse(BaseModel):
    error: str
    provider: Optional[str] = None
    fallback: Optional[bool] = None
