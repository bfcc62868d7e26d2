from __future__ import annotations
import logging
from pathlib import Path
from typing import Dict

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from chat_gateway import __version__
from chat_gateway.config import get_settings
from chat_gateway.errors import InternalError
from chat_gateway.gateway import ChatGateway
from chat_gateway.logging_setup import setup_logging
from chat_gateway.models import ChatErrorResponse, ChatResponse
from chat_gateway.providers.registry import ProviderRegistry
from chat_gateway.providers.types import ProviderName
from chat_gateway.schemas import SchemaValidator

# Load .env from repo root (dev convenience); real environment wins
load_dotenv(Path(__file__).resolve().parents[1] / ".env", override=False)
setup_logging()

logger = logging.getLogger(__name__)

# schema files are read once per process
response_validator = SchemaValidator()


class Health(BaseModel):
    status: str


class ProviderInfo(BaseModel):
    enabled: bool
    model: str


class VersionInfo(BaseModel):
    version: str
    providers: Dict[str, ProviderInfo]


app = FastAPI(title="Chat Gateway", version=__version__)

# The widget is embedded in arbitrary host pages
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=InternalError().to_body())


def get_gateway() -> ChatGateway:
    # settings are re-read for every request so key changes apply without restart
    settings = get_settings()
    return ChatGateway(settings, ProviderRegistry(settings, validator=response_validator))


@app.get("/health", response_model=Health)
async def health():
    return Health(status="ok")


@app.get("/version", response_model=VersionInfo)
async def version():
    s = get_settings()
    providers = {ProviderName.MOCK.value: ProviderInfo(enabled=True, model="mock")}
    for p in (ProviderName.GEMINI, ProviderName.OPENAI, ProviderName.ANTHROPIC):
        providers[p.value] = ProviderInfo(enabled=bool(s.api_key_for(p.value)), model=s.model_for(p.value))
    return VersionInfo(version=__version__, providers=providers)


@app.post(
    "/api/chat",
    response_model=ChatResponse,
    responses={400: {"model": ChatErrorResponse}, 500: {"model": ChatErrorResponse}},
)
async def chat(request: Request, gateway: ChatGateway = Depends(get_gateway)):
    try:
        payload = await request.json()
    except ValueError:
        logger.warning("chat request body is not valid JSON")
        return JSONResponse(status_code=500, content=InternalError().to_body())
    result = await gateway.chat(payload)
    return JSONResponse(status_code=result.status_code, content=result.body)
