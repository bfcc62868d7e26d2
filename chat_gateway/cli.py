from __future__ import annotations
import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from chat_gateway.config import get_settings
from chat_gateway.gateway import ChatGateway, GatewayResult
from chat_gateway.providers.mock import no_delay
from chat_gateway.providers.registry import ProviderRegistry


def _build_gateway(no_wait: bool = False) -> ChatGateway:
    settings = get_settings()
    registry = ProviderRegistry(settings, mock_delay=no_delay if no_wait else None)
    return ChatGateway(settings, registry)


def _payload(message: str, history: List[Dict[str, Any]], provider: str, api_key: Optional[str]) -> Dict[str, Any]:
    body: Dict[str, Any] = {"message": message, "conversation": history, "provider": provider}
    if api_key:
        body["apiKey"] = api_key
    return body


def _exit_code(result: GatewayResult) -> int:
    if result.ok:
        return 0
    return 2 if result.status_code == 400 else 1


def _load_history(path: Optional[str]) -> List[Dict[str, Any]] | None:
    if not path:
        return []
    p = Path(path)
    if not p.exists():
        print(f"History file not found: {p}", file=sys.stderr)
        return None
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        print(f"Invalid JSON in {p.name}: {e}", file=sys.stderr)
        return None
    if not isinstance(data, list):
        print(f"{p.name} must contain a JSON list of {{role, content}} messages", file=sys.stderr)
        return None
    return data


def cmd_ask(message: str, provider: str, api_key: Optional[str], history_file: Optional[str], no_wait: bool) -> int:
    history = _load_history(history_file)
    if history is None:
        return 2
    gateway = _build_gateway(no_wait)
    result = asyncio.run(gateway.chat(_payload(message, history, provider, api_key)))
    if result.ok:
        print(result.body["response"])
    else:
        print(result.body.get("error", "request failed"), file=sys.stderr)
    return _exit_code(result)


def cmd_chat(provider: str, api_key: Optional[str], no_wait: bool) -> int:
    """Interactive loop; history is kept here and resubmitted every turn."""
    gateway = _build_gateway(no_wait)
    history: List[Dict[str, str]] = []
    print(f"Chatting with provider: {provider}. Type 'exit' to quit.\n")
    while True:
        try:
            user_input = input("You: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nGoodbye!")
            return 0
        if not user_input:
            continue
        if user_input.lower() in {"exit", "quit"}:
            return 0
        result = asyncio.run(gateway.chat(_payload(user_input, history, provider, api_key)))
        if not result.ok:
            print(f"[error] {result.body.get('error')}\n", file=sys.stderr)
            continue
        reply = result.body["response"]
        print(f"Assistant: {reply}\n")
        history.append({"role": "user", "content": user_input})
        history.append({"role": "assistant", "content": reply})


def cmd_serve(host: str, port: int) -> int:
    import uvicorn

    uvicorn.run("chat_gateway.app:app", host=host, port=port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="chat-gateway", description="Chat gateway CLI")
    p.add_argument("command", choices=["ask", "chat", "serve"], help="CLI command")
    p.add_argument("message", nargs="?", default=None, help="Message to send (for ask)")
    p.add_argument("--provider", dest="provider", default="mock", help="gemini | openai | anthropic | mock (default: mock)")
    p.add_argument("--api-key", dest="api_key", default=None, help="Per-request API key (default: provider env var)")
    p.add_argument("--history", dest="history", default=None, help="JSON file with prior [{role, content}] turns (for ask)")
    p.add_argument("--no-delay", dest="no_delay", action="store_true", help="Skip the mock provider's simulated latency")
    p.add_argument("--host", dest="host", default="127.0.0.1", help="Bind host (for serve)")
    p.add_argument("--port", dest="port", type=int, default=8000, help="Bind port (for serve)")
    return p


def main(argv: List[str] | None = None) -> int:
    load_dotenv(Path(__file__).resolve().parents[1] / ".env", override=False)
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "ask":
        if not args.message:
            print("ask requires a message", file=sys.stderr)
            return 2
        return cmd_ask(args.message, args.provider, args.api_key, args.history, args.no_delay)
    if args.command == "chat":
        return cmd_chat(args.provider, args.api_key, args.no_delay)
    if args.command == "serve":
        return cmd_serve(args.host, args.port)
    return 2


if __name__ == "__main__":
    sys.exit(main())
