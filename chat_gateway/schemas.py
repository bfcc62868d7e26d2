from __future__ import annotations
from pathlib import Path
import json
from typing import Any, Dict, List

from jsonschema import Draft202012Validator

SCHEMAS_DIR = Path(__file__).resolve().parent / "response_schemas"
RESPONSE_SCHEMAS = ["gemini", "openai", "anthropic"]


class SchemaValidator:
    """Validates upstream response bodies against the shape each adapter extracts from."""

    def __init__(self, schemas_dir: Path | None = None) -> None:
        root = Path(schemas_dir) if schemas_dir else SCHEMAS_DIR
        self._schemas: Dict[str, Draft202012Validator] = {}
        for name in RESPONSE_SCHEMAS:
            path = root / f"{name}.schema.json"
            with open(path, "r", encoding="utf-8") as f:
                schema = json.load(f)
                self._schemas[name] = Draft202012Validator(schema)

    def validate(self, name: str, data: Any) -> List[str]:
        if name not in self._schemas:
            raise KeyError(f"Unknown schema {name}")
        validator = self._schemas[name]
        errors = [(_path(e.absolute_path), e.message) for e in validator.iter_errors(data)]
        return [f"{path}: {message}" for path, message in sorted(errors)]


def _path(parts) -> str:
    return "/".join(map(str, parts)) or "<root>"
