"""
JSON-schema gate for cabling-diagram documents.

Runs before any parsing. Violations are reported one per error as

    SHCD schema error: topology.0.id: Invalid type. Expected: integer, given: string

with ``(root)`` standing in for the document itself.
"""

from __future__ import annotations

import json
import logging
from importlib import resources
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError as JsonSchemaError

from sitegen_core.errors import ShcdSchemaError, ShcdSyntaxError

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA = "shcd-schema.json"

_JSON_TYPES = {
    dict: "object",
    list: "array",
    str: "string",
    bool: "boolean",
    int: "integer",
    float: "number",
    type(None): "null",
}


def json_type_name(value: Any) -> str:
    return _JSON_TYPES.get(type(value), type(value).__name__)


def load_schema(path: Path | str | None = None) -> dict:
    """Read a schema file; ``None`` means the packaged SHCD schema."""
    if path is None:
        text = resources.files("sitegen_core.data").joinpath("schemas", DEFAULT_SCHEMA).read_text(encoding="utf-8")
        source = DEFAULT_SCHEMA
    else:
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"File not found: {p}")
        text = p.read_text(encoding="utf-8")
        source = str(p)
    try:
        schema = json.loads(text)
    except json.JSONDecodeError as e:
        raise ShcdSyntaxError(f"Invalid JSON in schema {source}: {e}") from e
    Draft202012Validator.check_schema(schema)
    return schema


def _path(err: JsonSchemaError) -> str:
    return ".".join(str(p) for p in err.absolute_path) or "(root)"


def _to_schema_error(err: JsonSchemaError) -> ShcdSchemaError:
    path = _path(err)
    if err.validator == "type":
        expected = err.validator_value
        if isinstance(expected, list):
            expected = ", ".join(expected)
        given = json_type_name(err.instance)
        return ShcdSchemaError(path, f"Invalid type. Expected: {expected}, given: {given}", expected, given)
    if err.validator == "required":
        missing = err.message.split("'")[1] if "'" in err.message else err.message
        return ShcdSchemaError(path, f"{missing} is required")
    if err.validator == "enum":
        allowed = ", ".join(json.dumps(v) for v in err.validator_value)
        return ShcdSchemaError(path, f"must be one of the following: {allowed}")
    return ShcdSchemaError(path, err.message)


def schema_errors(document: Any, schema: dict | None = None) -> list[ShcdSchemaError]:
    """Every schema violation in ``document``, ordered by path."""
    validator = Draft202012Validator(schema if schema is not None else load_schema())
    ordered = sorted(validator.iter_errors(document), key=lambda e: [(isinstance(p, str), p) for p in e.absolute_path])
    return [_to_schema_error(e) for e in ordered]


def validate_document(document: Any, schema: dict | None = None) -> None:
    """Raise the first schema violation of ``document``; return None when it is valid.

    Raises:
        ShcdSchemaError: naming the offending path and the expected/given types.
    """
    errors = schema_errors(document, schema)
    if errors:
        if len(errors) > 1:
            logger.debug("%d further schema errors suppressed", len(errors) - 1)
        raise errors[0]
