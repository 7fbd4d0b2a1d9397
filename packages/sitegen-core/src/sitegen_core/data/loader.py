"""
Readers for every file sitegen consumes: SHCD JSON exports, seed config
YAML and reservation lists.

Text that cannot be decoded is a ShcdSyntaxError. Text that decodes but
does not fit the requested model is a ValueError naming the file and the
first offending fields.
"""

import json
from pathlib import Path
from typing import Any, TypeVar, overload

import yaml
from pydantic import BaseModel, TypeAdapter, ValidationError

from sitegen_core.errors import ShcdSyntaxError

T = TypeVar("T")
U = TypeVar("U")
M = TypeVar("M", bound=BaseModel)

# how many pydantic problems a structure error spells out
_SHOWN_PROBLEMS = 3


def _decode(raw: bytes, source: str) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ShcdSyntaxError(f"{source} is not UTF-8 text: {e.reason} at byte {e.start}") from e


def _read_text(path: Path | str) -> tuple[Path, str]:
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"File not found: {p}")
    return p, _decode(p.read_bytes(), str(p))


def parse_json_text(text: str | bytes, source: str = "<input>") -> Any:
    """Decode a JSON document, reporting malformed input as a syntax error."""
    if isinstance(text, (bytes, bytearray)):
        text = _decode(bytes(text), source)
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ShcdSyntaxError(f"Invalid JSON in {source} at line {e.lineno} column {e.colno}: {e.msg}") from e


def read_json_raw(path: Path | str) -> Any:
    p, text = _read_text(path)
    return parse_json_text(text, str(p))


def read_yaml_raw(path: Path | str) -> Any:
    p, text = _read_text(path)
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        where = f" at line {mark.line + 1}" if mark is not None else ""
        raise ShcdSyntaxError(f"Invalid YAML in {p}{where}: {getattr(e, 'problem', None) or e}") from e
    if data is None:
        raise ShcdSyntaxError(f"Empty YAML file: {p}")
    return data


def _problems(err: ValidationError) -> str:
    shown = [
        f"{'.'.join(str(p) for p in item['loc']) or '(root)'}: {item['msg']}"
        for item in err.errors()[:_SHOWN_PROBLEMS]
    ]
    hidden = err.error_count() - len(shown)
    if hidden > 0:
        shown.append(f"and {hidden} more")
    return "; ".join(shown)


@overload
def load_yaml_typed(path: Path | str, *, adapter: TypeAdapter[T]) -> T: ...


@overload
def load_yaml_typed(path: Path | str, *, model: type[T]) -> T: ...


def load_yaml_typed(
    path: Path | str,
    *,
    adapter: TypeAdapter[T] | None = None,
    model: type[T] | None = None,
) -> T:
    """Read a YAML file into a typed object; pass exactly one of ``adapter`` or ``model``.

        load_yaml_typed("seed.yaml", model=SeedConfig)
        load_yaml_typed("reservations.yaml", adapter=TypeAdapter(list[IPReservation]))
    """
    if (adapter is None) == (model is None):
        raise ValueError("Provide exactly one of 'adapter' or 'model'.")
    target = adapter if adapter is not None else TypeAdapter(model)
    data = read_yaml_raw(path)
    try:
        return target.validate_python(data)
    except ValidationError as e:
        raise ValueError(f"Invalid structure in {path}: {_problems(e)}") from e


def load_yaml_list(path: Path | str, item_model: type[U]) -> list[U]:
    """Load a YAML sequence into ``list[item_model]``."""
    return load_yaml_typed(path, adapter=TypeAdapter(list[item_model]))  # type: ignore[index]


def load_config(path: Path | str | None, model: type[M]) -> M:
    """Load an optional YAML config file; no path means the model's defaults."""
    if path is None:
        return model()
    return load_yaml_typed(path, model=model)
