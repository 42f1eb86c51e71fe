"""Config loading, JSON serialization and small helpers."""

from __future__ import annotations

import base64
import dataclasses
import json
from pathlib import Path
from typing import Any, Iterable, Protocol, TypeVar, runtime_checkable

from zkidentity import logger

T = TypeVar("T")


@runtime_checkable
class Serializable(Protocol):
    """Anything that can render itself as JSON bytes."""

    def serialize(self) -> bytes: ...


def read_config(path: str | Path, config_type: Any) -> Any:
    """Load JSON from ``path`` into ``config_type`` and return its domain form.

    ``config_type`` needs a ``from_json`` classmethod; the resulting object
    needs ``convert_to_domain``. File and JSON errors propagate.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return config_type.from_json(data).convert_to_domain()


def convert_json_array_to_domain(items: Iterable[Any]) -> list[Any]:
    """Convert each item with its ``convert_to_domain`` method."""
    return [item.convert_to_domain() for item in items]


def _json_default(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def serialize(content: Any) -> bytes:
    """Encode ``content`` as compact UTF-8 JSON.

    Dataclasses become objects, bytes become base64 strings. Raises
    ``TypeError`` or ``ValueError`` for values JSON cannot hold.
    """
    if isinstance(content, (bytes, bytearray)):
        content = _json_default(content)
    text = json.dumps(
        content,
        default=_json_default,
        ensure_ascii=False,
        separators=(",", ":"),
        allow_nan=False,
    )
    for char, escaped in _HTML_ESCAPES.items():
        text = text.replace(char, escaped)
    return text.encode("utf-8")


def ternary(cond: bool, if_true: T, if_false: T) -> T:
    """Return ``if_true`` when ``cond`` holds, else ``if_false``."""
    return if_true if cond else if_false


def fail_on_error(err: BaseException | None, msg: str) -> None:
    """Log ``err`` as fatal through the default logger and exit, if it is set."""
    if err is not None:
        logger.default().fatal(err, msg)