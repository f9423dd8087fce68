"""Canonical JSON text for receipt bodies.

Receipts are meant to be diffed and read by people, so unlike a hashing
encoding the text keeps insertion order and is pretty-printed:
- keys in the order the caller built them (never sorted)
- fixed indentation, ``", "`` / ``": "`` separators
- ensure_ascii=False, UTF-8 on disk
- a single trailing newline
"""

from __future__ import annotations

import json
from typing import Any


class ReceiptDecodeError(ValueError):
    """Raised when receipt content is not a UTF-8 JSON object."""


def dumps_receipt(body: dict[str, Any], indent: int = 2) -> str:
    """Return the canonical text for a receipt body."""
    return json.dumps(body, indent=indent, ensure_ascii=False) + "\n"


def loads_receipt(content: str | bytes) -> dict[str, Any]:
    """Parse receipt content into a dict.

    *content* may be raw file bytes, which must be UTF-8.

    Raises
    ------
    ReceiptDecodeError
        If *content* is not UTF-8, not valid JSON, nested too deeply to
        decode, or its top level is not an object.
    """
    try:
        text = content.decode("utf-8") if isinstance(content, bytes) else content
        data = json.loads(text)
    except UnicodeDecodeError as exc:
        raise ReceiptDecodeError(f"not valid UTF-8: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ReceiptDecodeError(str(exc)) from exc
    except RecursionError as exc:
        raise ReceiptDecodeError("JSON nested too deeply to decode") from exc
    if not isinstance(data, dict):
        raise ReceiptDecodeError(
            f"expected a JSON object, got {type(data).__name__}"
        )
    return data
