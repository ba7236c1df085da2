"""Tolerant JSON reader for lock files written as JSON with comments.

bun.lock is JSONC: it allows ``//`` and ``/* */`` comments and trailing commas
before ``}`` or ``]``. Both are removed outside of string literals and the
result is handed to ``json``.
"""

from __future__ import annotations

import json
from typing import Any


class LenientJSONError(ValueError):
    """Raised when text cannot be read even after removing JSONC extensions."""


def _string_end(text: str, start: int) -> int:
    # ``start`` points at the opening quote; return the index after the closing one.
    i = start + 1
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == '"':
            return i + 1
        i += 1
    raise LenientJSONError(f"Unterminated string starting at offset {start}")


def strip_jsonc(text: str) -> str:
    """Return ``text`` with comments and trailing commas removed."""
    out: list[str] = []
    pending_comma: int | None = None
    i = 0
    n = len(text)

    while i < n:
        ch = text[i]
        if ch == '"':
            end = _string_end(text, i)
            out.append(text[i:end])
            pending_comma = None
            i = end
            continue
        if text.startswith("//", i):
            newline = text.find("\n", i)
            i = n if newline == -1 else newline
            continue
        if text.startswith("/*", i):
            close = text.find("*/", i + 2)
            if close == -1:
                raise LenientJSONError(f"Unterminated comment starting at offset {i}")
            out.append(" ")
            i = close + 2
            continue

        if ch in "}]" and pending_comma is not None:
            out[pending_comma] = ""
        if ch == ",":
            pending_comma = len(out)
        elif not ch.isspace():
            pending_comma = None
        out.append(ch)
        i += 1

    return "".join(out)


def parse_lenient_json(text: str) -> Any:
    """Parse JSON that may contain comments and trailing commas.

    Raises:
        LenientJSONError: if the text is not valid JSON after cleanup.
    """
    cleaned = strip_jsonc(text)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise LenientJSONError(f"Invalid JSON: {exc}") from exc
