"""Defensive parsing of JSON answers from the generative AI service.

Model output often wraps JSON in markdown fences, adds ``//`` or ``/* */``
comments, or surrounds it with prose.  ``parse_json_response`` sanitises
the text, attempts a parse and falls back to a caller-supplied default
structure instead of raising.
"""

from __future__ import annotations

import copy
import json
import logging
import re
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json|JSON)?[ \t]*\n?(.*?)```", re.DOTALL)


@dataclass(frozen=True)
class ParsedResponse:
    """Result of parsing a model answer."""

    data: dict[str, Any]
    used_fallback: bool
    error: str | None = None


def extract_json(text: str) -> str | None:
    """Pull the JSON payload out of a model answer.

    Prefers the first fenced block; otherwise takes the span from the first
    ``{`` to the last ``}``.  Returns None when neither is present.
    """
    match = _FENCE_RE.search(text)
    if match:
        return match.group(1).strip()

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    return text[start : end + 1]


def strip_json_comments(text: str) -> str:
    """Remove ``//`` line comments and ``/* */`` block comments.

    Comment markers inside string literals (e.g. URLs) are preserved.
    """
    out: list[str] = []
    i = 0
    n = len(text)
    in_string = False
    while i < n:
        ch = text[i]
        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
            continue

        if ch == '"':
            in_string = True
            out.append(ch)
            i += 1
        elif text.startswith("//", i):
            newline = text.find("\n", i)
            i = n if newline == -1 else newline
        elif text.startswith("/*", i):
            close = text.find("*/", i + 2)
            i = n if close == -1 else close + 2
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def parse_json_response(text: str | None, fallback: dict[str, Any]) -> ParsedResponse:
    """Parse a JSON object from ``text``, or return a copy of ``fallback``."""
    if not text:
        return ParsedResponse(copy.deepcopy(fallback), used_fallback=True, error="empty response")

    payload = extract_json(text)
    if payload is None:
        logger.warning("No JSON object found in AI response")
        return ParsedResponse(copy.deepcopy(fallback), used_fallback=True, error="no JSON found")

    try:
        data = json.loads(strip_json_comments(payload))
    except json.JSONDecodeError as exc:
        logger.warning("Invalid JSON in AI response: %s", exc)
        return ParsedResponse(copy.deepcopy(fallback), used_fallback=True, error=str(exc))

    if not isinstance(data, dict):
        logger.warning("AI response JSON is a %s, expected an object", type(data).__name__)
        return ParsedResponse(
            copy.deepcopy(fallback),
            used_fallback=True,
            error=f"expected object, got {type(data).__name__}",
        )

    return ParsedResponse(data, used_fallback=False)
