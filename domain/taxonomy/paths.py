"""
Parsing of exported ancestor paths.

Paths arrive as lists, JSON array strings, or PostgreSQL-style brace literals
(``{6171,100,200}``). Brace literals of ids may have lost the separators between
digit groups, so ids are reassembled heuristically: digits accumulate into a
buffer that is flushed as one id when it reaches 5 digits, when appending the
next token would exceed 5 digits, or when no token remains. This is a known
approximation and is only exact for ids of 4-5 digits.

Every parser returns an empty list for input it does not recognize.
"""

import json
import re
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

T = TypeVar("T")

MAX_ID_DIGITS = 5

_NON_DIGITS_RE = re.compile(r"[^0-9]")


def _coerce_all(values: Sequence[Any], coerce: Callable[[Any], T]) -> list[T]:
    try:
        return [coerce(v) for v in values]
    except (TypeError, ValueError):
        return []


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and value != value:  # NaN
        return True
    return isinstance(value, str) and not value.strip()


def _to_int(value: Any) -> int | None:
    """Coerce one id; a missing id (None, NaN, blank) stays a gap as None."""
    if _is_missing(value):
        return None
    if isinstance(value, bool):
        raise TypeError("bool is not a taxon id")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"Non-integer id: {value!r}")
        return int(value)
    return int(value)


def _to_name(value: Any) -> str | None:
    return None if _is_missing(value) else str(value)


def _parse_json_array(text: str, coerce: Callable[[Any], T]) -> list[T]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return []
    if not isinstance(data, list):
        return []
    return _coerce_all(data, coerce)


def _is_brace_literal(text: str) -> bool:
    return text.startswith("{") and text.endswith("}")


def reassemble_ids(tokens: Sequence[str]) -> list[int]:
    """Rebuild ids from comma tokens whose multi-digit separators were lost."""
    digits = [d for d in (_NON_DIGITS_RE.sub("", t) for t in tokens) if d]

    ids: list[int] = []
    buffer = ""
    for i, token in enumerate(digits):
        if buffer and len(buffer) + len(token) > MAX_ID_DIGITS:
            ids.append(int(buffer))
            buffer = ""
        buffer += token

        nxt = digits[i + 1] if i + 1 < len(digits) else None
        if len(buffer) >= MAX_ID_DIGITS or nxt is None or len(buffer) + len(nxt) > MAX_ID_DIGITS:
            ids.append(int(buffer))
            buffer = ""

    return ids


def _split_quoted(inner: str) -> list[str]:
    parts: list[str] = []
    current = ""
    in_quotes = False
    for ch in inner:
        if ch == '"':
            in_quotes = not in_quotes
            current += ch
        elif ch == "," and not in_quotes:
            parts.append(current)
            current = ""
        else:
            current += ch
    if current:
        parts.append(current)

    cleaned: list[str] = []
    for part in parts:
        t = part.strip()
        if len(t) >= 2 and t.startswith('"') and t.endswith('"'):
            t = t[1:-1]
        cleaned.append(t)
    return cleaned


def parse_id_path(raw: Any) -> list[int | None]:
    """
    Parse an id path into a list of ints. A missing id (None, null, blank) is kept
    as None so the path stays index-aligned with its names.

    Examples:
        >>> parse_id_path([6171, "100"])
        [6171, 100]
        >>> parse_id_path("[6171, null, 100]")
        [6171, None, 100]
        >>> parse_id_path("{6171,10,042}")
        [6171, 10042]
    """
    if isinstance(raw, (list, tuple)):
        return _coerce_all(raw, _to_int)
    if not isinstance(raw, str):
        return []

    s = raw.strip()
    if s.startswith("["):
        return _parse_json_array(s, _to_int)
    if _is_brace_literal(s):
        tokens = [t.strip() for t in s[1:-1].split(",")]
        return reassemble_ids([t for t in tokens if t])
    return []


def parse_name_path(raw: Any) -> list[str | None]:
    """
    Parse a name path into a list of strings; missing names are kept as None.

    Quoted brace tokens may contain commas: ``{Mammalia,"Felis, s.l."}`` gives
    ``["Mammalia", "Felis, s.l."]``.
    """
    if isinstance(raw, (list, tuple)):
        return _coerce_all(raw, _to_name)
    if not isinstance(raw, str):
        return []

    s = raw.strip()
    if s.startswith("["):
        return _parse_json_array(s, _to_name)
    if _is_brace_literal(s):
        return _split_quoted(s[1:-1])
    return []
