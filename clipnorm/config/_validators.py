from __future__ import annotations

import re
from typing import Any


def _parse_token_tuple(value: Any, *, lowercase: bool = False) -> tuple[str, ...]:
    """Normalize a comma-separated string or sequence into a tuple of tokens."""
    if value in (None, ""):
        return ()
    values = value if isinstance(value, list | tuple | set | frozenset) else str(value).split(",")

    tokens: list[str] = []
    for piece in values:
        token = str(piece).strip()
        if not token:
            continue
        if lowercase:
            token = token.lower()
        if token not in tokens:
            tokens.append(token)
    return tuple(tokens)


def _ensure_regex_list(values: tuple[str, ...], *, name: str) -> tuple[str, ...]:
    for pattern in values:
        if len(pattern) > 500:
            msg = f"{name} pattern is too long"
            raise ValueError(msg)
        try:
            re.compile(pattern)
        except re.error as exc:
            msg = f"{name} pattern {pattern!r} is not a valid regular expression"
            raise ValueError(msg) from exc
    return values


def _ensure_ratio(value: Any, *, name: str) -> float:
    try:
        parsed = float(str(value))
    except ValueError as exc:
        msg = f"{name} must be a valid number"
        raise ValueError(msg) from exc
    if parsed <= 0.0 or parsed >= 1.0:
        msg = f"{name} must be between 0 and 1 (exclusive)"
        raise ValueError(msg)
    return parsed


def _ensure_bounded_int(
    value: Any, *, name: str, default: int, minimum: int, maximum: int
) -> int:
    """Coerce env-style input to an int within ``[minimum, maximum]``.

    Empty values fall back to *default*.
    """
    if value in (None, ""):
        return default
    try:
        parsed = int(str(value).strip())
    except ValueError as exc:
        msg = f"{name} must be an integer, got {value!r}"
        raise ValueError(msg) from exc
    if not minimum <= parsed <= maximum:
        msg = f"{name} must be between {minimum} and {maximum}, got {parsed}"
        raise ValueError(msg)
    return parsed
