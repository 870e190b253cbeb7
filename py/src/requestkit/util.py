from __future__ import annotations

import urllib.parse
from typing import Any


def canonicalize_headers(headers: dict[str, Any] | None) -> dict[str, list[str]]:
    if not headers:
        return {}
    out: dict[str, list[str]] = {}
    for key, value in headers.items():
        lower = _header_key(key)
        if not lower:
            continue
        values = value if isinstance(value, list) else [value]
        out.setdefault(lower, []).extend([to_text(v) for v in values])
    return out


def set_header(headers: dict[str, list[str]], key: str, value: Any) -> dict[str, list[str]]:
    out = {k: list(vs) for k, vs in headers.items()}
    out[_header_key(key)] = [to_text(value)]
    return out


def add_header(headers: dict[str, list[str]], key: str, value: Any) -> dict[str, list[str]]:
    out = {k: list(vs) for k, vs in headers.items()}
    out.setdefault(_header_key(key), []).append(to_text(value))
    return out


def delete_header(headers: dict[str, list[str]], key: str) -> dict[str, list[str]]:
    lower = _header_key(key)
    return {k: list(vs) for k, vs in headers.items() if k != lower}


def first_header(headers: dict[str, list[str]], key: str) -> str | None:
    values = headers.get(_header_key(key)) or []
    return values[0] if values else None


def clone_params(params: dict[str, Any] | None) -> dict[str, list[str]]:
    if not params:
        return {}
    out: dict[str, list[str]] = {}
    for key, value in params.items():
        if isinstance(value, (list, tuple)):
            out[to_text(key)] = [to_text(v) for v in value]
        else:
            out[to_text(key)] = [to_text(value)]
    return out


def print_url_encoded(params: dict[str, Any] | None) -> str:
    """Encode a parameter mapping as ``application/x-www-form-urlencoded``.

    Keys are emitted in sorted order and every value of a key is emitted in
    list order, so the same mapping always produces the same bytes.
    """
    cloned = clone_params(params)
    items: list[tuple[str, str]] = []
    for key in sorted(cloned.keys()):
        for value in cloned[key]:
            items.append((key, value))
    return urllib.parse.urlencode(items)


def parse_url_encoded(raw: str | bytes) -> dict[str, list[str]]:
    """Best-effort parse of an url-encoded string; malformed input never raises."""
    if isinstance(raw, (bytes, bytearray, memoryview)):
        raw = bytes(raw).decode("utf-8", errors="replace")
    out: dict[str, list[str]] = {}
    for key, value in urllib.parse.parse_qsl(raw, keep_blank_values=True, strict_parsing=False, errors="replace"):
        out.setdefault(key, []).append(value)
    return out


def union_params(first: dict[str, list[str]], second: dict[str, list[str]]) -> dict[str, list[str]]:
    out = {k: list(vs) for k, vs in first.items()}
    for key, values in second.items():
        out.setdefault(key, []).extend(values)
    return out


def to_text(value: Any) -> str:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8")
    return str(value)


def _header_key(key: Any) -> str:
    return to_text(key).strip().lower()


def to_bytes(value: Any) -> bytes:
    if value is None:
        return b""
    if isinstance(value, bytes):
        return bytes(value)
    if isinstance(value, bytearray):
        return bytes(value)
    if isinstance(value, memoryview):
        return value.tobytes()
    if isinstance(value, str):
        return value.encode("utf-8")
    raise TypeError("body must be bytes-like or str")
