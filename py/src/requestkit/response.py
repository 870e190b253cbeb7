from __future__ import annotations

import json as jsonlib
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from requestkit.util import canonicalize_headers, to_bytes, to_text


@dataclass(slots=True)
class Response:
    status: int
    headers: dict[str, Any]
    body: bytes
    cookies: list[str] = field(default_factory=list)
    body_stream: Iterable[bytes] | None = None


def text(status: int, body: str) -> Response:
    return normalize_response(
        Response(
            status=status,
            headers={"content-type": ["text/plain; charset=utf-8"]},
            body=str(body).encode("utf-8"),
        )
    )


def json(status: int, value: Any) -> Response:
    body = jsonlib.dumps(value, ensure_ascii=False, sort_keys=True).encode("utf-8")
    return normalize_response(
        Response(
            status=status,
            headers={"content-type": ["application/json; charset=utf-8"]},
            body=body,
        )
    )


def stream(status: int, chunks: Iterable[Any], content_type: str | None = None) -> Response:
    headers: dict[str, Any] = {}
    if content_type:
        headers["content-type"] = [str(content_type)]
    return normalize_response(
        Response(
            status=status,
            headers=headers,
            body=b"",
            body_stream=(to_bytes(chunk) for chunk in chunks),
        )
    )


def normalize_response(resp: Response) -> Response:
    status = int(resp.status or 200)
    headers = canonicalize_headers(resp.headers)
    cookies = [to_text(c) for c in (resp.cookies or [])]
    body = to_bytes(resp.body)
    return Response(
        status=status,
        headers=headers,
        body=body,
        cookies=cookies,
        body_stream=resp.body_stream,
    )
