from __future__ import annotations

import http
import sys
from dataclasses import replace
from typing import Callable, TextIO

from requestkit.boundary import BoundaryGenerator
from requestkit.builder import BuildSteps, build_request
from requestkit.clock import Clock, RealClock, http_date
from requestkit.logger import get_logger
from requestkit.request import Request, RequestDefaults
from requestkit.response import Response, normalize_response
from requestkit.util import canonicalize_headers, set_header, to_bytes

Handler = Callable[[Request], Response]
HandlerRunner = Callable[[Request, Handler], Response]


def serve(request: Request, handler: Handler) -> Response:
    return normalize_response(handler(request))


def run_handler_with(
    runner: HandlerRunner,
    steps: BuildSteps,
    handler: Handler,
    *,
    clock: Clock | None = None,
    defaults: RequestDefaults | None = None,
    boundaries: BoundaryGenerator | None = None,
) -> Response:
    """Build a request from ``steps``, hand it to ``runner`` and stamp ``Date``.

    Whatever ``runner`` raises propagates unchanged.
    """
    request = build_request(steps, defaults=defaults, boundaries=boundaries)
    resp = runner(request, handler)
    now = (clock or RealClock()).now()
    headers = set_header(canonicalize_headers(resp.headers), "date", http_date(now))
    get_logger().debug(
        "requestkit.run_handler",
        {"method": request.method, "uri": request.uri, "status": resp.status},
    )
    return replace(resp, headers=headers)


def run_handler(
    steps: BuildSteps,
    handler: Handler,
    *,
    clock: Clock | None = None,
    defaults: RequestDefaults | None = None,
    boundaries: BoundaryGenerator | None = None,
) -> Response:
    return run_handler_with(serve, steps, handler, clock=clock, defaults=defaults, boundaries=boundaries)


def response_to_string(resp: Response) -> bytes:
    """Render ``resp`` for debugging: status line, headers, cookies, then the whole body.

    Drains ``resp.body_stream``, so a streamed response can be rendered once.
    """
    status = int(resp.status)
    try:
        reason = http.HTTPStatus(status).phrase
    except ValueError:
        reason = ""

    lines = [f"HTTP/1.1 {status} {reason}".rstrip()]
    for key, values in canonicalize_headers(resp.headers).items():
        for value in values:
            lines.append(f"{key}: {value}")
    for cookie in resp.cookies or []:
        lines.append(f"set-cookie: {cookie}")
    head = ("\r\n".join(lines) + "\r\n\r\n").encode("utf-8")

    parts = [head, to_bytes(resp.body)]
    if resp.body_stream is not None:
        parts.extend(to_bytes(chunk) for chunk in resp.body_stream)
    return b"".join(parts)


def dump_response(resp: Response, out: TextIO | None = None) -> None:
    stream = out if out is not None else sys.stdout
    stream.write(response_to_string(resp).decode("utf-8", errors="replace"))
    stream.write("\n")
