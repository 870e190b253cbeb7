"""Final normalization applied once to every built request.

The steps run in a fixed order: the content-length step relies on the
method step having cleared bodies from GET/DELETE/HEAD requests, and the
params step relies on the content-type left by the method step.
"""

from __future__ import annotations

from dataclasses import replace

from requestkit.logger import get_logger
from requestkit.request import BODYLESS_METHODS, BodySource, Request
from requestkit.util import delete_header, parse_url_encoded, set_header, union_params

FORM_URLENCODED = "application/x-www-form-urlencoded"


def build_uri(rq: Request) -> str:
    query = f"?{rq.query_string}" if rq.query_string else ""
    return f"{rq.snaplet_path}{rq.context_path}{rq.path_info}{query}"


def fixup_uri(rq: Request) -> Request:
    return replace(rq, uri=build_uri(rq))


def fixup_method(rq: Request) -> Request:
    if rq.method not in BODYLESS_METHODS:
        return rq
    return replace(
        rq,
        headers=delete_header(rq.headers, "content-type"),
        body=BodySource(),
        content_length=None,
    )


def fixup_content_length(rq: Request) -> Request:
    if rq.content_length is None:
        return replace(rq, headers=delete_header(rq.headers, "content-length"))
    return replace(rq, headers=set_header(rq.headers, "content-length", rq.content_length))


def fixup_params(rq: Request) -> Request:
    query_params = parse_url_encoded(rq.query_string)
    if rq.header("content-type") != FORM_URLENCODED:
        return replace(rq, params=query_params)

    # Parse a private copy; the caller's body keeps its read state.
    data = BodySource(rq.body.data).read()
    body_params = parse_url_encoded(data)
    return replace(rq, body=BodySource(data), params=union_params(query_params, body_params))


def fixup(rq: Request) -> Request:
    rq = fixup_uri(rq)
    rq = fixup_method(rq)
    rq = fixup_content_length(rq)
    rq = fixup_params(rq)
    get_logger().debug(
        "requestkit.fixup",
        {
            "method": rq.method,
            "uri": rq.uri,
            "content_length": rq.content_length,
            "params": sorted(rq.params.keys()),
        },
    )
    return rq
