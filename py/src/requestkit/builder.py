from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable

from requestkit.boundary import BoundaryGenerator, RandomBoundaryGenerator
from requestkit.fixup import FORM_URLENCODED, build_uri, fixup
from requestkit.logger import get_logger
from requestkit.multipart import MultipartParams, content_type_for, encode_multipart
from requestkit.request import BodySource, Request, RequestDefaults, default_request
from requestkit.state import RequestState
from requestkit.util import add_header, clone_params, print_url_encoded, set_header, to_bytes, to_text


@dataclass(frozen=True, slots=True)
class GetRequest:
    pass


@dataclass(frozen=True, slots=True)
class DeleteRequest:
    pass


@dataclass(frozen=True, slots=True)
class RawBodyRequest:
    method: str
    body: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", to_text(self.method or "").strip().upper())
        object.__setattr__(self, "body", to_bytes(self.body))


@dataclass(frozen=True, slots=True)
class MultipartPostRequest:
    params: MultipartParams = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", tuple(self.params or ()))


@dataclass(frozen=True, slots=True)
class UrlEncodedPostRequest:
    params: dict[str, list[str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", clone_params(self.params))


RequestType = GetRequest | DeleteRequest | RawBodyRequest | MultipartPostRequest | UrlEncodedPostRequest


class RequestBuilder:
    """Applies configuration steps, in call order, to an in-progress request.

    Every step takes effect immediately. Steps do not re-check each other:
    a body left on a GET request is only removed by the fixup pass that
    ``build()`` runs at the end.
    """

    def __init__(
        self,
        state: RequestState | None = None,
        *,
        defaults: RequestDefaults | None = None,
        boundaries: BoundaryGenerator | None = None,
    ) -> None:
        self.state = state if state is not None else RequestState(default_request(defaults))
        self.boundaries = boundaries or RandomBoundaryGenerator()

    def set_request_type(self, request_type: RequestType) -> RequestBuilder:
        match request_type:
            case GetRequest():
                self._clear_body("GET")
            case DeleteRequest():
                self._clear_body("DELETE")
            case RawBodyRequest(method=method, body=body):
                self._set_body(method, body)
            case MultipartPostRequest(params=params):
                self._encode_multipart(params)
            case UrlEncodedPostRequest(params=params):
                self.set_header("Content-Type", FORM_URLENCODED)
                self._set_body("POST", print_url_encoded(params).encode("ascii"))
            case _:
                raise TypeError(f"unsupported request type: {type(request_type).__name__}")

        rq = self.state.get()
        get_logger().debug(
            "requestkit.request_type",
            {"type": type(request_type).__name__, "method": rq.method, "content_length": rq.content_length},
        )
        return self

    def set_query_string_raw(self, raw: str | bytes) -> RequestBuilder:
        self.state.modify(lambda rq: replace(rq, query_string=to_text(raw or "")))
        return self._recompute_uri()

    def set_query_string(self, params: dict[str, Any] | None) -> RequestBuilder:
        return self.set_query_string_raw(print_url_encoded(params))

    def set_header(self, key: str, value: Any) -> RequestBuilder:
        self.state.modify(lambda rq: replace(rq, headers=set_header(rq.headers, key, value)))
        return self

    def add_header(self, key: str, value: Any) -> RequestBuilder:
        self.state.modify(lambda rq: replace(rq, headers=add_header(rq.headers, key, value)))
        return self

    def set_content_type(self, content_type: str) -> RequestBuilder:
        return self.set_header("Content-Type", content_type)

    def set_secure(self, secure: bool) -> RequestBuilder:
        self.state.modify(lambda rq: replace(rq, is_secure=bool(secure)))
        return self

    def set_http_version(self, version: tuple[int, int]) -> RequestBuilder:
        major, minor = version
        self.state.modify(lambda rq: replace(rq, version=(int(major), int(minor))))
        return self

    def set_request_path(self, path: str | bytes) -> RequestBuilder:
        # The path must start with "/" and carry no query string; neither is checked.
        self.state.modify(lambda rq: replace(rq, snaplet_path="", context_path="", path_info=to_text(path)))
        return self._recompute_uri()

    def get(self, path: str, params: dict[str, Any] | None = None) -> RequestBuilder:
        self.set_request_type(GetRequest())
        self.set_query_string(params)
        return self.set_request_path(path)

    def delete(self, path: str, params: dict[str, Any] | None = None) -> RequestBuilder:
        self.set_request_type(DeleteRequest())
        self.set_query_string(params)
        return self.set_request_path(path)

    def post_url_encoded(self, path: str, params: dict[str, Any] | None = None) -> RequestBuilder:
        self.set_request_type(UrlEncodedPostRequest(params or {}))
        return self.set_request_path(path)

    def post_multipart(self, path: str, params: MultipartParams) -> RequestBuilder:
        self.set_request_type(MultipartPostRequest(params))
        return self.set_request_path(path)

    def put(self, path: str, content_type: str, body: Any) -> RequestBuilder:
        self.set_request_type(RawBodyRequest("PUT", body))
        self.set_header("Content-Type", content_type)
        return self.set_request_path(path)

    def post_raw(self, path: str, content_type: str, body: Any) -> RequestBuilder:
        self.set_request_type(RawBodyRequest("POST", body))
        self.set_header("Content-Type", content_type)
        return self.set_request_path(path)

    def build(self) -> Request:
        self.state.modify(fixup)
        return self.state.get()

    def _recompute_uri(self) -> RequestBuilder:
        self.state.modify(lambda rq: replace(rq, uri=build_uri(rq)))
        return self

    def _clear_body(self, method: str) -> None:
        self.state.modify(lambda rq: replace(rq, method=method, body=BodySource(), content_length=None))

    def _set_body(self, method: str, body: bytes) -> None:
        self.state.modify(lambda rq: replace(rq, method=method, body=BodySource(body), content_length=len(body)))

    def _encode_multipart(self, params: MultipartParams) -> None:
        body, boundary = encode_multipart(params, self.boundaries)
        self.set_header("Content-Type", content_type_for(boundary))
        self._set_body("POST", body)
        get_logger().debug(
            "requestkit.multipart",
            {"boundary": boundary, "parts": len(params), "content_length": len(body)},
        )


BuildSteps = Callable[[RequestBuilder], object]


def build_request(
    steps: BuildSteps,
    *,
    defaults: RequestDefaults | None = None,
    boundaries: BoundaryGenerator | None = None,
) -> Request:
    """Run ``steps`` against a fresh default request, then apply the fixup pass once."""
    builder = RequestBuilder(defaults=defaults, boundaries=boundaries)
    steps(builder)
    return builder.build()
