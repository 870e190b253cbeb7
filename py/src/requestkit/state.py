from __future__ import annotations

from typing import Callable

from requestkit.request import Request, default_request


class RequestState:
    """Sequential holder for the request being built. Performs no validation."""

    __slots__ = ("_request",)

    def __init__(self, request: Request | None = None) -> None:
        self._request = request if request is not None else default_request()

    def get(self) -> Request:
        return self._request

    def put(self, request: Request) -> None:
        self._request = request

    def modify(self, fn: Callable[[Request], Request]) -> None:
        self._request = fn(self._request)
