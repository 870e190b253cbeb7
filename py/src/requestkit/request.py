from __future__ import annotations

from dataclasses import dataclass, field

from requestkit.errors import body_consumed_error
from requestkit.util import first_header, to_bytes

BODYLESS_METHODS = frozenset({"GET", "DELETE", "HEAD"})


@dataclass(slots=True)
class BodySource:
    """Request body that can be read exactly once.

    Replacing a request body means installing a new ``BodySource``; a second
    ``read()`` on the same source raises ``requestkit.body_consumed``.
    """

    data: bytes = b""
    consumed: bool = field(default=False, compare=False)

    def __post_init__(self) -> None:
        self.data = to_bytes(self.data)

    def read(self) -> bytes:
        if self.consumed:
            raise body_consumed_error()
        self.consumed = True
        return self.data

    def __len__(self) -> int:
        return len(self.data)


@dataclass(slots=True)
class RequestDefaults:
    server_name: str = "localhost"
    server_port: int = 8080
    remote_addr: str = "127.0.0.1"
    remote_port: int = 60000
    local_addr: str = "127.0.0.1"
    local_port: int = 8080
    local_hostname: str = "localhost"
    is_secure: bool = False
    version: tuple[int, int] = (1, 1)


@dataclass(slots=True)
class Request:
    method: str = "GET"
    server_name: str = "localhost"
    server_port: int = 8080
    remote_addr: str = "127.0.0.1"
    remote_port: int = 60000
    local_addr: str = "127.0.0.1"
    local_port: int = 8080
    local_hostname: str = "localhost"
    is_secure: bool = False
    headers: dict[str, list[str]] = field(default_factory=dict)
    body: BodySource = field(default_factory=BodySource)
    content_length: int | None = None
    version: tuple[int, int] = (1, 1)
    cookies: list[str] = field(default_factory=list)
    snaplet_path: str = ""
    context_path: str = "/"
    path_info: str = ""
    uri: str = "/"
    query_string: str = ""
    params: dict[str, list[str]] = field(default_factory=dict)

    def header(self, name: str) -> str | None:
        return first_header(self.headers, name)

    def param(self, name: str) -> str | None:
        values = self.params.get(name) or []
        return values[0] if values else None


def default_request(defaults: RequestDefaults | None = None) -> Request:
    d = defaults or RequestDefaults()
    return Request(
        method="GET",
        server_name=str(d.server_name),
        server_port=int(d.server_port),
        remote_addr=str(d.remote_addr),
        remote_port=int(d.remote_port),
        local_addr=str(d.local_addr),
        local_port=int(d.local_port),
        local_hostname=str(d.local_hostname),
        is_secure=bool(d.is_secure),
        version=(int(d.version[0]), int(d.version[1])),
    )
