"""multipart/form-data body encoding.

Every part is written starting at its boundary token and ending with
``\\r\\n--``, so the ``--`` that opens the next delimiter (or the closing
``B--``) is always already in place. Fields with several values and file
uploads are wrapped in a nested ``multipart/mixed`` body with a boundary of
its own.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from requestkit.boundary import BoundaryGenerator, RandomBoundaryGenerator
from requestkit.util import to_bytes, to_text

CRLF = b"\r\n"


@dataclass(frozen=True, slots=True)
class FileData:
    file_name: str
    content_type: str
    contents: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "file_name", to_text(self.file_name))
        object.__setattr__(self, "content_type", to_text(self.content_type))
        object.__setattr__(self, "contents", to_bytes(self.contents))


@dataclass(frozen=True, slots=True)
class FormData:
    """A form field carrying zero or more scalar values."""

    values: tuple[bytes, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(to_bytes(v) for v in _as_list(self.values)))


@dataclass(frozen=True, slots=True)
class Files:
    """A form field carrying zero or more file uploads."""

    files: tuple[FileData, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "files", tuple(_as_list(self.files)))


MultipartParam = FormData | Files
MultipartParams = Sequence[tuple[str, MultipartParam]]


def encode_multipart(params: MultipartParams, boundaries: BoundaryGenerator | None = None) -> tuple[bytes, str]:
    """Encode ``params`` as a multipart/form-data body.

    Returns the body and the top-level boundary used for it. Fields whose
    value or file list is empty produce no part at all.
    """
    gen = boundaries or RandomBoundaryGenerator()
    boundary = gen.new_boundary()
    top = boundary.encode("ascii")

    chunks: list[bytes] = [b"--"]
    for name, param in params:
        chunks.append(_encode_param(gen, top, to_text(name), param))
    chunks.append(top + b"--" + CRLF)
    return b"".join(chunks), boundary


def content_type_for(boundary: str) -> str:
    return f"multipart/form-data; boundary={boundary}"


def _encode_param(gen: BoundaryGenerator, boundary: bytes, name: str, param: MultipartParam) -> bytes:
    match param:
        case FormData(values=values):
            return _encode_form_data(gen, boundary, name, values)
        case Files(files=files):
            return _encode_files(gen, boundary, name, files)
        case _:
            raise TypeError(f"unsupported multipart param: {type(param).__name__}")


def _part_header(boundary: bytes, name: str) -> bytes:
    return boundary + CRLF + b'Content-Disposition: form-data; name="' + name.encode("utf-8") + b'"' + CRLF


def _mixed_header(boundary: bytes) -> bytes:
    return b"Content-Type: multipart/mixed; boundary=" + boundary + CRLF


def _encode_form_data(gen: BoundaryGenerator, boundary: bytes, name: str, values: Sequence[bytes]) -> bytes:
    if not values:
        return b""
    header = _part_header(boundary, name)
    if len(values) == 1:
        return header + CRLF + values[0] + CRLF + b"--"

    inner = gen.new_boundary().encode("ascii")
    out = [header, _mixed_header(inner), CRLF, b"--"]
    for value in values:
        out.append(inner + CRLF + CRLF + value + CRLF + b"--")
    out.append(inner + b"--" + CRLF + b"--")
    return b"".join(out)


def _encode_files(gen: BoundaryGenerator, boundary: bytes, name: str, files: Sequence[FileData]) -> bytes:
    if not files:
        return b""
    inner = gen.new_boundary().encode("ascii")
    out = [_part_header(boundary, name), _mixed_header(inner), CRLF, b"--"]
    for fd in files:
        out.append(
            b"".join(
                [
                    inner,
                    CRLF,
                    b"Content-Type: " + fd.content_type.encode("utf-8") + CRLF,
                    b'Content-Disposition: attachment; filename="' + fd.file_name.encode("utf-8") + b'"' + CRLF,
                    b"Content-Transfer-Encoding: binary" + CRLF,
                    CRLF,
                    fd.contents,
                    CRLF,
                    b"--",
                ]
            )
        )
    out.append(inner + b"--" + CRLF + b"--")
    return b"".join(out)


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (str, bytes, bytearray, memoryview, FileData)):
        return [value]
    if isinstance(value, Iterable):
        return list(value)
    return [value]
