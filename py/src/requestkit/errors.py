from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class RequestKitError(Exception):
    code: str
    message: str

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


def body_consumed_error() -> RequestKitError:
    return RequestKitError("requestkit.body_consumed", "request body already read")


def entropy_unavailable_error() -> RequestKitError:
    return RequestKitError("requestkit.entropy_unavailable", "no randomness source available")
