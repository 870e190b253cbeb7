from __future__ import annotations

import itertools
import os
from dataclasses import dataclass
from typing import Protocol

from requestkit.errors import entropy_unavailable_error

BOUNDARY_PREFIX = "requestkit-boundary-"


class BoundaryGenerator(Protocol):
    def new_boundary(self) -> str: ...


@dataclass(slots=True)
class RandomBoundaryGenerator:
    prefix: str = BOUNDARY_PREFIX
    size: int = 16

    def new_boundary(self) -> str:
        try:
            raw = os.urandom(self.size)
        except NotImplementedError as exc:
            raise entropy_unavailable_error() from exc
        return f"{self.prefix}{raw.hex()}"


class ManualBoundaryGenerator:
    """Predictable boundaries for tests.

    Queued boundaries are handed out first, then ``<prefix>-<n>`` counting
    up from ``start``. Everything handed out is recorded in ``issued``.
    """

    __slots__ = ("prefix", "start", "queue", "issued", "_counter")

    def __init__(self, *, prefix: str = "test-boundary", start: int = 1) -> None:
        self.prefix = str(prefix)
        self.start = int(start)
        self.queue: list[str] = []
        self.issued: list[str] = []
        self._counter = itertools.count(self.start)

    def push(self, *boundaries: str) -> None:
        self.queue.extend(str(b) for b in boundaries)

    def reset(self) -> None:
        self._counter = itertools.count(self.start)
        self.queue.clear()
        self.issued.clear()

    def new_boundary(self) -> str:
        boundary = self.queue.pop(0) if self.queue else f"{self.prefix}-{next(self._counter)}"
        self.issued.append(boundary)
        return boundary
