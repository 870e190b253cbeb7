from __future__ import annotations

import datetime as dt
from email.utils import format_datetime
from typing import Protocol

EPOCH = dt.datetime.fromtimestamp(0, tz=dt.UTC)


class Clock(Protocol):
    def now(self) -> dt.datetime: ...


class RealClock:
    __slots__ = ()

    def now(self) -> dt.datetime:
        return dt.datetime.now(tz=dt.UTC)


class ManualClock:
    """Clock test double pinned to ``current``.

    Each ``now()`` returns the pinned time and then moves it forward by
    ``step`` (zero by default, so the clock stays put until ``advance``).
    """

    __slots__ = ("current", "step")

    def __init__(self, now: dt.datetime | None = None, *, step: dt.timedelta | None = None) -> None:
        self.current = now or EPOCH
        self.step = step or dt.timedelta(0)

    def now(self) -> dt.datetime:
        out = self.current
        self.current = out + self.step
        return out

    def advance(self, delta: dt.timedelta) -> dt.datetime:
        self.current = self.current + delta
        return self.current


def http_date(when: dt.datetime) -> str:
    # Naive datetimes are taken to be UTC.
    if when.tzinfo is None:
        when = when.replace(tzinfo=dt.UTC)
    return format_datetime(when.astimezone(dt.UTC), usegmt=True)
