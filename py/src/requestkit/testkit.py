from __future__ import annotations

import datetime as dt
from dataclasses import dataclass

from requestkit.boundary import ManualBoundaryGenerator
from requestkit.builder import BuildSteps, RequestBuilder, build_request
from requestkit.clock import ManualClock
from requestkit.request import Request, RequestDefaults
from requestkit.response import Response
from requestkit.runner import Handler, HandlerRunner, run_handler_with, serve


@dataclass(slots=True)
class TestEnv:
    """Deterministic build/run environment: fixed clock, predictable boundaries."""

    __test__ = False

    clock: ManualClock
    boundaries: ManualBoundaryGenerator
    defaults: RequestDefaults

    def __init__(
        self,
        *,
        now: dt.datetime | None = None,
        boundary_prefix: str = "test-boundary",
        defaults: RequestDefaults | None = None,
    ) -> None:
        self.clock = ManualClock(now)
        self.boundaries = ManualBoundaryGenerator(prefix=boundary_prefix)
        self.defaults = defaults or RequestDefaults()

    def builder(self) -> RequestBuilder:
        return RequestBuilder(defaults=self.defaults, boundaries=self.boundaries)

    def build(self, steps: BuildSteps) -> Request:
        return build_request(steps, defaults=self.defaults, boundaries=self.boundaries)

    def run(self, steps: BuildSteps, handler: Handler, runner: HandlerRunner | None = None) -> Response:
        return run_handler_with(
            runner or serve,
            steps,
            handler,
            clock=self.clock,
            defaults=self.defaults,
            boundaries=self.boundaries,
        )


def create_test_env(
    *,
    now: dt.datetime | None = None,
    boundary_prefix: str = "test-boundary",
    defaults: RequestDefaults | None = None,
) -> TestEnv:
    return TestEnv(now=now, boundary_prefix=boundary_prefix, defaults=defaults)
