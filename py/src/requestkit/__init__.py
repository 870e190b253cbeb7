"""requestkit: build HTTP requests for handler-level tests without a socket."""

from __future__ import annotations

from requestkit.boundary import BoundaryGenerator, ManualBoundaryGenerator, RandomBoundaryGenerator
from requestkit.builder import (
    BuildSteps,
    DeleteRequest,
    GetRequest,
    MultipartPostRequest,
    RawBodyRequest,
    RequestBuilder,
    RequestType,
    UrlEncodedPostRequest,
    build_request,
)
from requestkit.clock import Clock, ManualClock, RealClock, http_date
from requestkit.errors import RequestKitError
from requestkit.fixup import fixup
from requestkit.logger import MemoryLogger, NoOpLogger, StructuredLogger, get_logger, set_logger
from requestkit.multipart import FileData, Files, FormData, MultipartParam, MultipartParams, encode_multipart
from requestkit.request import BODYLESS_METHODS, BodySource, Request, RequestDefaults, default_request
from requestkit.response import Response, json, stream, text
from requestkit.runner import (
    Handler,
    HandlerRunner,
    dump_response,
    response_to_string,
    run_handler,
    run_handler_with,
    serve,
)
from requestkit.state import RequestState
from requestkit.testkit import TestEnv, create_test_env

__all__ = [
    "BODYLESS_METHODS",
    "BodySource",
    "BoundaryGenerator",
    "BuildSteps",
    "Clock",
    "DeleteRequest",
    "FileData",
    "Files",
    "FormData",
    "GetRequest",
    "Handler",
    "HandlerRunner",
    "ManualBoundaryGenerator",
    "ManualClock",
    "MemoryLogger",
    "MultipartParam",
    "MultipartParams",
    "MultipartPostRequest",
    "NoOpLogger",
    "RandomBoundaryGenerator",
    "RawBodyRequest",
    "RealClock",
    "Request",
    "RequestBuilder",
    "RequestDefaults",
    "RequestKitError",
    "RequestState",
    "RequestType",
    "Response",
    "StructuredLogger",
    "TestEnv",
    "UrlEncodedPostRequest",
    "build_request",
    "create_test_env",
    "default_request",
    "dump_response",
    "encode_multipart",
    "fixup",
    "get_logger",
    "http_date",
    "json",
    "response_to_string",
    "run_handler",
    "run_handler_with",
    "serve",
    "set_logger",
    "stream",
    "text",
]
