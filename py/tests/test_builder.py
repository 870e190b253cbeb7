from __future__ import annotations

import email
import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(REPO_ROOT / "py" / "src"))

from requestkit.boundary import ManualBoundaryGenerator  # noqa: E402
from requestkit.builder import (  # noqa: E402
    DeleteRequest,
    GetRequest,
    MultipartPostRequest,
    RawBodyRequest,
    RequestBuilder,
    UrlEncodedPostRequest,
    build_request,
)
from requestkit.errors import RequestKitError  # noqa: E402
from requestkit.multipart import FileData, Files, FormData  # noqa: E402


class TestBuilder(unittest.TestCase):
    def test_get_with_query_params(self) -> None:
        rq = build_request(lambda rb: rb.get("/users", {"id": ["42"]}))
        self.assertEqual(rq.method, "GET")
        self.assertEqual(rq.uri, "/users?id=42")
        self.assertEqual(rq.path_info, "/users")
        self.assertEqual(rq.query_string, "id=42")
        self.assertEqual(rq.params, {"id": ["42"]})
        self.assertEqual(rq.body.read(), b"")
        self.assertIsNone(rq.content_length)
        self.assertIsNone(rq.header("content-length"))

    def test_post_url_encoded(self) -> None:
        rq = build_request(lambda rb: rb.post_url_encoded("/login", {"user": ["alice"]}))
        self.assertEqual(rq.method, "POST")
        self.assertEqual(rq.uri, "/login")
        self.assertEqual(rq.header("content-type"), "application/x-www-form-urlencoded")
        self.assertEqual(rq.params["user"], ["alice"])
        self.assertEqual(rq.content_length, 10)
        self.assertEqual(rq.header("content-length"), "10")
        self.assertEqual(rq.body.read(), b"user=alice")

    def test_post_multipart(self) -> None:
        rq = build_request(
            lambda rb: rb.post_multipart("/upload", [("doc", Files([FileData("a.txt", "text/plain", "hi")]))])
        )
        self.assertEqual(rq.method, "POST")
        content_type = rq.header("content-type") or ""
        self.assertTrue(content_type.startswith("multipart/form-data; boundary="))

        body = rq.body.read()
        self.assertEqual(rq.content_length, len(body))
        self.assertEqual(rq.header("content-length"), str(len(body)))

        msg = email.message_from_bytes(b"Content-Type: " + content_type.encode("ascii") + b"\r\n\r\n" + body)
        (part,) = msg.get_payload()
        self.assertEqual(part.get_param("name", header="content-disposition"), "doc")
        (upload,) = part.get_payload()
        self.assertEqual(upload.get_filename(), "a.txt")
        self.assertEqual(upload.get_content_type(), "text/plain")
        self.assertEqual(upload.get_payload(decode=True), b"hi")

    def test_multipart_content_type_uses_generated_boundary(self) -> None:
        rq = build_request(
            lambda rb: rb.post_multipart("/f", [("a", FormData(["1"]))]),
            boundaries=ManualBoundaryGenerator(prefix="b"),
        )
        self.assertEqual(rq.header("content-type"), "multipart/form-data; boundary=b-1")
        self.assertEqual(rq.params, {})

    def test_put(self) -> None:
        rq = build_request(lambda rb: rb.put("/x", "application/json", "{}"))
        self.assertEqual(rq.method, "PUT")
        self.assertEqual(rq.header("content-type"), "application/json")
        self.assertEqual(rq.header("content-length"), "2")
        self.assertEqual(rq.body.read(), b"{}")

    def test_post_raw(self) -> None:
        rq = build_request(lambda rb: rb.post_raw("/raw", "text/plain", b"payload"))
        self.assertEqual(rq.method, "POST")
        self.assertEqual(rq.header("content-type"), "text/plain")
        self.assertEqual(rq.content_length, 7)
        self.assertEqual(rq.body.read(), b"payload")

    def test_delete_with_query_params(self) -> None:
        rq = build_request(lambda rb: rb.delete("/items/1", {"force": ["true"]}))
        self.assertEqual(rq.method, "DELETE")
        self.assertEqual(rq.uri, "/items/1?force=true")
        self.assertIsNone(rq.content_length)

    def test_request_without_path_targets_root(self) -> None:
        rq = build_request(lambda rb: None)
        self.assertEqual(rq.method, "GET")
        self.assertEqual(rq.uri, "/")

    def test_raw_query_string_is_not_reencoded(self) -> None:
        rq = build_request(lambda rb: rb.set_request_path("/s").set_query_string_raw("q=a%20b&flag"))
        self.assertEqual(rq.uri, "/s?q=a%20b&flag")
        self.assertEqual(rq.params, {"q": ["a b"], "flag": [""]})

    def test_path_set_before_query_still_yields_full_uri(self) -> None:
        rb = RequestBuilder()
        rb.set_request_path("/p").set_query_string({"a": "1"})
        self.assertEqual(rb.state.get().uri, "/p?a=1")

    def test_set_request_path_clears_prefix_components(self) -> None:
        rq = build_request(lambda rb: rb.set_request_path("/a/b"))
        self.assertEqual((rq.snaplet_path, rq.context_path, rq.path_info), ("", "", "/a/b"))

    def test_set_and_add_header(self) -> None:
        def steps(rb: RequestBuilder) -> None:
            rb.add_header("Accept", "text/html")
            rb.add_header("accept", "application/json")
            rb.set_header("X-Token", "1")
            rb.set_header("x-token", "2")

        rq = build_request(steps)
        self.assertEqual(rq.headers["accept"], ["text/html", "application/json"])
        self.assertEqual(rq.headers["x-token"], ["2"])

    def test_set_secure_and_http_version(self) -> None:
        rq = build_request(lambda rb: rb.set_secure(True).set_http_version((1, 0)))
        self.assertTrue(rq.is_secure)
        self.assertEqual(rq.version, (1, 0))

    def test_set_content_type_replaces_existing_value(self) -> None:
        rq = build_request(lambda rb: rb.post_raw("/x", "text/plain", "a").set_content_type("text/csv"))
        self.assertEqual(rq.headers["content-type"], ["text/csv"])

    def test_request_types_apply_immediately(self) -> None:
        rb = RequestBuilder()
        rb.set_request_type(RawBodyRequest("patch", b"abc"))
        rq = rb.state.get()
        self.assertEqual(rq.method, "PATCH")
        self.assertEqual(rq.content_length, 3)

        rb.set_request_type(GetRequest())
        rq = rb.state.get()
        self.assertEqual(rq.method, "GET")
        self.assertIsNone(rq.content_length)
        self.assertEqual(len(rq.body), 0)

        rb.set_request_type(UrlEncodedPostRequest({"a": "1"}))
        self.assertEqual(rb.state.get().header("content-type"), "application/x-www-form-urlencoded")

        rb.set_request_type(DeleteRequest())
        self.assertEqual(rb.state.get().method, "DELETE")

        rb.set_request_type(MultipartPostRequest([("a", FormData(["1"]))]))
        self.assertEqual(rb.state.get().method, "POST")

    def test_unknown_request_type_is_rejected(self) -> None:
        with self.assertRaisesRegex(TypeError, "unsupported request type"):
            RequestBuilder().set_request_type("GET")  # type: ignore[arg-type]

    def test_chained_builder(self) -> None:
        rq = RequestBuilder().get("/x", {"b": "2", "a": "1"}).set_header("X-Trace", "t").build()
        self.assertEqual(rq.uri, "/x?a=1&b=2")
        self.assertEqual(rq.header("x-trace"), "t")

    def test_url_encoded_body_is_single_read(self) -> None:
        rq = build_request(lambda rb: rb.post_url_encoded("/f", {"a": "1"}))
        rq.body.read()
        with self.assertRaises(RequestKitError):
            rq.body.read()

    def test_bytes_path_and_raw_query_are_decoded(self) -> None:
        rq = build_request(lambda rb: rb.set_query_string_raw(b"q=1").set_request_path(b"/x"))
        self.assertEqual(rq.path_info, "/x")
        self.assertEqual(rq.query_string, "q=1")
        self.assertEqual(rq.uri, "/x?q=1")
        self.assertEqual(rq.params, {"q": ["1"]})

    def test_bytes_params_headers_and_method_are_decoded(self) -> None:
        def steps(rb: RequestBuilder) -> None:
            rb.get("/u", {b"id": [b"42"]})
            rb.set_header(b"X-Token", b"abc")
            rb.add_header(b"Accept", bytearray(b"text/html"))

        rq = build_request(steps)
        self.assertEqual(rq.uri, "/u?id=42")
        self.assertEqual(rq.params, {"id": ["42"]})
        self.assertEqual(rq.header("x-token"), "abc")
        self.assertEqual(rq.headers["accept"], ["text/html"])

        self.assertEqual(RawBodyRequest(b"put", b"").method, "PUT")

    def test_bytes_url_encoded_params(self) -> None:
        rq = build_request(lambda rb: rb.post_url_encoded(b"/login", {b"user": b"alice"}))
        self.assertEqual(rq.uri, "/login")
        self.assertEqual(rq.body.read(), b"user=alice")
        self.assertEqual(rq.params, {"user": ["alice"]})
