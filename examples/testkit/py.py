import sys
from datetime import UTC, datetime
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "py" / "src"))

from requestkit import FileData, Files, FormData, create_test_env, json, response_to_string  # noqa: E402


def upload_handler(rq):
    return json(
        200,
        {
            "method": rq.method,
            "uri": rq.uri,
            "content_type": rq.header("content-type"),
            "length": rq.content_length,
        },
    )


def main() -> None:
    env = create_test_env(now=datetime(2026, 1, 1, tzinfo=UTC))

    def steps(rb):
        rb.post_multipart(
            "/upload",
            [
                ("title", FormData(["report"])),
                ("doc", Files([FileData("a.txt", "text/plain", b"hi")])),
            ],
        )
        rb.set_query_string({"draft": ["1"]})
        rb.add_header("X-Request-Id", "request-1")

    resp = env.run(steps, upload_handler)

    assert resp.status == 200
    assert resp.headers["date"] == ["Thu, 01 Jan 2026 00:00:00 GMT"]
    assert b'"uri": "/upload?draft=1"' in resp.body
    assert b"multipart/form-data; boundary=test-boundary-1" in resp.body

    print(response_to_string(resp).decode("utf-8"))
    print("examples/testkit/py.py: PASS")


if __name__ == "__main__":
    main()
