from __future__ import annotations

import argparse
import json
import time
import urllib.error
import urllib.request

SAMPLE_DAY = {
    "day": "smoke",
    "events": [
        {"start": 30, "end": 150},
        {"start": 540, "end": 600},
        {"start": 560, "end": 620},
        {"start": 610, "end": 670},
    ],
}


def fetch(url: str, payload: object | None = None) -> tuple[int, bytes]:
    data = json.dumps(payload).encode("utf-8") if payload is not None else None
    req = urllib.request.Request(url, data=data)
    if data is not None:
        req.add_header("Content-Type", "application/json")
    with urllib.request.urlopen(req, timeout=10) as resp:
        return resp.status, resp.read()


def wait_for(url: str, timeout: int) -> bytes:
    deadline = time.time() + timeout
    last_error: Exception | None = None
    while time.time() < deadline:
        try:
            status, body = fetch(url)
            if status == 200:
                return body
        except (urllib.error.URLError, OSError) as exc:
            last_error = exc
        time.sleep(1)
    raise RuntimeError(f"Timed out waiting for {url}: {last_error}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Smoke test for a running day-layout server.")
    parser.add_argument("--base-url", default="http://localhost:8080")
    parser.add_argument("--timeout", type=int, default=60)
    args = parser.parse_args()

    base = args.base_url.rstrip("/")

    wait_for(f"{base}/api/health", args.timeout)
    status, body = fetch(f"{base}/api/layout", SAMPLE_DAY)
    if status != 200:
        raise RuntimeError(f"Layout request failed with status {status}")
    plan = json.loads(body.decode("utf-8"))
    if plan.get("column_counts") != [1, 2]:
        raise RuntimeError(f"Unexpected column counts: {plan.get('column_counts')}")

    calendar_html = wait_for(f"{base}/calendar", args.timeout).decode("utf-8")
    if 'class="event"' not in calendar_html:
        raise RuntimeError("Calendar page has no events")

    print("Smoke test passed.")


if __name__ == "__main__":
    main()
