"""Sign a sample delivery, post it to the receiver and print the event log.

Usage:
    python scripts/send_test_delivery.py                      # in-process app
    python scripts/send_test_delivery.py --url http://localhost:8080
    python scripts/send_test_delivery.py --form --event ping --legacy

The secret defaults to HOOKLOG_WEBHOOK_SECRET so the signature matches the
receiver's configuration.
"""

import argparse
import asyncio
import hashlib
import hmac
import json
import os
import sys
import uuid
from pathlib import Path
from urllib.parse import urlencode

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from httpx import ASGITransport, AsyncClient

SAMPLE_PAYLOAD = {
    "ref": "refs/heads/main",
    "before": "0000000000000000000000000000000000000000",
    "after": "6dcb09b5b57875f334f61aebed695e2e4193db5e",
    "repository": {"full_name": "octo-org/hello-world", "private": False},
    "pusher": {"name": "octocat"},
    "commits": [{"id": "6dcb09b5", "message": "Fix all the bugs"}],
}


def build_request(secret: str, event: str, form: bool, legacy: bool) -> tuple[bytes, dict]:
    """Encode the sample payload and sign the exact bytes that will be sent."""
    encoded = json.dumps(SAMPLE_PAYLOAD, indent=2)
    if form:
        body = urlencode({"payload": encoded}).encode("utf-8")
        content_type = "application/x-www-form-urlencoded"
    else:
        body = encoded.encode("utf-8")
        content_type = "application/json"

    headers = {
        "Content-Type": content_type,
        "X-GitHub-Event": event,
        "X-GitHub-Delivery": str(uuid.uuid4()),
    }
    if legacy:
        digest = hmac.new(secret.encode("utf-8"), body, hashlib.sha1).hexdigest()
        headers["X-Hub-Signature"] = f"sha1={digest}"
    else:
        digest = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()
        headers["X-Hub-Signature-256"] = f"sha256={digest}"
    return body, headers


async def run(args: argparse.Namespace) -> int:
    body, headers = build_request(args.secret, args.event, args.form, args.legacy)

    if args.url:
        client = AsyncClient(base_url=args.url, timeout=10.0)
    else:
        from hooklog.config import Settings
        from hooklog.main import create_app

        app = create_app(Settings(webhook_secret=args.secret, events_token=args.token))
        client = AsyncClient(transport=ASGITransport(app=app), base_url="http://hooklog")

    async with client:
        r = await client.post("/api/webhook", content=body, headers=headers)
        print(f"POST /api/webhook -> {r.status_code}")
        print(r.text)
        if r.status_code != 200:
            return 1

        params = {"limit": 5}
        if args.token:
            params["token"] = args.token
        r = await client.get("/api/events", params=params)
        print(f"GET /api/events -> {r.status_code}")
        print(json.dumps(r.json(), indent=2) if r.status_code == 200 else r.text)
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Send a signed test delivery to hooklog")
    parser.add_argument("--url", help="Base URL of a running receiver (default: in-process app)")
    parser.add_argument("--secret", default=os.environ.get("HOOKLOG_WEBHOOK_SECRET", "dev-secret"))
    parser.add_argument("--token", default=os.environ.get("HOOKLOG_EVENTS_TOKEN", ""))
    parser.add_argument("--event", default="push", help="X-GitHub-Event value (default: push)")
    parser.add_argument("--form", action="store_true", help="Send form-encoded payload=<json>")
    parser.add_argument("--legacy", action="store_true", help="Sign with sha1 / X-Hub-Signature")
    args = parser.parse_args()
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
