#!/usr/bin/env python3
"""Smoke test against a running Bunsekikun server.

Run the server first:
  python -m bunsekikun.main

Then run:
  python scripts/smoke_api.py
"""

import json
import time

import httpx

BASE_URL = "http://localhost:8000"


def show(name: str, response: httpx.Response) -> dict:
    print(f"\n{'=' * 60}")
    print(f"{name}: {response.request.method} {response.request.url.path} -> {response.status_code}")
    body = response.json()
    print(json.dumps(body, ensure_ascii=False, indent=2)[:2000])
    return body


def wait_for_tagger(client: httpx.Client, timeout: float = 60) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        state = client.get("/tagger").json()["state"]
        if state == "ready":
            return True
        if state == "failed":
            show("Tagger", client.post("/tagger/load"))
            return client.get("/tagger").json()["state"] == "ready"
        time.sleep(0.5)
    return False


def main() -> None:
    with httpx.Client(base_url=BASE_URL, timeout=30) as client:
        try:
            show("Health Check", client.get("/"))
        except httpx.ConnectError:
            print("Could not connect to server. Is it running?")
            return

        if not wait_for_tagger(client):
            print("Tagger did not become ready")
            return

        examples = client.get("/examples").json()["examples"]
        analysis = show("Analyze", client.post("/analyze", json={"text": examples[0]}))

        for index, word in enumerate(analysis["words"]):
            if word["pos"] == "noun":
                show("Select", client.post("/selection", json={"index": index}))
                show("Lookup", client.get("/selection", params={"wait": "true"}))
                break

        show("Clear", client.delete("/selection"))
        show("Jisho proxy", client.get("/api/jisho", params={"keyword": "猫"}))


if __name__ == "__main__":
    main()
