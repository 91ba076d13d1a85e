import json
import re
from typing import Any

import httpx
from fastapi.testclient import TestClient

SLICE_RE = re.compile(r"\[(\d+)\.\.\.(\d+)\]")
SESSION_RE = re.compile(r'data-session-id="([^"]+)"')


def make_image_record(index: int, **overrides: Any) -> dict[str, Any]:
    """Build an image document shaped like the content API returns it."""
    record: dict[str, Any] = {
        "_id": f"image-{index}",
        "Title": f"Title {index}",
        "Description": f"Description {index}",
        "imageUrl": f"https://cdn.sanity.io/images/test/production/image-{index}.jpg",
        "slug": {"_type": "slug", "current": f"slug-{index}"},
        "dateUploaded": f"2024-{12 - index:02d}-01T10:00:00Z",
    }
    record.update(overrides)
    return record


class ContentAPIStub:
    """Stands in for the GROQ query endpoint behind an httpx.MockTransport.

    Serves ``[start...end]`` slices of ``records`` and slug lookups, and can be
    switched to fail with an HTTP status or a connection error.
    """

    def __init__(self, records: list[dict[str, Any]]):
        self.records = list(records)
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.connect_error = False

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.connect_error:
            raise httpx.ConnectError("connection refused", request=request)
        if self.status_code != 200:
            return httpx.Response(self.status_code, json={"error": {"description": "boom"}})

        slug_param = request.url.params.get("$slug")
        if slug_param is not None:
            slug = json.loads(slug_param)
            match = next((r for r in self.records if r["slug"]["current"] == slug), None)
            return httpx.Response(200, json={"result": match})

        window = SLICE_RE.search(request.url.params["query"])
        assert window is not None, "query has no slice"
        start, end = int(window.group(1)), int(window.group(2))
        return httpx.Response(200, json={"result": self.records[start:end]})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def open_gallery(client: TestClient) -> tuple[str, str]:
    """Load the gallery page and return (session_id, html)."""
    response = client.get("/")
    assert response.status_code == 200
    match = SESSION_RE.search(response.text)
    assert match is not None, "page has no gallery session"
    return match.group(1), response.text


def scroll_to_bottom(client: TestClient, session_id: str) -> httpx.Response:
    payload = {"inner_height": 800, "scroll_y": 1200, "document_height": 2000}
    return client.post(f"/gallery/{session_id}/scroll", json=payload)
