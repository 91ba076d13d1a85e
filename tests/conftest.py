import os
from collections.abc import Generator
from typing import Any

import pytest
from fastapi.testclient import TestClient

from tests.helpers import ContentAPIStub, make_image_record

os.environ.update({"SANITY_API_URL": "https://test.api.sanity.io", "SANITY_API_TOKEN": "test-token"})


@pytest.fixture
def image_records() -> list[dict[str, Any]]:
    """Five image documents, newest first."""
    return [make_image_record(i) for i in range(1, 6)]


@pytest.fixture
def content_api(image_records: list[dict[str, Any]]) -> ContentAPIStub:
    return ContentAPIStub(image_records)


@pytest.fixture
def sanity_settings():
    from wizmatik.sanity_utils import SanitySettings

    return SanitySettings(api_url="https://test.api.sanity.io", api_token="test-token")


@pytest.fixture
def sanity_client(sanity_settings, content_api: ContentAPIStub):
    from wizmatik.sanity_client import AsyncSanityClient

    return AsyncSanityClient(sanity_settings, transport=content_api.transport)


@pytest.fixture
def client(sanity_client) -> Generator[TestClient]:
    """Test client whose content API calls are served by the stub."""
    from wizmatik.dependencies import get_sanity_client
    from wizmatik.main import app

    async def override_get_sanity_client():
        yield sanity_client

    app.dependency_overrides[get_sanity_client] = override_get_sanity_client

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def session_store(client: TestClient):
    from wizmatik.dependencies import get_session_store

    return get_session_store()
