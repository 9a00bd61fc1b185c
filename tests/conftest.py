"""
Shared fixtures and mocks for entity tag tests.
"""
import json
import pytest
from unittest.mock import AsyncMock

import httpx

from entity_tags.services.dtos import TagAssignmentRequest, TagRemovalRequest, TagSetRequest


@pytest.fixture
def assignment_request():
    """Attach tag 7 to page 42."""
    return TagAssignmentRequest(entity_id="42", entity_type="Page", tag_id="7")


@pytest.fixture
def removal_request():
    """Detach tag 7 from page 42."""
    return TagRemovalRequest(entity_id="42", entity_type="Page", tag_id="7")


@pytest.fixture
def set_request():
    """Replace the tags on page 42."""
    return TagSetRequest(entity_id="42", entity_type="Page", tags=["7", "8", "9"])


@pytest.fixture
def mock_dispatch():
    """Dispatch primitive that succeeds without a response body."""
    return AsyncMock(return_value=None)


@pytest.fixture
def local_backend_env():
    """Environment selecting the in-process backend."""
    return {
        "ENTITY_TAGS_BACKEND": "local",
        "LOG_LEVEL": "DEBUG",
    }


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it handled.

    Every request gets a fresh ``httpx.Response(status_code, **response_kwargs)``.
    """

    def __init__(self, status_code: int = 204, **response_kwargs):
        self.requests: list[httpx.Request] = []
        self.status_code = status_code
        self.response_kwargs = response_kwargs
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, **self.response_kwargs)

    @property
    def last_json(self):
        return json.loads(self.requests[-1].content)


@pytest.fixture
def recording_transport():
    """Transport answering 204 No Content to every request."""
    return RecordingTransport()


@pytest.fixture
def make_transport():
    """Build a RecordingTransport with a custom status and body."""
    return RecordingTransport
