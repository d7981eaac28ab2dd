"""
Pytest fixtures for unit tests.

Provides configuration, a gateway backed by httpx.MockTransport, and a
recording notification sink.
"""

from typing import Callable, List

import httpx
import pytest

from sound_whiskers.config import SoundWhiskersConfig
from sound_whiskers.gateway import RemoteActionGateway
from sound_whiskers.notifications import RecordingNotificationSink


API_URL = "https://soundwhiskers.example.com"


@pytest.fixture
def config():
    """Create test client configuration."""
    return SoundWhiskersConfig(api_url=API_URL, access_token="test-token", timeout_seconds=5.0)


@pytest.fixture
def sink():
    """Create a notification sink that records emissions in order."""
    return RecordingNotificationSink()


@pytest.fixture
def requests_seen() -> List[httpx.Request]:
    return []


@pytest.fixture
def make_gateway(config, requests_seen):
    """Build a gateway whose transport is answered by ``handler``.

    Every request is appended to ``requests_seen`` before the handler runs.
    """

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> RemoteActionGateway:
        def _record(request: httpx.Request) -> httpx.Response:
            requests_seen.append(request)
            return handler(request)

        client = httpx.AsyncClient(transport=httpx.MockTransport(_record))
        return RemoteActionGateway(config, client=client)

    return _make


@pytest.fixture
def generation_body():
    """Successful generation response with 15 tracks."""
    return {
        "sessionId": "session-123",
        "playlistName": "Upbeat Running Mix",
        "playlistDescription": "High tempo tracks for a morning run",
        "summary": "Energetic pop and rock to keep the pace up",
        "items": [
            {
                "artist": f"Artist {i}",
                "title": f"Song {i}",
                "album": f"Album {i}",
                "trackUri": f"spotify:track:{i:04d}",
            }
            for i in range(1, 16)
        ],
        "count": 15,
        "warningUnderMinCount": False,
    }
