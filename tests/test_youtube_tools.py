"""
Tests for the YouTube Data API client.
"""

import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import httpx
import pytest

from tools.youtube_tools import (
    YouTubeAPIClient,
    YouTubeAPIError,
    YouTubeChannelNotFoundError,
    YouTubeQuotaExceededError,
    YouTubeRemoteError,
)
from youtube_fakes import json_response, make_channel_item


class TestYouTubeAPIClient:
    """Test cases for YouTubeAPIClient."""

    async def test_api_key_added_to_every_request(self, client, fake_api):
        fake_api.queue("search", json_response({"items": []}))
        fake_api.queue("videos", json_response({"items": []}))

        await client.search_channels("@someone")
        await client.get_videos(["a", "b"])

        assert all(r.url.params["key"] == "test-api-key" for r in fake_api.requests)
        assert fake_api.requests[0].url.host == "www.googleapis.com"
        assert fake_api.requests[0].url.path == "/youtube/v3/search"
        assert client.request_count == 2

    async def test_get_channel_returns_first_item(self, client, fake_api):
        fake_api.queue("channels", json_response({"items": [
            make_channel_item("UC1", uploads="UU1"),
            make_channel_item("UC2", uploads="UU2"),
        ]}))

        channel = await client.get_channel({"id": "UC1"})

        assert channel["id"] == "UC1"

    async def test_get_channel_without_items(self, client, fake_api):
        fake_api.queue("channels", json_response({"items": []}))

        with pytest.raises(YouTubeChannelNotFoundError) as exc_info:
            await client.get_channel({"forUsername": "nobody"})

        assert isinstance(exc_info.value, YouTubeRemoteError)
        assert exc_info.value.endpoint == "channels"

    async def test_quota_exceeded(self, client, fake_api):
        fake_api.queue("playlistItems", json_response({
            "error": {
                "code": 403,
                "message": "The request cannot be completed because you have exceeded your quota.",
                "errors": [{"reason": "quotaExceeded", "domain": "youtube.quota"}],
            }
        }, 403))

        with pytest.raises(YouTubeQuotaExceededError) as exc_info:
            await client.get_playlist_page("UUtest")

        assert exc_info.value.status_code == 403

    async def test_other_forbidden_is_plain_remote_error(self, client, fake_api):
        fake_api.queue("videos", json_response({
            "error": {"code": 403, "errors": [{"reason": "forbidden"}]}
        }, 403))

        with pytest.raises(YouTubeRemoteError) as exc_info:
            await client.get_videos(["a"])

        assert not isinstance(exc_info.value, YouTubeQuotaExceededError)
        assert "forbidden" in exc_info.value.body

    async def test_non_json_error_body(self, client, fake_api):
        fake_api.queue("videos", httpx.Response(502, text="<html>Bad Gateway</html>"))

        with pytest.raises(YouTubeRemoteError) as exc_info:
            await client.get_videos(["a"])

        assert exc_info.value.status_code == 502
        assert exc_info.value.body == "<html>Bad Gateway</html>"

    @pytest.mark.parametrize("body", [
        {"error": "forbidden"},
        {"error": {"errors": "quotaExceeded"}},
        {"error": {"errors": ["quotaExceeded"]}},
    ])
    async def test_unexpected_error_body_shape(self, client, fake_api, body):
        fake_api.queue("channels", json_response(body, 403))

        with pytest.raises(YouTubeRemoteError) as exc_info:
            await client.get_channel({"id": "UCtest"})

        assert not isinstance(exc_info.value, YouTubeQuotaExceededError)
        assert exc_info.value.status_code == 403
        assert exc_info.value.body

    async def test_invalid_json_on_success(self, client, fake_api):
        fake_api.queue("videos", httpx.Response(200, text="not json"))

        with pytest.raises(YouTubeRemoteError, match="Invalid JSON"):
            await client.get_videos(["a"])

    async def test_transport_error_is_wrapped(self, settings):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = YouTubeAPIClient(settings=settings, transport=httpx.MockTransport(handler))

        with pytest.raises(YouTubeRemoteError) as exc_info:
            await client.search_channels("@someone")

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value, YouTubeAPIError)

    async def test_get_videos_rejects_more_than_fifty_ids(self, client, fake_api):
        with pytest.raises(ValueError):
            await client.get_videos([f"id{i}" for i in range(51)])
        assert fake_api.requests == []

    def test_explicit_api_key_wins(self, settings):
        client = YouTubeAPIClient(settings=settings, api_key="other-key")
        assert client.api_key == "other-key"
        assert client.get_stats() == {"requests_made": 0, "api_key_configured": True}
