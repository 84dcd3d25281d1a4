"""
Tests for channel reference parsing and uploads playlist resolution.
"""

import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from agents.channel_resolver import ChannelResolverAgent, parse_channel_reference
from models.channel import ChannelAddressingMode
from tools.youtube_tools import (
    ChannelResolutionError,
    YouTubeChannelNotFoundError,
    YouTubeRemoteError,
)
from youtube_fakes import json_response, make_channel_item, make_search_item


class TestParseChannelReference:
    """Test cases for URL shape detection."""

    def test_legacy_username(self):
        address = parse_channel_reference("https://www.youtube.com/user/nismotv2013/videos")
        assert address.mode == ChannelAddressingMode.LEGACY_USERNAME
        assert address.value == "nismotv2013"

    def test_channel_id(self):
        address = parse_channel_reference("https://www.youtube.com/channel/UCoSrY_IQQVpmIRZ9Xf-y93g/videos")
        assert address.mode == ChannelAddressingMode.CHANNEL_ID
        assert address.value == "UCoSrY_IQQVpmIRZ9Xf-y93g"

    def test_channel_id_without_trailing_segment(self):
        address = parse_channel_reference("https://www.youtube.com/channel/UCoSrY_IQQVpmIRZ9Xf-y93g")
        assert address.value == "UCoSrY_IQQVpmIRZ9Xf-y93g"

    def test_at_handle(self):
        address = parse_channel_reference("https://www.youtube.com/@LinusTechTips/videos?view=0")
        assert address.mode == ChannelAddressingMode.CUSTOM_HANDLE
        assert address.value == "LinusTechTips"
        assert address.normalized_handle == "@linustechtips"

    def test_percent_encoded_handle_is_decoded(self):
        address = parse_channel_reference("https://www.youtube.com/@%E3%82%86%E3%81%A3%E3%81%8F%E3%82%8A/videos")
        assert address.mode == ChannelAddressingMode.CUSTOM_HANDLE
        assert address.value == "ゆっくり"
        assert address.normalized_handle == "@ゆっくり"

    def test_c_handle(self):
        address = parse_channel_reference("https://www.youtube.com/c/LinusTechTips")
        assert address.mode == ChannelAddressingMode.CUSTOM_HANDLE
        assert address.normalized_handle == "@linustechtips"

    def test_username_takes_precedence_over_channel(self):
        address = parse_channel_reference("https://example.com/channel/UCabc/user/someone/")
        assert address.mode == ChannelAddressingMode.LEGACY_USERNAME
        assert address.value == "someone"

    @pytest.mark.parametrize("reference", [
        "https://www.google.com",
        "https://www.youtube.com/",
        "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        "https://www.youtube.com/user/",
    ])
    def test_unrecognized_reference_raises(self, reference):
        with pytest.raises(ChannelResolutionError, match="Could not determine") as exc_info:
            parse_channel_reference(reference)
        assert exc_info.value.reference == reference
        assert reference in str(exc_info.value)


class TestResolveUploadsCollection:
    """Test cases for ChannelResolverAgent.resolve_uploads_collection."""

    async def test_username_queries_for_username(self, client, fake_api):
        fake_api.queue("channels", json_response({
            "items": [make_channel_item("UCaTxfj0BzL-MaCy-YUqPRoQ", uploads="UUaTxfj0BzL-MaCy-YUqPRoQ")]
        }))
        resolver = ChannelResolverAgent(client)

        uploads = await resolver.resolve_uploads_collection("https://www.youtube.com/user/nismotv2013/videos")

        assert uploads == "UUaTxfj0BzL-MaCy-YUqPRoQ"
        assert fake_api.params("channels") == [{
            "part": "contentDetails",
            "forUsername": "nismotv2013",
            "key": "test-api-key",
        }]

    async def test_channel_id_queries_by_id_without_search(self, client, fake_api):
        fake_api.queue("channels", json_response({
            "items": [make_channel_item("UCoSrY_IQQVpmIRZ9Xf-y93g", uploads="UUoSrY_IQQVpmIRZ9Xf-y93g")]
        }))
        resolver = ChannelResolverAgent(client)

        uploads = await resolver.resolve_uploads_collection(
            "https://www.youtube.com/channel/UCoSrY_IQQVpmIRZ9Xf-y93g/videos"
        )

        assert uploads == "UUoSrY_IQQVpmIRZ9Xf-y93g"
        assert fake_api.params("channels") == [{
            "part": "contentDetails",
            "id": "UCoSrY_IQQVpmIRZ9Xf-y93g",
            "key": "test-api-key",
        }]
        assert fake_api.calls("search") == []

    async def test_handle_resolved_through_search(self, client, fake_api):
        fake_api.queue("search", json_response({
            "items": [make_search_item("UCother"), make_search_item("UCtarget")]
        }))
        fake_api.queue(
            "channels",
            json_response({"items": [
                make_channel_item("UCother", custom_url="@linustechtipsfan"),
                make_channel_item("UCtarget", custom_url="@linustechtips"),
            ]}),
            json_response({"items": [make_channel_item("UCtarget", uploads="UUtarget")]}),
        )
        resolver = ChannelResolverAgent(client)

        uploads = await resolver.resolve_uploads_collection("https://www.youtube.com/@LinusTechTips")

        assert uploads == "UUtarget"
        search_params = fake_api.params("search")[0]
        assert search_params["q"] == "@linustechtips"
        assert search_params["type"] == "channel"
        assert search_params["order"] == "relevance"
        assert search_params["maxResults"] == "50"

        candidates_params, lookup_params = fake_api.params("channels")
        assert candidates_params["id"] == "UCother,UCtarget"
        assert candidates_params["part"] == "snippet"
        assert lookup_params["id"] == "UCtarget"
        assert lookup_params["part"] == "contentDetails"

    async def test_percent_encoded_handle_resolved_through_search(self, client, fake_api):
        fake_api.queue("search", json_response({"items": [make_search_item("UCyukkuri")]}))
        fake_api.queue(
            "channels",
            json_response({"items": [make_channel_item("UCyukkuri", custom_url="@ゆっくり")]}),
            json_response({"items": [make_channel_item("UCyukkuri", uploads="UUyukkuri")]}),
        )
        resolver = ChannelResolverAgent(client)

        uploads = await resolver.resolve_uploads_collection(
            "https://www.youtube.com/@%E3%82%86%E3%81%A3%E3%81%8F%E3%82%8A"
        )

        assert uploads == "UUyukkuri"
        assert fake_api.params("search")[0]["q"] == "@ゆっくり"

    async def test_handle_with_for_handle_strategy(self, client, fake_api):
        fake_api.queue("channels", json_response({
            "items": [make_channel_item("UCtarget", uploads="UUtarget")]
        }))
        resolver = ChannelResolverAgent(client, handle_strategy="for_handle")

        uploads = await resolver.resolve_uploads_collection("https://www.youtube.com/c/LinusTechTips/videos")

        assert uploads == "UUtarget"
        assert fake_api.params("channels")[0]["forHandle"] == "@linustechtips"
        assert fake_api.calls("search") == []

    async def test_unknown_handle_raises_not_found(self, client, fake_api):
        fake_api.queue("search", json_response({"items": [make_search_item("UCother")]}))
        fake_api.queue("channels", json_response({
            "items": [make_channel_item("UCother", custom_url="@someoneelse")]
        }))
        resolver = ChannelResolverAgent(client)

        with pytest.raises(YouTubeChannelNotFoundError):
            await resolver.resolve_uploads_collection("https://www.youtube.com/@nobody")

        # Only the candidate lookup, never the contentDetails lookup
        assert len(fake_api.calls("channels")) == 1

    async def test_invalid_url_makes_no_request(self, client, fake_api):
        resolver = ChannelResolverAgent(client)

        with pytest.raises(ChannelResolutionError, match="Could not determine"):
            await resolver.resolve_uploads_collection("https://www.google.com")

        assert fake_api.requests == []

    async def test_empty_items_raises_not_found(self, client, fake_api):
        fake_api.queue("channels", json_response({"kind": "youtube#channelListResponse", "items": []}))
        resolver = ChannelResolverAgent(client)

        with pytest.raises(YouTubeChannelNotFoundError):
            await resolver.resolve_uploads_collection("https://www.youtube.com/user/nobody")

    async def test_missing_items_raises_not_found(self, client, fake_api):
        fake_api.queue("channels", json_response({"kind": "youtube#channelListResponse"}))
        resolver = ChannelResolverAgent(client)

        with pytest.raises(YouTubeChannelNotFoundError):
            await resolver.resolve_uploads_collection("https://www.youtube.com/user/nobody")

    async def test_http_error_raises_remote_error(self, client, fake_api):
        fake_api.queue("channels", json_response({"error": {"code": 400, "message": "Bad Request"}}, 400))
        resolver = ChannelResolverAgent(client)

        with pytest.raises(YouTubeRemoteError) as exc_info:
            await resolver.resolve_uploads_collection("https://www.youtube.com/user/nismotv2013")

        assert exc_info.value.status_code == 400
        assert "Bad Request" in exc_info.value.body


class TestResolveHandleToChannelId:
    """Test cases for ChannelResolverAgent.resolve_handle_to_channel_id."""

    async def test_no_search_hits_skips_channel_lookup(self, client, fake_api):
        fake_api.queue("search", json_response({"items": []}))
        resolver = ChannelResolverAgent(client)

        assert await resolver.resolve_handle_to_channel_id("Nobody") is None
        assert fake_api.calls("channels") == []

    async def test_match_is_case_insensitive_and_first_wins(self, client, fake_api):
        fake_api.queue("search", json_response({
            "items": [make_search_item("UCfirst"), make_search_item("UCsecond"), make_search_item("UCfirst")]
        }))
        fake_api.queue("channels", json_response({"items": [
            make_channel_item("UCfirst", custom_url="@MyHandle"),
            make_channel_item("UCsecond", custom_url="@myhandle"),
        ]}))
        resolver = ChannelResolverAgent(client)

        assert await resolver.resolve_handle_to_channel_id("@MYHANDLE") == "UCfirst"
        assert fake_api.params("channels")[0]["id"] == "UCfirst,UCsecond"
        assert fake_api.params("search")[0]["q"] == "@myhandle"
