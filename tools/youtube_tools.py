"""
YouTube Data API v3 client for channels, search, playlist items and videos.
"""

import logging
from typing import List, Optional, Dict, Any

import httpx

from config.settings import Settings, get_settings

# Setup logging
logger = logging.getLogger(__name__)

# videos.list, playlistItems.list and search.list all cap a page at 50
MAX_RESULTS_PER_PAGE = 50


# Custom exceptions
class YouTubeAPIError(Exception):
    """Base error for the video listing pipeline."""
    pass


class ChannelResolutionError(YouTubeAPIError):
    """Channel reference matches none of the known URL shapes."""

    def __init__(self, reference: str):
        super().__init__(f"Could not determine channel identity from {reference}")
        self.reference = reference


class YouTubeRemoteError(YouTubeAPIError):
    """YouTube API call failed or returned an unusable response."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
        endpoint: Optional[str] = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.endpoint = endpoint


class YouTubeQuotaExceededError(YouTubeRemoteError):
    """YouTube API quota exceeded."""
    pass


class YouTubeChannelNotFoundError(YouTubeRemoteError):
    """YouTube channel not found."""
    pass


def _error_reason(response: httpx.Response) -> str:
    """Pull error.errors[0].reason out of an API error body, if any."""
    try:
        error_data = response.json()
    except ValueError:
        return ""
    if not isinstance(error_data, dict):
        return ""
    error = error_data.get("error")
    if not isinstance(error, dict):
        return ""
    errors = error.get("errors")
    if not isinstance(errors, list) or not errors or not isinstance(errors[0], dict):
        return ""
    reason = errors[0].get("reason", "")
    return reason if isinstance(reason, str) else ""


class YouTubeAPIClient:
    """Async YouTube Data API v3 client keyed by a static API key."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        api_key: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.settings = settings or get_settings()
        self.api_key = api_key or self.settings.load_api_key()
        self.base_url = self.settings.youtube_api_base_url.rstrip("/")
        self.timeout = self.settings.youtube_request_timeout
        self.request_count = 0
        self._transport = transport

    async def _make_request(self, endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """Make authenticated GET request to the YouTube API and decode the JSON body."""

        # Add API key to params without touching the caller's dict
        params = {**params, "key": self.api_key}
        url = f"{self.base_url}/{endpoint}"

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.get(url, params=params, headers={"Accept": "application/json"})
            except httpx.RequestError as e:
                logger.error(f"HTTP request to {endpoint} failed: {e}")
                raise YouTubeRemoteError(f"Request to {endpoint} failed: {e}", endpoint=endpoint) from e

        self.request_count += 1

        if response.is_success:
            try:
                return response.json()
            except ValueError as e:
                raise YouTubeRemoteError(
                    f"Invalid JSON in {endpoint} response",
                    status_code=response.status_code,
                    body=response.text,
                    endpoint=endpoint
                ) from e

        if response.status_code == 403 and "quotaExceeded" in _error_reason(response):
            logger.error(f"YouTube API quota exceeded after {self.request_count} requests")
            raise YouTubeQuotaExceededError(
                "Daily quota limit reached",
                status_code=response.status_code,
                body=response.text,
                endpoint=endpoint
            )

        logger.error(f"YouTube API {endpoint} returned HTTP {response.status_code}")
        raise YouTubeRemoteError(
            f"Did not get a valid response from the YouTube API ({endpoint}): {response.status_code}",
            status_code=response.status_code,
            body=response.text,
            endpoint=endpoint
        )

    async def get_channel(self, query: Dict[str, str], part: str = "contentDetails") -> Dict[str, Any]:
        """
        Look up exactly one channel by id, forUsername or forHandle.

        Raises:
            YouTubeChannelNotFoundError: If the response has no items
        """
        params = {"part": part, **query}
        response = await self._make_request("channels", params)

        items = response.get("items")
        if not items:
            raise YouTubeChannelNotFoundError(
                f"No channel found for {query}",
                status_code=200,
                body=str(response),
                endpoint="channels"
            )

        return items[0]

    async def list_channels(self, channel_ids: List[str], part: str = "snippet") -> List[Dict[str, Any]]:
        """Get channel resources for a list of channel IDs (may return fewer)."""
        params = {
            "part": part,
            "id": ",".join(channel_ids)
        }
        response = await self._make_request("channels", params)
        return response.get("items", [])

    async def search_channels(self, query: str, max_results: int = MAX_RESULTS_PER_PAGE) -> List[Dict[str, Any]]:
        """Full-text search restricted to channels, first page only."""
        params = {
            "part": "snippet",
            "q": query,
            "type": "channel",
            "order": "relevance",
            "maxResults": min(max_results, MAX_RESULTS_PER_PAGE)
        }
        response = await self._make_request("search", params)
        return response.get("items", [])

    async def get_playlist_page(self, playlist_id: str, page_token: Optional[str] = None) -> Dict[str, Any]:
        """Get one page of playlist items."""
        params = {
            "playlistId": playlist_id,
            "part": "snippet,contentDetails",
            "maxResults": MAX_RESULTS_PER_PAGE
        }
        if page_token:
            params["pageToken"] = page_token

        return await self._make_request("playlistItems", params)

    async def get_videos(self, video_ids: List[str]) -> List[Dict[str, Any]]:
        """Get id, snippet, contentDetails and localizations for up to 50 videos."""
        if len(video_ids) > MAX_RESULTS_PER_PAGE:
            raise ValueError(f"videos.list accepts at most {MAX_RESULTS_PER_PAGE} IDs, got {len(video_ids)}")

        params = {
            "part": "id,snippet,contentDetails,localizations",
            "id": ",".join(video_ids)
        }
        response = await self._make_request("videos", params)
        return response.get("items", [])

    def get_stats(self) -> Dict[str, Any]:
        """Get client request statistics."""
        return {
            "requests_made": self.request_count,
            "api_key_configured": bool(self.api_key)
        }
