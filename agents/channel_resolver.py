"""
Channel resolution: channel URL -> uploads playlist ID.
"""

import logging
import re
from urllib.parse import unquote
from typing import Optional

from models.channel import ChannelAddress, ChannelAddressingMode, normalize_handle
from tools.youtube_tools import (
    ChannelResolutionError,
    YouTubeAPIClient,
    YouTubeChannelNotFoundError,
    YouTubeRemoteError,
)

# Setup logging
logger = logging.getLogger(__name__)

# Checked in this order; the first one that matches wins.
_SEGMENT = r"([^/?#]+)"
CHANNEL_URL_PATTERNS = [
    (ChannelAddressingMode.LEGACY_USERNAME, re.compile(r"/user/" + _SEGMENT)),
    (ChannelAddressingMode.CHANNEL_ID, re.compile(r"/channel/" + _SEGMENT)),
    (ChannelAddressingMode.CUSTOM_HANDLE, re.compile(r"/c/" + _SEGMENT)),
    (ChannelAddressingMode.CUSTOM_HANDLE, re.compile(r"/@" + _SEGMENT)),
]


def parse_channel_reference(channel_reference: str) -> ChannelAddress:
    """
    Classify a channel URL by the way it addresses the channel.

    Examples:
        https://www.youtube.com/user/nismotv2013/videos -> LEGACY_USERNAME
        https://www.youtube.com/channel/UCy0tKL1T7wFoYcxCe0xjN6Q -> CHANNEL_ID
        https://www.youtube.com/@LinusTechTips, .../c/LinusTechTips -> CUSTOM_HANDLE

    The captured segment is percent-decoded.

    Raises:
        ChannelResolutionError: If none of the URL shapes match
    """
    for mode, pattern in CHANNEL_URL_PATTERNS:
        match = pattern.search(channel_reference)
        # Browsers copy non-ASCII handles percent-encoded
        value = unquote(match.group(1)).strip() if match else ""
        if value:
            return ChannelAddress(mode=mode, value=value, reference=channel_reference)

    raise ChannelResolutionError(channel_reference)


class ChannelResolverAgent:
    """Turns channel references into the ID of the channel's uploads playlist."""

    def __init__(self, client: YouTubeAPIClient, handle_strategy: Optional[str] = None):
        self.client = client
        self.handle_strategy = handle_strategy or client.settings.youtube_handle_strategy

    async def resolve_uploads_collection(self, channel_reference: str) -> str:
        """
        Get the ID of the playlist holding every upload of the channel.

        Args:
            channel_reference: Channel URL (/user/, /channel/, /c/ or /@ form)

        Returns:
            Uploads playlist ID

        Raises:
            ChannelResolutionError: If the URL shape is not recognized
            YouTubeRemoteError: On HTTP failure or when no channel is found
        """
        address = parse_channel_reference(channel_reference)
        logger.info(f"Resolving channel {address.value} by {address.mode.value}")

        query = await self._build_channel_query(address)
        channel = await self.client.get_channel(query, part="contentDetails")

        try:
            uploads = channel["contentDetails"]["relatedPlaylists"]["uploads"]
        except (KeyError, TypeError) as e:
            raise YouTubeRemoteError(
                f"Channel response for {channel_reference} has no uploads playlist",
                status_code=200,
                body=str(channel),
                endpoint="channels"
            ) from e

        logger.info(f"Uploads playlist for {address.value}: {uploads}")
        return uploads

    async def _build_channel_query(self, address: ChannelAddress) -> dict:
        if address.mode == ChannelAddressingMode.CHANNEL_ID:
            return {"id": address.value}

        if address.mode == ChannelAddressingMode.LEGACY_USERNAME:
            return {"forUsername": address.value}

        if self.handle_strategy == "for_handle":
            return {"forHandle": address.normalized_handle}

        channel_id = await self.resolve_handle_to_channel_id(address.value)
        if channel_id is None:
            raise YouTubeChannelNotFoundError(
                f"No channel with custom handle {address.normalized_handle}",
                status_code=200,
                endpoint="search"
            )
        return {"id": channel_id}

    async def resolve_handle_to_channel_id(self, handle: str) -> Optional[str]:
        """
        Find the channel ID behind a custom handle.

        search.list has no exact handle lookup, so the handle is searched as
        free text and the candidate channels are filtered on customUrl.
        Only the first 50 relevance-ordered hits are examined; a channel
        ranked lower is not found.

        Args:
            handle: Custom handle, with or without the leading '@'

        Returns:
            Channel ID, or None if no candidate carries the handle
        """
        normalized = normalize_handle(handle)
        results = await self.client.search_channels(normalized)

        candidate_ids = []
        for item in results:
            channel_id = item.get("snippet", {}).get("channelId") or item.get("id", {}).get("channelId")
            if channel_id and channel_id not in candidate_ids:
                candidate_ids.append(channel_id)

        if not candidate_ids:
            logger.info(f"Search returned no channels for {normalized}")
            return None

        channels = await self.client.list_channels(candidate_ids, part="snippet")
        for channel in channels:
            custom_url = channel.get("snippet", {}).get("customUrl", "")
            if custom_url.lower() == normalized:
                logger.info(f"Custom handle {normalized} belongs to channel {channel['id']}")
                return channel["id"]

        logger.info(f"None of {len(candidate_ids)} candidate channels has custom handle {normalized}")
        return None
