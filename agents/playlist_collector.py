"""
Collects every item of an uploads playlist across paginated responses.
"""

import logging
from datetime import datetime
from typing import List, Dict, Any

from models.video import VideoRecord
from tools.youtube_tools import YouTubeAPIClient, YouTubeRemoteError

# Setup logging
logger = logging.getLogger(__name__)


def parse_published_at(value: str) -> datetime:
    """Parse an RFC 3339 instant such as 2023-04-01T12:00:00Z."""
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def get_video_data(playlist_items_response: Dict[str, Any]) -> List[VideoRecord]:
    """
    Extract title, video ID and upload date from a playlistItems response.

    Private and removed videos come back without videoPublishedAt and are
    skipped.

    Raises:
        YouTubeRemoteError: If an item lacks one of the required fields
    """
    videos = []
    for item in playlist_items_response.get("items", []):
        details = item.get("contentDetails") if isinstance(item, dict) else None
        if isinstance(details, dict) and details.get("videoId") and not details.get("videoPublishedAt"):
            logger.warning(f"Skipping playlist item {details['videoId']}: no publish time (private or removed)")
            continue

        try:
            videos.append(VideoRecord(
                title=item["snippet"]["title"],
                video_id=item["contentDetails"]["videoId"],
                upload_date=parse_published_at(item["contentDetails"]["videoPublishedAt"])
            ))
        except (KeyError, TypeError, ValueError) as e:
            raise YouTubeRemoteError(
                f"Malformed playlist item: {e}",
                status_code=200,
                body=str(item),
                endpoint="playlistItems"
            ) from e
    return videos


class PlaylistCollector:
    """Walks playlistItems pages until the API stops returning a cursor."""

    def __init__(self, client: YouTubeAPIClient):
        self.client = client

    async def fetch_all_items(self, playlist_id: str) -> List[VideoRecord]:
        """
        Get every video in the playlist, in the order the API returns them.

        Any failed page aborts the whole fetch; nothing partial is returned.

        Args:
            playlist_id: Uploads playlist ID

        Returns:
            Video records without durations
        """
        videos: List[VideoRecord] = []
        page_token = None
        pages = 0

        while True:
            response = await self.client.get_playlist_page(playlist_id, page_token)
            pages += 1
            videos.extend(get_video_data(response))

            page_token = response.get("nextPageToken")
            if not page_token:
                break

            logger.debug(f"Playlist {playlist_id}: {len(videos)} videos after page {pages}")

        logger.info(f"Collected {len(videos)} videos from playlist {playlist_id} in {pages} page(s)")
        return videos
