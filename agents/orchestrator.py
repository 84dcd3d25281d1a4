"""
Pipeline orchestrator: channel URL -> sorted, enriched list of uploads.
"""

import logging
from datetime import datetime
from typing import List, Optional, Dict, Any

from langchain_core.tools import tool

from config.settings import Settings, get_settings
from models.video import VideoRecord
from tools.youtube_tools import YouTubeAPIClient
from agents.channel_resolver import ChannelResolverAgent
from agents.playlist_collector import PlaylistCollector
from agents.video_enricher import VideoEnricher

# Setup logging
logger = logging.getLogger(__name__)


class OrchestratorAgent:
    """Runs channel resolution, playlist collection and enrichment in sequence."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[YouTubeAPIClient] = None
    ):
        self.settings = settings or get_settings()
        self.client = client or YouTubeAPIClient(settings=self.settings)
        self.resolver = ChannelResolverAgent(self.client)
        self.collector = PlaylistCollector(self.client)
        self.enricher = VideoEnricher(self.client)
        self.runs = 0

    async def run(self, channel_reference: str) -> List[VideoRecord]:
        """
        List every upload of a channel, enriched and sorted by upload date.

        Each phase waits for the previous one. Errors from any phase
        propagate unchanged.

        Args:
            channel_reference: Channel URL

        Returns:
            Video records sorted ascending by upload_date
        """
        start_time = datetime.utcnow()
        self.runs += 1

        playlist_id = await self.resolver.resolve_uploads_collection(channel_reference)
        records = await self.collector.fetch_all_items(playlist_id)
        videos = await self.enricher.enrich(records)

        execution_time = (datetime.utcnow() - start_time).total_seconds()
        logger.info(
            f"Listed {len(videos)} videos for {channel_reference} "
            f"with {self.client.request_count} API requests in {execution_time:.2f}s"
        )
        return videos

    def get_stats(self) -> Dict[str, Any]:
        """Get orchestrator statistics."""
        return {
            "runs": self.runs,
            **self.client.get_stats()
        }


# LangChain tools
@tool
async def list_channel_videos(
    channel_url: str,
    handle_strategy: Optional[str] = None,
    max_concurrency: Optional[int] = None
) -> List[VideoRecord]:
    """
    List every video uploaded to a YouTube channel, oldest first.

    Args:
        channel_url: Channel URL in /user/, /channel/, /c/ or /@ form
        handle_strategy: Override for custom handle resolution (search or for_handle)
        max_concurrency: Override for concurrent videos.list requests

    Returns:
        List of VideoRecord objects with durations
    """
    logger.info(f"Listing videos for channel {channel_url}")

    overrides = {}
    if handle_strategy:
        overrides["youtube_handle_strategy"] = handle_strategy
    if max_concurrency:
        overrides["youtube_max_concurrent_requests"] = max_concurrency

    settings = get_settings()
    if overrides:
        settings = settings.model_copy(update=overrides)

    orchestrator = OrchestratorAgent(settings=settings)
    return await orchestrator.run(channel_url)
