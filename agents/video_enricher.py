"""
Partitioned, concurrent enrichment of video records with durations and titles.
"""

import asyncio
import logging
from types import MappingProxyType
from typing import List, Dict, Any, Optional, Mapping

from models.video import VideoRecord, EnrichmentResult
from tools.youtube_tools import YouTubeAPIClient, MAX_RESULTS_PER_PAGE
from utils import parse_duration, safe_log_text

# Setup logging
logger = logging.getLogger(__name__)

# Preferred localizations for the display title, most preferred first
TITLE_LOCALES = ("en-US", "en")


def partition(records: List[VideoRecord], size: int) -> List[List[VideoRecord]]:
    """Split records into contiguous chunks of at most `size`."""
    return [records[i:i + size] for i in range(0, len(records), size)]


def choose_title(video_details: Dict[str, Any]) -> str:
    """Pick the en-US title, then the en title, then the snippet title."""
    localizations = video_details.get("localizations") or {}
    for locale in TITLE_LOCALES:
        title = (localizations.get(locale) or {}).get("title")
        if title:
            return title
    return video_details.get("snippet", {}).get("title", "")


def to_enrichment_result(video_details: Dict[str, Any]) -> Optional[EnrichmentResult]:
    """
    Build the enrichment for one videos.list item.

    Returns None for items without a duration (deleted or private videos).
    """
    duration = (video_details.get("contentDetails") or {}).get("duration")
    if not duration:
        return None

    return EnrichmentResult(
        video_id=video_details["id"],
        duration=parse_duration(duration),
        title=choose_title(video_details)
    )


class VideoEnricher:
    """Adds durations and canonical titles to video records in batches of 50."""

    def __init__(
        self,
        client: YouTubeAPIClient,
        batch_size: Optional[int] = None,
        max_concurrent: Optional[int] = None
    ):
        self.client = client
        settings = client.settings
        self.batch_size = min(batch_size or settings.youtube_batch_size, MAX_RESULTS_PER_PAGE)
        self.max_concurrent = max_concurrent or settings.youtube_max_concurrent_requests

    async def _enrich_partition(
        self,
        semaphore: asyncio.Semaphore,
        records: List[VideoRecord]
    ) -> List[EnrichmentResult]:
        """Fetch one batch from videos.list and convert the items that have a duration."""
        async with semaphore:
            items = await self.client.get_videos([record.video_id for record in records])

        results = []
        for item in items:
            result = to_enrichment_result(item)
            if result is None:
                logger.warning(f"Video {item.get('id')} has no duration, leaving it unenriched")
                continue
            results.append(result)
        return results

    async def enrich(self, records: List[VideoRecord]) -> List[VideoRecord]:
        """
        Enrich every record and sort the result by upload date.

        All batches are launched before any is awaited, with at most
        `max_concurrent` requests in flight. Every batch runs to completion;
        afterwards the first failure (in batch order) is raised.

        Records the API returned no duration for are kept with duration None.
        Records with equal upload dates keep their input order.

        Args:
            records: Records from the playlist collector

        Returns:
            New, enriched records sorted ascending by upload_date
        """
        if not records:
            return []

        by_id: Mapping[str, VideoRecord] = MappingProxyType({record.video_id: record for record in records})
        partitions = partition(records, self.batch_size)
        semaphore = asyncio.Semaphore(self.max_concurrent)

        logger.info(
            f"Enriching {len(records)} videos in {len(partitions)} batch(es), "
            f"max {self.max_concurrent} concurrent"
        )

        tasks = [self._enrich_partition(semaphore, chunk) for chunk in partitions]
        batch_results = await asyncio.gather(*tasks, return_exceptions=True)

        for batch_result in batch_results:
            if isinstance(batch_result, BaseException):
                raise batch_result

        enrichments: Dict[str, EnrichmentResult] = {}
        for batch_result in batch_results:
            for result in batch_result:
                if result.video_id not in by_id:
                    logger.debug(f"Ignoring enrichment for unknown video {result.video_id}")
                    continue
                enrichments[result.video_id] = result

        enriched = []
        for record in records:
            result = enrichments.get(record.video_id)
            if result is None:
                enriched.append(record)
                continue
            if result.title != record.title:
                logger.debug(
                    f"Video {record.video_id} title replaced with "
                    f"localized title {safe_log_text(result.title)}"
                )
            enriched.append(record.model_copy(update={"duration": result.duration, "title": result.title}))

        missing = len(records) - len(enrichments)
        if missing:
            logger.info(f"{missing} video(s) returned no duration and are listed without one")

        return sorted(enriched, key=lambda video: video.upload_date)
