"""
Workflow chain that runs the video listing pipeline and reports a result dict.
"""

import logging
from datetime import datetime
from typing import Dict, Any, Optional

from langchain_core.runnables import RunnableLambda, RunnablePassthrough
from langchain_core.runnables.base import RunnableSequence

from agents.orchestrator import list_channel_videos
from tools.youtube_tools import ChannelResolutionError, YouTubeRemoteError
from utils import DurationFormatError, create_result_dict, handle_step_error

# Setup logging
logger = logging.getLogger(__name__)

# error_type reported for each failure kind
ERROR_TYPES = (
    (DurationFormatError, "format"),
    (ChannelResolutionError, "resolution"),
    (YouTubeRemoteError, "remote"),
)


def classify_error(error: Exception) -> Optional[str]:
    """Map a pipeline exception to its error_type, or None if it is not a pipeline error."""
    for error_class, error_type in ERROR_TYPES:
        if isinstance(error, error_class):
            return error_type
    return None


class ListingChain:
    """Runs the listing pipeline once per channel and never raises pipeline errors."""

    def __init__(self):
        self.executions = 0
        self.successful_executions = 0

    async def execute_listing_workflow(
        self,
        channel_url: str,
        handle_strategy: Optional[str] = None,
        max_concurrency: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        List a channel's videos.

        Workflow: Resolve → Collect → Enrich

        Args:
            channel_url: Channel URL
            handle_strategy: Optional custom handle resolution override
            max_concurrency: Optional enrichment concurrency override

        Returns:
            Result dict with success, errors, error_type, videos and timing
        """
        logger.info(f"Starting listing workflow for {channel_url}")
        start_time = datetime.utcnow()
        self.executions += 1
        errors = []

        try:
            videos = await list_channel_videos.ainvoke({
                "channel_url": channel_url,
                "handle_strategy": handle_strategy,
                "max_concurrency": max_concurrency
            })
        except (DurationFormatError, ChannelResolutionError, YouTubeRemoteError) as e:
            handle_step_error(f"Listing failed for {channel_url}: {e}", errors, logger)
            return create_result_dict(
                success=False,
                errors=errors,
                start_time=start_time,
                error_type=classify_error(e),
                status_code=getattr(e, "status_code", None),
                videos=[],
                video_count=0
            )

        self.successful_executions += 1
        result = create_result_dict(
            success=True,
            start_time=start_time,
            error_type=None,
            videos=videos,
            video_count=len(videos),
            enriched_count=sum(1 for video in videos if video.is_enriched)
        )
        logger.info(
            f"Completed listing workflow for {channel_url}: "
            f"{result['video_count']} videos in {result['execution_time_seconds']:.2f}s"
        )
        return result

    def get_stats(self) -> Dict[str, Any]:
        """Get chain execution statistics."""
        return {
            "total_executions": self.executions,
            "successful_executions": self.successful_executions,
            "success_rate": (
                self.successful_executions / self.executions
                if self.executions > 0
                else 0.0
            )
        }


# Global chain instance
listing_chain = ListingChain()


async def execute_channel_listing(inputs: Dict[str, Any]) -> Dict[str, Any]:
    """Execute the listing workflow for a single channel (LangChain compatible)."""
    return await listing_chain.execute_listing_workflow(
        inputs["channel_url"],
        handle_strategy=inputs.get("handle_strategy"),
        max_concurrency=inputs.get("max_concurrency")
    )


def create_listing_chain() -> RunnableSequence:
    """
    Create a LangChain compatible listing chain.

    Returns:
        RunnableSequence for the listing workflow
    """
    return (
        RunnablePassthrough()
        | RunnableLambda(execute_channel_listing)
    )
