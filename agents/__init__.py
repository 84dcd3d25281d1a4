"""
Pipeline agents for listing a channel's videos.
"""

from .channel_resolver import ChannelResolverAgent, parse_channel_reference
from .playlist_collector import PlaylistCollector
from .video_enricher import VideoEnricher
from .orchestrator import OrchestratorAgent, list_channel_videos

__all__ = [
    "ChannelResolverAgent",
    "parse_channel_reference",
    "PlaylistCollector",
    "VideoEnricher",
    "OrchestratorAgent",
    "list_channel_videos"
]
