"""
YouTube Data API client and output rendering tools.
"""

from .youtube_tools import (
    YouTubeAPIClient,
    YouTubeAPIError,
    ChannelResolutionError,
    YouTubeRemoteError,
    YouTubeChannelNotFoundError,
    YouTubeQuotaExceededError
)
from .output_tools import render_video_list

__all__ = [
    "YouTubeAPIClient",
    "YouTubeAPIError",
    "ChannelResolutionError",
    "YouTubeRemoteError",
    "YouTubeChannelNotFoundError",
    "YouTubeQuotaExceededError",
    "render_video_list"
]
