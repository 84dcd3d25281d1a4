"""
Pydantic models for data validation and structure.
"""

from .channel import ChannelAddress, ChannelAddressingMode, normalize_handle
from .video import VideoRecord, EnrichmentResult

__all__ = [
    "ChannelAddress",
    "ChannelAddressingMode",
    "normalize_handle",
    "VideoRecord",
    "EnrichmentResult"
]
