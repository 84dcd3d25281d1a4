"""
Video record and enrichment models.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class VideoRecord(BaseModel):
    """One uploaded video of a channel."""

    upload_date: datetime = Field(..., description="Video publication timestamp")
    title: str = Field(..., description="Video title")
    video_id: str = Field(..., description="YouTube video ID")
    duration: Optional[str] = Field(None, description="HH:MM:SS duration, set by enrichment")

    model_config = {"frozen": True}

    @field_validator('video_id')
    @classmethod
    def validate_video_id(cls, v):
        """Validate YouTube video ID."""
        if not v.strip():
            raise ValueError('Video ID cannot be empty')
        return v

    @property
    def url(self) -> str:
        """Get short YouTube video URL."""
        return f"https://youtu.be/{self.video_id}"

    @property
    def is_enriched(self) -> bool:
        return self.duration is not None


class EnrichmentResult(BaseModel):
    """Duration and canonical title for one video, as returned by videos.list."""

    video_id: str
    duration: str
    title: str
