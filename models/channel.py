"""
Channel addressing models.
"""

from enum import Enum

from pydantic import BaseModel, Field, field_validator


class ChannelAddressingMode(str, Enum):
    """How a channel reference addresses its channel."""

    LEGACY_USERNAME = "legacy_username"
    CHANNEL_ID = "channel_id"
    CUSTOM_HANDLE = "custom_handle"


class ChannelAddress(BaseModel):
    """A channel reference classified into exactly one addressing mode."""

    mode: ChannelAddressingMode
    value: str = Field(..., description="Username, channel ID or handle extracted from the reference")
    reference: str = Field(..., description="The channel reference it was derived from")

    model_config = {"frozen": True}

    @field_validator('value')
    @classmethod
    def validate_value(cls, v):
        """Validate the extracted identifier."""
        if not v.strip():
            raise ValueError('Channel identifier cannot be empty')
        return v.strip()

    @property
    def normalized_handle(self) -> str:
        """Handle in the form the API reports as customUrl (lowercase, @-prefixed)."""
        return normalize_handle(self.value)


def normalize_handle(handle: str) -> str:
    """Lowercase a custom handle and give it exactly one leading '@'."""
    return "@" + handle.strip().lstrip("@").lower()
