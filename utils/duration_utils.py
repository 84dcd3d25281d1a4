"""
ISO 8601 duration parsing for video lengths.
"""

from datetime import timedelta

import isodate


class DurationFormatError(ValueError):
    """Duration string does not follow the ISO 8601 duration grammar."""

    def __init__(self, text: str, reason: str = "not an ISO 8601 duration"):
        super().__init__(f"Invalid duration {text!r}: {reason}")
        self.text = text


def parse_duration(text: str) -> str:
    """
    Turn an ISO 8601 duration (e.g. PT1H2M3S) into HH:MM:SS.

    Days and weeks are folded into the hour count, and the hour field widens
    past two digits instead of wrapping. Fractional seconds are truncated.

    Args:
        text: Duration as reported by contentDetails.duration

    Returns:
        Zero-padded hours:minutes:seconds string

    Raises:
        DurationFormatError: If the text is not a duration, or carries
            non-zero years or months
    """
    if not isinstance(text, str) or not text.strip():
        raise DurationFormatError(str(text), "empty duration")

    try:
        duration = isodate.parse_duration(text.strip())
    except (isodate.ISO8601Error, ValueError) as e:
        raise DurationFormatError(text, str(e)) from e

    # isodate returns its own Duration type when years or months are present
    if not isinstance(duration, timedelta):
        if duration.years or duration.months:
            raise DurationFormatError(text, "calendar years/months have no fixed length")
        duration = duration.tdelta

    if duration < timedelta(0):
        raise DurationFormatError(text, "negative duration")

    total_seconds = int(duration.total_seconds())
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
