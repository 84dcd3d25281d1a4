"""
Logging helpers for video titles and other remote text.
"""

from typing import Optional


def safe_log_text(text: Optional[str], max_length: int = 80) -> Optional[str]:
    """
    Make remote text safe for log lines.

    Non-ASCII characters are replaced so that consoles with a narrow encoding
    do not raise, and long text is shortened with an ellipsis.

    Args:
        text: Text that may contain Unicode characters
        max_length: Longest text kept intact; 0 disables shortening

    Returns:
        ASCII-safe, possibly shortened version of the text
    """
    if not text:
        return text
    safe = text.encode('ascii', 'replace').decode('ascii')
    if max_length and len(safe) > max_length:
        safe = safe[:max_length - 3] + "..."
    return safe
