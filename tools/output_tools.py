"""
Text rendering of video lists for terminals and files.
"""

import os
import shutil
import sys
from datetime import datetime
from typing import List, Optional

from models.video import VideoRecord

# Column widths
UPLOAD_TIME_WIDTH = 19
DURATION_WIDTH = 8
LINK_WIDTH = 28
WIDE_TERMINAL_WIDTH = 80
COLUMN_GAP = "  "

MISSING_DURATION = "--:--:--"


def format_upload_date(upload_date: datetime) -> str:
    return upload_date.strftime("%Y-%m-%d %H:%M:%S")


def format_duration(video: VideoRecord) -> str:
    return video.duration or MISSING_DURATION


def tsv_format(videos: List[VideoRecord]) -> str:
    """One tab-separated line per video, suitable for redirecting into a file."""
    return "\n".join(
        "\t".join([
            format_upload_date(video.upload_date),
            format_duration(video),
            video.title,
            video.url
        ])
        for video in videos
    )


def single_column_format(videos: List[VideoRecord]) -> str:
    """Date, duration, title and link on separate lines, for narrow displays."""
    return "\n\n".join(
        "\n".join([
            f"{format_upload_date(video.upload_date)}  {format_duration(video)}",
            video.title,
            video.url
        ])
        for video in videos
    )


def split_video_title(title: str, max_width: int) -> List[str]:
    """
    Wrap a title into lines no wider than max_width.

    Words are never broken, so a single word longer than max_width gets a
    line of its own.
    """
    lines: List[str] = []
    current: List[str] = []
    current_length = 0

    for word in title.split():
        needed = len(word) if not current else current_length + 1 + len(word)
        if current and needed > max_width:
            lines.append(" ".join(current))
            current = [word]
            current_length = len(word)
        else:
            current.append(word)
            current_length = needed

    lines.append(" ".join(current))
    return lines


def three_column_format(videos: List[VideoRecord], title_width: int) -> str:
    """Upload time + duration, wrapped title and link columns, for wide displays."""
    if not videos:
        return ""

    split_titles = [split_video_title(video.title, title_width) for video in videos]
    title_column_width = max(len(line) for lines in split_titles for line in lines)
    first_column_width = UPLOAD_TIME_WIDTH + len(COLUMN_GAP) + DURATION_WIDTH

    rows = []
    for video, title_lines in zip(videos, split_titles):
        first_column = f"{format_upload_date(video.upload_date)}{COLUMN_GAP}{format_duration(video)}"
        rows.append(COLUMN_GAP.join([
            first_column.ljust(first_column_width),
            title_lines[0].ljust(title_column_width),
            video.url
        ]).rstrip())
        for line in title_lines[1:]:
            rows.append(COLUMN_GAP.join([" " * first_column_width, line]).rstrip())

    return "\n".join(rows)


def terminal_columns() -> int:
    """Terminal width from $COLUMNS, falling back to the detected size."""
    columns = os.environ.get("COLUMNS", "")
    if columns.isdigit():
        return int(columns)
    return shutil.get_terminal_size().columns


def is_file_output() -> bool:
    """True when $FILE_OUTPUT is 1 or stdout is not a terminal."""
    file_output = os.environ.get("FILE_OUTPUT")
    if file_output is not None and file_output.strip():
        return file_output.strip() == "1"
    return not sys.stdout.isatty()


def render_video_list(
    videos: List[VideoRecord],
    output_type: str = "multi",
    columns: Optional[int] = None,
    file_output: Optional[bool] = None
) -> str:
    """
    Render videos as TSV, a single column or three columns.

    Args:
        videos: Videos in display order
        output_type: multi, single or tsv
        columns: Terminal width; detected when omitted
        file_output: Force TSV for file output; detected when omitted

    Returns:
        Rendered text without a trailing newline
    """
    if output_type not in ("multi", "single", "tsv"):
        raise ValueError(f"Unknown output type: {output_type}")

    if file_output is None:
        file_output = is_file_output()
    if output_type == "tsv" or file_output:
        return tsv_format(videos)

    if output_type == "single":
        return single_column_format(videos)

    if columns is None:
        columns = terminal_columns()
    if columns < WIDE_TERMINAL_WIDTH:
        return single_column_format(videos)

    fixed_width = UPLOAD_TIME_WIDTH + DURATION_WIDTH + LINK_WIDTH + 3 * len(COLUMN_GAP)
    return three_column_format(videos, max(columns - fixed_width, 10))
