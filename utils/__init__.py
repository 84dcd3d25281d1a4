"""
Utility functions for the channel video list pipeline.
"""

from .logging_utils import safe_log_text
from .error_utils import create_result_dict, handle_step_error
from .duration_utils import DurationFormatError, parse_duration

__all__ = [
    "safe_log_text",
    "create_result_dict",
    "handle_step_error",
    "DurationFormatError",
    "parse_duration"
]
