"""
Result dict helpers for workflow steps.
"""

from datetime import datetime
from typing import List, Dict, Any, Optional


def create_result_dict(
    success: bool,
    errors: Optional[List[str]] = None,
    start_time: Optional[datetime] = None,
    **kwargs
) -> Dict[str, Any]:
    """
    Create a standardized workflow result dictionary.

    Args:
        success: Whether the workflow succeeded
        errors: Error messages collected along the way
        start_time: When the workflow started; adds execution_time_seconds
        **kwargs: Additional fields to include in the result

    Returns:
        Result dictionary with at least success and errors
    """
    result = {
        "success": success,
        "errors": errors or [],
        **kwargs
    }
    if start_time is not None:
        result["execution_time_seconds"] = (datetime.utcnow() - start_time).total_seconds()
    return result


def handle_step_error(error_msg: str, errors: List[str], logger) -> None:
    """Log a failed step and record its message."""
    logger.error(error_msg)
    errors.append(error_msg)
