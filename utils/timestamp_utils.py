"""
Timestamp Utilities Module

Timestamps for log file names and record metadata.
"""

import datetime
from typing import Optional


def generate_timestamp() -> str:
    """
    Generate a timestamp string in YYYYMMDD_HHMMSS format.

    Returns:
        Timestamp string in format YYYYMMDD_HHMMSS
    """
    return datetime.datetime.now().strftime("%Y%m%d_%H%M%S")


def generate_log_filename(base_name: str, timestamp: Optional[str] = None, log_dir: str = "logs") -> str:
    """
    Generate a timestamped log filename.

    Args:
        base_name: Base name for the log file (e.g., 'logbeacon')
        timestamp: Optional timestamp string. If None, generates current timestamp.
        log_dir: Directory the file lives in

    Returns:
        Full filename with timestamp (e.g., 'logs/logbeacon_20251108_123045.log')
    """
    if timestamp is None:
        timestamp = generate_timestamp()
    return f"{log_dir}/{base_name}_{timestamp}.log"
