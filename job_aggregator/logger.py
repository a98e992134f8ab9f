"""
Logger setup for the service and the CLI.

Console output at the configured level; an optional file sink captures
everything down to DEBUG.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

# Default level colors for console output
LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def setup_logger(level: str = "INFO", log_file: Optional[str] = None) -> Optional[Path]:
    """
    Configure loguru sinks.

    Args:
        level: Minimum level for the console sink (e.g. "INFO", "DEBUG")
        log_file: Optional path of a log file; parent directories are created

    Returns:
        Path to the log file, or None when logging to console only
    """
    logger.remove()

    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(
        sys.stderr,
        format="{time:YYYY-MM-DD HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>",
        level=level,
        colorize=True,
    )

    if not log_file:
        return None

    path = Path(log_file)
    path.parent.mkdir(exist_ok=True, parents=True)
    logger.add(path, format="{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {name}:{line} | {message}", level="DEBUG")
    return path
