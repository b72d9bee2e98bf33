"""
Logging setup for pipeline runs.

Every record carries a ``stage`` (intake, enrich, writer, ...) in its extra
context so a run's log can be followed stage by stage. Records logged without
a bound stage show ``-``.
"""

import sys
from pathlib import Path
from typing import Any, Optional

from loguru import logger

DEFAULT_STAGE = "-"

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<magenta>{extra[stage]: <7}</magenta> | <level>{message}</level>"
)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[stage]: <7} | "
    "{name}:{function}:{line} - {message}"
)


def pipeline_logger(stage: str, **context: Any):
    """Logger bound to a pipeline stage, plus any extra context (adapter, case number)."""
    return logger.bind(stage=stage, **context)


def setup_logging(
    log_file: Optional[Path] = None,
    level: str = "INFO",
    rotation: str = "1 day",
    json_lines: bool = False,
) -> None:
    """Configure logging for a pipeline run.

    Args:
        log_file: Optional path to log file
        level: Logging level
        rotation: Log rotation policy
        json_lines: Write the log file as one JSON record per line
    """
    logger.remove()
    logger.configure(extra={"stage": DEFAULT_STAGE})

    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level.upper())

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            format=FILE_FORMAT,
            level=level.upper(),
            rotation=rotation,
            serialize=json_lines,
        )
