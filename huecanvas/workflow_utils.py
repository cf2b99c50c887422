"""
Workflow utilities: structured logging for render runs.
"""
import json
import logging
from typing import Any

logger = logging.getLogger(__name__)


def log_structured(level: str, **kwargs: Any) -> None:
    """Emit structured (JSON) log line, e.g. a finished render and its duration."""
    record = {"level": level, **kwargs}
    line = json.dumps(record, default=str)
    if level == "error":
        logger.error("%s", line)
    elif level == "warning":
        logger.warning("%s", line)
    else:
        logger.info("%s", line)
