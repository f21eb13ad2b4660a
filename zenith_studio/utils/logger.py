import sys
from pathlib import Path
from typing import Optional

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"

_configured = False


def _stderr(message):
    # Looked up per message so a swapped sys.stderr (click's test runner) is honoured.
    sys.stderr.write(message)


def setup_logger(log_level: str = "INFO", log_file: Optional[Path] = None):
    """Console sink at ``log_level``; optional DEBUG file sink for full call transcripts."""
    global _configured

    if _configured and log_file is None:
        return logger

    logger.remove()
    logger.add(_stderr, format=CONSOLE_FORMAT, level=log_level.upper(), colorize=False)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            format=FILE_FORMAT,
            level="DEBUG",
            rotation="10 MB",
            retention="7 days",
            encoding="utf-8",
        )

    _configured = True
    return logger
