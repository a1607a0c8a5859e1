import os
import sys
from typing import TextIO

from loguru import logger


def setup_logger(
    *,
    json_logs: bool = False,
    level: str = "INFO",
    log_dir: str | None = "logs",
    console: TextIO = sys.stdout,
) -> None:
    """Configure loguru for the scoring service.

    Console level controlled by LOG_LEVEL env (default: INFO).
    File sink (when log_dir is set) always captures DEBUG, so factor
    breakdowns and fallback decisions are available after the fact.
    """
    console_level = os.getenv("LOG_LEVEL", level).upper()
    logger.remove()

    if json_logs:
        logger.add(console, serialize=True, level=console_level)
    else:
        logger.add(
            console,
            format=(
                "<green>{time:HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
                "<level>{message}</level>"
            ),
            level=console_level,
            colorize=True,
        )

    if log_dir:
        logger.add(
            os.path.join(log_dir, "tokenrisk_{time:YYYY-MM-DD}.log"),
            rotation="50 MB",
            retention="3 days",
            compression="gz",
            level="DEBUG",
            serialize=json_logs,
        )
