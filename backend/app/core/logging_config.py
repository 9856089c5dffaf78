import sys
from pathlib import Path

from loguru import logger

LOG_DIR = Path("logs")


def setup_logging(environment: str = "development") -> None:
    logger.remove()
    if environment == "production":
        logger.add(sys.stdout, level="INFO", serialize=True)
        return

    logger.add(
        sys.stdout,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        level="DEBUG",
    )
    try:
        LOG_DIR.mkdir(exist_ok=True)
        logger.add(LOG_DIR / "course_recent.log", rotation="100 MB", retention="10 days", compression="zip", level="DEBUG")
    except OSError as e:
        logger.warning(f"No se pudo crear archivo de logs: {e}")
