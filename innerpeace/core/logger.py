import sys
from loguru import logger
from innerpeace.config import get_settings

def setup_logger():
    current = get_settings()

    # Remove default logger
    logger.remove()

    # Add console sink
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=current.LOG_LEVEL
    )

    # Add file sink
    if current.LOG_FILE:
        logger.add(
            current.LOG_FILE,
            rotation="10 MB",
            retention="1 week",
            compression="zip",
            level="DEBUG"
        )

setup_logger()
