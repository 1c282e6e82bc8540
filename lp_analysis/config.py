"""
Configuration settings for the LP analysis core

Loads environment variables and exposes the tunable heuristic constants.
"""
import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings:
    """Analysis settings"""

    # Analyzer defaults
    DEFAULT_POSITION_SIZE_USD: float = float(os.getenv("LP_DEFAULT_POSITION_SIZE_USD", 10000))
    DEFAULT_TIME_IN_RANGE: float = float(os.getenv("LP_DEFAULT_TIME_IN_RANGE", 0.7))

    # Volatility thresholds for concentration type (decimal, 0.8 = 80%)
    FULL_RANGE_VOL_THRESHOLD: float = float(os.getenv("LP_FULL_RANGE_VOL_THRESHOLD", 0.8))
    CONCENTRATED_VOL_THRESHOLD: float = float(os.getenv("LP_CONCENTRATED_VOL_THRESHOLD", 0.3))

    # Logging
    LOG_LEVEL: str = os.getenv("LP_LOG_LEVEL", "WARNING").upper()


# Create global settings instance
settings = Settings()


def setup_logging() -> None:
    """Attach a stdout handler to the package logger."""
    logger = logging.getLogger("lp_analysis")
    if logger.handlers:
        return
    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, settings.LOG_LEVEL, logging.WARNING))
