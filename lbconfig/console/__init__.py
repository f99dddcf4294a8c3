"""Rich console output for lbconfig.

Usage:
    from lbconfig.console import logger

    logger.warning("Policy round_robin not found in the LB registry, skipping")
    logger.table(title="Providers", columns=["name"], rows=[["round_robin"]])
"""
from lbconfig.console.logger import Logger, get_logger

# Module-level singleton for convenient import
logger = get_logger()

__all__ = ["Logger", "get_logger", "logger"]
