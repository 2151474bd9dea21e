"""
Logging for the chaos_particles namespace.

The console gets a short line per record. The optional log file gets
timestamps and, by default, everything down to DEBUG (spawns, camera setup)
even when the console only shows INFO.
"""
import logging
import sys
from typing import Optional

CONSOLE_FORMAT = "%(levelname)-7s %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)-7s %(name)s: %(message)s"


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    file_level: int = logging.DEBUG,
) -> logging.Logger:
    """Attach console (and optionally file) handlers; safe to call again."""
    logger = logging.getLogger("chaos_particles")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console)
    logger.setLevel(level)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%H:%M:%S"))
        logger.addHandler(file_handler)
        logger.setLevel(min(level, file_level))

    logger.debug("Logging to console at %s%s", logging.getLevelName(level),
                 f", file {log_file} at {logging.getLevelName(file_level)}" if log_file else "")
    return logger
