"""
Logging setup for the viewer and the command line.

Everything logs under the ``hyperdice`` namespace. The engine modules emit
per-frame counts at DEBUG and have their own threshold; the viewer and the
command line report user actions at INFO.
"""
import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "hyperdice"
ENGINE_MODULES = ("polytopes", "rotation", "visibility", "mesh", "wireframe", "die", "controls")

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None,
                  engine_level: Optional[int] = None) -> logging.Logger:
    """
    Configure the ``hyperdice`` logger and its engine children.

    Args:
        level: Threshold for the package (viewer, CLI).
        log_file: Optional path; the file receives the same records as stdout.
        engine_level: Threshold for the engine modules. Defaults to
            ``max(level, WARNING)`` so frame-by-frame DEBUG output stays off
            unless asked for.
    """
    if engine_level is None:
        engine_level = max(level, logging.WARNING)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(min(level, engine_level))
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    for name in ENGINE_MODULES:
        logging.getLogger(f"{PACKAGE_LOGGER}.{name}").setLevel(engine_level)
    # the package logger carries the lower of the two, so the viewer needs its own
    logging.getLogger(f"{PACKAGE_LOGGER}.viewer").setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging initialized (package %s, engine %s)",
                 logging.getLevelName(level), logging.getLevelName(engine_level))
    return logger
