import logging
import sys

from colorlog import ColoredFormatter

LOGGER_NAME = "ip_checkin"


def setup_logger(debug_mode=False):
    """
    Attach a colored console handler to the package logger.

    For local runs only. The logger stops propagating to the root logger
    once it prints on its own, so lines are not written twice.
    Safe to call more than once: the handler is only added the first time,
    later calls just adjust the level.
    """
    logger = logging.getLogger(LOGGER_NAME)
    level = logging.DEBUG if debug_mode else logging.INFO
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(ColoredFormatter(
            "%(log_color)s[%(levelname)s] %(name)s: %(message)s",
            log_colors={
                "DEBUG":    "cyan",
                "INFO":     "green",
                "WARNING":  "yellow",
                "ERROR":    "red",
                "CRITICAL": "red,bg_white",
            }
        ))
        logger.addHandler(handler)
    logger.propagate = False

    for handler in logger.handlers:
        handler.setLevel(level)

    if debug_mode:
        logger.debug("Debug mode is active.")
    return logger


def configure_logging(settings):
    """
    Set up package logging for the Functions worker.

    Inside the worker the host collects records from the root logger, so
    only the level is set. IP_CHECKIN_CONSOLE_LOG switches to the colored
    console output of setup_logger for local runs.
    """
    if settings.IP_CHECKIN_CONSOLE_LOG:
        return setup_logger(debug_mode=settings.IP_CHECKIN_DEBUG)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if settings.IP_CHECKIN_DEBUG else logging.INFO)
    return logger
