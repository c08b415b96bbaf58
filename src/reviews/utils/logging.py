"""Logging helpers for the Reviews domain.

Process-wide configuration lives in ``ordering.utils.logging.configure_logging``
and is applied once by the web app; this module only hands out loggers.
"""

import logging

import structlog

# Suppress noisy library loggers
logging.getLogger("protean").setLevel(logging.WARNING)


def get_logger(name: str):
    return structlog.get_logger(name)
