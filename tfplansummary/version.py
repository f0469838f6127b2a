"""Version information for the application."""

from __future__ import annotations

import logging
import platform

VERSION = ""
BUILD_TIME = ""
PYTHON_VERSION = platform.python_version()


def show(logger: logging.Logger | None = None) -> None:
    """Log the application version, interpreter version and build time."""
    log = logger if logger is not None else logging.getLogger("tfplansummary")
    log.info("")
    log.info("Application:\t%s", VERSION)
    log.info("Python     :\t%s", PYTHON_VERSION)
    log.info("Build Time :\t%s", BUILD_TIME)
    log.info("")