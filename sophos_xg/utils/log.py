#!/usr/bin/env python3
# Copyright (C) 2019 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import logging
import sys
from typing import IO

# Just for reference, the predefined logging levels:
#
# Python         added here
# -------------------------
# CRITICAL 50
# ERROR    40
# WARNING  30    <= default level of the plug-ins
# INFO     20
#                VERBOSE  15
# DEBUG    10

# Additional log level between INFO and DEBUG for the "-v" command line switch.
VERBOSE = 15
logging.addLevelName(VERBOSE, "VERBOSE")

logger = logging.getLogger("sophos_xg")


def get_formatter(format_str: str) -> logging.Formatter:
    return logging.Formatter(format_str)


def clear_console_logging() -> None:
    logger.handlers[:] = []
    logger.addHandler(logging.NullHandler())
    logger.setLevel(logging.WARNING)


# Set default logging handler to avoid "No handler found" warnings.
clear_console_logging()


def setup_console_logging(stream: IO[str] | None = None) -> None:
    """Write all log messages to the console without date/time or logger name.

    Plug-ins report to the monitoring core on stdout, so the default stream
    is stderr.
    """
    setup_logging_handler(sys.stderr if stream is None else stream, get_formatter("%(message)s"))


def setup_logging_handler(stream: IO[str], formatter: logging.Formatter) -> None:
    """This method enables all log messages to be written to the given
    stream file object."""
    handler = logging.StreamHandler(stream=stream)
    handler.setFormatter(formatter)

    del logger.handlers[:]  # Remove all previously existing handlers
    logger.addHandler(handler)


def verbosity_to_log_level(verbosity: int) -> int:
    """Values for "verbosity":

      0: enables WARNING and above
      1: enables VERBOSE and above
      2: enables DEBUG and above (ALL messages)

    >>> verbosity_to_log_level(0) == logging.WARNING
    True
    >>> verbosity_to_log_level(1)
    15
    >>> verbosity_to_log_level(5) == logging.DEBUG
    True
    """
    if verbosity == 0:
        return logging.WARNING
    if verbosity == 1:
        return VERBOSE
    return logging.DEBUG
