# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Utility functions for pdfdocinfo."""

import logging
import os
import sys

from .encoding import DEFAULT_TEXT_ENCODING

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

TEXT_ENCODING_ENV = "PDFDOCINFO_TEXT_ENCODING"


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """Configures logging for pdfdocinfo.

    Log output goes to stderr; stdout is reserved for the report.

    Args:
        verbose: If True, DEBUG level is used.
        quiet: If True, only ERROR and higher are output.
            Takes precedence over verbose.

    Returns:
        Configured logger for pdfdocinfo.
    """
    # Determine log level (quiet takes precedence)
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    pdfdocinfo_logger = logging.getLogger("pdfdocinfo")
    pdfdocinfo_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    pdfdocinfo_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    pdfdocinfo_logger.addHandler(handler)

    logger.debug("Logging configured with level: %s", logging.getLevelName(level))
    return pdfdocinfo_logger


def get_text_encoding(override: str | None = None) -> str:
    """Returns the configured output text encoding name.

    Args:
        override: Explicit encoding name (e.g. from the command line).

    Returns:
        The override if given, else PDFDOCINFO_TEXT_ENCODING, else UTF-8.
    """
    if override:
        return override
    return os.environ.get(TEXT_ENCODING_ENV) or DEFAULT_TEXT_ENCODING
