"""Logging setup for the command-line tool.

Library modules only create their own loggers; handlers are configured
here, once, by the CLI.
"""

import logging
import sys

DEFAULT_FORMAT = "%(message)s"


def setup_logger(level: int = logging.INFO, fmt: str = DEFAULT_FORMAT) -> None:
    """Route all records at ``level`` and above to stderr.

    Any handlers already on the root logger are replaced, so calling
    this twice does not duplicate output.

    Parameters
    ----------
    level : int
        Logging level for the root logger and its handler.
    fmt : str
        Record format passed to :class:`logging.Formatter`.
    """
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    root.addHandler(handler)
