"""
Log plumbing shared by the scaffolder and the swagger helpers.

Messages carry a bracketed tag naming the step that emitted them:
[SCAFFOLD] [MODULE] [MERGE] [INSTALL] [GIT] and [DOCS] at INFO, indented
[COPY] [RENDER] [PRUNE] [SKIP] [SCHEMA] [ANNOTATION] at DEBUG, [WARN] for
recoverable problems. create-charcole picks the level from -v/-q; library
users (setup_swagger in a FastAPI app) get plain stdlib propagation.
"""

import logging
import sys

_LOGGER_NAME = "charcole"


def get_logger(name: str = None) -> logging.Logger:
    """
    Map a module __name__ to "charcole.<module>", e.g.
    "charcole.swagger.converter" -> "charcole.converter".
    """
    if name is None or name == _LOGGER_NAME:
        return logging.getLogger(_LOGGER_NAME)
    short = name.rsplit(".", 1)[-1]
    return logging.getLogger(f"{_LOGGER_NAME}.{short}")


def configure_gen_logging(verbose: bool = False, quiet: bool = False) -> None:
    """
    Attach the stderr handler used by create-charcole.

    -v shows per-file lines (copied, rendered, pruned, skipped), -q keeps
    only [WARN] lines and errors. Calling it again only changes the level.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    root_logger = logging.getLogger(_LOGGER_NAME)
    root_logger.setLevel(level)

    if root_logger.handlers:
        for handler in root_logger.handlers:
            handler.setLevel(level)
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(_GenFormatter())
    root_logger.addHandler(handler)

    root_logger.propagate = False


class _GenFormatter(logging.Formatter):
    """Tags are part of the message, so no level or logger name is added."""

    def format(self, record: logging.LogRecord) -> str:
        return record.getMessage()
