import logging
import sys
from typing import IO, Optional

logger = logging.getLogger('lambda_resource')
logger.setLevel(logging.INFO)
# Protocol output goes to stdout, so never let records reach the root logger
logger.propagate = False

_formatter = logging.Formatter('[%(levelname)s] %(message)s')


def _stream_handler(stream: IO[str]) -> logging.Handler:
    handler = logging.StreamHandler(stream)
    handler.setFormatter(_formatter)
    handler.set_name('lambda_resource')
    return handler


# Prevent duplicate handlers during tests or reruns
if not logger.handlers:
    logger.addHandler(_stream_handler(sys.stderr))


def configure_logger(stream: IO[str], level: Optional[str] = None) -> None:
    """Route the package logger to the given stream (the command's log stream)
    Args:
        stream: where diagnostics are written, normally stderr
        level: optional level name, e.g. 'DEBUG'
    """
    for existing in list(logger.handlers):
        if existing.get_name() == 'lambda_resource':
            logger.removeHandler(existing)
    logger.addHandler(_stream_handler(stream))
    if level:
        logger.setLevel(level.upper())
