import logging
import sys

import structlog

PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="%H:%M:%S"),
    structlog.dev.ConsoleRenderer(colors=False),
]


def get_logger(name: str):
    """structlog logger backed by the stdlib logger `name`.

    Nothing is written until the application configures `logging`, so library
    callers never see debug output on stdout.
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def configure_logging(level: str = "warning") -> None:
    """Send log lines to stderr, filtered at the given level."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        stream=sys.stderr,
        format="%(message)s",
        force=True,
    )
