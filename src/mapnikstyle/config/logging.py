"""structlog configuration for mapnikstyle.

The translation core logs through plain stdlib loggers; this module routes
those records through structlog so every breadcrumb ends up on stderr in one
of two shapes:

- Human (default): colored console lines
- JSON (--log-json): one JSON object per line

Location keys passed as ``extra`` (``rule_index``, ``rule_name``,
``symbolizer_index``, ``position``) and anything bound with
:func:`document_context` become structured fields.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager

import structlog

PACKAGE_LOGGER = "mapnikstyle"


def package_level(*, verbose: bool = False, quiet: bool = False) -> int:
    """Level for the ``mapnikstyle`` logger: DEBUG, ERROR or WARNING."""
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return logging.WARNING


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_json: bool = False,
) -> None:
    """Configure structlog processors and output routing.

    Args:
        verbose: Per-rule translation breadcrumbs (DEBUG). Wins over *quiet*.
        quiet: Only errors.
        log_json: Use JSON renderer instead of console renderer.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(package_level(verbose=verbose, quiet=quiet))


@contextmanager
def document_context(document: str, direction: str) -> Iterator[None]:
    """Tag every log record emitted inside the block with the document being translated.

    *direction* is ``"write"`` (neutral -> XML) or ``"read"`` (XML -> neutral).
    """
    with structlog.contextvars.bound_contextvars(document=document, direction=direction):
        yield
