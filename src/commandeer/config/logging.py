"""structlog configuration for commandeer.

All log output goes to stderr through one stdlib handler, so stdout stays
reserved for command results. The renderer is picked per run:
- ``--log-json``: one JSON object per line
- otherwise: structlog's console renderer, colored only when stderr is a TTY

Library modules log through stdlib ``logging``; the handler installed
here renders those records with the same processor chain. The
``commandeer`` logger level comes from ``--verbose`` or an explicit
``log_level`` setting.
"""

from __future__ import annotations

import logging
import sys

import structlog

PACKAGE_LOGGER = "commandeer"


def resolve_level(*, verbose: bool, level: str | None = None) -> int:
    """Numeric level for the package logger.

    Examples:
        >>> resolve_level(verbose=False)
        30
        >>> resolve_level(verbose=False, level="info")
        20
    """
    if level:
        numeric = logging.getLevelNamesMapping().get(level.upper())
        if numeric is None:
            msg = f"Unknown log level: {level!r}"
            raise ValueError(msg)
        return numeric
    return logging.DEBUG if verbose else logging.WARNING


def select_renderer(*, log_json: bool, colors: bool | None = None) -> structlog.types.Processor:
    """Final processor for a run: JSON lines, or console output.

    *colors* defaults to whether stderr is a TTY.
    """
    if log_json:
        return structlog.processors.JSONRenderer()
    if colors is None:
        colors = sys.stderr.isatty()
    return structlog.dev.ConsoleRenderer(colors=colors)


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    level: str | None = None,
) -> None:
    """Configure structlog processors and output routing.

    Args:
        verbose: Enable DEBUG-level output for ``commandeer``. When False, only WARNING+.
        log_json: Use JSON renderer instead of console renderer.
        level: Explicit level name for the ``commandeer`` logger; overrides *verbose*.
    """
    package_level = resolve_level(verbose=verbose, level=level)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    renderer = select_renderer(log_json=log_json)

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

    logging.getLogger(PACKAGE_LOGGER).setLevel(package_level)
