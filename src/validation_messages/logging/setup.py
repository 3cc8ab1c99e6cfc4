"""
Structured logging for hosts that want validation-messages output.

The library only calls ``structlog.get_logger()`` and configures nothing on
import. A host calls ``configure_logging`` once at startup to route those
events through stdlib logging:

- JSON lines to ``config.file`` at DEBUG, when a file is configured
- stderr at the level from ``console_level(config)``, unless quiet
"""

import logging
import sys
from pathlib import Path

import structlog

from ..config.schema import LoggingConfig

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def _pre_chain() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]


def _json_file_handler(path: Path, pre_chain: list) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(),
            foreign_pre_chain=pre_chain,
        )
    )
    return handler


def _stderr_handler(level: int, json_output: bool, pre_chain: list) -> logging.Handler:
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain)
    )
    return handler


def configure_logging(
    config: LoggingConfig,
    json_output: bool = False,
    quiet: bool = False,
) -> None:
    """Route structlog events through the stdlib root logger.

    Calling it again replaces the previous setup.

    Args:
        config: Level, optional JSON file and verbosity
        json_output: Render the stderr pipeline as JSON instead of console text
        quiet: Drop the stderr pipeline entirely
    """
    root = logging.getLogger()
    root.handlers.clear()
    structlog.reset_defaults()

    # Handlers filter; the root lets everything through
    root.setLevel(logging.DEBUG)

    pre_chain = _pre_chain()
    if config.file:
        root.addHandler(_json_file_handler(Path(config.file), pre_chain))
    if not quiet:
        root.addHandler(_stderr_handler(console_level(config), json_output, pre_chain))

    structlog.configure(
        processors=[
            *pre_chain,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def console_level(config: LoggingConfig) -> int:
    """stderr level for ``config``.

    verbose=1 shows at least INFO, verbose>=2 shows DEBUG.
    """
    if config.verbose >= 2:
        return logging.DEBUG
    level = _LEVELS[config.level]
    if config.verbose == 1:
        return min(level, logging.INFO)
    return level


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Named structlog logger, for hosts that log alongside the library."""
    return structlog.get_logger(name)
