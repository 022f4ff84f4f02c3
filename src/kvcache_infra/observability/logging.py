"""structlog setup for the CLI and any process embedding the cache client."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars, merge_contextvars

if TYPE_CHECKING:
    from kvcache_core.config.settings import Settings

# redis-py logs every reconnect attempt at DEBUG
QUIET_LOGGERS = ("redis",)


def configure_logging(settings: Settings) -> None:
    """Route structlog and stdlib records through one handler on the root logger.

    Records from both sides share the same pre-processing chain and are
    rendered once, by the console or JSON renderer picked by
    ``settings.log_format``.
    """
    level: int = getattr(logging, settings.log_level)
    pre_chain = _pre_chain()

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(settings.log_format),
            ],
            foreign_pre_chain=pre_chain,
        )
    )
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def bind_command_context(command: str, key: str | None = None) -> None:
    """Bind the CLI command (and key, when given) to subsequent log entries."""
    if key is None:
        bind_contextvars(command=command)
    else:
        bind_contextvars(command=command, key=key)


def clear_command_context() -> None:
    """Clear all bound context variables."""
    clear_contextvars()


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()
