"""
Logging Utilities

This module provides structlog-based logging for deepstore components.
"""

import logging
import sys
from typing import Any, Optional

import structlog

from ..config import resolve_config

_SHARED_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
]


def get_logger(name: str) -> Any:
    """
    Get a logger for the specified name

    Args:
        name: Logger name (usually module or component name)

    Returns:
        structlog bound logger
    """
    if not structlog.is_configured():
        structlog.configure(
            processors=_SHARED_PROCESSORS + [structlog.stdlib.render_to_log_kwargs],
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

    return structlog.get_logger(name)


def configure_logging(
    level: Optional[str] = None, format_string: Optional[str] = None
) -> None:
    """
    Configure logging for deepstore components

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL);
            defaults to the configured log_level
        format_string: Format string for standard library records;
            defaults to the configured log_format
    """
    config = resolve_config()
    level = level or config.log_level
    format_string = format_string or config.log_format

    structlog.configure(
        processors=_SHARED_PROCESSORS
        + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            fmt=format_string,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.KeyValueRenderer(
                    key_order=["event"], drop_missing=True
                ),
            ],
        )
    )

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        handlers=[handler],
    )


def create_store_logger(store_id: str) -> Any:
    """
    Create a logger bound to a store instance

    Args:
        store_id: ID of the store

    Returns:
        Store-specific logger
    """
    return get_logger(f"deepstore.store.{store_id}").bind(store_id=store_id)
