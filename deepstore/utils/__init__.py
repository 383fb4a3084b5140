"""deepstore utilities"""

from .logging import get_logger, configure_logging, create_store_logger

__all__ = ["get_logger", "configure_logging", "create_store_logger"]
