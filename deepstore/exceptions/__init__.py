"""deepstore exception module

Provides all exception classes
"""

from .errors import (
    DeepStoreError,
    InvalidPathError,
    ConfigError,
)

__all__ = [
    "DeepStoreError",
    "InvalidPathError",
    "ConfigError",
]
