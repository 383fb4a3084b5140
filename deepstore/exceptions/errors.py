"""
deepstore exception definitions

All errors raised by the package derive from DeepStoreError and carry an
optional details dict for structured context.
"""

from typing import Any, Dict, Optional


class DeepStoreError(Exception):
    """deepstore base exception"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidPathError(DeepStoreError):
    """
    Invalid path error

    Raised for malformed path input: non-string, empty string, empty segment,
    or a segment that contains the separator
    """

    pass


class ConfigError(DeepStoreError):
    """
    Configuration error

    Raised for an empty separator, a wildcard that contains the separator,
    unsupported config files or unparsable environment values
    """

    pass
