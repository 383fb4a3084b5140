"""
Nested Path Accessor

Read/write semantics for dot-paths over nested records:
- Reading a missing path returns the default instead of raising
- A None intermediate reads as an empty mapping
- Writing creates missing intermediate mappings and replaces non-mapping
  intermediates with a fresh {}
- Deleting a missing key is a no-op
"""

import logging
from collections.abc import Mapping, MutableMapping
from typing import Any, Optional

from .path import PathCodec

logger = logging.getLogger(__name__)


class PathAccessor:
    """
    Path Accessor

    Supported syntax (separator "."):
    - a        -> Top-level field
    - a.b.c    -> Nested field access
    """

    def __init__(self, codec: Optional[PathCodec] = None):
        self.codec = codec or PathCodec()

    def get(self, record: Any, path: str, default: Any = None) -> Any:
        """
        Read path value

        Args:
            record: Root record (typically dict)
            path: Path string
            default: Returned when the path does not resolve

        Returns:
            Value at path, or default if not found

        Raises:
            InvalidPathError: Malformed path
        """
        segments = self.codec.split(path)

        current = record
        last = len(segments) - 1
        for i, seg in enumerate(segments):
            if not isinstance(current, Mapping) or seg not in current:
                return default
            current = current[seg]
            if current is None and i < last:
                current = {}

        return current

    def exists(self, record: Any, path: str) -> bool:
        """
        Check whether every segment of path is an own key along the walk

        A value of None at the final segment still exists. A None
        intermediate reads as an empty mapping, so nothing exists below it.
        """
        segments = self.codec.split(path)

        current = record
        last = len(segments) - 1
        for i, seg in enumerate(segments):
            if not isinstance(current, Mapping) or seg not in current:
                return False
            current = current[seg]
            if current is None and i < last:
                current = {}

        return True

    def lookup(self, record: Any, path: str, report_existence: bool = False) -> Any:
        """Read path value, or report existence when report_existence is set"""
        if report_existence:
            return self.exists(record, path)
        return self.get(record, path)

    def set(self, record: Any, path: str, value: Any, unset: bool = False) -> None:
        """
        Set path value

        - Automatically create {} when an intermediate is missing
        - Replace a non-mapping intermediate with {}
        - With unset, delete the final key instead of assigning

        Args:
            record: Root record (must be a mutable mapping)
            path: Path string
            value: Value to set (ignored with unset)
            unset: Delete the final key

        Raises:
            InvalidPathError: Malformed path
        """
        segments = self.codec.split(path)
        if not isinstance(record, MutableMapping):
            return

        current = record
        for seg in segments[:-1]:
            child = current.get(seg)
            if not isinstance(child, MutableMapping):
                if seg in current:
                    logger.debug(f"Replacing non-mapping value at '{seg}' in {path}")
                child = {}
                current[seg] = child
            current = child

        key = segments[-1]
        if unset:
            current.pop(key, None)
        else:
            current[key] = value

    def delete(self, record: Any, path: str) -> None:
        """Delete path value; deleting a missing path is a no-op"""
        self.set(record, path, None, unset=True)
