"""
Key Path Codec

Path syntax for nested records:
- Segments are joined by a separator, "." by default: user.name
- Segments are non-empty strings that never contain the separator
- Flattening turns a nested record into {"user.name": value}
"""

from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Optional

from ..config import resolve_config
from ..exceptions.errors import ConfigError, InvalidPathError


class PathCodec:
    """
    Key Path Codec

    The separator and wildcard are fixed when the codec is built; build a new
    codec to use a different separator.
    """

    def __init__(self, separator: Optional[str] = None, wildcard: Optional[str] = None):
        config = resolve_config()
        separator = config.separator if separator is None else separator
        wildcard = config.wildcard if wildcard is None else wildcard

        if not isinstance(separator, str) or not separator:
            raise ConfigError(
                "Separator must be a non-empty string", {"separator": separator}
            )
        if not isinstance(wildcard, str) or not wildcard or separator in wildcard:
            raise ConfigError(
                "Wildcard must be a non-empty string without the separator",
                {"wildcard": wildcard, "separator": separator},
            )

        self._separator = separator
        self._wildcard = wildcard

    @property
    def separator(self) -> str:
        return self._separator

    @property
    def wildcard(self) -> str:
        return self._wildcard

    def split(self, path: str) -> List[str]:
        """
        Split path string into segment list

        Args:
            path: Path string, e.g. "user.name"

        Returns:
            List of segments, e.g. ["user", "name"]

        Raises:
            InvalidPathError: Non-string, empty or with an empty segment
        """
        if not isinstance(path, str):
            raise InvalidPathError(
                f"Path must be a string, got {type(path).__name__}", {"path": path}
            )
        if not path:
            raise InvalidPathError("Path must not be empty", {"path": path})

        segments = path.split(self._separator)
        if any(not seg for seg in segments):
            raise InvalidPathError(f"Empty segment in path: {path}", {"path": path})
        return segments

    def join(self, segments: Iterable[str]) -> str:
        """
        Join segments into a path string

        Raises:
            InvalidPathError: No segments, or a segment that is empty or
                contains the separator
        """
        segments = list(segments)
        if not segments:
            raise InvalidPathError("Cannot join an empty segment list")

        for seg in segments:
            if not isinstance(seg, str) or not seg:
                raise InvalidPathError(
                    f"Invalid path segment: {seg!r}", {"segments": segments}
                )
            if self._separator in seg:
                raise InvalidPathError(
                    f"Path segment contains separator: {seg!r}",
                    {"segments": segments, "separator": self._separator},
                )
        return self._separator.join(segments)

    def flatten(self, record: Mapping) -> Dict[str, Any]:
        """
        Flatten a nested record into {path: leaf value}

        Non-empty mappings are descended into. Everything else, including
        empty mappings and lists, is a leaf.
        """
        result: Dict[str, Any] = {}
        for key, value in record.items():
            if isinstance(value, Mapping) and value:
                for sub_path, leaf in self.flatten(value).items():
                    result[f"{key}{self._separator}{sub_path}"] = leaf
            else:
                result[key] = value
        return result

    def ancestors(self, path: str) -> List[str]:
        """
        Get strict ancestor paths, immediate parent first

        "a.b.c" -> ["a.b", "a"]; a single-segment path has none
        """
        segments = self.split(path)
        result = []
        for end in range(len(segments) - 1, 0, -1):
            result.append(self._separator.join(segments[:end]))
        return result

    def wildcard_path(self, path: str) -> str:
        """Get the wildcard path standing for any descendant of path"""
        return f"{path}{self._separator}{self._wildcard}"

    def is_wildcard(self, path: str) -> bool:
        return path.endswith(f"{self._separator}{self._wildcard}")

    def __repr__(self):
        return f"PathCodec(separator={self._separator!r}, wildcard={self._wildcard!r})"
