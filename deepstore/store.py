"""
Nested Attribute Store

Owns a nested record and delegates path reads/writes to PathAccessor and
change bookkeeping to ChangeTracker. Hosts hold a store and route the
returned triggers to their own listeners.
"""

import copy
import uuid
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Union

from .config import DeepStoreConfig, resolve_config
from .core.accessor import PathAccessor
from .core.path import PathCodec
from .core.tracker import ChangeTracker, Trigger
from .utils.logging import create_store_logger


class NestedAttributeStore:
    """
    Nested attribute store

    Reads and writes nested attributes by path ("author.user.name") and
    reports which paths changed after each write call.
    """

    def __init__(
        self,
        attributes: Optional[Mapping] = None,
        separator: Optional[str] = None,
        config: Optional[DeepStoreConfig] = None,
        store_id: Optional[str] = None,
    ):
        self.config = resolve_config(config)
        self.store_id = store_id or uuid.uuid4().hex[:8]
        self.codec = PathCodec(
            separator if separator is not None else self.config.separator,
            self.config.wildcard,
        )
        self.accessor = PathAccessor(self.codec)

        self._attributes: Dict[str, Any] = {}
        if attributes:
            for path, value in attributes.items():
                self.accessor.set(self._attributes, path, value)

        self.tracker = ChangeTracker(
            self.codec,
            self._attributes,
            deep_copy_previous=self.config.deep_copy_previous,
        )
        self._logger = create_store_logger(self.store_id)

    def get(self, path: str, default: Any = None) -> Any:
        """Read path value"""
        return self.accessor.get(self._attributes, path, default)

    def exists(self, path: str) -> bool:
        """Check whether path is present, even if its value is None"""
        return self.accessor.exists(self._attributes, path)

    def has(self, path: str) -> bool:
        """Check whether path holds a value other than None"""
        return self.get(path) is not None

    def set(
        self,
        key: Union[str, Mapping, None],
        value: Any = None,
        *,
        unset: bool = False,
        silent: bool = False,
    ) -> List[Trigger]:
        """
        Set one path, or several from a {path: value} mapping

        Every path is validated before the record is touched. Unless silent,
        the pending writes are consumed and the resulting triggers returned.

        Args:
            key: Path string, or mapping of paths to values
            value: Value for a single path
            unset: Delete the paths instead of assigning
            silent: Leave the writes pending; call change() later

        Returns:
            Trigger list, empty when silent or when nothing changed

        Raises:
            InvalidPathError: Any path is malformed
        """
        if key is None:
            return []

        attrs = key if isinstance(key, Mapping) else {key: value}
        for path in attrs:
            self.codec.split(path)

        if not self.tracker.pending:
            self.tracker.snapshot_previous(self._attributes)

        for path, val in attrs.items():
            if unset:
                if not self.accessor.exists(self._attributes, path):
                    continue
                self.accessor.delete(self._attributes, path)
            else:
                self.accessor.set(self._attributes, path, val)
            self.tracker.record_write(path, val)

        self._logger.debug(
            "attributes set", paths=list(attrs), unset=unset, silent=silent
        )

        if silent:
            return []
        return self.change()

    def unset(self, path: str, *, silent: bool = False) -> List[Trigger]:
        """Delete path"""
        return self.set(path, None, unset=True, silent=silent)

    def clear(self, *, silent: bool = False) -> List[Trigger]:
        """Delete every top-level attribute"""
        return self.set(
            {key: None for key in self._attributes}, unset=True, silent=silent
        )

    def change(self) -> List[Trigger]:
        """Consume pending writes and return the triggers they produce"""
        triggers = self.tracker.compute_changes(loud=True)
        if triggers:
            self._logger.debug(
                "changes computed",
                changed=sorted(self.tracker.get_changed_map() or {}),
                triggers=len(triggers),
            )
        return triggers

    def has_changed(self, path: Optional[str] = None) -> bool:
        """Check whether the last write batch changed anything, or path"""
        return self.tracker.has_changed(path)

    def changed_attributes(
        self, diff: Optional[Mapping] = None
    ) -> Union[Dict[str, Any], bool]:
        """
        Get changed attributes

        Without diff, the paths changed by the last write batch. With a
        nested candidate, the candidate paths that differ from the record as
        it was before the last write batch. False when nothing differs.
        """
        return self.tracker.get_changed_map(diff)

    def previous(self, path: str, default: Any = None) -> Any:
        """Read path value as it was before the last write batch"""
        return self.accessor.get(self.tracker.previous_attributes, path, default)

    def previous_attributes(self) -> Dict[str, Any]:
        """Get the record as it was before the last write batch (deep copy)"""
        return copy.deepcopy(self.tracker.previous_attributes)

    def flatten(self) -> Dict[str, Any]:
        """Get the record as {path: leaf value}"""
        return self.codec.flatten(self._attributes)

    def to_dict(self) -> Dict[str, Any]:
        """Get the full record (deep copy)"""
        return copy.deepcopy(self._attributes)

    def __contains__(self, path: str) -> bool:
        return self.exists(path)

    def __repr__(self):
        return (
            f"NestedAttributeStore(id={self.store_id!r}, "
            f"separator={self.codec.separator!r}, keys={list(self._attributes)})"
        )
