"""
Change Tracker

Records writes made against a nested record and reduces them into:
- A changed map: {path: new value} for leaves that differ from the last
  reported value
- A trigger list: each changed path followed by a wildcard entry for every
  ancestor path, immediate parent first ("a.b.c", "a.b.*", "a.*")
"""

import copy
import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel

from .path import PathCodec

logger = logging.getLogger(__name__)

_MISSING = object()


class ChangeEntry(BaseModel):
    """Logged write"""

    path: str
    value: Any


class Trigger(BaseModel):
    """Change notification for an exact path or a wildcard ancestor path"""

    path: str
    value: Any

    def as_tuple(self) -> tuple:
        return (self.path, self.value)


def values_differ(old: Any, new: Any) -> bool:
    """
    Strict inequality used by the change log

    Scalars compare by value, with bools never equal to numbers. Containers
    compare by identity, so an equal but distinct dict or list counts as a
    change.
    """
    if old is new:
        return False
    if old is _MISSING or new is _MISSING:
        return True
    if isinstance(old, (Mapping, list)) or isinstance(new, (Mapping, list)):
        return True
    if isinstance(old, bool) != isinstance(new, bool):
        return True
    if type(old) is not type(new) and not (
        isinstance(old, (int, float)) and isinstance(new, (int, float))
    ):
        return True
    return old != new


def values_equal(old: Any, new: Any) -> bool:
    """
    Deep equality used by structural diffs

    Mappings and lists compare element by element. Bools never equal
    numbers at any depth.
    """
    if old is new:
        return True
    if old is _MISSING or new is _MISSING:
        return False
    if isinstance(old, bool) != isinstance(new, bool):
        return False
    if isinstance(old, Mapping) and isinstance(new, Mapping):
        return old.keys() == new.keys() and all(
            values_equal(old[key], new[key]) for key in old
        )
    if isinstance(old, (list, tuple)) and isinstance(new, (list, tuple)):
        return (
            type(old) is type(new)
            and len(old) == len(new)
            and all(values_equal(a, b) for a, b in zip(old, new))
        )
    return old == new


class ChangeTracker:
    """
    Change Tracker

    Owns the change log, the current snapshot of reported values, the cached
    changed map and the previous-attributes snapshot used for structural
    diffs. Not thread-safe; callers serialize access to one instance.
    """

    def __init__(
        self,
        codec: Optional[PathCodec] = None,
        initial: Optional[Mapping] = None,
        deep_copy_previous: bool = True,
    ):
        self.codec = codec or PathCodec()
        self._deep_copy_previous = deep_copy_previous
        self._log: List[ChangeEntry] = []
        self._current: Dict[str, Any] = {}
        self._changed: Dict[str, Any] = {}
        self._has_computed = True
        self._previous: Dict[str, Any] = {}
        self.reset(initial or {})

    def reset(self, record: Mapping) -> None:
        """Drop pending writes and re-seed both snapshots from record"""
        self._log = []
        self._changed = {}
        self._has_computed = True
        self._current = self.codec.flatten(record)
        self.snapshot_previous(record)

    def record_write(self, path: str, value: Any) -> None:
        """
        Log a write; the changed map is recomputed on next read

        Raises:
            InvalidPathError: Malformed path, rejected before it reaches the log
        """
        self.codec.split(path)
        self._log.append(ChangeEntry(path=path, value=value))
        self._has_computed = False

    def compute_changes(self, loud: bool = False) -> List[Trigger]:
        """
        Reduce the change log into the changed map

        The log is walked newest first and only the latest write per path is
        considered. A loud pass also builds the trigger list, advances the
        current snapshot and consumes the log. A quiet pass leaves the log
        and the snapshot untouched.

        Args:
            loud: Produce triggers and consume the log

        Returns:
            Trigger list (always empty for a quiet pass)
        """
        changed: Dict[str, Any] = {}
        seen = set()
        triggers: List[Trigger] = []

        for entry in reversed(self._log):
            if entry.path in seen:
                continue
            seen.add(entry.path)

            if not values_differ(self._current.get(entry.path, _MISSING), entry.value):
                continue

            changed[entry.path] = entry.value
            if not loud:
                continue

            triggers.append(Trigger(path=entry.path, value=entry.value))
            self._current[entry.path] = entry.value
            for ancestor in self.codec.ancestors(entry.path):
                triggers.append(
                    Trigger(path=self.codec.wildcard_path(ancestor), value=entry.value)
                )

        if loud:
            logger.debug(
                f"Consumed {len(self._log)} logged writes: "
                f"{len(changed)} changed, {len(triggers)} triggers"
            )
            self._log = []

        self._changed = changed
        self._has_computed = True
        return triggers

    def get_changed_map(
        self, diff_against: Optional[Mapping] = None
    ) -> Union[Dict[str, Any], bool]:
        """
        Get changed attributes

        Without diff_against, returns a copy of the changed map computed from
        the log, or False when nothing changed. With a nested candidate
        record, returns the flattened candidate paths whose values are not
        deeply equal to the previous-attributes snapshot, or False.
        """
        if diff_against is None:
            if not self._has_computed:
                self.compute_changes(loud=False)
            return dict(self._changed) if self._changed else False

        old = self.codec.flatten(self._previous)
        changed: Dict[str, Any] = {}
        for path, value in self.codec.flatten(diff_against).items():
            if values_equal(old.get(path, _MISSING), value):
                continue
            changed[path] = value
        return changed or False

    def has_changed(self, path: Optional[str] = None) -> bool:
        """Check whether anything, or the given path, changed"""
        changed = self.get_changed_map()
        if not changed:
            return False
        if path is None:
            return True
        return path in changed

    def snapshot_previous(self, record: Mapping) -> None:
        """Capture record as the previous-attributes snapshot"""
        if self._deep_copy_previous:
            self._previous = copy.deepcopy(dict(record))
        else:
            self._previous = dict(record)

    @property
    def previous_attributes(self) -> Dict[str, Any]:
        return self._previous

    @property
    def pending(self) -> List[ChangeEntry]:
        """Logged writes not yet consumed by a loud pass"""
        return list(self._log)

    @property
    def current_snapshot(self) -> Dict[str, Any]:
        return dict(self._current)

    @property
    def is_stale(self) -> bool:
        return not self._has_computed
