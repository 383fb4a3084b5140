"""deepstore core components

Provides:
- Key path codec
- Nested path accessor
- Change tracker
"""

from .path import PathCodec
from .accessor import PathAccessor
from .tracker import ChangeEntry, ChangeTracker, Trigger, values_differ, values_equal

__all__ = [
    # Path
    "PathCodec",
    # Accessor
    "PathAccessor",
    # Tracker
    "ChangeEntry",
    "ChangeTracker",
    "Trigger",
    "values_differ",
    "values_equal",
]
