"""deepstore - Nested attribute store with path-level change tracking."""

from .config import (
    DeepStoreConfig,
    get_default_config,
    set_default_config,
    load_config_from_file,
    load_config_from_env,
    merge_configs,
    validate_config,
)
from .core import (
    PathCodec,
    PathAccessor,
    ChangeEntry,
    ChangeTracker,
    Trigger,
)
from .exceptions import DeepStoreError, InvalidPathError, ConfigError
from .store import NestedAttributeStore

__version__ = "0.1.0"
__all__ = [
    # Config
    "DeepStoreConfig",
    "get_default_config",
    "set_default_config",
    "load_config_from_file",
    "load_config_from_env",
    "merge_configs",
    "validate_config",
    # Core
    "PathCodec",
    "PathAccessor",
    "ChangeEntry",
    "ChangeTracker",
    "Trigger",
    # Errors
    "DeepStoreError",
    "InvalidPathError",
    "ConfigError",
    # Store
    "NestedAttributeStore",
]
