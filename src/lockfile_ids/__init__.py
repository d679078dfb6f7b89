"""lockfile-ids core package.

Extracts normalised package content ids from package-manager lockfiles for
license lookups further down the pipeline.
"""

from .config import ConfigError, Settings, load_settings
from .core import UnsupportedLockfile, read_lockfile, split_invalid
from .models import AnyContentId, ContentId, InvalidContentId
from .parsers.pnpm_lock import LockfileUnreadable, read_content_ids, resolve_key

__all__ = [
    "AnyContentId",
    "ConfigError",
    "ContentId",
    "InvalidContentId",
    "LockfileUnreadable",
    "Settings",
    "UnsupportedLockfile",
    "load_settings",
    "read_content_ids",
    "read_lockfile",
    "resolve_key",
    "split_invalid",
]
