"""Reader entrypoints.

Pick the reader for a lockfile from its file name and collect the content ids.
This module does no network access so the surrounding pipeline can do its
lookups however it likes.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path

from .config import Settings
from .models import AnyContentId, ContentId, InvalidContentId
from .parsers.pnpm_lock import parse as parse_pnpm_lock

Reader = Callable[[Path, Settings | None], list[AnyContentId]]

READERS: dict[str, Reader] = {
    "pnpm-lock.yaml": parse_pnpm_lock,
    "pnpm-lock.yml": parse_pnpm_lock,
}


class UnsupportedLockfile(ValueError):
    """Raised when no reader is registered for a lockfile name."""


def get_reader(path: Path | str) -> Reader:
    name = Path(path).name
    try:
        return READERS[name]
    except KeyError:
        known = ", ".join(sorted(READERS))
        raise UnsupportedLockfile(
            f"No reader for {name!r}. Supported lockfiles: {known}"
        ) from None


def read_lockfile(path: Path | str, settings: Settings | None = None) -> list[AnyContentId]:
    """Return the distinct content ids found in the lockfile at ``path``."""
    path = Path(path)
    reader = get_reader(path)
    return reader(path, settings)


def split_invalid(
    ids: Iterable[AnyContentId],
) -> tuple[list[ContentId], list[InvalidContentId]]:
    """Partition ids into resolved coordinates and invalid entries."""
    valid: list[ContentId] = []
    invalid: list[InvalidContentId] = []
    for content_id in ids:
        if isinstance(content_id, ContentId):
            valid.append(content_id)
        else:
            invalid.append(content_id)
    return valid, invalid
