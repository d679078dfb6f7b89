"""Content id models shared by every lockfile reader."""

from __future__ import annotations

from dataclasses import dataclass
from collections.abc import Iterable
from typing import TypeAlias

EMPTY_NAMESPACE = "-"


@dataclass(frozen=True)
class ContentId:
    """Canonical ``type/source/namespace/name/version`` package coordinate."""

    type: str
    source: str
    namespace: str
    name: str
    version: str

    @property
    def is_valid(self) -> bool:
        return True

    def __str__(self) -> str:
        return "/".join((self.type, self.source, self.namespace, self.name, self.version))

    def to_dict(self) -> dict[str, str]:
        return {
            "type": self.type,
            "source": self.source,
            "namespace": self.namespace,
            "name": self.name,
            "version": self.version,
        }

    @classmethod
    def create(
        cls,
        type: str,
        source: str,
        namespace: str | None,
        name: str,
        version: str,
    ) -> ContentId:
        return cls(
            type=type,
            source=source,
            namespace=namespace or EMPTY_NAMESPACE,
            name=name,
            version=version,
        )


@dataclass(frozen=True)
class InvalidContentId:
    """Marker for a lockfile entry that could not be turned into a ContentId."""

    value: str

    @property
    def is_valid(self) -> bool:
        return False

    def __str__(self) -> str:
        return self.value

    def to_dict(self) -> dict[str, str]:
        return {"invalid": self.value}


AnyContentId: TypeAlias = ContentId | InvalidContentId


def parse_content_id(text: str) -> AnyContentId:
    """Parse the slash-separated form produced by ``str(ContentId)``."""
    parts = text.split("/")
    if len(parts) != 5 or not all(parts):
        return InvalidContentId(text)
    return ContentId(*parts)


def dedupe(ids: Iterable[AnyContentId]) -> list[AnyContentId]:
    """Drop repeated ids, keeping the first occurrence of each."""
    return list(dict.fromkeys(ids))
