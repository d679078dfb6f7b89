"""Read content ids from pnpm-lock.yaml.

Only the keys of the ``packages`` section are used. Depending on the lockfile
version they look like::

    /@babel/preset-modules@0.1.6-no-external-plugins(@babel/core@7.23.2):
    /lodash/4.17.21:
    lodash@4.17.21:

``KEY_PATTERN`` turns each key into a namespace, name and version. Peer
dependency annotations in parentheses are not part of the version.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Hashable, Iterator, Mapping
from pathlib import Path
from typing import Any, Literal, TextIO

import yaml

from ..config import Settings
from ..models import AnyContentId, ContentId, InvalidContentId, dedupe

logger = logging.getLogger(__name__)

NodeKind = Literal["mapping", "sequence", "scalar", "null"]

KEY_PATTERN = re.compile(
    r"^'?(/?(?P<namespace>@[^/]+)/)?/?(?P<name>[^/@]+)[@/](?P<version>[^(@/'\n]+)"
)


class LockfileUnreadable(RuntimeError):
    """Raised when the lockfile document itself cannot be decoded."""


class LockfileLoader(yaml.SafeLoader):
    """Safe loader that keeps scalar mapping keys as their source text.

    Plain YAML 1.1 keys such as ``yes``, ``1.50`` or ``~`` would otherwise
    come back as ``True``, ``1.5`` and ``None``.
    """

    def construct_mapping(self, node, deep=False):
        if not isinstance(node, yaml.MappingNode):
            raise yaml.constructor.ConstructorError(
                None, None, f"expected a mapping node, but found {node.id}", node.start_mark
            )
        self.flatten_mapping(node)
        mapping = {}
        for key_node, value_node in node.value:
            if isinstance(key_node, yaml.ScalarNode):
                key = key_node.value
            else:
                key = self.construct_object(key_node, deep=deep)
            if not isinstance(key, Hashable):
                raise yaml.constructor.ConstructorError(
                    "while constructing a mapping",
                    node.start_mark,
                    "found unhashable key",
                    key_node.start_mark,
                )
            mapping[key] = self.construct_object(value_node, deep=deep)
        return mapping


def node_kind(value: Any) -> NodeKind:
    if value is None:
        return "null"
    if isinstance(value, Mapping):
        return "mapping"
    if isinstance(value, list):
        return "sequence"
    return "scalar"


def load_document(stream: TextIO) -> Mapping[Any, Any]:
    """Decode the whole lockfile with the safe YAML loader.

    An empty document is an empty mapping. Anything else that is not a
    mapping at the top level is rejected.
    """
    try:
        document = yaml.load(stream, Loader=LockfileLoader)
    except (yaml.YAMLError, OSError, UnicodeDecodeError) as exc:
        logger.debug("Error reading content of pnpm-lock.yaml file", exc_info=True)
        raise LockfileUnreadable(f"Error reading content of pnpm-lock.yaml file: {exc}") from exc

    kind = node_kind(document)
    if kind == "null":
        return {}
    if kind != "mapping":
        raise LockfileUnreadable(
            f"Error reading content of pnpm-lock.yaml file: expected a mapping, got a {kind}"
        )
    return document


def packages_section(document: Mapping[Any, Any], key: str = "packages") -> Mapping[Any, Any]:
    """Return the packages mapping, or an empty one when missing or misshapen."""
    section = document.get(key)
    if node_kind(section) != "mapping":
        if section is not None:
            logger.debug("Ignoring %r section of type %s", key, type(section).__name__)
        return {}
    return section


def load_package_keys(stream: TextIO, *, packages_key: str = "packages") -> list[str]:
    """Return the package keys in document order, as written in the lockfile."""
    section = packages_section(load_document(stream), packages_key)
    return [str(key) for key in section]


def resolve_key(key: str, *, content_type: str = "npm", source: str = "npmjs") -> AnyContentId:
    """Turn one packages key into a ContentId, or an InvalidContentId."""
    match = KEY_PATTERN.search(key)
    if match:
        return ContentId.create(
            content_type,
            source,
            match.group("namespace"),
            match.group("name"),
            match.group("version"),
        )

    logger.debug("Invalid content id: %s", key, extra={"lockfile_key": key})
    return InvalidContentId(key)


def content_ids(stream: TextIO, settings: Settings | None = None) -> Iterator[AnyContentId]:
    """Yield one id per packages key, duplicates included.

    The document is decoded before the first id is produced, so a
    LockfileUnreadable is raised on the first ``next()``.
    """
    settings = settings or Settings()
    keys = load_package_keys(stream, packages_key=settings.packages_key)
    for key in keys:
        yield resolve_key(key, content_type=settings.content_type, source=settings.source)


def read_content_ids(stream: TextIO, settings: Settings | None = None) -> list[AnyContentId]:
    """Return the distinct ids of a pnpm lockfile in first-seen order.

    The stream is read once and left open; closing it is up to the caller.
    """
    return dedupe(list(content_ids(stream, settings)))


def parse(path: Path | str, settings: Settings | None = None) -> list[AnyContentId]:
    """Return the distinct ids of the pnpm lockfile at ``path``."""
    try:
        stream = open(path, encoding="utf-8")
    except OSError as exc:
        raise LockfileUnreadable(f"Cannot open {path}: {exc}") from exc

    with stream:
        return read_content_ids(stream, settings)
