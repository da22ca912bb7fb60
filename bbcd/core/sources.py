"""
Catalog of recordable sources (channels), grouped by network.

A source's id is its position in the concatenation of all groups in
declaration order. Ids are persisted against jobs, so the catalog is
append-only: new groups and channels go at the end of the traversal.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from bbcd.core.constants import DEFAULT_SOURCES
from bbcd.core.error_codes import SourceIndexOutOfRange

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Source:
    id: int
    name: str
    group: str
    key: Optional[str] = None        # stream url prefix, stable across reorders


class SourceCatalog:
    """Immutable, ordered catalog of sources."""

    def __init__(self, groups: dict):
        sources: list[Source] = []
        by_name: dict[str, Source] = {}
        group_names: list[str] = []

        for group, entries in groups.items():
            group_names.append(group)
            for entry in entries:
                if isinstance(entry, str):
                    name, key = entry, None
                else:
                    name, key = entry
                if name in by_name:
                    raise ValueError(f"duplicate source name in catalog: {name!r}")
                source = Source(id=len(sources), name=name, group=group, key=key)
                sources.append(source)
                by_name[name] = source

        self._sources = tuple(sources)
        self._by_name = by_name
        self._groups = tuple(group_names)

    @property
    def total_count(self) -> int:
        return len(self._sources)

    def __len__(self) -> int:
        return len(self._sources)

    def __iter__(self) -> Iterator[Source]:
        return iter(self._sources)

    def source(self, source_id: int) -> Source:
        """Return the Source at a positional id, or raise SourceIndexOutOfRange."""
        # No negative indexing and no wraparound
        if (isinstance(source_id, bool) or not isinstance(source_id, int)
                or not 0 <= source_id < len(self._sources)):
            raise SourceIndexOutOfRange(source_id, len(self._sources))
        return self._sources[source_id]

    def resolve(self, source_id: int) -> str:
        """Channel name for a positional id."""
        return self.source(source_id).name

    def id_of(self, name: str) -> int:
        try:
            return self._by_name[name].id
        except KeyError:
            raise KeyError(f"unknown source {name!r}") from None

    def group_names(self) -> tuple[str, ...]:
        return self._groups

    def sources_in(self, group: str) -> list[Source]:
        if group not in self._groups:
            raise KeyError(f"unknown source group {group!r}")
        return [s for s in self._sources if s.group == group]

    def as_dict(self) -> dict:
        return {g: [s.name for s in self.sources_in(g)] for g in self._groups}


_default: SourceCatalog | None = None


def default_catalog() -> SourceCatalog:
    """The built-in BBC catalog, built once per process."""
    global _default
    if _default is None:
        _default = SourceCatalog(DEFAULT_SOURCES)
    return _default


def load_catalog(path: Path) -> SourceCatalog:
    """
    Load a catalog from JSON: an object mapping group name to a list of
    channel names or [name, url_prefix] pairs. Key order is group order.
    """
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"catalog file {path} must hold a JSON object")

    groups = {}
    for group, entries in data.items():
        if not isinstance(entries, list):
            raise ValueError(f"catalog group {group!r} must be a list")
        groups[group] = [e if isinstance(e, str) else tuple(e) for e in entries]

    catalog = SourceCatalog(groups)
    logger.info("Loaded catalog from %s: %d groups, %d sources",
                path, len(catalog.group_names()), len(catalog))
    return catalog
