"""Immutable path -> URL table used by the static redirect lambda.

Classes:
    PathMapping:
        One {path, url} record of a path mappings document.

    PathTable:
        Read-only mapping of request paths to destination URLs.
        Build it with `urlshort.utils.mappings.build_table()`.
"""

from dataclasses import dataclass
from types import MappingProxyType
from collections.abc import Iterator, Mapping


@dataclass(frozen=True)
class PathMapping:
    path: str  # Request path, e.g. '/urlshort'
    url: str  # Redirect destination


class PathTable(Mapping[str, str]):
    """Read-only path -> URL mapping

    The underlying dict is copied and wrapped in a MappingProxyType, so a
    table can be shared between concurrent invocations without locking.

    Example:
        >>> table = PathTable({'/urlshort': 'https://example.com/a'})
        >>> table.lookup('/urlshort')
        'https://example.com/a'
        >>> table.lookup('/unknown') is None
        True
    """

    def __init__(self, paths_to_urls: Mapping[str, str] | None = None):
        self._paths = MappingProxyType(dict(paths_to_urls or {}))

    def lookup(self, path: str) -> str | None:
        return self._paths.get(path)

    def __getitem__(self, path: str) -> str:
        return self._paths[path]

    def __iter__(self) -> Iterator[str]:
        return iter(self._paths)

    def __len__(self) -> int:
        return len(self._paths)

    def __repr__(self) -> str:
        return f'PathTable({dict(self._paths)!r})'
