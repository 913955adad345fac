"""Path mappings documents for the static redirect lambda.

A path mappings document is a sequence of {path, url} records, either as
YAML (list of maps):

    - path: /urlshort
      url: https://github.com/gophercises/urlshort
    - path: /urlshort-final
      url: https://github.com/gophercises/urlshort/tree/solution

or as JSON (array of objects):

    [
        {"path": "/urlshort", "url": "https://github.com/gophercises/urlshort"}
    ]

Functions:
    parse_yaml_mappings(data) -> list[PathMapping]
    parse_json_mappings(data) -> list[PathMapping]
        Parse a document into PathMapping records.
        Raise BadConfigurationError on syntax errors or malformed records.

    build_table(entries) -> PathTable
        Build the immutable lookup table.
        Raise DuplicatePathError if a path repeats.

    load_path_mappings(path) -> list[PathMapping]
        Read and parse a .yml/.yaml/.json file.

Example:
    >>> table = build_table(load_path_mappings('config/paths.yml'))
    >>> table.lookup('/urlshort')
    'https://github.com/gophercises/urlshort'
"""

import json
import logging
from pathlib import Path
from typing import Any
from collections.abc import Iterable

import yaml

from urlshort.models import PathMapping, PathTable
from urlshort.exceptions import BadConfigurationError, DuplicatePathError


logger = logging.getLogger(__name__)

YAML_EXTENSIONS = frozenset({'.yml', '.yaml'})
JSON_EXTENSIONS = frozenset({'.json'})


def _to_mappings(document: Any) -> list[PathMapping]:
    # An empty document is an empty table
    if document is None:
        return []
    if not isinstance(document, list):
        raise BadConfigurationError(f'Path mappings must be a sequence of records (given type: {type(document).__name__}).')

    mappings = []
    for index, record in enumerate(document):
        if not isinstance(record, dict):
            raise BadConfigurationError(f'Path mapping #{index} must be a map with "path" and "url".')
        path, url = record.get('path'), record.get('url')
        if not isinstance(path, str) or not isinstance(url, str):
            raise BadConfigurationError(f'Path mapping #{index} must have string "path" and "url" fields.')
        mappings.append(PathMapping(path=path, url=url))
    return mappings


def parse_yaml_mappings(data: bytes | str) -> list[PathMapping]:
    try:
        document = yaml.safe_load(data)
    except yaml.YAMLError as e:
        raise BadConfigurationError(f'Invalid YAML path mappings: {e}') from e
    return _to_mappings(document)


def parse_json_mappings(data: bytes | str) -> list[PathMapping]:
    try:
        document = json.loads(data)
    except json.JSONDecodeError as e:
        raise BadConfigurationError(f'Invalid JSON path mappings: {e}') from e
    return _to_mappings(document)


def build_table(entries: Iterable[PathMapping]) -> PathTable:
    """Build an immutable path -> URL table

    Processing stops at the first repeated path; no partial table is returned.

    Args:
        entries (Iterable[PathMapping]):
            Path mapping records, in document order.

    Returns:
        PathTable: read-only lookup table.

    Raises:
        DuplicatePathError:
            If two records share the same path.
    """
    paths_to_urls: dict[str, str] = {}
    for entry in entries:
        if entry.path in paths_to_urls:
            raise DuplicatePathError(entry.path)
        paths_to_urls[entry.path] = entry.url
    return PathTable(paths_to_urls)


def load_path_mappings(path: str | Path) -> list[PathMapping]:
    """Read a path mappings file, choosing the parser from its extension

    Raises:
        BadConfigurationError:
            If the extension is not .yml, .yaml or .json, or the document is invalid.
        OSError:
            If the file can't be read.
    """
    path = Path(path)
    extension = path.suffix.lower()
    if extension not in YAML_EXTENSIONS | JSON_EXTENSIONS:
        raise BadConfigurationError(f"Expected a .yml, .yaml or .json path mappings file (given: '{path.name}').")

    data = path.read_bytes()
    mappings = parse_yaml_mappings(data) if extension in YAML_EXTENSIONS else parse_json_mappings(data)
    logger.debug('Loaded %d path mappings.', len(mappings), extra={'file': str(path)})
    return mappings
