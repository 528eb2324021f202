"""Named query loader.

Loads ``.sql`` files made of ``-- name: <query>`` blocks, aiosql style::

    -- name: insert-user!
    INSERT INTO users (id, name) VALUES (:id, :name);

    -- name: user_by_id
    SELECT * FROM users WHERE id = :id;

Each file is read once and cached by resolved path.
"""

import re
from pathlib import Path
from typing import Final, Union

from sqlbind.exceptions import SQLFileNotFoundError, SQLFileParseError
from sqlbind.utils.logging import get_logger

__all__ = ("QueryLoader",)

logger = get_logger("loader")

# Matches: -- name: query_name (supports hyphens and aiosql suffixes)
QUERY_NAME_PATTERN: Final = re.compile(r"^\s*--\s*name\s*:\s*([\w-]+[^\w\s]*)\s*$", re.MULTILINE | re.IGNORECASE)
TRIM_SPECIAL_CHARS: Final = re.compile(r"[^\w-]")


def _normalize_query_name(name: str) -> str:
    """Strip aiosql suffixes such as ``!`` or ``$`` and turn hyphens into underscores."""
    return TRIM_SPECIAL_CHARS.sub("", name).replace("-", "_")


class QueryLoader:
    """Loads and caches named queries from SQL files.

    Loader instances are independent; create one per application or share
    one explicitly.
    """

    __slots__ = ("_queries", "encoding")

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding
        self._queries: dict[Path, dict[str, str]] = {}

    def load(self, path: Union[str, Path]) -> "dict[str, str]":
        """Return the queries of ``path`` by name, reading the file on first use.

        Raises:
            SQLFileNotFoundError: If the file does not exist.
            SQLFileParseError: If the file has no named queries, repeats a name,
                or has a name with no SQL after it.
        """
        resolved = Path(path).resolve()
        cached = self._queries.get(resolved)
        if cached is None:
            cached = self._load_file(resolved)
            self._queries[resolved] = cached
        return dict(cached)

    def unload(self, path: Union[str, Path]) -> None:
        """Drop ``path`` from the cache so the next :meth:`load` re-reads it."""
        self._queries.pop(Path(path).resolve(), None)

    def clear(self) -> None:
        self._queries.clear()

    def _load_file(self, path: Path) -> "dict[str, str]":
        if not path.is_file():
            raise SQLFileNotFoundError(str(path))
        content = path.read_text(encoding=self.encoding)
        queries = self._parse(str(path), content)
        logger.debug("Loaded %d named queries from %s", len(queries), path)
        return queries

    @staticmethod
    def _parse(path: str, content: str) -> "dict[str, str]":
        matches = list(QUERY_NAME_PATTERN.finditer(content))
        if not matches:
            raise SQLFileParseError(path, "no '-- name:' statements found")

        queries: dict[str, str] = {}
        for index, match in enumerate(matches):
            name = _normalize_query_name(match.group(1))
            end = matches[index + 1].start() if index + 1 < len(matches) else len(content)
            sql = content[match.end() : end].strip()
            if name in queries:
                raise SQLFileParseError(path, f"duplicate query name {name!r}")
            if not sql:
                raise SQLFileParseError(path, f"query {name!r} has no SQL")
            queries[name] = sql.rstrip(";").rstrip()
        return queries
