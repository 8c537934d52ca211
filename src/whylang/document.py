"""Source documents: a path, an immutable UTF-8 buffer, and its cached LineMap."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import BinaryIO, Generic, TypeVar

from whylang.line_map import LineMap
from whylang.window import as_bytes

log = logging.getLogger(__name__)

T = TypeVar("T")

_UNSET = object()


class Lazy(Generic[T]):
    """A compute-once cell.

    The factory must be pure: two racing first calls may both run it, but they
    produce equal values and only a fully built one is ever stored.
    """

    __slots__ = ("_value",)

    def __init__(self) -> None:
        self._value: object = _UNSET

    @property
    def initialized(self) -> bool:
        return self._value is not _UNSET

    def get_or_create(self, factory: Callable[[], T]) -> T:
        value = self._value
        if value is _UNSET:
            value = factory()
            self._value = value
        return value  # type: ignore[return-value]


class Document:
    """A source file loaded into memory.

    The content never changes after construction, so the LineMap is computed
    on first use and kept for the document's lifetime.
    """

    __slots__ = ("_path", "_content", "_line_map")

    def __init__(self, path: str | Path, content: bytes | str) -> None:
        self._path = Path(path)
        self._content = as_bytes(content)
        self._line_map: Lazy[LineMap] = Lazy()

    @classmethod
    def load(cls, path: str | Path) -> Document:
        """Read a file from disk in binary mode."""
        path = Path(path)
        content = path.read_bytes()
        log.debug("loaded %s (%d bytes)", path, len(content))
        return cls(path, content)

    @classmethod
    def read(cls, path: str | Path, reader: BinaryIO) -> Document:
        """Read all bytes from *reader* into a new document named *path*."""
        return cls(path, reader.read())

    @property
    def path(self) -> Path:
        return self._path

    @property
    def content(self) -> bytes:
        return self._content

    @property
    def line_map(self) -> LineMap:
        """The document's LineMap; the first access scans the content."""
        return self._line_map.get_or_create(self._build_line_map)

    def _build_line_map(self) -> LineMap:
        log.debug("building line map for %s", self._path)
        return LineMap.parse(self._content)

    def line_text(self, line: int) -> bytes:
        """Bytes of *line* (0-based) without its terminator."""
        line_map = self.line_map
        start = line_map.line_start(line)
        if line < len(line_map.line_breaks):
            end = line_map.line_breaks[line]
        else:
            end = len(self._content)
        text = self._content[start:end]
        return text.rstrip(b"\r\n")
