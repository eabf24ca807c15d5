"""Append-only key/value store split into size-limited segment files."""

from __future__ import annotations

import os
import re
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from .entry import CorruptedError, Entry

SEGMENT_PREFIX = "segment-"
DEFAULT_MAX_SEGMENT_SIZE = 10 * 1024 * 1024

_SEGMENT_ID = re.compile(r"[+-]?\d+")


class NotFoundError(LookupError):
    """Raised when a key has never been stored."""

    def __init__(self, message: str = "record does not exist") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class _SegmentRef:
    segment_id: int
    offset: int


def segment_filename(segment_id: int) -> str:
    """Return the file name of the segment with the given id."""
    return f"{SEGMENT_PREFIX}{segment_id}"


class Db:
    """A thread-safe store that appends records to segment files."""

    def __init__(
        self,
        directory: str | os.PathLike[str],
        segment_limit: int = DEFAULT_MAX_SEGMENT_SIZE,
    ) -> None:
        self._dir = Path(directory)
        self._segment_limit = segment_limit
        self._index: dict[str, _SegmentRef] = {}
        self._index_lock = threading.Lock()
        self._write_lock = threading.Lock()
        self._segment: BinaryIO | None = None
        self._segment_id = 0
        self._offset = 0
        self._closed = False
        self._load_segments()

    def __enter__(self) -> Db:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def _path(self, segment_id: int) -> Path:
        return self._dir / segment_filename(segment_id)

    def _load_segments(self) -> None:
        segment_ids = []
        for name in os.listdir(self._dir):
            if not name.startswith(SEGMENT_PREFIX):
                continue
            suffix = name[len(SEGMENT_PREFIX):]
            if _SEGMENT_ID.fullmatch(suffix):
                segment_ids.append(int(suffix))

        if not segment_ids:
            self._create_segment()
            return

        for segment_id in sorted(segment_ids):
            self._recover_segment(segment_id)

        self._segment_id = max(segment_ids)
        self._segment = open(self._path(self._segment_id), "ab", buffering=0)
        self._offset = os.fstat(self._segment.fileno()).st_size

    def _recover_segment(self, segment_id: int) -> None:
        with open(self._path(segment_id), "rb") as stream:
            offset = 0
            while True:
                try:
                    record, size = Entry.read_from(stream)
                except EOFError:
                    break
                except CorruptedError as exc:
                    raise CorruptedError(f"corrupted segment: {exc}") from exc
                self._index[record.key] = _SegmentRef(segment_id, offset)
                offset += size

    def _create_segment(self) -> None:
        self._segment_id += 1
        self._segment = open(self._path(self._segment_id), "ab", buffering=0)
        self._offset = 0

    def put(self, key: str, value: str) -> None:
        """Store a value under a key, replacing any previous value."""
        data = Entry(key, value).encode()
        with self._write_lock:
            if self._closed or self._segment is None:
                raise ValueError("database is closed")
            if self._offset + len(data) > self._segment_limit:
                self._segment.close()
                self._create_segment()
            written = self._segment.write(data)
            with self._index_lock:
                self._index[key] = _SegmentRef(self._segment_id, self._offset)
                self._offset += written

    def get(self, key: str) -> str:
        """Return the latest value for a key."""
        with self._index_lock:
            ref = self._index.get(key)
        if ref is None:
            raise NotFoundError()
        with open(self._path(ref.segment_id), "rb") as stream:
            stream.seek(ref.offset)
            record, _ = Entry.read_from(stream)
        return record.value

    def size(self) -> int:
        """Return the number of bytes written to the current segment."""
        return self._offset

    def close(self) -> None:
        """Close the current segment; further writes are refused."""
        with self._write_lock:
            if self._closed:
                return
            self._closed = True
            if self._segment is not None:
                self._segment.close()


def open_db(
    directory: str | os.PathLike[str],
    segment_limit: int = DEFAULT_MAX_SEGMENT_SIZE,
) -> Db:
    """Open (or create) a store in an existing directory."""
    return Db(directory, segment_limit)


__all__ = [
    "DEFAULT_MAX_SEGMENT_SIZE",
    "Db",
    "NotFoundError",
    "open_db",
    "segment_filename",
]