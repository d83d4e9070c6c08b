"""Memory-mapped source documents.

A SourceFile maps a document into memory for the duration of one
extraction pass and hands it to the parser in fixed-size chunks.
"""

import logging
import mmap
import os
from collections.abc import Iterator
from datetime import datetime
from pathlib import Path

from article_grok.exceptions import SourceReadError

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024


def strip_extension(path: str) -> str:
    """Remove the last extension from a path.

    Only a dot inside the final path component counts, so directory names
    containing dots are left alone.

    Examples:
        >>> strip_extension("posts/hello.xml")
        'posts/hello'
        >>> strip_extension("v1.2/README")
        'v1.2/README'
    """
    head, sep, tail = path.rpartition("/")
    if "." not in tail:
        return path
    return head + sep + tail.rsplit(".", 1)[0]


class SourceFile:
    """A source document opened and mapped for reading.

    Use as a context manager; the mapping and descriptor are released on
    exit.

    Attributes:
        path: Path as given by the caller
        size: Size of the document in bytes
        changed_at: Last metadata-change time of the file (local time)
    """

    def __init__(self, path: str | Path):
        self.path = str(path)
        self.size = 0
        self.changed_at: datetime | None = None
        self._fd: int | None = None
        self._map: mmap.mmap | None = None

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def open(self) -> None:
        """Open, stat and map the file.

        Raises:
            SourceReadError: If any of the system calls fail
        """
        try:
            self._fd = os.open(self.path, os.O_RDONLY)
            st = os.fstat(self._fd)
            self.size = st.st_size
            self.changed_at = datetime.fromtimestamp(st.st_ctime).astimezone()
            # Zero-length files cannot be mapped.
            if self.size > 0:
                self._map = mmap.mmap(self._fd, 0, access=mmap.ACCESS_READ)
        except OSError as e:
            self.close()
            raise SourceReadError(f"{self.path}: {e.strerror or e}", self.path) from e
        logger.debug(f"Mapped {self.path} ({self.size} bytes)")

    def close(self) -> None:
        """Release the mapping and the file descriptor."""
        if self._map is not None:
            self._map.close()
            self._map = None
        if self._fd is not None:
            os.close(self._fd)
            self._fd = None

    def chunks(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[bytes]:
        """Yield the document contents in chunks of at most ``chunk_size`` bytes."""
        if self._map is None:
            return
        for offset in range(0, self.size, chunk_size):
            yield self._map[offset:offset + chunk_size]
