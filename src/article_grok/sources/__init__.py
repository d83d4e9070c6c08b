"""Access to source documents on disk."""

from .source_file import DEFAULT_CHUNK_SIZE, SourceFile, strip_extension

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "SourceFile",
    "strip_extension",
]
