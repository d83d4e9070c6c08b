"""Article domain object."""

import re
from dataclasses import dataclass, field
from datetime import datetime

from article_grok.markup import MarkupBuffer

DEFAULT_TITLE = "Untitled article"
DEFAULT_AUTHOR = "Untitled author"


@dataclass
class Article:
    """Metadata and markup extracted from a single source document.

    Scalar fields start out as None and are filled at most once while the
    document is scanned; defaults are applied when the extraction pass
    finishes.

    Attributes:
        source_path: Path of the source document as given by the caller
        base_name: source_path without its last extension
        tags: Raw tag list from the root article's data-sblg-tags attribute
        title: Text of the first heading in the header
        author: Text of the first address in the header
        published_at: Date from the first time element in the header
        body: Re-serialized article content (header and aside excluded)
        aside: Re-serialized content of the first aside
    """

    source_path: str
    base_name: str = ""
    tags: str | None = None
    title: MarkupBuffer | None = None
    author: MarkupBuffer | None = None
    published_at: datetime | None = None
    body: MarkupBuffer = field(default_factory=MarkupBuffer)
    aside: MarkupBuffer = field(default_factory=MarkupBuffer)

    @property
    def tag_list(self) -> list[str]:
        """Tags split on commas and whitespace, empty entries dropped."""
        if not self.tags:
            return []
        return [tag for tag in re.split(r"[\s,]+", self.tags) if tag]
