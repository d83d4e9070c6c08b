"""Batch extraction result schemas.

A GrokManifest records the outcome of running the extractor over a list
of source documents, ready to be written out as JSON for the site
aggregator.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from .article import Article


class ArticleEntry(BaseModel):
    """JSON view of a finalized Article.

    Attributes:
        source_path: Path of the source document
        base_name: source_path without its last extension
        tags: Raw tag list, if the article declared one
        tag_list: Tags split into individual entries
        title: Article title
        author: Article author
        published_at: Publication timestamp
        body: Serialized article body markup
        aside: Serialized aside markup (empty if none)
    """

    source_path: str
    base_name: str
    tags: str | None = None
    tag_list: list[str] = []
    title: str
    author: str
    published_at: datetime
    body: str = ""
    aside: str = ""

    @classmethod
    def from_article(cls, article: Article) -> "ArticleEntry":
        """Build an entry from a finalized Article."""
        return cls(
            source_path=article.source_path,
            base_name=article.base_name,
            tags=article.tags,
            tag_list=article.tag_list,
            title=str(article.title),
            author=str(article.author),
            published_at=article.published_at,
            body=str(article.body),
            aside=str(article.aside),
        )


class GrokManifest(BaseModel):
    """Outcome of extracting a batch of documents.

    Attributes:
        version: Manifest schema version
        created_at: When the batch was run
        articles: Entries for every document that yielded an article
        skipped: Paths of documents without an opted-in article
        errors: Positioned diagnostics for documents that failed
        status: "complete" if every document was processed cleanly
    """

    version: str = "1.0"
    created_at: datetime = Field(default_factory=datetime.now)
    articles: list[ArticleEntry] = []
    skipped: list[str] = []
    errors: list[str] = []
    status: Literal["complete", "failed"] = "complete"
