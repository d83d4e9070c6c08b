"""Schema definitions for article-grok."""

from .article import DEFAULT_AUTHOR, DEFAULT_TITLE, Article
from .manifest import ArticleEntry, GrokManifest

__all__ = [
    "Article",
    "ArticleEntry",
    "DEFAULT_AUTHOR",
    "DEFAULT_TITLE",
    "GrokManifest",
]
