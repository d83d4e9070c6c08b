"""Article driver.

Runs one extraction pass per source document: maps the file, streams it
through an lxml parser whose target is a fresh RegionTracker, and
finalizes the resulting Article with default values.
"""

import logging
import re
from collections.abc import Iterable
from pathlib import Path

from lxml import etree

from article_grok.exceptions import GrokError, MalformedDocumentError
from article_grok.markup import HTMLEntityResolver, MarkupBuffer
from article_grok.sources import DEFAULT_CHUNK_SIZE, SourceFile, strip_extension
from schemas.article import DEFAULT_AUTHOR, DEFAULT_TITLE, Article
from schemas.manifest import ArticleEntry, GrokManifest

from .region_tracker import RegionTracker

logger = logging.getLogger(__name__)

# libxml2 appends the position to its messages; it is reported separately.
POSITION_SUFFIX = re.compile(r",? line \d+, column \d+\s*$")

UNDECLARED_ENTITY = frozenset({
    etree.ErrorTypes.ERR_UNDECLARED_ENTITY,
    etree.ErrorTypes.WAR_UNDECLARED_ENTITY,
})


def build_parser(target, huge_tree: bool = False) -> etree.XMLParser:
    """Create a feed parser that resolves HTML named entities.

    External DTDs are never fetched; every DOCTYPE is served the HTML
    entity declarations instead.
    """
    parser = etree.XMLParser(
        target=target,
        load_dtd=True,
        no_network=True,
        huge_tree=huge_tree,
    )
    parser.resolvers.add(HTMLEntityResolver())
    return parser


class ArticleGrokker:
    """Extract Articles from source documents.

    Config keys:
        default_title: Title used when the header has none (default: "Untitled article")
        default_author: Author used when the header has none (default: "Untitled author")
        chunk_size: Bytes handed to the parser per feed call (default: 65536)
        huge_tree: Lift libxml2's size and depth limits (default: False)
    """

    def __init__(self, config: dict | None = None):
        self._config = config or {}
        if self.chunk_size <= 0:
            raise ValueError("chunk_size must be positive")

    @property
    def default_title(self) -> str:
        return str(self._config.get("default_title", DEFAULT_TITLE))

    @property
    def default_author(self) -> str:
        return str(self._config.get("default_author", DEFAULT_AUTHOR))

    @property
    def chunk_size(self) -> int:
        return int(self._config.get("chunk_size", DEFAULT_CHUNK_SIZE))

    @property
    def huge_tree(self) -> bool:
        return bool(self._config.get("huge_tree", False))

    def grok(self, path: str | Path) -> Article | None:
        """Extract the opted-in article from a single document.

        Args:
            path: Path to the source document

        Returns:
            The finalized Article, or None if the document has no opted-in
            root article

        Raises:
            SourceReadError: If the document cannot be read
            MalformedDocumentError: If the document is not well-formed
        """
        source_path = str(path)
        try:
            with SourceFile(source_path) as source:
                article = self._parse(source)
                changed_at = source.changed_at
        except GrokError as e:
            logger.error(str(e))
            raise

        if article is None:
            logger.debug(f"No opted-in article in {source_path}")
            return None

        self._finalize(article, changed_at)
        logger.debug(f"Extracted article {article.base_name!r} from {source_path}")
        return article

    def grok_many(self, paths: Iterable[str | Path], keep_going: bool = False) -> GrokManifest:
        """Extract articles from several documents in order.

        Args:
            paths: Source document paths
            keep_going: Continue with the next document after a failure

        Returns:
            GrokManifest listing extracted articles, skipped documents
            and diagnostics for failed ones
        """
        manifest = GrokManifest()

        for path in paths:
            try:
                article = self.grok(path)
            except GrokError as e:
                manifest.errors.append(str(e))
                manifest.status = "failed"
                if not keep_going:
                    break
                continue

            if article is None:
                manifest.skipped.append(str(path))
            else:
                manifest.articles.append(ArticleEntry.from_article(article))

        logger.info(
            f"Extracted {len(manifest.articles)} articles, "
            f"skipped {len(manifest.skipped)}, failed {len(manifest.errors)}"
        )
        return manifest

    def _parse(self, source: SourceFile) -> Article | None:
        """Stream a mapped source through a fresh tracker."""
        tracker = RegionTracker(source.path)
        parser = build_parser(tracker, huge_tree=self.huge_tree)
        try:
            for chunk in source.chunks(self.chunk_size):
                parser.feed(chunk)
            article = parser.close()
        except etree.XMLSyntaxError as e:
            line, column = e.position
            message = POSITION_SUFFIX.sub("", e.msg)
            raise MalformedDocumentError(source.path, line, column, message) from e

        # Undeclared entities are only warnings once a DOCTYPE is present.
        for entry in parser.error_log:
            if entry.type in UNDECLARED_ENTITY:
                raise MalformedDocumentError(
                    source.path, entry.line, entry.column, entry.message.strip()
                )

        tracker.verify_closed()
        return article

    def _finalize(self, article: Article, changed_at) -> None:
        """Apply the default-value policy to a freshly extracted article."""
        article.base_name = strip_extension(article.source_path)
        if article.title is None:
            article.title = MarkupBuffer(self.default_title)
        if article.author is None:
            article.author = MarkupBuffer(self.default_author)
        if article.published_at is None:
            article.published_at = changed_at
