"""Streaming region tracker for opted-in blog articles.

The RegionTracker is an lxml parser target: the parser calls start(),
end(), data(), comment() and pi() as it scans the document, and the
tracker decides for each event whether to drop it, capture it as plain
text, or re-serialize it into one of the article's markup buffers.

Only the first ``article`` element is considered. It must carry a truthy
``data-sblg-article`` attribute, otherwise the document yields nothing.
Inside it:

- the first ``header`` supplies the title (first h1-h4), the author
  (first address, nested addresses included) and the publication date
  (first time element);
- the first ``aside`` is copied into the aside buffer, any later aside is
  dropped altogether;
- everything else, nested articles included, is copied into the body.

Extraction stops when the root article closes. The parser still runs to
the end of input so that trailing well-formedness errors are reported.
"""

import logging
import re
from collections.abc import Mapping
from datetime import datetime
from enum import Enum

from article_grok.exceptions import RegionNestingError
from article_grok.markup import MarkupBuffer, NamespaceScope, is_truthy
from article_grok.markup.buffer import local_name
from schemas.article import Article

logger = logging.getLogger(__name__)

MARKER_ATTRIBUTE = "data-sblg-article"
TAGS_ATTRIBUTE = "data-sblg-tags"
DATETIME_ATTRIBUTE = "datetime"
HEADINGS = frozenset({"h1", "h2", "h3", "h4"})

# Leading calendar date; anything after the day is ignored.
DATE_PATTERN = re.compile(r"\s*(\d{4})-(\d{1,2})-(\d{1,2})")


class Mode(Enum):
    """Region the tracker is currently scanning."""

    SCANNING_FOR_ROOT = "scanning_for_root"
    IN_BODY = "in_body"
    IN_HEADER = "in_header"
    IN_TITLE = "in_title"
    IN_ADDRESS = "in_address"
    IN_ASIDE = "in_aside"
    SKIPPING_ASIDE = "skipping_aside"
    DONE = "done"


def parse_date(value: str) -> datetime | None:
    """Parse a ``YYYY-MM-DD`` date as local midnight.

    Args:
        value: Value of a time element's datetime attribute

    Returns:
        Timezone-aware datetime at local midnight, or None if the value
        does not start with a valid calendar date

    Examples:
        >>> parse_date("2014-03-01").date().isoformat()
        '2014-03-01'
        >>> parse_date("March 1st") is None
        True
    """
    match = DATE_PATTERN.match(value)
    if match is None:
        return None
    year, month, day = (int(group) for group in match.groups())
    try:
        return datetime(year, month, day).astimezone()
    except ValueError:
        return None


def find_attribute(attributes: Mapping[str, str], name: str) -> str | None:
    """Look up an attribute by local name, ignoring case."""
    for key, value in attributes.items():
        if local_name(key).lower() == name:
            return value
    return None


class RegionTracker:
    """Parser target that extracts one Article from a document's events.

    A tracker is good for exactly one document; build a new one for every
    extraction pass.

    Attributes:
        article: Record being populated
        mode: Region currently being scanned
        found: Whether an opted-in root article was seen
        article_depth: Open article elements, root included
        region_depth: Open address or aside elements in the current region
    """

    def __init__(self, source_path: str = ""):
        self.article = Article(source_path=source_path)
        self.mode = Mode.SCANNING_FOR_ROOT
        self.found = False
        self.article_depth = 0
        self.region_depth = 0

        self.seen_time = False
        self.seen_address = False
        self.seen_title = False
        self.seen_aside = False

        # One scope per open element, document root first.
        self._scopes: list[NamespaceScope] = [NamespaceScope()]

        self._start_handlers = {
            Mode.SCANNING_FOR_ROOT: self._root_start,
            Mode.IN_BODY: self._body_start,
            Mode.IN_HEADER: self._header_start,
            Mode.IN_ADDRESS: self._address_start,
            Mode.IN_ASIDE: self._aside_start,
            Mode.SKIPPING_ASIDE: self._skipped_aside_start,
        }
        self._end_handlers = {
            Mode.IN_BODY: self._body_end,
            Mode.IN_HEADER: self._header_end,
            Mode.IN_TITLE: self._title_end,
            Mode.IN_ADDRESS: self._address_end,
            Mode.IN_ASIDE: self._aside_end,
            Mode.SKIPPING_ASIDE: self._skipped_aside_end,
        }

    # lxml parser target interface

    def start(self, tag: str, attrib: Mapping[str, str], nsmap: Mapping | None = None) -> None:
        scope = self._scopes[-1].child(nsmap)
        self._scopes.append(scope)
        handler = self._start_handlers.get(self.mode)
        if handler is not None:
            handler(tag, local_name(tag).lower(), attrib, scope)

    def end(self, tag: str) -> None:
        scope = self._scopes.pop()
        handler = self._end_handlers.get(self.mode)
        if handler is not None:
            handler(tag, local_name(tag).lower(), scope)

    def data(self, data: str) -> None:
        if self.mode == Mode.IN_BODY:
            self.article.body.append_escaped(data)
        elif self.mode == Mode.IN_ASIDE:
            self.article.aside.append_escaped(data)
        elif self.mode == Mode.IN_TITLE:
            if self.article.title is None:
                self.article.title = MarkupBuffer()
            self.article.title.append_text(data)
        elif self.mode == Mode.IN_ADDRESS:
            if self.article.author is None:
                self.article.author = MarkupBuffer()
            self.article.author.append_text(data)

    def comment(self, text: str) -> None:
        if self.mode == Mode.IN_BODY:
            self.article.body.comment(text)
        elif self.mode == Mode.IN_ASIDE:
            self.article.aside.comment(text)

    def pi(self, target: str, data: str | None = None) -> None:
        if self.mode == Mode.IN_BODY:
            self.article.body.processing_instruction(target, data)
        elif self.mode == Mode.IN_ASIDE:
            self.article.aside.processing_instruction(target, data)

    def close(self) -> Article | None:
        """Return the populated Article, or None if nothing was opted in.

        lxml calls this on failed parses too, so it never raises; use
        verify_closed() once the parser has finished cleanly.
        """
        return self.article if self.found else None

    def verify_closed(self) -> None:
        """Check that every tracked region was closed.

        Raises:
            RegionNestingError: If input ended inside a tracked region
        """
        if self.mode not in (Mode.SCANNING_FOR_ROOT, Mode.DONE) or self.article_depth or self.region_depth:
            raise RegionNestingError(
                f"input ended inside {self.mode.value} region "
                f"(article depth {self.article_depth}, region depth {self.region_depth})",
                self.article.source_path,
            )

    # Start-tag handlers, one per mode

    def _root_start(self, tag, name, attrib, scope) -> None:
        if name != "article":
            return
        if not is_truthy(find_attribute(attrib, MARKER_ATTRIBUTE)):
            logger.debug(f"{self.article.source_path}: first article is not opted in")
            self.mode = Mode.DONE
            return
        self.found = True
        self.article.tags = find_attribute(attrib, TAGS_ATTRIBUTE)
        # Captured markup lands in a document sharing the article's
        # default namespace; prefixes must be declared again.
        default = scope.bindings.get(None)
        if default:
            scope.emitted = {None: default}
        self.article_depth = 1
        self.mode = Mode.IN_BODY

    def _body_start(self, tag, name, attrib, scope) -> None:
        if name == "header":
            self.mode = Mode.IN_HEADER
            return
        if name == "aside":
            self.region_depth = 1
            if self.seen_aside:
                self.mode = Mode.SKIPPING_ASIDE
            else:
                self.seen_aside = True
                self.mode = Mode.IN_ASIDE
            return
        if name == "article":
            self.article_depth += 1
        self.article.body.open(tag, attrib, scope)

    def _header_start(self, tag, name, attrib, scope) -> None:
        if name == "time":
            if not self.seen_time:
                self.seen_time = True
                value = find_attribute(attrib, DATETIME_ATTRIBUTE)
                if value is not None:
                    self.article.published_at = parse_date(value)
        elif name == "address":
            if not self.seen_address:
                self.seen_address = True
                self.region_depth = 1
                self.mode = Mode.IN_ADDRESS
        elif name in HEADINGS:
            if not self.seen_title:
                self.seen_title = True
                self.mode = Mode.IN_TITLE

    def _address_start(self, tag, name, attrib, scope) -> None:
        if name == "address":
            self.region_depth += 1

    def _aside_start(self, tag, name, attrib, scope) -> None:
        if name == "aside":
            self.region_depth += 1
        self.article.aside.open(tag, attrib, scope)

    def _skipped_aside_start(self, tag, name, attrib, scope) -> None:
        if name == "aside":
            self.region_depth += 1

    # End-tag handlers, one per mode

    def _body_end(self, tag, name, scope) -> None:
        if name == "article":
            self.article_depth -= 1
            if self.article_depth == 0:
                self.mode = Mode.DONE
                return
        self.article.body.close(tag, scope)

    def _header_end(self, tag, name, scope) -> None:
        if name == "header":
            self.mode = Mode.IN_BODY

    def _title_end(self, tag, name, scope) -> None:
        # Any heading level closes the title, whichever one opened it.
        if name in HEADINGS:
            self.mode = Mode.IN_HEADER

    def _address_end(self, tag, name, scope) -> None:
        if name == "address":
            self.region_depth -= 1
            if self.region_depth == 0:
                self.mode = Mode.IN_HEADER

    def _aside_end(self, tag, name, scope) -> None:
        if name == "aside":
            self.region_depth -= 1
            if self.region_depth == 0:
                self.mode = Mode.IN_BODY
                return
        self.article.aside.close(tag, scope)

    def _skipped_aside_end(self, tag, name, scope) -> None:
        if name == "aside":
            self.region_depth -= 1
            if self.region_depth == 0:
                self.mode = Mode.IN_BODY
