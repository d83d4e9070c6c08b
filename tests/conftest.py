"""Pytest fixtures for article-grok tests."""

import pytest

SAMPLE_ARTICLE = (
    '<article data-sblg-article="1">'
    "<header><h1>Hi</h1><address>A. Uthor</address>"
    '<time datetime="2014-03-01"/></header>'
    "<p>Body</p>"
    "</article>"
)

FULL_ARTICLE = """<?xml version="1.0" encoding="UTF-8"?>
<html xmlns="http://www.w3.org/1999/xhtml">
<head><title>Page title</title></head>
<body>
<article data-sblg-article="true" data-sblg-tags="travel, food">
<header>
<h2>A trip to <em>Lyon</em></h2>
<address>Jane <a href="mailto:jane@example.com">Doe</a></address>
<time datetime="2014-06-12">June 12th</time>
</header>
<p>First &amp; foremost.</p>
<aside class="related"><h3>See also</h3><ul><li>Paris</li></ul></aside>
<p>Second.</p>
</article>
<footer>Site footer</footer>
</body>
</html>
"""


@pytest.fixture
def sample_article_path(tmp_path):
    """A minimal opted-in article on disk."""
    path = tmp_path / "hello.xml"
    path.write_text(SAMPLE_ARTICLE)
    return path


@pytest.fixture
def full_article_path(tmp_path):
    """A complete XHTML page with header, aside and tags."""
    path = tmp_path / "lyon.xhtml"
    path.write_text(FULL_ARTICLE)
    return path


@pytest.fixture
def plain_page_path(tmp_path):
    """A page whose article does not opt in."""
    path = tmp_path / "plain.xml"
    path.write_text("<article><p>Nothing to see</p></article>")
    return path


@pytest.fixture
def malformed_path(tmp_path):
    """An opted-in article with mismatched tags."""
    path = tmp_path / "broken.xml"
    path.write_text('<article data-sblg-article="1">\n<p>Oops</article>\n')
    return path


@pytest.fixture
def sample_article_xml():
    """Markup of the minimal opted-in article."""
    return SAMPLE_ARTICLE


@pytest.fixture
def full_article_xml():
    """Markup of the complete XHTML page."""
    return FULL_ARTICLE
