"""Extractors turning source documents into Articles."""

from .grokker import ArticleGrokker, build_parser
from .region_tracker import Mode, RegionTracker, parse_date

__all__ = [
    "ArticleGrokker",
    "build_parser",
    "Mode",
    "RegionTracker",
    "parse_date",
]
