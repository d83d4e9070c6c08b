"""Markup re-serialization helpers used by the extractors."""

from .buffer import MarkupBuffer
from .entities import HTMLEntityResolver
from .namespaces import NamespaceScope
from .truthy import TRUTHY_VALUES, is_truthy

__all__ = [
    "HTMLEntityResolver",
    "MarkupBuffer",
    "NamespaceScope",
    "TRUTHY_VALUES",
    "is_truthy",
]
