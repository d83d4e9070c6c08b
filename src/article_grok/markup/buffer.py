"""Growable markup buffer.

A MarkupBuffer accumulates either plain text (titles, authors) or a
re-serialized subset of the source document (article body, aside). Tags
are written back out with their attributes in source order; character
data handed over by the parser is already decoded, so it is re-escaped
on the way back in to keep the buffer well-formed.
"""

import html
from collections.abc import Mapping

from .namespaces import NamespaceScope


def local_name(tag: str) -> str:
    """Strip the ``{namespace}`` part of an lxml tag or attribute name."""
    if tag.startswith("{"):
        return tag.rpartition("}")[2]
    return tag


class MarkupBuffer:
    """Owned, append-only sequence of markup fragments.

    Fragments are kept in a list and joined on read, so appends are
    amortized O(1).
    """

    def __init__(self, text: str = ""):
        self._parts: list[str] = [text] if text else []
        self._size = len(text)

    def __str__(self) -> str:
        return self.getvalue()

    def __repr__(self) -> str:
        return f"MarkupBuffer({self.getvalue()!r})"

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._size > 0

    def __eq__(self, other) -> bool:
        if isinstance(other, MarkupBuffer):
            return self.getvalue() == other.getvalue()
        if isinstance(other, str):
            return self.getvalue() == other
        return NotImplemented

    def getvalue(self) -> str:
        """Return the buffer contents as a single string."""
        if len(self._parts) > 1:
            self._parts = ["".join(self._parts)]
        return self._parts[0] if self._parts else ""

    def append_text(self, text: str) -> None:
        """Append text verbatim."""
        if text:
            self._parts.append(text)
            self._size += len(text)

    def append_escaped(self, text: str) -> None:
        """Append character data, escaping ``&``, ``<`` and ``>``."""
        self.append_text(html.escape(text, quote=False))

    def open(
        self,
        tag: str,
        attributes: Mapping[str, str] | None = None,
        scope: NamespaceScope | None = None,
    ) -> None:
        """Append an opening tag.

        Namespace declarations made on the element in the source are
        written first, followed by any the output still lacks for the
        element's own name or its attributes. The scope's output bindings
        are updated so that descendants see them.

        Args:
            tag: Element name, possibly in lxml ``{uri}local`` form
            attributes: Attribute names and values in source order
            scope: Namespace bindings in force for this element
        """
        if scope is None:
            scope = NamespaceScope()
        declarations = dict(scope.declared)

        name, prefix, uri = scope.qualify(tag)
        if prefix is None:
            if scope.emitted.get(None, "") != (uri or ""):
                declarations.setdefault(None, uri or "")
        elif prefix != "xml" and scope.emitted.get(prefix) != uri:
            declarations.setdefault(prefix, uri)

        qualified = []
        for attribute, value in (attributes or {}).items():
            attribute_name, prefix, uri = scope.qualify(attribute, attribute=True)
            if prefix not in (None, "xml") and scope.emitted.get(prefix) != uri:
                declarations.setdefault(prefix, uri)
            qualified.append((attribute_name, value))

        parts = ["<", name]
        for prefix, uri in declarations.items():
            xmlns = f"xmlns:{prefix}" if prefix else "xmlns"
            parts.append(f' {xmlns}="{html.escape(uri, quote=True)}"')
        for attribute_name, value in qualified:
            parts.append(f' {attribute_name}="{html.escape(value, quote=True)}"')
        parts.append(">")
        self.append_text("".join(parts))

        if declarations:
            scope.emitted = {**scope.emitted, **declarations}

    def close(self, tag: str, scope: NamespaceScope | None = None) -> None:
        """Append a closing tag, named as it was when opened."""
        if scope is None:
            scope = NamespaceScope()
        self.append_text(f"</{scope.qualify(tag)[0]}>")

    def comment(self, text: str) -> None:
        """Append a comment."""
        self.append_text(f"<!--{text}-->")

    def processing_instruction(self, target: str, data: str | None = None) -> None:
        """Append a processing instruction."""
        if data:
            self.append_text(f"<?{target} {data}?>")
        else:
            self.append_text(f"<?{target}?>")
