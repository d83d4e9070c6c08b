"""Namespace prefix scoping for re-serialized markup.

lxml reports element and attribute names as ``{uri}local``, so the prefix
a name was written with has to be recovered from the declarations in
force where the element appears. A NamespaceScope is pushed for every
element the parser opens and popped when it closes.

Two sets of bindings are kept: those declared in the source, and those
already declared in the re-serialized output. Elements outside the
captured markup (the root article, the header, the outer aside) never
reach the output, so a prefix they declare has to be declared again on
the first captured element that uses it.
"""

from collections.abc import Mapping

XML_NS = "http://www.w3.org/XML/1998/namespace"


class NamespaceScope:
    """Prefix bindings in force for one element.

    Attributes:
        bindings: Prefix to URI, as declared in the source
        declared: Declarations made on this element in the source
        emitted: Prefix to URI, as declared in the output so far
    """

    def __init__(
        self,
        bindings: dict[str | None, str] | None = None,
        declared: dict[str | None, str] | None = None,
        emitted: dict[str | None, str] | None = None,
    ):
        self.bindings = bindings if bindings is not None else {}
        self.declared = declared if declared is not None else {}
        self.emitted = emitted if emitted is not None else {}

    def child(self, nsmap: Mapping[str | None, str] | None = None) -> "NamespaceScope":
        """Scope for an element nested in this one."""
        if not nsmap:
            return NamespaceScope(self.bindings, {}, self.emitted)
        return NamespaceScope({**self.bindings, **nsmap}, dict(nsmap), self.emitted)

    def prefix_for(self, uri: str, attribute: bool = False) -> str | None:
        """Find a prefix bound to ``uri``; None means unprefixed."""
        if not attribute and self.bindings.get(None) == uri:
            return None
        for prefix, bound in reversed(list(self.bindings.items())):
            if prefix is not None and bound == uri:
                return prefix
        return None

    def qualify(self, name: str, attribute: bool = False) -> tuple[str, str | None, str | None]:
        """Map an lxml ``{uri}local`` name to the name written in the output.

        Returns:
            (output name, prefix or None, namespace URI or None)
        """
        if not name.startswith("{"):
            return name, None, None
        uri, local = name[1:].split("}", 1)
        if uri == XML_NS:
            return f"xml:{local}", "xml", uri
        prefix = self.prefix_for(uri, attribute)
        if prefix is None:
            return local, None, uri
        return f"{prefix}:{local}", prefix, uri
