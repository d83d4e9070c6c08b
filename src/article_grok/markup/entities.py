"""HTML named entities for XHTML documents.

XHTML documents reference entities such as ``&nbsp;`` that are declared
in the external XHTML DTD. Network access is disabled, so instead of the
real DTD the parser is handed a generated one declaring every HTML named
entity, and the references arrive at the tracker as character data.
"""

from html.entities import name2codepoint

from lxml import etree

# Predefined in XML itself; redeclaring them is not allowed in this form.
XML_PREDEFINED = frozenset({"amp", "lt", "gt", "quot", "apos"})

HTML_ENTITIES_DTD = "\n".join(
    f'<!ENTITY {name} "&#{codepoint};">'
    for name, codepoint in sorted(name2codepoint.items())
    if name not in XML_PREDEFINED
)


class HTMLEntityResolver(etree.Resolver):
    """Serve the HTML entity declarations for any external DTD."""

    def resolve(self, system_url, public_id, context):
        return self.resolve_string(HTML_ENTITIES_DTD, context)
