# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""XMP metadata packet parsing and lookup.

The packet is parsed with lxml and converted into a small read-only tree
of :class:`Element` and :class:`CharData` nodes. Tags keep the literal
``prefix:local`` spelling used in the packet, because lookups are done by
qualified name (``xap:CreateDate`` and ``xmp:CreateDate`` are different
keys even though both prefixes usually bind the same namespace URI).
"""

import logging
from dataclasses import dataclass

from lxml import etree

logger = logging.getLogger(__name__)

_SECURE_XML_PARSER = etree.XMLParser(resolve_entities=False, no_network=True)

TAG_XMPMETA = "x:xmpmeta"
TAG_RDF = "rdf:RDF"
TAG_DESCRIPTION = "rdf:Description"
TAG_ALT = "rdf:Alt"
TAG_SEQ = "rdf:Seq"
TAG_LI = "rdf:li"


@dataclass(frozen=True)
class CharData:
    """Character data inside an element."""

    text: str


@dataclass(frozen=True)
class Element:
    """XML element with its qualified tag and ordered children."""

    tag: str
    children: tuple["XmlNode", ...] = ()


XmlNode = Element | CharData


def _strip_xpacket_wrapper(content: bytes) -> bytes:
    """Strip XMP xpacket processing instructions and return inner content.

    Removes the ``<?xpacket begin=...?>`` header and ``<?xpacket end=...?>``
    trailer if present, returning the stripped and trimmed payload.
    """
    if b"<?xpacket" in content:
        start_idx = content.find(b"?>")
        if start_idx != -1:
            content = content[start_idx + 2 :]
        end_idx = content.rfind(b"<?xpacket")
        if end_idx != -1:
            content = content[:end_idx]
    return content.strip()


def _qualified_name(elem: etree._Element) -> str:
    local = etree.QName(elem).localname
    return f"{elem.prefix}:{local}" if elem.prefix else local


def _convert(elem: etree._Element) -> Element:
    """Convert an lxml element into an :class:`Element` subtree."""
    children: list[XmlNode] = []
    if elem.text:
        children.append(CharData(elem.text))
    for child in elem:
        # Comments and processing instructions are dropped, their tails kept
        if isinstance(child.tag, str):
            children.append(_convert(child))
        if child.tail:
            children.append(CharData(child.tail))
    return Element(_qualified_name(elem), tuple(children))


def parse_xmp_packet(data: bytes) -> Element | None:
    """Parse raw XMP packet bytes into an element tree.

    Args:
        data: Raw bytes of the metadata stream.

    Returns:
        Root element or None if the packet is empty or not well-formed.
    """
    content = _strip_xpacket_wrapper(data)
    if not content:
        return None

    try:
        root = etree.fromstring(content, _SECURE_XML_PARSER)
    except (etree.XMLSyntaxError, ValueError) as e:
        logger.debug("XMP XML parsing error: %s", e)
        return None

    return _convert(root)


def find_child_element(node: XmlNode, tag: str) -> Element | None:
    """Return the first direct child element with the given tag."""
    if not isinstance(node, Element):
        return None
    for child in node.children:
        if isinstance(child, Element) and child.tag == tag:
            return child
    return None


def extract_text(element: Element) -> CharData | None:
    """Resolve the effective text of a property element.

    Language alternatives and sequences (``rdf:Alt`` / ``rdf:Seq``) yield
    the first child of their first ``rdf:li`` item; any other element
    yields its own first child. Only character data is returned.
    """
    container = find_child_element(element, TAG_ALT) or find_child_element(
        element, TAG_SEQ
    )
    if container is not None:
        item = find_child_element(container, TAG_LI)
        node = item.children[0] if item is not None and item.children else None
    else:
        node = element.children[0] if element.children else None

    return node if isinstance(node, CharData) else None


def find_rdf_root(root: Element) -> Element | None:
    """Return the ``rdf:RDF`` element searches start from."""
    rdf = root
    if rdf.tag == TAG_XMPMETA:
        rdf = find_child_element(rdf, TAG_RDF)
    if rdf is None or rdf.tag != TAG_RDF:
        return None
    return rdf


def find_property(
    root: Element,
    primary_key: str,
    alias_key: str | None = None,
) -> Element | None:
    """Find a metadata property element in the packet.

    ``rdf:Description`` children of ``rdf:RDF`` are scanned in document
    order; the first one containing either key wins.

    Args:
        root: Root element of the packet.
        primary_key: Qualified tag tried first.
        alias_key: Qualified tag tried when the primary key is absent.

    Returns:
        Property element or None.
    """
    rdf = find_rdf_root(root)
    if rdf is None:
        return None

    for node in rdf.children:
        if not (isinstance(node, Element) and node.tag == TAG_DESCRIPTION):
            continue
        elem = find_child_element(node, primary_key)
        if elem is None and alias_key:
            elem = find_child_element(node, alias_key)
        if elem is not None:
            return elem
    return None


def find_property_text(
    root: Element,
    primary_key: str,
    alias_key: str | None = None,
) -> CharData | None:
    """Find a property and return its effective text content.

    Only the first matching property element is consulted: if its text
    cannot be extracted, later ``rdf:Description`` nodes are not searched.
    """
    elem = find_property(root, primary_key, alias_key)
    if elem is None:
        return None
    return extract_text(elem)
