"""Conversion between ElementTree elements and documentation nodes."""

import xml.etree.ElementTree as ET

from inheritdoc.fragment import DocNode, Fragment


def node_from_element(elem: ET.Element) -> DocNode:
    """Convert an element, its attributes and mixed content into a DocNode."""
    node = DocNode(elem.tag, dict(elem.attrib))
    if elem.text:
        node.content.append(elem.text)
    for child in elem:
        node.content.append(node_from_element(child))
        if child.tail:
            node.content.append(child.tail)
    return node


def fragment_from_element(elem: ET.Element) -> Fragment:
    """Build a fragment holding the content of ``elem`` (not ``elem`` itself)."""
    fragment = Fragment()
    fragment.root.content = node_from_element(elem).content
    return fragment


def fill_element(elem: ET.Element, node: DocNode) -> ET.Element:
    """Append a node's content to ``elem`` as text, tails and sub-elements."""
    last: ET.Element | None = None
    for item in node.content:
        if isinstance(item, DocNode):
            last = fill_element(ET.SubElement(elem, item.name, item.attributes), item)
        elif last is None:
            elem.text = (elem.text or "") + item
        else:
            last.tail = (last.tail or "") + item
    return elem


def member_element(name: str, fragment: Fragment) -> ET.Element:
    """Build a ``<member name="...">`` element from a fragment."""
    return fill_element(ET.Element("member", {"name": name}), fragment.root)
