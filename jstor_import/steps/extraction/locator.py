"""Path based lookup on parsed XML trees.

Paths use the limited XPath syntax understood by ``xml.etree.ElementTree``,
e.g. ``front/article-meta/title-group/article-title`` or
``front/journal-meta/journal-id[@journal-id-type='jstor']``.

A path without a match is not an error: the lookups return ``None`` (or an
empty list) and every helper accepts ``None`` as its starting node, so a
chain of lookups through a missing subtree simply yields ``None``.
"""

import xml.etree.ElementTree as ET
from typing import List, Optional, Union

from jstor_import.errors import StructuralParseFailure

XML_LANG = "{http://www.w3.org/XML/1998/namespace}lang"


def parse_xml(data: Union[bytes, str], file_name: Optional[str] = None) -> ET.Element:
    """Parse raw XML into its root element.

    Raises:
        StructuralParseFailure: if the input is empty or not well-formed.
    """
    if not data or not data.strip():
        raise StructuralParseFailure("empty document", file_name)
    try:
        return ET.fromstring(data)
    except ET.ParseError as e:
        raise StructuralParseFailure(str(e), file_name) from e


def find_first(node: Optional[ET.Element], path: str) -> Optional[ET.Element]:
    if node is None:
        return None
    return node.find(path)


def find_all(node: Optional[ET.Element], path: str) -> List[ET.Element]:
    if node is None:
        return []
    return node.findall(path)


def text_of(node: Optional[ET.Element]) -> Optional[str]:
    """Concatenated text content of a node, untrimmed.

    Absent nodes and nodes without any text give ``None``.
    """
    if node is None:
        return None
    text = "".join(node.itertext())
    return text if text else None


def text_at(node: Optional[ET.Element], path: str) -> Optional[str]:
    return text_of(find_first(node, path))


def collapsed_text(node: Optional[ET.Element]) -> Optional[str]:
    """Text content with runs of whitespace collapsed to single spaces."""
    text = text_of(node)
    if text is None:
        return None
    return " ".join(text.split()) or None


def int_at(node: Optional[ET.Element], path: str) -> Optional[int]:
    text = text_at(node, path)
    if text is None:
        return None
    try:
        return int(text.strip())
    except ValueError:
        return None


def attr_of(node: Optional[ET.Element], attribute: str) -> Optional[str]:
    if node is None:
        return None
    return node.get(attribute) or None
