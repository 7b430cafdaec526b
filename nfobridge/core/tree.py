"""
Dialect-agnostic queries over an lxml NFO document

All lookups compare tag names case-insensitively and only look at direct
children. None of the queries raise; absence is None or an empty list.
"""
import re
import codecs
from typing import List, Optional, Union

from lxml import etree as ET

from nfobridge.utils.exceptions import NFOParseError


# whitespace between tags is not significant for passthrough fragments
_INTER_TAG_WHITESPACE = re.compile(r">\r?\n\s*<")
_STRAY_AMPERSAND = re.compile(r"&(?!(?:[a-zA-Z][a-zA-Z0-9]*|#\d+|#x[0-9a-fA-F]+);)")

ROOT_TAGS = ("movie", "recording", "collection")


def _parser() -> ET.XMLParser:
    # comments and processing instructions are kept for verbatim passthrough
    return ET.XMLParser(remove_comments=False, remove_pis=False, resolve_entities=False, no_network=True)


def tag_name(node: ET.Element) -> str:
    """Lower-case local name of an element (namespace stripped)"""
    tag = node.tag
    if not isinstance(tag, str):
        return ""
    if tag.startswith("{"):
        tag = tag.split("}", 1)[1]
    return tag.lower()


def children(node: Optional[ET.Element], tag: Optional[str] = None) -> List[ET.Element]:
    """All direct element children, optionally only those with the given tag"""
    if node is None:
        return []
    wanted = tag.lower() if tag else None
    return [child for child in node
            if isinstance(child.tag, str) and (wanted is None or tag_name(child) == wanted)]


def single_child(node: Optional[ET.Element], tag: str) -> Optional[ET.Element]:
    """The one direct child with the tag; None when there are zero or several"""
    matches = children(node, tag)
    if len(matches) != 1:
        return None
    return matches[0]


def own_text(node: Optional[ET.Element]) -> str:
    """
    Text that belongs directly to the node

    Text inside descendant elements is excluded, the text following them
    (their tail) is included. Whitespace runs collapse to one space.
    """
    if node is None:
        return ""
    parts = [node.text or ""]
    for child in node:
        parts.append(child.tail or "")
    return " ".join("".join(parts).split())


def whole_text(node: Optional[ET.Element]) -> str:
    """All text of the node and its descendants, whitespace preserved; comment text is skipped"""
    if node is None:
        return ""
    parts = [node.text or ""]
    for child in node:
        if isinstance(child.tag, str):
            parts.append(whole_text(child))
        parts.append(child.tail or "")
    return "".join(parts)


def attr(node: Optional[ET.Element], name: str) -> str:
    if node is None:
        return ""
    return node.get(name, "") or ""


def serialize_fragment(node: ET.Element) -> str:
    """
    Serialize one element for passthrough storage

    The element's tail belongs to its parent and is not part of the
    fragment. Namespace prefixes, comments and processing instructions
    are kept as written. Whitespace between tags is dropped so that
    identical fragments always compare equal.
    """
    text = ET.tostring(node, encoding="unicode", with_tail=False)
    return _INTER_TAG_WHITESPACE.sub("><", text)


def parse_fragment(fragment: str) -> ET.Element:
    """Parse a stored passthrough fragment back into an element"""
    return ET.fromstring(fragment, _parser())


def _decode(raw: Union[str, bytes]) -> str:
    if isinstance(raw, bytes):
        if raw.startswith(codecs.BOM_UTF8):
            raw = raw[len(codecs.BOM_UTF8):]
        return raw.decode("utf-8", errors="replace")
    return raw.lstrip("\ufeff")


def _strip_declaration(text: str) -> str:
    # lxml refuses str input that still carries an encoding declaration
    return re.sub(r"^\s*<\?xml[^>]*\?>", "", text, count=1)


def _repair(text: str) -> str:
    """Drop trailing junk after the last closing root tag and escape stray ampersands"""
    lowered = text.lower()
    cut = -1
    for root_tag in ROOT_TAGS:
        end_tag = f"</{root_tag}>"
        position = lowered.rfind(end_tag)
        if position != -1:
            cut = max(cut, position + len(end_tag))
    if cut != -1:
        text = text[:cut]
    return _STRAY_AMPERSAND.sub("&amp;", text)


def parse_document(raw: Union[str, bytes], source: str = "<string>") -> ET.Element:
    """
    Parse NFO content with error tolerance

    Args:
        raw: The NFO content
        source: Name used in error messages

    Returns:
        The document root element

    Raises:
        NFOParseError: If the content is not XML even after repair
    """
    text = _strip_declaration(_decode(raw))
    try:
        return ET.fromstring(text, _parser())
    except ET.XMLSyntaxError as first_error:
        try:
            return ET.fromstring(_repair(text), _parser())
        except ET.XMLSyntaxError:
            raise NFOParseError(source, str(first_error)) from first_error


def find_root(document: ET.Element, accepted=ROOT_TAGS) -> Optional[ET.Element]:
    """The element carrying the NFO data: the document root or the first accepted descendant"""
    if tag_name(document) in accepted:
        return document
    for node in document.iter():
        if tag_name(node) in accepted:
            return node
    return None
