"""Minimal XML encoding for flat API payloads."""

import xml.etree.ElementTree as ET
from typing import Any


def _append_value(parent: ET.Element, value: Any, item_name: str) -> None:
    if value is None:
        parent.set("nil", "true")
    elif isinstance(value, dict):
        for key, child_value in value.items():
            # "@name" keys become attributes
            if str(key).startswith("@"):
                parent.set(str(key)[1:], str(child_value))
                continue
            child = ET.SubElement(parent, str(key))
            _append_value(child, child_value, item_name)
    elif isinstance(value, (list, tuple)):
        for item in value:
            child = ET.SubElement(parent, item_name)
            _append_value(child, item, item_name)
    elif isinstance(value, bool):
        parent.text = "true" if value else "false"
    else:
        parent.text = str(value)


def to_xml(value: Any, root_name: str, item_name: str = "item") -> bytes:
    """
    Serialize JSON-compatible data to an XML document.

    Args:
        value: Dict, list or scalar already reduced to JSON-compatible types;
            dict keys starting with "@" are written as attributes
        root_name: Name of the document element
        item_name: Element name used for list entries

    Returns:
        UTF-8 encoded document with an XML declaration
    """
    root = ET.Element(root_name)
    _append_value(root, value, item_name)
    return ET.tostring(root, encoding="utf-8", xml_declaration=True)


def from_xml(body: bytes | str) -> dict[str, Any] | None:
    """
    Parse a flat XML document into a dict of element name to text.

    The document element's name is ignored. Elements marked ``nil="true"``
    become None and empty elements become empty strings.

    Raises:
        xml.etree.ElementTree.ParseError: If the document is not well-formed
    """
    root = ET.fromstring(body)
    if root.get("nil") == "true":
        return None

    result: dict[str, Any] = {}
    for child in root:
        if child.get("nil") == "true":
            result[child.tag] = None
        else:
            result[child.tag] = (child.text or "").strip()
    return result
