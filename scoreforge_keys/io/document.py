"""
Minimal XML reader/writer for key-list documents.

XmlWriter keeps a stack of open container elements (stag/etag) and
writes empty elements with tag_e. Reading returns plain ElementTree
elements; unexpected elements are reported with dom_error.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List, Optional, Union

from scoreforge_keys.core.exceptions import XmlReadError, XmlWriteError

logger = logging.getLogger(__name__)


def _format_attrs(attrs: dict) -> dict:
    return {k: str(v) for k, v in attrs.items() if v is not None}


class XmlWriter:
    """
    Streaming-style XML writer.

    Example:
        xml = XmlWriter()
        xml.stag("KeyList")
        xml.tag_e("key", tick=0, idx=2)
        xml.etag()
        text = xml.to_string()
    """

    def __init__(self, root: str = "scoreforge", version: Optional[str] = None, indent: bool = True):
        self._builder = ET.TreeBuilder()
        self._stack: List[str] = []
        self._root_name = root
        self._indent = indent
        self._closed = False
        self._root: Optional[ET.Element] = None
        self.stag(root, version=version)

    def stag(self, name: str, **attrs) -> None:
        """Open a container element."""
        if self._closed:
            raise XmlWriteError("Document already finished")
        self._builder.start(name, _format_attrs(attrs))
        self._stack.append(name)

    def etag(self) -> None:
        """Close the innermost open container."""
        if len(self._stack) <= 1:
            raise XmlWriteError("etag() without matching stag()")
        self._builder.end(self._stack.pop())

    def tag_e(self, name: str, **attrs) -> None:
        """Write an empty element."""
        if self._closed:
            raise XmlWriteError("Document already finished")
        self._builder.start(name, _format_attrs(attrs))
        self._builder.end(name)

    def finish(self) -> ET.Element:
        """Close the root element and return the tree."""
        if self._closed:
            return self._root
        if len(self._stack) != 1:
            raise XmlWriteError(f"Unclosed elements: {self._stack[1:]}")
        self._builder.end(self._stack.pop())
        self._closed = True
        self._root = self._builder.close()
        return self._root

    def to_string(self) -> str:
        root = self.finish()
        if self._indent:
            ET.indent(root)
        return ET.tostring(root, encoding="unicode")

    def write(self, filepath: Union[str, Path]) -> Path:
        """
        Write the document to a file.

        Args:
            filepath: Output file path

        Returns:
            Path to created file
        """
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)
        text = self.to_string()
        filepath.write_text('<?xml version="1.0" encoding="UTF-8"?>\n' + text + "\n", encoding="utf-8")
        logger.info(f"Wrote {self._root_name} document to: {filepath}")
        return filepath


def parse_string(text: str) -> ET.Element:
    """Parse an XML string and return its root element."""
    try:
        return ET.fromstring(text)
    except ET.ParseError as e:
        raise XmlReadError(f"Malformed XML: {e}") from e


def parse_file(filepath: Union[str, Path]) -> ET.Element:
    """Parse an XML file and return its root element."""
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"File not found: {filepath}")
    try:
        return ET.parse(filepath).getroot()
    except ET.ParseError as e:
        raise XmlReadError(f"Malformed XML in {filepath}: {e}") from e


def dom_error(element: ET.Element, reason: Optional[str] = None) -> None:
    """Report an element the reader does not understand. Never raises."""
    attrs = " ".join(f'{k}="{v}"' for k, v in element.attrib.items())
    desc = f"<{element.tag}{' ' + attrs if attrs else ''}>"
    if reason:
        logger.warning(f"Bad element {desc}: {reason}")
    else:
        logger.warning(f"Unknown tag {desc}")


def int_attribute(element: ET.Element, name: str, default: Optional[int] = None) -> Optional[int]:
    """
    Integer attribute accessor.

    Returns default if the attribute is missing; raises ValueError if
    it is present but not an integer.
    """
    value = element.get(name)
    if value is None:
        return default
    return int(value.strip())
