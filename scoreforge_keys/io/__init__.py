"""
Document I/O for key lists.
"""

from scoreforge_keys.io.document import (
    XmlWriter,
    parse_string,
    parse_file,
    dom_error,
)

__all__ = ["XmlWriter", "parse_string", "parse_file", "dom_error"]
