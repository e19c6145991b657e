"""
String escaping for the two text sinks of the library.

``xml_escape`` is for element bodies and attribute values of generated
parts; ``json_escape`` is for text placed inside JSON string literals by the
tool layer. They escape different character sets and must not be mixed.
"""

import re

_XML_REPLACEMENTS = (
    ("&", "&amp;"),  # first, so later entities are not double escaped
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
)

# C0 controls XML 1.0 does not allow; tab, newline and carriage return stay
_XML_FORBIDDEN_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")

_JSON_REPLACEMENTS = (
    ("\\", "\\\\"),
    ('"', '\\"'),
    ("\n", "\\n"),
    ("\r", "\\r"),
    ("\t", "\\t"),
)


def xml_escape(text: str) -> str:
    """Escape markup characters and drop control characters XML cannot carry."""
    text = _XML_FORBIDDEN_CHARS.sub("", text)
    for char, entity in _XML_REPLACEMENTS:
        text = text.replace(char, entity)
    return text


def json_escape(text: str) -> str:
    for char, escaped in _JSON_REPLACEMENTS:
        text = text.replace(char, escaped)
    return text
