"""
Utility functions for Java source generation.
"""

from __future__ import annotations

import re

# Java identifier: a letter, underscore or dollar sign followed by letters, digits, underscores or dollars
_IDENTIFIER_PATTERN = re.compile(r"(?:[^\W\d]|\$)[\w$]*")

JAVA_KEYWORDS = frozenset(
    {
        "abstract",
        "assert",
        "boolean",
        "break",
        "byte",
        "case",
        "catch",
        "char",
        "class",
        "const",
        "continue",
        "default",
        "do",
        "double",
        "else",
        "enum",
        "extends",
        "final",
        "finally",
        "float",
        "for",
        "goto",
        "if",
        "implements",
        "import",
        "instanceof",
        "int",
        "interface",
        "long",
        "native",
        "new",
        "package",
        "private",
        "protected",
        "public",
        "return",
        "short",
        "static",
        "strictfp",
        "super",
        "switch",
        "synchronized",
        "this",
        "throw",
        "throws",
        "transient",
        "try",
        "void",
        "volatile",
        "while",
        "true",
        "false",
        "null",
        "_",
    }
)

_CHARACTER_ESCAPES = {
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
    '"': '"',
    "'": "\\'",
    "\\": "\\\\",
}


def is_identifier(text: str) -> bool:
    """Return True if text is a single Java identifier (keywords included)."""
    return _IDENTIFIER_PATTERN.fullmatch(text) is not None


def is_valid_name(text: str) -> bool:
    """Return True if text is a dotted sequence of identifiers, none of which is a keyword.

    Examples:
        "taco" -> True
        "java.util.List" -> True
        "super" -> False
        "1abc" -> False
    """
    if not text:
        return False
    return all(is_identifier(part) and part not in JAVA_KEYWORDS for part in text.split("."))


def _is_iso_control(c: str) -> bool:
    code = ord(c)
    return code <= 0x1F or 0x7F <= code <= 0x9F


def character_literal_without_single_quotes(c: str) -> str:
    """Escape one character for use inside a Java char or string literal."""
    if c in _CHARACTER_ESCAPES:
        return _CHARACTER_ESCAPES[c]
    if _is_iso_control(c):
        return f"\\u{ord(c):04x}"
    return c


def string_literal_with_double_quotes(value: str, indent: str) -> str:
    """Return value as a double-quoted Java string literal.

    Newlines inside the value split the literal into concatenated pieces, one per
    line, continued with two indent units and a leading '+'.

    Args:
        value: The raw string
        indent: One indentation unit

    Returns:
        The escaped literal, including the surrounding quotes
    """
    result = ['"']
    for i, c in enumerate(value):
        if c == "'":
            result.append("'")
            continue
        if c == '"':
            result.append('\\"')
            continue
        result.append(character_literal_without_single_quotes(c))
        if c == "\n" and i + 1 < len(value):
            result.append(f'"\n{indent}{indent}+ "')
    result.append('"')
    return "".join(result)
