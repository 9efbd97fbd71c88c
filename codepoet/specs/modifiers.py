"""
Java declaration modifiers.
"""

from __future__ import annotations

from enum import Enum


class Modifier(str, Enum):
    """Java modifiers, declared in canonical order."""

    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"
    ABSTRACT = "abstract"
    DEFAULT = "default"
    STATIC = "static"
    FINAL = "final"
    TRANSIENT = "transient"
    VOLATILE = "volatile"
    SYNCHRONIZED = "synchronized"
    NATIVE = "native"
    STRICTFP = "strictfp"

    @property
    def order(self) -> int:
        return _ORDER[self]

    def __str__(self) -> str:
        return self.value


_ORDER = {modifier: i for i, modifier in enumerate(Modifier)}


def format_modifiers(modifiers) -> str:
    """Return modifiers as a bracketed list in canonical order, e.g. [public, static]."""
    return "[" + ", ".join(m.value for m in sorted(modifiers, key=lambda m: m.order)) + "]"
