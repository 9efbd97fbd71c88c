"""
Exception hierarchy for code generation.

Construction-time errors (raised while a format template or a name is built)
derive from ValueError/TypeError so callers can treat them as bad arguments.
Render-time errors derive from RuntimeError: they are only detectable once
fragments have been composed and are being written out.
"""

from __future__ import annotations


class CodePoetError(Exception):
    """Base class for all code generation errors."""

    pass


class FormatSyntaxError(CodePoetError, ValueError):
    """Raised when a format template is malformed.

    This covers unknown placeholder codes, indexed control codes
    ($$, $>, $<, $[, $], $W, $Z) and mixing indexed with relative arguments.
    """

    pass


class DanglingPlaceholderError(FormatSyntaxError):
    """Raised when a template ends in the middle of a placeholder."""

    pass


class ArgumentIndexError(CodePoetError, ValueError):
    """Raised when a placeholder index is out of range or an argument is unused."""

    pass


class MissingArgumentError(CodePoetError, ValueError):
    """Raised when a named placeholder has no matching entry in the argument mapping."""

    pass


class NamingError(CodePoetError, ValueError):
    """Raised when a named argument key does not start with a lowercase letter."""

    pass


class ArgumentTypeError(CodePoetError, TypeError):
    """Raised when an argument cannot be used with its placeholder ($T, $N)."""

    pass


class AmbiguousNameError(CodePoetError, ValueError):
    """Raised when a dotted string cannot be split into package and class names."""

    pass


class StatementNestingError(CodePoetError, RuntimeError):
    """Raised at render time when $[ and $] markers are unbalanced."""

    pass


class IndentationUnderflowError(CodePoetError, RuntimeError):
    """Raised at render time when $< would take the indentation below zero."""

    pass


class DeclarationError(CodePoetError, ValueError):
    """Raised when a JSON declaration file cannot be turned into a Java file."""

    pass
