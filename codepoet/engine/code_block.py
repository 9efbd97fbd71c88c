"""
Format templates.

A CodeBlock is an immutable sequence of format parts plus the arguments they
consume. Each part is either a run of literal text or a placeholder such as
"$T"; placeholders that take an argument consume the next entry of args in
order.

Placeholders:
    $L  literal, emitted as is (code blocks and declarations are emitted recursively)
    $S  string, emitted as a quoted Java string literal (None becomes null)
    $T  type, emitted through the name resolver so it can be imported
    $N  name, the bare name of a declaration or a plain string
    $$  a literal dollar sign
    $W  a space, or a line break if the statement would overflow
    $Z  a zero-width space, or a line break if the statement would overflow
    $>  increase the indentation level
    $<  decrease the indentation level
    $[  begin a statement
    $]  end a statement

An argument can be selected explicitly with a 1-based index ($2T) or by name
with add_named ($text:S).
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from ..errors import (
    ArgumentIndexError,
    ArgumentTypeError,
    DanglingPlaceholderError,
    FormatSyntaxError,
    MissingArgumentError,
    NamingError,
)
from .type_names import TypeName

if TYPE_CHECKING:
    from .code_writer import CodeWriter


class ControlCode(str, Enum):
    """Placeholders understood by the emitter."""

    LITERAL = "$L"
    STRING = "$S"
    TYPE = "$T"
    NAME = "$N"
    DOLLAR = "$$"
    WRAPPING_SPACE = "$W"
    ZERO_WIDTH_SPACE = "$Z"
    INDENT = "$>"
    UNINDENT = "$<"
    STATEMENT_BEGIN = "$["
    STATEMENT_END = "$]"


# Codes that never consume an argument and therefore may not carry an index
NO_ARG_CODES = frozenset("$><[]WZ")

_NAMED_ARGUMENT = re.compile(r"\$(?P<argument_name>[\w_]+):(?P<type_char>\w).*", re.ASCII)
_LOWERCASE = re.compile(r"[a-z]+[\w_]*", re.ASCII)


def _hashable(value: Any) -> Any:
    try:
        hash(value)
    except TypeError:
        return repr(value)
    return value


@dataclass(frozen=True)
class CodeBlock:
    """An immutable fragment of code built from a format template."""

    format_parts: tuple[str, ...] = ()
    args: tuple[Any, ...] = ()

    def __hash__(self) -> int:
        return hash((self.format_parts, tuple(_hashable(arg) for arg in self.args)))

    @staticmethod
    def builder() -> CodeBlockBuilder:
        return CodeBlockBuilder()

    @staticmethod
    def of(fmt: str, *args: Any) -> CodeBlock:
        """Build a code block from a single format template.

        Example:
            CodeBlock.of("$L taco", "delicious") renders as "delicious taco"
        """
        return CodeBlockBuilder().add(fmt, *args).build()

    @staticmethod
    def join(blocks: Iterable[CodeBlock], separator: str, prefix: str = "", suffix: str = "") -> CodeBlock:
        """Concatenate code blocks with a separator between each pair.

        The separator, prefix and suffix are copied verbatim; they are not parsed
        as format templates.

        Args:
            blocks: The code blocks to join, in order
            separator: Text placed between consecutive blocks
            prefix: Text placed before the first block
            suffix: Text placed after the last block

        Returns:
            A new code block
        """
        builder = CodeBlockBuilder()
        if prefix:
            builder.add("$L", prefix)
        for i, block in enumerate(blocks):
            if i and separator:
                builder.add("$L", separator)
            builder.add_code_block(block)
        if suffix:
            builder.add("$L", suffix)
        return builder.build()

    def is_empty(self) -> bool:
        return not self.format_parts

    def to_builder(self) -> CodeBlockBuilder:
        builder = CodeBlockBuilder()
        builder.format_parts.extend(self.format_parts)
        builder.args.extend(self.args)
        return builder

    def emit_literal(self, out: CodeWriter) -> None:
        out.emit(self)

    def __str__(self) -> str:
        from .code_writer import CodeWriter

        writer = CodeWriter()
        writer.emit(self)
        return writer.getvalue()


class CodeBlockBuilder:
    """Mutable accumulator for a CodeBlock.

    format_parts and args are plain lists; build() copies them, so changes made
    to the builder afterwards never affect a code block already built.
    """

    def __init__(self) -> None:
        self.format_parts: list[str] = []
        self.args: list[Any] = []

    def is_empty(self) -> bool:
        return not self.format_parts

    def add(self, fmt: str, *args: Any) -> CodeBlockBuilder:
        """Append a format template with positional arguments.

        Placeholders without an index consume arguments in order; indexed
        placeholders ($1L) select them explicitly. The two styles cannot be mixed,
        and every argument must be used.

        Raises:
            FormatSyntaxError: If the template is malformed
            DanglingPlaceholderError: If the template ends inside a placeholder
            ArgumentIndexError: If an index is out of range or an argument is unused
        """
        has_relative = False
        has_indexed = False
        relative_count = 0
        indexed_counts = [0] * len(args)

        p = 0
        while p < len(fmt):
            if fmt[p] != "$":
                next_p = fmt.find("$", p + 1)
                if next_p == -1:
                    next_p = len(fmt)
                self.format_parts.append(fmt[p:next_p])
                p = next_p
                continue

            p += 1  # '$'

            # Consume zero or more digits, leaving c as the first non-digit after the '$'
            index_start = p
            while True:
                if p >= len(fmt):
                    raise DanglingPlaceholderError(f"dangling format characters in '{fmt}'")
                c = fmt[p]
                p += 1
                if not ("0" <= c <= "9"):
                    break
            index_end = p - 1

            if c in NO_ARG_CODES:
                if index_start != index_end:
                    raise FormatSyntaxError("$$, $>, $<, $[, $], $W, and $Z may not have an index")
                self.format_parts.append("$" + c)
                continue

            if index_start < index_end:
                index = int(fmt[index_start:index_end]) - 1
                has_indexed = True
            else:
                index = relative_count
                has_relative = True
                relative_count += 1

            if not 0 <= index < len(args):
                raise ArgumentIndexError(
                    f"index {index + 1} for '{fmt[index_start - 1 : index_end + 1]}' "
                    f"not in range (received {len(args)} arguments)"
                )
            if has_indexed and has_relative:
                raise FormatSyntaxError("cannot mix indexed and positional parameters")
            if has_indexed:
                indexed_counts[index] += 1

            self._add_argument(fmt, c, args[index])
            self.format_parts.append("$" + c)

        if has_relative and relative_count < len(args):
            raise ArgumentIndexError(f"unused arguments: expected {relative_count}, received {len(args)}")
        if has_indexed:
            unused = [f"${i + 1}" for i, count in enumerate(indexed_counts) if count == 0]
            if unused:
                s = "" if len(unused) == 1 else "s"
                raise ArgumentIndexError(f"unused argument{s}: {', '.join(unused)}")
        return self

    def add_named(self, fmt: str, arguments: Mapping[str, Any]) -> CodeBlockBuilder:
        """Append a format template whose placeholders select arguments by name.

        Example:
            add_named("$food:L is $adjective:L", {"food": "tacos", "adjective": "tasty"})

        Raises:
            NamingError: If an argument key does not start with a lowercase letter
            MissingArgumentError: If a placeholder names a key absent from arguments
            DanglingPlaceholderError: If the template ends with a bare '$'
        """
        for name in arguments:
            if not _LOWERCASE.fullmatch(name):
                raise NamingError(f"argument '{name}' must start with a lowercase character")

        p = 0
        while p < len(fmt):
            next_p = fmt.find("$", p)
            if next_p == -1:
                self.format_parts.append(fmt[p:])
                break

            if p != next_p:
                self.format_parts.append(fmt[p:next_p])
                p = next_p

            match = None
            colon = fmt.find(":", p)
            if colon != -1:
                candidate = fmt[p : min(colon + 2, len(fmt))]
                match = _NAMED_ARGUMENT.match(candidate)

            if match is not None:
                name = match.group("argument_name")
                if name not in arguments:
                    raise MissingArgumentError(f"Missing named argument for ${name}")
                c = match.group("type_char")
                self._add_argument(fmt, c, arguments[name])
                self.format_parts.append("$" + c)
                p += len(candidate)
            else:
                if p >= len(fmt) - 1:
                    raise DanglingPlaceholderError("dangling $ at end")
                c = fmt[p + 1]
                if c not in NO_ARG_CODES:
                    raise FormatSyntaxError(f"unknown format ${c} at {p + 1} in '{fmt}'")
                self.format_parts.append(fmt[p : p + 2])
                p += 2
        return self

    def _add_argument(self, fmt: str, c: str, arg: Any) -> None:
        if c == "N":
            self.args.append(_arg_to_name(arg))
        elif c == "L":
            self.args.append(arg)
        elif c == "S":
            self.args.append(None if arg is None else str(arg))
        elif c == "T":
            self.args.append(_arg_to_type(arg))
        else:
            raise FormatSyntaxError(f"invalid format string: '{fmt}'")

    def add_statement(self, fmt: str | CodeBlock, *args: Any) -> CodeBlockBuilder:
        """Append a statement: the template followed by ';' and a newline.

        Lines of the statement after the first are indented by two extra levels.
        """
        if isinstance(fmt, CodeBlock):
            fmt, args = "$L", (fmt,)
        self.add("$[")
        self.add(fmt, *args)
        self.add(";\n$]")
        return self

    def add_code_block(self, code_block: CodeBlock) -> CodeBlockBuilder:
        self.format_parts.extend(code_block.format_parts)
        self.args.extend(code_block.args)
        return self

    def begin_control_flow(self, control_flow: str | CodeBlock, *args: Any) -> CodeBlockBuilder:
        """Open a braced block, e.g. begin_control_flow("if ($N != null)", name)."""
        if isinstance(control_flow, CodeBlock):
            control_flow, args = "$L", (control_flow,)
        self.add(control_flow + " {\n", *args)
        return self.indent()

    def next_control_flow(self, control_flow: str | CodeBlock, *args: Any) -> CodeBlockBuilder:
        """Close the current block and open the next one, e.g. next_control_flow("else")."""
        if isinstance(control_flow, CodeBlock):
            control_flow, args = "$L", (control_flow,)
        self.unindent()
        self.add("} " + control_flow + " {\n", *args)
        return self.indent()

    def end_control_flow(self, control_flow: str | CodeBlock | None = None, *args: Any) -> CodeBlockBuilder:
        """Close the current block.

        With a control flow, the closing brace is followed by it and a ';', as in
        the end of a do/while loop.
        """
        self.unindent()
        if control_flow is None:
            return self.add("}\n")
        if isinstance(control_flow, CodeBlock):
            control_flow, args = "$L", (control_flow,)
        return self.add("} " + control_flow + ";\n", *args)

    def indent(self) -> CodeBlockBuilder:
        self.format_parts.append(ControlCode.INDENT.value)
        return self

    def unindent(self) -> CodeBlockBuilder:
        self.format_parts.append(ControlCode.UNINDENT.value)
        return self

    def clear(self) -> CodeBlockBuilder:
        self.format_parts.clear()
        self.args.clear()
        return self

    def build(self) -> CodeBlock:
        return CodeBlock(tuple(self.format_parts), tuple(self.args))


def _arg_to_name(arg: Any) -> str:
    if isinstance(arg, str):
        return arg
    name = getattr(arg, "name", None)
    if isinstance(name, str):
        return name
    raise ArgumentTypeError(f"expected name but was {arg}")


def _arg_to_type(arg: Any) -> TypeName:
    if isinstance(arg, TypeName):
        return arg
    raise ArgumentTypeError(f"expected type but was {arg}")
