"""
Emitter.

CodeWriter turns code blocks into text. It tracks the indentation level,
whether a statement is open, and whether it is inside a Javadoc or line
comment. Class names are shortened through lookup_name(): a name is written
as its simple form when the enclosing types or the imports make it
unambiguous, and fully qualified otherwise.

The same writer is used for both rendering passes: the first pass runs with
no imports and records which classes could be imported (importable_types),
the second pass renders with the alias table produced from that record.
"""

from __future__ import annotations

import re
from typing import Any

from ..errors import IndentationUnderflowError, StatementNestingError
from ..utils import string_literal_with_double_quotes
from .code_block import CodeBlock, ControlCode
from .line_wrapper import LineWrapper
from .type_names import ClassName, TypeName

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class CodeWriter:
    """Stateful renderer for code blocks.

    Args:
        indent: One indentation unit
        column_limit: Line length at which pending wrap points break
        imported_types: Simple name to class for every class that may be written
            by its simple name
        always_qualify: Simple names that must never be imported
    """

    def __init__(
        self,
        indent: str = "  ",
        column_limit: int = 100,
        imported_types: dict[str, ClassName] | None = None,
        always_qualify: set[str] | frozenset[str] = frozenset(),
    ):
        self.indent_unit = indent
        self.out = LineWrapper(indent, column_limit)
        self.indent_level = 0
        self.javadoc = False
        self.comment = False
        self.package_name: str | None = None
        self.type_spec_stack: list[Any] = []
        self.current_type_variables: list[str] = []
        self.imported_types = dict(imported_types or {})
        self.always_qualify = set(always_qualify)
        # Top-level classes that could be imported, by simple name, in first-seen order
        self.importable_types: dict[str, list[ClassName]] = {}
        # Simple names used unqualified because they live in the same package
        self.referenced_names: set[str] = set()
        # Simple names of every nested type declared in the rendered tree
        self.declared_names: set[str] = set()
        self.trailing_newline = False
        # -1 when no statement is open, otherwise the number of lines the statement has spanned
        self.statement_line = -1

    def indent(self, levels: int = 1) -> CodeWriter:
        self.indent_level += levels
        return self

    def unindent(self, levels: int = 1) -> CodeWriter:
        if self.indent_level - levels < 0:
            raise IndentationUnderflowError(f"cannot unindent {levels} from {self.indent_level}")
        self.indent_level -= levels
        return self

    def push_package(self, package_name: str) -> CodeWriter:
        if self.package_name is not None:
            raise RuntimeError(f"package already set: {self.package_name}")
        self.package_name = package_name
        return self

    def pop_package(self) -> CodeWriter:
        if self.package_name is None:
            raise RuntimeError("package not set")
        self.package_name = None
        return self

    def push_type(self, type_spec: Any) -> CodeWriter:
        self.type_spec_stack.append(type_spec)
        if type_spec.name:
            self.declared_names.add(type_spec.name)
        self.declared_names.update(type_spec.nested_type_simple_names)
        return self

    def pop_type(self) -> CodeWriter:
        self.type_spec_stack.pop()
        return self

    def emit_comment(self, code_block: CodeBlock) -> None:
        # Force the '//' prefix on the first line
        self.trailing_newline = True
        self.comment = True
        try:
            self.emit(code_block)
            self.emit("\n")
        finally:
            self.comment = False

    def emit_javadoc(self, javadoc: CodeBlock) -> None:
        if javadoc.is_empty():
            return
        self.emit("/**\n")
        self.javadoc = True
        try:
            self.emit(javadoc, ensure_trailing_newline=True)
        finally:
            self.javadoc = False
        self.emit(" */\n")

    def emit_annotations(self, annotations: Any, inline: bool) -> None:
        for annotation in annotations:
            annotation.emit(self, inline)
            self.emit(" " if inline else "\n")

    def emit_modifiers(self, modifiers: Any, implicit_modifiers: Any = frozenset()) -> None:
        """Emit modifiers in canonical order, skipping the implicit ones."""
        for modifier in sorted(set(modifiers), key=lambda m: m.order):
            if modifier in implicit_modifiers:
                continue
            self.emit_and_indent(modifier.value)
            self.emit_and_indent(" ")

    def emit_type_variables(self, type_variables: Any) -> None:
        """Emit a type parameter list such as <T extends Number>.

        The variables stay in scope, masking classes with the same simple name,
        until pop_type_variables() is called.
        """
        if not type_variables:
            return
        self.current_type_variables.extend(t.name for t in type_variables)

        self.emit("<")
        for i, type_variable in enumerate(type_variables):
            if i:
                self.emit(", ")
            self.emit_annotations(type_variable.annotations, True)
            self.emit("$L", type_variable.name)
            for j, bound in enumerate(type_variable.bounds):
                self.emit(" & $T" if j else " extends $T", bound)
        self.emit(">")

    def pop_type_variables(self, type_variables: Any) -> None:
        for type_variable in type_variables:
            self.current_type_variables.remove(type_variable.name)

    def emit(self, code: CodeBlock | str, *args: Any, ensure_trailing_newline: bool = False) -> CodeWriter:
        """Emit a code block, or a format template with its arguments."""
        code_block = code if isinstance(code, CodeBlock) else CodeBlock.of(code, *args)
        a = 0
        for part in code_block.format_parts:
            if part == ControlCode.LITERAL:
                self._emit_literal(code_block.args[a])
                a += 1
            elif part == ControlCode.NAME:
                self.emit_and_indent(code_block.args[a])
                a += 1
            elif part == ControlCode.STRING:
                string = code_block.args[a]
                a += 1
                # None is written as a bare null literal
                if string is None:
                    self.emit_and_indent("null")
                else:
                    self.emit_and_indent(string_literal_with_double_quotes(string, self.indent_unit))
            elif part == ControlCode.TYPE:
                type_name: TypeName = code_block.args[a]
                a += 1
                type_name.emit(self)
            elif part == ControlCode.DOLLAR:
                self.emit_and_indent("$")
            elif part == ControlCode.INDENT:
                self.indent()
            elif part == ControlCode.UNINDENT:
                self.unindent()
            elif part == ControlCode.STATEMENT_BEGIN:
                if self.statement_line != -1:
                    raise StatementNestingError("statement enter $[ followed by statement enter $[")
                self.statement_line = 0
            elif part == ControlCode.STATEMENT_END:
                if self.statement_line == -1:
                    raise StatementNestingError("statement exit $] has no matching statement enter $[")
                if self.statement_line > 0:
                    # End of a multi-line statement
                    self.unindent(2)
                self.statement_line = -1
            elif part == ControlCode.WRAPPING_SPACE:
                self.emit_wrapping_space()
            elif part == ControlCode.ZERO_WIDTH_SPACE:
                if self.statement_line != -1:
                    self.out.zero_width_space(self.indent_level + 2)
            else:
                self.emit_and_indent(part)

        if ensure_trailing_newline and self.out.last_char != "\n":
            self.emit("\n")
        return self

    def check_statement_closed(self) -> None:
        if self.statement_line != -1:
            raise StatementNestingError("statement enter $[ has no matching statement exit $]")

    def emit_wrapping_space(self) -> CodeWriter:
        if self.statement_line != -1:
            self.out.wrapping_space(self.indent_level + 2)
        else:
            self.emit_and_indent(" ")
        return self

    def _emit_literal(self, value: Any) -> None:
        if hasattr(value, "emit_literal"):
            value.emit_literal(self)
        elif isinstance(value, bool):
            self.emit_and_indent("true" if value else "false")
        elif value is None:
            self.emit_and_indent("null")
        else:
            self.emit_and_indent(str(value))

    def lookup_name(self, class_name: ClassName) -> str:
        """Return the shortest text that refers to class_name at the current position.

        The shortest suffix of the nested-class chain that resolves (through the
        enclosing type declarations or the imports) to the class itself is used.
        If a prefix of the name resolves to a different class the fully-qualified
        name is used instead.
        """
        # A type variable with the same simple name masks the class
        top_level_simple_name = class_name.top_level_class_name().simple_name
        if top_level_simple_name in self.current_type_variables:
            return class_name.canonical_name

        name_resolved = False
        c = class_name
        while c is not None:
            resolved = self._resolve(c.simple_name)
            name_resolved = resolved is not None
            if resolved is not None and resolved.canonical_name == c.canonical_name:
                suffix_offset = len(c.simple_names) - 1
                return ".".join(class_name.simple_names[suffix_offset:])
            c = c.enclosing

        if name_resolved:
            return class_name.canonical_name

        if self.package_name == class_name.package_name:
            self.referenced_names.add(top_level_simple_name)
            return ".".join(class_name.simple_names)

        # Javadoc references never justify an import
        if not self.javadoc:
            self._importable_type(class_name)
        return class_name.canonical_name

    def _importable_type(self, class_name: ClassName) -> None:
        if not class_name.package_name or class_name.simple_name in self.always_qualify:
            return
        top_level = class_name.top_level_class_name().without_annotations()
        owners = self.importable_types.setdefault(top_level.simple_name, [])
        if top_level not in owners:
            owners.append(top_level)

    def _resolve(self, simple_name: str) -> ClassName | None:
        # A type nested in one of the enclosing declarations
        for i in range(len(self.type_spec_stack) - 1, -1, -1):
            if simple_name in self.type_spec_stack[i].nested_type_simple_names:
                return self._stack_class_name(i, simple_name)

        # The top-level declaration itself
        if self.type_spec_stack and self.type_spec_stack[0].name == simple_name:
            return ClassName(self.package_name or "", simple_name)

        return self.imported_types.get(simple_name)

    def _stack_class_name(self, stack_depth: int, simple_name: str) -> ClassName:
        class_name = ClassName(self.package_name or "", self.type_spec_stack[0].name)
        for i in range(1, stack_depth + 1):
            class_name = class_name.nested_class(self.type_spec_stack[i].name)
        return class_name.nested_class(simple_name)

    def emit_and_indent(self, s: str) -> CodeWriter:
        """Write raw text, indenting every new line and applying comment prefixes."""
        first = True
        for line in _LINE_BREAK.split(s):
            if not first:
                # Keep blank lines inside Javadoc and comments prefixed
                if (self.javadoc or self.comment) and self.trailing_newline:
                    self._emit_indentation()
                    self.out.append(" *" if self.javadoc else "//")
                self.out.append("\n")
                self.trailing_newline = True
                if self.statement_line != -1:
                    if self.statement_line == 0:
                        # Second line of a statement
                        self.indent(2)
                    self.statement_line += 1

            first = False
            if not line:
                continue

            if self.trailing_newline:
                self._emit_indentation()
                if self.javadoc:
                    self.out.append(" * ")
                elif self.comment:
                    self.out.append("// ")

            self.out.append(line)
            self.trailing_newline = False
        return self

    def _emit_indentation(self) -> None:
        self.out.append(self.indent_unit * self.indent_level)

    def getvalue(self) -> str:
        return self.out.getvalue()
