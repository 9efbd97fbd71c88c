"""
Field declarations.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from ..engine.code_block import CodeBlock, CodeBlockBuilder
from ..engine.code_writer import CodeWriter
from ..engine.type_names import TypeName, get_type_name
from ..utils import is_valid_name
from .annotation_spec import AnnotationSpec
from .modifiers import Modifier


@dataclass(frozen=True)
class FieldSpec:
    type: TypeName
    name: str
    javadoc: CodeBlock = CodeBlock()
    annotations: tuple[AnnotationSpec, ...] = ()
    modifiers: frozenset[Modifier] = frozenset()
    initializer: CodeBlock = CodeBlock()

    @staticmethod
    def builder(type_name: TypeName | str, name: str, *modifiers: Modifier) -> FieldSpecBuilder:
        if not is_valid_name(name):
            raise ValueError(f"not a valid name: {name}")
        return FieldSpecBuilder(get_type_name(type_name), name).add_modifiers(*modifiers)

    def has_modifier(self, modifier: Modifier) -> bool:
        return modifier in self.modifiers

    def to_builder(self) -> FieldSpecBuilder:
        builder = FieldSpecBuilder(self.type, self.name)
        builder.javadoc.add_code_block(self.javadoc)
        builder.annotations.extend(self.annotations)
        builder.modifiers.extend(self.modifiers)
        builder.initializer = None if self.initializer.is_empty() else self.initializer
        return builder

    def emit(self, out: CodeWriter, implicit_modifiers: frozenset[Modifier] = frozenset()) -> None:
        out.emit_javadoc(self.javadoc)
        out.emit_annotations(self.annotations, False)
        out.emit_modifiers(self.modifiers, implicit_modifiers)
        out.emit("$T $L", self.type, self.name)
        if not self.initializer.is_empty():
            out.emit(" = ")
            out.emit(self.initializer)
            out.check_statement_closed()
        out.emit(";\n")

    def __str__(self) -> str:
        writer = CodeWriter()
        self.emit(writer)
        return writer.getvalue()


class FieldSpecBuilder:
    def __init__(self, type_name: TypeName, name: str):
        self.type = type_name
        self.name = name
        self.javadoc = CodeBlockBuilder()
        self.annotations: list[AnnotationSpec] = []
        self.modifiers: list[Modifier] = []
        self.initializer: CodeBlock | None = None

    def add_javadoc(self, fmt: str | CodeBlock, *args: Any) -> FieldSpecBuilder:
        if isinstance(fmt, CodeBlock):
            self.javadoc.add_code_block(fmt)
        else:
            self.javadoc.add(fmt, *args)
        return self

    def add_annotations(self, annotations: Iterable[AnnotationSpec]) -> FieldSpecBuilder:
        if annotations is None:
            raise ValueError("annotationSpecs == None")
        for annotation in annotations:
            self.add_annotation(annotation)
        return self

    def add_annotation(self, annotation: AnnotationSpec | TypeName | str) -> FieldSpecBuilder:
        if not isinstance(annotation, AnnotationSpec):
            annotation = AnnotationSpec.get(annotation)
        self.annotations.append(annotation)
        return self

    def add_modifiers(self, *modifiers: Modifier) -> FieldSpecBuilder:
        self.modifiers.extend(Modifier(m) for m in modifiers)
        return self

    def set_initializer(self, fmt: str | CodeBlock, *args: Any) -> FieldSpecBuilder:
        if self.initializer is not None:
            raise ValueError("initializer was already set")
        self.initializer = fmt if isinstance(fmt, CodeBlock) else CodeBlock.of(fmt, *args)
        return self

    def build(self) -> FieldSpec:
        return FieldSpec(
            self.type,
            self.name,
            self.javadoc.build(),
            tuple(self.annotations),
            frozenset(self.modifiers),
            self.initializer if self.initializer is not None else CodeBlock(),
        )
