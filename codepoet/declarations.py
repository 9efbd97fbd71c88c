"""
Loading Java file declarations from JSON.

A declaration file describes one Java source file:

    {
        "package": "com.example.zoo",
        "comment": "Zoo inventory.",
        "type": {
            "kind": "class",
            "name": "Zoo",
            "modifiers": ["public", "final"],
            "fields": [{"type": "java.util.List<com.example.zoo.Animal>", "name": "animals",
                        "modifiers": ["private", "final"]}],
            "methods": [{"name": "size", "returns": "int", "modifiers": ["public"],
                         "code": ["return animals.size()"]}]
        }
    }

Type strings are primitive keywords, "void", dotted class names (split with
ClassName.best_guess), generic forms such as "java.util.Map<K, V>", wildcards
("?", "? extends X", "? super X"), trailing "[]", or the name of a type
variable declared by an enclosing type or method.

Method code is a list of entries. A string is a statement; an object is one of
    {"format": ..., "args": [...]}                  a statement
    {"begin_control_flow": ..., "args": [...]}      opens a block
    {"next_control_flow": ..., "args": [...]}       closes a block and opens the next
    {"end_control_flow": true} or {"end_control_flow": "while (x)", ...}
    {"comment": ...}                                a line comment
    {"code": ..., "args": [...]}                    raw code, newlines included
Arguments are JSON values; {"type": "..."} becomes a type reference for $T.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

from .config import RenderConfig
from .engine.code_block import CodeBlock, CodeBlockBuilder
from .engine.type_names import (
    OBJECT,
    ArrayTypeName,
    ClassName,
    ParameterizedTypeName,
    TypeName,
    TypeVariableName,
    WildcardTypeName,
    get_type_name,
)
from .errors import DeclarationError
from .logging_config import get_logger
from .specs.annotation_spec import AnnotationSpec
from .specs.field_spec import FieldSpec
from .specs.java_file import JavaFile
from .specs.method_spec import MethodSpec
from .specs.modifiers import Modifier
from .specs.parameter_spec import ParameterSpec
from .specs.type_spec import TypeSpec

logger = get_logger(__name__)

_TOKEN = re.compile(r"\s*(\[\]|[<>,?]|[\w$.]+)")


class TypeParser:
    """Parses type strings into type names.

    Args:
        type_variables: Names that refer to type variables instead of classes
    """

    def __init__(self, type_variables: set[str] | frozenset[str] = frozenset()):
        self.type_variables = set(type_variables)
        self._tokens: list[str] = []
        self._pos = 0
        self._text = ""

    def with_type_variables(self, names) -> TypeParser:
        return TypeParser(self.type_variables | set(names))

    def parse(self, text: str) -> TypeName:
        self._text = text
        self._tokens = self._tokenize(text)
        self._pos = 0
        type_name = self._parse_type()
        if self._pos != len(self._tokens):
            raise DeclarationError(f"unexpected '{self._tokens[self._pos]}' in type '{text}'")
        return type_name

    def _tokenize(self, text: str) -> list[str]:
        tokens = []
        pos = 0
        while pos < len(text):
            if text[pos:].strip() == "":
                break
            match = _TOKEN.match(text, pos)
            if match is None:
                raise DeclarationError(f"cannot parse type '{text}'")
            tokens.append(match.group(1))
            pos = match.end()
        if not tokens:
            raise DeclarationError("empty type")
        return tokens

    def _peek(self) -> str | None:
        return self._tokens[self._pos] if self._pos < len(self._tokens) else None

    def _next(self) -> str:
        token = self._peek()
        if token is None:
            raise DeclarationError(f"unexpected end of type '{self._text}'")
        self._pos += 1
        return token

    def _expect(self, expected: str) -> None:
        token = self._next()
        if token != expected:
            raise DeclarationError(f"expected '{expected}' but found '{token}' in type '{self._text}'")

    def _parse_type(self) -> TypeName:
        token = self._next()
        if token == "?":
            if self._peek() == "extends":
                self._pos += 1
                return WildcardTypeName.subtype_of(self._parse_type())
            if self._peek() == "super":
                self._pos += 1
                return WildcardTypeName.supertype_of(self._parse_type())
            return WildcardTypeName.subtype_of(OBJECT)

        if token in {"<", ">", ",", "[]"}:
            raise DeclarationError(f"unexpected '{token}' in type '{self._text}'")

        if token in self.type_variables:
            type_name: TypeName = TypeVariableName(token)
        else:
            type_name = get_type_name(token)

        if self._peek() == "<":
            self._pos += 1
            arguments = [self._parse_type()]
            while self._peek() == ",":
                self._pos += 1
                arguments.append(self._parse_type())
            self._expect(">")
            if not isinstance(type_name, ClassName):
                raise DeclarationError(f"'{token}' cannot take type arguments in type '{self._text}'")
            type_name = ParameterizedTypeName.get(type_name, *arguments)

        while self._peek() == "[]":
            self._pos += 1
            type_name = ArrayTypeName.of(type_name)
        return type_name


class DeclarationLoader:
    """Builds a JavaFile from a parsed JSON declaration."""

    def __init__(self, config: RenderConfig | None = None):
        self.config = config if config is not None else RenderConfig()

    def load_file(self, path: str | Path) -> JavaFile:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        logger.info("Loaded declaration %s", path)
        return self.load(data)

    def load(self, data: dict) -> JavaFile:
        if "type" not in data:
            raise DeclarationError("declaration has no 'type'")
        type_spec = self.type_spec(data["type"], TypeParser())
        builder = JavaFile.builder(data.get("package", ""), type_spec).set_config(self.config)
        if data.get("comment"):
            builder.add_file_comment("$L", data["comment"])
        return builder.build()

    def type_spec(self, data: dict, parser: TypeParser) -> TypeSpec:
        name = _required(data, "name", "type")
        kind = data.get("kind", "class")
        match kind:
            case "class":
                builder = TypeSpec.class_builder(name)
            case "interface":
                builder = TypeSpec.interface_builder(name)
            case "enum":
                builder = TypeSpec.enum_builder(name)
            case _:
                raise DeclarationError(f"unknown kind '{kind}' for type {name}")

        type_variables = [self.type_variable(t, parser) for t in data.get("type_variables", [])]
        parser = parser.with_type_variables(t.name for t in type_variables)
        # Bounds may refer to the type's own variables, e.g. T extends Comparable<T>
        type_variables = [self.type_variable(t, parser) for t in data.get("type_variables", [])]
        builder.add_type_variables(type_variables)

        builder.add_modifiers(*_modifiers(data))
        if data.get("javadoc"):
            builder.add_javadoc("$L", _javadoc(data["javadoc"]))
        builder.add_annotations(self.annotation(a, parser) for a in data.get("annotations", []))
        if data.get("superclass"):
            builder.set_superclass(parser.parse(data["superclass"]))
        for interface in data.get("interfaces", []):
            builder.add_superinterface(parser.parse(interface))

        for constant in data.get("enum_constants", []):
            if isinstance(constant, str):
                builder.add_enum_constant(constant)
            else:
                constant_name = _required(constant, "name", "enum constant")
                arguments = constant.get("arguments")
                if arguments is None:
                    builder.add_enum_constant(constant_name)
                else:
                    anonymous = TypeSpec.anonymous_class_builder(self.code_block(arguments, parser)).build()
                    builder.add_enum_constant(constant_name, anonymous)

        for field in data.get("fields", []):
            builder.add_field(self.field_spec(field, parser))
        for method in data.get("methods", []):
            builder.add_method(self.method_spec(method, parser))
        for nested in data.get("types", []):
            builder.add_type(self.type_spec(nested, parser))
        return builder.build()

    def type_variable(self, data: str | dict, parser: TypeParser) -> TypeVariableName:
        if isinstance(data, str):
            return TypeVariableName.get(data)
        name = _required(data, "name", "type variable")
        return TypeVariableName.get(name, *(parser.parse(b) for b in data.get("bounds", [])))

    def annotation(self, data: str | dict, parser: TypeParser) -> AnnotationSpec:
        if isinstance(data, str):
            return AnnotationSpec.get(parser.parse(data))
        builder = AnnotationSpec.builder(parser.parse(_required(data, "type", "annotation")))
        for member, values in data.get("members", {}).items():
            for value in values if isinstance(values, list) else [values]:
                builder.add_member(member, self.code_block(value, parser))
        return builder.build()

    def field_spec(self, data: dict, parser: TypeParser) -> FieldSpec:
        builder = FieldSpec.builder(
            parser.parse(_required(data, "type", "field")), _required(data, "name", "field"), *_modifiers(data)
        )
        if data.get("javadoc"):
            builder.add_javadoc("$L", _javadoc(data["javadoc"]))
        builder.add_annotations(self.annotation(a, parser) for a in data.get("annotations", []))
        if "initializer" in data:
            builder.set_initializer(self.code_block(data["initializer"], parser))
        return builder.build()

    def method_spec(self, data: dict, parser: TypeParser) -> MethodSpec:
        if data.get("constructor"):
            builder = MethodSpec.constructor_builder()
        else:
            builder = MethodSpec.method_builder(_required(data, "name", "method"))

        type_variables = [self.type_variable(t, parser) for t in data.get("type_variables", [])]
        parser = parser.with_type_variables(t.name for t in type_variables)
        type_variables = [self.type_variable(t, parser) for t in data.get("type_variables", [])]
        builder.add_type_variables(type_variables)

        builder.add_modifiers(*_modifiers(data))
        if data.get("javadoc"):
            builder.add_javadoc("$L", _javadoc(data["javadoc"]))
        builder.add_annotations(self.annotation(a, parser) for a in data.get("annotations", []))
        if data.get("returns") and not data.get("constructor"):
            builder.returns(parser.parse(data["returns"]))
        for parameter in data.get("parameters", []):
            builder.add_parameter(self.parameter_spec(parameter, parser))
        builder.set_varargs(bool(data.get("varargs", False)))
        for exception in data.get("exceptions", []):
            builder.add_exception(parser.parse(exception))
        if "default" in data:
            builder.set_default_value(self.code_block(data["default"], parser))
        self.add_code(builder.code, data.get("code", []), parser)
        return builder.build()

    def parameter_spec(self, data: dict, parser: TypeParser) -> ParameterSpec:
        builder = ParameterSpec.builder(
            parser.parse(_required(data, "type", "parameter")), _required(data, "name", "parameter"), *_modifiers(data)
        )
        if data.get("javadoc"):
            builder.add_javadoc("$L", _javadoc(data["javadoc"]))
        builder.add_annotations(self.annotation(a, parser) for a in data.get("annotations", []))
        return builder.build()

    def code_block(self, data: str | dict, parser: TypeParser) -> CodeBlock:
        """Build a code block from a plain format string or {"format": ..., "args": [...]}."""
        if isinstance(data, str):
            return CodeBlock.of(data)
        fmt = _required(data, "format", "code block")
        return CodeBlock.of(fmt, *self.arguments(data, parser))

    def add_code(self, builder: CodeBlockBuilder, entries: list, parser: TypeParser) -> None:
        for entry in entries:
            if isinstance(entry, str):
                builder.add_statement(entry)
            elif "format" in entry:
                builder.add_statement(entry["format"], *self.arguments(entry, parser))
            elif "begin_control_flow" in entry:
                builder.begin_control_flow(entry["begin_control_flow"], *self.arguments(entry, parser))
            elif "next_control_flow" in entry:
                builder.next_control_flow(entry["next_control_flow"], *self.arguments(entry, parser))
            elif "end_control_flow" in entry:
                closing = entry["end_control_flow"]
                if isinstance(closing, str):
                    builder.end_control_flow(closing, *self.arguments(entry, parser))
                else:
                    builder.end_control_flow()
            elif "comment" in entry:
                builder.add("// $L\n", entry["comment"])
            elif "code" in entry:
                builder.add(entry["code"], *self.arguments(entry, parser))
            else:
                raise DeclarationError(f"unknown code entry: {entry}")

    def arguments(self, data: dict, parser: TypeParser) -> list[Any]:
        result = []
        for argument in data.get("args", []):
            if isinstance(argument, dict) and set(argument) == {"type"}:
                result.append(parser.parse(argument["type"]))
            else:
                result.append(argument)
        return result


def load_declaration(path: str | Path, config: RenderConfig | None = None) -> JavaFile:
    """Load a declaration file into a JavaFile."""
    return DeclarationLoader(config).load_file(path)


def _required(data: dict, key: str, what: str) -> Any:
    if key not in data:
        raise DeclarationError(f"{what} is missing '{key}'")
    return data[key]


def _modifiers(data: dict) -> list[Modifier]:
    result = []
    for modifier in data.get("modifiers", []):
        try:
            result.append(Modifier(modifier))
        except ValueError:
            raise DeclarationError(f"unknown modifier '{modifier}'") from None
    return result


def _javadoc(text: str) -> str:
    return text if text.endswith("\n") else text + "\n"
