"""
Rendering engine: type names, format templates, import resolution and emission.
"""

from .code_block import CodeBlock, CodeBlockBuilder, ControlCode
from .code_writer import CodeWriter
from .imports import AMBIGUOUS, AliasTable, ImportResolver
from .line_wrapper import LineWrapper
from .type_names import (
    BOOLEAN,
    BYTE,
    CHAR,
    DOUBLE,
    FLOAT,
    INT,
    LONG,
    OBJECT,
    SHORT,
    VOID,
    ArrayTypeName,
    ClassName,
    ParameterizedTypeName,
    PrimitiveTypeName,
    TypeName,
    TypeVariableName,
    VoidTypeName,
    WildcardTypeName,
    get_type_name,
)

__all__ = [
    "AMBIGUOUS",
    "AliasTable",
    "ArrayTypeName",
    "BOOLEAN",
    "BYTE",
    "CHAR",
    "ClassName",
    "CodeBlock",
    "CodeBlockBuilder",
    "CodeWriter",
    "ControlCode",
    "DOUBLE",
    "FLOAT",
    "INT",
    "ImportResolver",
    "LONG",
    "LineWrapper",
    "OBJECT",
    "ParameterizedTypeName",
    "PrimitiveTypeName",
    "SHORT",
    "TypeName",
    "TypeVariableName",
    "VOID",
    "VoidTypeName",
    "WildcardTypeName",
    "get_type_name",
]
