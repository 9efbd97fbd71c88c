"""codepoet

Java source generation from Python. Declarations (types, methods, fields) are
assembled with builders and format templates, then rendered into
well-indented source with minimal, collision-free imports.
"""

__version__ = "1.0.0"

from .config import RenderConfig
from .engine import (
    AMBIGUOUS,
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
    AliasTable,
    ArrayTypeName,
    ClassName,
    CodeBlock,
    CodeBlockBuilder,
    CodeWriter,
    ImportResolver,
    ParameterizedTypeName,
    PrimitiveTypeName,
    TypeName,
    TypeVariableName,
    WildcardTypeName,
    get_type_name,
)
from .errors import (
    AmbiguousNameError,
    ArgumentIndexError,
    ArgumentTypeError,
    CodePoetError,
    DanglingPlaceholderError,
    DeclarationError,
    FormatSyntaxError,
    IndentationUnderflowError,
    MissingArgumentError,
    NamingError,
    StatementNestingError,
)
from .specs import (
    AnnotationSpec,
    FieldSpec,
    JavaFile,
    MethodSpec,
    Modifier,
    ParameterSpec,
    RenderedFile,
    TypeSpec,
)

__all__ = [
    "AMBIGUOUS",
    "AliasTable",
    "AmbiguousNameError",
    "AnnotationSpec",
    "ArgumentIndexError",
    "ArgumentTypeError",
    "ArrayTypeName",
    "BOOLEAN",
    "BYTE",
    "CHAR",
    "ClassName",
    "CodeBlock",
    "CodeBlockBuilder",
    "CodePoetError",
    "CodeWriter",
    "DOUBLE",
    "DanglingPlaceholderError",
    "DeclarationError",
    "FLOAT",
    "FieldSpec",
    "FormatSyntaxError",
    "INT",
    "ImportResolver",
    "IndentationUnderflowError",
    "JavaFile",
    "LONG",
    "MethodSpec",
    "MissingArgumentError",
    "Modifier",
    "NamingError",
    "OBJECT",
    "ParameterSpec",
    "ParameterizedTypeName",
    "PrimitiveTypeName",
    "RenderConfig",
    "RenderedFile",
    "SHORT",
    "StatementNestingError",
    "TypeName",
    "TypeSpec",
    "TypeVariableName",
    "VOID",
    "WildcardTypeName",
    "get_type_name",
]
