"""
Declaration builders: annotations, parameters, fields, methods, types and files.
"""

from .annotation_spec import AnnotationSpec, AnnotationSpecBuilder
from .field_spec import FieldSpec, FieldSpecBuilder
from .java_file import JavaFile, JavaFileBuilder, RenderedFile
from .method_spec import CONSTRUCTOR, MethodSpec, MethodSpecBuilder
from .modifiers import Modifier
from .parameter_spec import ParameterSpec, ParameterSpecBuilder
from .type_spec import Kind, TypeSpec, TypeSpecBuilder

__all__ = [
    "AnnotationSpec",
    "AnnotationSpecBuilder",
    "CONSTRUCTOR",
    "FieldSpec",
    "FieldSpecBuilder",
    "JavaFile",
    "JavaFileBuilder",
    "Kind",
    "MethodSpec",
    "MethodSpecBuilder",
    "Modifier",
    "ParameterSpec",
    "ParameterSpecBuilder",
    "RenderedFile",
    "TypeSpec",
    "TypeSpecBuilder",
]
