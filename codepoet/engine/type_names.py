"""
Type name model.

Immutable, structurally comparable values describing the types mentioned by
generated code: primitives, void, arrays, declared classes (with their
enclosing chain), parameterized types, type variables and wildcards.

Every node may carry type-use annotations. Annotations take part in equality
and hashing, so an annotated name never equals its bare counterpart;
without_annotations() recovers the bare form at every nesting level.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from ..errors import AmbiguousNameError
from ..utils import is_identifier

if TYPE_CHECKING:
    from .code_writer import CodeWriter


@dataclass(frozen=True)
class TypeName:
    """Base class for all type names."""

    annotations: tuple[Any, ...] = field(default=(), kw_only=True)

    def annotated(self, *annotations: Any) -> TypeName:
        """Return a copy with the given annotations appended to the existing ones."""
        if any(a is None for a in annotations):
            raise TypeError("annotations == None")
        return replace(self, annotations=self.annotations + tuple(annotations))

    def without_annotations(self) -> TypeName:
        return replace(self, annotations=())

    @property
    def is_annotated(self) -> bool:
        return bool(self.annotations)

    @property
    def is_primitive(self) -> bool:
        return False

    @property
    def is_boxed_primitive(self) -> bool:
        return False

    def emit(self, out: CodeWriter) -> CodeWriter:
        raise NotImplementedError

    def _emit_annotations(self, out: CodeWriter) -> None:
        for annotation in self.annotations:
            annotation.emit(out, inline=True)
            out.emit_and_indent(" ")

    def __str__(self) -> str:
        from .code_writer import CodeWriter

        writer = CodeWriter()
        self.emit(writer)
        return writer.getvalue()


@dataclass(frozen=True)
class VoidTypeName(TypeName):
    """The void pseudo-type, only valid as a method return type."""

    keyword = "void"

    def emit(self, out: CodeWriter) -> CodeWriter:
        self._emit_annotations(out)
        return out.emit_and_indent(self.keyword)


@dataclass(frozen=True)
class PrimitiveTypeName(TypeName):
    """A Java primitive such as int or boolean."""

    keyword: str

    @property
    def is_primitive(self) -> bool:
        return True

    def box(self) -> ClassName:
        """Return the java.lang wrapper class for this primitive, keeping annotations."""
        boxed = ClassName("java.lang", _BOXES[self.keyword])
        return boxed.annotated(*self.annotations) if self.annotations else boxed

    def emit(self, out: CodeWriter) -> CodeWriter:
        self._emit_annotations(out)
        return out.emit_and_indent(self.keyword)


@dataclass(frozen=True)
class ClassName(TypeName):
    """A fully-qualified declared class name.

    Nested classes keep a reference to their enclosing ClassName so that each
    segment of the chain can carry its own annotations.
    """

    package_name: str
    simple_name: str
    enclosing: ClassName | None = None

    def __post_init__(self) -> None:
        if not self.simple_name:
            raise ValueError("simple name must not be empty")

    @staticmethod
    def get(package_name: str, simple_name: str, *simple_names: str) -> ClassName:
        """Create a class name from a package and one or more simple names.

        Examples:
            ClassName.get("java.util", "Map", "Entry") -> java.util.Map.Entry
            ClassName.get("", "Foo") -> Foo
        """
        class_name = ClassName(package_name, simple_name)
        for name in simple_names:
            class_name = class_name.nested_class(name)
        return class_name

    @staticmethod
    def best_guess(text: str) -> ClassName:
        """Guess the package and class names of a dotted string.

        Segments are read left to right: leading segments that start with a lowercase
        letter form the package, the first segment starting with an uppercase letter is
        the top-level class, and every following segment must also start with an
        uppercase letter and names a nested class.

        Raises:
            AmbiguousNameError: If the string cannot be split that way
        """
        p = 0
        while p < len(text) and text[p].islower():
            p = text.find(".", p) + 1
            if p == 0:
                raise AmbiguousNameError(f"couldn't make a guess for {text}")
        package_name = text[: p - 1] if p else ""

        class_name = None
        for simple_name in text[p:].split("."):
            if not simple_name or not simple_name[0].isupper():
                raise AmbiguousNameError(f"couldn't make a guess for {text}")
            class_name = ClassName(package_name, simple_name, class_name)
        return class_name

    def nested_class(self, name: str) -> ClassName:
        """Return a class nested directly inside this one."""
        if not is_identifier(name):
            raise ValueError(f"not a valid simple name: {name}")
        return ClassName(self.package_name, name, self)

    def peer_class(self, name: str) -> ClassName:
        """Return a class sharing this class's enclosing class (or package)."""
        return ClassName(self.package_name, name, self.enclosing)

    def enclosing_class_name(self) -> ClassName | None:
        return self.enclosing

    def top_level_class_name(self) -> ClassName:
        return self.enclosing.top_level_class_name() if self.enclosing is not None else self

    def enclosing_classes(self) -> list[ClassName]:
        """Return the chain from the top-level class down to this class."""
        chain = []
        c = self
        while c is not None:
            chain.append(c)
            c = c.enclosing
        chain.reverse()
        return chain

    @property
    def simple_names(self) -> list[str]:
        return [c.simple_name for c in self.enclosing_classes()]

    @property
    def canonical_name(self) -> str:
        if self.enclosing is not None:
            return f"{self.enclosing.canonical_name}.{self.simple_name}"
        if self.package_name:
            return f"{self.package_name}.{self.simple_name}"
        return self.simple_name

    @property
    def reflection_name(self) -> str:
        if self.enclosing is not None:
            return f"{self.enclosing.reflection_name}${self.simple_name}"
        return self.canonical_name

    @property
    def is_annotated(self) -> bool:
        return bool(self.annotations) or (self.enclosing is not None and self.enclosing.is_annotated)

    @property
    def is_boxed_primitive(self) -> bool:
        return self.package_name == "java.lang" and self.enclosing is None and self.simple_name in _UNBOXES

    def unbox(self) -> PrimitiveTypeName:
        """Return the primitive for a java.lang wrapper class."""
        if not self.is_boxed_primitive:
            raise ValueError(f"cannot unbox {self.canonical_name}")
        primitive = PrimitiveTypeName(_UNBOXES[self.simple_name])
        return primitive.annotated(*self.annotations) if self.annotations else primitive

    def without_annotations(self) -> ClassName:
        enclosing = self.enclosing.without_annotations() if self.enclosing is not None else None
        return replace(self, annotations=(), enclosing=enclosing)

    def emit(self, out: CodeWriter) -> CodeWriter:
        chars_emitted = False
        for class_name in self.enclosing_classes():
            if chars_emitted:
                # An enclosing class was already written; continue segment by segment
                out.emit_and_indent(".")
                simple_name = class_name.simple_name
            elif class_name.annotations or class_name is self:
                qualified_name = out.lookup_name(class_name)
                dot = qualified_name.rfind(".")
                if dot != -1:
                    out.emit_and_indent(qualified_name[: dot + 1])
                    simple_name = qualified_name[dot + 1 :]
                    chars_emitted = True
                else:
                    simple_name = qualified_name
            else:
                continue

            if class_name.annotations:
                if chars_emitted:
                    out.emit_and_indent(" ")
                class_name._emit_annotations(out)

            out.emit_and_indent(simple_name)
            chars_emitted = True
        return out


@dataclass(frozen=True)
class ArrayTypeName(TypeName):
    """An array of some component type."""

    component_type: TypeName

    @staticmethod
    def of(component_type: TypeName) -> ArrayTypeName:
        return ArrayTypeName(component_type)

    def without_annotations(self) -> ArrayTypeName:
        return ArrayTypeName(self.component_type.without_annotations())

    def emit(self, out: CodeWriter, varargs: bool = False) -> CodeWriter:
        self._emit_leaf_type(out)
        return self._emit_brackets(out, varargs)

    def _emit_leaf_type(self, out: CodeWriter) -> None:
        if isinstance(self.component_type, ArrayTypeName):
            self.component_type._emit_leaf_type(out)
        else:
            self.component_type.emit(out)

    def _emit_brackets(self, out: CodeWriter, varargs: bool) -> CodeWriter:
        if self.annotations:
            out.emit_and_indent(" ")
            self._emit_annotations(out)
        if not isinstance(self.component_type, ArrayTypeName):
            # Last bracket
            return out.emit_and_indent("..." if varargs else "[]")
        out.emit_and_indent("[]")
        return self.component_type._emit_brackets(out, varargs)


@dataclass(frozen=True)
class ParameterizedTypeName(TypeName):
    """A generic class applied to type arguments, e.g. List<String>.

    enclosing_type is set for inner classes of a parameterized outer class,
    rendered as Outer<A>.Inner<B>.
    """

    raw_type: ClassName
    type_arguments: tuple[TypeName, ...]
    enclosing_type: ParameterizedTypeName | None = None

    def __post_init__(self) -> None:
        if not self.type_arguments and self.enclosing_type is None:
            raise ValueError(f"no type arguments: {self.raw_type}")
        for argument in self.type_arguments:
            if argument.is_primitive or isinstance(argument, VoidTypeName):
                raise ValueError(f"invalid type parameter: {argument}")

    @staticmethod
    def get(raw_type: ClassName, *type_arguments: TypeName) -> ParameterizedTypeName:
        if not isinstance(raw_type, ClassName):
            raise TypeError(f"expected ClassName but was {raw_type!r}")
        return ParameterizedTypeName(raw_type, tuple(type_arguments))

    def nested_class(self, name: str, *type_arguments: TypeName) -> ParameterizedTypeName:
        """Return an inner class of this parameterized type with its own type arguments."""
        return ParameterizedTypeName(self.raw_type.nested_class(name), tuple(type_arguments), self)

    def without_annotations(self) -> ParameterizedTypeName:
        return ParameterizedTypeName(
            self.raw_type.without_annotations(),
            tuple(argument.without_annotations() for argument in self.type_arguments),
            self.enclosing_type.without_annotations() if self.enclosing_type is not None else None,
        )

    def emit(self, out: CodeWriter) -> CodeWriter:
        if self.enclosing_type is not None:
            self.enclosing_type.emit(out)
            out.emit_and_indent(".")
            if self.annotations:
                out.emit_and_indent(" ")
                self._emit_annotations(out)
            out.emit_and_indent(self.raw_type.simple_name)
        elif self.annotations:
            self.raw_type.annotated(*self.annotations).emit(out)
        else:
            self.raw_type.emit(out)

        if self.type_arguments:
            out.emit_and_indent("<")
            for i, argument in enumerate(self.type_arguments):
                if i:
                    out.emit_and_indent(", ")
                argument.emit(out)
            out.emit_and_indent(">")
        return out


@dataclass(frozen=True)
class TypeVariableName(TypeName):
    """A type variable such as T, optionally bounded (T extends Comparable<T>)."""

    name: str
    bounds: tuple[TypeName, ...] = ()

    @staticmethod
    def get(name: str, *bounds: TypeName) -> TypeVariableName:
        # Object is the implicit bound and is never written out
        return TypeVariableName(name, _check_bounds(bounds))

    def with_bounds(self, *bounds: TypeName) -> TypeVariableName:
        return replace(self, bounds=self.bounds + _check_bounds(bounds))

    def without_annotations(self) -> TypeVariableName:
        return TypeVariableName(self.name, tuple(bound.without_annotations() for bound in self.bounds))

    def emit(self, out: CodeWriter) -> CodeWriter:
        self._emit_annotations(out)
        return out.emit_and_indent(self.name)


@dataclass(frozen=True)
class WildcardTypeName(TypeName):
    """A wildcard type argument: ?, ? extends T or ? super T."""

    upper_bounds: tuple[TypeName, ...]
    lower_bounds: tuple[TypeName, ...] = ()

    def __post_init__(self) -> None:
        if len(self.upper_bounds) != 1:
            raise ValueError(f"unexpected extends bounds: {self.upper_bounds}")
        if len(self.lower_bounds) > 1:
            raise ValueError(f"unexpected super bounds: {self.lower_bounds}")
        for bound in self.upper_bounds + self.lower_bounds:
            if bound.is_primitive or isinstance(bound, VoidTypeName):
                raise ValueError(f"invalid wildcard bound: {bound}")

    @staticmethod
    def subtype_of(upper_bound: TypeName) -> WildcardTypeName:
        return WildcardTypeName((upper_bound,))

    @staticmethod
    def supertype_of(lower_bound: TypeName) -> WildcardTypeName:
        return WildcardTypeName((OBJECT,), (lower_bound,))

    def without_annotations(self) -> WildcardTypeName:
        return WildcardTypeName(
            tuple(bound.without_annotations() for bound in self.upper_bounds),
            tuple(bound.without_annotations() for bound in self.lower_bounds),
        )

    def emit(self, out: CodeWriter) -> CodeWriter:
        self._emit_annotations(out)
        if self.lower_bounds:
            return out.emit("? super $T", self.lower_bounds[0])
        if self.upper_bounds[0] == OBJECT:
            return out.emit("?")
        return out.emit("? extends $T", self.upper_bounds[0])


def _check_bounds(bounds: tuple[TypeName, ...]) -> tuple[TypeName, ...]:
    for bound in bounds:
        if bound.is_primitive or isinstance(bound, VoidTypeName):
            raise ValueError(f"invalid bound: {bound}")
    return tuple(bound for bound in bounds if bound != OBJECT)


_BOXES = {
    "boolean": "Boolean",
    "byte": "Byte",
    "short": "Short",
    "int": "Integer",
    "long": "Long",
    "char": "Character",
    "float": "Float",
    "double": "Double",
}
_UNBOXES = {boxed: keyword for keyword, boxed in _BOXES.items()}

VOID = VoidTypeName()
BOOLEAN = PrimitiveTypeName("boolean")
BYTE = PrimitiveTypeName("byte")
SHORT = PrimitiveTypeName("short")
INT = PrimitiveTypeName("int")
LONG = PrimitiveTypeName("long")
CHAR = PrimitiveTypeName("char")
FLOAT = PrimitiveTypeName("float")
DOUBLE = PrimitiveTypeName("double")
OBJECT = ClassName("java.lang", "Object")

PRIMITIVES = {p.keyword: p for p in (BOOLEAN, BYTE, SHORT, INT, LONG, CHAR, FLOAT, DOUBLE)}


def get_type_name(value: TypeName | str) -> TypeName:
    """Coerce a type name or a plain string into a TypeName.

    Strings are read as a primitive keyword, "void", or a dotted class name
    (see ClassName.best_guess), optionally followed by one or more "[]".
    """
    if isinstance(value, TypeName):
        return value
    if not isinstance(value, str):
        raise TypeError(f"expected type but was {value!r}")
    if value.endswith("[]"):
        return ArrayTypeName(get_type_name(value[:-2]))
    if value == VOID.keyword:
        return VOID
    if value in PRIMITIVES:
        return PRIMITIVES[value]
    return ClassName.best_guess(value)
