#!/usr/bin/env python3

import pytest

from codepoet.config import RenderConfig
from codepoet.engine import AMBIGUOUS, ClassName, ImportResolver, ParameterizedTypeName, TypeVariableName
from codepoet.specs import JavaFile, MethodSpec, TypeSpec

STRING = ClassName.get("java.lang", "String")
LIST = ClassName.get("java.util", "List")


def render(type_spec, package_name="com.example", config=None):
    builder = JavaFile.builder(package_name, type_spec)
    if config is not None:
        builder.set_config(config)
    return builder.build().render()


class TestImportResolution:
    """Import selection and simple name collisions"""

    def test_unique_simple_name_is_imported(self):
        """A class whose simple name has one owner is imported and written bare"""
        spec = TypeSpec.class_builder("Taco").add_field(ParameterizedTypeName.get(LIST, STRING), "toppings").build()
        rendered = render(spec, "com.example.tacos")
        assert rendered.text == (
            "package com.example.tacos;\n"
            "\n"
            "import java.util.List;\n"
            "\n"
            "class Taco {\n"
            "  List<String> toppings;\n"
            "}\n"
        )
        assert rendered.imports == ("java.util.List",)

    def test_java_lang_is_never_imported(self):
        spec = TypeSpec.class_builder("Taco").add_field(STRING, "name").build()
        rendered = render(spec)
        assert rendered.imports == ()
        assert "  String name;\n" in rendered.text

    def test_conflicting_simple_names_stay_qualified(self):
        """Two classes sharing a simple name are both written fully qualified"""
        spec = (
            TypeSpec.class_builder("Taco")
            .add_field(LIST, "a")
            .add_field(ClassName.get("java.awt", "List"), "b")
            .build()
        )
        rendered = render(spec)
        assert rendered.text == "package com.example;\n\nclass Taco {\n  java.util.List a;\n\n  java.awt.List b;\n}\n"
        assert rendered.imports == ()

    def test_same_package_class_wins_over_import(self):
        """A class of the file's own package keeps its simple name"""
        spec = (
            TypeSpec.class_builder("Taco")
            .add_field(ClassName.get("com.example", "Bar"), "a")
            .add_field(ClassName.get("com.other", "Bar"), "b")
            .build()
        )
        rendered = render(spec)
        assert "  Bar a;\n" in rendered.text
        assert "  com.other.Bar b;\n" in rendered.text
        assert rendered.imports == ()

    def test_nested_type_shadows_import(self):
        """A nested type declared in the file takes precedence over a class with the same name"""
        spec = (
            TypeSpec.class_builder("Taco")
            .add_field(ClassName.get("com.other", "Topping"), "a")
            .add_field(ClassName.get("com.example", "Taco", "Topping"), "b")
            .add_type(TypeSpec.class_builder("Topping").build())
            .build()
        )
        rendered = render(spec)
        assert rendered.text == (
            "package com.example;\n"
            "\n"
            "class Taco {\n"
            "  com.other.Topping a;\n"
            "\n"
            "  Topping b;\n"
            "\n"
            "  class Topping {\n"
            "  }\n"
            "}\n"
        )

    def test_nested_class_is_imported_through_top_level(self):
        spec = TypeSpec.class_builder("Taco").add_field(ClassName.get("java.util", "Map", "Entry"), "entry").build()
        rendered = render(spec)
        assert rendered.imports == ("java.util.Map",)
        assert "  Map.Entry entry;\n" in rendered.text

    def test_type_variable_masks_import(self):
        """A class named like a type variable in scope is written fully qualified"""
        t = TypeVariableName.get("T")
        method = (
            MethodSpec.method_builder("m")
            .add_type_variable(t)
            .add_parameter(t, "a")
            .add_parameter(ClassName.get("com.other", "T"), "b")
            .build()
        )
        rendered = render(TypeSpec.class_builder("Taco").add_method(method).build())
        assert "  <T> void m(T a, com.other.T b) {\n  }\n" in rendered.text
        assert rendered.imports == ()

    def test_import_groups(self):
        """Imports are grouped by prefix, each group sorted and followed by a blank line"""
        spec = (
            TypeSpec.class_builder("Taco")
            .add_field(ClassName.get("com.google.common.base", "Joiner"), "joiner")
            .add_field(ClassName.get("javax.inject", "Provider"), "provider")
            .add_field(ClassName.get("java.util", "Map"), "map")
            .add_field(LIST, "list")
            .build()
        )
        rendered = render(spec)
        assert rendered.text.startswith(
            "package com.example;\n"
            "\n"
            "import java.util.List;\n"
            "import java.util.Map;\n"
            "\n"
            "import javax.inject.Provider;\n"
            "\n"
            "import com.google.common.base.Joiner;\n"
            "\n"
            "class Taco {\n"
        )
        assert rendered.imports == (
            "java.util.List",
            "java.util.Map",
            "javax.inject.Provider",
            "com.google.common.base.Joiner",
        )

    def test_always_qualify(self):
        config = RenderConfig(always_qualify=["List"])
        spec = TypeSpec.class_builder("Taco").add_field(LIST, "list").build()
        rendered = render(spec, config=config)
        assert rendered.imports == ()
        assert "  java.util.List list;\n" in rendered.text

    def test_always_in_scope(self):
        config = RenderConfig(always_in_scope=["java.lang", "java.util"])
        spec = TypeSpec.class_builder("Taco").add_field(LIST, "list").build()
        rendered = render(spec, config=config)
        assert rendered.imports == ()
        assert "  List list;\n" in rendered.text


class TestAliasTable:
    """First-pass alias decisions"""

    def test_alias_table(self):
        spec = (
            TypeSpec.class_builder("Taco")
            .add_field(LIST, "a")
            .add_field(ClassName.get("java.awt", "List"), "b")
            .add_field(ClassName.get("java.util", "Map"), "c")
            .build()
        )
        table = ImportResolver().analyze(spec, "com.example")
        assert table.is_ambiguous("List")
        assert table.aliases["List"] is AMBIGUOUS
        assert table.resolve("Map") == ClassName.get("java.util", "Map")
        assert table.resolve("List") is None
        assert table.imported_types() == {"Map": ClassName.get("java.util", "Map")}
        assert table.imports == [ClassName.get("java.util", "Map")]

    def test_alias_table_is_immutable(self):
        spec = TypeSpec.class_builder("Taco").add_field(LIST, "a").build()
        table = ImportResolver().analyze(spec, "com.example")
        with pytest.raises(TypeError):
            table.aliases["List"] = AMBIGUOUS
        assert table.resolve("List") == LIST
        assert hash(table) == hash(ImportResolver().analyze(spec, "com.example"))


if __name__ == "__main__":
    pytest.main([__file__])
