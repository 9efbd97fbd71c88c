#!/usr/bin/env python3

import pytest

from codepoet.engine import ClassName, CodeBlock
from codepoet.specs import AnnotationSpec

NAMED = ClassName.get("com.example", "Named")


class TestAnnotationSpec:
    """Inline annotation rendering"""

    def test_marker(self):
        assert str(AnnotationSpec.get(ClassName.get("java.lang", "Override"))) == "@java.lang.Override"

    def test_single_value(self):
        annotation = AnnotationSpec.builder(NAMED).add_member("value", "$S", "foo").build()
        assert str(annotation) == '@com.example.Named("foo")'

    def test_array_value(self):
        annotation = AnnotationSpec.builder(NAMED).add_member("value", "$S", "a").add_member("value", "$S", "b").build()
        assert str(annotation) == '@com.example.Named({"a", "b"})'

    def test_several_members_inline(self):
        annotation = (
            AnnotationSpec.builder(ClassName.get("com.example", "Column"))
            .add_member("name", "$S", "id")
            .add_member("nullable", "$L", False)
            .build()
        )
        assert str(annotation) == '@com.example.Column(name = "id", nullable = false)'

    def test_annotation_as_member_value(self):
        inner = AnnotationSpec.builder(NAMED).add_member("value", "$S", "x").build()
        outer = AnnotationSpec.builder(ClassName.get("com.example", "Wrapper")).add_member("value", "$L", inner).build()
        assert str(outer) == '@com.example.Wrapper(@com.example.Named("x"))'

    def test_invalid_member_name(self):
        with pytest.raises(ValueError, match="not a valid name: 1x"):
            AnnotationSpec.builder(NAMED).add_member("1x", "$L", 1)

    def test_member_map_and_to_builder(self):
        annotation = AnnotationSpec.builder(NAMED).add_member("value", CodeBlock.of("$S", "foo")).build()
        assert annotation.member_map() == {"value": (CodeBlock.of("$S", "foo"),)}
        assert annotation.to_builder().build() == annotation


if __name__ == "__main__":
    pytest.main([__file__])
