#!/usr/bin/env python3

import pytest

from codepoet.engine import INT, VOID, ClassName
from codepoet.specs import ParameterSpec
from codepoet.specs.modifiers import Modifier
from codepoet.specs.parameter_spec import is_valid_parameter_name

STRING = ClassName.get("java.lang", "String")


class TestParameterSpec:
    """Method parameters"""

    def test_final_parameter(self):
        assert str(ParameterSpec.builder(INT, "foo", Modifier.FINAL).build()) == "final int foo"

    def test_annotated_parameter(self):
        parameter = ParameterSpec.builder(STRING, "foo").add_annotation(ClassName.get("javax.annotation", "Nullable")).build()
        assert str(parameter) == "@javax.annotation.Nullable java.lang.String foo"

    def test_only_final_is_allowed(self):
        with pytest.raises(ValueError, match="unexpected parameter modifier: public"):
            ParameterSpec.builder(INT, "foo", Modifier.PUBLIC)

    def test_void_is_rejected(self):
        with pytest.raises(ValueError, match="invalid parameter type: void"):
            ParameterSpec.builder(VOID, "foo")

    def test_invalid_name(self):
        with pytest.raises(ValueError, match="not a valid name: super"):
            ParameterSpec.builder(INT, "super")

    @pytest.mark.parametrize("name,valid", [("foo", True), ("this", True), ("Outer.this", True), ("1a", False), ("super", False)])
    def test_receiver_names(self, name, valid):
        assert is_valid_parameter_name(name) is valid

    def test_none_annotations_are_rejected(self):
        with pytest.raises(ValueError, match="annotationSpecs == None"):
            ParameterSpec.builder(INT, "foo").add_annotations(None)

    def test_equality(self):
        a = ParameterSpec.builder(INT, "foo", Modifier.FINAL).build()
        b = ParameterSpec.builder(INT, "foo", Modifier.FINAL).build()
        assert a == b
        assert hash(a) == hash(b)
        assert a != ParameterSpec.builder(INT, "bar", Modifier.FINAL).build()
        assert a.to_builder().build() == a


if __name__ == "__main__":
    pytest.main([__file__])
