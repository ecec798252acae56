"""Tests for JVM type and method descriptors."""

import pytest

from sigwarden.exceptions import SignatureParseError
from sigwarden.signatures.descriptors import JavaType, MethodSignature, TypeSort


class TestJavaType:
    """Test JavaType parsing and naming."""

    def test_object_type_from_binary_name(self):
        java_type = JavaType.object_type("java.lang.String")
        assert java_type.descriptor == "Ljava/lang/String;"
        assert java_type.internal_name == "java/lang/String"
        assert java_type.class_name == "java.lang.String"
        assert java_type.sort is TypeSort.OBJECT

    def test_array_names(self):
        java_type = JavaType.from_descriptor("[[I")
        assert java_type.sort is TypeSort.ARRAY
        assert java_type.dimensions == 2
        assert java_type.class_name == "int[][]"

    def test_source_names(self):
        assert JavaType.from_source_name("long") == JavaType("J")
        assert JavaType.from_source_name("java.lang.Object[]") == JavaType("[Ljava/lang/Object;")
        assert JavaType.from_source_name("String...") == JavaType("[LString;")

    def test_unqualified_name_stays_in_default_package(self):
        assert JavaType.from_source_name("Foo").internal_name == "Foo"

    @pytest.mark.parametrize("descriptor", ["", "X", "L;", "Ljava/lang/String", "[V", "II"])
    def test_invalid_descriptors(self, descriptor):
        with pytest.raises(SignatureParseError):
            JavaType.from_descriptor(descriptor)

    @pytest.mark.parametrize("name", ["", "[]", "void[]", "java..lang", "1abc"])
    def test_invalid_source_names(self, name):
        with pytest.raises(SignatureParseError):
            JavaType.from_source_name(name)


class TestMethodSignature:
    """Test MethodSignature parsing."""

    def test_from_descriptor(self):
        method = MethodSignature.from_descriptor("substring", "(II)Ljava/lang/String;")
        assert method.argument_types == (JavaType("I"), JavaType("I"))
        assert method.return_type == JavaType("Ljava/lang/String;")
        assert str(method) == "substring(II)Ljava/lang/String;"

    def test_declaration_returns_void(self):
        method = MethodSignature.from_declaration("substring(int, int)")
        assert method.return_type == JavaType("V")
        assert str(method) == "substring(II)V"

    def test_parse_picks_form(self):
        """Text after ')' means JVM form, otherwise source form."""
        assert MethodSignature.parse("length()I").return_type == JavaType("I")
        assert MethodSignature.parse("length()").return_type == JavaType("V")

    def test_matches_ignores_return_type(self):
        a = MethodSignature.parse("append(Ljava/lang/String;)Ljava/lang/StringBuilder;")
        b = MethodSignature.parse("append(java.lang.String)")
        assert a.matches(b)
        assert a != b

    def test_matches_requires_same_arguments(self):
        a = MethodSignature.parse("append(I)Ljava/lang/StringBuilder;")
        b = MethodSignature.parse("append(long)")
        assert not a.matches(b)

    @pytest.mark.parametrize("text", ["exit(I)", "format(Ljava/lang/String;[Ljava/lang/Object;)"])
    def test_descriptor_arguments_need_return_type(self, text):
        with pytest.raises(SignatureParseError, match="missing its return type"):
            MethodSignature.parse(text)

    def test_source_names_resembling_descriptors(self):
        assert MethodSignature.parse("valueOf(Long)").argument_types == (
            JavaType("LLong;"),
        )

    @pytest.mark.parametrize("text", ["length(", "length(I", "length(V)V", "length)("])
    def test_invalid_descriptor_forms(self, text):
        with pytest.raises(SignatureParseError):
            MethodSignature.parse(text)
