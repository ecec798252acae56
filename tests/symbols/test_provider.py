"""Tests for the in-memory symbol provider."""

import json

import pytest

from sigwarden.exceptions import ClassNotFoundError, ConfigurationError
from sigwarden.signatures.descriptors import MethodSignature
from sigwarden.symbols import ClassMetadata, InMemorySymbolProvider


class TestInMemorySymbolProvider:
    """Test class lookup and member inheritance."""

    def test_binary_and_internal_names(self, provider):
        assert provider.resolve_class("java.lang.String").class_name == "java/lang/String"
        assert provider.resolve_class("java/lang/String").class_name == "java/lang/String"
        assert "java.lang.String" in provider

    def test_unknown_class(self, provider):
        with pytest.raises(ClassNotFoundError, match="Class 'com.example.Gone' not found"):
            provider.resolve_class("com.example.Gone")

    def test_inherits_superclass_and_interface_members(self, provider):
        metadata = provider.resolve_class("java.lang.String")
        names = {m.name for m in metadata.methods}
        assert {"length", "hashCode", "charAt", "toLowerCase"} <= names
        assert metadata.has_field("CASE_INSENSITIVE_ORDER")

    def test_covariant_methods_kept_apart(self, provider):
        metadata = provider.resolve_class("java.lang.StringBuilder")
        found = metadata.find_methods(MethodSignature.parse("append(java.lang.String)"))
        assert [str(m) for m in found] == [
            "append(Ljava/lang/String;)Ljava/lang/AbstractStringBuilder;",
            "append(Ljava/lang/String;)Ljava/lang/StringBuilder;",
        ]

    def test_unknown_supertype_is_skipped(self):
        provider = InMemorySymbolProvider()
        provider.declare("a.Child", methods=["run()V"], superclass="a.Missing")
        assert {str(m) for m in provider.resolve_class("a.Child").methods} == {"run()V"}

    def test_supertype_cycle_terminates(self):
        provider = InMemorySymbolProvider()
        provider.declare("a.A", fields=["x"], superclass="a.B")
        provider.declare("a.B", fields=["y"], superclass="a.A")
        assert provider.resolve_class("a.A").fields == frozenset({"x", "y"})

    def test_register_invalidates_cache(self):
        provider = InMemorySymbolProvider()
        provider.declare("a.Child", superclass="a.Parent")
        assert not provider.resolve_class("a.Child").fields
        provider.register(ClassMetadata("a/Parent", fields=frozenset({"late"})))
        assert provider.resolve_class("a.Child").has_field("late")

    def test_from_json_file(self, tmp_path):
        path = tmp_path / "classes.json"
        path.write_text(
            json.dumps({"java/lang/System": {"methods": ["exit(I)V"], "fields": ["out"]}}),
            encoding="utf-8",
        )
        provider = InMemorySymbolProvider.from_json_file(path)
        metadata = provider.resolve_class("java.lang.System")
        assert MethodSignature.parse("exit(I)V") in metadata.methods

    def test_from_json_file_errors(self, tmp_path):
        path = tmp_path / "classes.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Cannot load class manifest"):
            InMemorySymbolProvider.from_json_file(path)
        with pytest.raises(ConfigurationError):
            InMemorySymbolProvider.from_json_file(tmp_path / "missing.json")
