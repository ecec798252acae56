"""Structural metadata of classes in the analyzed program."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..signatures.descriptors import MethodSignature


@dataclass(frozen=True)
class ClassMetadata:
    """Members visible on a class.

    Attributes:
        class_name: Internal (slash-delimited) class name
        methods: Declared and inherited methods; covariant overrides appear
            once per return type
        fields: Declared and inherited field names
        superclass: Internal name of the superclass, if any
        interfaces: Internal names of directly implemented interfaces
    """

    class_name: str
    methods: frozenset[MethodSignature] = field(default_factory=frozenset)
    fields: frozenset[str] = field(default_factory=frozenset)
    superclass: Optional[str] = None
    interfaces: tuple[str, ...] = ()

    def find_methods(self, wanted: MethodSignature) -> list[MethodSignature]:
        """All methods with the wanted name and argument types, sorted by descriptor."""
        return sorted((m for m in self.methods if m.matches(wanted)), key=str)

    def has_field(self, name: str) -> bool:
        return name in self.fields
