"""Value types shared by the signature parser, resolver and registry.

Registry keys:
    ClassKey(class_name)                  -- forbidden class
    FieldKey(class_name, field_name)      -- forbidden field
    MethodKey(class_name, method)         -- forbidden method (full descriptor
                                             of the resolved declaration)

Parsed lines:
    SignatureRecord                       -- class [#member] [@message]
    IncludeBundled / DefaultMessage / IgnoreUnresolvable -- directives
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .descriptors import JavaType, MethodSignature


@dataclass(frozen=True)
class ClassKey:
    class_name: str


@dataclass(frozen=True)
class FieldKey:
    class_name: str
    field_name: str


@dataclass(frozen=True)
class MethodKey:
    class_name: str
    method: MethodSignature

    @property
    def argument_key(self) -> tuple[str, str, tuple[JavaType, ...]]:
        """Lookup key that ignores the return type."""
        return (self.class_name, self.method.name, self.method.argument_types)


RegistryKey = Union[ClassKey, FieldKey, MethodKey]


@dataclass(frozen=True)
class SignatureRecord:
    """One signature line, split into its parts.

    Attributes:
        signature: Signature text as written (before any ``@``), trimmed
        class_name: Class part; may be a glob pattern
        method: Parsed method when the member has a parameter list
        field_name: Field name when the member has no parameter list
        message: Effective message (inline or default), None when empty
    """

    signature: str
    class_name: str
    method: Optional[MethodSignature] = None
    field_name: Optional[str] = None
    message: Optional[str] = None

    @property
    def printout(self) -> str:
        """Display string used verbatim in diagnostics."""
        if self.message is not None:
            return f"{self.signature} [{self.message}]"
        return self.signature

    @property
    def is_pattern(self) -> bool:
        return is_glob(self.class_name)


def is_glob(class_name: str) -> bool:
    """True if the class name uses wildcard syntax."""
    return "*" in class_name or "?" in class_name


@dataclass(frozen=True)
class IncludeBundled:
    name: str


@dataclass(frozen=True)
class DefaultMessage:
    message: Optional[str]


@dataclass(frozen=True)
class IgnoreUnresolvable:
    pass


Directive = Union[IncludeBundled, DefaultMessage, IgnoreUnresolvable]
