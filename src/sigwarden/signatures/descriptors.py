"""JVM type and method descriptors.

Signature text names types the way Java source does (``java.lang.String``,
``int[]``), while the bytecode scanner sees JVM descriptors
(``Ljava/lang/String;``, ``[I``). Both spellings are parsed into the same
value objects here so they can be compared and used as registry keys.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from ..exceptions import SignatureParseError


class TypeSort(Enum):
    """Kind of a JVM type."""

    VOID = "V"
    BOOLEAN = "Z"
    CHAR = "C"
    BYTE = "B"
    SHORT = "S"
    INT = "I"
    FLOAT = "F"
    LONG = "J"
    DOUBLE = "D"
    ARRAY = "["
    OBJECT = "L"


_PRIMITIVE_NAMES = {
    "void": "V",
    "boolean": "Z",
    "char": "C",
    "byte": "B",
    "short": "S",
    "int": "I",
    "float": "F",
    "long": "J",
    "double": "D",
}
_PRIMITIVE_DESCRIPTORS = {v: k for k, v in _PRIMITIVE_NAMES.items()}
# argument list written as JVM descriptors, e.g. "I", "[BLjava/lang/String;"
_DESCRIPTOR_ARGUMENTS = re.compile(r"(?:\[*(?:[ZCBSIFJD]|L[^;()]+;))+")


@dataclass(frozen=True)
class JavaType:
    """A JVM field type, identified by its descriptor."""

    descriptor: str

    @property
    def sort(self) -> TypeSort:
        return TypeSort(self.descriptor[0])

    @property
    def element_type(self) -> JavaType:
        """Innermost element type for arrays, the type itself otherwise."""
        return JavaType(self.descriptor.lstrip("["))

    @property
    def dimensions(self) -> int:
        return len(self.descriptor) - len(self.descriptor.lstrip("["))

    @property
    def internal_name(self) -> str:
        """Slash-delimited class name (the descriptor itself for arrays)."""
        if self.sort is TypeSort.OBJECT:
            return self.descriptor[1:-1]
        return self.descriptor

    @property
    def class_name(self) -> str:
        """Binary class name, e.g. ``java.lang.String`` or ``int[][]``."""
        sort = self.sort
        if sort is TypeSort.OBJECT:
            return self.internal_name.replace("/", ".")
        if sort is TypeSort.ARRAY:
            return self.element_type.class_name + "[]" * self.dimensions
        return _PRIMITIVE_DESCRIPTORS[self.descriptor]

    def __str__(self) -> str:
        return self.descriptor

    @classmethod
    def object_type(cls, class_name: str) -> JavaType:
        """Build an object type from an internal or binary class name."""
        return cls("L" + class_name.replace(".", "/") + ";")

    @classmethod
    def from_descriptor(cls, descriptor: str) -> JavaType:
        """Parse a single field descriptor such as ``[Ljava/lang/Object;``."""
        java_type, end = _read_descriptor(descriptor, 0)
        if end != len(descriptor):
            raise SignatureParseError(f"Invalid type descriptor: {descriptor}")
        return java_type

    @classmethod
    def from_source_name(cls, name: str) -> JavaType:
        """Parse a Java source type name: ``int``, ``java.util.List[]``, ``Object...``.

        Unqualified class names stay in the default package.
        """
        name = name.strip()
        dims = 0
        while True:
            if name.endswith("[]"):
                name = name[:-2].rstrip()
            elif name.endswith("..."):
                name = name[:-3].rstrip()
            else:
                break
            dims += 1
        if not name or not _is_class_name(name):
            raise SignatureParseError(f"Invalid type name: {name!r}")
        primitive = _PRIMITIVE_NAMES.get(name)
        if primitive is not None:
            if primitive == "V" and dims:
                raise SignatureParseError("Invalid type name: void array")
            return cls("[" * dims + primitive)
        return cls("[" * dims + "L" + name.replace(".", "/") + ";")


def _is_class_name(name: str) -> bool:
    return all(part and not part[0].isdigit() and all(
        ch.isalnum() or ch in "_$" for ch in part
    ) for part in name.replace("/", ".").split("."))


def _read_descriptor(text: str, pos: int) -> tuple[JavaType, int]:
    """Read one field descriptor starting at ``pos``; return it and the end offset."""
    start = pos
    while pos < len(text) and text[pos] == "[":
        pos += 1
    if pos >= len(text):
        raise SignatureParseError(f"Invalid type descriptor: {text}")
    ch = text[pos]
    if ch == "L":
        end = text.find(";", pos)
        if end <= pos + 1:
            raise SignatureParseError(f"Invalid type descriptor: {text}")
        return JavaType(text[start : end + 1]), end + 1
    if ch in _PRIMITIVE_DESCRIPTORS:
        if ch == "V" and pos != start:
            raise SignatureParseError(f"Invalid type descriptor: {text}")
        return JavaType(text[start : pos + 1]), pos + 1
    raise SignatureParseError(f"Invalid type descriptor: {text}")


VOID = JavaType("V")


@dataclass(frozen=True)
class MethodSignature:
    """A method name with its argument and return types.

    ``str()`` renders the JVM form, e.g. ``substring(II)Ljava/lang/String;``.
    """

    name: str
    argument_types: tuple[JavaType, ...]
    return_type: JavaType = VOID

    @property
    def descriptor(self) -> str:
        args = "".join(t.descriptor for t in self.argument_types)
        return f"({args}){self.return_type.descriptor}"

    def __str__(self) -> str:
        return self.name + self.descriptor

    def matches(self, other: MethodSignature) -> bool:
        """Same name and argument types, return type ignored."""
        return self.name == other.name and self.argument_types == other.argument_types

    @classmethod
    def from_descriptor(cls, name: str, descriptor: str) -> MethodSignature:
        """Build from a method name and a JVM method descriptor ``(II)V``."""
        if not descriptor.startswith("("):
            raise SignatureParseError(f"Invalid method descriptor: {name}{descriptor}")
        close = descriptor.find(")")
        if close < 0:
            raise SignatureParseError(f"Invalid method descriptor: {name}{descriptor}")
        args = []
        pos = 1
        while pos < close:
            java_type, pos = _read_descriptor(descriptor[:close], pos)
            if java_type.sort is TypeSort.VOID:
                raise SignatureParseError(f"Invalid method descriptor: {name}{descriptor}")
            args.append(java_type)
        return_type = JavaType.from_descriptor(descriptor[close + 1 :])
        return cls(name, tuple(args), return_type)

    @classmethod
    def from_declaration(cls, text: str) -> MethodSignature:
        """Parse a source-form member such as ``substring(int, int)``.

        The return type is always ``void``; only argument types take part in
        matching declared methods.
        """
        open_paren = text.find("(")
        close_paren = text.find(")", open_paren + 1)
        if open_paren < 0 or close_paren < 0 or text[close_paren + 1 :].strip():
            raise SignatureParseError(f"Invalid method signature: {text}")
        name = text[:open_paren].strip()
        if not name:
            raise SignatureParseError(f"Invalid method signature (method name missing): {text}")
        if not (_is_class_name(name) and "." not in name and "/" not in name) and name not in (
            "<init>",
            "<clinit>",
        ):
            raise SignatureParseError(f"Invalid method signature: {text}")
        params = text[open_paren + 1 : close_paren].strip()
        args: list[JavaType] = []
        if params:
            for param in params.split(","):
                java_type = JavaType.from_source_name(param)
                if java_type.sort is TypeSort.VOID:
                    raise SignatureParseError(f"Invalid method signature: {text}")
                args.append(java_type)
        return cls(name, tuple(args))

    @classmethod
    def parse(cls, text: str) -> MethodSignature:
        """Parse either ``length()I`` (JVM form) or ``length()`` (source form).

        Text with something after ``)`` is read as a JVM descriptor; anything
        else as a source declaration. JVM form needs its return type:
        ``exit(I)`` is rejected rather than read as a parameter of class ``I``.
        """
        text = text.strip()
        close_paren = text.find(")")
        open_paren = text.find("(")
        if 0 < open_paren < close_paren and text[close_paren + 1 :]:
            return cls.from_descriptor(text[:open_paren], text[open_paren:])
        if 0 < open_paren < close_paren and _DESCRIPTOR_ARGUMENTS.fullmatch(
            text[open_paren + 1 : close_paren]
        ):
            raise SignatureParseError(f"JVM method descriptor is missing its return type: {text}")
        return cls.from_declaration(text)
