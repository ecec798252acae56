"""Symbol-metadata providers.

The registry never loads class files itself. It asks a ``SymbolProvider``
what a class looks like; anything that implements ``resolve_class`` works,
e.g. a provider backed by a classpath scanner or by a JSON manifest.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Protocol, Union

from ..exceptions import ClassNotFoundError, ConfigurationError
from ..logging_config import get_logger
from ..signatures.descriptors import MethodSignature
from .models import ClassMetadata

logger = get_logger(__name__)


def to_internal_name(class_name: str) -> str:
    return class_name.replace(".", "/")


class SymbolProvider(Protocol):
    """Answers "which methods and fields does class X have"."""

    def resolve_class(self, class_name: str) -> ClassMetadata:
        """Return metadata including inherited members.

        Accepts binary (``java.lang.String``) or internal (``java/lang/String``)
        names.

        Raises:
            ClassNotFoundError: if the class is unknown
        """
        ...


class InMemorySymbolProvider:
    """Provider over a fixed set of declared classes.

    Classes are registered with their declared members only. ``resolve_class``
    adds everything inherited through the superclass and interface chain.
    Supertypes that were never registered are skipped.
    """

    def __init__(self, classes: Iterable[ClassMetadata] = ()):
        self._declared: dict[str, ClassMetadata] = {}
        self._resolved: dict[str, ClassMetadata] = {}
        for metadata in classes:
            self.register(metadata)

    def register(self, metadata: ClassMetadata) -> None:
        self._declared[metadata.class_name] = metadata
        self._resolved.clear()

    def declare(
        self,
        class_name: str,
        methods: Iterable[Union[str, MethodSignature]] = (),
        fields: Iterable[str] = (),
        superclass: Optional[str] = None,
        interfaces: Iterable[str] = (),
    ) -> ClassMetadata:
        """Register a class from plain values; methods may be strings like ``length()I``."""
        metadata = ClassMetadata(
            class_name=to_internal_name(class_name),
            methods=frozenset(
                m if isinstance(m, MethodSignature) else MethodSignature.parse(m) for m in methods
            ),
            fields=frozenset(fields),
            superclass=to_internal_name(superclass) if superclass else None,
            interfaces=tuple(to_internal_name(i) for i in interfaces),
        )
        self.register(metadata)
        return metadata

    def __contains__(self, class_name: str) -> bool:
        return to_internal_name(class_name) in self._declared

    def __len__(self) -> int:
        return len(self._declared)

    def resolve_class(self, class_name: str) -> ClassMetadata:
        internal = to_internal_name(class_name)
        cached = self._resolved.get(internal)
        if cached is not None:
            return cached
        declared = self._declared.get(internal)
        if declared is None:
            raise ClassNotFoundError(class_name)

        methods: set[MethodSignature] = set()
        fields: set[str] = set()
        seen: set[str] = set()
        pending = [internal]
        while pending:
            name = pending.pop()
            if name in seen:
                continue
            seen.add(name)
            current = self._declared.get(name)
            if current is None:
                logger.debug(f"Supertype {name} of {internal} is unknown, skipping its members")
                continue
            methods.update(current.methods)
            fields.update(current.fields)
            if current.superclass:
                pending.append(current.superclass)
            pending.extend(current.interfaces)

        resolved = ClassMetadata(
            class_name=internal,
            methods=frozenset(methods),
            fields=frozenset(fields),
            superclass=declared.superclass,
            interfaces=declared.interfaces,
        )
        self._resolved[internal] = resolved
        return resolved

    @classmethod
    def from_mapping(cls, classes: Mapping[str, Mapping[str, Any]]) -> InMemorySymbolProvider:
        """Build from a manifest mapping.

        Example:
            {
                "java/lang/String": {
                    "superclass": "java/lang/Object",
                    "interfaces": ["java/lang/CharSequence"],
                    "methods": ["length()I", "charAt(I)C"],
                    "fields": ["CASE_INSENSITIVE_ORDER"]
                }
            }
        """
        provider = cls()
        for class_name, spec in classes.items():
            provider.declare(
                class_name,
                methods=spec.get("methods", ()),
                fields=spec.get("fields", ()),
                superclass=spec.get("superclass"),
                interfaces=spec.get("interfaces", ()),
            )
        return provider

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> InMemorySymbolProvider:
        """Load a class manifest written as JSON (see ``from_mapping``)."""
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(
                f"Cannot load class manifest: {path}", details={"reason": str(e)}
            ) from e
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Cannot load class manifest: {path}",
                details={"reason": "top level must be an object"},
            )
        provider = cls.from_mapping(data)
        logger.debug(f"Loaded {len(provider)} classes from {path}")
        return provider
