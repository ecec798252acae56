"""Resolution of parsed signatures against the symbol universe.

``resolve_signature`` is a pure function of its inputs: it asks the symbol
provider about the record's class and returns either the registry keys to
insert or a description of what could not be found. What happens to an
unresolvable reference (abort, warn, collect) is decided by the caller's
``UnresolvablePolicy``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional

from ..exceptions import ClassNotFoundError, UnresolvableSignatureError
from .models import ClassKey, FieldKey, MethodKey, RegistryKey, SignatureRecord

if TYPE_CHECKING:
    from ..symbols.provider import SymbolProvider


class Unresolved(Enum):
    """What part of a signature could not be found."""

    CLASS = "class"
    METHOD = "method"
    FIELD = "field"


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving one signature record.

    Exactly one of ``keys`` (non-empty) or ``failure`` is set.
    """

    keys: tuple[RegistryKey, ...] = ()
    failure: Optional[Unresolved] = None
    reason: str = ""

    @property
    def resolved(self) -> bool:
        return self.failure is None


def resolve_signature(record: SignatureRecord, provider: SymbolProvider) -> Resolution:
    """Resolve a non-pattern record into registry keys.

    Methods produce one key per matching declaration: covariant overrides
    and bridge methods share name and argument types but differ in return
    type, and each of them is keyed.
    """
    try:
        metadata = provider.resolve_class(record.class_name)
    except ClassNotFoundError as e:
        return Resolution(failure=Unresolved.CLASS, reason=e.message)

    if record.method is not None:
        matches = metadata.find_methods(record.method)
        if not matches:
            return Resolution(failure=Unresolved.METHOD, reason="Method not found")
        return Resolution(keys=tuple(MethodKey(metadata.class_name, m) for m in matches))

    if record.field_name is not None:
        if not metadata.has_field(record.field_name):
            return Resolution(failure=Unresolved.FIELD, reason="Field not found")
        return Resolution(keys=(FieldKey(metadata.class_name, record.field_name),))

    return Resolution(keys=(ClassKey(metadata.class_name),))


class UnresolvablePolicy(Enum):
    """How a parse call treats signatures that do not resolve.

    FAIL aborts the parse, WARN logs and skips the signature, SILENT skips
    it without a word. Under SILENT, missing classes are collected for a
    single summary instead of being reported one by one; missing members
    are always routed through ``report``.
    """

    FAIL = "fail"
    WARN = "warn"
    SILENT = "silent"

    @property
    def collects_missing_classes(self) -> bool:
        return self is UnresolvablePolicy.SILENT

    def report(self, logger: logging.Logger, reason: str, signature: str) -> None:
        if self is UnresolvablePolicy.FAIL:
            raise UnresolvableSignatureError(reason, signature)
        if self is UnresolvablePolicy.WARN:
            logger.warning(f"{reason} while parsing signature: {signature} [signature ignored]")


@dataclass
class MissingClasses:
    """Sorted, duplicate-free names of classes skipped under the silent policy."""

    names: set[str] = field(default_factory=set)

    def add(self, class_name: str) -> None:
        self.names.add(class_name)

    def __len__(self) -> int:
        return len(self.names)

    def __iter__(self):
        return iter(sorted(self.names))

    def summary(self, width: int = 70) -> str:
        """Comma-separated names, cut off once the line reaches ``width`` characters."""
        ordered = sorted(self.names)
        line = ""
        for count, name in enumerate(ordered, start=1):
            line += ("  " if count == 1 else ", ") + name
            if len(line) >= width:
                remaining = len(ordered) - count
                if remaining > 0:
                    line += f",... (and {remaining} more)."
                break
        return line
