"""The forbidden-signature registry.

A ``SignatureRegistry`` is populated once per analysis session from bundled
catalogs, signature files and inline strings, and is then queried read-only
by the bytecode scanner:

    registry = SignatureRegistry(provider, config)
    registry.add_bundled_signatures("jdk-unsafe", "1.8")
    registry.parse_signatures_string("java.lang.System#exit(int) @ use a return code")
    registry.check_method("java/lang/System", "exit(I)V")

Population is single-threaded. Concurrent queries are safe only after every
population call has returned.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import IO, TYPE_CHECKING, Optional, Union

from ..config import DEFAULT_CONFIG, RegistryConfig
from ..exceptions import CatalogNotFoundError, CatalogResourceError, SignatureParseError
from ..logging_config import get_logger
from .catalogs import (
    NON_PORTABLE_CATALOG,
    CatalogStore,
    ChainedCatalogStore,
    DirectoryCatalogStore,
    PackageCatalogStore,
    is_unversioned_jdk_name,
    normalize_catalog_name,
    validate_catalog_name,
)
from .descriptors import JavaType, MethodSignature, TypeSort
from .globs import ClassPatternRule
from .grammar import is_content_line, parse_line
from .models import (
    ClassKey,
    DefaultMessage,
    FieldKey,
    IgnoreUnresolvable,
    IncludeBundled,
    MethodKey,
    RegistryKey,
    SignatureRecord,
)
from .resolver import MissingClasses, UnresolvablePolicy, Unresolved, resolve_signature

if TYPE_CHECKING:
    from ..symbols.provider import SymbolProvider


@dataclass
class _ParseState:
    """Mutable state of one catalog/file/string being parsed."""

    policy: UnresolvablePolicy
    missing_classes: MissingClasses
    bundled: bool
    default_message: Optional[str] = None


def default_catalog_store(config: RegistryConfig) -> CatalogStore:
    """Configured catalog directories first, then the catalogs shipped with sigwarden."""
    stores: list[CatalogStore] = [DirectoryCatalogStore(d) for d in config.catalog_dirs]
    stores.append(PackageCatalogStore())
    return ChainedCatalogStore(stores)


class SignatureRegistry:
    """Index of forbidden classes, methods and fields."""

    def __init__(
        self,
        provider: SymbolProvider,
        config: Optional[RegistryConfig] = None,
        catalog_store: Optional[CatalogStore] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.provider = provider
        self.config = config or DEFAULT_CONFIG
        self.catalog_store = catalog_store or default_catalog_store(self.config)
        self.logger = logger or get_logger(__name__)

        self._signatures: dict[RegistryKey, str] = {}
        # (class, name, argument types) -> printout, for queries without a return type
        self._methods_by_arguments: dict[tuple, str] = {}
        # insertion ordered, duplicate free
        self._class_patterns: dict[ClassPatternRule, None] = {}
        self._forbid_non_portable_runtime = False
        self._catalogs_in_progress: list[str] = []

    # ------------------------------------------------------------------
    # Population
    # ------------------------------------------------------------------

    def add_bundled_signatures(self, name: str, jdk_target_version: Optional[str] = None) -> None:
        """Read a bundled catalog, following its ``@includeBundled`` directives.

        ``jdk_target_version`` (or the configured default) expands
        un-versioned ``jdk-*`` names, e.g. ``jdk-unsafe`` -> ``jdk-unsafe-1.8``.

        Raises:
            SignatureParseError: malformed catalog content or name
            CatalogResourceError: catalog not found or unreadable
        """
        missing = MissingClasses()
        target = jdk_target_version or self.config.jdk_target_version
        self._add_bundled_signatures(name, target, True, missing)
        self._report_missing_classes(missing)

    def parse_signatures_stream(self, stream: IO, name: str) -> None:
        """Read signatures from a binary (UTF-8) or text stream; the stream is closed."""
        self.logger.info(f"Reading API signatures: {name}")
        missing = MissingClasses()
        self._parse_stream(stream, name, False, missing)
        self._report_missing_classes(missing)

    def parse_signatures_file(self, path: Union[str, Path]) -> None:
        """Read signatures from a file on disk."""
        path = Path(path)
        try:
            stream = open(path, "rb")
        except OSError as e:
            raise CatalogResourceError(str(path), str(e)) from e
        self.parse_signatures_stream(stream, str(path))

    def parse_signatures_string(self, signatures: str) -> None:
        """Read signatures from a string."""
        self.logger.info("Reading inline API signatures...")
        missing = MissingClasses()
        self._parse_stream(io.StringIO(signatures), "<inline>", False, missing)
        self._report_missing_classes(missing)

    def _add_bundled_signatures(
        self, name: str, target_version: Optional[str], logging_on: bool, missing: MissingClasses
    ) -> None:
        validate_catalog_name(name)
        if name == NON_PORTABLE_CATALOG:
            if logging_on:
                self.logger.info(f"Reading bundled API signatures: {name}")
            self._forbid_non_portable_runtime = True
            return

        resolved_name = normalize_catalog_name(name)
        stream = self.catalog_store.open(resolved_name)
        if stream is None and target_version is not None and is_unversioned_jdk_name(name):
            resolved_name = normalize_catalog_name(name, target_version)
            stream = self.catalog_store.open(resolved_name)
        if stream is None:
            raise CatalogNotFoundError(resolved_name, searched=[repr(self.catalog_store)])

        if resolved_name in self._catalogs_in_progress:
            stream.close()
            chain = " -> ".join(self._catalogs_in_progress + [resolved_name])
            raise SignatureParseError(f"Recursive bundled signature inclusion: {chain}")

        if logging_on:
            self.logger.info(f"Reading bundled API signatures: {resolved_name}")
        self._catalogs_in_progress.append(resolved_name)
        try:
            self._parse_stream(stream, resolved_name, True, missing)
        finally:
            self._catalogs_in_progress.pop()

    def _parse_stream(self, stream: IO, name: str, bundled: bool, missing: MissingClasses) -> None:
        if isinstance(stream, io.TextIOBase):
            reader = stream
        else:
            reader = io.TextIOWrapper(stream, encoding="utf-8")
        state = _ParseState(
            policy=UnresolvablePolicy.FAIL
            if self.config.fail_on_unresolvable
            else UnresolvablePolicy.WARN,
            missing_classes=missing,
            bundled=bundled,
        )
        with reader:
            try:
                for raw_line in reader:
                    self._parse_line(raw_line.strip(), state)
            except (OSError, UnicodeDecodeError) as e:
                raise CatalogResourceError(name, str(e)) from e

    def _parse_line(self, line: str, state: _ParseState) -> None:
        if not is_content_line(line):
            return
        parsed = parse_line(line, state.default_message)
        if isinstance(parsed, SignatureRecord):
            self._add_signature(parsed, state)
            return

        self.logger.debug(f"Directive: {line}")
        if isinstance(parsed, IncludeBundled):
            if not state.bundled:
                raise SignatureParseError(f"Invalid line in signature file: {line}")
            self._add_bundled_signatures(parsed.name, None, False, state.missing_classes)
        elif isinstance(parsed, DefaultMessage):
            state.default_message = parsed.message
        elif isinstance(parsed, IgnoreUnresolvable):
            # only bundled catalogs may silence unresolvable references
            state.policy = UnresolvablePolicy.SILENT if state.bundled else UnresolvablePolicy.WARN

    def _add_signature(self, record: SignatureRecord, state: _ParseState) -> None:
        if record.is_pattern:
            self._class_patterns[ClassPatternRule(record.class_name, record.message)] = None
            self.logger.debug(f"Class pattern: {record.class_name}")
            return

        resolution = resolve_signature(record, self.provider)
        if not resolution.resolved:
            if resolution.failure is Unresolved.CLASS and state.policy.collects_missing_classes:
                state.missing_classes.add(record.class_name)
                self.logger.debug(f"Class not found, deferred to summary: {record.signature}")
            else:
                state.policy.report(self.logger, resolution.reason, record.signature)
            return

        printout = record.printout
        for key in resolution.keys:
            self._signatures[key] = printout
            if isinstance(key, MethodKey):
                self._methods_by_arguments[key.argument_key] = printout
        self.logger.debug(f"Forbidden: {record.signature} ({len(resolution.keys)} key(s))")

    def _report_missing_classes(self, missing: MissingClasses) -> None:
        if not missing or not self.config.log_missing_signatures:
            return
        self.logger.warning(
            "Some signatures were ignored because the following classes were not found on classpath:"
        )
        self.logger.warning(missing.summary(self.config.missing_summary_width))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def has_no_signatures(self) -> bool:
        return not (self._signatures or self._class_patterns or self._forbid_non_portable_runtime)

    def is_non_portable_runtime_forbidden(self) -> bool:
        return self._forbid_non_portable_runtime

    def check_type(self, java_type: Union[JavaType, str]) -> Optional[str]:
        """Return the printout if the type is forbidden, else None.

        Accepts a ``JavaType``, a descriptor (``Ljava/lang/String;``) or a class
        name in binary or internal form. Only object types can be forbidden.
        """
        if isinstance(java_type, str):
            java_type = _to_java_type(java_type)
        if java_type.sort is not TypeSort.OBJECT:
            return None
        printout = self._signatures.get(ClassKey(java_type.internal_name))
        if printout is not None:
            return printout
        binary_class_name = java_type.class_name
        for rule in self._class_patterns:
            if rule.matches(binary_class_name):
                return rule.get_printout(binary_class_name)
        return None

    def check_method(
        self, internal_class_name: str, method: Union[MethodSignature, str]
    ) -> Optional[str]:
        """Return the printout if the method is forbidden, else None.

        ``method`` is a ``MethodSignature`` or text: JVM form (``length()I``)
        matches the exact declaration, source form (``length()``) matches on
        name and argument types only. Descriptor arguments without a return
        type (``exit(I)``) raise ``SignatureParseError``.
        """
        if isinstance(method, str):
            text = method.strip()
            method = MethodSignature.parse(text)
            if text.endswith(")"):
                return self._methods_by_arguments.get(
                    (internal_class_name, method.name, method.argument_types)
                )
        return self._signatures.get(MethodKey(internal_class_name, method))

    def check_field(self, internal_class_name: str, field_name: str) -> Optional[str]:
        return self._signatures.get(FieldKey(internal_class_name, field_name))

    @property
    def class_patterns(self) -> list[ClassPatternRule]:
        return list(self._class_patterns)

    def __len__(self) -> int:
        return len(self._signatures) + len(self._class_patterns)

    def __repr__(self) -> str:
        return (
            f"SignatureRegistry(signatures={len(self._signatures)}, "
            f"patterns={len(self._class_patterns)}, "
            f"non_portable={self._forbid_non_portable_runtime})"
        )


def _to_java_type(text: str) -> JavaType:
    text = text.strip()
    if text.startswith("[") or (text.startswith("L") and text.endswith(";")):
        return JavaType.from_descriptor(text)
    if len(text) == 1 and text in "VZCBSIFJD":
        return JavaType(text)
    if text.endswith("[]") or text.endswith("..."):
        return JavaType.from_source_name(text)
    return JavaType.object_type(text)
