"""Signature language, catalog handling and the forbidden-signature registry."""

from .catalogs import (
    CatalogStore,
    ChainedCatalogStore,
    DirectoryCatalogStore,
    MappingCatalogStore,
    PackageCatalogStore,
    normalize_catalog_name,
)
from .descriptors import JavaType, MethodSignature, TypeSort
from .globs import ClassPatternRule
from .grammar import parse_line
from .models import ClassKey, FieldKey, MethodKey, SignatureRecord
from .registry import SignatureRegistry
from .resolver import Resolution, UnresolvablePolicy, resolve_signature

__all__ = [
    "SignatureRegistry",
    "parse_line",
    "resolve_signature",
    "normalize_catalog_name",
    "Resolution",
    "UnresolvablePolicy",
    "SignatureRecord",
    "ClassKey",
    "FieldKey",
    "MethodKey",
    "ClassPatternRule",
    "JavaType",
    "MethodSignature",
    "TypeSort",
    "CatalogStore",
    "ChainedCatalogStore",
    "DirectoryCatalogStore",
    "MappingCatalogStore",
    "PackageCatalogStore",
]
