"""Class metadata and the providers that supply it."""

from .models import ClassMetadata
from .provider import InMemorySymbolProvider, SymbolProvider, to_internal_name

__all__ = [
    "ClassMetadata",
    "SymbolProvider",
    "InMemorySymbolProvider",
    "to_internal_name",
]
