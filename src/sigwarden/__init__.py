"""
sigwarden - forbidden API signature registry

Parses signature files that list forbidden classes, methods and fields,
resolves them against the analyzed program's symbols and answers
"is this usage forbidden?" for a bytecode scanner.
"""

__version__ = "0.1.0"

from .config import RegistryConfig, load_config
from .signatures import SignatureRegistry
from .symbols import ClassMetadata, InMemorySymbolProvider, SymbolProvider

__all__ = [
    "SignatureRegistry",  # Main entry point
    "RegistryConfig",
    "load_config",
    "SymbolProvider",
    "InMemorySymbolProvider",
    "ClassMetadata",
]
