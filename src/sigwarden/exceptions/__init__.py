"""Exception hierarchy for sigwarden."""

from .base import SigwardenError
from .config import ConfigFileError, ConfigurationError, InvalidConfigError
from .parsing import (
    InvalidCatalogNameError,
    SignatureParseError,
    UnresolvableSignatureError,
)
from .resources import CatalogNotFoundError, CatalogResourceError
from .symbols import ClassNotFoundError

__all__ = [
    "SigwardenError",
    "SignatureParseError",
    "InvalidCatalogNameError",
    "UnresolvableSignatureError",
    "CatalogResourceError",
    "CatalogNotFoundError",
    "ClassNotFoundError",
    "ConfigurationError",
    "InvalidConfigError",
    "ConfigFileError",
]
