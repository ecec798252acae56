"""Signature parsing exceptions: grammar, catalog names, unresolvable references."""

from typing import Optional

from .base import SigwardenError


class SignatureParseError(SigwardenError):
    """Raised when signature text cannot be parsed.

    Always fatal to the enclosing parse call. Entries inserted before the
    failure stay in the registry.
    """

    def __init__(self, message: str, line: Optional[str] = None):
        details = {"line": line} if line is not None else None
        super().__init__(message, details=details)
        self.line = line


class InvalidCatalogNameError(SignatureParseError):
    """Raised when a bundled catalog reference is malformed."""

    def __init__(self, name: str, reason: Optional[str] = None):
        if reason:
            message = f"Invalid bundled signature reference ({reason}): {name}"
        else:
            message = f"Invalid bundled signature reference: {name}"
        super().__init__(message)
        self.name = name
        self.reason = reason


class UnresolvableSignatureError(SignatureParseError):
    """Raised under the fail policy when a class or member cannot be resolved."""

    def __init__(self, reason: str, signature: str):
        super().__init__(f"{reason} while parsing signature: {signature}")
        self.reason = reason
        self.signature = signature
