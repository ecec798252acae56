"""Resource exceptions: catalog lookup and signature text I/O."""

from typing import Optional

from .base import SigwardenError


class CatalogResourceError(SigwardenError):
    """Raised when signature text cannot be read."""

    def __init__(self, name: str, reason: str):
        super().__init__(
            f"Cannot read API signatures: {name}",
            details={"name": name, "reason": reason},
        )
        self.name = name
        self.reason = reason


class CatalogNotFoundError(CatalogResourceError):
    """Raised when no store provides the requested bundled catalog."""

    def __init__(self, name: str, searched: Optional[list[str]] = None):
        SigwardenError.__init__(
            self,
            f"Bundled signatures resource not found: {name}",
            details={"searched": ", ".join(searched)} if searched else None,
        )
        self.name = name
        self.reason = "not found"
        self.searched = searched or []
