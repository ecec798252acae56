"""Bundled catalog names and the stores that serve catalog text.

Bundled catalogs are addressed by name (``jdk-unsafe-1.8``,
``jdk-system-out``). JDK versions have two spellings for releases up to 8
(``1.8`` and ``8``); names are normalized so that both reach the same
resource:

    jdk-unsafe-8    -> jdk-unsafe-1.8
    jdk-unsafe-1.8  -> jdk-unsafe-1.8
    jdk-unsafe-9.0  -> jdk-unsafe-9
    jdk-unsafe-11.2 -> jdk-unsafe-11.2
"""

from __future__ import annotations

import io
import re
from importlib import resources
from pathlib import Path
from typing import BinaryIO, Mapping, Optional, Protocol, Sequence, Union

from ..exceptions import InvalidCatalogNameError
from ..logging_config import get_logger

logger = get_logger(__name__)

NON_PORTABLE_CATALOG = "jdk-nonportable"
JDK_PREFIX = "jdk-"

_CATALOG_NAME = re.compile(r"[A-Za-z0-9\-.]+")
# prefix, major, .minor, any further .x segments
_JDK_VERSIONED = re.compile(r"(jdk-.*?-)(\d+)(\.\d+)?((?:\.\d+)*)")
_HAS_VERSION_SUFFIX = re.compile(r".*?-\d+(\.\d+)*")


def validate_catalog_name(name: str) -> None:
    if not _CATALOG_NAME.fullmatch(name):
        raise InvalidCatalogNameError(name)


def is_unversioned_jdk_name(name: str) -> bool:
    return name.startswith(JDK_PREFIX) and not _HAS_VERSION_SUFFIX.fullmatch(name)


def normalize_catalog_name(name: str, target_version: Optional[str] = None) -> str:
    """Canonicalize the JDK version token of a bundled catalog name.

    When ``target_version`` is given and ``name`` is a ``jdk-*`` name without a
    version, the target is appended first. Names without a version token pass
    through unchanged.

    Raises:
        InvalidCatalogNameError: for names outside ``[A-Za-z0-9.-]`` or with a
            version that is neither a legacy ``1.x`` nor a modern ``N[.M]``
    """
    validate_catalog_name(name)
    if target_version is not None and is_unversioned_jdk_name(name):
        name = f"{name}-{target_version}"
        validate_catalog_name(name)

    m = _JDK_VERSIONED.fullmatch(name)
    if m is None:
        return name
    prefix, major_text, minor_text, extra = m.groups()
    if not extra:
        major = int(major_text)
        minor = int(minor_text[1:]) if minor_text else 0
        if major == 1 and 1 <= minor < 9:
            return f"{prefix}1.{minor}"
        if 1 < major < 9 and minor == 0:
            return f"{prefix}1.{major}"
        if major >= 9 and minor > 0:
            return f"{prefix}{major}.{minor}"
        if major >= 9:
            return f"{prefix}{major}"
    raise InvalidCatalogNameError(name, "JDK version is invalid")


class CatalogStore(Protocol):
    """Source of bundled catalog text, addressed by normalized name."""

    def open(self, name: str) -> Optional[BinaryIO]:
        """Open the catalog as a byte stream, or return None if unknown."""
        ...


class PackageCatalogStore:
    """Catalogs shipped as package data (``<package>/bundled/<name>.txt``)."""

    def __init__(self, package: str = "sigwarden.signatures", directory: str = "bundled"):
        self.package = package
        self.directory = directory

    def open(self, name: str) -> Optional[BinaryIO]:
        resource = resources.files(self.package) / self.directory / f"{name}.txt"
        if not resource.is_file():
            return None
        return resource.open("rb")

    def __repr__(self) -> str:
        return f"PackageCatalogStore({self.package!r}, {self.directory!r})"


class DirectoryCatalogStore:
    """Catalogs stored as ``<root>/<name>.txt`` files."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def open(self, name: str) -> Optional[BinaryIO]:
        path = self.root / f"{name}.txt"
        if not path.is_file():
            return None
        return path.open("rb")

    def __repr__(self) -> str:
        return f"DirectoryCatalogStore({str(self.root)!r})"


class MappingCatalogStore:
    """In-memory catalogs, keyed by name."""

    def __init__(self, catalogs: Mapping[str, str]):
        self.catalogs = dict(catalogs)

    def open(self, name: str) -> Optional[BinaryIO]:
        text = self.catalogs.get(name)
        if text is None:
            return None
        return io.BytesIO(text.encode("utf-8"))

    def __repr__(self) -> str:
        return f"MappingCatalogStore({sorted(self.catalogs)!r})"


class ChainedCatalogStore:
    """Ask each store in turn; the first one that knows the name wins."""

    def __init__(self, stores: Sequence[CatalogStore]):
        self.stores = list(stores)

    def open(self, name: str) -> Optional[BinaryIO]:
        for store in self.stores:
            stream = store.open(name)
            if stream is not None:
                logger.debug(f"Catalog {name} served by {store!r}")
                return stream
        return None

    def __repr__(self) -> str:
        return f"ChainedCatalogStore({self.stores!r})"
