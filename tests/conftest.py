"""Shared test fixtures for sigwarden tests."""

import logging

import pytest

from sigwarden.config import RegistryConfig
from sigwarden.signatures.catalogs import MappingCatalogStore
from sigwarden.signatures.registry import SignatureRegistry
from sigwarden.symbols import InMemorySymbolProvider

# A small JDK-like universe: declared members only, inheritance is resolved
# by the provider.
JDK_CLASSES = {
    "java/lang/Object": {
        "methods": [
            "<init>()V",
            "toString()Ljava/lang/String;",
            "hashCode()I",
            "equals(Ljava/lang/Object;)Z",
        ],
    },
    "java/lang/CharSequence": {
        "methods": ["length()I", "charAt(I)C"],
    },
    "java/lang/String": {
        "superclass": "java/lang/Object",
        "interfaces": ["java/lang/CharSequence"],
        "methods": [
            "<init>([B)V",
            "length()I",
            "toLowerCase()Ljava/lang/String;",
            "toUpperCase()Ljava/lang/String;",
            "getBytes()[B",
            "substring(II)Ljava/lang/String;",
            "format(Ljava/lang/String;[Ljava/lang/Object;)Ljava/lang/String;",
        ],
        "fields": ["CASE_INSENSITIVE_ORDER"],
    },
    "java/lang/AbstractStringBuilder": {
        "superclass": "java/lang/Object",
        "methods": ["append(Ljava/lang/String;)Ljava/lang/AbstractStringBuilder;"],
    },
    "java/lang/StringBuilder": {
        "superclass": "java/lang/AbstractStringBuilder",
        "interfaces": ["java/lang/CharSequence"],
        "methods": [
            "append(Ljava/lang/String;)Ljava/lang/StringBuilder;",
            "append(I)Ljava/lang/StringBuilder;",
        ],
    },
    "java/lang/System": {
        "superclass": "java/lang/Object",
        "methods": ["exit(I)V", "currentTimeMillis()J"],
        "fields": ["out", "err", "in"],
    },
    "java/lang/Throwable": {
        "superclass": "java/lang/Object",
        "methods": ["printStackTrace()V", "getMessage()Ljava/lang/String;"],
    },
    "java/util/ArrayList": {
        "superclass": "java/lang/Object",
        "methods": ["add(Ljava/lang/Object;)Z", "size()I"],
    },
    "java/io/FileReader": {
        "superclass": "java/lang/Object",
        "methods": ["<init>(Ljava/lang/String;)V"],
    },
}


@pytest.fixture
def provider():
    """In-memory symbol provider over JDK_CLASSES."""
    return InMemorySymbolProvider.from_mapping(JDK_CLASSES)


@pytest.fixture
def warn_config():
    """Unresolvable references are logged and skipped."""
    return RegistryConfig(fail_on_unresolvable=False)


@pytest.fixture
def fail_config():
    """Unresolvable references abort the parse."""
    return RegistryConfig(fail_on_unresolvable=True)


@pytest.fixture
def catalogs():
    """Bundled catalogs served from memory."""
    return MappingCatalogStore(
        {
            "jdk-unsafe-1.8": (
                "@defaultMessage Uses default locale\n"
                "java.lang.String#toLowerCase()\n"
                "java.lang.String#toUpperCase()\n"
            ),
            "jdk-unsafe-9": (
                "@includeBundled jdk-unsafe-1.8\n"
                "java.lang.String#getBytes() @ Uses default charset\n"
            ),
            "jdk-unsafe-11": "@includeBundled jdk-unsafe-9\n",
            "jdk-missing": (
                "@ignoreUnresolvable\n"
                "com.example.Gone\n"
                "com.example.AlsoGone#run()\n"
                "java.lang.System#exit(int)\n"
            ),
            "loop-a": "@includeBundled loop-b\n",
            "loop-b": "@includeBundled loop-a\n",
            "self-include": "java.lang.System\n@includeBundled self-include\n",
        }
    )


@pytest.fixture
def registry(provider, warn_config, catalogs):
    """Registry in warn mode over the in-memory universe and catalogs."""
    return SignatureRegistry(provider, warn_config, catalog_store=catalogs)


@pytest.fixture
def caplog_sigwarden(caplog):
    """caplog capturing sigwarden diagnostics from INFO up."""
    caplog.set_level(logging.INFO, logger="sigwarden")
    return caplog
