"""Manifest catalogs: integrations, features, base templates and detected-feature scaffolding."""

from projectforge.catalog.registry import (
    CatalogError,
    ManifestRegistry,
    default_registry,
)

__all__ = [
    "CatalogError",
    "ManifestRegistry",
    "default_registry",
]
