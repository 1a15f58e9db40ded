"""Manifest registry backed by the packaged YAML catalogs.

The registry is pure data: integration manifests keyed by
``(category, provider_id)``, feature manifests keyed by id, base-template
manifests keyed by id, and the detected-feature scaffolding table keyed by
analysis flag path.  It is built once (see :func:`default_registry`) and
never mutated; :meth:`ManifestRegistry.extended` returns a new registry
instead.

Usage::

    from projectforge.catalog import default_registry

    registry = default_registry()
    stripe = registry.lookup("payments", "stripe")
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Mapping

import yaml
from pydantic import ValidationError

from projectforge.models import (
    BaseTemplateManifest,
    DependencyBlock,
    DetectedFeatureTemplate,
    FeatureCategory,
    FeatureManifest,
    IntegrationManifest,
)

_DEFAULT_CATALOG_DIR = Path(__file__).parent

INTEGRATIONS_FILE = "integrations.yaml"
FEATURES_FILE = "features.yaml"
TEMPLATES_FILE = "templates.yaml"
DETECTED_FEATURES_FILE = "detected_features.yaml"


class CatalogError(Exception):
    """Raised when a catalog file is missing or malformed, or an extension clashes."""


# ---------------------------------------------------------------------------
# ManifestRegistry
# ---------------------------------------------------------------------------


class ManifestRegistry:
    """Read-only lookup over integration, feature and base-template manifests."""

    def __init__(
        self,
        integrations: Iterable[IntegrationManifest] = (),
        features: Iterable[FeatureManifest] = (),
        templates: Iterable[BaseTemplateManifest] = (),
        detected_features: Mapping[str, DetectedFeatureTemplate] | None = None,
        feature_categories: Iterable[FeatureCategory] = (),
    ) -> None:
        integration_map: dict[str, dict[str, IntegrationManifest]] = {}
        for manifest in integrations:
            providers = integration_map.setdefault(manifest.category, {})
            if manifest.id in providers:
                raise CatalogError(
                    f"Duplicate integration: {manifest.category}/{manifest.id}"
                )
            providers[manifest.id] = manifest

        self._integrations = MappingProxyType(
            {cat: MappingProxyType(providers) for cat, providers in integration_map.items()}
        )
        self._features = MappingProxyType(_index_unique(features, "feature"))
        self._templates = MappingProxyType(_index_unique(templates, "base template"))
        self._detected = MappingProxyType(dict(detected_features or {}))
        self._feature_categories = MappingProxyType(
            _index_unique(feature_categories, "feature category")
        )

    # -- Construction ------------------------------------------------------

    @classmethod
    def from_directory(cls, catalog_dir: str | Path | None = None) -> "ManifestRegistry":
        """Load every catalog file from *catalog_dir*.

        Args:
            catalog_dir: Directory holding the four catalog YAML files.
                Defaults to the catalogs packaged with projectforge.

        Returns:
            A fully populated registry.

        Raises:
            CatalogError: If a file is missing, is not valid YAML, or an
                entry fails validation.
        """
        root = Path(catalog_dir) if catalog_dir is not None else _DEFAULT_CATALOG_DIR

        integrations = _parse_integrations(_load_yaml(root / INTEGRATIONS_FILE))
        categories, features = _parse_features(_load_yaml(root / FEATURES_FILE))
        templates = _parse_templates(_load_yaml(root / TEMPLATES_FILE))
        detected = _parse_detected(_load_yaml(root / DETECTED_FEATURES_FILE))

        return cls(
            integrations=integrations,
            features=features,
            templates=templates,
            detected_features=detected,
            feature_categories=categories,
        )

    def extended(
        self,
        integrations: Iterable[IntegrationManifest] = (),
        features: Iterable[FeatureManifest] = (),
        templates: Iterable[BaseTemplateManifest] = (),
    ) -> "ManifestRegistry":
        """Return a new registry with extra manifests appended.

        Existing entries are never replaced: registering a key that is
        already present raises :class:`CatalogError`.
        """
        return ManifestRegistry(
            integrations=[*self.all_integrations(), *integrations],
            features=[*self._features.values(), *features],
            templates=[*self._templates.values(), *templates],
            detected_features=self._detected,
            feature_categories=self._feature_categories.values(),
        )

    # -- Lookups -----------------------------------------------------------

    def lookup(self, category: str, provider_id: str) -> IntegrationManifest | None:
        """Return the integration manifest for ``category/provider_id`` or ``None``."""
        return self._integrations.get(category, {}).get(provider_id)

    def get_feature(self, feature_id: str) -> FeatureManifest | None:
        return self._features.get(feature_id)

    def get_base_template(self, template_id: str) -> BaseTemplateManifest | None:
        return self._templates.get(template_id)

    def detected_feature(self, flag_path: str) -> DetectedFeatureTemplate | None:
        """Return the scaffolding for an analysis flag such as ``auth.hasLogin``."""
        return self._detected.get(flag_path)

    # -- Listings ----------------------------------------------------------

    def integration_categories(self) -> list[str]:
        return list(self._integrations)

    def list_integrations(self, category: str) -> list[IntegrationManifest]:
        return list(self._integrations.get(category, {}).values())

    def all_integrations(self) -> list[IntegrationManifest]:
        return [m for providers in self._integrations.values() for m in providers.values()]

    def list_features(self, category: str | None = None) -> list[FeatureManifest]:
        """Return features in catalog order, optionally filtered by category."""
        return [
            f for f in self._features.values()
            if category is None or f.category == category
        ]

    def feature_categories(self) -> list[FeatureCategory]:
        return list(self._feature_categories.values())

    def list_base_templates(self) -> list[BaseTemplateManifest]:
        return list(self._templates.values())

    def detected_flags(self) -> list[str]:
        return list(self._detected)

    def __repr__(self) -> str:
        return (
            f"ManifestRegistry(integrations={len(self.all_integrations())}, "
            f"features={len(self._features)}, templates={len(self._templates)})"
        )


@lru_cache(maxsize=1)
def default_registry() -> ManifestRegistry:
    """Return the process-wide registry built from the packaged catalogs."""
    return ManifestRegistry.from_directory()


# ---------------------------------------------------------------------------
# Catalog parsing
# ---------------------------------------------------------------------------


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.is_file():
        raise CatalogError(f"Catalog file not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise CatalogError(f"Invalid YAML in {path.name}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise CatalogError(f"{path.name} must contain a mapping at the top level")
    return data


def _parse_integrations(raw: dict[str, Any]) -> list[IntegrationManifest]:
    manifests: list[IntegrationManifest] = []
    for category, providers in raw.items():
        for provider_id, entry in (providers or {}).items():
            data = {"id": provider_id, "category": category, **(entry or {})}
            manifests.append(_validate(IntegrationManifest, data, f"{category}/{provider_id}"))
    return manifests


def _parse_features(
    raw: dict[str, Any],
) -> tuple[list[FeatureCategory], list[FeatureManifest]]:
    categories = [
        _validate(FeatureCategory, {"id": cat_id, **(entry or {})}, f"category {cat_id}")
        for cat_id, entry in (raw.get("categories") or {}).items()
    ]

    features: list[FeatureManifest] = []
    for entry in raw.get("features") or []:
        feature_id = entry.get("id", "?")
        category = entry.get("category", "")
        data = dict(entry)
        data["files"] = [
            _expand_file(item, f"features/{category}/{feature_id}")
            for item in entry.get("files") or []
        ]
        features.append(_validate(FeatureManifest, data, f"feature {feature_id}"))
    return categories, features


def _parse_templates(raw: dict[str, Any]) -> list[BaseTemplateManifest]:
    common = raw.get("common") or {}
    common_files = list(common.get("files") or [])
    common_deps = _validate(DependencyBlock, common.get("dependencies") or {}, "common")

    templates: list[BaseTemplateManifest] = []
    for entry in raw.get("templates") or []:
        template_id = entry.get("id", "?")
        own_deps = _validate(
            DependencyBlock, entry.get("dependencies") or {}, f"template {template_id}"
        )
        data = dict(entry)
        data["files"] = [*common_files, *(entry.get("files") or [])]
        data["dependencies"] = DependencyBlock(
            npm={**common_deps.npm, **own_deps.npm},
            npm_dev={**common_deps.npm_dev, **own_deps.npm_dev},
            env=[*common_deps.env, *own_deps.env],
        )
        templates.append(_validate(BaseTemplateManifest, data, f"template {template_id}"))
    return templates


def _parse_detected(raw: dict[str, Any]) -> dict[str, DetectedFeatureTemplate]:
    return {
        flag: _validate(DetectedFeatureTemplate, entry or {}, f"detected feature {flag}")
        for flag, entry in raw.items()
    }


def _expand_file(item: Any, template_prefix: str) -> Any:
    """Expand the ``"path"`` shorthand into a full file descriptor mapping."""
    if isinstance(item, str):
        return {"path": item, "template": f"{template_prefix}/{item}"}
    return item


def _validate(model: type, data: dict[str, Any], label: str) -> Any:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise CatalogError(f"Invalid catalog entry {label}: {exc}") from exc


def _index_unique(items: Iterable[Any], kind: str) -> dict[str, Any]:
    index: dict[str, Any] = {}
    for item in items:
        if item.id in index:
            raise CatalogError(f"Duplicate {kind}: {item.id}")
        index[item.id] = item
    return index
