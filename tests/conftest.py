"""Shared pytest fixtures for the projectforge test suite.

Provides reusable fixtures for:
- Temporary output and template-body directories
- The packaged manifest registry and Jinja2 renderer
- Sample branding, project configs and website analyses
- A resolver that never touches the network
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from projectforge.catalog import ManifestRegistry, default_registry
from projectforge.models import (
    Branding,
    ProjectConfig,
    WebsiteAnalysis,
)
from projectforge.rendering import TemplateRenderer
from projectforge.scaffolder.resolver import TemplateResolver
from projectforge.scaffolder.sources import PackagedTemplateSource


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_output_dir(tmp_path: Path) -> Path:
    """Temporary directory for generated projects (auto-cleanup)."""
    output_dir = tmp_path / "generated"
    output_dir.mkdir()
    yield output_dir


@pytest.fixture
def tmp_bodies_dir(tmp_path: Path) -> Path:
    """Template-body directory with a single branded body."""
    bodies = tmp_path / "bodies"
    (bodies / "base" / "common").mkdir(parents=True)
    (bodies / "base" / "common" / "layout.tsx").write_text(
        'export const title = "{{projectName}}";\n', encoding="utf-8"
    )
    yield bodies


# ---------------------------------------------------------------------------
# Catalog & rendering
# ---------------------------------------------------------------------------

@pytest.fixture
def registry() -> ManifestRegistry:
    """The registry built from the packaged YAML catalogs."""
    return default_registry()


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


@pytest.fixture
def offline_resolver() -> TemplateResolver:
    """Resolver over the packaged bodies only."""
    return TemplateResolver([PackagedTemplateSource()])


# ---------------------------------------------------------------------------
# Project configuration
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_branding() -> Branding:
    return Branding(
        primary_color="#F97316",
        secondary_color="#0EA5E9",
        font_family="Inter",
    )


@pytest.fixture
def sample_config(sample_branding: Branding) -> ProjectConfig:
    """A SaaS project with auth and payments selected."""
    return ProjectConfig(
        project_name="Acme Cloud",
        description="Billing dashboards for small teams.",
        template="saas",
        integrations={"auth": "supabase", "payments": "stripe"},
        features=["email-registration"],
        branding=sample_branding,
    )


@pytest.fixture
def minimal_config(sample_branding: Branding) -> ProjectConfig:
    """Base template only: no integrations, features or analysis."""
    return ProjectConfig(
        project_name="Bare",
        template="saas",
        branding=sample_branding,
    )


# ---------------------------------------------------------------------------
# Website analysis
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_analysis_data() -> dict[str, Any]:
    """A camelCase analysis record with two pages and a few detected flags."""
    return {
        "url": "https://example.com",
        "timestamp": "2026-01-15T10:00:00Z",
        "features": {
            "auth": {"hasLogin": True, "hasSocialAuth": {"google": True}},
            "ecommerce": {"hasCart": True},
        },
        "visual": {
            "colors": {
                "primary": "#3B82F6",
                "background": "#ffffff",
                "foreground": "#0a0a0a",
            },
            "typography": {"headingFont": "Poppins", "bodyFont": "Inter"},
            "components": {
                "buttons": {"shape": "pill", "style": "filled"},
                "cards": {"shadow": "lg", "rounded": "lg"},
                "inputs": {"style": "outline", "rounded": "md"},
            },
            "darkMode": True,
        },
        "structure": {
            "pages": [
                {
                    "url": "/",
                    "title": "Home",
                    "sections": [
                        {"type": "hero", "order": 0},
                        {"type": "features", "order": 1},
                        {"type": "faq", "order": 2},
                    ],
                },
                {
                    "url": "/pricing",
                    "title": "Pricing",
                    "sections": [
                        {"type": "hero", "order": 0, "variant": "compact"},
                        {"type": "pricing", "order": 1},
                    ],
                },
            ],
            "navigation": [
                {"label": "Home", "href": "/"},
                {"label": "Pricing", "href": "/pricing"},
            ],
            "footer": {
                "columns": [
                    {"title": "Product", "links": [{"label": "Pricing", "href": "/pricing"}]},
                ],
                "bottomLinks": [{"label": "Privacy", "href": "/privacy"}],
            },
        },
    }


@pytest.fixture
def sample_analysis(sample_analysis_data: dict[str, Any]) -> WebsiteAnalysis:
    return WebsiteAnalysis.model_validate(sample_analysis_data)


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """A ProjectConfig JSON file as the configurator UI writes it."""
    path = tmp_path / "project.json"
    path.write_text(
        json.dumps(
            {
                "projectName": "Acme Cloud",
                "description": "Billing dashboards for small teams.",
                "template": "saas",
                "integrations": {"auth": "supabase", "payments": "stripe"},
                "features": ["email-registration"],
                "branding": {"primaryColor": "#F97316"},
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def analysis_file(tmp_path: Path, sample_analysis_data: dict[str, Any]) -> Path:
    path = tmp_path / "analysis.json"
    path.write_text(json.dumps(sample_analysis_data), encoding="utf-8")
    return path
