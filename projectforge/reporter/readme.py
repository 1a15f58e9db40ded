"""README and setup-instruction builders for the generated project."""

from __future__ import annotations

from typing import Optional, Sequence

from pydantic import BaseModel, Field

from projectforge.analysis.loader import AnalysisExportResult
from projectforge.catalog import ManifestRegistry
from projectforge.models import (
    BaseTemplateManifest,
    EnvVarSpec,
    FeatureManifest,
    IntegrationManifest,
    ProjectConfig,
)
from projectforge.rendering import TemplateRenderer, default_renderer
from projectforge.reporter.package_json import SCRIPTS


class SetupSection(BaseModel):
    """Post-install notes contributed by one integration."""

    name: str
    notes: list[str] = Field(default_factory=list)


def integration_setup_sections(
    integrations: Sequence[IntegrationManifest],
) -> list[SetupSection]:
    """One section per integration that ships post-install notes."""
    return [
        SetupSection(name=manifest.name, notes=list(manifest.post_install))
        for manifest in integrations
        if manifest.post_install
    ]


# ---------------------------------------------------------------------------
# README
# ---------------------------------------------------------------------------


def build_readme(
    config: ProjectConfig,
    registry: ManifestRegistry,
    integrations: Sequence[IntegrationManifest],
    features: Sequence[FeatureManifest],
    env_vars: Sequence[EnvVarSpec],
    renderer: Optional[TemplateRenderer] = None,
    template: Optional[BaseTemplateManifest] = None,
) -> str:
    """Render ``README.md`` for the generated project.

    Args:
        config: The generation request.
        registry: Looks up ``config.template`` when *template* is not given.
        integrations: Manifests actually applied, in selection order.
        features: Resolved feature manifests, dependencies first.
        env_vars: The merged, deduplicated environment variables.
        renderer: Jinja2 renderer holding ``readme/README.md.j2``.
        template: The base template actually applied.  The generator passes
            it so a fallback template is named instead of the requested id.
    """
    renderer = renderer or default_renderer()
    if template is None:
        template = registry.get_base_template(config.template)
    analysis = config.website_analysis

    return renderer.render(
        "readme/README.md.j2",
        {
            "project_name": config.project_name,
            "description": config.description,
            "template_name": template.name if template else config.template,
            "integrations": integrations,
            "features": features,
            "analysis_url": analysis.url if analysis else "",
            "env_vars": env_vars,
            "setup_sections": integration_setup_sections(integrations),
            "branding": config.branding,
            "scripts": SCRIPTS,
        },
    )


# ---------------------------------------------------------------------------
# Setup instructions
# ---------------------------------------------------------------------------


def build_setup_instructions(
    integrations: Sequence[IntegrationManifest],
    feature_ids: Sequence[str],
    analysis_url: Optional[str] = None,
    analysis_result: Optional[AnalysisExportResult] = None,
) -> list[str]:
    """Assemble the ordered setup-instruction lines.

    Order: the analysis block (only when an analysis was applied), each
    integration's ``## <name> Setup`` heading followed by its notes, then the
    selected feature list (only when features were selected).
    """
    lines: list[str] = []

    if analysis_result is not None:
        counts = analysis_result.summary
        lines.extend(
            [
                "## Website Analysis Applied",
                f"- Source: {analysis_url or 'unknown'}",
                f"- Files generated: {counts.total_files}",
                f"  - Feature components: {counts.feature_files}",
                f"  - Style files: {counts.style_files}",
                f"  - Structure files: {counts.structure_files}",
                f"  - Section components: {counts.section_components}",
            ]
        )

    for section in integration_setup_sections(integrations):
        lines.append(f"## {section.name} Setup")
        lines.extend(section.notes)

    if feature_ids:
        lines.append(f"## Selected Features ({len(feature_ids)})")
        lines.extend(f"- {feature_id}" for feature_id in feature_ids)

    return lines
