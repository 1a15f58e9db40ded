"""Run every analysis sub-generator and collect their output.

:func:`process_analysis` is what the project generator calls when a request
carries a website analysis.  The sub-generators run in a fixed order
(features, style, structure, sections) and their file lists are concatenated
in that order; precedence against the rest of the project is settled later
by the merge engine.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from projectforge.analysis.feature_gen import (
    collect_detected_features,
    generate_feature_files,
)
from projectforge.analysis.section_gen import generate_section_components
from projectforge.analysis.structure_gen import generate_structure_files
from projectforge.analysis.style_gen import generate_style_files
from projectforge.catalog import ManifestRegistry, default_registry
from projectforge.models import GeneratedFile, SectionType, WebsiteAnalysis
from projectforge.rendering import TemplateRenderer, default_renderer


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------


class AnalysisFileCounts(BaseModel):
    total_files: int = 0
    feature_files: int = 0
    style_files: int = 0
    structure_files: int = 0
    section_components: int = 0


class AnalysisExportResult(BaseModel):
    """Files, packages and env var names derived from one analysis."""

    files: list[GeneratedFile] = Field(default_factory=list)
    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(default_factory=dict)
    env_vars: list[str] = Field(default_factory=list)
    summary: AnalysisFileCounts = Field(default_factory=AnalysisFileCounts)


class FeatureTemplateSummary(BaseModel):
    total_files: int = 0
    by_category: dict[str, int] = Field(default_factory=dict)
    dependencies: list[str] = Field(default_factory=list)
    env_vars_required: list[str] = Field(default_factory=list)


class AnalysisSummary(BaseModel):
    """Preview of what an analysis would contribute, without rendering anything."""

    features: FeatureTemplateSummary = Field(default_factory=FeatureTemplateSummary)
    sections: list[SectionType] = Field(default_factory=list)
    pages: list[str] = Field(default_factory=list)
    colors: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def process_analysis(
    analysis: WebsiteAnalysis,
    project_name: str,
    registry: Optional[ManifestRegistry] = None,
    renderer: Optional[TemplateRenderer] = None,
) -> AnalysisExportResult:
    """Generate every analysis-derived file for *project_name*.

    Args:
        analysis: The analysed reference site.
        project_name: Interpolated into every generated header and title.
        registry: Source of the detected-feature table.  Defaults to the
            packaged catalog.
        renderer: Jinja2 renderer for the stub and structure templates.

    Returns:
        An :class:`AnalysisExportResult` whose ``files`` are ordered feature
        stubs, style files, structure files, then section stubs.
    """
    registry = registry or default_registry()
    renderer = renderer or default_renderer()

    detected = collect_detected_features(analysis.features, registry)
    feature_files = generate_feature_files(detected.files, project_name, renderer)
    style_files = generate_style_files(analysis.visual, renderer)
    structure_files = generate_structure_files(analysis.structure, project_name, renderer)
    section_files = generate_section_components(analysis.structure, project_name, renderer)

    files = [*feature_files, *style_files, *structure_files, *section_files]

    return AnalysisExportResult(
        files=files,
        dependencies=detected.dependencies,
        dev_dependencies=detected.dev_dependencies,
        env_vars=detected.env_vars,
        summary=AnalysisFileCounts(
            total_files=len(files),
            feature_files=len(feature_files),
            style_files=len(style_files),
            structure_files=len(structure_files),
            section_components=len(section_files),
        ),
    )


def analysis_summary(
    analysis: WebsiteAnalysis, registry: Optional[ManifestRegistry] = None
) -> AnalysisSummary:
    """Summarise detected features, sections, pages and colours of *analysis*."""
    registry = registry or default_registry()
    detected = collect_detected_features(analysis.features, registry)

    by_category: dict[str, int] = {}
    for path in detected.files:
        category = path.split("/", 1)[0]
        by_category[category] = by_category.get(category, 0) + 1

    sections: list[SectionType] = []
    for page in analysis.structure.pages:
        for section in page.sections:
            if section.type not in sections:
                sections.append(section.type)

    colors = [
        value
        for value in analysis.visual.colors.model_dump().values()
        if value
    ]

    return AnalysisSummary(
        features=FeatureTemplateSummary(
            total_files=len(detected.files),
            by_category=by_category,
            dependencies=list(detected.dependencies),
            env_vars_required=detected.env_vars,
        ),
        sections=sections,
        pages=[page.url for page in analysis.structure.pages],
        colors=colors,
    )
