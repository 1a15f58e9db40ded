"""Main composition orchestrator.

Takes a ``ProjectConfig`` and composes a ``GeneratedProject`` from the base
template, the selected integrations and features, and (optionally) a
website analysis.  Generation never fails on a bad selection: unknown ids,
unmet requirements and missing template bodies all end up in
``GeneratedProject.warnings``.
"""

from __future__ import annotations

from typing import Optional

from projectforge.analysis.loader import AnalysisExportResult, process_analysis
from projectforge.catalog import ManifestRegistry, default_registry
from projectforge.config import Config
from projectforge.models import (
    BaseTemplateManifest,
    EnvVarSpec,
    FeatureManifest,
    GeneratedFile,
    GeneratedProject,
    IntegrationManifest,
    ProjectConfig,
)
from projectforge.rendering import TemplateRenderer, default_renderer
from projectforge.reporter import (
    build_env_template,
    build_package_json,
    build_readme,
    build_setup_instructions,
)
from projectforge.scaffolder.branding import apply_branding
from projectforge.scaffolder.merge import (
    merge_dependencies,
    merge_env_vars,
    merge_files,
)
from projectforge.scaffolder.resolver import TemplateResolver
from projectforge.scaffolder.sources import (
    HttpTemplateSource,
    PackagedTemplateSource,
    TemplateSource,
)
from projectforge.scaffolder.validator import (
    check_integration_dependencies,
    resolve_feature_dependencies,
    validate_feature_selection,
)
from projectforge.utils import print_warning

ANALYSIS_ENV_DESCRIPTION = "Required for detected feature"


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Composes a project from catalog manifests and an optional analysis.

    The generator holds no per-request state, so one instance can serve any
    number of concurrent ``generate`` calls.  Each call:

    1. Checks integration requirements and the feature selection
    2. Resolves base template, integration and feature files
    3. Runs the analysis generators when an analysis is supplied
    4. Merges the four file sets and applies branding tokens
    5. Merges dependencies and env vars in the same source order
    6. Builds package.json, .env.example, README and setup instructions
    """

    def __init__(
        self,
        registry: ManifestRegistry | None = None,
        resolver: TemplateResolver | None = None,
        renderer: TemplateRenderer | None = None,
        fallback_template: str = "saas",
        package_version: str = "0.1.0",
    ) -> None:
        self.registry = registry or default_registry()
        self.resolver = resolver or TemplateResolver()
        self.renderer = renderer or default_renderer()
        self.fallback_template = fallback_template
        self.package_version = package_version

    # -- Public API --------------------------------------------------------

    async def generate(self, config: ProjectConfig) -> GeneratedProject:
        """Compose the complete project for *config*.

        Args:
            config: The generation request.

        Returns:
            The composed ``GeneratedProject``.  Problems found along the way
            are reported in its ``warnings`` list, never raised.
        """
        warnings: list[str] = []

        # 1. Integration requirements (e.g. payments needs auth)
        dependency_check = check_integration_dependencies(
            config.integrations, self.registry
        )
        warnings.extend(dependency_check.missing)

        # 2. Feature selection
        if config.features:
            validation = validate_feature_selection(config.features, self.registry)
            warnings.extend(validation.warnings)
            warnings.extend(validation.errors)

        # 3. Base template
        template = self._select_template(config.template, warnings)
        base_files = await self.resolver.resolve(template.files) if template else []

        # 4. Integrations, in selection order
        integrations = self._select_integrations(config, warnings)
        integration_files: list[GeneratedFile] = []
        for manifest in integrations:
            integration_files.extend(await self.resolver.resolve(manifest.files))

        # 5. Features, dependencies first
        feature_ids = (
            resolve_feature_dependencies(config.features, self.registry)
            if config.features
            else []
        )
        features = self._select_features(feature_ids)
        feature_files: list[GeneratedFile] = []
        for manifest in features:
            feature_files.extend(await self.resolver.resolve(manifest.files))

        # 6. Website analysis
        analysis_result: Optional[AnalysisExportResult] = None
        if config.website_analysis is not None:
            analysis_result = process_analysis(
                config.website_analysis,
                config.project_name,
                registry=self.registry,
                renderer=self.renderer,
            )
        analysis_files = analysis_result.files if analysis_result else []

        # 7. Merge, then brand
        merged = merge_files([base_files, integration_files, feature_files, analysis_files])
        files = apply_branding(merged, config.branding, config.project_name)

        # 8. Dependencies and env vars follow the same source order
        manifests = [*([template] if template else []), *integrations, *features]
        dependencies = merge_dependencies(
            [m.dependencies.npm for m in manifests]
            + [analysis_result.dependencies if analysis_result else {}]
        )
        dev_dependencies = merge_dependencies(
            [m.dependencies.npm_dev for m in manifests]
            + [analysis_result.dev_dependencies if analysis_result else {}]
        )
        env_vars = merge_env_vars(
            [m.dependencies.env for m in manifests]
            + [_analysis_env_vars(analysis_result)]
        )

        # 9. Output artefacts
        return GeneratedProject(
            files=files,
            package_json=build_package_json(
                config, dependencies, dev_dependencies, version=self.package_version
            ),
            env_template=build_env_template(config.project_name, env_vars),
            readme=build_readme(
                config,
                self.registry,
                integrations,
                features,
                env_vars,
                renderer=self.renderer,
                template=template,
            ),
            setup_instructions=build_setup_instructions(
                integrations,
                feature_ids,
                analysis_url=config.website_analysis.url if config.website_analysis else None,
                analysis_result=analysis_result,
            ),
            warnings=warnings,
        )

    # -- Manifest selection --------------------------------------------------

    def _select_template(
        self, template_id: str, warnings: list[str]
    ) -> BaseTemplateManifest | None:
        """Return the requested base template, or the fallback with a warning."""
        template = self.registry.get_base_template(template_id)
        if template is not None:
            return template

        fallback = self.registry.get_base_template(self.fallback_template)
        if fallback is None:
            message = f"Unknown template '{template_id}' and no '{self.fallback_template}' fallback; base files skipped"
        else:
            message = f"Unknown template '{template_id}', using '{self.fallback_template}'"
        print_warning(message)
        warnings.append(message)
        return fallback

    def _select_integrations(
        self, config: ProjectConfig, warnings: list[str]
    ) -> list[IntegrationManifest]:
        selected: list[IntegrationManifest] = []
        for category, provider in config.integrations.items():
            if not provider:
                continue
            manifest = self.registry.lookup(category, provider)
            if manifest is None:
                message = f"Unknown integration: {category}/{provider}"
                print_warning(message)
                warnings.append(message)
                continue
            selected.append(manifest)
        return selected

    def _select_features(self, feature_ids: list[str]) -> list[FeatureManifest]:
        # Unknown ids were already reported by validate_feature_selection.
        return [
            feature
            for feature in (self.registry.get_feature(fid) for fid in feature_ids)
            if feature is not None
        ]


# ---------------------------------------------------------------------------
# Construction helpers
# ---------------------------------------------------------------------------


def _analysis_env_vars(result: Optional[AnalysisExportResult]) -> list[EnvVarSpec]:
    if result is None:
        return []
    return [
        EnvVarSpec(name=name, description=ANALYSIS_ENV_DESCRIPTION, required=True)
        for name in result.env_vars
    ]


def build_sources(config: Config) -> list[TemplateSource]:
    """Template sources for *config*: the body directory, then the remote host."""
    sources: list[TemplateSource] = [PackagedTemplateSource(config.templates.template_dir)]
    if config.templates.base_url:
        sources.append(
            HttpTemplateSource(
                config.templates.base_url, timeout=config.templates.http_timeout
            )
        )
    return sources


def build_generator(config: Config | None = None) -> ProjectGenerator:
    """Wire a ``ProjectGenerator`` from a ``Config`` (environment defaults if omitted)."""
    config = config or Config.from_env()
    registry = (
        ManifestRegistry.from_directory(config.catalog_dir)
        if config.catalog_dir
        else default_registry()
    )
    return ProjectGenerator(
        registry=registry,
        resolver=TemplateResolver(build_sources(config)),
        fallback_template=config.default_template,
        package_version=config.package_version,
    )


async def generate_project(
    config: ProjectConfig,
    registry: ManifestRegistry | None = None,
    resolver: TemplateResolver | None = None,
) -> GeneratedProject:
    """One-shot convenience wrapper around :meth:`ProjectGenerator.generate`."""
    return await ProjectGenerator(registry=registry, resolver=resolver).generate(config)
