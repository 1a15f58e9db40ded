"""Tests for the composition orchestrator (projectforge.scaffolder.generator).

Covers:
- Base-only generation and branding substitution
- Integration requirement warnings and unknown ids
- Feature dependency resolution feeding files and setup instructions
- Website analysis precedence over base files
- Dependency and env var merging
- build_generator / build_sources wiring from Config
"""

from __future__ import annotations

from unittest.mock import patch

import pytest

from projectforge.config import Config, TemplateSourceConfig
from projectforge.models import ProjectConfig
from projectforge.scaffolder.generator import (
    ANALYSIS_ENV_DESCRIPTION,
    ProjectGenerator,
    build_generator,
    build_sources,
    generate_project,
)
from projectforge.scaffolder.sources import HttpTemplateSource, PackagedTemplateSource
from projectforge.scaffolder.validator import IntegrationCheck

pytestmark = pytest.mark.unit


@pytest.fixture
def generator(registry, offline_resolver, renderer) -> ProjectGenerator:
    return ProjectGenerator(registry=registry, resolver=offline_resolver, renderer=renderer)


# ---------------------------------------------------------------------------
# Base template
# ---------------------------------------------------------------------------


class TestBaseTemplate:
    @pytest.mark.asyncio
    async def test_minimal_project(self, generator, minimal_config, registry):
        project = await generator.generate(minimal_config)
        saas = registry.get_base_template("saas")

        assert [f.path for f in project.files] == [d.path for d in saas.files]
        assert project.warnings == []
        assert project.package_json["name"] == "bare"
        assert project.package_json["dependencies"] == dict(sorted(saas.dependencies.npm.items()))

    @pytest.mark.asyncio
    async def test_branding_tokens_substituted(self, generator, minimal_config):
        project = await generator.generate(minimal_config)
        files = project.file_map()

        tailwind = files["tailwind.config.ts"].content
        assert "#F97316" in tailwind
        assert "{{primaryColor}}" not in tailwind
        # not set in the fixture branding
        assert "{{backgroundColor}}" in tailwind
        assert "Bare" in files["app/layout.tsx"].content

    @pytest.mark.asyncio
    async def test_unknown_template_falls_back_with_warning(self, generator, sample_branding):
        config = ProjectConfig(project_name="X", template="spaceship", branding=sample_branding)
        with patch("projectforge.scaffolder.generator.print_warning"):
            project = await generator.generate(config)

        assert project.warnings == ["Unknown template 'spaceship', using 'saas'"]
        assert "app/(app)/dashboard/page.tsx" in project.file_map()
        assert "**SaaS Starter**" in project.readme
        assert "**spaceship**" not in project.readme

    @pytest.mark.asyncio
    async def test_unknown_template_without_fallback_skips_base(
        self, registry, offline_resolver, sample_branding
    ):
        generator = ProjectGenerator(
            registry=registry, resolver=offline_resolver, fallback_template="missing"
        )
        config = ProjectConfig(project_name="X", template="spaceship", branding=sample_branding)
        with patch("projectforge.scaffolder.generator.print_warning"):
            project = await generator.generate(config)

        assert project.files == []
        assert "base files skipped" in project.warnings[0]


# ---------------------------------------------------------------------------
# Integrations
# ---------------------------------------------------------------------------


class TestIntegrations:
    @pytest.mark.asyncio
    async def test_stripe_without_auth(self, generator, registry, sample_branding):
        config = ProjectConfig(
            project_name="Shop",
            integrations={"payments": "stripe"},
            branding=sample_branding,
        )
        project = await generator.generate(config)

        assert project.warnings == ["Stripe requires auth"]
        paths = set(project.file_map())
        for descriptor in registry.lookup("payments", "stripe").files:
            assert descriptor.path in paths
        assert project.package_json["dependencies"]["stripe"] == "^14.0.0"
        assert "STRIPE_SECRET_KEY=" in project.env_template

    @pytest.mark.asyncio
    async def test_missing_requirement_does_not_change_files(self, generator, sample_branding):
        config = ProjectConfig(
            project_name="Shop",
            integrations={"payments": "stripe"},
            branding=sample_branding,
        )
        project = await generator.generate(config)
        with patch(
            "projectforge.scaffolder.generator.check_integration_dependencies",
            return_value=IntegrationCheck(),
        ):
            unchecked = await generator.generate(config)

        assert project.warnings == ["Stripe requires auth"]
        assert unchecked.warnings == []
        assert len(project.files) == len(unchecked.files)
        assert project.files == unchecked.files

    @pytest.mark.asyncio
    async def test_file_count_matches_config_with_auth(self, generator, registry, sample_branding):
        config = ProjectConfig(
            project_name="Shop",
            integrations={"payments": "stripe"},
            branding=sample_branding,
        )
        with_auth = config.model_copy(
            update={"integrations": {"auth": "supabase", "payments": "stripe"}}
        )
        project = await generator.generate(config)
        complete = await generator.generate(with_auth)

        shared = {d.path for d in registry.get_base_template("saas").files}
        shared |= {d.path for d in registry.lookup("payments", "stripe").files}
        auth_only = {d.path for d in registry.lookup("auth", "supabase").files} - shared

        assert complete.warnings == []
        assert len(project.files) == len(complete.files) - len(auth_only)

    @pytest.mark.asyncio
    async def test_integration_body_loaded(self, generator, sample_branding):
        config = ProjectConfig(
            project_name="Shop", integrations={"auth": "supabase"}, branding=sample_branding
        )
        project = await generator.generate(config)
        client = project.file_map()["lib/supabase/client.ts"]
        assert "createBrowserClient" in client.content

    @pytest.mark.asyncio
    async def test_unknown_integration_warns_and_skips(self, generator, sample_branding):
        config = ProjectConfig(
            project_name="Shop",
            integrations={"payments": "doubloons", "auth": None},
            branding=sample_branding,
        )
        with patch("projectforge.scaffolder.generator.print_warning") as warn:
            project = await generator.generate(config)

        assert project.warnings == ["Unknown integration: payments/doubloons"]
        warn.assert_called_once_with("Unknown integration: payments/doubloons")

    @pytest.mark.asyncio
    async def test_missing_body_gets_placeholder(self, generator, sample_config):
        project = await generator.generate(sample_config)
        webhook = project.file_map()["app/api/webhooks/stripe/route.ts"]
        assert webhook.content.startswith("// Template: payments/stripe/app/api/webhooks/route.ts")

    @pytest.mark.asyncio
    async def test_setup_instructions_per_integration(self, generator, sample_config):
        project = await generator.generate(sample_config)
        headings = [line for line in project.setup_instructions if line.startswith("## ")]
        assert headings == [
            "## Supabase Auth Setup",
            "## Stripe Setup",
            "## Selected Features (1)",
        ]


# ---------------------------------------------------------------------------
# Features
# ---------------------------------------------------------------------------


class TestFeatures:
    @pytest.mark.asyncio
    async def test_dependencies_pulled_in_and_reported(self, generator, registry, sample_branding):
        config = ProjectConfig(
            project_name="Admin", features=["admin-dashboard"], branding=sample_branding
        )
        project = await generator.generate(config)

        assert project.warnings == ["Admin Dashboard requires: email-registration"]
        paths = set(project.file_map())
        assert "lib/auth/email-auth.ts" in paths
        assert "app/admin/page.tsx" in paths
        assert project.setup_instructions[-3:] == [
            "## Selected Features (2)",
            "- email-registration",
            "- admin-dashboard",
        ]

    @pytest.mark.asyncio
    async def test_unknown_feature_warns(self, generator, sample_branding):
        config = ProjectConfig(project_name="X", features=["levitation"], branding=sample_branding)
        project = await generator.generate(config)
        assert "Unknown feature: levitation" in project.warnings

    @pytest.mark.asyncio
    async def test_feature_npm_dependencies_merged(self, generator, sample_branding):
        config = ProjectConfig(
            project_name="X", features=["price-tracking"], branding=sample_branding
        )
        project = await generator.generate(config)
        assert project.package_json["dependencies"]["recharts"] == "^2.10.0"


# ---------------------------------------------------------------------------
# Website analysis
# ---------------------------------------------------------------------------


class TestWebsiteAnalysis:
    @pytest.mark.asyncio
    async def test_analysis_files_override_base(self, generator, sample_config, sample_analysis):
        config = sample_config.model_copy(update={"website_analysis": sample_analysis})
        project = await generator.generate(config)
        files = project.file_map()

        # Style generator output replaces the base template's branded config.
        assert "generated from website analysis" in files["tailwind.config.ts"].content
        assert "#3B82F6" in files["tailwind.config.ts"].content
        assert "export default function HomePage()" in files["app/page.tsx"].content
        assert "app/pricing/page.tsx" in files
        assert "components/Navigation.tsx" in files
        assert "components/Footer.tsx" in files
        for name in ("Hero", "Features", "FAQ", "Pricing"):
            assert f"components/sections/{name}.tsx" in files

    @pytest.mark.asyncio
    async def test_analysis_stub_does_not_replace_integration_file(
        self, generator, sample_config, sample_analysis
    ):
        # auth.hasLogin asks for components/auth/LoginForm.tsx, which Supabase also ships.
        config = sample_config.model_copy(update={"website_analysis": sample_analysis})
        project = await generator.generate(config)
        login_form = project.file_map()["components/auth/LoginForm.tsx"]
        assert "Generated for" not in login_form.content

    @pytest.mark.asyncio
    async def test_analysis_dependencies_and_env(self, generator, sample_config, sample_analysis):
        config = sample_config.model_copy(update={"website_analysis": sample_analysis})
        project = await generator.generate(config)

        assert project.package_json["dependencies"]["zustand"] == "^4.5.0"
        assert f"# {ANALYSIS_ENV_DESCRIPTION} (required)" in project.env_template
        assert "GOOGLE_CLIENT_ID=" in project.env_template

    @pytest.mark.asyncio
    async def test_setup_instructions_start_with_analysis_block(
        self, generator, sample_config, sample_analysis
    ):
        config = sample_config.model_copy(update={"website_analysis": sample_analysis})
        project = await generator.generate(config)
        assert project.setup_instructions[0] == "## Website Analysis Applied"
        assert project.setup_instructions[1] == "- Source: https://example.com"


# ---------------------------------------------------------------------------
# Determinism & concurrency
# ---------------------------------------------------------------------------


class TestDeterminism:
    @pytest.mark.asyncio
    async def test_same_input_same_output(self, generator, sample_config, sample_analysis):
        config = sample_config.model_copy(update={"website_analysis": sample_analysis})
        first = await generator.generate(config)
        second = await generator.generate(config)
        assert first == second

    @pytest.mark.asyncio
    async def test_paths_unique(self, generator, sample_config, sample_analysis):
        config = sample_config.model_copy(update={"website_analysis": sample_analysis})
        project = await generator.generate(config)
        paths = [f.path for f in project.files]
        assert len(paths) == len(set(paths))

    @pytest.mark.asyncio
    async def test_generate_project_wrapper(self, registry, offline_resolver, minimal_config):
        project = await generate_project(minimal_config, registry, offline_resolver)
        assert project.package_json["name"] == "bare"


# ---------------------------------------------------------------------------
# Construction helpers
# ---------------------------------------------------------------------------


class TestBuildGenerator:
    def test_sources_without_url(self, tmp_path):
        config = Config(templates=TemplateSourceConfig(template_dir=tmp_path))
        [source] = build_sources(config)
        assert isinstance(source, PackagedTemplateSource)
        assert source.root == tmp_path

    def test_sources_with_url(self):
        config = Config(
            templates=TemplateSourceConfig(base_url="https://t.example.com", http_timeout=3)
        )
        packaged, remote = build_sources(config)
        assert isinstance(packaged, PackagedTemplateSource)
        assert isinstance(remote, HttpTemplateSource)
        assert remote.timeout == 3

    def test_build_generator_uses_config(self):
        generator = build_generator(Config(default_template="blog", package_version="2.0.0"))
        assert generator.fallback_template == "blog"
        assert generator.package_version == "2.0.0"
