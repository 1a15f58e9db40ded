"""Tests for the analysis entry point (projectforge.analysis.loader)."""

from __future__ import annotations

import pytest

from projectforge.analysis.loader import analysis_summary, process_analysis
from projectforge.models import SectionType, WebsiteAnalysis

pytestmark = pytest.mark.unit


class TestProcessAnalysis:
    def test_file_groups_in_order(self, sample_analysis, registry, renderer):
        result = process_analysis(sample_analysis, "Acme", registry, renderer)
        counts = result.summary
        paths = [f.path for f in result.files]

        assert counts.style_files == 2
        assert counts.structure_files == 5
        assert counts.section_components == 4
        assert counts.total_files == len(result.files)
        assert counts.total_files == (
            counts.feature_files + counts.style_files + counts.structure_files + counts.section_components
        )
        # features, style, structure, sections
        assert paths[counts.feature_files] == "tailwind.config.ts"
        assert paths[-1] == "components/sections/Pricing.tsx"

    def test_dependencies_and_env(self, sample_analysis, registry, renderer):
        result = process_analysis(sample_analysis, "Acme", registry, renderer)
        assert result.dependencies == {"zustand": "^4.5.0"}
        assert result.env_vars == ["GOOGLE_CLIENT_ID", "GOOGLE_CLIENT_SECRET"]

    def test_detected_page_replaced_by_structure_page_in_list_order(self, registry, renderer):
        analysis = WebsiteAnalysis.model_validate(
            {
                "features": {"auth": {"hasLogin": True}},
                "visual": {"colors": {"primary": "#000000"}},
                "structure": {"pages": [{"url": "/login", "sections": [{"type": "hero"}]}]},
            }
        )
        result = process_analysis(analysis, "Acme", registry, renderer)
        login_pages = [f for f in result.files if f.path == "app/login/page.tsx"]
        assert [f.overwrite for f in login_pages] == [False, True]

    def test_minimal_analysis(self, registry, renderer):
        analysis = WebsiteAnalysis.model_validate({"visual": {"colors": {"primary": "#000000"}}})
        result = process_analysis(analysis, "Acme", registry, renderer)
        assert result.summary.feature_files == 0
        assert result.summary.section_components == 0
        assert result.summary.total_files == 2 + 3


class TestAnalysisSummary:
    def test_summary(self, sample_analysis, registry):
        summary = analysis_summary(sample_analysis, registry)

        assert summary.pages == ["/", "/pricing"]
        assert summary.sections == [
            SectionType.HERO,
            SectionType.FEATURES,
            SectionType.FAQ,
            SectionType.PRICING,
        ]
        assert "#3B82F6" in summary.colors
        assert summary.features.dependencies == ["zustand"]
        assert summary.features.by_category["components"] >= 1
        assert summary.features.total_files == sum(summary.features.by_category.values())
