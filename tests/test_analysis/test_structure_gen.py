"""Tests for page/navigation/footer generation (projectforge.analysis.structure_gen)."""

from __future__ import annotations

import pytest

from projectforge.analysis.structure_gen import (
    SectionComponent,
    generate_structure_files,
    page_path,
    render_footer,
    render_navigation,
    render_page,
    section_component,
    url_to_function_name,
    url_to_title,
)
from projectforge.models import (
    NavigationItem,
    PageStructure,
    SectionType,
    StructureAnalysis,
)

pytestmark = pytest.mark.unit


class TestUrlHelpers:
    @pytest.mark.parametrize(
        "url, expected",
        [("/", "Home"), ("", "Home"), ("/about-us", "About Us"), ("/blog/my-post/", "My Post")],
    )
    def test_url_to_title(self, url, expected):
        assert url_to_title(url) == expected

    @pytest.mark.parametrize(
        "url, expected",
        [
            ("/", "HomePage"),
            ("/about-us", "AboutUsPage"),
            ("/pricing", "PricingPage"),
            ("/v2.0", "V20Page"),
            ("/404", "Page404Page"),
        ],
    )
    def test_url_to_function_name(self, url, expected):
        assert url_to_function_name(url) == expected

    @pytest.mark.parametrize(
        "url, expected",
        [
            ("/", "app/page.tsx"),
            ("/about", "app/about/page.tsx"),
            ("/blog/x/", "app/blog/x/page.tsx"),
            ("/../../escaped", "app/escaped/page.tsx"),
            ("/./..", "app/page.tsx"),
        ],
    )
    def test_page_path(self, url, expected):
        assert page_path(url) == expected


class TestSectionComponent:
    def test_known_type(self):
        assert section_component(SectionType.BLOG) == SectionComponent(
            "BlogPreview", "@/components/sections/BlogPreview"
        )

    def test_footer_imports_shared_footer(self):
        assert section_component(SectionType.FOOTER).import_path == "@/components/Footer"


class TestRenderPage:
    def test_sections_sorted_and_imports_deduplicated(self, renderer):
        page = PageStructure.model_validate(
            {
                "url": "/",
                "title": "Home",
                "sections": [
                    {"type": "cta", "order": 3},
                    {"type": "hero", "order": 0},
                    {"type": "cta", "order": 5, "variant": "banner"},
                ],
            }
        )
        content = render_page(page, "Acme", renderer)

        assert content.count('import { CTA } from "@/components/sections/CTA";') == 1
        assert content.index("<Hero />") < content.index("<CTA />")
        assert '<CTA variant={"banner"} />' in content
        assert "export default function HomePage()" in content
        assert 'title: "Home",' in content

    def test_untitled_page_uses_url_title(self, renderer):
        content = render_page(PageStructure(url="/team"), "Acme", renderer)
        assert 'title: "Team",' in content

    def test_description_rendered_when_present(self, renderer):
        page = PageStructure.model_validate(
            {"url": "/", "metadata": {"description": 'Say "hi"'}}
        )
        content = render_page(page, "Acme", renderer)
        assert 'description: "Say \\"hi\\"",' in content

    def test_unknown_section_renders_generic_component(self, renderer):
        page = PageStructure.model_validate({"url": "/", "sections": [{"type": "carousel"}]})
        assert "<Section />" in render_page(page, "Acme", renderer)

    def test_variant_is_a_js_string_expression(self, renderer):
        page = PageStructure.model_validate(
            {"url": "/", "sections": [{"type": "hero", "variant": 'split "wide" {x}'}]}
        )
        content = render_page(page, "Acme", renderer)
        assert '<Hero variant={"split \\"wide\\" {x}"} />' in content


class TestNavigationAndFooter:
    def test_navigation_embeds_items_as_json(self, renderer):
        items = [
            NavigationItem(label="Docs", href="/docs", children=[NavigationItem(label="API", href="/docs/api")]),
        ]
        content = render_navigation(items, "Acme", renderer)
        assert '"label": "Docs"' in content
        assert '"href": "/docs/api"' in content

    def test_simple_footer_when_absent(self, renderer):
        content = render_footer(None, "Acme", renderer)
        assert 'href="/privacy"' in content
        assert "const columns" not in content

    def test_column_footer(self, sample_analysis, renderer):
        content = render_footer(sample_analysis.structure.footer, "Acme", renderer)
        assert '"title": "Product"' in content
        assert '"href": "/privacy"' in content

    @pytest.mark.parametrize("footer", [None, "columns"])
    def test_project_name_escaped_in_footer(self, sample_analysis, renderer, footer):
        layout = sample_analysis.structure.footer if footer else None
        content = render_footer(layout, 'Acme "<Pro>"', renderer)
        assert '{ "Acme \\"<Pro>\\"" }. All rights reserved.' in content
        assert 'Acme "<Pro>".' not in content

    def test_project_name_escaped_in_navigation(self, renderer):
        content = render_navigation([], "Acme {Pro}", renderer)
        assert 'font-bold">{ "Acme {Pro}" }</span>' in content


class TestGenerateStructureFiles:
    def test_two_page_analysis(self, sample_analysis, renderer):
        files = generate_structure_files(sample_analysis.structure, "Acme", renderer)
        assert [f.path for f in files] == [
            "components/Navigation.tsx",
            "components/Footer.tsx",
            "app/page.tsx",
            "app/pricing/page.tsx",
            "app/layout.tsx",
        ]
        assert all(f.overwrite for f in files)

    def test_empty_structure_still_has_shell(self, renderer):
        files = generate_structure_files(StructureAnalysis(), "Acme", renderer)
        assert [f.path for f in files] == [
            "components/Navigation.tsx",
            "components/Footer.tsx",
            "app/layout.tsx",
        ]
        assert '"Acme"' in files[-1].content
