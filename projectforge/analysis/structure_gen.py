"""Turn structure analysis into pages, navigation, footer and root layout.

Each analysed page becomes an ``app/.../page.tsx`` that imports one section
component per detected section.  The section components themselves are
stubbed separately by :mod:`projectforge.analysis.section_gen`.
"""

from __future__ import annotations

import json
import re
from typing import NamedTuple, Optional

from projectforge.models import (
    FooterLayout,
    GeneratedFile,
    NavigationItem,
    PageSection,
    PageStructure,
    SectionType,
    StructureAnalysis,
)
from projectforge.rendering import TemplateRenderer, default_renderer
from projectforge.utils import capitalize_first

# ---------------------------------------------------------------------------
# Section type -> component lookup
# ---------------------------------------------------------------------------


class SectionComponent(NamedTuple):
    name: str
    import_path: str


def _section(name: str) -> SectionComponent:
    return SectionComponent(name, f"@/components/sections/{name}")


SECTION_COMPONENTS: dict[SectionType, SectionComponent] = {
    SectionType.HERO: _section("Hero"),
    SectionType.FEATURES: _section("Features"),
    SectionType.PRICING: _section("Pricing"),
    SectionType.TESTIMONIALS: _section("Testimonials"),
    SectionType.CTA: _section("CTA"),
    SectionType.FAQ: _section("FAQ"),
    SectionType.ABOUT: _section("About"),
    SectionType.TEAM: _section("Team"),
    SectionType.CONTACT: _section("Contact"),
    SectionType.GALLERY: _section("Gallery"),
    SectionType.BLOG: _section("BlogPreview"),
    SectionType.STATS: _section("Stats"),
    SectionType.LOGOS: _section("Logos"),
    SectionType.COMPARISON: _section("Comparison"),
    SectionType.TIMELINE: _section("Timeline"),
    SectionType.PROCESS: _section("Process"),
    SectionType.NEWSLETTER: _section("Newsletter"),
    SectionType.FOOTER: SectionComponent("Footer", "@/components/Footer"),
    SectionType.UNKNOWN: _section("Section"),
}


def section_component(section_type: SectionType) -> SectionComponent:
    """Return the component a section type renders as (``Section`` if unmapped)."""
    return SECTION_COMPONENTS.get(section_type, SECTION_COMPONENTS[SectionType.UNKNOWN])


# ---------------------------------------------------------------------------
# URL helpers
# ---------------------------------------------------------------------------


def _url_segments(url: str) -> list[str]:
    # Dot segments are dropped so every page stays under app/.
    return [segment for segment in url.split("/") if segment not in ("", ".", "..")]


def url_to_title(url: str) -> str:
    """``"/"`` -> ``"Home"``; ``"/about-us"`` -> ``"About Us"``."""
    segments = _url_segments(url)
    if not segments:
        return "Home"
    return " ".join(capitalize_first(word) for word in segments[-1].split("-"))


def url_to_function_name(url: str) -> str:
    """``"/"`` -> ``"HomePage"``; ``"/about-us"`` -> ``"AboutUsPage"``.

    Characters that cannot appear in a JavaScript identifier act as word
    breaks, and a name that would start with a digit gets a ``Page`` prefix.
    """
    segments = _url_segments(url)
    if not segments:
        return "HomePage"
    words = re.split(r"[^A-Za-z0-9]+", segments[-1])
    name = "".join(capitalize_first(word) for word in words if word) + "Page"
    if name[0].isdigit():
        name = "Page" + name
    return name


def page_path(url: str) -> str:
    """``"/"`` -> ``app/page.tsx``; ``"/blog/x"`` -> ``app/blog/x/page.tsx``."""
    segments = _url_segments(url)
    if not segments:
        return "app/page.tsx"
    return f"app/{'/'.join(segments)}/page.tsx"


# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------


def _ordered_sections(sections: list[PageSection]) -> list[PageSection]:
    # sorted() is stable, so equal orders keep their input sequence.
    return sorted(sections, key=lambda section: section.order)


def render_page(
    page: PageStructure,
    project_name: str,
    renderer: Optional[TemplateRenderer] = None,
) -> str:
    """Render one page component from its analysed section list."""
    renderer = renderer or default_renderer()
    imports: list[SectionComponent] = []
    elements: list[str] = []

    for section in _ordered_sections(page.sections):
        component = section_component(section.type)
        if component not in imports:
            imports.append(component)
        variant = ""
        if section.variant:
            variant = " variant={" + json.dumps(section.variant, ensure_ascii=False) + "}"
        elements.append(f"<{component.name}{variant} />")

    description = page.metadata.description if page.metadata else None
    return renderer.render(
        "structure/page.tsx.j2",
        {
            "project_name": project_name,
            "page_title": page.title or url_to_title(page.url),
            "function_name": url_to_function_name(page.url),
            "description": description,
            "imports": imports,
            "elements": elements,
        },
    )


def render_navigation(
    navigation: list[NavigationItem],
    project_name: str,
    renderer: Optional[TemplateRenderer] = None,
) -> str:
    renderer = renderer or default_renderer()
    items = [item.model_dump(exclude_none=True) for item in navigation]
    return renderer.render(
        "structure/navigation.tsx.j2",
        {
            "project_name": project_name,
            "nav_items": json.dumps(items, indent=2, ensure_ascii=False),
        },
    )


def render_footer(
    footer: Optional[FooterLayout],
    project_name: str,
    renderer: Optional[TemplateRenderer] = None,
) -> str:
    """Render the column footer, or the simple Privacy/Terms footer when absent."""
    renderer = renderer or default_renderer()
    if footer is None:
        return renderer.render(
            "structure/simple_footer.tsx.j2", {"project_name": project_name}
        )

    columns = [column.model_dump() for column in footer.columns]
    bottom_links = [link.model_dump() for link in footer.bottom_links or []]
    return renderer.render(
        "structure/footer.tsx.j2",
        {
            "project_name": project_name,
            "columns": json.dumps(columns, indent=2, ensure_ascii=False),
            "bottom_links": json.dumps(bottom_links, indent=2, ensure_ascii=False),
            "grid_columns": min(len(footer.columns) + 1, 5),
        },
    )


def render_layout(
    project_name: str, renderer: Optional[TemplateRenderer] = None
) -> str:
    renderer = renderer or default_renderer()
    return renderer.render("structure/layout.tsx.j2", {"project_name": project_name})


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def generate_structure_files(
    structure: StructureAnalysis,
    project_name: str,
    renderer: Optional[TemplateRenderer] = None,
) -> list[GeneratedFile]:
    """Emit navigation, footer, one file per page, then the root layout.

    Every file is overwritable: the analysed structure replaces whatever the
    base template put at the same paths.
    """
    renderer = renderer or default_renderer()
    files = [
        GeneratedFile(
            path="components/Navigation.tsx",
            content=render_navigation(structure.navigation, project_name, renderer),
        ),
        GeneratedFile(
            path="components/Footer.tsx",
            content=render_footer(structure.footer, project_name, renderer),
        ),
    ]
    for page in structure.pages:
        files.append(
            GeneratedFile(
                path=page_path(page.url),
                content=render_page(page, project_name, renderer),
            )
        )
    files.append(
        GeneratedFile(path="app/layout.tsx", content=render_layout(project_name, renderer))
    )
    return files
