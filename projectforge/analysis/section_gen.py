"""Starter components for the page sections found by structure analysis.

One stub per distinct section type, written at the path the generated pages
import from.  Stubs never overwrite: a hand-written or template-provided
component at the same path always wins.
"""

from __future__ import annotations

from typing import Optional

from projectforge.analysis.structure_gen import section_component
from projectforge.models import GeneratedFile, SectionType, StructureAnalysis
from projectforge.rendering import TemplateRenderer, default_renderer

# Section types with a purpose-built stub; the rest use ``sections/generic``.
DEDICATED_SECTION_TEMPLATES: dict[SectionType, str] = {
    SectionType.HERO: "sections/hero.tsx.j2",
    SectionType.FEATURES: "sections/features.tsx.j2",
    SectionType.PRICING: "sections/pricing.tsx.j2",
    SectionType.TESTIMONIALS: "sections/testimonials.tsx.j2",
    SectionType.CTA: "sections/cta.tsx.j2",
    SectionType.FAQ: "sections/faq.tsx.j2",
    SectionType.STATS: "sections/stats.tsx.j2",
    SectionType.LOGOS: "sections/logos.tsx.j2",
    SectionType.NEWSLETTER: "sections/newsletter.tsx.j2",
}

GENERIC_SECTION_TEMPLATE = "sections/generic.tsx.j2"

# Footer has its own generator and unknown sections have nothing to stub.
_SKIPPED_TYPES = frozenset({SectionType.FOOTER, SectionType.UNKNOWN})


def distinct_section_types(structure: StructureAnalysis) -> list[SectionType]:
    """Section types across all pages, in first-seen order, skipping footer/unknown."""
    seen: list[SectionType] = []
    for page in structure.pages:
        for section in page.sections:
            if section.type in _SKIPPED_TYPES or section.type in seen:
                continue
            seen.append(section.type)
    return seen


def render_section(
    section_type: SectionType,
    project_name: str,
    renderer: Optional[TemplateRenderer] = None,
) -> str:
    renderer = renderer or default_renderer()
    component = section_component(section_type)
    template = DEDICATED_SECTION_TEMPLATES.get(section_type, GENERIC_SECTION_TEMPLATE)
    return renderer.render(
        template,
        {
            "project_name": project_name,
            "component_name": component.name,
            "section_type": section_type.value,
            "heading": section_type.value.capitalize(),
        },
    )


def generate_section_components(
    structure: StructureAnalysis,
    project_name: str,
    renderer: Optional[TemplateRenderer] = None,
) -> list[GeneratedFile]:
    """Return ``components/sections/<Name>.tsx`` stubs, one per section type."""
    renderer = renderer or default_renderer()
    files: list[GeneratedFile] = []
    for section_type in distinct_section_types(structure):
        component = section_component(section_type)
        files.append(
            GeneratedFile(
                path=f"components/sections/{component.name}.tsx",
                content=render_section(section_type, project_name, renderer),
                overwrite=False,
            )
        )
    return files
