"""Turn visual analysis into Tailwind configuration and global CSS.

Produces exactly two files, ``tailwind.config.ts`` and ``app/globals.css``,
both marked overwritable so they replace the base template's versions.
"""

from __future__ import annotations

from typing import Any, Optional

from projectforge.analysis.colors import (
    adjust_color,
    foreground_color,
    hex_to_hsl,
    invert_color,
)
from projectforge.models import GeneratedFile, VisualAnalysis
from projectforge.rendering import TemplateRenderer, default_renderer

# ---------------------------------------------------------------------------
# Lookup tables
# ---------------------------------------------------------------------------

RADIUS_VALUES: dict[str, str] = {
    "none": "0",
    "sm": "0.25rem",
    "md": "0.5rem",
    "lg": "0.75rem",
    "xl": "1rem",
    "full": "9999px",
}

BUTTON_RADIUS: dict[str, str] = {
    "pill": "9999px",
    "rounded": "0.5rem",
    "square": "0",
}

SHADOW_VALUES: dict[str, str] = {
    "none": "none",
    "sm": "0 1px 2px 0 rgb(0 0 0 / 0.05)",
    "md": "0 4px 6px -1px rgb(0 0 0 / 0.1), 0 2px 4px -2px rgb(0 0 0 / 0.1)",
    "lg": "0 10px 15px -3px rgb(0 0 0 / 0.1), 0 4px 6px -4px rgb(0 0 0 / 0.1)",
    "xl": "0 20px 25px -5px rgb(0 0 0 / 0.1), 0 8px 10px -6px rgb(0 0 0 / 0.1)",
}

SUCCESS_COLOR = "#22c55e"
WARNING_COLOR = "#f59e0b"
DESTRUCTIVE_COLOR = "#ef4444"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def generate_style_files(
    visual: VisualAnalysis,
    renderer: Optional[TemplateRenderer] = None,
) -> list[GeneratedFile]:
    """Render ``tailwind.config.ts`` and ``app/globals.css`` for *visual*."""
    renderer = renderer or default_renderer()
    return [
        GeneratedFile(
            path="tailwind.config.ts",
            content=renderer.render(
                "style/tailwind.config.ts.j2", tailwind_context(visual)
            ),
            overwrite=True,
        ),
        GeneratedFile(
            path="app/globals.css",
            content=renderer.render("style/globals.css.j2", css_context(visual)),
            overwrite=True,
        ),
    ]


def tailwind_context(visual: VisualAnalysis) -> dict[str, Any]:
    """Compute every value interpolated into the Tailwind config."""
    colors = visual.colors
    components = visual.components
    secondary = colors.secondary or colors.primary
    accent = colors.accent or colors.primary

    palette: dict[str, Any] = {
        "primary": {
            "DEFAULT": colors.primary,
            "foreground": foreground_color(colors.primary),
        },
        "secondary": {
            "DEFAULT": colors.secondary or adjust_color(colors.primary, 20),
            "foreground": foreground_color(secondary),
        },
        "accent": {
            "DEFAULT": accent,
            "foreground": foreground_color(accent),
        },
        "background": colors.background,
        "foreground": colors.foreground,
        "muted": {
            "DEFAULT": colors.muted or adjust_color(colors.background, 10),
            "foreground": adjust_color(colors.foreground, 30),
        },
        "border": colors.border or adjust_color(colors.background, 15),
        "input": colors.border or adjust_color(colors.background, 15),
        "ring": colors.primary,
        "success": colors.success or SUCCESS_COLOR,
        "warning": colors.warning or WARNING_COLOR,
        "destructive": {
            "DEFAULT": colors.error or DESTRUCTIVE_COLOR,
            "foreground": "#ffffff",
        },
        "card": {
            "DEFAULT": colors.background,
            "foreground": colors.foreground,
        },
        "popover": {
            "DEFAULT": colors.background,
            "foreground": colors.foreground,
        },
    }

    return {
        "dark_mode": "class" if visual.dark_mode else "media",
        "colors": palette,
        "heading_font": visual.typography.heading_font,
        "body_font": visual.typography.body_font,
        "base_font_size": visual.typography.base_font_size or "1rem",
        "line_height": visual.typography.line_height or "1.5",
        "radius": {
            "default": RADIUS_VALUES[components.cards.rounded],
            "button": BUTTON_RADIUS[components.buttons.shape],
            "card": RADIUS_VALUES[components.cards.rounded],
            "input": RADIUS_VALUES[components.inputs.rounded],
        },
        "card_shadow": SHADOW_VALUES[components.cards.shadow],
    }


def css_context(visual: VisualAnalysis) -> dict[str, Any]:
    """Compute the ``:root`` (and optional ``.dark``) custom properties."""
    colors = visual.colors
    secondary = colors.secondary or adjust_color(colors.primary, 20)
    accent = colors.accent or colors.primary
    muted = colors.muted or adjust_color(colors.background, 10)
    border = colors.border or adjust_color(colors.background, 15)

    light_vars = {
        "background": hex_to_hsl(colors.background),
        "foreground": hex_to_hsl(colors.foreground),
        "primary": hex_to_hsl(colors.primary),
        "primary-foreground": hex_to_hsl(foreground_color(colors.primary)),
        "secondary": hex_to_hsl(secondary),
        "secondary-foreground": hex_to_hsl(foreground_color(secondary)),
        "accent": hex_to_hsl(accent),
        "accent-foreground": hex_to_hsl(foreground_color(accent)),
        "muted": hex_to_hsl(muted),
        "muted-foreground": hex_to_hsl(adjust_color(colors.foreground, 30)),
        "border": hex_to_hsl(border),
        "input": hex_to_hsl(border),
        "ring": hex_to_hsl(colors.primary),
        "radius": RADIUS_VALUES[visual.components.cards.rounded],
    }

    dark_vars: dict[str, str] = {}
    if visual.dark_mode:
        dark_background = invert_color(colors.background)
        dark_foreground = invert_color(colors.foreground)
        dark_vars = {
            "background": hex_to_hsl(dark_background),
            "foreground": hex_to_hsl(dark_foreground),
            "muted": hex_to_hsl(adjust_color(dark_background, 10)),
            "muted-foreground": hex_to_hsl(adjust_color(dark_foreground, 30)),
            "border": hex_to_hsl(adjust_color(dark_background, 15)),
        }

    return {"light_vars": light_vars, "dark_vars": dark_vars}
