"""Scaffold stubs for product features detected on an analysed website.

Each enabled flag in :class:`~projectforge.models.DetectedFeatures` maps (via
the registry's detected-feature table) to a list of file paths plus npm
packages and env var names.  Every path is classified by an ordered rule list
and rendered from the matching stub skeleton.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, NamedTuple, Optional

from projectforge.catalog import ManifestRegistry
from projectforge.models import DetectedFeatures, GeneratedFile
from projectforge.rendering import TemplateRenderer, default_renderer
from projectforge.utils import capitalize_first, pascal_case, strip_extension

# ---------------------------------------------------------------------------
# Path classification
# ---------------------------------------------------------------------------


def _basename(path: str) -> str:
    return path.rsplit("/", 1)[-1]


def is_page(path: str) -> bool:
    return "app/" in path and path.endswith("page.tsx")


def is_api_route(path: str) -> bool:
    return "app/api/" in path and path.endswith("route.ts")


def is_hook(path: str) -> bool:
    return _basename(path).startswith("use") or "hooks/" in path


def is_library(path: str) -> bool:
    return "lib/" in path


def _always(path: str) -> bool:
    return True


class StubRule(NamedTuple):
    kind: str
    matches: Callable[[str], bool]


# Evaluated top to bottom; the first match picks the skeleton.
STUB_RULES: tuple[StubRule, ...] = (
    StubRule("page", is_page),
    StubRule("route", is_api_route),
    StubRule("hook", is_hook),
    StubRule("library", is_library),
    StubRule("component", _always),
)


def classify_path(path: str) -> str:
    """Return the stub kind for *path*: page, route, hook, library or component."""
    for rule in STUB_RULES:
        if rule.matches(path):
            return rule.kind
    return "component"


# ---------------------------------------------------------------------------
# Name extraction
# ---------------------------------------------------------------------------


def page_name(path: str) -> str:
    """``app/settings/profile/page.tsx`` -> ``"Settings Profile"``.

    Dynamic (``[id]``) and group (``(app)``) segments are dropped.
    """
    trimmed = path.replace("app/", "", 1)
    if trimmed.endswith("page.tsx"):
        trimmed = trimmed[: -len("page.tsx")]
    parts = [
        part
        for part in trimmed.split("/")
        if part and not part.startswith("[") and not part.startswith("(")
    ]
    return " ".join(capitalize_first(part.replace("-", " ")) for part in parts) or "Page"


def route_name(path: str) -> str:
    """``app/api/comments/[id]/route.ts`` -> ``"Comments"``."""
    trimmed = path.replace("app/api/", "", 1).replace("/route.ts", "", 1)
    parts = [part for part in trimmed.split("/") if part and not part.startswith("[")]
    return " ".join(capitalize_first(part) for part in parts) or "API"


# ---------------------------------------------------------------------------
# Skeleton rendering
# ---------------------------------------------------------------------------


def render_stub(
    path: str,
    project_name: str,
    renderer: Optional[TemplateRenderer] = None,
) -> str:
    """Render the stub skeleton that :func:`classify_path` selects for *path*."""
    renderer = renderer or default_renderer()
    kind = classify_path(path)
    file_name = _basename(path)
    stem = strip_extension(file_name)
    context: dict[str, Any] = {"project_name": project_name, "file_name": file_name}

    if kind == "page":
        context["page_name"] = page_name(path)
        return renderer.render("stubs/page.tsx.j2", context)
    if kind == "route":
        context["route_name"] = route_name(path)
        return renderer.render("stubs/route.ts.j2", context)
    if kind == "hook":
        context["hook_name"] = stem
        return renderer.render("stubs/hook.ts.j2", context)
    if kind == "library":
        context["module_name"] = stem
        context["type_name"] = pascal_case(stem)
        return renderer.render("stubs/library.ts.j2", context)

    # Only .tsx files can hold a component; anything else gets an empty module.
    if not file_name.endswith(".tsx"):
        return renderer.render("stubs/module.ts.j2", context)
    context["component_name"] = stem
    return renderer.render("stubs/component.tsx.j2", context)


# ---------------------------------------------------------------------------
# Detected feature aggregation
# ---------------------------------------------------------------------------


@dataclass
class DetectedFeatureFiles:
    """Union of the scaffolding every enabled flag asks for."""

    flags: list[str] = field(default_factory=list)
    files: list[str] = field(default_factory=list)
    dependencies: dict[str, str] = field(default_factory=dict)
    dev_dependencies: dict[str, str] = field(default_factory=dict)
    env_vars: list[str] = field(default_factory=list)


def collect_detected_features(
    features: DetectedFeatures, registry: ManifestRegistry
) -> DetectedFeatureFiles:
    """Walk enabled flags in declaration order and union their scaffolding.

    Paths and env var names keep first-seen order without duplicates; later
    flags overwrite earlier package versions.  Flags absent from the table are
    ignored.
    """
    result = DetectedFeatureFiles()
    for flag in features.enabled_flags():
        entry = registry.detected_feature(flag)
        if entry is None:
            continue
        result.flags.append(flag)
        for path in entry.files:
            if path not in result.files:
                result.files.append(path)
        result.dependencies.update(entry.npm)
        result.dev_dependencies.update(entry.npm_dev)
        for name in entry.env:
            if name not in result.env_vars:
                result.env_vars.append(name)
    return result


def generate_feature_files(
    paths: list[str],
    project_name: str,
    renderer: Optional[TemplateRenderer] = None,
) -> list[GeneratedFile]:
    """Render one non-overwriting stub per path."""
    renderer = renderer or default_renderer()
    return [
        GeneratedFile(
            path=path,
            content=render_stub(path, project_name, renderer),
            overwrite=False,
        )
        for path in paths
    ]
