"""Dependency manifest (``package.json``) builder."""

from __future__ import annotations

from typing import Any, Mapping

from projectforge.models import ProjectConfig
from projectforge.utils import slugify

SCRIPTS: dict[str, str] = {
    "dev": "next dev",
    "build": "next build",
    "start": "next start",
    "lint": "next lint",
    "type-check": "tsc --noEmit",
}


def build_package_json(
    config: ProjectConfig,
    dependencies: Mapping[str, str],
    dev_dependencies: Mapping[str, str],
    version: str = "0.1.0",
) -> dict[str, Any]:
    """Assemble the ``package.json`` object for the generated project.

    Both dependency maps are emitted sorted by package name so the output is
    stable regardless of which source contributed a package first.
    """
    return {
        "name": slugify(config.project_name) or "app",
        "version": version,
        "private": True,
        "description": config.description,
        "scripts": dict(SCRIPTS),
        "dependencies": dict(sorted(dependencies.items())),
        "devDependencies": dict(sorted(dev_dependencies.items())),
    }
