"""projectforge command-line pipeline.

Reads a project configuration, composes the project and writes it to disk:

1. LOAD     -- Parse the ProjectConfig JSON (and an optional analysis JSON).
2. COMPOSE  -- Run the generator over the catalog.
3. WRITE    -- Persist files, package.json, .env.example, README and SETUP.md.

Usage::

    projectforge project.json --output ./acme
    projectforge project.json --analysis site-analysis.json --dry-run
    projectforge --list
    projectforge --recommend "a subscription dashboard with charts"
"""

from __future__ import annotations

import asyncio
import json
import sys
import time
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError
from rich.panel import Panel
from rich.table import Table

from projectforge.catalog import CatalogError, ManifestRegistry, default_registry
from projectforge.config import Config
from projectforge.models import GeneratedProject, ProjectConfig
from projectforge.scaffolder import build_generator
from projectforge.scaffolder.validator import complexity_score, recommend_features
from projectforge.utils import (
    console,
    dump_json,
    ensure_dir,
    format_duration,
    load_json,
    print_error,
    print_header,
    print_success,
    print_summary_table,
    print_warning,
    write_text,
)

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class PipelineError(Exception):
    """Raised when the CLI input cannot be turned into a generation request."""


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------


def load_project_config(
    config_path: str | Path,
    analysis_path: str | Path | None = None,
) -> ProjectConfig:
    """Read a camelCase ``ProjectConfig`` JSON, optionally attaching an analysis.

    Raises:
        PipelineError: If a file is missing, is not JSON, or does not
            validate.
    """
    data = _read_json(config_path, "Project config")
    if analysis_path is not None:
        data["websiteAnalysis"] = _read_json(analysis_path, "Website analysis")

    try:
        config = ProjectConfig.model_validate(data)
    except ValidationError as exc:
        raise PipelineError(f"Invalid project config {config_path}:\n{exc}") from exc
    return config


def _read_json(path: str | Path, label: str) -> dict[str, Any]:
    file_path = Path(path)
    if not file_path.is_file():
        raise PipelineError(f"{label} file not found: {file_path}")
    try:
        return load_json(file_path)
    except json.JSONDecodeError as exc:
        raise PipelineError(f"{label} file is not valid JSON: {file_path} ({exc})") from exc


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


async def write_project(
    project: GeneratedProject,
    output_dir: str | Path,
    config: Config | None = None,
) -> list[Path]:
    """Write every artefact of *project* under *output_dir*.

    Files marked ``overwrite=False`` are not written over an existing file on
    disk, and paths that resolve outside *output_dir* are skipped with a
    warning.  Besides the file tree this writes ``package.json``,
    ``.env.example``, ``README.md``, ``SETUP.md`` and a ``.projectforge.json``
    summary of the run.

    Returns:
        The paths actually written.
    """
    root = ensure_dir(output_dir)
    resolved_root = root.resolve()
    settings = (config or Config()).model_copy(update={"output_dir": root})

    pending: dict[Path, str] = {}
    for file in project.files:
        target = root / file.path
        if not target.resolve().is_relative_to(resolved_root):
            print_warning(f"Skipping {file.path}: resolves outside {root}")
            continue
        if not file.overwrite and target.exists():
            continue
        pending[target] = file.content

    pending[root / "package.json"] = dump_json(project.package_json)
    pending[root / ".env.example"] = project.env_template
    pending[root / "README.md"] = project.readme
    pending[settings.setup_path] = "\n".join(project.setup_instructions) + "\n"
    pending[settings.manifest_path] = dump_json(
        {
            "files": [file.path for file in project.files],
            "warnings": project.warnings,
        }
    )

    return list(
        await asyncio.gather(
            *(write_text(path, content) for path, content in pending.items())
        )
    )


# ---------------------------------------------------------------------------
# Catalog listing / recommendations
# ---------------------------------------------------------------------------


def print_catalog(registry: ManifestRegistry) -> None:
    """Print base templates, integrations and features as tables."""
    templates = Table(title="Base Templates", show_header=True, header_style="bold cyan")
    templates.add_column("Id", no_wrap=True)
    templates.add_column("Name")
    templates.add_column("Files", justify="right")
    for template in registry.list_base_templates():
        templates.add_row(template.id, template.name, str(len(template.files)))
    console.print(templates)

    integrations = Table(title="Integrations", show_header=True, header_style="bold cyan")
    integrations.add_column("Category", no_wrap=True)
    integrations.add_column("Provider", no_wrap=True)
    integrations.add_column("Requires")
    for manifest in registry.all_integrations():
        integrations.add_row(
            manifest.category,
            manifest.id,
            ", ".join(manifest.dependencies.integrations) or "-",
        )
    console.print(integrations)

    features = Table(title="Features", show_header=True, header_style="bold cyan")
    features.add_column("Category", no_wrap=True)
    features.add_column("Id", no_wrap=True)
    features.add_column("Complexity")
    features.add_column("Requires")
    for category in registry.feature_categories():
        for feature in registry.list_features(category.id):
            features.add_row(
                category.label,
                feature.id,
                feature.complexity.value,
                ", ".join(feature.requires) or "-",
            )
    console.print(features)


def print_recommendations(description: str, registry: ManifestRegistry) -> list[str]:
    recommended = recommend_features(description)
    if not recommended:
        print_warning("No feature recommendations for that description")
        return []

    score = complexity_score(recommended, registry)
    print_summary_table(
        {
            "Features": ", ".join(recommended),
            "Complexity": f"{score.level} (score {score.score})",
            "Estimate": f"~{score.estimated_hours}h",
        },
        title="Recommended Features",
    )
    return recommended


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------


async def run(
    config_path: str | Path,
    output_dir: str | Path | None = None,
    analysis_path: str | Path | None = None,
    settings: Config | None = None,
    dry_run: bool = False,
) -> GeneratedProject:
    """Load, compose and (unless *dry_run*) write one project."""
    settings = settings or Config.from_env()
    if output_dir is not None:
        settings = settings.model_copy(update={"output_dir": Path(output_dir)})

    start = time.monotonic()
    print_header("Load")
    project_config = load_project_config(config_path, analysis_path)
    console.print(f"  Project: [bold]{project_config.project_name}[/bold]")

    print_header("Compose")
    generator = build_generator(settings)
    project = await generator.generate(project_config)

    written: list[Path] = []
    if not dry_run:
        print_header("Write")
        written = await write_project(project, settings.output_dir, settings)

    _print_final_summary(project, settings, written, time.monotonic() - start, dry_run)
    return project


def _print_final_summary(
    project: GeneratedProject,
    settings: Config,
    written: list[Path],
    elapsed: float,
    dry_run: bool,
) -> None:
    detail_lines = [
        "[bold yellow]DRY RUN[/bold yellow]" if dry_run else "[bold green]PROJECT WRITTEN[/bold green]",
        "",
        f"Duration     : {format_duration(elapsed)}",
        f"Files        : {len(project.files)}",
        f"Dependencies : {len(project.package_json.get('dependencies', {}))}",
        f"Warnings     : {len(project.warnings)}",
    ]
    if not dry_run:
        detail_lines.extend(
            [
                f"Written      : {len(written)}",
                f"Output       : {settings.output_dir.resolve()}",
            ]
        )

    console.print()
    console.print(
        Panel(
            "\n".join(detail_lines),
            title="[bold]Generation Complete[/bold]",
            border_style="yellow" if project.warnings else "green",
        )
    )
    for warning in project.warnings:
        print_warning(f"  - {warning}")


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: Optional[list[str]] = None) -> None:
    """CLI entry point for the ``projectforge`` console script."""
    import argparse

    parser = argparse.ArgumentParser(
        description="projectforge -- compose a Next.js project from catalog manifests",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  projectforge project.json -o ./acme\n"
            "  projectforge project.json --analysis analysis.json --dry-run\n"
            "  projectforge --list\n"
        ),
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Path to the ProjectConfig JSON file",
    )
    parser.add_argument(
        "--analysis",
        default=None,
        help="Path to a website analysis JSON to apply",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Output directory (default: ./output or PF_OUTPUT_DIR)",
    )
    parser.add_argument(
        "--template-url",
        default=None,
        help="Remote template host tried after the packaged bodies",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Compose the project and print the summary without writing files",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List base templates, integrations and features, then exit",
    )
    parser.add_argument(
        "--recommend",
        metavar="DESCRIPTION",
        default=None,
        help="Recommend features for a free-text project description, then exit",
    )

    args = parser.parse_args(argv)

    try:
        settings = Config.from_env()
        if args.template_url:
            settings = settings.model_copy(
                update={
                    "templates": settings.templates.model_copy(
                        update={"base_url": args.template_url}
                    )
                }
            )
        registry = (
            ManifestRegistry.from_directory(settings.catalog_dir)
            if settings.catalog_dir
            else default_registry()
        )
    except (CatalogError, ValueError) as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)

    if args.list:
        print_catalog(registry)
        return
    if args.recommend is not None:
        print_recommendations(args.recommend, registry)
        return
    if not args.config:
        parser.print_usage()
        print_error("Error: a project config path is required")
        sys.exit(1)

    try:
        project = asyncio.run(
            run(
                args.config,
                output_dir=args.output,
                analysis_path=args.analysis,
                settings=settings,
                dry_run=args.dry_run,
            )
        )
    except (PipelineError, CatalogError) as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)

    if project.warnings:
        print_warning(f"Completed with {len(project.warnings)} warning(s).")
    else:
        print_success("Project composed successfully!")


if __name__ == "__main__":
    main()
