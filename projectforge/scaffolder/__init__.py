"""projectforge scaffolder -- composes Next.js projects from catalog manifests.

This module takes a ``ProjectConfig`` (project name, base template,
integrations, features, branding and an optional website analysis) and
returns a ``GeneratedProject``: the merged file tree plus package.json,
.env.example, README and setup instructions.

Quick usage::

    from projectforge.models import Branding, ProjectConfig
    from projectforge.scaffolder import ProjectGenerator

    config = ProjectConfig(
        project_name="Acme",
        template="saas",
        integrations={"auth": "supabase", "payments": "stripe"},
        features=["email-registration"],
        branding=Branding(primary_color="#F97316"),
    )
    project = await ProjectGenerator().generate(config)
"""

from projectforge.scaffolder.generator import (
    ProjectGenerator,
    build_generator,
    generate_project,
)
from projectforge.scaffolder.merge import merge_dependencies, merge_env_vars, merge_files
from projectforge.scaffolder.resolver import TemplateResolver

__all__ = [
    "ProjectGenerator",
    "TemplateResolver",
    "build_generator",
    "generate_project",
    "merge_dependencies",
    "merge_env_vars",
    "merge_files",
]
