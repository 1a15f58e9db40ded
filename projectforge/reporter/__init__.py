"""Output assembly for generated projects.

Builds the artefacts that sit beside the merged file tree: the
``package.json`` object, the ``.env.example`` text, the README and the
ordered setup instructions.
"""

from projectforge.reporter.env_template import build_env_template
from projectforge.reporter.package_json import SCRIPTS, build_package_json
from projectforge.reporter.readme import (
    SetupSection,
    build_readme,
    build_setup_instructions,
    integration_setup_sections,
)

__all__ = [
    "SCRIPTS",
    "SetupSection",
    "build_env_template",
    "build_package_json",
    "build_readme",
    "build_setup_instructions",
    "integration_setup_sections",
]
