"""``.env.example`` builder."""

from __future__ import annotations

from typing import Sequence

from projectforge.models import EnvVarSpec


def _annotation(env_var: EnvVarSpec) -> str:
    status = "required" if env_var.required else "optional"
    text = f"{env_var.description} ({status})" if env_var.description else f"({status})"
    return f"# {text}"


def build_env_template(project_name: str, env_vars: Sequence[EnvVarSpec]) -> str:
    """Render one annotated ``NAME=example`` block per variable.

    Each block is a comment with the description and required/optional
    status, a second comment for browser-exposed variables, then the
    assignment (empty when no example is known).  Blocks are separated by a
    blank line and the text ends with a newline.
    """
    lines = [
        f"# Environment variables for {project_name}",
        "# Copy this file to .env.local and fill in the values.",
        "",
    ]
    if not env_vars:
        lines.append("# No environment variables are required.")
        return "\n".join(lines) + "\n"

    for env_var in env_vars:
        lines.append(_annotation(env_var))
        if env_var.public:
            lines.append("# Exposed to the browser")
        lines.append(f"{env_var.name}={env_var.example or ''}")
        lines.append("")
    return "\n".join(lines)
