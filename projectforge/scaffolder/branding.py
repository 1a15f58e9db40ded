"""Branding substitution pass.

Runs once over every merged file and replaces the fixed token vocabulary
with the project's name and branding values.  A token whose value is not
set is left in the content untouched.
"""

from __future__ import annotations

from typing import Iterable

from projectforge.models import Branding, GeneratedFile

# token -> Branding attribute (None means the project name)
BRANDING_TOKENS: dict[str, str | None] = {
    "{{projectName}}": None,
    "{{primaryColor}}": "primary_color",
    "{{secondaryColor}}": "secondary_color",
    "{{backgroundColor}}": "background_color",
    "{{textColor}}": "text_color",
    "{{fontFamily}}": "font_family",
}


def branding_values(branding: Branding, project_name: str) -> dict[str, str]:
    """Return ``{token: value}`` for every token that has a value."""
    values: dict[str, str] = {}
    for token, attr in BRANDING_TOKENS.items():
        value = project_name if attr is None else getattr(branding, attr)
        if value:
            values[token] = value
    return values


def substitute_tokens(content: str, values: dict[str, str]) -> str:
    for token, value in values.items():
        if token in content:
            content = content.replace(token, value)
    return content


def apply_branding(
    files: Iterable[GeneratedFile],
    branding: Branding,
    project_name: str,
) -> list[GeneratedFile]:
    """Substitute branding tokens across *files*.

    Returns new records; files without any token come back unchanged.
    """
    values = branding_values(branding, project_name)
    branded: list[GeneratedFile] = []
    for file in files:
        content = substitute_tokens(file.content, values)
        branded.append(file if content == file.content else file.model_copy(update={"content": content}))
    return branded
