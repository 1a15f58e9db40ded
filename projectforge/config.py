"""projectforge configuration.

Centralised, typed configuration for the generator and its CLI. All settings
use Pydantic v2 models so they can be validated at construction time and
serialised to/from JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field


class TemplateSourceConfig(BaseModel):
    """Where template bodies are loaded from, in priority order."""

    template_dir: Optional[Path] = Field(
        default=None,
        description="Directory of template bodies (the packaged bodies when unset)",
    )
    base_url: Optional[str] = Field(
        default=None,
        description="Remote template host tried after the packaged directory",
    )
    http_timeout: float = Field(default=10.0, gt=0, description="Per-request timeout in seconds")


class Config(BaseModel):
    """Global projectforge configuration.

    Holds every tuneable parameter used by the generator. Instances are
    typically created once by the CLI entry point and then passed to
    :func:`projectforge.scaffolder.generator.build_generator`.
    """

    output_dir: Path = Field(default=Path("./output"))
    catalog_dir: Optional[Path] = Field(
        default=None, description="Override for the packaged YAML catalogs"
    )
    default_template: str = Field(default="saas")
    package_version: str = Field(
        default="0.1.0", description="Version written into the generated package.json"
    )
    templates: TemplateSourceConfig = Field(default_factory=TemplateSourceConfig)

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def setup_path(self) -> Path:
        """Path of the setup notes written next to the generated project."""
        return self.output_dir / "SETUP.md"

    @property
    def manifest_path(self) -> Path:
        """Path of the generation summary JSON (file list and warnings)."""
        return self.output_dir / ".projectforge.json"

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path | None = None) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file. Defaults to ``<output_dir>/projectforge.config.json``.

        Returns:
            The resolved path where the file was written.
        """
        target = path or (self.output_dir / "projectforge.config.json")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON.

        Args:
            path: The JSON file to read.

        Returns:
            A validated ``Config`` instance.
        """
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            PF_OUTPUT_DIR, PF_CATALOG_DIR, PF_DEFAULT_TEMPLATE,
            PF_PACKAGE_VERSION, PF_TEMPLATE_DIR, PF_TEMPLATE_URL,
            PF_HTTP_TIMEOUT.
        """
        template_kwargs: dict[str, Any] = {}
        if os.environ.get("PF_TEMPLATE_DIR"):
            template_kwargs["template_dir"] = Path(os.environ["PF_TEMPLATE_DIR"])
        if os.environ.get("PF_TEMPLATE_URL"):
            template_kwargs["base_url"] = os.environ["PF_TEMPLATE_URL"]
        if os.environ.get("PF_HTTP_TIMEOUT"):
            template_kwargs["http_timeout"] = float(os.environ["PF_HTTP_TIMEOUT"])

        catalog_dir = os.environ.get("PF_CATALOG_DIR")

        return cls(
            output_dir=Path(os.environ.get("PF_OUTPUT_DIR", "./output")),
            catalog_dir=Path(catalog_dir) if catalog_dir else None,
            default_template=os.environ.get("PF_DEFAULT_TEMPLATE", "saas"),
            package_version=os.environ.get("PF_PACKAGE_VERSION", "0.1.0"),
            templates=TemplateSourceConfig(**template_kwargs),
        )
