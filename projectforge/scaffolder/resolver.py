"""Template resolver: file descriptors in, ``GeneratedFile`` shells out.

The resolver loads each descriptor's body from the first source that has
it.  Branding tokens are left in place; substitution is a separate pass
over the merged tree.  A descriptor whose body no source can supply still
produces a record, with a short placeholder naming the template ref, so
dependency and env aggregation stay consistent.
"""

from __future__ import annotations

import asyncio
from typing import Sequence

from projectforge.models import FileDescriptor, GeneratedFile
from projectforge.scaffolder.sources import PackagedTemplateSource, TemplateSource


def placeholder_body(ref: str, location: str) -> str:
    """Body emitted when no source has *ref*."""
    return f"// Template: {ref}\n// This file would be loaded from {location}/{ref}\n"


class TemplateResolver:
    """Materialises manifest file descriptors from an ordered chain of sources."""

    def __init__(self, sources: Sequence[TemplateSource] | None = None) -> None:
        self.sources: list[TemplateSource] = (
            list(sources) if sources else [PackagedTemplateSource()]
        )

    async def load_body(self, ref: str) -> str | None:
        """Return the body for *ref* from the first source that has it."""
        for source in self.sources:
            body = await source.fetch(ref)
            if body is not None:
                return body
        return None

    async def resolve_one(self, descriptor: FileDescriptor) -> GeneratedFile:
        body = await self.load_body(descriptor.template)
        if body is None:
            body = placeholder_body(descriptor.template, self.sources[0].location)
        return GeneratedFile(
            path=descriptor.path,
            content=body,
            overwrite=descriptor.overwrite,
        )

    async def resolve(self, files: Sequence[FileDescriptor]) -> list[GeneratedFile]:
        """Resolve every descriptor concurrently.

        Args:
            files: The manifest's file descriptors, in declaration order.

        Returns:
            One ``GeneratedFile`` per descriptor, in descriptor order.
        """
        return list(await asyncio.gather(*(self.resolve_one(d) for d in files)))
