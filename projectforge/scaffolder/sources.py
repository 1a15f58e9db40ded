"""Template body sources.

A source maps a template ref (``"payments/stripe/lib/config.ts"``) to the raw
body text, or ``None`` when it does not have it.  Sources never raise for a
missing body: the resolver falls through to the next source and finally to
a placeholder stub.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Protocol, runtime_checkable

import httpx

from projectforge.utils import print_warning

_DEFAULT_BODIES_DIR = Path(__file__).resolve().parent.parent / "template_bodies"


@runtime_checkable
class TemplateSource(Protocol):
    """Anything that can look up a template body by ref."""

    location: str

    async def fetch(self, ref: str) -> str | None:
        ...


# ---------------------------------------------------------------------------
# Packaged directory
# ---------------------------------------------------------------------------


class PackagedTemplateSource:
    """Reads template bodies from a directory tree (default: the packaged bodies)."""

    def __init__(self, root: str | Path | None = None) -> None:
        self.root = Path(root) if root is not None else _DEFAULT_BODIES_DIR
        # Placeholder text must not depend on where the package is installed.
        self.location = "projectforge/template_bodies" if root is None else str(self.root)

    def _path_for(self, ref: str) -> Path | None:
        candidate = (self.root / ref).resolve()
        # Refs must stay inside the root.
        if not candidate.is_relative_to(self.root.resolve()):
            return None
        return candidate

    async def fetch(self, ref: str) -> str | None:
        path = self._path_for(ref)
        if path is None or not path.is_file():
            return None
        return await asyncio.to_thread(path.read_text, encoding="utf-8")

    def __repr__(self) -> str:
        return f"PackagedTemplateSource({self.location!r})"


# ---------------------------------------------------------------------------
# Remote HTTP host
# ---------------------------------------------------------------------------


class HttpTemplateSource:
    """Fetches template bodies from ``<base_url>/<ref>`` over HTTP.

    A 404 means "not here"; connection failures, timeouts and other HTTP
    errors also resolve to ``None`` but print a warning so an unreachable
    host is visible on the console.
    """

    def __init__(self, base_url: str, timeout: float = 10.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.location = self.base_url

    def _client(self) -> httpx.AsyncClient:
        """Return a fresh ``AsyncClient`` configured with our base URL and timeout."""
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout, connect=5.0),
        )

    async def fetch(self, ref: str) -> str | None:
        try:
            async with self._client() as client:
                response = await client.get(f"/{ref.lstrip('/')}")
                if response.status_code == 404:
                    return None
                response.raise_for_status()
                return response.text
        except httpx.ConnectError:
            print_warning(f"Cannot connect to template host {self.base_url} (ref {ref})")
        except httpx.TimeoutException:
            print_warning(f"Template host timed out after {self.timeout}s fetching {ref}")
        except httpx.HTTPStatusError as exc:
            print_warning(
                f"Template host returned HTTP {exc.response.status_code} for {ref}"
            )
        return None

    def __repr__(self) -> str:
        return f"HttpTemplateSource({self.base_url!r})"
