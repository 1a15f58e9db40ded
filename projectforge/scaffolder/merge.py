"""Merge engine: the single place where the path -> file map is built.

Three rules, applied strictly in source order and then list order:

* files: the first source to claim a path keeps it, unless a later file for
  that path has ``overwrite=True``, in which case the later file replaces it;
* dependencies: key-by-key union, the later source's version wins;
* environment variables: deduplicated by name, the first declaration wins.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from projectforge.models import EnvVarSpec, GeneratedFile


def merge_files(file_sets: Iterable[Iterable[GeneratedFile]]) -> list[GeneratedFile]:
    """Combine ordered file sets into one list with unique paths.

    A replaced entry keeps its original position; the output order is the
    order in which each path was first claimed.

    Args:
        file_sets: Sources in precedence order, conventionally
            ``[base, integrations, features, analysis]``.

    Returns:
        The merged files.
    """
    merged: dict[str, GeneratedFile] = {}
    for files in file_sets:
        for file in files:
            if file.path not in merged or file.overwrite:
                merged[file.path] = file
    return list(merged.values())


def merge_dependencies(maps: Iterable[Mapping[str, str]]) -> dict[str, str]:
    """Union dependency maps; a later map's version replaces an earlier one.

    No version-range reconciliation is attempted.
    """
    merged: dict[str, str] = {}
    for deps in maps:
        merged.update(deps)
    return merged


def merge_env_vars(groups: Iterable[Iterable[EnvVarSpec]]) -> list[EnvVarSpec]:
    """Deduplicate env var declarations by name, keeping the first one seen."""
    seen: dict[str, EnvVarSpec] = {}
    for group in groups:
        for env_var in group:
            if env_var.name not in seen:
                seen[env_var.name] = env_var
    return list(seen.values())


def find_path_conflicts(
    sources: Mapping[str, Sequence[str]],
) -> dict[str, list[str]]:
    """Return ``{path: [source names]}`` for paths claimed by more than one source.

    Args:
        sources: Source name -> the paths it writes, e.g. feature id -> files.
    """
    claims: dict[str, list[str]] = {}
    for name, paths in sources.items():
        for path in dict.fromkeys(paths):
            claims.setdefault(path, []).append(name)
    return {path: names for path, names in claims.items() if len(names) > 1}
