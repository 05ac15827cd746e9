"""Mapping between schema file names and the REST resources they document."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .schema_models import ResourceDescriptor

SCHEMA_FILE_SUFFIX = ".schema.json"
HTTP_VERBS: tuple[str, ...] = ("get", "post", "put", "patch", "delete")


def describe_resource(
    path: Path | str, root: Mapping[str, Any] | None = None
) -> ResourceDescriptor | None:
    """Derive the resource descriptor from a `<tokens>.<verb>.schema.json` file name.

    Tokens containing an upper-case letter are path parameters (`customerNumber`
    becomes `{customerNumber}`), every other token is a literal route segment.

    Args:
      path: Schema file path or bare file name.
      root: Optional decoded schema, used to pick up the `restdocs` link.

    Returns:
      The descriptor, or None when the file name does not follow the convention.
    """
    name = Path(path).name
    if not name.endswith(SCHEMA_FILE_SUFFIX):
        return None
    tokens = name[: -len(SCHEMA_FILE_SUFFIX)].split(".")
    if len(tokens) < 2 or tokens[-1].lower() not in HTTP_VERBS:
        return None
    segments = tokens[:-1]
    if any(not segment for segment in segments):
        return None

    route = "/" + "/".join(_route_segment(segment) for segment in segments)
    restdocs_url = _restdocs_url(root)
    return ResourceDescriptor(
        name=name,
        method=tokens[-1].upper(),
        route=route,
        restdocs_url=restdocs_url,
    )


def _route_segment(token: str) -> str:
    if any(character.isupper() for character in token):
        return f"{{{token}}}"
    return token


def _restdocs_url(root: Mapping[str, Any] | None) -> str | None:
    if root is None:
        return None
    value = root.get("restdocs")
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None
