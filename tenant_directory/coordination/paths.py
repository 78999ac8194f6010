# tenant_directory/coordination/paths.py
from typing import Tuple

from .errors import InvalidPathError

ROOT = "/"


def normalize_path(path: str) -> str:
    """
    Validate a node path and return it in canonical form.

    Canonical paths start with '/', have no trailing '/' (except the root)
    and contain no empty, '.' or '..' segments.
    """
    if not path or not path.startswith("/"):
        raise InvalidPathError(path)
    if path == ROOT:
        return ROOT
    stripped = path.rstrip("/")
    segments = stripped.split("/")[1:]
    for segment in segments:
        if segment in ("", ".", ".."):
            raise InvalidPathError(path, reason=f"Illegal segment '{segment}'.")
    return stripped


def join_path(parent: str, *segments: str) -> str:
    """Append child segments to a node path."""
    path = normalize_path(parent)
    for segment in segments:
        if not segment or "/" in segment:
            raise InvalidPathError(f"{path}/{segment}", reason="Child segment must be non-empty and contain no '/'.")
        path = f"{path.rstrip('/')}/{segment}"
    return path


def split_path(path: str) -> Tuple[str, str]:
    """Return (parent, name) for a non-root node path."""
    path = normalize_path(path)
    if path == ROOT:
        raise InvalidPathError(path, reason="The root node has no parent.")
    parent, _, name = path.rpartition("/")
    return (parent or ROOT, name)


def ancestors(path: str) -> list:
    """All proper ancestors of a path, root excluded, outermost first."""
    path = normalize_path(path)
    result = []
    current = path
    while True:
        parent, _ = split_path(current)
        if parent == ROOT:
            break
        result.append(parent)
        current = parent
    result.reverse()
    return result
