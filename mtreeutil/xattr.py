"""Access to extended file attributes.

Extended attributes are supported on Linux only. On other platforms
setting is a no-op, reading yields empty bytes and listing yields an
empty list.
"""

from __future__ import annotations

import os
import sys

__all__ = ["get_xattr", "set_xattr", "list_xattrs"]

_SUPPORTED = sys.platform.startswith("linux")


def get_xattr(path: str | os.PathLike, name: str) -> bytes:
    """Return the value of the extended attribute ``name`` on ``path``."""
    if not _SUPPORTED:
        return b""
    return os.getxattr(path, name)


def set_xattr(path: str | os.PathLike, name: str, value: bytes) -> None:
    """Set the extended attribute ``name`` on ``path`` to ``value``."""
    if not _SUPPORTED:
        return
    os.setxattr(path, name, bytes(value), 0)


def list_xattrs(path: str | os.PathLike) -> list[str]:
    """Return the names of all extended attributes on ``path``."""
    if not _SUPPORTED:
        return []
    return list(os.listxattr(path))