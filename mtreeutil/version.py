"""Application name and version information."""

from __future__ import annotations

__all__ = [
    "APP_NAME",
    "VERSION_MAJOR",
    "VERSION_MINOR",
    "VERSION_PATCH",
    "VERSION_DEV",
    "VERSION",
    "format_version",
]

APP_NAME = "gomtree"

VERSION_MAJOR = 0
VERSION_MINOR = 5
VERSION_PATCH = 1
# Development marker; empty for releases.
VERSION_DEV = "-dev"


def format_version(major: int, minor: int, patch: int, dev: str) -> str:
    """Format a version string such as ``0.5.1-dev``."""
    return f"{major}.{minor}.{patch}{dev}"


VERSION = format_version(VERSION_MAJOR, VERSION_MINOR, VERSION_PATCH, VERSION_DEV)