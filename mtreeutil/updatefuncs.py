"""Functions that restore a file's attributes from manifest values.

Each updater takes a path and the manifest value as a string, applies the
change only when it is needed, and returns the fresh ``lstat`` result.
Invalid values raise :class:`ValueError`; filesystem failures raise
:class:`OSError`.
"""

from __future__ import annotations

import base64
import binascii
import os
import re
import stat
import sys
from typing import Callable

from mtreeutil.govis import DEFAULT_VIS_FLAGS, unvis
from mtreeutil.xattr import set_xattr

__all__ = [
    "stat_is_uid",
    "stat_is_gid",
    "update_uid",
    "update_gid",
    "update_mode",
    "update_tar_time",
    "update_time",
    "update_link",
    "update_xattr",
    "lookup_update_func",
]

UpdateFunc = Callable[[str, str], os.stat_result]

_IS_WINDOWS = os.name == "nt"
_XATTR_SUPPORTED = sys.platform.startswith("linux")
_DECIMAL = re.compile(r"[+-]?[0-9]+")
_OCTAL = re.compile(r"[+-]?[0-7]+")


def _atoi(text: str) -> int:
    if not _DECIMAL.fullmatch(text):
        raise ValueError(f"invalid integer: {text!r}")
    return int(text)


def stat_is_uid(st: os.stat_result, uid: int) -> bool:
    """Report whether ``st`` is owned by ``uid``."""
    if _IS_WINDOWS:
        return False
    return st.st_uid == uid & 0xFFFFFFFF


def stat_is_gid(st: os.stat_result, gid: int) -> bool:
    """Report whether ``st`` belongs to group ``gid``."""
    if _IS_WINDOWS:
        return False
    return st.st_gid == gid & 0xFFFFFFFF


def update_uid(path: str, value: str) -> os.stat_result:
    """Change the owner of ``path`` (without following symlinks)."""
    uid = _atoi(value)
    st = os.lstat(path)
    if stat_is_uid(st, uid):
        return st
    os.lchown(path, uid, -1)
    return os.lstat(path)


def update_gid(path: str, value: str) -> os.stat_result:
    """Change the group of ``path`` (without following symlinks)."""
    gid = _atoi(value)
    st = os.lstat(path)
    if stat_is_gid(st, gid):
        return st
    os.lchown(path, -1, gid)
    return os.lstat(path)


def update_mode(path: str, value: str) -> os.stat_result:
    """Set the permission bits of ``path`` from an octal string."""
    st = os.lstat(path)
    # chmod on a symlink would pass through to the target
    if stat.S_ISLNK(st.st_mode):
        return st
    if not _OCTAL.fullmatch(value):
        raise ValueError(f"invalid octal mode: {value!r}")
    vmode = int(value, 8)
    if not -(1 << 31) <= vmode < (1 << 31):
        raise ValueError(f"mode out of range: {value!r}")
    if stat.S_IMODE(st.st_mode) == vmode:
        return st
    os.chmod(path, vmode & 0o7777)
    return os.lstat(path)


def _set_times(path: str, st: os.stat_result, ns: int) -> None:
    if stat.S_ISLNK(st.st_mode):
        os.utime(path, ns=(ns, ns), follow_symlinks=False)
    else:
        os.utime(path, ns=(ns, ns))


def _split_time(value: str, example: str) -> tuple[str, str]:
    parts = value.split(".", 1)
    if len(parts) != 2:
        raise ValueError(f"expected a number like {example}")
    return parts[0], parts[1]


def update_tar_time(path: str, value: str) -> os.stat_result:
    """Set the modification time of ``path`` with second precision.

    Nothing is changed when the whole seconds already match, so a
    sub-second part on disk is preserved.
    """
    st = os.lstat(path)
    secs_text, _ = _split_time(value, "1469104727.000000000")
    try:
        sec = _atoi(secs_text)
    except ValueError:
        raise ValueError(f"expected seconds, but got {secs_text!r}") from None
    if st.st_mtime_ns // 1_000_000_000 == sec:
        return st
    _set_times(path, st, sec * 1_000_000_000)
    return os.lstat(path)


def update_time(path: str, value: str) -> os.stat_result:
    """Set the modification time of ``path`` with nanosecond precision."""
    st = os.lstat(path)
    secs_text, frac_text = _split_time(value, "1469104727.871937272")
    joined = secs_text + frac_text
    try:
        nsec = _atoi(joined)
    except ValueError:
        raise ValueError(f"expected nano seconds, but got {joined!r}") from None
    if st.st_mtime_ns == nsec:
        return st
    _set_times(path, st, nsec)
    return os.lstat(path)


def update_link(path: str, value: str) -> os.stat_result:
    """Point the symlink ``path`` at the vis-encoded target ``value``."""
    linkname = unvis(value, DEFAULT_VIS_FLAGS)
    if os.readlink(path) == linkname:
        return os.lstat(path)
    os.remove(path)
    os.symlink(linkname, path)
    return os.lstat(path)


def update_xattr(path: str, name: str, value: str) -> os.stat_result:
    """Set extended attribute ``name`` on ``path`` from a base64 value."""
    if _XATTR_SUPPORTED:
        try:
            data = base64.b64decode(value, validate=True)
        except binascii.Error as exc:
            raise ValueError(f"invalid base64 value for {name!r}: {exc}") from None
        set_xattr(path, name, data)
    return os.lstat(path)


_UPDATE_FUNCS: dict[str, UpdateFunc] = {
    "mode": update_mode,
    "time": update_time,
    "tar_time": update_tar_time,
    "uid": update_uid,
    "gid": update_gid,
    "link": update_link,
}


def lookup_update_func(keyword: str) -> UpdateFunc:
    """Return the updater for a manifest keyword such as ``mode``.

    For ``xattr.<name>`` keywords the returned function sets that
    attribute. Raises :class:`KeyError` if no updater exists.
    """
    prefix, _, suffix = keyword.partition(".")
    if prefix == "xattr":

        def _update(path: str, value: str) -> os.stat_result:
            return update_xattr(path, suffix, value)

        return _update
    try:
        return _UPDATE_FUNCS[prefix]
    except KeyError:
        raise KeyError(f"no update function for keyword {keyword!r}") from None