import errno
import os

import pytest

from mtreeutil import xattr


@pytest.fixture
def fake_store(monkeypatch):
    store = {}

    def fake_get(path, attribute, *, follow_symlinks=True):
        try:
            return store[(os.fspath(path), attribute)]
        except KeyError:
            raise OSError(errno.ENODATA, "No data available") from None

    def fake_set(path, attribute, value, flags=0, *, follow_symlinks=True):
        store[(os.fspath(path), attribute)] = bytes(value)

    def fake_list(path=None, *, follow_symlinks=True):
        key = os.fspath(path)
        return [name for (p, name) in store if p == key]

    monkeypatch.setattr(xattr, "_SUPPORTED", True)
    monkeypatch.setattr(os, "getxattr", fake_get, raising=False)
    monkeypatch.setattr(os, "setxattr", fake_set, raising=False)
    monkeypatch.setattr(os, "listxattr", fake_list, raising=False)
    return store


def test_set_list_get_roundtrip(tmp_path, fake_store):
    target = tmp_path / "xattr.file"
    target.write_bytes(b"")
    expected = b"1234"
    xattr.set_xattr(str(target), "user.testing", expected)
    names = xattr.list_xattrs(str(target))
    assert len(names) > 0
    assert "user.testing" in names
    assert xattr.get_xattr(str(target), "user.testing") == expected


def test_list_empty_when_no_attributes(tmp_path, fake_store):
    target = tmp_path / "plain"
    target.write_bytes(b"")
    assert xattr.list_xattrs(str(target)) == []


def test_get_missing_attribute_raises(tmp_path, fake_store):
    target = tmp_path / "plain"
    target.write_bytes(b"")
    with pytest.raises(OSError):
        xattr.get_xattr(str(target), "user.absent")


def test_unsupported_platform_is_black_box(tmp_path, monkeypatch):
    monkeypatch.setattr(xattr, "_SUPPORTED", False)
    target = tmp_path / "xattr.file"
    target.write_bytes(b"")
    xattr.set_xattr(str(target), "user.testing", b"1234")
    assert xattr.list_xattrs(str(target)) == []
    assert xattr.get_xattr(str(target), "user.testing") == b""