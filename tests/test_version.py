from mtreeutil.version import (
    VERSION,
    VERSION_DEV,
    VERSION_MAJOR,
    VERSION_MINOR,
    VERSION_PATCH,
    format_version,
)


def test_format_release_version():
    assert format_version(1, 2, 3, "") == "1.2.3"


def test_format_dev_version():
    assert format_version(2, 0, 10, "-rc1") == "2.0.10-rc1"


def test_current_version_string():
    assert VERSION == "0.5.1-dev"
    assert VERSION == format_version(VERSION_MAJOR, VERSION_MINOR, VERSION_PATCH, VERSION_DEV)


def test_version_parts_are_recoverable():
    release = format_version(VERSION_MAJOR, VERSION_MINOR, VERSION_PATCH, "")
    assert release == "0.5.1"
    assert VERSION.startswith(release)
    assert tuple(int(part) for part in release.split(".")) == (
        VERSION_MAJOR,
        VERSION_MINOR,
        VERSION_PATCH,
    )