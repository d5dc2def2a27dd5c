# mtreeutil

Building blocks for working with mtree-style file manifests:

- **`mtreeutil.govis`**: a vis(3)/unvis(3) encoder and decoder. Encoding works
  on the UTF-8 bytes of a string, so the output is plain ASCII. Decoding uses
  the `surrogateescape` error handler, so bytes that are not valid UTF-8
  survive a round trip.
- **`mtreeutil.xattr`**: `get_xattr`, `set_xattr` and `list_xattrs` for
  extended attributes. They work on Linux only. On other platforms
  `set_xattr` does nothing, `get_xattr` returns `b""` and `list_xattrs`
  returns `[]`.
- **`mtreeutil.updatefuncs`**: restore file attributes from manifest values:
  uid, gid, mode, time, tar_time, symlink target and xattr.
- **`mtreeutil.pathqueue`**: `PathUpdateQueue` hands out pending `PathUpdate`
  items longest path first. Directory mtimes can then be restored after
  their contents are done.
- **`mtreeutil.version`**: `APP_NAME`, `VERSION` and `format_version`.

The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Encoding names

```python
from mtreeutil.govis import DEFAULT_VIS_FLAGS, VisFlag, vis, unvis

flags = VisFlag.WHITE | VisFlag.OCTAL | VisFlag.GLOB   # same as DEFAULT_VIS_FLAGS
encoded = vis("hello world", flags)      # 'hello\\040world'
assert unvis(encoded, flags) == "hello world"
```

`vis` also accepts `bytes`. Of the flags, only `VisFlag.HTTPSTYLE` changes how
`unvis` decodes.

`VisError` (a subclass of `ValueError`) is raised when `vis` is given an
unknown flag bit, or when `unvis` meets a bad escape sequence, such as an
octal value above 255.

## Restoring attributes

```python
from mtreeutil.updatefuncs import lookup_update_func, update_mode, update_time

update_mode("some/file", "0644")
update_time("some/file", "1469104727.871937272")

func = lookup_update_func("tar_time")
func("some/file", "1469104727.000000000")
```

Each updater changes the file only when needed. It returns the file's
`os.stat_result` from `os.lstat`.

- `update_uid` and `update_gid` take decimal ids and use `os.lchown`.
- `update_mode` takes an octal string. It leaves symlinks alone.
- `update_time` sets the mtime to the nanosecond.
- `update_tar_time` does nothing when the whole seconds already match.
- `update_link` takes a vis-encoded target and replaces the symlink when its
  target differs.
- `update_xattr(path, name, value)` takes a base64 value. On platforms other
  than Linux it changes nothing.

`lookup_update_func` maps the keywords `mode`, `time`, `tar_time`, `uid`,
`gid`, `link` and `xattr.<name>` to an updater. For any other keyword it
raises `KeyError`.

Bad values raise `ValueError`. Filesystem failures raise `OSError`.

`stat_is_uid` and `stat_is_gid` check the ownership of a stat result. On
Windows they always return `False`.

## Ordering directory updates

```python
from mtreeutil.pathqueue import PathUpdate, PathUpdateQueue

queue = PathUpdateQueue()
queue.push(PathUpdate(path="."))
queue.push(PathUpdate(path="a/b/c"))
[item.path for item in queue.drain()]    # ['a/b/c', '.']
```

`PathUpdateQueue.from_items` builds a queue from an iterable of updates.
`pop` raises `IndexError` on an empty queue. Updates with paths of the same
length come out in the order they were pushed.

## What this package does not do

This package does not parse or write manifest files, and it does not walk
directory trees or read tar archives to build a manifest. It does not compare
a tree against a manifest, and it has no command-line tool. It only provides
the encoding, attribute and ordering pieces listed above.