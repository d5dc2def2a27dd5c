import pytest

from mtreeutil.pathqueue import PathUpdate, PathUpdateQueue


def _queue():
    queue = PathUpdateQueue.from_items(
        [
            PathUpdate(path="not/the/longest"),
            PathUpdate(path="almost/the/longest"),
            PathUpdate(path="."),
            PathUpdate(path="short"),
        ]
    )
    return queue


def test_path_update_heap_order():
    queue = _queue()
    v = "this/is/one/is/def/the/longest"
    queue.push(PathUpdate(path=v))

    longest = len(v)
    p = None
    while len(queue) > 0:
        p = queue.pop().path
        assert len(p) <= longest
        longest = len(p)
    assert p == "."


def test_first_popped_is_longest():
    queue = _queue()
    v = "this/is/one/is/def/the/longest"
    queue.push(PathUpdate(path=v))
    assert queue.pop().path == v


def test_drain_yields_all_in_order():
    queue = _queue()
    paths = [item.path for item in queue.drain()]
    assert paths == ["almost/the/longest", "not/the/longest", "short", "."]
    assert len(queue) == 0
    assert not queue


def test_pop_empty_raises():
    with pytest.raises(IndexError):
        PathUpdateQueue().pop()


def test_payload_is_preserved():
    def func(path, value):
        return (path, value)

    queue = PathUpdateQueue()
    queue.push(PathUpdate(path="a/b", entry="entry", keyword="time", value="1.0", func=func))
    item = queue.pop()
    assert item.keyword == "time"
    assert item.func("a/b", item.value) == ("a/b", "1.0")