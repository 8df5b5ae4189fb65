import threading

import pytest

from labnet.cache import LRUCache


def test_put_then_get_returns_data():
    cache = LRUCache(100)
    cache.put("example.com", 80, "/index.html", b"hello")
    assert cache.get("example.com", 80, "/index.html") == b"hello"
    assert len(cache) == 1


def test_miss_returns_none():
    cache = LRUCache(100)
    cache.put("example.com", 80, "/a", b"data")
    assert cache.get("example.com", 81, "/a") is None
    assert cache.get("example.org", 80, "/a") is None
    assert cache.get("example.com", 80, "/b") is None


def test_least_recently_used_is_evicted():
    cache = LRUCache(10)
    cache.put("h", 1, "/a", b"aaaa")
    cache.put("h", 1, "/b", b"bbbb")
    cache.put("h", 1, "/c", b"cccc")
    assert cache.get("h", 1, "/a") is None
    assert cache.get("h", 1, "/b") == b"bbbb"
    assert cache.get("h", 1, "/c") == b"cccc"


def test_get_refreshes_recency():
    cache = LRUCache(10)
    cache.put("h", 1, "/a", b"aaaa")
    cache.put("h", 1, "/b", b"bbbb")
    assert cache.get("h", 1, "/a") == b"aaaa"
    cache.put("h", 1, "/c", b"cccc")
    assert cache.get("h", 1, "/b") is None
    assert cache.get("h", 1, "/a") == b"aaaa"


def test_size_never_exceeds_capacity():
    cache = LRUCache(50)
    for i in range(40):
        cache.put("h", 80, f"/{i}", bytes(i % 13))
        assert cache.size <= cache.capacity


def test_replacing_key_keeps_single_entry():
    cache = LRUCache(100)
    cache.put("h", 80, "/p", b"old")
    cache.put("h", 80, "/p", b"newer")
    assert cache.get("h", 80, "/p") == b"newer"
    assert len(cache) == 1
    assert cache.size == len(b"newer")


def test_oversized_object_rejected():
    cache = LRUCache(4)
    with pytest.raises(ValueError):
        cache.put("h", 80, "/big", b"12345")
    assert len(cache) == 0


def test_negative_capacity_rejected():
    with pytest.raises(ValueError):
        LRUCache(-1)


def test_concurrent_access_keeps_invariants():
    cache = LRUCache(200)

    def worker(n):
        for i in range(200):
            cache.put("h", n, f"/{i % 7}", b"z" * (i % 20))
            cache.get("h", n, f"/{(i + 3) % 7}")

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert cache.size <= cache.capacity
    assert len(cache) <= 28