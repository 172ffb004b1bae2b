import json

import pytest

from fakeword.app.data.cache_store import SONORITY_GRAPH, SnapshotCache
from fakeword.core import SnapshotError


def test_save_and_load_round_trip(tmp_path):
    cache = SnapshotCache(tmp_path / "internal")
    path = cache.save(SONORITY_GRAPH, {"schema": 1, "nodes": {"start@onset": []}})

    assert path == tmp_path / "internal" / "sonority-graph.json"
    assert cache.exists(SONORITY_GRAPH)
    assert cache.load(SONORITY_GRAPH) == {"schema": 1, "nodes": {"start@onset": []}}
    assert list((tmp_path / "internal").glob("*.tmp")) == []


def test_missing_snapshot_is_a_miss(tmp_path):
    cache = SnapshotCache(tmp_path)
    assert not cache.exists("anything")
    assert cache.load("anything") is None


def test_corrupt_snapshot_is_a_miss(tmp_path):
    cache = SnapshotCache(tmp_path)
    cache.path_for(SONORITY_GRAPH).write_text("{not json", encoding="utf-8")
    assert cache.load(SONORITY_GRAPH) is None


def test_non_object_snapshot_is_a_miss(tmp_path):
    cache = SnapshotCache(tmp_path)
    cache.path_for(SONORITY_GRAPH).write_text(json.dumps([1, 2, 3]), encoding="utf-8")
    assert cache.load(SONORITY_GRAPH) is None


def test_invalidate_and_clear(tmp_path):
    cache = SnapshotCache(tmp_path)
    cache.save("one", {})
    cache.save("two", {})

    assert cache.invalidate("one")
    assert not cache.invalidate("one")
    assert cache.clear() == 1
    assert not cache.exists("two")
    assert SnapshotCache(tmp_path / "never-created").clear() == 0


def test_fingerprint_is_stamped_and_verified(tmp_path):
    cache = SnapshotCache(tmp_path, fingerprint="abc123")
    cache.save(SONORITY_GRAPH, {"schema": 1})
    payload = cache.load(SONORITY_GRAPH)

    assert payload == {"schema": 1, "source": "abc123"}
    cache.verify(SONORITY_GRAPH, payload)

    other = SnapshotCache(tmp_path, fingerprint="def456")
    with pytest.raises(SnapshotError):
        other.verify(SONORITY_GRAPH, other.load(SONORITY_GRAPH))
    with pytest.raises(SnapshotError):
        other.verify(SONORITY_GRAPH, {"schema": 1})
