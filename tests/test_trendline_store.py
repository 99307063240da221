"""Tests for trendline validation and persistence."""

import math
import tempfile
from pathlib import Path
from typing import Optional

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from chartfeed.adapters.external.storage.in_memory_key_value_store import InMemoryKeyValueStore
from chartfeed.adapters.external.storage.json_file_key_value_store import JsonFileKeyValueStore
from chartfeed.core.domain.entities.trendline_entity import TrendlineEntity
from chartfeed.core.repositories.key_value_store import KeyValueStore
from chartfeed.core.services.trendline_store_service import TrendlineStore

KEY = "tradingChart_trendlines"


class BrokenStore(KeyValueStore):
    def __init__(self, fail_get: bool = False, fail_set: bool = False):
        self.value: Optional[str] = None
        self._fail_get = fail_get
        self._fail_set = fail_set

    def get(self, key: str) -> Optional[str]:
        if self._fail_get:
            raise OSError("storage unavailable")
        return self.value

    def set(self, key: str, value: str) -> None:
        if self._fail_set:
            raise OSError("quota exceeded")
        self.value = value


def make_line(t0=1_700_000_000, p0=100.0, t1=1_700_003_600, p1=110.0, **extra):
    return {"start": {"time": t0, "price": p0}, "end": {"time": t1, "price": p1}, **extra}


@st.composite
def valid_trendlines(draw):
    t0 = draw(st.integers(min_value=0, max_value=2_000_000_000))
    t1 = draw(st.integers(min_value=t0 + 1, max_value=2_000_000_001))
    prices = st.floats(min_value=1e-8, max_value=1e7, allow_nan=False, allow_infinity=False)
    return make_line(
        t0,
        draw(prices),
        t1,
        draw(prices),
        id=draw(st.text(min_size=1, max_size=12)),
        color=draw(st.sampled_from(["#2962FF", "#FF6D00", "#00C853"])),
        lineWidth=draw(st.integers(min_value=1, max_value=5)),
    )


class TestValidate:
    def test_accepts_ascending_positive(self):
        assert TrendlineStore.validate(make_line())

    @pytest.mark.parametrize(
        "line",
        [
            make_line(t1=1_700_000_000),             # same time
            make_line(t0=1_700_003_601),             # reversed
            make_line(p0=0),
            make_line(p1=-5),
            make_line(p0=math.inf),
            make_line(t1=math.nan),
            make_line(p0="abc"),
            make_line(t0="1", p0="10", t1="2", p1="12"),   # string-encoded
            make_line(t0=False, p0=True, t1=True, p1=True), # booleans
            {"start": {"time": 1, "price": 1}},      # missing end
        ],
    )
    def test_rejects_invalid(self, line):
        assert not TrendlineStore.validate(line)

    def test_accepts_entity(self):
        assert TrendlineStore.validate(TrendlineEntity.model_validate(make_line()))


class TestRoundTrip:
    """
    *For any* valid trendline set, load() after save() returns the same
    records minus the renderer's `series` handle.
    """

    @given(lines=st.lists(valid_trendlines(), max_size=10))
    @settings(max_examples=100)
    def test_save_then_load(self, lines):
        store = TrendlineStore(InMemoryKeyValueStore(), storage_key=KEY)
        with_handles = [{**line, "series": object()} for line in lines]

        assert store.save(with_handles) is True
        assert store.load() == lines

    def test_entities_are_serialized_without_series(self):
        kv = InMemoryKeyValueStore()
        store = TrendlineStore(kv, storage_key=KEY)
        entity = TrendlineEntity.model_validate(make_line(series="handle", color="red"))

        assert store.save([entity])
        loaded = store.load()
        assert "series" not in loaded[0]
        assert loaded[0]["color"] == "red"

    def test_save_overwrites_whole_set(self):
        store = TrendlineStore(InMemoryKeyValueStore(), storage_key=KEY)
        store.save([make_line(id="a"), make_line(id="b")])
        store.save([make_line(id="c")])
        assert [t["id"] for t in store.load()] == ["c"]


class TestFailures:
    def test_load_missing_key_is_empty(self):
        assert TrendlineStore(InMemoryKeyValueStore(), storage_key=KEY).load() == []

    def test_load_corrupt_json_is_empty(self):
        kv = InMemoryKeyValueStore({KEY: "{not json"})
        assert TrendlineStore(kv, storage_key=KEY).load() == []

    def test_load_non_list_is_empty(self):
        kv = InMemoryKeyValueStore({KEY: '{"start": 1}'})
        assert TrendlineStore(kv, storage_key=KEY).load() == []

    def test_load_store_error_is_empty(self):
        assert TrendlineStore(BrokenStore(fail_get=True), storage_key=KEY).load() == []

    def test_save_store_error_is_false_and_keeps_previous(self):
        kv = BrokenStore()
        store = TrendlineStore(kv, storage_key=KEY)
        assert store.save([make_line(id="first")])
        previous = kv.value

        kv._fail_set = True
        assert store.save([make_line(id="second")]) is False
        assert kv.value == previous

    def test_save_unserializable_is_false(self):
        kv = InMemoryKeyValueStore()
        store = TrendlineStore(kv, storage_key=KEY)
        assert store.save([make_line(meta=object())]) is False
        assert kv.get(KEY) is None


class TestJsonFileStore:
    def test_persists_across_instances(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "nested" / "storage.json"

            first = TrendlineStore(JsonFileKeyValueStore(path), storage_key=KEY)
            assert first.save([make_line(id="x")])

            second = TrendlineStore(JsonFileKeyValueStore(path), storage_key=KEY)
            assert second.load() == [make_line(id="x")]

    def test_missing_file_reads_as_absent(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            kv = JsonFileKeyValueStore(Path(tmpdir) / "none.json")
            assert kv.get(KEY) is None

    def test_other_keys_are_preserved(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            kv = JsonFileKeyValueStore(Path(tmpdir) / "storage.json")
            kv.set("other", "1")
            kv.set(KEY, "[]")
            assert kv.get("other") == "1"
            assert kv.get(KEY) == "[]"

    def test_corrupt_file_is_replaced_on_save(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "storage.json"
            path.write_text("{not json", encoding="utf-8")
            store = TrendlineStore(JsonFileKeyValueStore(path), storage_key=KEY)

            assert store.load() == []
            assert store.save([make_line(id="fresh")]) is True
            assert store.load() == [make_line(id="fresh")]

    def test_no_temp_file_left_behind(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "storage.json"
            JsonFileKeyValueStore(path).set(KEY, "[]")
            assert sorted(p.name for p in Path(tmpdir).iterdir()) == ["storage.json"]

    def test_temp_file_removed_when_replace_fails(self, monkeypatch):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "storage.json"
            kv = JsonFileKeyValueStore(path)

            def failing_replace(src, dst):
                raise OSError("disk full")

            monkeypatch.setattr(
                "chartfeed.adapters.external.storage.json_file_key_value_store.os.replace",
                failing_replace,
            )
            store = TrendlineStore(kv, storage_key=KEY)
            assert store.save([make_line()]) is False
            assert list(Path(tmpdir).iterdir()) == []
