import json

import pytest

from astrorun.storage.base import MemoryStore
from astrorun.storage.highscore import DEFAULT_KEY, HighScoreKeeper
from astrorun.storage.json_store import JsonFileStore

from conftest import FailingStore


class TestMemoryStore:
    def test_get_missing_is_none(self):
        assert MemoryStore().get("nope") is None

    def test_set_counts_writes(self):
        store = MemoryStore({"a": 1})
        store.set("a", 2)
        store.set("b", 3)
        assert store.get("a") == 2
        assert store.get("b") == 3
        assert store.writes == 2


class TestJsonFileStore:
    def test_missing_file_reads_as_empty(self, tmp_path):
        assert JsonFileStore(tmp_path / "scores.json").get(DEFAULT_KEY) is None

    def test_set_creates_parents_and_persists(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "scores.json"
        JsonFileStore(path).set(DEFAULT_KEY, 321)

        assert json.loads(path.read_text()) == {DEFAULT_KEY: 321}
        assert JsonFileStore(path).get(DEFAULT_KEY) == 321
        assert not path.with_suffix(".json.tmp").exists()

    def test_set_keeps_other_keys(self, tmp_path):
        path = tmp_path / "scores.json"
        path.write_text(json.dumps({"other": "x"}))

        JsonFileStore(path).set(DEFAULT_KEY, 5)
        assert json.loads(path.read_text()) == {"other": "x", DEFAULT_KEY: 5}

    def test_corrupt_file_raises_on_get(self, tmp_path):
        path = tmp_path / "scores.json"
        path.write_text("{not json")
        with pytest.raises(ValueError):
            JsonFileStore(path).get(DEFAULT_KEY)

    @pytest.mark.parametrize("text", [
        '{"astroRunHighScore": 1e999}',
        '{"astroRunHighScore": Infinity}',
        '{"astroRunHighScore": NaN}',
        '{"astroRunHighScore": true}',
    ])
    def test_unrepresentable_value_loads_as_zero(self, tmp_path, text):
        path = tmp_path / "scores.json"
        path.write_text(text)
        assert HighScoreKeeper(JsonFileStore(path)).load() == 0

    def test_non_object_raises_on_get(self, tmp_path):
        path = tmp_path / "scores.json"
        path.write_text("[1, 2, 3]")
        with pytest.raises(ValueError):
            JsonFileStore(path).get(DEFAULT_KEY)

    def test_set_replaces_corrupt_file(self, tmp_path):
        path = tmp_path / "scores.json"
        path.write_text("garbage")
        JsonFileStore(path).set(DEFAULT_KEY, 7)
        assert JsonFileStore(path).get(DEFAULT_KEY) == 7

    def test_unwritable_location_raises_oserror(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        with pytest.raises(OSError):
            JsonFileStore(blocker / "scores.json").set(DEFAULT_KEY, 1)


class TestHighScoreKeeper:
    def test_absent_is_zero(self):
        assert HighScoreKeeper(MemoryStore()).load() == 0

    @pytest.mark.parametrize("raw,expected", [
        (250, 250),
        ("42", 42),
        ("abc", 0),
        ([1], 0),
        (-5, 0),
        (True, 0),
        (float("inf"), 0),
    ])
    def test_load_tolerates_bad_values(self, raw, expected):
        keeper = HighScoreKeeper(MemoryStore({DEFAULT_KEY: raw}))
        assert keeper.load() == expected

    def test_load_tolerates_failing_store(self):
        assert HighScoreKeeper(FailingStore()).load() == 0

    def test_load_tolerates_corrupt_file(self, tmp_path):
        path = tmp_path / "scores.json"
        path.write_text("{")
        assert HighScoreKeeper(JsonFileStore(path)).load() == 0

    def test_save(self):
        store = MemoryStore()
        keeper = HighScoreKeeper(store, key="custom")
        assert keeper.save(99) is True
        assert store.get("custom") == 99

    def test_save_failure_is_reported_not_raised(self, tmp_path):
        failing = FailingStore()
        assert HighScoreKeeper(failing).save(10) is False
        assert failing.set_calls == 1

        blocker = tmp_path / "blocker"
        blocker.write_text("")
        assert HighScoreKeeper(JsonFileStore(blocker / "scores.json")).save(10) is False

    def test_round_trip_through_file(self, tmp_path):
        path = tmp_path / "scores.json"
        HighScoreKeeper(JsonFileStore(path)).save(1234)
        assert HighScoreKeeper(JsonFileStore(path)).load() == 1234
