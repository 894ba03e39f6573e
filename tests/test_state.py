import json
import threading

import pytest

from gpslogger.common.exceptions import StoreError
from gpslogger.common.state import KEY_IS_LOGGING, KEY_LOGS, PreferenceStore
from gpslogger.services.logs import LogRepository


def test_missing_file_reads_as_empty(store):
    assert store.get(KEY_LOGS) is None
    assert store.get("anything", "fallback") == "fallback"
    assert store.get_bool(KEY_IS_LOGGING) is False
    assert store.get_string("consumerKey") is None
    assert store.contains(KEY_LOGS) is False


def test_values_persist_across_instances(store):
    store.set(KEY_LOGS, ["a", "b"])
    store.set(KEY_IS_LOGGING, True)

    reopened = PreferenceStore(store.path)
    assert reopened.get(KEY_LOGS) == ["a", "b"]
    assert reopened.get_bool(KEY_IS_LOGGING) is True


def test_update_writes_several_keys(store):
    store.update({"currentLatitude": "35.0", "currentLongitude": "139.0"})
    assert store.snapshot() == {"currentLatitude": "35.0", "currentLongitude": "139.0"}


def test_delete_reports_presence(store):
    store.set(KEY_LOGS, ["a"])
    assert store.delete(KEY_LOGS) is True
    assert store.delete(KEY_LOGS) is False
    assert store.get(KEY_LOGS) is None


def test_corrupt_file_reads_as_empty(store):
    store.path.parent.mkdir(parents=True)
    store.path.write_text("{not json", encoding="utf-8")
    assert store.get(KEY_LOGS) is None

    store.set(KEY_LOGS, ["fresh"])
    assert json.loads(store.path.read_text(encoding="utf-8"))[KEY_LOGS] == ["fresh"]


def test_non_bool_reads_as_false(store):
    store.set(KEY_IS_LOGGING, "yes")
    assert store.get_bool(KEY_IS_LOGGING) is False


def test_observe_and_unsubscribe(store):
    seen = []
    unsubscribe = store.observe(KEY_LOGS, lambda key, value: seen.append((key, value)))

    store.set(KEY_LOGS, ["a"])
    store.delete(KEY_LOGS)
    store.set("other", 1)
    unsubscribe()
    store.set(KEY_LOGS, ["b"])

    assert seen == [(KEY_LOGS, ["a"]), (KEY_LOGS, None)]


def test_write_failure_raises_store_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    store = PreferenceStore(blocker / "preferences.json")

    with pytest.raises(StoreError):
        store.set(KEY_LOGS, ["a"])


def test_modify_transforms_current_value(store):
    assert store.modify("counter", lambda value: (value or 0) + 1) == 1
    assert store.modify("counter", lambda value: value + 1) == 2
    assert store.get("counter") == 2


def _run_concurrently(*targets):
    threads = [threading.Thread(target=target) for target in targets]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()


def test_writers_on_separate_instances_keep_each_others_keys(store):
    other = PreferenceStore(store.path)

    def write_many(target, prefix):
        def run():
            for i in range(100):
                target.set(f"{prefix}{i}", i)
        return run

    _run_concurrently(write_many(store, "a"), write_many(other, "b"))

    snapshot = PreferenceStore(store.path).snapshot()
    assert len(snapshot) == 200
    assert snapshot["a99"] == 99 and snapshot["b99"] == 99


def test_concurrent_log_appends_are_not_lost(store):
    first = LogRepository(store)
    second = LogRepository(PreferenceStore(store.path))

    def append_many(repository, prefix):
        def run():
            for i in range(50):
                repository.append(f"{prefix}{i}")
        return run

    _run_concurrently(append_many(first, "a"), append_many(second, "b"))

    lines = first.read()
    assert len(lines) == 100
    assert [line for line in lines if line.startswith("a")] == [f"a{i}" for i in range(50)]
