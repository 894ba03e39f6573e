import asyncio
import re

import pytest

from gpslogger.common.config import TrackingSettings
from gpslogger.common.exceptions import TrackingError
from gpslogger.services.tracking import (
    LocationTracker,
    TermuxLocationSource,
    TrackingControl,
    parse_fix,
)

from tests.fakes import FakeLocationSource, make_fix

TIME = r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}"


def _tracker(store, repository, *fixes, max_logs=100):
    settings = TrackingSettings(interval_s=60, max_logs=max_logs)
    return LocationTracker(store, repository, FakeLocationSource(*fixes), settings)


def test_parse_fix():
    fix = parse_fix('{"latitude": 35.1, "longitude": 139.2, "accuracy": 4, "provider": "gps"}')
    assert (fix.latitude, fix.longitude, fix.accuracy, fix.provider) == (35.1, 139.2, 4.0, "gps")


@pytest.mark.parametrize("raw", ["", "{}", '{"latitude": "x", "longitude": 1}', "[1, 2]"])
def test_parse_fix_rejects_bad_output(raw):
    with pytest.raises(TrackingError):
        parse_fix(raw)


@pytest.mark.asyncio
async def test_sample_records_coordinate_and_line(store, repository):
    tracker = _tracker(store, repository, make_fix(35.6595, 139.7005, 4.0))

    fix = await tracker.sample()

    assert fix is not None
    assert store.get("currentLatitude") == "35.6595"
    assert store.get("currentLongitude") == "139.7005"
    (line,) = repository.read()
    assert re.fullmatch(rf"{TIME} 35\.6595,139\.7005 \(±4\.0m\)", line)


@pytest.mark.asyncio
async def test_failed_sample_is_logged_not_raised(store, repository):
    tracker = _tracker(store, repository, TrackingError("GPS disabled"))

    assert await tracker.sample() is None
    assert store.get("currentLatitude") is None
    (line,) = repository.read()
    assert re.fullmatch(rf"{TIME} location error: Tracking Error: GPS disabled", line)


@pytest.mark.asyncio
async def test_log_is_trimmed_to_max_logs(store, repository):
    tracker = _tracker(store, repository, *[make_fix(1.0 + i, 2.0) for i in range(4)], max_logs=2)
    for _ in range(4):
        await tracker.sample()

    lines = repository.read()
    assert len(lines) == 2
    assert "4.0,2.0" in lines[-1]


@pytest.mark.asyncio
async def test_start_and_stop_toggle_exclusive_affordances(store, repository):
    control = TrackingControl(store, _tracker(store, repository))
    assert control.affordances() == {"start": True, "stop": False}

    await control.start()
    assert store.get_bool("isLogging") is True
    assert control.affordances() == {"start": False, "stop": True}
    assert control.tracker.is_running

    await control.stop()
    assert store.get_bool("isLogging") is False
    assert control.affordances() == {"start": True, "stop": False}
    assert not control.tracker.is_running

    lines = repository.read()
    assert lines[0].endswith("Start locating")
    assert lines[-1].endswith("Stop locating")


@pytest.mark.asyncio
async def test_affordances_are_always_complementary(store, repository):
    control = TrackingControl(store, _tracker(store, repository))
    for action in (control.start, control.start, control.stop, control.stop, control.start):
        await action()
        state = control.affordances()
        assert state["start"] != state["stop"]
    await control.stop()


@pytest.mark.asyncio
async def test_resume_restarts_sampling(store, repository):
    store.set("isLogging", True)
    control = TrackingControl(store, _tracker(store, repository))

    await control.resume()
    assert control.tracker.is_running

    await control.tracker.stop_tracking(record=False)
    assert repository.read()[-1].endswith("Start locating")


def test_clear_logs(store, repository):
    repository.append("line")
    _tracker(store, repository).clear_logs()
    assert repository.read() is None


class _FakeProcess:
    def __init__(self, stdout=b"", returncode=0, stderr=b""):
        self.stdout = stdout
        self.returncode = returncode
        self.stderr = stderr

    async def communicate(self):
        return self.stdout, self.stderr


@pytest.mark.asyncio
async def test_termux_source_runs_command(monkeypatch):
    calls = []

    async def fake_exec(*args, **kwargs):
        calls.append(args)
        return _FakeProcess(b'{"latitude": 35.0, "longitude": 139.0, "accuracy": 3.5}')

    monkeypatch.setattr(asyncio, "create_subprocess_exec", fake_exec)

    fix = await TermuxLocationSource(provider="network").current_fix()

    assert calls == [("termux-location", "-p", "network", "-r", "once")]
    assert (fix.latitude, fix.longitude, fix.accuracy) == (35.0, 139.0, 3.5)


@pytest.mark.asyncio
async def test_termux_source_command_failure(monkeypatch):
    async def fake_exec(*args, **kwargs):
        return _FakeProcess(returncode=2, stderr=b"permission denied")

    monkeypatch.setattr(asyncio, "create_subprocess_exec", fake_exec)

    with pytest.raises(TrackingError, match="permission denied"):
        await TermuxLocationSource().current_fix()


@pytest.mark.asyncio
async def test_termux_source_missing_command(monkeypatch):
    async def fake_exec(*args, **kwargs):
        raise FileNotFoundError("termux-location")

    monkeypatch.setattr(asyncio, "create_subprocess_exec", fake_exec)

    with pytest.raises(TrackingError):
        await TermuxLocationSource().current_fix()
