import pytest

from gpslogger.app import LoggerScreen
from gpslogger.common.config import load_app_config
from gpslogger.common.logging_setup import configure_logging
from gpslogger.common.state import PreferenceStore
from gpslogger.services.logs import LogRepository

from tests.fakes import (
    FakeLocationSource,
    FakeNotificationBackend,
    FakeSocialClient,
    RecordingClientFactory,
    StaticResolver,
)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    monkeypatch.delenv("GPSLOGGER_STATE_DIR", raising=False)
    monkeypatch.delenv("GPSLOGGER_LOG_LEVEL", raising=False)
    monkeypatch.delenv("GPSLOGGER_LOG_FORMAT", raising=False)


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    configure_logging()


@pytest.fixture
def store(tmp_path):
    return PreferenceStore(tmp_path / "state" / "preferences.json")


@pytest.fixture
def repository(store):
    return LogRepository(store)


@pytest.fixture
def config(tmp_path):
    return load_app_config({
        "state_dir": str(tmp_path / "state"),
        "poller": {"interval_s": 0.05},
        "export": {"directory": str(tmp_path / "exports")},
        "notification": {"delay_s": 1},
        "tracking": {"interval_s": 60, "max_logs": 100},
        "geo": {"db_path": str(tmp_path / "geo.db")},
    })


@pytest.fixture
def notification_backend():
    return FakeNotificationBackend()


@pytest.fixture
def social_client():
    return FakeSocialClient()


@pytest.fixture
def client_factory(social_client):
    return RecordingClientFactory(social_client)


@pytest.fixture
def location_source():
    return FakeLocationSource()


@pytest.fixture
def resolver():
    return StaticResolver("")


@pytest.fixture
def screen(config, store, location_source, notification_backend, client_factory, resolver):
    return LoggerScreen.build(
        config,
        store=store,
        location_source=location_source,
        notification_backend=notification_backend,
        client_factory=client_factory,
        resolver=resolver,
    )
