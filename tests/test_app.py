from unittest.mock import patch

import pytest

from gpslogger.app import DEBUG_BANNER, LoggerScreen, mask_secret
from gpslogger.common.exceptions import ExportError
from gpslogger.services.location import NullResolver, TownResolver
from gpslogger.services.social import PostOutcome

from tests.fakes import make_fix

CREDENTIALS = {
    "consumerKey": "consumer-key-1234",
    "consumerSecret": "consumer-secret-5678",
    "accessKey": "access-key-9012",
    "accessSecret": "access-secret-3456",
}


def test_clear_empties_view_and_store(screen, repository):
    repository.append("a")
    repository.append("b")
    screen.reload()
    assert screen.logs_text == "a\nb"

    screen.clear()

    assert screen.logs_text == ""
    assert repository.read() is None


def test_clear_is_idempotent(screen, repository):
    screen.clear()
    screen.clear()
    assert screen.logs_text == ""
    assert repository.read() is None


def test_reload_without_logs_keeps_text(screen, repository):
    repository.append("kept")
    screen.reload()
    repository.clear()

    assert screen.reload() is False
    assert screen.logs_text == "kept"


def test_export_shows_dialog_until_acknowledged(screen, repository):
    repository.append("line one")

    record = screen.export()

    assert record.path.read_text(encoding="utf-8") == "line one"
    dialog = screen.render()["export_dialog"]
    assert dialog == {
        "title": "Exported",
        "message": f"Exported to {record.filename}.",
        "filename": record.filename,
    }

    screen.acknowledge_export()
    assert screen.render()["export_dialog"] is None


def test_export_without_logs_shows_nothing(screen):
    assert screen.export() is None
    assert screen.export_dialog is None


def test_failed_export_shows_no_dialog(screen, repository):
    repository.append("line")
    with patch.object(screen.exporter.writer, "write", side_effect=ExportError("disk full")):
        with pytest.raises(ExportError):
            screen.export()
    assert screen.export_dialog is None


def test_debug_banner_follows_preference(screen, store):
    assert screen.render()["debug_banner"] is None
    store.set("isDebugMode", True)
    assert screen.render()["debug_banner"] == DEBUG_BANNER


@pytest.mark.parametrize(
    "value, expected",
    [(None, ""), ("", ""), ("abc", "***"), ("abcdefgh", "****efgh")],
)
def test_mask_secret(value, expected):
    assert mask_secret(value) == expected


def test_settings_are_masked(screen):
    current = screen.update_settings({**CREDENTIALS, "isDebugMode": True, "other": "x"})

    assert current["consumerKey"] == "*************1234"
    assert current["accessSecret"].endswith("3456")
    assert "access-secret" not in current["accessSecret"]
    assert current["isDebugMode"] is True
    assert "other" not in current


def test_update_settings_strips_and_keeps_unspecified(screen, store):
    screen.update_settings(CREDENTIALS)
    screen.update_settings({"consumerKey": "  new-key  ", "accessKey": None})

    assert store.get("consumerKey") == "new-key"
    assert store.get("accessKey") == "access-key-9012"


@pytest.mark.asyncio
async def test_post_location_end_to_end(screen, store, social_client, notification_backend):
    store.update({**CREDENTIALS, "currentLatitude": "35.0", "currentLongitude": "139.0"})

    assert await screen.post_location() == PostOutcome.POSTED

    expected = "https://www.google.com/maps/search/?api=1&query=35.0,139.0"
    assert social_client.posted == [expected]
    assert notification_backend.scheduled == [("Tweeted", expected, 1.0)]


@pytest.mark.asyncio
async def test_post_without_credentials_warns(screen, social_client, notification_backend):
    assert await screen.post_location() == PostOutcome.SKIPPED_NO_CREDENTIALS
    assert social_client.posted == []
    assert notification_backend.scheduled == [
        ("Warning", "Please set keys and secrets of Twitter.", 1.0)
    ]


@pytest.mark.asyncio
async def test_start_stop_affordances(screen):
    assert screen.render()["affordances"] == {"start": True, "stop": False}
    await screen.start()
    assert screen.render()["affordances"] == {"start": False, "stop": True}
    await screen.stop()
    assert screen.render()["affordances"] == {"start": True, "stop": False}


@pytest.mark.asyncio
async def test_open_close_keeps_logging_flag(config, store, location_source, notification_backend,
                                             client_factory, resolver):
    store.set("isLogging", True)
    screen = LoggerScreen.build(
        config,
        store=store,
        location_source=location_source,
        notification_backend=notification_backend,
        client_factory=client_factory,
        resolver=resolver,
    )

    await screen.open()
    assert screen.poller.is_running
    assert screen.tracking.tracker.is_running

    await screen.close()
    assert not screen.poller.is_running
    assert not screen.tracking.tracker.is_running
    assert store.get_bool("isLogging") is True
    assert not screen.repository.read()[-1].endswith("Stop locating")


@pytest.mark.asyncio
async def test_tracker_samples_show_up_after_reload(screen, location_source):
    location_source.fixes.append(make_fix(35.5, 139.5, 3.0))

    await screen.tracking.tracker.sample()
    screen.reload()

    assert "35.5,139.5 (±3.0m)" in screen.logs_text


def test_build_picks_resolver_from_geo_db(config, tmp_path, store):
    screen = LoggerScreen.build(config, store=store)
    assert isinstance(screen.post_action.composer.resolver, NullResolver)

    config.geo.db_path.touch()
    screen = LoggerScreen.build(config, store=store)
    assert isinstance(screen.post_action.composer.resolver, TownResolver)


@pytest.mark.parametrize(
    "value, expected",
    [(True, True), (False, False), ("false", False), ("Off", False), ("0", False), ("on", True)],
)
def test_debug_flag_accepts_bools_and_words(screen, store, value, expected):
    screen.update_settings({"isDebugMode": value})
    assert store.get("isDebugMode") is expected


@pytest.mark.parametrize("value", ["maybe", 1, None, [True]])
def test_debug_flag_rejects_other_values(screen, store, value):
    with pytest.raises(ValueError):
        screen.update_settings({"consumerKey": "abc", "isDebugMode": value})
    assert store.get("consumerKey") is None
    assert store.get("isDebugMode") is None
