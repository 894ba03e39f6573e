"""
Logger Screen

The single screen of the app: a live log viewer, the start/stop switch,
clear/reload/export actions, settings, and "post my location".

The screen owns only display state (the log text and a pending export
confirmation). Everything persistent lives in the preference store and
is shared with the background tracker.
"""

from dataclasses import dataclass
from typing import Any

from gpslogger.common.config import AppConfig
from gpslogger.common.debug import DebugRecorder
from gpslogger.common.logging_setup import get_service_logger
from gpslogger.common.state import (
    CREDENTIAL_KEYS,
    KEY_DEBUG_MODE,
    STATE_FILE,
    PreferenceStore,
)
from gpslogger.services.export import ExportRecord, ExportWriter, FileWriter
from gpslogger.services.location import (
    MessageComposer,
    NullResolver,
    PlaceResolver,
    TownResolver,
)
from gpslogger.services.logs import LogPoller, LogRepository, LogView, feed
from gpslogger.services.notify import (
    NotificationBackend,
    NotificationEmitter,
    TermuxNotificationBackend,
)
from gpslogger.services.social import (
    PostOutcome,
    SocialCredentials,
    SocialPostAction,
    TwitterClient,
)
from gpslogger.services.social.service import ClientFactory
from gpslogger.services.tracking import (
    LocationSource,
    LocationTracker,
    TermuxLocationSource,
    TrackingControl,
)

logger = get_service_logger("screen")

DEBUG_BANNER = "Debug mode is enabled!"
EXPORTED_TITLE = "Exported"


@dataclass
class ExportDialog:
    """Confirmation shown after a successful export"""
    record: ExportRecord

    @property
    def title(self) -> str:
        return EXPORTED_TITLE

    @property
    def message(self) -> str:
        return f"Exported to {self.record.filename}."


_TRUE_WORDS = {"true", "on", "yes", "1"}
_FALSE_WORDS = {"false", "off", "no", "0"}


def parse_flag(value: Any) -> bool:
    """
    Read a settings switch sent as a bool or a familiar word.

    Raises:
        ValueError: For any other value
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    raise ValueError(f"Expected a boolean, got {value!r}")


def mask_secret(value: str | None) -> str:
    if not value:
        return ""
    if len(value) <= 4:
        return "*" * len(value)
    return "*" * (len(value) - 4) + value[-4:]


class LoggerScreen:
    """Screen actions wired to the shared preference store."""

    def __init__(
        self,
        store: PreferenceStore,
        repository: LogRepository,
        view: LogView,
        poller: LogPoller,
        tracking: TrackingControl,
        exporter: ExportWriter,
        post_action: SocialPostAction,
        debug: DebugRecorder | None = None,
    ):
        self.store = store
        self.repository = repository
        self.view = view
        self.poller = poller
        self.tracking = tracking
        self.exporter = exporter
        self.post_action = post_action
        self.debug = debug or DebugRecorder(store)
        self.export_dialog: ExportDialog | None = None

    @classmethod
    def build(
        cls,
        config: AppConfig,
        store: PreferenceStore | None = None,
        location_source: LocationSource | None = None,
        notification_backend: NotificationBackend | None = None,
        client_factory: ClientFactory | None = None,
        resolver: PlaceResolver | None = None,
    ) -> "LoggerScreen":
        """Wire every component from configuration; collaborators can be swapped."""
        store = store or PreferenceStore(config.state_dir / STATE_FILE)
        debug = DebugRecorder(store)
        repository = LogRepository(store)
        view = LogView()

        if resolver is None:
            resolver = (
                TownResolver(config.geo.db_path, config.geo.max_distance_km)
                if config.geo.db_path.exists()
                else NullResolver()
            )

        if location_source is None:
            location_source = TermuxLocationSource(
                command=config.tracking.command,
                provider=config.tracking.provider,
                timeout_s=config.tracking.timeout_s,
            )

        if notification_backend is None:
            notification_backend = TermuxNotificationBackend(
                command=config.notification.command,
                identifier=config.notification.identifier,
            )

        if client_factory is None:
            def client_factory(credentials: SocialCredentials) -> TwitterClient:
                return TwitterClient(
                    credentials,
                    api_url=config.social.api_url,
                    timeout_s=config.social.timeout_s,
                )

        tracker = LocationTracker(store, repository, location_source, config.tracking)
        emitter = NotificationEmitter(notification_backend, config.notification.delay_s)

        return cls(
            store=store,
            repository=repository,
            view=view,
            poller=LogPoller(repository, view, config.poller.interval_s),
            tracking=TrackingControl(store, tracker),
            exporter=ExportWriter(
                repository, view, FileWriter(config.export.directory), config.export
            ),
            post_action=SocialPostAction(
                store,
                MessageComposer(store, resolver),
                emitter,
                client_factory,
                debug,
            ),
            debug=debug,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def open(self) -> None:
        """Show the screen: first refresh, resume tracking, start polling."""
        self.poller.refresh()
        await self.tracking.resume()
        await self.poller.start()
        logger.info("Screen opened")

    async def close(self) -> None:
        """Tear down; the logging flag is kept for the next launch."""
        self.poller.stop()
        await self.tracking.tracker.stop_tracking(record=False)
        logger.info("Screen closed")

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    @property
    def logs_text(self) -> str:
        return self.view.text

    @property
    def debug_banner(self) -> str | None:
        return DEBUG_BANNER if self.store.get_bool(KEY_DEBUG_MODE) else None

    def affordances(self) -> dict[str, bool]:
        return self.tracking.affordances()

    def render(self) -> dict[str, Any]:
        """Everything the screen currently shows."""
        dialog = None
        if self.export_dialog is not None:
            dialog = {
                "title": self.export_dialog.title,
                "message": self.export_dialog.message,
                "filename": self.export_dialog.record.filename,
            }
        return {
            "debug_banner": self.debug_banner,
            "logs": self.view.text,
            "affordances": self.affordances(),
            "export_dialog": dialog,
        }

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    async def start(self) -> None:
        self.debug.record("LoggerScreen.start", "isLogging", True)
        await self.tracking.start()

    async def stop(self) -> None:
        self.debug.record("LoggerScreen.stop", "isLogging", False)
        await self.tracking.stop()

    def clear(self) -> None:
        self.tracking.tracker.clear_logs()
        self.view.reset()
        self.debug.record("LoggerScreen.clear", "logs", "")

    def reload(self) -> bool:
        return feed(self.repository, self.view)

    def export(self) -> ExportRecord | None:
        """
        Export the log and raise the confirmation dialog.

        Raises:
            ExportError: If the file could not be written (no dialog is shown)
        """
        record = self.exporter.export()
        if record is not None:
            self.export_dialog = ExportDialog(record)
            self.debug.record("LoggerScreen.export", "filename", record.filename)
        return record

    def acknowledge_export(self) -> None:
        self.export_dialog = None

    async def post_location(self) -> PostOutcome:
        return await self.post_action.run()

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def settings(self) -> dict[str, Any]:
        """Current settings with secrets masked."""
        values = {key: mask_secret(self.store.get_string(key)) for key in CREDENTIAL_KEYS}
        values[KEY_DEBUG_MODE] = self.store.get_bool(KEY_DEBUG_MODE)
        return values

    def update_settings(self, values: dict[str, Any]) -> dict[str, Any]:
        """
        Store credentials and the debug flag.

        Unknown keys are ignored; credential values are stored as text.

        Raises:
            ValueError: If the debug flag is not a boolean
        """
        updates: dict[str, Any] = {}
        for key in CREDENTIAL_KEYS:
            if key in values and values[key] is not None:
                updates[key] = str(values[key]).strip()
        if KEY_DEBUG_MODE in values:
            updates[KEY_DEBUG_MODE] = parse_flag(values[KEY_DEBUG_MODE])

        if updates:
            self.store.update(updates)
            logger.info(f"Settings updated: {', '.join(sorted(updates))}")
        return self.settings()
