"""
Screen Server

Local HTTP front for the logger screen. Every button on the screen is a
POST route; GET / returns what the screen currently shows.

Routes:
    GET  /                 screen state (logs, affordances, banner, dialog)
    GET  /health           liveness
    POST /tracking/start   start locating
    POST /tracking/stop    stop locating
    POST /logs/clear       clear stored logs and the view
    POST /logs/reload      refresh the view now
    POST /logs/export      export to a timestamped file
    POST /export/ack       dismiss the export confirmation
    POST /post             post the current location
    GET  /settings         credentials (masked) and debug flag
    PUT  /settings         update credentials and debug flag
"""

from datetime import datetime, timezone

from aiohttp import web

from gpslogger.app import LoggerScreen
from gpslogger.common.config import ServerSettings
from gpslogger.common.exceptions import ExportError
from gpslogger.common.logging_setup import get_service_logger

logger = get_service_logger("server")


class ScreenServer:
    """aiohttp application exposing a LoggerScreen."""

    def __init__(self, screen: LoggerScreen, settings: ServerSettings | None = None):
        self.screen = screen
        self.settings = settings or ServerSettings()
        self._runner: web.AppRunner | None = None

    def create_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/", self._screen_handler)
        app.router.add_get("/health", self._health_handler)
        app.router.add_post("/tracking/start", self._start_handler)
        app.router.add_post("/tracking/stop", self._stop_handler)
        app.router.add_post("/logs/clear", self._clear_handler)
        app.router.add_post("/logs/reload", self._reload_handler)
        app.router.add_post("/logs/export", self._export_handler)
        app.router.add_post("/export/ack", self._export_ack_handler)
        app.router.add_post("/post", self._post_handler)
        app.router.add_get("/settings", self._get_settings_handler)
        app.router.add_put("/settings", self._put_settings_handler)
        return app

    async def start(self) -> None:
        """Start serving on the configured host/port"""
        self._runner = web.AppRunner(self.create_app())
        await self._runner.setup()

        site = web.TCPSite(self._runner, self.settings.host, self.settings.port)
        await site.start()

        logger.info(f"Screen server started on {self.settings.host}:{self.settings.port}")

    async def stop(self) -> None:
        if self._runner:
            await self._runner.cleanup()
            self._runner = None
            logger.info("Screen server stopped")

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    async def _screen_handler(self, request: web.Request) -> web.Response:
        return web.json_response(self.screen.render())

    async def _health_handler(self, request: web.Request) -> web.Response:
        return web.json_response({
            "status": "healthy",
            "service": "gpslogger",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "components": {
                "poller": self.screen.poller.get_stats(),
                "tracker": "running" if self.screen.tracking.tracker.is_running else "stopped",
            },
        })

    async def _start_handler(self, request: web.Request) -> web.Response:
        await self.screen.start()
        return web.json_response(self.screen.render())

    async def _stop_handler(self, request: web.Request) -> web.Response:
        await self.screen.stop()
        return web.json_response(self.screen.render())

    async def _clear_handler(self, request: web.Request) -> web.Response:
        self.screen.clear()
        return web.json_response(self.screen.render())

    async def _reload_handler(self, request: web.Request) -> web.Response:
        self.screen.reload()
        return web.json_response(self.screen.render())

    async def _export_handler(self, request: web.Request) -> web.Response:
        try:
            record = self.screen.export()
        except ExportError as e:
            return web.json_response({"error": e.message}, status=500)

        if record is None:
            return web.json_response({"exported": False, **self.screen.render()})
        return web.json_response({"exported": True, **self.screen.render()})

    async def _export_ack_handler(self, request: web.Request) -> web.Response:
        self.screen.acknowledge_export()
        return web.json_response(self.screen.render())

    async def _post_handler(self, request: web.Request) -> web.Response:
        outcome = await self.screen.post_location()
        return web.json_response({"outcome": outcome.value})

    async def _get_settings_handler(self, request: web.Request) -> web.Response:
        return web.json_response(self.screen.settings())

    async def _put_settings_handler(self, request: web.Request) -> web.Response:
        try:
            body = await request.json()
        except ValueError:
            return web.json_response({"error": "Body must be JSON"}, status=400)
        if not isinstance(body, dict):
            return web.json_response({"error": "Body must be a JSON object"}, status=400)
        try:
            current = self.screen.update_settings(body)
        except ValueError as e:
            return web.json_response({"error": str(e)}, status=400)
        return web.json_response(current)
