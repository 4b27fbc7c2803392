"""
HTTP Server für die emulierten Geräte (aiohttp)

Eine einzige Catch-All Route, alles Weitere entscheidet der Router.
Ein Shutdown-Request wird erst beantwortet, danach endet run().
"""

import asyncio
import json
import logging

from aiohttp import web

from .const import SHUTDOWN_TIMEOUT, SIMULATOR_HOST, SIMULATOR_PORT
from .handlers import SimRequest, SimResponse
from .router import Router
from .state import WorldState

_LOGGER = logging.getLogger(__name__)


class BadRequestBody(ValueError):
    """Request-Body ist kein gültiges JSON"""


class SimulatorServer:
    """aiohttp Anwendung rund um einen Router"""

    def __init__(self, state=None, host=SIMULATOR_HOST, port=SIMULATOR_PORT):
        self.state = state if state is not None else WorldState()
        self.router = Router(self.state)
        self.host = host
        self.port = port
        self.shutdown_requested = False
        self._stop_event = None

        self._app = web.Application()
        self._app.router.add_route("*", "/{tail:.*}", self._handle)

    @property
    def app(self) -> web.Application:
        return self._app

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"

    # ====================================================
    # Request-Verarbeitung
    # ====================================================

    async def _handle(self, request: web.Request) -> web.StreamResponse:
        # raw_path = Pfad + Query, genau wie gesendet
        url = request.raw_path

        try:
            body = await read_json_body(request)
        except BadRequestBody as err:
            _LOGGER.warning("%s %s: ungültiger JSON-Body (%s)", request.method, url, err)
            return web.Response(status=400, text="Bad Request")

        response = self.router.dispatch(SimRequest(request.method, url, body))
        if response is None:
            return web.Response(status=404, text=f"Cannot {request.method} {request.path}")

        web_response = to_web_response(response)
        if response.shutdown:
            # Antwort komplett rausschicken, erst dann stoppen
            await web_response.prepare(request)
            await web_response.write_eof()
            self.request_stop()
        return web_response

    def request_stop(self):
        self.shutdown_requested = True
        if self._stop_event is not None:
            self._stop_event.set()

    # ====================================================
    # Server-Loop
    # ====================================================

    async def run(self):
        """Server starten und laufen lassen bis ein Shutdown kommt"""
        self._stop_event = asyncio.Event()
        if self.shutdown_requested:
            self._stop_event.set()

        runner = web.AppRunner(self._app, access_log=None, shutdown_timeout=SHUTDOWN_TIMEOUT)
        await runner.setup()
        site = web.TCPSite(runner, self.host, self.port)
        await site.start()
        _LOGGER.info("Simulator lauscht auf %s", self.url)

        try:
            await self._stop_event.wait()
        finally:
            _LOGGER.info("Simulator wird beendet")
            await runner.cleanup()


async def read_json_body(request: web.Request):
    """JSON-Body lesen; leeres Objekt wenn kein JSON gesendet wurde"""
    if not request.body_exists:
        return {}
    content_type = request.content_type
    if content_type != "application/json" and not content_type.endswith("+json"):
        return {}

    raw = await request.read()
    if not raw.strip():
        return {}
    try:
        # UnicodeDecodeError ist auch ein ValueError
        return json.loads(raw.decode("utf-8"))
    except ValueError as err:
        raise BadRequestBody(str(err)) from err


def to_web_response(response: SimResponse) -> web.Response:
    text = response.text()
    if not text:
        return web.Response(status=response.status)
    return web.Response(status=response.status, text=text, content_type="application/json")
