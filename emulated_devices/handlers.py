"""
Handler für die emulierten Geräte-APIs

Jeder Handler bedient einen eigenen Ausschnitt der URLs. handle() liefert
entweder eine SimResponse (Request erledigt) oder None (weiterreichen).
Die Handler kennen kein HTTP-Framework und lassen sich direkt testen.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Optional

from .const import (
    ARISTON_BOOST_MARKER,
    ARISTON_FEATURES_MARKER,
    ARISTON_LOGIN_PATH,
    ARISTON_PLANT_DATA_SEGMENT,
    ARISTON_PLANTS_SEGMENT,
    ARISTON_TEMPERATURES_MARKER,
    ARISTON_TOKEN,
    OPENEMS_CHANNELS,
    SHELLY_GENERATION,
    SHELLY_LIST_METHODS_PATH,
    SHELLY_METHODS,
    SHELLY_PATH,
    SHELLY_STATUS_PATH,
    SHUTDOWN_PATH,
    STATE_PATH,
    TESLALOGGER_FIXED,
    TESLALOGGER_PREFIX,
    VEHICLE_NOT_FOUND,
)
from .state import WorldState

_LOGGER = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
JSON_SEPARATORS = (",", ":")  # kompakt, ohne Leerzeichen


# ====================================================
# Request / Response
# ====================================================

@dataclass
class SimRequest:
    method: str
    url: str                  # Pfad inkl. Query-String
    body: Any = None          # geparstes JSON oder None


@dataclass
class SimResponse:
    status: int = 200
    body: Any = None          # None = leerer Body
    shutdown: bool = False    # Prozess nach der Antwort beenden
    raw: Optional[str] = field(default=None, repr=False)  # fertig serialisiert

    def text(self) -> str:
        """Body so wie er über die Leitung geht"""
        if self.raw is not None:
            return self.raw
        if self.body is None:
            return ""
        return json.dumps(self.body, separators=JSON_SEPARATORS, ensure_ascii=False)


def ok(body=None) -> SimResponse:
    return SimResponse(body=body)


# ====================================================
# Handler
# ====================================================

class Handler:
    """Basis: ein Ausschnitt der API"""

    name = "handler"

    def __init__(self, state: WorldState):
        self.state = state

    def handle(self, request: SimRequest) -> Optional[SimResponse]:
        raise NotImplementedError


class StateControlHandler(Handler):
    """Zustand setzen/lesen und Simulator beenden"""

    name = "state"

    def handle(self, request):
        if request.method == "POST" and request.url == STATE_PATH:
            self.state.replace(request.body)
            return ok()
        if request.method == "POST" and request.url == SHUTDOWN_PATH:
            _LOGGER.info("Shutdown angefordert")
            return SimResponse(shutdown=True)
        if request.url == STATE_PATH:
            # exakt das gespeicherte Dokument serialisieren
            raw = json.dumps(self.state.snapshot(), separators=JSON_SEPARATORS, ensure_ascii=False)
            return SimResponse(raw=raw)
        return None


class OpenEmsHandler(Handler):
    """OpenEMS REST: vier feste Channels aus "site" """

    name = "openems"

    def handle(self, request):
        path = OPENEMS_CHANNELS.get(request.url)
        if request.method != "GET" or path is None:
            return None
        return ok({"value": self.state.site_value(*path)})


class TeslaLoggerHandler(Handler):
    """TeslaLogger /currentjson/<id>"""

    name = "teslalogger"

    def handle(self, request):
        if request.method != "GET" or not request.url.startswith(TESLALOGGER_PREFIX):
            return None

        vehicle = None
        vehicle_id = parse_vehicle_id(request.url)
        if vehicle_id is not None:
            vehicle = self.state.vehicle(vehicle_id)
        if vehicle is None:
            _LOGGER.debug("Fahrzeug nicht gefunden: %s", request.url)
            return SimResponse(status=404, body={"error": VEHICLE_NOT_FOUND})

        data = {
            "battery_level": vehicle["soc"],
            "battery_range_km": vehicle["range"],
        }
        data.update(TESLALOGGER_FIXED)
        return ok(data)


def parse_vehicle_id(url: str) -> Optional[int]:
    """Führende Ganzzahl des zweiten Pfadsegments ("/currentjson/2?x" → 2)"""
    segments = url.split("/")
    if len(segments) < 3:
        return None
    match = _LEADING_INT.match(segments[2])
    if not match:
        return None
    return int(match.group(1))


class ShellyHandler(Handler):
    """Shelly Gen2 Schalter; PV-Leistung und -Energie als Messwerte"""

    name = "shelly"

    def handle(self, request):
        if request.url == SHELLY_PATH:
            return ok({"gen": SHELLY_GENERATION})
        if request.url == SHELLY_LIST_METHODS_PATH:
            return ok({"methods": list(SHELLY_METHODS)})
        if request.url == SHELLY_STATUS_PATH:
            # bei jedem Aufruf frisch aus dem Zustand lesen;
            # fehlende Felder fallen weg statt Fehler
            pv = self.state.site_value("pv")
            status = {}
            if pv.get("power") is not None:
                status["apower"] = pv["power"]
            status["aenergy"] = {}
            if pv.get("energy") is not None:
                status["aenergy"]["total"] = pv["energy"]
            return ok(status)
        return None


class AristonHandler(Handler):
    """Ariston remotethermo Cloud API (Velis Warmwasser)"""

    name = "ariston"

    def handle(self, request):
        url = request.url

        if request.method == "POST" and url == ARISTON_LOGIN_PATH:
            return ok({"token": ARISTON_TOKEN})

        if (
            request.method == "GET"
            and ARISTON_PLANTS_SEGMENT in url
            and ARISTON_FEATURES_MARKER in url
        ):
            heater = self.state.waterheater()
            return ok({
                "success": True,
                "comfort": heater["comfort"],
                "reduced": heater["reduced"],
            })

        if request.method == "POST" and ARISTON_PLANT_DATA_SEGMENT in url:
            if ARISTON_BOOST_MARKER in url:
                self.state.set_boost(request.body)
                return ok({"success": True})
            if ARISTON_TEMPERATURES_MARKER in url:
                new = request.body["new"]
                self.state.set_temperatures(new["comfort"], new["reduced"])
                return ok({"success": True})

        return None


# Reihenfolge = Priorität
HANDLER_CLASSES = (
    StateControlHandler,
    OpenEmsHandler,
    TeslaLoggerHandler,
    ShellyHandler,
    AristonHandler,
)
