"""
Simulierter Weltzustand

Ein einziges JSON-Dokument, aus dem alle emulierten Geräte ihre Antworten
lesen. Der Container wird dem Router beim Erzeugen übergeben, es gibt keinen
globalen Zustand im Modul.
"""

import copy
import logging

from .const import DEFAULT_STATE

_LOGGER = logging.getLogger(__name__)


def default_state() -> dict:
    """Frische Kopie des Standard-Zustands"""
    return copy.deepcopy(DEFAULT_STATE)


class WorldState:
    """Besitzt das Zustandsdokument eines Simulator-Prozesses"""

    def __init__(self, document=None):
        self._document = default_state() if document is None else document

    def snapshot(self):
        """Aktuelles Dokument (keine Kopie, exakt wie gespeichert)"""
        return self._document

    def replace(self, document):
        """Komplettes Dokument ersetzen, kein Merge"""
        self._document = document
        _LOGGER.debug("Zustand ersetzt")

    def site_value(self, *path):
        """Wert unter "site" lesen, z.B. site_value("pv", "power")"""
        value = self._document["site"]
        for key in path:
            value = value[key]
        return value

    def vehicle(self, vehicle_id: int):
        """Fahrzeug per 1-basierter ID; None wenn nicht vorhanden"""
        vehicles = self._document.get("vehicles") or []
        # keine negativen Indizes: ID 0 oder kleiner gibt es nicht
        if vehicle_id < 1 or vehicle_id > len(vehicles):
            return None
        return vehicles[vehicle_id - 1]

    def waterheater(self) -> dict:
        return self._document["chargers"]["waterheater"]

    def set_boost(self, value):
        """Boost-Flag übernehmen wie gesendet"""
        self.waterheater()["boost"] = value
        _LOGGER.debug("Boost gesetzt: %s", value)

    def set_temperatures(self, comfort, reduced):
        heater = self.waterheater()
        heater["comfort"] = comfort
        heater["reduced"] = reduced
        _LOGGER.debug("Temperaturen gesetzt: comfort=%s reduced=%s", comfort, reduced)
