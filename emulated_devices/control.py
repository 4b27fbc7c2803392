"""
Steuerung des Simulator-Prozesses aus Tests heraus

Startet den Simulator als eigenen Prozess, setzt/liest den Zustand und
beendet ihn wieder über POST /api/shutdown.
"""

import logging
import subprocess
import sys
import time

import requests

from .const import (
    REQUEST_TIMEOUT,
    SHUTDOWN_PATH,
    SIMULATOR_HOST,
    SIMULATOR_PORT,
    STARTUP_POLL_INTERVAL,
    STARTUP_TIMEOUT,
    STATE_PATH,
    STOP_TIMEOUT,
)

_LOGGER = logging.getLogger(__name__)


class SimulatorError(RuntimeError):
    """Simulator nicht erreichbar oder nicht gestartet"""


class SimulatorControl:
    def __init__(self, host=SIMULATOR_HOST, port=SIMULATOR_PORT, state_file=None):
        self.host = host
        self.port = port
        self.state_file = state_file
        self._process = None

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"

    def command(self) -> list:
        cmd = [sys.executable, "-m", "emulated_devices", "--host", self.host, "--port", str(self.port)]
        if self.state_file:
            cmd += ["--state", str(self.state_file)]
        return cmd

    def start(self, timeout=STARTUP_TIMEOUT):
        """Prozess starten und warten bis /api/state antwortet"""
        if self._process is not None and self._process.poll() is None:
            _LOGGER.debug("Simulator läuft bereits")
            return

        _LOGGER.info("Starte Simulator: %s", self.url)
        self._process = subprocess.Popen(self.command())

        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            if self._process.poll() is not None:
                raise SimulatorError(f"Simulator beendet mit Code {self._process.returncode}")
            try:
                requests.get(self.url + STATE_PATH, timeout=REQUEST_TIMEOUT).raise_for_status()
                _LOGGER.info("✅ Simulator bereit")
                return
            except requests.exceptions.RequestException:
                time.sleep(STARTUP_POLL_INTERVAL)

        self._kill()
        raise SimulatorError(f"Simulator nicht erreichbar nach {timeout}s: {self.url}")

    def apply(self, document: dict):
        """Kompletten Zustand ersetzen"""
        response = requests.post(self.url + STATE_PATH, json=document, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()

    def state(self) -> dict:
        response = requests.get(self.url + STATE_PATH, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        return response.json()

    def stop(self, timeout=STOP_TIMEOUT):
        """Shutdown senden; abgebrochene Verbindung ist ok"""
        try:
            requests.post(self.url + SHUTDOWN_PATH, timeout=REQUEST_TIMEOUT)
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as err:
            _LOGGER.debug("Verbindung beim Shutdown getrennt: %s", err)

        if self._process is None:
            return
        try:
            self._process.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            _LOGGER.warning("Simulator reagiert nicht auf Shutdown, wird beendet")
            self._kill()
        self._process = None

    def _kill(self):
        if self._process is not None and self._process.poll() is None:
            self._process.kill()
            self._process.wait()
