#!/usr/bin/env python3
"""
Emulierte Geräte-APIs für evcc Tests

Usage:
  python -m emulated_devices --port 7072 --state ./state.json
"""

import argparse
import asyncio
import json
import logging

from .const import SIMULATOR_HOST, SIMULATOR_PORT, VERSION, VERSION_INFO
from .server import SimulatorServer
from .state import WorldState

_LOGGER = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Emulierte Geräte-APIs (OpenEMS, TeslaLogger, Shelly, Ariston)")
    parser.add_argument("--host", default=SIMULATOR_HOST)
    parser.add_argument("--port", type=int, default=SIMULATOR_PORT)
    parser.add_argument("--state", help="JSON-Datei mit Startzustand")
    parser.add_argument("--debug", action="store_true", help="Debug-Logging")
    return parser.parse_args(argv)


def load_state(path):
    if not path:
        return WorldState()
    with open(path, "r", encoding="utf-8") as f:
        return WorldState(json.load(f))


def print_banner(server: SimulatorServer):
    print("\n" + "=" * 70)
    print(f"🚀 Emulierte Geräte-APIs — {VERSION}")
    print(f"   {VERSION_INFO}")
    print("=" * 70)
    print(f"📡 HTTP: {server.url}")
    print("")
    print("🔌 Geräte:")
    print("   OpenEMS      /rest/channel/_sum/*")
    print("   TeslaLogger  /currentjson/<id>")
    print("   Shelly Gen2  /shelly, /rpc/*")
    print("   Ariston      /api/v2/*")
    print("")
    print("🛠  Steuerung:")
    print("   GET/POST /api/state, POST /api/shutdown")
    print("=" * 70 + "\n")


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)

    server = SimulatorServer(load_state(args.state), host=args.host, port=args.port)
    print_banner(server)

    try:
        asyncio.run(server.run())
    except KeyboardInterrupt:
        print("\n[INFO] Simulator gestoppt (CTRL+C).")
    else:
        _LOGGER.info("Simulator beendet (Shutdown-Request)")


if __name__ == "__main__":
    main()
