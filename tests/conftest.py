"""Gemeinsame Fixtures."""

import pytest
import pytest_asyncio
from aiohttp.test_utils import TestClient, TestServer

from emulated_devices.router import Router
from emulated_devices.server import SimulatorServer
from emulated_devices.state import WorldState


def make_document(comfort=60, reduced=45, vehicles=None, pv_power=0, pv_energy=0):
    """Zustandsdokument mit den Werten, die ein Test braucht."""
    return {
        "site": {
            "grid": {"power": 1200},
            "pv": {"power": pv_power, "energy": pv_energy},
            "battery": {"power": -300, "soc": 55},
        },
        "loadpoints": [{"power": 0, "energy": 0, "enabled": False, "status": "A"}],
        "vehicles": vehicles if vehicles is not None else [{"soc": 42, "range": 210}],
        "chargers": {
            "waterheater": {"boost": False, "comfort": comfort, "reduced": reduced},
        },
    }


@pytest.fixture
def state():
    return WorldState()


@pytest.fixture
def router(state):
    return Router(state)


@pytest.fixture
def simulator(state):
    return SimulatorServer(state)


@pytest_asyncio.fixture
async def client(simulator):
    """aiohttp TestClient auf der Simulator-App."""
    server = TestServer(simulator.app)
    async with TestClient(server) as c:
        yield c
