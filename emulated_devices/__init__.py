"""Emulierte Geräte-APIs als HTTP Test-Double für evcc"""

from .const import VERSION
from .handlers import SimRequest, SimResponse
from .router import Router
from .server import SimulatorServer
from .state import WorldState

__version__ = VERSION

__all__ = ["Router", "SimRequest", "SimResponse", "SimulatorServer", "WorldState"]
