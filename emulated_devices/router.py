"""
Router: geordnete Handler-Kette

Die Handler werden in fester Reihenfolge gefragt, der erste der antwortet
gewinnt. Antwortet keiner, liefert dispatch() None und der Server entscheidet.
"""

import logging
from typing import Optional

from .handlers import HANDLER_CLASSES, SimRequest, SimResponse
from .state import WorldState

_LOGGER = logging.getLogger(__name__)


class Router:
    def __init__(self, state: WorldState, handlers=None):
        if handlers is None:
            handlers = [cls(state) for cls in HANDLER_CLASSES]
        self.handlers = list(handlers)

    def dispatch(self, request: SimRequest) -> Optional[SimResponse]:
        """Request an den ersten zuständigen Handler geben"""
        _LOGGER.info("%s %s", request.method, request.url)

        for handler in self.handlers:
            response = handler.handle(request)
            if response is not None:
                _LOGGER.debug("%s → %s (%d)", request.url, handler.name, response.status)
                return response

        _LOGGER.debug("Kein Handler für %s %s", request.method, request.url)
        return None
