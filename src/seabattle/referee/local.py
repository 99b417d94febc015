"""In-process referee speaking the same conversation as a real one."""

from __future__ import annotations

import logging
from collections import deque
from typing import Iterable

from seabattle.engine.errors import MatchStateError
from seabattle.engine.geometry import Coordinate
from seabattle.engine.match import ShotOutcome
from seabattle.protocol import Event, EventPort, InitEvent, ShotEvent

from .fleet import FleetMap

logger = logging.getLogger(__name__)


class LocalPort(EventPort):
    """Referee for a sequence of fleets.

    By default the shot that sinks a fleet's last ship is not
    answered with ``Kill``: the reply is the next ``Init``, or end of input
    after the last fleet. Set ``announce_final_kill`` to send the ``Kill``
    line first instead.
    """

    def __init__(self, fleets: Iterable[FleetMap], announce_final_kill: bool = False) -> None:
        self._fleets = deque(fleets)
        self._announce_final_kill = announce_final_kill
        self._pending: deque[Event | None] = deque()
        self.current: FleetMap | None = None
        self.shots: list[Coordinate] = []
        self._start_next_fleet()

    def _start_next_fleet(self) -> None:
        if not self._fleets:
            self.current = None
            self._pending.append(None)
            return
        self.current = self._fleets.popleft()
        lengths = tuple(ship.length for ship in self.current.ships)
        self._pending.append(InitEvent(self.current.width, self.current.height, lengths))

    def receive_event(self) -> Event | None:
        if not self._pending:
            return None
        return self._pending.popleft()

    def send_target(self, target: Coordinate) -> None:
        if self.current is None:
            raise MatchStateError("No fleet is in play.")
        self.shots.append(target)
        outcome = self.current.make_hit(target)
        logger.debug(
            "referee_resolved_shot",
            extra={"x": target.x, "y": target.y, "outcome": outcome.value},
        )
        if outcome is ShotOutcome.KILL and not self.current.has_alive_ships():
            if self._announce_final_kill:
                self._pending.append(ShotEvent(target, outcome))
            self._start_next_fleet()
            return
        self._pending.append(ShotEvent(target, outcome))
