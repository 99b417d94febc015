"""Text line codec for the referee conversation.

Referee to AI::

    Init <width> <height> <length> <length> ...
    Miss|Wound|Kill <x> <y>

AI to referee::

    <x> <y>
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

from seabattle.engine.errors import SeaBattleError
from seabattle.engine.geometry import Coordinate
from seabattle.engine.match import ShotOutcome

logger = logging.getLogger(__name__)

INIT_TOKEN = "Init"


class ProtocolError(SeaBattleError, ValueError):
    """A line from the referee could not be understood."""

    def __init__(self, message: str, line: str | None = None) -> None:
        super().__init__(message if line is None else f"{message}: {line!r}")
        self.line = line


@dataclass(frozen=True)
class InitEvent:
    """Start of a new match."""

    width: int
    height: int
    ship_lengths: tuple[int, ...]


@dataclass(frozen=True)
class ShotEvent:
    """Verdict for the shot the AI just fired."""

    target: Coordinate
    outcome: ShotOutcome


Event = Union[InitEvent, ShotEvent]


def _parse_int(token: str, line: str) -> int:
    try:
        return int(token)
    except ValueError as exc:
        raise ProtocolError(f"Expected an integer, got {token!r}", line) from exc


def parse_event(line: str) -> Event:
    """Decode one referee line."""
    tokens = line.split()
    if not tokens:
        raise ProtocolError("Empty message", line)

    head, args = tokens[0], tokens[1:]
    if head == INIT_TOKEN:
        if len(args) < 3:
            raise ProtocolError("Init needs a width, a height and at least one ship", line)
        width, height, *lengths = (_parse_int(token, line) for token in args)
        if width <= 0 or height <= 0:
            raise ProtocolError("Board dimensions must be positive", line)
        if any(length < 1 for length in lengths):
            raise ProtocolError("Ship lengths must be positive", line)
        return InitEvent(width, height, tuple(lengths))

    try:
        outcome = ShotOutcome(head)
    except ValueError as exc:
        raise ProtocolError(f"Unknown message type {head!r}", line) from exc
    if len(args) != 2:
        raise ProtocolError("Shot results carry exactly two coordinates", line)
    x, y = (_parse_int(token, line) for token in args)
    return ShotEvent(Coordinate(x, y), outcome)


def format_target(target: Coordinate) -> str:
    return f"{target.x} {target.y}"


def format_event(event: Event) -> str:
    """Encode a referee line; used by in-process referees and tests."""
    if isinstance(event, InitEvent):
        lengths = " ".join(str(length) for length in event.ship_lengths)
        return f"{INIT_TOKEN} {event.width} {event.height} {lengths}"
    return f"{event.outcome.value} {event.target.x} {event.target.y}"
