"""Transport-independent port between the host loop and a referee."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TextIO

from seabattle.engine.geometry import Coordinate

from .codec import Event, ProtocolError, format_target, parse_event

logger = logging.getLogger(__name__)


class EventPort(ABC):
    """Blocking source of referee events and sink for chosen targets."""

    @abstractmethod
    def receive_event(self) -> Event | None:
        """Return the next event, or None once the referee has nothing more to say."""

    @abstractmethod
    def send_target(self, target: Coordinate) -> None:
        """Transmit the next shot."""


class StdioPort(EventPort):
    """Line protocol over a pair of text streams (stdin/stdout for a spawned AI)."""

    def __init__(self, reader: TextIO, writer: TextIO) -> None:
        self._reader = reader
        self._writer = writer

    def receive_event(self) -> Event | None:
        while True:
            line = self._reader.readline()
            if not line:
                logger.debug("referee_eof")
                return None
            if line.strip():
                break
        logger.debug("referee_message", extra={"line": line.rstrip("\n")})
        try:
            return parse_event(line)
        except ProtocolError:
            logger.error("referee_message_invalid", extra={"line": line.rstrip("\n")})
            raise

    def send_target(self, target: Coordinate) -> None:
        message = format_target(target)
        self._writer.write(message + "\n")
        self._writer.flush()
        logger.debug("target_sent", extra={"line": message})
