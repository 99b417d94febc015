"""Host loop: drives a :class:`TargetingAi` through a referee conversation."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field

from seabattle.engine.ai import TargetingAi
from seabattle.engine.match import ShotOutcome
from seabattle.protocol import Event, EventPort, InitEvent, ProtocolError
from seabattle.telemetry import get_tracer, record_distribution, record_game_metric

logger = logging.getLogger(__name__)
tracer = get_tracer("seabattle.runner")


@dataclass(frozen=True)
class MatchReport:
    width: int
    height: int
    ship_lengths: tuple[int, ...]
    shots: int
    finished: bool
    duration_s: float


@dataclass
class SessionReport:
    matches: list[MatchReport] = field(default_factory=list)

    @property
    def total_shots(self) -> int:
        return sum(match.shots for match in self.matches)


def run_session(port: EventPort, ai: TargetingAi) -> SessionReport:
    """Play every match the referee starts until it stops talking.

    Anything other than ``Init`` as the first message ends the session
    without playing.
    """
    report = SessionReport()
    event = port.receive_event()
    if not isinstance(event, InitEvent):
        logger.warning("session_without_init", extra={"first_event": repr(event)})
        return report

    while isinstance(event, InitEvent):
        event = play_match(port, ai, event, report)
    logger.info(
        "session_finished",
        extra={"matches": len(report.matches), "total_shots": report.total_shots},
    )
    return report


def play_match(port: EventPort, ai: TargetingAi, init: InitEvent, report: SessionReport) -> Event | None:
    """Play one match and return the first event that follows it.

    End of input or a new ``Init`` right after a shot ends the match. The
    shot is recorded as a kill when that fits the board; otherwise the match
    is reported as abandoned.
    """
    match = ai.init_match(init.width, init.height, init.ship_lengths)
    started = time.perf_counter()
    with tracer.start_as_current_span("runner.match") as span:
        span.set_attribute("board.width", init.width)
        span.set_attribute("board.height", init.height)
        span.set_attribute("match.number", ai.matches_played)

        following: Event | None = None
        while not match.is_over():
            target = ai.next_target()
            port.send_target(target)
            event = port.receive_event()
            if event is None or isinstance(event, InitEvent):
                following = event
                if match.accepts_kill(target):
                    ai.record_outcome(target, ShotOutcome.KILL)
                else:
                    logger.warning(
                        "implied_kill_rejected",
                        extra={"x": target.x, "y": target.y, "next_event": repr(event)},
                    )
                break
            if event.target != target:
                logger.error(
                    "outcome_for_other_cell",
                    extra={"sent": str(target), "received": str(event.target)},
                )
                raise ProtocolError(f"Result for {event.target} received after shooting at {target}")
            ai.record_outcome(event.target, event.outcome)
        else:
            following = port.receive_event()

        duration = time.perf_counter() - started
        span.set_attribute("match.shots", match.shots)
        span.set_attribute("match.finished", match.is_over())

    result = MatchReport(
        width=init.width,
        height=init.height,
        ship_lengths=init.ship_lengths,
        shots=match.shots,
        finished=match.is_over(),
        duration_s=duration,
    )
    report.matches.append(result)
    record_game_metric("seabattle_matches_total", 1, {"finished": result.finished})
    record_distribution("seabattle_match_shots", result.shots)
    record_distribution("seabattle_match_duration_seconds", duration)
    logger.info(
        "match_report",
        extra={"shots": result.shots, "finished": result.finished, "duration_s": round(duration, 3)},
    )
    if not result.finished:
        logger.warning("match_abandoned", extra={"remaining_cells": match.remaining_cells})
    return following
