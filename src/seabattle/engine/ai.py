"""Stateful facade the host loop talks to."""

from __future__ import annotations

import random
from typing import Sequence

from .errors import MatchStateError
from .geometry import Coordinate
from .match import Match, ShotOutcome


class TargetingAi:
    """Plays consecutive matches, one fresh :class:`Match` per ``init_match``.

    All matches share the same random source, so a seeded AI replays a whole
    session identically.
    """

    def __init__(self, rng: random.Random | None = None, seed: int | None = None) -> None:
        self.rng = rng or random.Random(seed)
        self._match: Match | None = None
        self.matches_played = 0

    @property
    def match(self) -> Match:
        if self._match is None:
            raise MatchStateError("No match has been initialised.")
        return self._match

    def init_match(self, width: int, height: int, ship_lengths: Sequence[int]) -> Match:
        self._match = Match(width, height, ship_lengths, rng=self.rng)
        self.matches_played += 1
        return self._match

    def record_outcome(self, target: Coordinate, outcome: ShotOutcome) -> None:
        self.match.record_outcome(target, outcome)

    def next_target(self) -> Coordinate:
        return self.match.next_target()

    def is_over(self) -> bool:
        return self.match.is_over()
