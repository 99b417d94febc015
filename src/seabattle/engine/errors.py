"""Exceptions raised by the targeting engine.

None of these are recovered internally: each one means the grid, the
inventory or the referee conversation is no longer trustworthy.
"""

from __future__ import annotations


class SeaBattleError(Exception):
    """Base class for every error raised by seabattle."""


class OutOfBoundsError(SeaBattleError, IndexError):
    """A coordinate lies outside the grid."""


class InvalidTransitionError(SeaBattleError, ValueError):
    """A shot outcome contradicts what is already known about the grid."""


class NoValidTargetError(SeaBattleError, RuntimeError):
    """No hidden cell is left to shoot at although the match is not over."""


class MatchStateError(SeaBattleError, RuntimeError):
    """An operation was requested before a match started or after it ended."""


class InvalidMatchError(SeaBattleError, ValueError):
    """Match parameters (board size or fleet) are unusable."""
