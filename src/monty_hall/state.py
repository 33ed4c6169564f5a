"""state.py

Shared data types of the Monty Hall game: doors, phases, lifetime statistics
and the read-only snapshot handed to observers after every press.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum, auto
from numbers import Integral

from .errors import InvalidDoorError


class Door(IntEnum):
    """One of the three doors. There is no door 0; "no press" is ``None``."""

    ONE = 1
    TWO = 2
    THREE = 3

    def others(self) -> tuple[Door, Door]:
        """The two remaining doors, lowest first."""
        first, second = (door for door in Door if door is not self)
        return first, second


def as_door(value: object) -> Door:
    """Coerce *value* to a :class:`Door`, failing fast on anything else.

    Raises:
        InvalidDoorError: for ``None`` ("no press"), booleans and integers
          outside 1..3.
    """
    if isinstance(value, Door):
        return value
    if isinstance(value, Integral) and not isinstance(value, bool):
        if Door.ONE <= int(value) <= Door.THREE:
            return Door(int(value))
    raise InvalidDoorError(value)


class DoorState(IntEnum):
    """State of each door in the observation vector."""

    CLOSED = 0  # Unopened & unchosen
    GOAT = 1  # Opened and reveals a goat
    CAR = 2  # Opened and reveals a car (a win)
    CHOSEN = 3  # Still closed but currently selected by the player


class GamePhase(Enum):
    """Progress phase of a round."""

    STARTED = auto()
    FIRST_DOOR_OPEN = auto()
    WON = auto()
    LOST = auto()

    @property
    def is_over(self) -> bool:
        return self in (GamePhase.WON, GamePhase.LOST)


def _ratio(numerator: int, denominator: int) -> float | None:
    if denominator == 0:
        return None
    return numerator / denominator


@dataclass(frozen=True, slots=True)
class GameStatistics:
    """Lifetime counters, monotonically non-decreasing across rounds.

    Attributes:
        games_played (int): Rounds that reached a win or a loss.
        times_switched (int): Rounds where the final pick differed from the first.
        times_switched_and_won (int): Switched rounds that were won.
        times_won (int): Rounds that were won, whatever the final decision.
    """

    games_played: int = 0
    times_switched: int = 0
    times_switched_and_won: int = 0
    times_won: int = 0

    def __post_init__(self) -> None:
        if min(self.games_played, self.times_switched,
               self.times_switched_and_won, self.times_won) < 0:
            raise ValueError("Statistics counters must be non-negative.")
        if self.times_won > self.games_played:
            raise ValueError("times_won cannot exceed games_played.")
        if not self.times_switched_and_won <= self.times_switched <= self.games_played:
            raise ValueError(
                "Expected times_switched_and_won <= times_switched <= games_played."
            )

    @property
    def times_stayed(self) -> int:
        return self.games_played - self.times_switched

    @property
    def times_stayed_and_won(self) -> int:
        return self.times_won - self.times_switched_and_won

    @property
    def win_rate(self) -> float | None:
        """Fraction of rounds won, ``None`` before the first round ends."""
        return _ratio(self.times_won, self.games_played)

    @property
    def switch_win_rate(self) -> float | None:
        """Fraction of switched rounds won, ``None`` if nobody switched yet."""
        return _ratio(self.times_switched_and_won, self.times_switched)

    @property
    def stay_win_rate(self) -> float | None:
        """Fraction of stayed rounds won, ``None`` if nobody stayed yet."""
        return _ratio(self.times_stayed_and_won, self.times_stayed)

    def as_dict(self) -> dict[str, int]:
        return {
            "games_played": self.games_played,
            "times_switched": self.times_switched,
            "times_switched_and_won": self.times_switched_and_won,
            "times_won": self.times_won,
        }


@dataclass(frozen=True, slots=True)
class GameSnapshot:
    """What an observer may see after a press.

    ``winning_door`` stays ``None`` until the round is over.
    """

    phase: GamePhase
    first_door: Door | None = None
    open_door: Door | None = None
    winning_door: Door | None = None
    statistics: GameStatistics = field(default_factory=GameStatistics)
