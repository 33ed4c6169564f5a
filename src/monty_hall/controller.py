"""controller.py

The game's finite-state machine. A :class:`GameController` owns the state of
the current round and the lifetime statistics, and advances them one door
press at a time:

    STARTED --press--> FIRST_DOOR_OPEN --press other door--> WON | LOST
       ^                 |  (press on the open door is rejected)     |
       +-----------------+-------------------- any press ------------+

Example:
    >>> ctrl = GameController(NumpyRandomSource(seed=7))
    >>> result = handle_press(ctrl, Door.ONE)
    >>> result.snapshot.phase
    <GamePhase.FIRST_DOOR_OPEN: 2>
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from loguru import logger

from .random_source import NumpyRandomSource, RandomSource
from .revealer import reveal_door
from .state import Door, GamePhase, GameSnapshot, GameStatistics, as_door


@dataclass(frozen=True, slots=True)
class Accepted:
    """The press advanced the state machine."""

    snapshot: GameSnapshot
    accepted = True


@dataclass(frozen=True, slots=True)
class Rejected:
    """The press was the already-open door; nothing changed."""

    snapshot: GameSnapshot
    accepted = False


PressResult = Accepted | Rejected


@dataclass(slots=True)
class _Round:
    phase: GamePhase = GamePhase.STARTED
    first_door: Door | None = None
    open_door: Door | None = None
    winning_door: Door | None = None


class GameController:
    """Monty Hall state machine with lifetime statistics.

    Args:
        random_source (RandomSource | None): draws the winning door and the
          reveal tie-break. Defaults to a :class:`NumpyRandomSource` seeded from
          OS entropy.
        statistics (GameStatistics | None): counters to start from. Defaults to
          all zeros.
    """

    def __init__(
        self,
        random_source: RandomSource | None = None,
        statistics: GameStatistics | None = None,
    ) -> None:
        self._random_source = random_source if random_source is not None else NumpyRandomSource()
        self._round = _Round()
        self._statistics = statistics if statistics is not None else GameStatistics()
        self.log = logger.bind(component="GameController")

    # ──────────────────────────────────────────────────────────────────────────────── #
    #                                 Read-only accessors                              #
    # ──────────────────────────────────────────────────────────────────────────────── #
    @property
    def phase(self) -> GamePhase:
        return self._round.phase

    @property
    def first_door(self) -> Door | None:
        return self._round.first_door

    @property
    def open_door(self) -> Door | None:
        return self._round.open_door

    @property
    def statistics(self) -> GameStatistics:
        return self._statistics

    def snapshot(self) -> GameSnapshot:
        """Current round and statistics; the winning door is hidden until the round ends."""
        current = self._round
        return GameSnapshot(
            phase=current.phase,
            first_door=current.first_door,
            open_door=current.open_door,
            winning_door=current.winning_door if current.phase.is_over else None,
            statistics=self._statistics,
        )

    # ──────────────────────────────────────────────────────────────────────────────── #
    #                                    Public API                                    #
    # ──────────────────────────────────────────────────────────────────────────────── #
    def handle_press(self, door: Door | int) -> PressResult:
        """Process one door press.

        Args:
            door (Door | int): the pressed door.

        Raises:
            InvalidDoorError: if *door* is ``None`` or not one of the three doors.
              State is left untouched.

        Returns:
            PressResult: :class:`Rejected` when the open door was pressed while
              waiting for the switch/stay decision, :class:`Accepted` otherwise.
        """
        door = as_door(door)

        match self._round.phase:
            case GamePhase.STARTED:
                self._start_round(door)
            case GamePhase.FIRST_DOOR_OPEN:
                if door == self._round.open_door:
                    self.log.debug("Door {door} is already open, press ignored", door=int(door))
                    return Rejected(self.snapshot())
                self._finish_round(door)
            case GamePhase.WON | GamePhase.LOST:
                self._round = _Round()
                self.log.debug("Round acknowledged, waiting for a first pick")

        return Accepted(self.snapshot())

    # ──────────────────────────────────────────────────────────────────────────────── #
    #                                 Private helpers                                  #
    # ──────────────────────────────────────────────────────────────────────────────── #
    def _start_round(self, door: Door) -> None:
        winning_door = self._random_source.draw_door()
        self._round = _Round(
            phase=GamePhase.FIRST_DOOR_OPEN,
            first_door=door,
            open_door=reveal_door(winning_door, door, self._random_source),
            winning_door=winning_door,
        )
        self.log.debug(
            "Round started | first pick: {first} | opened: {opened}",
            first=int(door),
            opened=int(self._round.open_door),
        )

    def _finish_round(self, door: Door) -> None:
        current = self._round
        won = door == current.winning_door
        switched = door != current.first_door

        current.phase = GamePhase.WON if won else GamePhase.LOST
        stats = self._statistics
        self._statistics = dataclasses.replace(
            stats,
            games_played=stats.games_played + 1,
            times_won=stats.times_won + won,
            times_switched=stats.times_switched + switched,
            times_switched_and_won=stats.times_switched_and_won + (switched and won),
        )
        self.log.debug(
            "Round over | {outcome} | final pick: {final} | switched: {switched}",
            outcome=current.phase.name,
            final=int(door),
            switched=switched,
        )


def handle_press(controller: GameController, door: Door | int) -> PressResult:
    """Functional alias of :meth:`GameController.handle_press`."""
    return controller.handle_press(door)
