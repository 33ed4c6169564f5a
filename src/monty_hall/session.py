"""session.py

The game loop of the device: drain the press mailbox, hand each press to the
controller and write a console line describing the outcome.

Usage:
    mailbox = PressMailbox()
    session = GameSession(mailbox=mailbox)
    stop = threading.Event()
    threading.Thread(target=session.run, args=(stop,), daemon=True).start()
    mailbox.post(2)          # from a button callback
"""
from __future__ import annotations

import threading
from dataclasses import dataclass

from loguru import logger

from .controller import GameController, PressResult
from .mailbox import PressMailbox
from .random_source import NumpyRandomSource
from .state import GamePhase, GameSnapshot, GameStatistics


@dataclass(slots=True)
class SessionConfig:
    """Settings for :class:`GameSession`.

    Attributes:
        poll_interval (float): Seconds to wait between mailbox polls in :meth:`GameSession.run`.
        seed (int | None): RNG seed for the default controller. ``None`` uses OS entropy.
    """
    poll_interval: float = 0.05
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.poll_interval <= 0:
            raise ValueError("poll_interval must be positive.")


def _percent(rate: float | None) -> str:
    return "n/a" if rate is None else f"{rate:.1%}"


def describe(snapshot: GameSnapshot) -> str:
    """Console line for the state after a press."""
    match snapshot.phase:
        case GamePhase.STARTED:
            return "Game State STARTED: pick a door"
        case GamePhase.FIRST_DOOR_OPEN:
            prefix = ""
        case GamePhase.WON:
            prefix = "Won: "
        case GamePhase.LOST:
            prefix = "Lost: "
    return (
        f"{prefix}Game State {snapshot.phase.name}: "
        f"selected door {int(snapshot.first_door)} open door {int(snapshot.open_door)}"
    )


def format_statistics(statistics: GameStatistics) -> str:
    """One-line summary; ratios with nothing to divide by read ``n/a``."""
    return (
        f"Games: {statistics.games_played} | "
        f"Won: {statistics.times_won} ({_percent(statistics.win_rate)}) | "
        f"Switched: {statistics.times_switched}, won {statistics.times_switched_and_won} "
        f"({_percent(statistics.switch_win_rate)}) | "
        f"Stayed: {statistics.times_stayed}, won {statistics.times_stayed_and_won} "
        f"({_percent(statistics.stay_win_rate)})"
    )


class GameSession:
    """Connects an input mailbox to a :class:`GameController`.

    Args:
        controller (GameController | None): game to drive. Defaults to a new
          controller seeded with ``config.seed``.
        mailbox (PressMailbox | None): where presses arrive. Defaults to a new,
          empty mailbox.
        config (SessionConfig | None): loop settings. Defaults to ``SessionConfig()``.
    """

    def __init__(
        self,
        controller: GameController | None = None,
        mailbox: PressMailbox | None = None,
        config: SessionConfig | None = None,
    ) -> None:
        self.config = config if config is not None else SessionConfig()
        self.controller = (
            controller
            if controller is not None
            else GameController(NumpyRandomSource(seed=self.config.seed))
        )
        self.mailbox = mailbox if mailbox is not None else PressMailbox()
        self.log = logger.bind(component="GameSession")

    def poll(self) -> PressResult | None:
        """Handle the pending press, if any.

        Returns:
            PressResult | None: the controller's result, or ``None`` when the
              mailbox was empty.
        """
        door = self.mailbox.take()
        if door is None:
            return None

        result = self.controller.handle_press(door)
        if not result.accepted:
            self.log.info("Door {door} is open, pick another one", door=int(door))
            return result

        self.log.info(describe(result.snapshot))
        if result.snapshot.phase.is_over:
            self.report()
        return result

    def run(self, stop_event: threading.Event) -> None:
        """Poll until *stop_event* is set."""
        self.log.info("Waiting for a door press")
        while not stop_event.is_set():
            self.poll()
            stop_event.wait(self.config.poll_interval)
        self.report()

    def report(self) -> None:
        self.log.info(format_statistics(self.controller.statistics))
