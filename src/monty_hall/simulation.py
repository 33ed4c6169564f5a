"""simulation.py

Play many rounds on a :class:`GameController` with a fixed contestant
strategy and look at the statistics it accumulates. Switching should win
about two rounds in three, staying about one in three.

Example:
    >>> stats = simulate(SimulationConfig(rounds=10_000, strategy="switch", seed=0))
    >>> round(stats.switch_win_rate, 1)
    0.7
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import numpy as np
from loguru import logger

from .controller import GameController
from .random_source import NumpyRandomSource
from .state import Door, GamePhase, GameStatistics

Strategy = Literal["switch", "stay", "random"]
STRATEGIES: tuple[str, ...] = ("switch", "stay", "random")


@dataclass(slots=True)
class SimulationConfig:
    """Settings for :func:`simulate`.

    Attributes:
        rounds (int): Number of complete rounds to play.
        strategy (Strategy): Contestant's final decision: always ``"switch"``,
            always ``"stay"``, or pick ``"random"``ly between the two closed doors.
        seed (int | None): RNG seed for reproducibility. ``None`` disables seeding.
        log_interval (int): Frequency (in rounds) at which progress is written to the log.
    """
    rounds: int = 1_000
    strategy: Strategy = "switch"
    seed: int | None = 42
    log_interval: int = 100

    def __post_init__(self) -> None:
        if self.rounds <= 0:
            raise ValueError("rounds must be positive.")
        if self.strategy not in STRATEGIES:
            raise ValueError(f"Unknown strategy {self.strategy!r}, expected one of {STRATEGIES}.")
        if self.log_interval <= 0:
            raise ValueError("log_interval must be positive.")


def final_choice(strategy: Strategy, first_door: Door, open_door: Door, rng: np.random.Generator) -> Door:
    """The door the contestant presses at the switch/stay decision."""
    (other_door,) = set(Door) - {first_door, open_door}
    match strategy:
        case "stay":
            return first_door
        case "switch":
            return other_door
        case "random":
            return (first_door, other_door)[int(rng.integers(2))]
    raise ValueError(f"Unknown strategy {strategy!r}")


def simulate(config: SimulationConfig, controller: GameController | None = None) -> GameStatistics:
    """Play ``config.rounds`` rounds and return the controller's statistics.

    Each round is three presses: a uniformly random first pick, the
    strategy's final pick, and an acknowledgement that returns the controller
    to :attr:`GamePhase.STARTED`.

    Args:
        config (SimulationConfig): what to play.
        controller (GameController | None): game to play on; its existing
            statistics are kept and added to. Defaults to a new controller seeded
            from ``config.seed``.

    Returns:
        GameStatistics: lifetime statistics after the last round.
    """
    game_seed, player_seed = np.random.SeedSequence(config.seed).spawn(2)
    if controller is None:
        controller = GameController(NumpyRandomSource(np.random.default_rng(game_seed)))
    player_rng = np.random.default_rng(player_seed)
    log = logger.bind(component="Simulation", strategy=config.strategy)

    for round_idx in range(config.rounds):
        if controller.phase is not GamePhase.STARTED:
            raise RuntimeError(f"Controller must be waiting for a first pick, not {controller.phase.name}.")

        controller.handle_press(Door(int(player_rng.integers(1, len(Door) + 1))))
        door = final_choice(config.strategy, controller.first_door, controller.open_door, player_rng)
        controller.handle_press(door)
        controller.handle_press(door)

        if (round_idx + 1) % config.log_interval == 0:
            stats = controller.statistics
            log.info(
                "Round {idx:>6d} | won: {won:>6d} | win rate: {rate:.3f}",
                idx=round_idx + 1,
                won=stats.times_won,
                rate=stats.win_rate,
            )

    stats = controller.statistics
    log.success(
        "Played {n} rounds | switch win rate: {switch} | stay win rate: {stay}",
        n=config.rounds,
        switch="n/a" if stats.switch_win_rate is None else f"{stats.switch_win_rate:.3f}",
        stay="n/a" if stats.stay_win_rate is None else f"{stats.stay_win_rate:.3f}",
    )
    return stats
