"""
The three-door Monty Hall game exposed through Gymnasium's API, driven by the same
:class:`GameController` as the device so agents play by exactly the same rules.
"""

from typing import Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces
from gymnasium.envs.registration import register

from .controller import GameController
from .random_source import NumpyRandomSource
from .state import Door, DoorState, GamePhase


class MontyHallEnv(gym.Env):
    """One episode per round; lifetime statistics accumulate across episodes."""

    metadata = {"render_modes": []}

    def __init__(self, *, seed: int | None = None) -> None:
        """Initialises the environment.

        Args:
            seed (int or None): controls the random number generation. Note that, setting this
             will cause deterministic behaviour, mostly useful for debugging only. Defaults to None (random seed).
        """
        self.n_doors = len(Door)

        # ─── Gym spaces ───
        # Observation/State Space: 1D NumPy vector of doors with value (0-3) from DoorState
        self.observation_space = spaces.MultiDiscrete(
            np.full(self.n_doors, len(DoorState), dtype=np.int64)
        )
        # Action Space: action i presses door i + 1
        self.action_space = spaces.Discrete(self.n_doors)

        self._random_source = NumpyRandomSource(self.np_random)
        self._controller = GameController(self._random_source)
        self._rejected = False

        # ─── Initial episode state ───
        self.reset(seed=seed)

    # ──────────────────────────────────────────────────────────────────────────────── #
    #                                 Gymnasium API                                    #
    # ──────────────────────────────────────────────────────────────────────────────── #
    def reset(self, *, seed: Optional[int] = None, options=None):
        """Starts a new round.

        A finished round is acknowledged on the controller. A round abandoned
        half-way cannot be aborted, so the controller is replaced by a fresh one
        that inherits the lifetime statistics.

        Args:
            seed (Optional[int]): reset the environment with a specific seed value. Defaults to None.
            options: unused, mandated by the Gymnasium interface. Defaults to None.

        Returns:
            Pair: 1D state vector of DoorStates, and info (dict) consisting of auxiliary information from _get_info()
        """
        super().reset(seed=seed)
        self._random_source.rng = self.np_random

        match self._controller.phase:
            case GamePhase.WON | GamePhase.LOST:
                self._controller.handle_press(Door.ONE)
            case GamePhase.FIRST_DOOR_OPEN:
                self._controller = GameController(
                    self._random_source, statistics=self._controller.statistics
                )
            case GamePhase.STARTED:
                pass

        self._rejected = False
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        """Presses door ``action + 1``.

        Args:
            action (int): the integer index of the action taken.

        Raises:
            RuntimeError: if an action is performed on an already completed episode.
            ValueError: if an action ID is provided that is not valid.

        Returns:
            observation (1d Numpy): next observation of door states
            reward (float): 1.0 when the round is won, 0.0 otherwise
            terminated (bool): whether the round is decided
            truncated (bool): always False
            info (dict): auxiliary information of episode progress from _get_info()
        """
        if self._controller.phase.is_over:
            raise RuntimeError(
                "Episode is already completed! Call reset() to start a new one."
            )
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid action {action!r}.")

        result = self._controller.handle_press(Door(int(action) + 1))
        self._rejected = not result.accepted

        phase = result.snapshot.phase
        terminated = phase.is_over
        reward = 1.0 if phase is GamePhase.WON else 0.0
        return self._get_obs(), reward, terminated, False, self._get_info()

    # ──────────────────────────────────────────────────────────────────────────────── #
    #                                 Private helpers                                  #
    # ──────────────────────────────────────────────────────────────────────────────── #
    def _get_obs(self) -> np.ndarray:
        """Door states as seen by the contestant."""
        snapshot = self._controller.snapshot()
        obs = np.full(self.n_doors, DoorState.CLOSED, dtype=np.int64)

        match snapshot.phase:
            case GamePhase.STARTED:
                pass
            case GamePhase.FIRST_DOOR_OPEN:
                obs[snapshot.first_door - 1] = DoorState.CHOSEN
                obs[snapshot.open_door - 1] = DoorState.GOAT
            case GamePhase.WON | GamePhase.LOST:
                obs[:] = DoorState.GOAT
                obs[snapshot.winning_door - 1] = DoorState.CAR
        return obs

    def _action_mask(self) -> np.ndarray:
        mask = np.ones(self.n_doors, dtype=np.int8)
        match self._controller.phase:
            case GamePhase.FIRST_DOOR_OPEN:
                mask[self._controller.open_door - 1] = 0
            case GamePhase.WON | GamePhase.LOST:
                mask[:] = 0
            case GamePhase.STARTED:
                pass
        return mask

    def _get_info(self):
        """Auxiliary information about the round in progress.

        Returns:
            dict: consisting of
              - the legal actions,
              - the phase of the round,
              - whether the last press was rejected,
              - and the lifetime statistics.
        """
        return {
            "action_mask": self._action_mask(),
            "phase": self._controller.phase.name,
            "rejected": self._rejected,
            "statistics": self._controller.statistics.as_dict(),
        }


# Register the environment to allow usage with `gym.make``
register(
    id="MontyHall-v0",
    entry_point="monty_hall.env:MontyHallEnv",
)
