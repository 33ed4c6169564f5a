import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .state import DoorState


class DiscreteObservationWrapper(gym.ObservationWrapper):
    """
    Turns the env's per-door observation (length 3, values ∈ DoorState) into a single
    Discrete index, so tabular agents can key a table on it.

    The index is the base-4 number with the first door as the most significant digit,
    e.g. [0,2,3] → 0·4² + 2·4¹ + 3·4⁰ = 11. No information is lost.
    """

    def __init__(self, env: gym.Env):
        super().__init__(env)
        self._dims = tuple(int(n) for n in env.observation_space.nvec)
        if any(n != len(DoorState) for n in self._dims):
            raise ValueError("Expected one DoorState digit per door.")
        self.observation_space = spaces.Discrete(int(np.prod(self._dims)))

    def observation(self, obs: np.ndarray) -> int:
        """Maps a vector of door states to its integer index

        Args:
            obs (np.ndarray): 1D numpy array of integer door states

        Returns:
            int: integer index from the numpy array
        """
        return int(np.ravel_multi_index(tuple(obs), self._dims))
