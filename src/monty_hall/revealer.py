"""revealer.py

Monty's move: after the contestant's first pick, open a door that is neither
the pick nor the car.
"""
from __future__ import annotations

from .errors import RevealError
from .random_source import RandomSource
from .state import Door, as_door


def reveal_door(winning_door: Door, first_door: Door, random_source: RandomSource) -> Door:
    """Choose the losing, unpicked door to open.

    If the first pick is a goat there is exactly one other goat and it is
    returned without touching *random_source*. If the first pick is the car,
    one bit decides between the two goats: ``0`` opens the lower-numbered
    door, ``1`` the higher-numbered one.

    Args:
        winning_door (Door): the door hiding the car.
        first_door (Door): the contestant's first pick.
        random_source (RandomSource): consulted only for the tie-break.

    Raises:
        InvalidDoorError: if either argument is not a door.
        RevealError: if the chosen door is the car or the first pick.

    Returns:
        Door: the door to open.
    """
    winning_door = as_door(winning_door)
    first_door = as_door(first_door)

    if first_door != winning_door:
        (open_door,) = set(Door) - {first_door, winning_door}
    else:
        open_door = first_door.others()[random_source.draw_bit() & 1]

    if open_door in (winning_door, first_door):
        raise RevealError(open_door, winning_door, first_door)
    return open_door
