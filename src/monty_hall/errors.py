"""errors.py

Exceptions raised by the game core. A rejected press is *not* one of them:
it is a normal :class:`~monty_hall.controller.Rejected` result.
"""


class MontyHallError(Exception):
    """Base class for all game errors."""


class InvalidDoorError(MontyHallError, ValueError):
    """A value that is not one of the three doors reached the game core.

    This is a caller contract violation: the input side must filter out
    "no press" (``None``) and out-of-range buttons before dispatching.
    """

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"{value!r} is not a door (expected 1, 2 or 3)")


class RevealError(MontyHallError):
    """The revealer picked the winning door or the contestant's first pick."""

    def __init__(self, open_door, winning_door, first_door):
        self.open_door = open_door
        self.winning_door = winning_door
        self.first_door = first_door
        super().__init__(
            f"Cannot reveal door {open_door}: winning door is {winning_door}, "
            f"first pick is {first_door}"
        )
