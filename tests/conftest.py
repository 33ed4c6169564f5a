"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

import pytest
from loguru import logger

from monty_hall.controller import GameController
from monty_hall.random_source import RandomSource
from monty_hall.state import Door


class ScriptedRandomSource(RandomSource):
    """Replays fixed winning doors and tie-break bits, in order."""

    def __init__(self, doors: Iterable[int] = (), bits: Iterable[int] = ()) -> None:
        self.doors = [Door(d) for d in doors]
        self.bits = list(bits)
        self.bits_drawn = 0

    def draw_door(self) -> Door:
        return self.doors.pop(0)

    def draw_bit(self) -> int:
        self.bits_drawn += 1
        return self.bits.pop(0)


@pytest.fixture
def scripted() -> type[ScriptedRandomSource]:
    return ScriptedRandomSource


@pytest.fixture
def make_controller():
    """Controller whose rounds use the given winning doors and bits."""

    def _make(doors: Iterable[int] = (), bits: Iterable[int] = ()) -> GameController:
        return GameController(ScriptedRandomSource(doors, bits))

    return _make


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    """Collect loguru messages emitted at INFO and above during a test."""
    messages: list[str] = []
    handler_id = logger.add(lambda msg: messages.append(msg.record["message"]), level="INFO")
    yield messages
    logger.remove(handler_id)
