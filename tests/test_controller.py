"""Tests for GameController: the round state machine and its statistics."""

import itertools

import numpy as np
import pytest

from monty_hall.controller import Accepted, GameController, Rejected, handle_press
from monty_hall.errors import InvalidDoorError
from monty_hall.random_source import NumpyRandomSource
from monty_hall.state import Door, GamePhase, GameStatistics


def _assert_invariants(stats: GameStatistics) -> None:
    assert stats.times_won <= stats.games_played
    assert stats.times_switched_and_won <= stats.times_switched <= stats.games_played


class TestStart:
    def test_initial_state(self) -> None:
        ctrl = GameController()
        snap = ctrl.snapshot()
        assert snap.phase is GamePhase.STARTED
        assert snap.first_door is None and snap.open_door is None and snap.winning_door is None
        assert ctrl.statistics == GameStatistics()

    def test_first_press_opens_a_goat(self, make_controller) -> None:
        ctrl = make_controller(doors=[3])
        result = handle_press(ctrl, Door.ONE)
        assert isinstance(result, Accepted) and result.accepted
        assert ctrl.phase is GamePhase.FIRST_DOOR_OPEN
        assert ctrl.first_door == Door.ONE
        assert ctrl.open_door == Door.TWO

    def test_winning_door_hidden_until_round_ends(self, make_controller) -> None:
        ctrl = make_controller(doors=[2])
        snap = ctrl.handle_press(1).snapshot
        assert snap.winning_door is None
        snap = ctrl.handle_press(2).snapshot
        assert snap.winning_door == Door.TWO

    def test_integers_are_accepted(self, make_controller) -> None:
        ctrl = make_controller(doors=[1], bits=[1])
        ctrl.handle_press(1)
        assert ctrl.first_door is Door.ONE
        assert ctrl.open_door is Door.THREE


class TestRejection:
    def test_pressing_open_door_is_rejected(self, make_controller) -> None:
        ctrl = make_controller(doors=[3])
        ctrl.handle_press(Door.ONE)
        result = ctrl.handle_press(Door.TWO)
        assert isinstance(result, Rejected)
        assert not result.accepted
        assert result.snapshot.phase is GamePhase.FIRST_DOOR_OPEN

    def test_rejection_is_idempotent(self, make_controller) -> None:
        ctrl = make_controller(doors=[1], bits=[0])
        ctrl.handle_press(Door.ONE)
        before = ctrl.snapshot()
        for _ in range(5):
            assert not ctrl.handle_press(ctrl.open_door).accepted
        assert ctrl.snapshot() == before
        # the hidden winner is still the same: staying wins
        assert ctrl.handle_press(Door.ONE).snapshot.phase is GamePhase.WON


class TestContractViolation:
    @pytest.mark.parametrize("bad", [None, 0, 4, True, "2"])
    @pytest.mark.parametrize("presses", [[], [1], [1, 3]])
    def test_non_doors_fail_fast_without_changing_state(self, make_controller, bad, presses) -> None:
        ctrl = make_controller(doors=[2])
        for door in presses:
            ctrl.handle_press(door)
        before = ctrl.snapshot()
        with pytest.raises(InvalidDoorError):
            ctrl.handle_press(bad)
        assert ctrl.snapshot() == before


class TestScenarios:
    @pytest.mark.parametrize(("winning", "bits"), [(2, []), (3, []), (1, [0]), (1, [1])])
    def test_switch_after_rejected_press(self, make_controller, winning, bits) -> None:
        ctrl = make_controller(doors=[winning], bits=bits)
        ctrl.handle_press(Door.ONE)
        open_door = ctrl.open_door
        assert open_door not in (Door.ONE, Door(winning))

        assert not ctrl.handle_press(open_door).accepted
        (third,) = set(Door) - {Door.ONE, open_door}
        snap = ctrl.handle_press(third).snapshot

        stats = snap.statistics
        assert stats.games_played == 1
        assert stats.times_switched == 1
        if third == winning:
            assert snap.phase is GamePhase.WON
            assert stats.times_won == 1
            assert stats.times_switched_and_won == 1
        else:
            assert snap.phase is GamePhase.LOST
            assert stats.times_won == 0
            assert stats.times_switched_and_won == 0

    @pytest.mark.parametrize(("winning", "bits"), [(2, []), (1, [1])])
    def test_stay(self, make_controller, winning, bits) -> None:
        ctrl = make_controller(doors=[winning], bits=bits)
        ctrl.handle_press(Door.ONE)
        stats = ctrl.handle_press(Door.ONE).snapshot.statistics
        assert stats.times_switched == 0
        assert stats.games_played == 1
        assert stats.times_won == (1 if winning == 1 else 0)

    @pytest.mark.parametrize("winning", [1, 2])
    def test_acknowledge_then_new_round(self, make_controller, winning) -> None:
        ctrl = make_controller(doors=[winning, 3], bits=[0, 0])
        ctrl.handle_press(Door.ONE)
        ctrl.handle_press(Door.ONE)
        stats = ctrl.statistics

        result = ctrl.handle_press(Door.TWO)
        assert result.accepted
        assert result.snapshot.phase is GamePhase.STARTED
        assert result.snapshot.first_door is None
        assert ctrl.statistics == stats

        ctrl.handle_press(Door.THREE)
        assert ctrl.phase is GamePhase.FIRST_DOOR_OPEN
        assert ctrl.first_door is Door.THREE
        assert ctrl.open_door in (Door.ONE, Door.TWO)
        assert ctrl.handle_press(Door.THREE).snapshot.winning_door is Door.THREE

    def test_counters_only_move_when_round_ends(self, make_controller) -> None:
        ctrl = make_controller(doors=[2])
        ctrl.handle_press(Door.ONE)
        ctrl.handle_press(Door.THREE)  # open door, rejected
        assert ctrl.statistics.games_played == 0
        ctrl.handle_press(Door.TWO)
        assert ctrl.statistics.games_played == 1
        ctrl.handle_press(Door.TWO)
        assert ctrl.statistics.games_played == 1


class TestRandomPlay:
    def test_invariants_hold_after_every_event(self) -> None:
        rng = np.random.default_rng(2024)
        ctrl = GameController(NumpyRandomSource(seed=11))
        for _ in range(3_000):
            ctrl.handle_press(int(rng.integers(1, 4)))
            _assert_invariants(ctrl.statistics)
            snap = ctrl.snapshot()
            if snap.phase is GamePhase.FIRST_DOOR_OPEN:
                assert snap.open_door != snap.first_door
            if snap.phase.is_over:
                assert snap.open_door not in (snap.first_door, snap.winning_door)
        assert ctrl.statistics.games_played > 0

    def test_winning_door_roughly_uniform(self) -> None:
        ctrl = GameController(NumpyRandomSource(seed=3))
        counts = dict.fromkeys(Door, 0)
        for _ in range(3_000):
            ctrl.handle_press(Door.ONE)
            ctrl.handle_press(Door.ONE)
            counts[ctrl.snapshot().winning_door] += 1
            ctrl.handle_press(Door.ONE)
        for count in counts.values():
            assert 850 < count < 1_150

    def test_every_first_pick_and_decision(self) -> None:
        ctrl = GameController(NumpyRandomSource(seed=0))
        for first, switch in itertools.product(Door, (False, True)):
            ctrl.handle_press(first)
            (other,) = set(Door) - {first, ctrl.open_door}
            ctrl.handle_press(other if switch else first)
            assert ctrl.phase.is_over
            ctrl.handle_press(first)
        stats = ctrl.statistics
        assert stats.games_played == 6
        assert stats.times_switched == 3


class TestStatisticsCarryOver:
    def test_initial_statistics(self, scripted) -> None:
        start = GameStatistics(games_played=4, times_switched=2, times_switched_and_won=1, times_won=2)
        ctrl = GameController(scripted(doors=[2]), statistics=start)
        ctrl.handle_press(Door.ONE)
        ctrl.handle_press(Door.TWO)
        assert ctrl.statistics == GameStatistics(
            games_played=5, times_switched=3, times_switched_and_won=2, times_won=3
        )
