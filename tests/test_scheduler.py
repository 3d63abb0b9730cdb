"""Tests for commute_city.scheduler."""

from typing import List, Tuple

import pytest

from commute_city.errors import CommuteStalledError, SchedulerError
from commute_city.roster import AgentRecord
from commute_city.scheduler import CommutePhase, CommuteScheduler
from commute_city.world import InstanceSpawner


class StubWorld(InstanceSpawner):
    """Counts spawns; tests decide how many agents are still travelling."""

    def __init__(self) -> None:
        self.spawned: List[Tuple[tuple, tuple, str]] = []
        self.active = 0

    def spawn(self, origin, destination, name) -> None:
        self.spawned.append((origin, destination, name))
        self.active += 1

    def active_count(self) -> int:
        return self.active


def make_roster(n: int) -> List[AgentRecord]:
    return [AgentRecord(i, (float(i), 0.0, 0.0), (0.0, 0.0, float(i + 10))) for i in range(n)]


class TestCommuteScheduler:
    def test_starts_dispatching_to_work(self) -> None:
        scheduler = CommuteScheduler(make_roster(3), StubWorld())
        assert scheduler.phase is CommutePhase.DISPATCH_TO_WORK

    def test_first_tick_spawns_wave_home_to_office(self) -> None:
        world = StubWorld()
        roster = make_roster(3)
        scheduler = CommuteScheduler(roster, world)
        assert scheduler.tick() is CommutePhase.COMMUTING_TO_WORK
        assert world.active_count() == 3
        assert world.spawned == [(r.home, r.office, f"Agent {r.index}") for r in roster]

    def test_waits_until_every_agent_arrived(self) -> None:
        world = StubWorld()
        scheduler = CommuteScheduler(make_roster(3), world)
        scheduler.tick()

        seen = []
        for remaining in (2, 1, 0):
            world.active = remaining
            seen.append(scheduler.tick())
        assert seen == [CommutePhase.COMMUTING_TO_WORK,
                        CommutePhase.COMMUTING_TO_WORK,
                        CommutePhase.DISPATCH_TO_HOME]
        assert seen.count(CommutePhase.DISPATCH_TO_HOME) == 1
        assert scheduler.legs_completed == 1

    def test_repeated_polls_do_not_respawn(self) -> None:
        world = StubWorld()
        scheduler = CommuteScheduler(make_roster(3), world)
        scheduler.tick()
        for _ in range(10):
            scheduler.tick()
        assert scheduler.batches_spawned == 1
        assert len(world.spawned) == 3

    def test_return_leg_spawns_office_to_home(self) -> None:
        world = StubWorld()
        roster = make_roster(2)
        scheduler = CommuteScheduler(roster, world)
        scheduler.tick()
        world.active = 0
        scheduler.tick()
        assert scheduler.tick() is CommutePhase.COMMUTING_TO_HOME
        assert world.spawned[2:] == [(r.office, r.home, f"Agent {r.index}") for r in roster]

    def test_full_cycle_returns_to_start(self) -> None:
        world = StubWorld()
        scheduler = CommuteScheduler(make_roster(2), world)
        phases = []
        for _ in range(4):
            phases.append(scheduler.tick())
            world.active = 0
        assert phases == [CommutePhase.COMMUTING_TO_WORK,
                          CommutePhase.DISPATCH_TO_HOME,
                          CommutePhase.COMMUTING_TO_HOME,
                          CommutePhase.DISPATCH_TO_WORK]
        assert scheduler.batches_spawned == 2
        assert scheduler.legs_completed == 2

    def test_empty_roster_cycles_without_spawning(self) -> None:
        world = StubWorld()
        scheduler = CommuteScheduler([], world)
        scheduler.tick()
        assert scheduler.tick() is CommutePhase.DISPATCH_TO_HOME
        assert world.spawned == []

    def test_unknown_phase_raises(self) -> None:
        scheduler = CommuteScheduler(make_roster(1), StubWorld())
        scheduler.phase = "goWork"
        with pytest.raises(SchedulerError, match="Unknown commute phase"):
            scheduler.tick()

    def test_stalled_commute_raises(self) -> None:
        world = StubWorld()
        scheduler = CommuteScheduler(make_roster(2), world, max_commute_ticks=3)
        scheduler.tick()
        for _ in range(3):
            scheduler.tick()
        with pytest.raises(CommuteStalledError):
            scheduler.tick()

    def test_no_stall_limit_by_default(self) -> None:
        world = StubWorld()
        scheduler = CommuteScheduler(make_roster(2), world)
        scheduler.tick()
        for _ in range(1000):
            scheduler.tick()
        assert scheduler.phase is CommutePhase.COMMUTING_TO_WORK

    def test_failed_spawn_batch_is_not_repeated(self) -> None:
        class FlakyWorld(StubWorld):
            def spawn(self, origin, destination, name) -> None:
                if len(self.spawned) == 1:
                    raise RuntimeError("engine refused spawn")
                super().spawn(origin, destination, name)

        world = FlakyWorld()
        scheduler = CommuteScheduler(make_roster(3), world)
        with pytest.raises(RuntimeError):
            scheduler.tick()
        assert scheduler.phase is CommutePhase.COMMUTING_TO_WORK
        scheduler.tick()
        assert world.active_count() == 1
        assert len(world.spawned) == 1
