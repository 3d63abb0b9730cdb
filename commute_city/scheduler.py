import logging
from enum import Enum
from typing import List, Optional

from .errors import CommuteStalledError, SchedulerError
from .roster import AgentRecord
from .world import InstanceSpawner

logger = logging.getLogger(__name__)


class CommutePhase(Enum):
    DISPATCH_TO_WORK = "dispatch_to_work"
    COMMUTING_TO_WORK = "commuting_to_work"
    DISPATCH_TO_HOME = "dispatch_to_home"
    COMMUTING_TO_HOME = "commuting_to_home"


class CommuteScheduler:
    """
    Endless home -> office -> home cycle, advanced one step per tick().

    A dispatch phase spawns one agent per roster record and immediately moves
    to the matching commuting phase. A commuting phase polls the world and
    only flips direction once every agent from the wave has arrived.
    """

    def __init__(self, roster: List[AgentRecord], world: InstanceSpawner,
                 max_commute_ticks: Optional[int] = None):
        self.roster = list(roster)
        self.world = world
        self.max_commute_ticks = max_commute_ticks
        self.phase = CommutePhase.DISPATCH_TO_WORK
        self.batches_spawned = 0
        self.legs_completed = 0
        self._ticks_in_phase = 0

    def _dispatch(self, to_work: bool):
        for record in self.roster:
            origin, destination = (record.home, record.office) if to_work else (record.office, record.home)
            self.world.spawn(origin, destination, f"Agent {record.index}")
        self.batches_spawned += 1

    def _switch(self, phase: CommutePhase):
        self.phase = phase
        self._ticks_in_phase = 0

    def _wait(self, next_phase: CommutePhase):
        still_commuting = self.world.active_count()
        if still_commuting == 0:
            self.legs_completed += 1
            self._switch(next_phase)
            logger.info("Switched regime => phase: %s", next_phase.value)
            return

        self._ticks_in_phase += 1
        if self.max_commute_ticks is not None and self._ticks_in_phase > self.max_commute_ticks:
            raise CommuteStalledError(
                f"{still_commuting} agents still commuting after {self.max_commute_ticks} ticks "
                f"in {self.phase.value}")

    def tick(self) -> CommutePhase:
        phase = self.phase
        # the phase moves on before spawning so a failed batch is never respawned
        if phase is CommutePhase.DISPATCH_TO_WORK:
            self._switch(CommutePhase.COMMUTING_TO_WORK)
            self._dispatch(to_work=True)
        elif phase is CommutePhase.DISPATCH_TO_HOME:
            self._switch(CommutePhase.COMMUTING_TO_HOME)
            self._dispatch(to_work=False)
        elif phase is CommutePhase.COMMUTING_TO_WORK:
            self._wait(CommutePhase.DISPATCH_TO_HOME)
        elif phase is CommutePhase.COMMUTING_TO_HOME:
            self._wait(CommutePhase.DISPATCH_TO_WORK)
        else:
            logger.error("Error phase not found %r", phase)
            raise SchedulerError(f"Unknown commute phase: {phase!r}")
        return self.phase
