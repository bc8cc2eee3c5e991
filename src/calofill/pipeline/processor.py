"""Per-run dead tower interpolation module.

Called once per run to receive its input handles and once per event to fill
dead towers in that event's tower container.
"""

import logging
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from calofill.calo.dead_map import DeadTowerMap
from calofill.calo.geometry import TowerGeometry
from calofill.calo.interpolator import InterpolationStats, interpolate_dead_towers
from calofill.calo.towers import TowerContainer
from calofill.contracts import (
    ContractViolation,
    FatalInputError,
    MissingInputError,
    RunStatus,
    assert_geometry,
    require,
)

if TYPE_CHECKING:
    from calofill.schemas import InternalConfig

__all__ = ['DeadTowerInterpProcessor', 'CycleResult']

logger = logging.getLogger(__name__)

# Marks "argument not given" for run_one_cycle, so that None can mean "no dead map"
_UNSET = object()


@dataclass(frozen=True)
class CycleResult:
    """Outcome of one event.

    stats and total_energy are None when status is ABORT.
    """
    status: RunStatus
    stats: Optional[InterpolationStats] = None
    total_energy: Optional[float] = None

    @property
    def ok(self) -> bool:
        return self.status == RunStatus.OK


class DeadTowerInterpProcessor:
    """Fill dead towers of one calorimeter, event by event.

    Lifecycle::

        proc = DeadTowerInterpProcessor(config)
        if proc.init_run(geometry, towers, dead_map) == RunStatus.OK:
            for event in events:
                result = proc.run_one_cycle(towers=event_towers)
                if not result.ok:
                    break
        proc.end_run()

    A fatal input error (missing geometry at setup, a dead tower unknown to
    the geometry) aborts the whole run: the failing call returns ABORT and
    every later cycle returns ABORT without touching its towers.

    Running without a dead map is valid. Such cycles recover nothing, and
    the condition is logged once per processor.
    """

    def __init__(self, config: "InternalConfig", name: str = "DeadTowerInterp"):
        self.config = config
        self.name = name
        self.detector = config.detector.name

        self.geometry: Optional[TowerGeometry] = None
        self.towers: Optional[TowerContainer] = None
        self.dead_map: Optional[DeadTowerMap] = None

        self.initialized = False
        self.aborted = False
        self._missing_dead_map_reported = False

        self.n_cycles = 0
        self.run_recovered_energy = 0.0
        self.run_recovered_towers = 0

    def _prefix(self) -> str:
        return f"{self.name}::{self.detector}"

    def _abort(self, error: Exception) -> RunStatus:
        logger.critical("%s: %s", self._prefix(), error)
        logger.critical("%s: aborting run", self._prefix())
        self.aborted = True
        return RunStatus.ABORT

    def init_run(self, geometry: Optional[TowerGeometry],
                 towers: Optional[TowerContainer],
                 dead_map: Optional[DeadTowerMap] = None) -> RunStatus:
        """Receive the run's input handles.

        Parameters
        ----------
        geometry : TowerGeometry or None
            Required. None aborts the run.
        towers : TowerContainer or None
            Calibrated towers to fill. Required; can be replaced per event
            through run_one_cycle().
        dead_map : DeadTowerMap, optional
            Dead towers for the run. None selects the no-dead-map mode.

        Returns
        -------
        RunStatus
        """
        try:
            if geometry is None:
                raise MissingInputError(
                    f"{self._prefix()}: tower geometry missing, bailing out"
                )
            if towers is None:
                raise MissingInputError(
                    f"{self._prefix()}: tower container "
                    f"{self.config.var_names.towers} missing, bailing out"
                )
            assert_geometry(geometry)
        except (FatalInputError, ContractViolation) as e:
            return self._abort(e)

        self.geometry = geometry
        self.towers = towers
        self.dead_map = dead_map

        if dead_map is not None:
            logger.info("%s: use dead map", self._prefix())
            dead_map.identify()
        geometry.identify()

        self.initialized = True
        self.aborted = False
        return RunStatus.OK

    def run_one_cycle(self, towers: Optional[TowerContainer] = None,
                      dead_map=_UNSET) -> CycleResult:
        """Interpolate dead towers for one event.

        Parameters
        ----------
        towers : TowerContainer, optional
            This event's towers. Defaults to the container given to init_run().
        dead_map : DeadTowerMap or None, optional
            This event's dead map. Omit to use the run's map; pass None for
            "no dead map this event".

        Returns
        -------
        CycleResult
            OK with stats and the container's total energy after filling,
            or ABORT with no stats.

        Raises
        ------
        ContractViolation
            If called before a successful init_run().
        """
        if self.aborted:
            return CycleResult(RunStatus.ABORT)
        require(self.initialized, f"{self._prefix()}: run_one_cycle() before init_run()")

        if towers is None:
            towers = self.towers
        if dead_map is _UNSET:
            dead_map = self.dead_map

        self.n_cycles += 1

        if dead_map is None:
            if not self._missing_dead_map_reported:
                self._missing_dead_map_reported = True
                logger.warning("%s: missing dead map. Do nothing ...", self._prefix())
            stats = InterpolationStats()
        else:
            try:
                stats = interpolate_dead_towers(
                    dead_map.dead_towers(),
                    self.geometry.coordinate_of,
                    self.geometry.key_at,
                    dead_map.is_dead,
                    self.geometry.shape,
                    towers,
                    detector=self.detector,
                )
            except (FatalInputError, ContractViolation) as e:
                self._abort(e)
                return CycleResult(RunStatus.ABORT)

        self.run_recovered_energy += stats.total_recovered_energy
        self.run_recovered_towers += stats.recovered_towers

        total_energy = towers.total()
        logger.info(
            "%s: recovery_energy = %s from %d towers, output sum energy = %s",
            self._prefix(), stats.total_recovered_energy, stats.recovered_towers,
            total_energy,
        )
        return CycleResult(RunStatus.OK, stats, total_energy)

    def end_run(self) -> RunStatus:
        """Log run totals."""
        logger.info(
            "%s: %d events, %d towers recovered, %s total recovered energy%s",
            self._prefix(), self.n_cycles, self.run_recovered_towers,
            self.run_recovered_energy, " (aborted)" if self.aborted else "",
        )
        return RunStatus.OK
