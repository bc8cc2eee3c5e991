"""Dead tower interpolation on a toroidal (eta, phi) grid.

Each dead tower gets the mean energy of its live, measured neighbors among
the eight surrounding bins. Both axes wrap around. A dead tower without any
usable neighbor is left untouched.

The function below is the whole algorithm; the processor in
``calofill.pipeline.processor`` wires it to geometry, dead map and tower
container handles once per event.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from calofill.calo.geometry import GridShape, describe_key
from calofill.calo.towers import TowerContainer
from calofill.contracts import UnresolvedTowerError, assert_tower_bins, require

__all__ = [
    'NEIGHBOR_OFFSETS',
    'InterpolationStats',
    'wrap_bin',
    'neighbor_bins',
    'interpolate_dead_towers',
]

logger = logging.getLogger(__name__)

GridCoord = Tuple[int, int]

# eight neighbors, counter-clockwise starting at eta+1
NEIGHBOR_OFFSETS: Tuple[GridCoord, ...] = (
    (+1, 0), (+1, +1), (0, +1), (-1, +1), (-1, 0), (-1, -1), (0, -1), (+1, -1),
)


@dataclass
class InterpolationStats:
    """Per-cycle recovery summary."""
    total_recovered_energy: float = 0.0
    recovered_towers: int = 0

    def add(self, energy: float) -> None:
        self.total_recovered_energy += energy
        self.recovered_towers += 1

    def as_tuple(self) -> Tuple[float, int]:
        return self.total_recovered_energy, self.recovered_towers


def wrap_bin(index: int, nbins: int) -> int:
    """Fold an index shifted by at most one bin back onto [0, nbins).

    Single correction, not modulo: values >= nbins lose one nbins, then
    negative values gain one.
    """
    if index >= nbins:
        index -= nbins
    if index < 0:
        index += nbins
    return index


def neighbor_bins(bineta: int, binphi: int, shape: GridShape) -> Iterator[GridCoord]:
    """Wrapped bins of the eight neighbors, in NEIGHBOR_OFFSETS order."""
    for deta, dphi in NEIGHBOR_OFFSETS:
        yield (wrap_bin(bineta + deta, shape.eta_bins),
               wrap_bin(binphi + dphi, shape.phi_bins))


def interpolate_dead_towers(
    dead_towers: Iterable[int],
    coordinate_of: Callable[[int], Optional[GridCoord]],
    key_at: Callable[[int, int], int],
    is_dead: Callable[[int, int], bool],
    shape: GridShape,
    towers: TowerContainer,
    detector: str = "",
) -> InterpolationStats:
    """Fill dead towers with the average of their usable neighbors.

    Parameters
    ----------
    dead_towers : iterable of int
        Dead tower keys, processed in iteration order.
    coordinate_of : callable
        key -> (bineta, binphi), or None when the key is not in the geometry.
    key_at : callable
        (ieta, iphi) -> key, used to look neighbors up in ``towers``.
    is_dead : callable
        (ieta, iphi) -> bool
    shape : GridShape
        Number of eta and phi bins. Both must be positive.
    towers : TowerContainer
        Sparse energy store. Modified in place: recovered energies are
        inserted, or overwrite a stored value for the dead tower.
    detector : str, optional
        Detector name used in log and error messages.

    Returns
    -------
    InterpolationStats
        Total recovered energy and number of recovered towers.

    Raises
    ------
    UnresolvedTowerError
        If a dead tower key has no geometry entry. Raised before anything
        is written to ``towers``.
    ContractViolation
        If the grid shape is empty or a tower bin is out of range.

    Notes
    -----
    A neighbor is skipped when it is dead, and separately when it has no
    stored energy. Writes land in ``towers`` as each dead tower is done, so
    a later dead tower could see an earlier recovered value; with ``is_dead``
    backed by the same dead set this never happens because dead neighbors
    are skipped first.

    Examples
    --------
    >>> stats = interpolate_dead_towers(
    ...     dead_map.dead_towers(), geometry.coordinate_of, geometry.key_at,
    ...     dead_map.is_dead, geometry.shape, towers)
    >>> stats.recovered_towers
    1
    """
    require(shape.eta_bins > 0, f"eta_bins={shape.eta_bins}, expected > 0")
    require(shape.phi_bins > 0, f"phi_bins={shape.phi_bins}, expected > 0")

    # Resolve every dead tower first so a bad key aborts before any write
    resolved: List[Tuple[int, int, int]] = []
    for key in dead_towers:
        coord = coordinate_of(key)
        if coord is None:
            raise UnresolvedTowerError(key, detector)
        bineta, binphi = coord
        assert_tower_bins(bineta, binphi, shape.eta_bins, shape.phi_bins)
        resolved.append((key, bineta, binphi))

    stats = InterpolationStats()
    debug = logger.isEnabledFor(logging.DEBUG)

    for key, bineta, binphi in resolved:
        n_neighbor = 0
        sum_neighbor = 0.0
        used = []

        for ieta, iphi in neighbor_bins(bineta, binphi, shape):
            if is_dead(ieta, iphi):
                continue

            energy = towers.get(key_at(ieta, iphi))
            if energy is None:
                continue

            sum_neighbor += energy
            n_neighbor += 1
            if debug:
                used.append(f"{energy} ({ieta}-{iphi})")

        if n_neighbor > 0:
            recovered = sum_neighbor / n_neighbor
            towers.set(key, recovered)
            stats.add(recovered)
            if debug:
                logger.debug("%s tower %s: neighbors %s -> %s",
                             detector, describe_key(key), ", ".join(used), recovered)
        elif debug:
            logger.debug("%s tower %s: no neighbor towers found",
                         detector, describe_key(key))

    return stats
