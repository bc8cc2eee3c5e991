"""Tower geometry of one calorimeter.

Holds the grid size and the bin position of every tower known to the
geometry. Towers that are not registered cannot be located: that is how
an invalid dead tower id shows up.
"""

import logging
from typing import Dict, Iterable, NamedTuple, Optional, Tuple

from calofill.calo.tower_key import encode_tower_key, decode_tower_key

__all__ = ['GridShape', 'TowerGeometry']

logger = logging.getLogger(__name__)

GridCoord = Tuple[int, int]


class GridShape(NamedTuple):
    """Number of (eta, phi) bins of a calorimeter."""
    eta_bins: int
    phi_bins: int


class TowerGeometry:
    """Geometry container for one calorimeter.

    Parameters
    ----------
    calo_id : int
        Calorimeter id used to build tower keys.
    eta_bins, phi_bins : int
        Grid size. Both axes wrap around.
    towers : iterable of (ieta, iphi), optional
        Bins of the towers registered in the geometry.
    """

    def __init__(self, calo_id: int, eta_bins: int, phi_bins: int,
                 towers: Optional[Iterable[GridCoord]] = None):
        self.calo_id = int(calo_id)
        self.eta_bins = int(eta_bins)
        self.phi_bins = int(phi_bins)
        self._towers: Dict[int, GridCoord] = {}
        for ieta, iphi in towers or ():
            self.add_tower(ieta, iphi)

    @classmethod
    def full_grid(cls, calo_id: int, eta_bins: int, phi_bins: int) -> "TowerGeometry":
        """Geometry with a tower registered at every bin."""
        return cls(
            calo_id, eta_bins, phi_bins,
            ((ieta, iphi) for ieta in range(eta_bins) for iphi in range(phi_bins)),
        )

    @property
    def shape(self) -> GridShape:
        return GridShape(self.eta_bins, self.phi_bins)

    def get_etabins(self) -> int:
        return self.eta_bins

    def get_phibins(self) -> int:
        return self.phi_bins

    def key_at(self, ieta: int, iphi: int) -> int:
        """Tower key for a bin of this calorimeter."""
        return encode_tower_key(self.calo_id, ieta, iphi)

    def add_tower(self, ieta: int, iphi: int) -> int:
        """Register a tower and return its key."""
        key = self.key_at(int(ieta), int(iphi))
        self._towers[key] = (int(ieta), int(iphi))
        return key

    def coordinate_of(self, key: int) -> Optional[GridCoord]:
        """(bineta, binphi) of a registered tower, None for unknown keys."""
        return self._towers.get(key)

    def has_tower(self, key: int) -> bool:
        return key in self._towers

    def size(self) -> int:
        return len(self._towers)

    def identify(self) -> None:
        """Log a one-line description."""
        logger.info(
            "TowerGeometry: calo_id=%d, eta_bins=%d, phi_bins=%d, towers=%d",
            self.calo_id, self.eta_bins, self.phi_bins, self.size(),
        )

    def __repr__(self):
        return (f"TowerGeometry(calo_id={self.calo_id}, eta_bins={self.eta_bins}, "
                f"phi_bins={self.phi_bins}, towers={self.size()})")


def describe_key(key: int) -> str:
    """Human readable form of a tower key, for log messages."""
    calo_id, ieta, iphi = decode_tower_key(key)
    return f"{key} (calo {calo_id}, bin {ieta}-{iphi})"
