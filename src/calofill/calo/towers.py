"""Sparse per-event tower energy store.

Only towers with a recorded energy are present. An absent key means
"no reading this event", which is a different condition from a dead tower.
"""

import logging
from typing import Dict, Iterator, Optional

import numpy as np

from calofill.calo.tower_key import encode_tower_key, decode_tower_key

__all__ = ['TowerContainer']

logger = logging.getLogger(__name__)


class TowerContainer:
    """Calibrated tower energies of one calorimeter for one event.

    The container is owned by the caller and filled in place by the
    dead tower interpolation.
    """

    def __init__(self, calo_id: int, energies: Optional[Dict[int, float]] = None):
        self.calo_id = int(calo_id)
        self._energies: Dict[int, float] = {}
        for key, energy in (energies or {}).items():
            self.set(key, energy)

    @classmethod
    def from_array(cls, calo_id: int, energies: np.ndarray) -> "TowerContainer":
        """Build from a 2D (eta, phi) array; NaN cells have no tower."""
        energies = np.asarray(energies, dtype=np.float64)
        if energies.ndim != 2:
            raise ValueError(f"Expected 2D (eta, phi) array, got {energies.ndim} dims")

        container = cls(calo_id)
        for ieta, iphi in zip(*np.nonzero(~np.isnan(energies))):
            container.set_at(int(ieta), int(iphi), float(energies[ieta, iphi]))
        return container

    def to_array(self, shape) -> np.ndarray:
        """2D (eta, phi) float array, NaN where no tower is stored.

        Towers whose bins fall outside ``shape`` are not representable and
        are left out.
        """
        eta_bins, phi_bins = shape
        out = np.full((eta_bins, phi_bins), np.nan, dtype=np.float64)
        for key, energy in self._energies.items():
            _, ieta, iphi = decode_tower_key(key)
            if ieta < eta_bins and iphi < phi_bins:
                out[ieta, iphi] = energy
            else:
                logger.debug("Tower %d at bin %d-%d outside %s, not exported",
                             key, ieta, iphi, tuple(shape))
        return out

    def get(self, key: int) -> Optional[float]:
        return self._energies.get(key)

    def get_at(self, ieta: int, iphi: int) -> Optional[float]:
        return self._energies.get(encode_tower_key(self.calo_id, ieta, iphi))

    def set(self, key: int, energy: float) -> None:
        """Insert or overwrite the energy of a tower."""
        self._energies[int(key)] = float(energy)

    def set_at(self, ieta: int, iphi: int, energy: float) -> int:
        key = encode_tower_key(self.calo_id, ieta, iphi)
        self.set(key, energy)
        return key

    def total(self) -> float:
        """Sum of all stored energies."""
        return float(sum(self._energies.values()))

    def size(self) -> int:
        return len(self._energies)

    def keys(self) -> Iterator[int]:
        return iter(self._energies.keys())

    def copy(self) -> "TowerContainer":
        return TowerContainer(self.calo_id, dict(self._energies))

    def __contains__(self, key) -> bool:
        return key in self._energies

    def __len__(self) -> int:
        return len(self._energies)

    def __eq__(self, other) -> bool:
        if not isinstance(other, TowerContainer):
            return NotImplemented
        return self.calo_id == other.calo_id and self._energies == other._energies

    def __repr__(self):
        return f"TowerContainer(calo_id={self.calo_id}, towers={self.size()})"
