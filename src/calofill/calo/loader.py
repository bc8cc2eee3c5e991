"""Read and write event tower grids as xarray Datasets.

Expected dataset layout (variable names come from InternalConfig.var_names,
dimension names from InternalConfig.coord_names):

- ``TOWER_CALIB_<det>`` (event, eta, phi) float: tower energies, NaN where
  no tower was recorded
- ``TOWERGEOM_<det>`` (eta, phi) bool: towers present in the geometry.
  Required.
- ``DEADMAP_<det>`` (eta, phi) bool: dead towers. Optional; when missing the
  run proceeds without interpolation.
"""

from pathlib import Path
from typing import Optional, TYPE_CHECKING
import logging

import numpy as np
import xarray as xr

from calofill.calo.dead_map import DeadTowerMap
from calofill.calo.geometry import TowerGeometry
from calofill.calo.tower_key import calo_id_from_name
from calofill.calo.towers import TowerContainer
from calofill.contracts import require

if TYPE_CHECKING:
    from calofill.schemas import InternalConfig

__all__ = ['TowerDataLoader']

logger = logging.getLogger(__name__)


class TowerDataLoader:
    """Convert between NetCDF/xarray tower grids and calofill handles.

    Parameters
    ----------
    config : InternalConfig
        Fully validated runtime configuration.
    """

    def __init__(self, config: "InternalConfig"):
        self.config = config
        self.detector = config.detector.name
        self.calo_id = calo_id_from_name(self.detector)

        self.towers_var = config.var_names.towers
        self.geometry_var = config.var_names.geometry
        self.dead_map_var = config.var_names.dead_map

        self.event_dim = config.coord_names.event
        self.eta_dim = config.coord_names.eta
        self.phi_dim = config.coord_names.phi

    def load(self, path) -> xr.Dataset:
        """Open a tower NetCDF file and load it into memory."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Tower file not found: {path}")

        with xr.open_dataset(path) as ds:
            ds = ds.load()
        require(
            self.towers_var in ds.data_vars,
            f"Tower file contract violated: missing '{self.towers_var}' variable"
        )
        logger.info("Loaded %s: %d events", path.name, self.n_events(ds))
        return ds

    def save(self, ds: xr.Dataset, path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        ds.to_netcdf(path)
        logger.info("Saved %s", path)
        return path

    def n_events(self, ds: xr.Dataset) -> int:
        return int(ds[self.towers_var].sizes[self.event_dim])

    def _grid(self, ds: xr.Dataset, name: str) -> np.ndarray:
        """2D (eta, phi) array of a variable, in canonical dimension order."""
        return ds[name].transpose(self.eta_dim, self.phi_dim).values

    def geometry_from_dataset(self, ds: xr.Dataset) -> Optional[TowerGeometry]:
        """Tower geometry described by the dataset, None if absent."""
        if self.geometry_var not in ds.data_vars:
            logger.error("%s: geometry variable '%s' missing",
                         self.detector, self.geometry_var)
            return None

        present = self._grid(ds, self.geometry_var).astype(bool)
        eta_bins, phi_bins = present.shape
        towers = [(int(ieta), int(iphi)) for ieta, iphi in zip(*np.nonzero(present))]
        return TowerGeometry(self.calo_id, eta_bins, phi_bins, towers)

    def dead_map_from_dataset(self, ds: xr.Dataset) -> Optional[DeadTowerMap]:
        """Dead tower map described by the dataset, None if absent."""
        if self.dead_map_var not in ds.data_vars:
            return None

        dead = self._grid(ds, self.dead_map_var).astype(bool)
        dead_map = DeadTowerMap(self.calo_id)
        for ieta, iphi in zip(*np.nonzero(dead)):
            dead_map.add_dead_tower_at(int(ieta), int(iphi))
        return dead_map

    def towers_for_event(self, ds: xr.Dataset, event: int) -> TowerContainer:
        """Sparse tower container for one event (by position)."""
        energies = (
            ds[self.towers_var]
            .isel({self.event_dim: event})
            .transpose(self.eta_dim, self.phi_dim)
            .values
        )
        return TowerContainer.from_array(self.calo_id, energies)
