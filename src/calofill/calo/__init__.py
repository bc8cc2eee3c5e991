"""Calorimeter tower handling.

- tower_key: Tower key encoding
- geometry: Tower geometry (grid size, tower positions)
- dead_map: Dead tower map
- towers: Sparse tower energy store
- interpolator: Dead tower interpolation
- loader: NetCDF/xarray input and output
"""

from calofill.calo.tower_key import CaloId, encode_tower_key, decode_tower_key
from calofill.calo.geometry import GridShape, TowerGeometry
from calofill.calo.dead_map import DeadTowerMap
from calofill.calo.towers import TowerContainer
from calofill.calo.interpolator import InterpolationStats, interpolate_dead_towers
from calofill.calo.loader import TowerDataLoader

__all__ = [
    "CaloId",
    "encode_tower_key",
    "decode_tower_key",
    "GridShape",
    "TowerGeometry",
    "DeadTowerMap",
    "TowerContainer",
    "InterpolationStats",
    "interpolate_dead_towers",
    "TowerDataLoader",
]
