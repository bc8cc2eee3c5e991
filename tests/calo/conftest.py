import pytest

from calofill.calo import CaloId, DeadTowerMap, TowerContainer, TowerGeometry


# ---- 4x4 CEMC grid fixtures ----
@pytest.fixture
def geometry_4x4():
    """Every bin of a 4x4 grid registered."""
    return TowerGeometry.full_grid(CaloId.CEMC, 4, 4)


@pytest.fixture
def make_dead_map():
    """Dead map factory taking (ieta, iphi) bins."""
    def _make(*bins, calo_id=CaloId.CEMC):
        dead_map = DeadTowerMap(calo_id)
        for ieta, iphi in bins:
            dead_map.add_dead_tower_at(ieta, iphi)
        return dead_map
    return _make


@pytest.fixture
def make_towers():
    """Tower container factory taking {(ieta, iphi): energy}."""
    def _make(energies=None, calo_id=CaloId.CEMC):
        towers = TowerContainer(calo_id)
        for (ieta, iphi), energy in (energies or {}).items():
            towers.set_at(ieta, iphi, energy)
        return towers
    return _make


@pytest.fixture
def run_interp():
    """Run interpolate_dead_towers wired to a geometry and dead map."""
    from calofill.calo.interpolator import interpolate_dead_towers

    def _run(geometry, dead_map, towers):
        return interpolate_dead_towers(
            dead_map.dead_towers(),
            geometry.coordinate_of,
            geometry.key_at,
            dead_map.is_dead,
            geometry.shape,
            towers,
        )
    return _run
