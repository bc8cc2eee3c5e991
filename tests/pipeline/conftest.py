import numpy as np
import pytest

from calofill.calo import CaloId, DeadTowerMap, TowerContainer, TowerGeometry
from tests.helpers.fake_towers import empty_events, make_fake_tower_ds


@pytest.fixture
def geometry():
    return TowerGeometry.full_grid(CaloId.CEMC, 4, 4)


@pytest.fixture
def dead_map():
    """Single dead tower at (2, 2)."""
    dm = DeadTowerMap(CaloId.CEMC)
    dm.add_dead_tower_at(2, 2)
    return dm


@pytest.fixture
def towers():
    """Neighbors of (2, 2) at (1, 1)=10 and (3, 3)=30."""
    tc = TowerContainer(CaloId.CEMC)
    tc.set_at(1, 1, 10.0)
    tc.set_at(3, 3, 30.0)
    return tc


@pytest.fixture
def two_event_ds():
    """Two 4x4 events with (2, 2) dead."""
    energies = empty_events(2, 4, 4)
    energies[0, 1, 1] = 10.0
    energies[0, 3, 3] = 30.0
    energies[1, 2, 1] = 4.0
    energies[1, 0, 0] = 100.0
    dead = np.zeros((4, 4), dtype=bool)
    dead[2, 2] = True
    return make_fake_tower_ds(energies, dead=dead)
