"""Test TowerGeometry lookups."""

import pytest

from calofill.calo import CaloId, GridShape, TowerGeometry, encode_tower_key

pytestmark = pytest.mark.unit


def test_full_grid_registers_every_bin():
    geom = TowerGeometry.full_grid(CaloId.CEMC, 3, 5)

    assert geom.size() == 15
    assert geom.get_etabins() == 3
    assert geom.get_phibins() == 5
    assert geom.shape == GridShape(3, 5)


def test_coordinate_of_known_tower(geometry_4x4):
    key = geometry_4x4.key_at(2, 3)
    assert geometry_4x4.coordinate_of(key) == (2, 3)


def test_coordinate_of_unknown_tower_is_none():
    geom = TowerGeometry(CaloId.CEMC, 4, 4, [(0, 0)])

    assert geom.coordinate_of(encode_tower_key(CaloId.CEMC, 1, 1)) is None
    assert not geom.has_tower(encode_tower_key(CaloId.CEMC, 1, 1))


def test_key_of_other_calorimeter_is_unknown(geometry_4x4):
    other = encode_tower_key(CaloId.HCALIN, 1, 1)
    assert geometry_4x4.coordinate_of(other) is None


def test_add_tower_returns_key():
    geom = TowerGeometry(CaloId.HCALOUT, 2, 2)
    key = geom.add_tower(1, 0)

    assert key == encode_tower_key(CaloId.HCALOUT, 1, 0)
    assert geom.coordinate_of(key) == (1, 0)


def test_identify_logs_summary(geometry_4x4, caplog):
    import logging
    with caplog.at_level(logging.INFO, logger="calofill.calo.geometry"):
        geometry_4x4.identify()

    assert "eta_bins=4" in caplog.text
    assert "towers=16" in caplog.text
