"""Tests for stage contracts.

These tests verify that contracts raise at stage boundaries, directly,
without any processing code in between.
"""

import pytest

from calofill.calo import CaloId, TowerGeometry
from calofill.contracts import (
    ContractViolation,
    FatalInputError,
    MissingInputError,
    RunStatus,
    UnresolvedTowerError,
    assert_geometry,
    assert_tower_bins,
    require,
)

pytestmark = pytest.mark.unit


class TestRequire:
    """Test the base enforcement function."""

    def test_require_passes(self):
        require(True, "never raised")

    def test_require_raises_with_message(self):
        with pytest.raises(ContractViolation, match="broken invariant"):
            require(False, "broken invariant")


class TestGeometryContract:
    """Test geometry contract."""

    def test_geometry_contract_passes(self):
        assert_geometry(TowerGeometry(CaloId.CEMC, 96, 256))

    def test_geometry_contract_fails_without_eta_bins(self):
        with pytest.raises(ContractViolation, match="eta_bins=0"):
            assert_geometry(TowerGeometry(CaloId.CEMC, 0, 256))

    def test_geometry_contract_fails_without_phi_bins(self):
        with pytest.raises(ContractViolation, match="phi_bins=0"):
            assert_geometry(TowerGeometry(CaloId.CEMC, 96, 0))


class TestTowerBinContract:
    """Test the inclusive bin range check."""

    @pytest.mark.parametrize("bineta,binphi", [(0, 0), (3, 3), (4, 0), (0, 4), (4, 4)])
    def test_bins_up_to_bin_count_pass(self, bineta, binphi):
        assert_tower_bins(bineta, binphi, 4, 4)

    def test_negative_eta_fails(self):
        with pytest.raises(ContractViolation, match="bineta=-1"):
            assert_tower_bins(-1, 0, 4, 4)

    def test_phi_above_count_fails(self):
        with pytest.raises(ContractViolation, match="binphi=5"):
            assert_tower_bins(0, 5, 4, 4)


class TestFailureTypes:
    """Test fatal error taxonomy."""

    def test_fatal_errors_share_base(self):
        assert issubclass(MissingInputError, FatalInputError)
        assert issubclass(UnresolvedTowerError, FatalInputError)
        assert not issubclass(FatalInputError, ContractViolation)

    def test_unresolved_tower_error_keeps_key(self):
        err = UnresolvedTowerError(123, "CEMC")
        assert err.key == 123
        assert str(err) == "CEMC: invalid dead tower ID 123"

    def test_run_status_values(self):
        assert RunStatus.OK == "ok"
        assert RunStatus.ABORT.value == "abort"
