"""Geometry contract.

Enforces the guarantee that the tower geometry describes a usable grid
before any dead tower is interpolated.
"""

from calofill.contracts.base import require


def assert_geometry(geometry) -> None:
    """Enforce geometry contract.

    Called at setup, once a geometry handle has been found.

    Parameters
    ----------
    geometry : TowerGeometry
        Geometry of the calorimeter being processed

    Raises
    ------
    ContractViolation
        If the grid has no eta or no phi bins
    """
    eta_bins = geometry.get_etabins()
    phi_bins = geometry.get_phibins()
    require(
        eta_bins > 0,
        f"Geometry contract violated: eta_bins={eta_bins}, expected > 0"
    )
    require(
        phi_bins > 0,
        f"Geometry contract violated: phi_bins={phi_bins}, expected > 0"
    )
