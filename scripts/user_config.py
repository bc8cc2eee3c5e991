"""calofill user configuration.

Modify settings here to customize the run. Advanced settings are the
defaults in calofill.schemas.param.

Usage:
    python scripts/run_dead_tower_interp.py scripts/user_config.py
    python scripts/run_dead_tower_interp.py scripts/user_config.py --detector HCALIN
"""

CONFIG = {
    # ========================================================================
    # DETECTOR
    # ========================================================================
    "DETECTOR": "CEMC",          # CEMC, HCALIN or HCALOUT
    "CALIB_PREFIX": "CALIB",     # Tower set to fill: TOWER_<prefix>_<detector>

    # ========================================================================
    # FILES
    # ========================================================================
    "INPUT_FILE": "towers.nc",   # NetCDF with (event, eta, phi) tower energies
    "OUTPUT_DIR": "./output",    # Filled NetCDF, CSV summary and logs
    "SAVE_NETCDF": True,
    "SAVE_SUMMARY": True,

    # ========================================================================
    # LOGGING
    # ========================================================================
    "LOG_LEVEL": "INFO",         # DEBUG prints every neighbor used per dead tower
}
