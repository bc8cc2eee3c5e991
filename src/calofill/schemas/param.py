"""ParamConfig: Expert defaults for the dead tower interpolation run.

ALL run parameters must have defaults here. No runtime code should define
fallback values - this is the single source of truth for defaults.

Runtime code NEVER reads from ParamConfig directly - it only receives InternalConfig.
"""

from typing import Literal, Optional
from pydantic import Field, field_validator
from calofill.schemas.base import CalofillBaseModel


DetectorName = Literal["CEMC", "HCALIN", "HCALOUT"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


# =============================================================================
# Nested Configuration Models
# =============================================================================

class DetectorConfig(CalofillBaseModel):
    """Which calorimeter is processed and which tower set is filled."""
    name: DetectorName = "CEMC"
    calib_tower_prefix: str = Field("CALIB", min_length=1)

    @field_validator("name", mode="before")
    @classmethod
    def normalize_detector_name(cls, v):
        """Detector names are upper case."""
        if isinstance(v, str):
            return v.upper().strip()
        return v


class VarNamesConfig(CalofillBaseModel):
    """Explicit dataset variable names.

    None means "derive from the detector name and tower prefix".
    """
    towers: Optional[str] = None
    geometry: Optional[str] = None
    dead_map: Optional[str] = None


class CoordNamesConfig(CalofillBaseModel):
    """Dimension name mappings."""
    event: str = "event"
    eta: str = "eta"
    phi: str = "phi"


class IOConfig(CalofillBaseModel):
    """Input and output files."""
    input_file: Optional[str] = None
    output_dir: Optional[str] = None
    save_netcdf: bool = True
    save_summary: bool = True


class LoggingConfig(CalofillBaseModel):
    """Logging configuration."""
    level: LogLevel = "INFO"


# =============================================================================
# Main ParamConfig
# =============================================================================

class ParamConfig(CalofillBaseModel):
    """Complete expert configuration with all defaults.

    Usage
    -----
    This config is NOT used directly by runtime code. It serves as the
    base layer in config resolution:

        internal_cfg = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    detector: DetectorConfig = Field(default_factory=DetectorConfig)
    var_names: VarNamesConfig = Field(default_factory=VarNamesConfig)
    coord_names: CoordNamesConfig = Field(default_factory=CoordNamesConfig)
    io: IOConfig = Field(default_factory=IOConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
