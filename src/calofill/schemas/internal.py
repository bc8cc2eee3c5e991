"""InternalConfig: Authoritative runtime configuration.

This is the ONLY config schema that runtime code sees. It is fully validated,
normalized, and variable names are already derived from the detector.
"""

from typing import Literal, Optional
from pydantic import ConfigDict
from calofill.schemas.base import CalofillBaseModel


class InternalDetectorConfig(CalofillBaseModel):
    """Runtime detector configuration."""
    name: Literal["CEMC", "HCALIN", "HCALOUT"]
    calib_tower_prefix: str


class InternalVarNamesConfig(CalofillBaseModel):
    """Runtime dataset variable names (always explicit)."""
    towers: str
    geometry: str
    dead_map: str


class InternalCoordNamesConfig(CalofillBaseModel):
    """Runtime dimension names."""
    event: str
    eta: str
    phi: str


class InternalIOConfig(CalofillBaseModel):
    """Runtime input/output configuration."""
    input_file: Optional[str]
    output_dir: Optional[str]
    save_netcdf: bool
    save_summary: bool


class InternalLoggingConfig(CalofillBaseModel):
    """Runtime logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class InternalConfig(CalofillBaseModel):
    """Authoritative runtime configuration.

    Runtime modules receive InternalConfig and access fields directly:

        def __init__(self, config: InternalConfig):
            self.detector = config.detector.name  # NOT .get()

    Rules
    -----
    - NO .get() calls
    - NO fallback defaults
    - NO validation

    All of that happens during config resolution, not in runtime code.
    """

    detector: InternalDetectorConfig
    var_names: InternalVarNamesConfig
    coord_names: InternalCoordNamesConfig
    io: InternalIOConfig
    logging: InternalLoggingConfig

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
        frozen=True,  # Immutable after construction
    )
