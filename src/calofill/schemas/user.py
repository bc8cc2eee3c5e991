"""UserConfig: Forgiving, minimal user-facing configuration.

This schema accepts user inputs with aliases for common naming patterns
(e.g., DETECTOR -> detector_name, INPUT_FILE -> input_file).

UserConfig is intentionally minimal - users only specify what they want
to override from the expert defaults.
"""

from typing import Literal, Optional
from pydantic import Field, field_validator
from calofill.schemas.base import CalofillBaseModel


class UserDetectorConfig(CalofillBaseModel):
    """User-facing detector config."""
    name: Optional[str] = None
    calib_tower_prefix: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def normalize_name(cls, v):
        """Detector names are upper case."""
        if isinstance(v, str):
            return v.upper().strip()
        return v


class UserVarNamesConfig(CalofillBaseModel):
    """User-facing variable name overrides."""
    towers: Optional[str] = None
    geometry: Optional[str] = None
    dead_map: Optional[str] = None


class UserCoordNamesConfig(CalofillBaseModel):
    """User-facing dimension name overrides."""
    event: Optional[str] = None
    eta: Optional[str] = None
    phi: Optional[str] = None


class UserConfig(CalofillBaseModel):
    """User-facing configuration schema.

    Users only specify what they want to override from ParamConfig defaults.
    This config is converted to internal overrides during resolution.

    Usage
    -----
        user_cfg = UserConfig(
            DETECTOR="HCALOUT",
            INPUT_FILE="/data/run42_towers.nc",
            OUTPUT_DIR="/data/out",
        )

        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    # Flat settings
    detector_name: Optional[str] = Field(None, alias="DETECTOR")
    calib_prefix: Optional[str] = Field(None, alias="CALIB_PREFIX")
    input_file: Optional[str] = Field(None, alias="INPUT_FILE")
    output_dir: Optional[str] = Field(None, alias="OUTPUT_DIR")
    save_netcdf: Optional[bool] = Field(None, alias="SAVE_NETCDF")
    save_summary: Optional[bool] = Field(None, alias="SAVE_SUMMARY")
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = Field(
        None, alias="LOG_LEVEL"
    )

    # Nested overrides (advanced users)
    detector: Optional[UserDetectorConfig] = None
    var_names: Optional[UserVarNamesConfig] = None
    coord_names: Optional[UserCoordNamesConfig] = None

    model_config = CalofillBaseModel.model_config.copy()
    # Allow forgiving input dictionaries (ignore unknown legacy keys)
    model_config.update({"populate_by_name": True, "extra": "ignore"})

    @field_validator("detector_name", mode="before")
    @classmethod
    def normalize_detector_name(cls, v):
        """Detector names are upper case."""
        if isinstance(v, str):
            return v.upper().strip()
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept lower case level names."""
        if isinstance(v, str):
            return v.upper().strip()
        return v

    def to_internal_overrides(self) -> dict:
        """Convert flat UserConfig to nested InternalConfig structure.

        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}

        # Detector section
        detector = {}
        if self.detector_name is not None:
            detector["name"] = self.detector_name
        if self.calib_prefix is not None:
            detector["calib_tower_prefix"] = self.calib_prefix

        # Merge with explicit detector config
        if self.detector is not None:
            detector.update(self.detector.model_dump(exclude_none=True))

        if detector:
            overrides["detector"] = detector

        # IO section
        io = {}
        if self.input_file is not None:
            io["input_file"] = str(self.input_file)
        if self.output_dir is not None:
            io["output_dir"] = str(self.output_dir)
        if self.save_netcdf is not None:
            io["save_netcdf"] = self.save_netcdf
        if self.save_summary is not None:
            io["save_summary"] = self.save_summary

        if io:
            overrides["io"] = io

        if self.var_names is not None:
            var_names = self.var_names.model_dump(exclude_none=True)
            if var_names:
                overrides["var_names"] = var_names

        if self.coord_names is not None:
            coord_names = self.coord_names.model_dump(exclude_none=True)
            if coord_names:
                overrides["coord_names"] = coord_names

        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}

        return overrides
