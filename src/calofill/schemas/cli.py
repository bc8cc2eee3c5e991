"""CLIConfig: Command-line operational overrides.

Minimal configuration for parameters that commonly change between runs:
input file, output directory, detector, verbosity.
"""

from typing import Literal, Optional
from pydantic import field_validator
from calofill.schemas.base import CalofillBaseModel


class CLIConfig(CalofillBaseModel):
    """Command-line configuration overrides.

    Highest priority in config resolution.

    Usage
    -----
        cli_cfg = CLIConfig(
            input_file="/data/run42_towers.nc",
            detector="HCALIN",
            log_level="DEBUG",
        )

        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    input_file: Optional[str] = None
    output_dir: Optional[str] = None
    detector: Optional[str] = None
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = None

    @field_validator("detector", mode="before")
    @classmethod
    def normalize_detector(cls, v):
        """Detector names are upper case."""
        if isinstance(v, str):
            return v.upper().strip()
        return v

    def to_internal_overrides(self) -> dict:
        """Convert CLI config to internal config structure.

        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}

        io = {}
        if self.input_file is not None:
            io["input_file"] = str(self.input_file)
        if self.output_dir is not None:
            io["output_dir"] = str(self.output_dir)
        if io:
            overrides["io"] = io

        if self.detector is not None:
            overrides["detector"] = {"name": self.detector}

        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}

        return overrides
