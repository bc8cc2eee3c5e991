"""Dead tower interpolation run logic.

This module contains the actual runner, separated from argument parsing.
Scripts are thin wrappers; this is the real implementation.
"""

import argparse
import importlib.util
import json
import logging
from pathlib import Path
from typing import Optional, Dict, Any

from calofill.pipeline.orchestrator import PipelineOrchestrator, RunAborted
from calofill.schemas import resolve_config, ParamConfig, UserConfig, CLIConfig

__all__ = ['load_user_config_dict', 'run_interp_pipeline', 'main']

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ABORTED = 2


def load_user_config_dict(config_path: str) -> dict:
    """Load user config dict from Python file.

    Returns the raw dict before Pydantic validation.

    Raises
    ------
    FileNotFoundError
        If config file does not exist.
    ValueError
        If no CONFIG dict found in file.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")

    spec = importlib.util.spec_from_file_location("config_module", path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Could not load config module from {path}")

    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    # Find CONFIG dict
    for name in dir(module):
        if name.startswith('CONFIG'):
            obj = getattr(module, name)
            if isinstance(obj, dict):
                return obj

    raise ValueError(f"No CONFIG dict found in {path}")


def run_interp_pipeline(
    user_config_path: Optional[str] = None,
    cli_args: Optional[Dict[str, Any]] = None,
    verbose: bool = False,
) -> int:
    """Run dead tower interpolation over one input file.

    1. Loads and resolves configuration (Param < User < CLI)
    2. Runs the orchestrator on the configured input file
    3. Maps an aborted run to a non-zero exit code

    Parameters
    ----------
    user_config_path : str, optional
        Path to user config file (Python file with CONFIG dict).
    cli_args : dict, optional
        CLI overrides. Keys: input_file, output_dir, detector, log_level.
    verbose : bool, optional
        If True, enable DEBUG logging and print the resolved config.

    Returns
    -------
    int
        0 on success, 2 if the run was aborted.
    """
    param_cfg = ParamConfig()

    user_cfg = None
    if user_config_path:
        user_cfg = UserConfig.model_validate(load_user_config_dict(user_config_path))

    cli_args = dict(cli_args or {})
    if verbose and "log_level" not in cli_args:
        cli_args["log_level"] = "DEBUG"
    cli_dict = {k: v for k, v in cli_args.items() if v is not None}
    cli_cfg = CLIConfig.model_validate(cli_dict) if cli_dict else CLIConfig()

    config = resolve_config(param_cfg, user_cfg, cli_cfg)

    print(f"\n{'='*60}")
    print("Dead Tower Interpolation")
    print('='*60)
    print(f"Config:   {user_config_path}")
    print(f"Detector: {config.detector.name}")
    print(f"Input:    {config.io.input_file}")
    print(f"Output:   {config.io.output_dir}")
    print('='*60)

    if verbose:
        print("\nFull Internal Configuration:")
        print(json.dumps(config.model_dump(), indent=2))
        print('='*60)

    orchestrator = PipelineOrchestrator(config)
    try:
        orchestrator.run_file()
    except RunAborted as e:
        logger.critical("%s", e)
        return EXIT_ABORTED
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fill dead calorimeter towers from their neighbors"
    )
    parser.add_argument("config", nargs="?", help="Path to user config file")
    parser.add_argument("--input-file", help="Tower NetCDF file")
    parser.add_argument("--output-dir", help="Output directory")
    parser.add_argument("--detector", help="Calorimeter (CEMC, HCALIN, HCALOUT)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    return run_interp_pipeline(
        args.config,
        cli_args={
            "input_file": args.input_file,
            "output_dir": args.output_dir,
            "detector": args.detector,
        },
        verbose=args.verbose,
    )
