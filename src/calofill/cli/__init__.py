"""Command-line interface modules for calofill.

This package contains the run logic, making scripts/ optional.
"""

from calofill.cli.run_interp import run_interp_pipeline

__all__ = ['run_interp_pipeline']
