#!/usr/bin/env python3
"""Dead tower interpolation runner.

Usage:
    python scripts/run_dead_tower_interp.py scripts/user_config.py
    python scripts/run_dead_tower_interp.py scripts/user_config.py --detector HCALOUT
    python scripts/run_dead_tower_interp.py --input-file towers.nc --output-dir out -v
"""

import sys

from calofill.cli.run_interp import main


if __name__ == "__main__":
    sys.exit(main())
