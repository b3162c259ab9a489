#!/usr/bin/env python3
"""autostat Automobile Analysis Runner.

Usage:
    python scripts/run_cars_analysis.py
    python scripts/run_cars_analysis.py scripts/user_config.py
    python scripts/run_cars_analysis.py scripts/user_config.py --format pdf -v

Note: User config in scripts/user_config.py, expert config in autostat.schemas.param
"""

import sys

from autostat.cli.run_analysis import main


if __name__ == "__main__":
    sys.exit(main())
