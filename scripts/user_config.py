"""autostat User Configuration.

This is the user-facing configuration file. Modify settings here to customize
the analysis. Expert defaults live in autostat.schemas.param.

Usage:
    python scripts/run_cars_analysis.py scripts/user_config.py
    python scripts/run_cars_analysis.py scripts/user_config.py --source data/cars.csv
    python scripts/run_cars_analysis.py scripts/user_config.py --format html
"""

CONFIG = {
    # ========================================================================
    # DATA & OUTPUT
    # ========================================================================
    "SOURCE": "cars_sample",      # Bundled dataset name or path to CSV/TSV
    "BASE_DIR": "./output",       # reports/, plots/, logs/ go here
    "LOG_LEVEL": "INFO",

    # ========================================================================
    # US HIGH-PERFORMANCE FILTER
    # ========================================================================
    "ORIGIN": "USA",
    "MIN_HORSEPOWER": 200,        # Strictly greater than

    # ========================================================================
    # HORSEPOWER TIERS (inclusive lower bounds)
    # ========================================================================
    "HIGH_TIER_MIN": 400,
    "MEDIUM_TIER_MIN": 300,

    # ========================================================================
    # SUMMARY & RANKING
    # ========================================================================
    "SAMPLE_ROWS": 10,
    "TOP_N": 10,

    # ========================================================================
    # REPORT
    # ========================================================================
    "PLOTS": True,
    "REPORT_TITLE": "Automobile Statistical Analysis",
    "REPORT_FORMATS": ["html", "pdf"],

    # Advanced: nested overrides
    # "comparison": {"equal_var": True},
    # "visualization": {"dpi": 200, "output_format": "png"},
}
