"""Formal pipeline invariants.

This file documents what each stage MUST produce.
Use this file as a reviewer anchor and system reference.
"""

PIPELINE_INVARIANTS = {
    "load": [
        "Output is a DataFrame with every CARS_SCHEMA column",
        "One row per source record, source order preserved",
        "Numeric columns are float typed; unparseable values are NaN",
    ],

    "filter": [
        "Every row has Origin == configured origin (default 'USA')",
        "Every row has Horsepower > configured minimum (default 200)",
        "Failing rows are dropped, not flagged",
    ],

    "derivation": [
        "Power_to_Weight = Horsepower / Weight; NaN when Weight is 0 or missing",
        "Efficiency_Rating = (MPG_City + MPG_Highway) / 2; NaN when an operand is missing",
        "HP_Tier: >= high_min High, [medium_min, high_min) Medium, < medium_min Low",
    ],

    "origin": [
        "Origin_US computed on the full (unfiltered) table",
        "Every row is exactly one of 'USA' / 'Non-USA'",
    ],

    "aggregation": [
        "One row per distinct group value present in the input",
        "Num_Cars >= 1 for every group and sums to the input row count",
    ],

    "ranking": [
        "Stable sort: ties keep their original relative order",
        "Missing metric values sort last",
    ],
}

# Which analysis steps abort the run vs. degrade to a reported failure
STAGE_REQUIREMENTS = {
    "load": "REQUIRED",
    "filter": "REQUIRED",
    "derivation": "REQUIRED",
    "origin": "REQUIRED",
    "ttest": "OPTIONAL",        # InvalidGroupCardinality is reported, not fatal
    "correlation": "OPTIONAL",  # InsufficientVariance is reported, not fatal
    "aggregation": "REQUIRED",
    "ranking": "REQUIRED",
}
