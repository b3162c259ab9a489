"""Analysis stages.

- inspector: Schema report and row sample
- summarizer: Numeric summaries and frequency tables
- derivation: US filter, derived columns and horsepower tiers
- comparison: Origin label, two-sample t-test, correlations
- aggregator: Grouped count/mean summaries
- ranker: Stable sort and top-N
"""

from autostat.analysis.inspector import SchemaReport, describe_schema, sample
from autostat.analysis.summarizer import numeric_summary, frequency, frequency_table
from autostat.analysis.derivation import (
    filter_us_high_hp,
    add_power_to_weight,
    add_efficiency_rating,
    add_hp_tier,
    derive_us_cars,
)
from autostat.analysis.comparison import (
    binary_origin_label,
    two_sample_test,
    correlation_matrix,
    correlation_pvalues,
)
from autostat.analysis.aggregator import group_aggregate, summarize_by_type
from autostat.analysis.ranker import sort_by, top_n

__all__ = [
    "SchemaReport",
    "describe_schema",
    "sample",
    "numeric_summary",
    "frequency",
    "frequency_table",
    "filter_us_high_hp",
    "add_power_to_weight",
    "add_efficiency_rating",
    "add_hp_tier",
    "derive_us_cars",
    "binary_origin_label",
    "two_sample_test",
    "correlation_matrix",
    "correlation_pvalues",
    "group_aggregate",
    "summarize_by_type",
    "sort_by",
    "top_n",
]
