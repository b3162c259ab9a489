"""Single-pass analysis orchestration.

Runs the automobile analysis end to end: load, inspect, summarize, derive
the US table, compare US with non-US cars, aggregate, rank, plot and write
the reports. Stages run synchronously in one thread; each consumes the
previous stage's DataFrame and produces a new one.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Optional, TYPE_CHECKING

import pandas as pd

from autostat.analysis import (
    SchemaReport,
    binary_origin_label,
    correlation_matrix,
    correlation_pvalues,
    derive_us_cars,
    describe_schema,
    frequency,
    numeric_summary,
    sample,
    sort_by,
    summarize_by_type,
    top_n,
    two_sample_test,
)
from autostat.contracts import (
    ContractViolation,
    FailurePolicy,
    assert_cars_table,
    assert_origin_labelled,
    assert_summary_output,
    assert_tiered,
    assert_us_filtered,
)
from autostat.contracts.invariants import STAGE_REQUIREMENTS
from autostat.data.loader import CarsDataLoader
from autostat.exceptions import StatisticalPreconditionError
from autostat.reporting import build_report, render_reports
from autostat.visualization import CarsPlotter

if TYPE_CHECKING:
    from autostat.schemas import InternalConfig

__all__ = ['PipelineOrchestrator', 'AnalysisResults']

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResults:
    """Every table and statistic produced by one pipeline run.

    ``ttest`` and ``correlation`` are None when their step failed; the
    reason is in ``failures`` (step name -> message).
    """
    config: "InternalConfig"
    raw: pd.DataFrame
    schema_report: SchemaReport
    sample: pd.DataFrame
    numeric_summary: Dict[str, Dict[str, float]]
    frequencies: Dict[str, Dict[Optional[str], int]]
    us_cars: pd.DataFrame
    labelled: pd.DataFrame
    summary_by_type: pd.DataFrame
    ranked: pd.DataFrame
    top_cars: pd.DataFrame
    ttest: Optional[Dict[str, dict]] = None
    correlation: Optional[pd.DataFrame] = None
    correlation_pvalues: Optional[pd.DataFrame] = None
    failures: Dict[str, str] = field(default_factory=dict)
    figures: Dict[str, Path] = field(default_factory=dict)
    reports: Dict[str, Path] = field(default_factory=dict)


class PipelineOrchestrator:
    """Runs the analysis pipeline once over one dataset.

    **Pipeline:**

    1. **Load**: Resolve ``config.dataset.source`` into the raw table.
    2. **Inspect / summarize**: Schema report, sample rows, numeric
       summaries and frequency tables of the raw table.
    3. **Derive**: US high-horsepower filter, Power_to_Weight,
       Efficiency_Rating and HP_Tier.
    4. **Compare**: Origin_US on the full table, two-sample t-test,
       correlation matrix.
    5. **Aggregate / rank**: Summary by Type, sort by the ranking metric,
       top-N slice.
    6. **Visualize / report**: Figures and HTML/PDF documents.

    **Failure handling:**

    Structural errors (missing source, missing columns) and contract
    violations abort the run. Statistical precondition failures in the
    comparison step are logged, recorded in ``AnalysisResults.failures``
    and shown in the report; the remaining steps still run.

    **Logging:**

    Console and ``{logs}/autostat.log``, level from ``config.logging.level``.

    Example usage::

        config = resolve_config(ParamConfig())
        output_dirs = setup_output_directories("/tmp/autostat")
        results = PipelineOrchestrator(config, output_dirs).run()
        print(results.reports["html"])
    """

    def __init__(self, config: "InternalConfig", output_dirs: Dict[str, Path]):
        """Initialize orchestrator.

        Parameters
        ----------
        config : InternalConfig
            Resolved configuration.
        output_dirs : dict
            Output directories from ``setup_output_directories()``; uses
            the 'reports', 'plots' and 'logs' entries.
        """
        self.config = config
        self.output_dirs = output_dirs
        self.loader = CarsDataLoader(config)
        self.failures: Dict[str, str] = {}

    def _setup_logging(self):
        """Configure the root logger with file and console handlers."""
        log_level = getattr(logging, self.config.logging.level.upper(), logging.INFO)

        log_dir = Path(self.output_dirs.get("logs", "."))
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / "autostat.log"

        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        # Clear existing handlers and add new ones
        root = logging.getLogger()
        root.setLevel(log_level)
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            handler.close()

        fh = logging.FileHandler(log_path)
        fh.setLevel(log_level)
        fh.setFormatter(formatter)
        root.addHandler(fh)

        ch = logging.StreamHandler()
        ch.setLevel(log_level)
        ch.setFormatter(formatter)
        root.addHandler(ch)

        logger.info("Logging: level=%s, file=%s", logging.getLevelName(log_level), log_path)

    def _run_localized(self, stage: str, step: str, func: Callable, *args, **kwargs):
        """Run a statistical step under the failure policy of its stage.

        OPTIONAL stages in STAGE_REQUIREMENTS run under FailurePolicy.REPORT:
        a StatisticalPreconditionError is logged, recorded in
        ``self.failures`` under ``step`` and None is returned. Any other
        stage re-raises.
        """
        optional = STAGE_REQUIREMENTS.get(stage) == "OPTIONAL"
        policy = FailurePolicy.REPORT if optional else FailurePolicy.FAIL_FAST
        try:
            return func(*args, **kwargs)
        except StatisticalPreconditionError as e:
            logger.error("%s failed (%s): %s", step, policy.value, e)
            if policy is FailurePolicy.FAIL_FAST:
                raise
            self.failures[step] = str(e)
            return None

    def run(self) -> AnalysisResults:
        """Run every stage and return the results, reports included.

        Raises
        ------
        SourceUnavailable
            The dataset cannot be resolved.
        ColumnNotFound
            A configured column does not exist.
        ContractViolation
            A stage broke its output invariants (pipeline bug).
        """
        self._setup_logging()
        self.failures = {}
        cfg = self.config

        logger.info("=" * 60)
        logger.info("Starting Automobile Analysis Pipeline")
        logger.info("=" * 60)

        try:
            raw = self.loader.load()
            assert_cars_table(raw)

            schema_report = describe_schema(raw)
            head = sample(raw, cfg.summary.sample_rows)
            num_summary = numeric_summary(raw, cfg.summary.numeric_columns)
            freqs = frequency(raw, cfg.summary.categorical_columns)
            logger.info("Inspected %d rows x %d columns", schema_report.row_count, schema_report.column_count)

            us_cars = derive_us_cars(raw, cfg.filter, cfg.tiers)
            assert_us_filtered(us_cars, cfg.filter.origin, cfg.filter.min_horsepower)
            assert_tiered(us_cars, cfg.tiers.high_min, cfg.tiers.medium_min)

            labelled = binary_origin_label(raw, origin=cfg.filter.origin)
            assert_origin_labelled(labelled, expected_rows=len(raw))

            comparison = cfg.comparison
            ttest = self._run_localized(
                "ttest", "Two-sample t-test", two_sample_test,
                labelled, comparison.group_column, comparison.value_columns,
                equal_var=comparison.equal_var,
            )
            corr = self._run_localized(
                "correlation", "Correlation matrix", correlation_matrix,
                labelled, comparison.correlation_columns,
            )
            corr_p = None
            if corr is not None:
                corr_p = correlation_pvalues(labelled, comparison.correlation_columns)

            summary = summarize_by_type(us_cars)
            assert_summary_output(summary, input_rows=len(us_cars))

            ranked = sort_by(us_cars, cfg.ranking.metric, descending=cfg.ranking.descending)
            top_cars = top_n(ranked, cfg.ranking.top_n)
            logger.info("Top %d by %s selected from %d rows", len(top_cars), cfg.ranking.metric, len(ranked))

        except ContractViolation as e:
            logger.critical("CRITICAL: Pipeline contract violated: %s", e)
            logger.critical("This indicates a bug in pipeline logic. Stopping pipeline.")
            raise

        results = AnalysisResults(
            config=cfg,
            raw=raw,
            schema_report=schema_report,
            sample=head,
            numeric_summary=num_summary,
            frequencies=freqs,
            us_cars=us_cars,
            labelled=labelled,
            summary_by_type=summary,
            ranked=ranked,
            top_cars=top_cars,
            ttest=ttest,
            correlation=corr,
            correlation_pvalues=corr_p,
            failures=dict(self.failures),
        )

        if cfg.visualization.enabled:
            plotter = CarsPlotter(cfg, self.output_dirs["plots"])
            results.figures = plotter.plot_standard_set(labelled, us_cars)

        report = build_report(results, title=cfg.report.title)
        results.reports = render_reports(
            report,
            self.output_dirs["reports"],
            cfg.report.basename,
            cfg.report.formats,
        )

        if results.failures:
            logger.warning("Pipeline finished with %d failed analysis step(s): %s",
                           len(results.failures), ", ".join(results.failures))
        else:
            logger.info("Pipeline finished: %s", ", ".join(str(p) for p in results.reports.values()))

        return results
