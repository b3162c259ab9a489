"""Report model and assembly.

A Report is a title plus an ordered list of sections. Each section carries
its own title; renderers never consult shared "current title" state.
"""

import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Literal, Optional, Union, TYPE_CHECKING

import pandas as pd

from autostat.analysis.comparison import ttest_frame
from autostat.analysis.summarizer import frequency_table, numeric_summary_frame

if TYPE_CHECKING:
    from autostat.pipeline.orchestrator import AnalysisResults

__all__ = ['ReportSection', 'Report', 'build_report', 'format_value', 'format_frame']

logger = logging.getLogger(__name__)

SectionKind = Literal["table", "text", "figure", "error"]

MISSING_TEXT = "NA"

METRIC_LABELS = {"Power_to_Weight": "Power-to-Weight Ratio"}


@dataclass
class ReportSection:
    """One titled block of a report.

    ``content`` is a DataFrame for ``table``, a string for ``text`` and
    ``error``, and an image path for ``figure``.
    """
    title: str
    kind: SectionKind
    content: Union[pd.DataFrame, str, Path]
    caption: Optional[str] = None


@dataclass
class Report:
    """A titled sequence of sections, rendered by the HTML and PDF renderers."""
    title: str
    sections: List[ReportSection] = field(default_factory=list)

    def add_table(self, title: str, frame: pd.DataFrame, caption: Optional[str] = None) -> None:
        self.sections.append(ReportSection(title, "table", frame, caption))

    def add_text(self, title: str, text: str) -> None:
        self.sections.append(ReportSection(title, "text", text))

    def add_figure(self, title: str, path: Path, caption: Optional[str] = None) -> None:
        self.sections.append(ReportSection(title, "figure", Path(path), caption))

    def add_error(self, title: str, message: str) -> None:
        self.sections.append(ReportSection(title, "error", message))


def format_value(value) -> str:
    """Display text for one table cell."""
    if value is None:
        return MISSING_TEXT
    if isinstance(value, float):
        if math.isnan(value):
            return MISSING_TEXT
        if value.is_integer() and abs(value) < 1e6:
            return f"{value:.0f}" if abs(value) >= 1000 else f"{value:g}"
        if abs(value) >= 1000:
            return f"{value:,.1f}"
        return f"{value:.4g}"
    if pd.isna(value):
        return MISSING_TEXT
    return str(value)


def format_frame(frame: pd.DataFrame) -> pd.DataFrame:
    """String copy of ``frame`` with every cell passed through format_value()."""
    out = frame.copy()
    for col in out.columns:
        out[col] = [format_value(v.item() if hasattr(v, "item") else v) for v in out[col]]
    return out


def build_report(results: "AnalysisResults", title: str) -> Report:
    """Assemble the analysis report from pipeline results.

    Parameters
    ----------
    results : AnalysisResults
        Output of PipelineOrchestrator.run() (reports not yet rendered).
    title : str
        Document title.

    Returns
    -------
    Report
    """
    config = results.config
    report = Report(title=title)

    schema = results.schema_report
    report.add_table(
        "Dataset Structure",
        schema.to_frame(),
        caption=f"{schema.row_count} observations, {schema.column_count} variables "
                f"(source: {config.dataset.source})",
    )
    report.add_table(
        "Sample Records",
        results.sample,
        caption=f"First {len(results.sample)} observations",
    )

    report.add_table("Numeric Summary Statistics", numeric_summary_frame(results.numeric_summary))
    for column in results.frequencies:
        report.add_table(f"Frequency of {column}", frequency_table(results.raw, column))

    if results.ttest is not None:
        report.add_table(
            "US vs Non-US Two-Sample t-Test",
            ttest_frame(results.ttest),
            caption="Satterthwaite (unequal variances)" if not config.comparison.equal_var
            else "Pooled (equal variances)",
        )
    if results.correlation is not None:
        report.add_table(
            "Correlation Matrix",
            results.correlation.reset_index().rename(columns={"index": "Variable"}),
            caption="Pearson correlation coefficients",
        )
    if results.correlation_pvalues is not None:
        report.add_table(
            "Correlation p-values",
            results.correlation_pvalues.reset_index().rename(columns={"index": "Variable"}),
            caption="Prob > |r| under H0: Rho=0",
        )

    report.add_table(
        "Summary Statistics by Car Type",
        results.summary_by_type,
        caption=f"US cars with Horsepower > {config.filter.min_horsepower:g}",
    )

    ranking = config.ranking
    shown = ["Make", "Model", "Type", "Horsepower", "Weight",
             "Power_to_Weight", "Efficiency_Rating", "HP_Tier"]
    if ranking.metric not in shown:
        shown.append(ranking.metric)
    ranked_columns = [c for c in shown if c in results.top_cars.columns]
    metric_label = METRIC_LABELS.get(ranking.metric, ranking.metric.replace("_", " "))
    report.add_table(
        f"Top {ranking.top_n} US Cars by {metric_label}",
        results.top_cars[ranked_columns],
    )

    for caption, path in results.figures.items():
        report.add_figure(caption, path)

    if results.failures:
        lines = [f"{step}: {message}" for step, message in results.failures.items()]
        report.add_error("Analysis Errors", "\n".join(lines))

    logger.debug("Report '%s' assembled with %d sections", title, len(report.sections))
    return report
