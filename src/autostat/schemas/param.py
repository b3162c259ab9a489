"""ParamConfig: Expert defaults for the autostat pipeline.

This module defines the complete default configuration. ALL pipeline
parameters must have defaults here. No runtime code should define
fallback values - this is the single source of truth for defaults.

Runtime code NEVER reads from ParamConfig directly - it only receives InternalConfig.
"""

from typing import Literal, Optional
from pydantic import Field, model_validator
from autostat.schemas.base import AutostatBaseModel


# =============================================================================
# Nested Configuration Models
# =============================================================================

class DatasetConfig(AutostatBaseModel):
    """Where the raw table comes from."""
    source: str = Field("cars_sample", description="Registered dataset name or file path")


class FilterConfig(AutostatBaseModel):
    """US high-horsepower filter."""
    origin: str = "USA"
    min_horsepower: float = Field(200.0, ge=0, description="Strict lower bound on Horsepower")


class TierConfig(AutostatBaseModel):
    """Horsepower tier thresholds (lower bounds, inclusive)."""
    high_min: float = Field(400.0, gt=0)
    medium_min: float = Field(300.0, gt=0)

    @model_validator(mode="after")
    def check_ordering(self):
        """Medium must sit strictly below High or the partition collapses."""
        if self.medium_min >= self.high_min:
            raise ValueError(
                f"medium_min ({self.medium_min}) must be < high_min ({self.high_min})"
            )
        return self


class SummaryConfig(AutostatBaseModel):
    """Inspection and descriptive summary settings."""
    numeric_columns: list[str] = ["Horsepower", "Weight", "MPG_City", "MPG_Highway"]
    categorical_columns: list[str] = ["Type", "Origin"]
    sample_rows: int = Field(10, ge=0)


class ComparisonConfig(AutostatBaseModel):
    """US vs non-US comparison settings."""
    group_column: str = "Origin_US"
    value_columns: list[str] = ["MPG_City", "MPG_Highway", "Horsepower", "Weight"]
    correlation_columns: list[str] = ["Horsepower", "Weight", "MPG_City", "MPG_Highway"]
    equal_var: bool = Field(False, description="Pooled variance t-test instead of Welch")


class RankingConfig(AutostatBaseModel):
    """Ranking of the derived US table."""
    metric: str = "Power_to_Weight"
    top_n: int = Field(10, ge=0)
    descending: bool = True


class VisualizationConfig(AutostatBaseModel):
    """Plot appearance."""
    enabled: bool = True
    dpi: int = Field(150, ge=50)
    figsize: tuple[float, float] = (8.0, 5.0)
    output_format: Literal["png", "pdf", "svg"] = "png"
    bins: int = Field(20, ge=1)


class ReportConfig(AutostatBaseModel):
    """Report documents."""
    title: str = "Automobile Statistical Analysis"
    formats: list[Literal["html", "pdf"]] = ["html", "pdf"]
    basename: str = "cars_report"


class OutputConfig(AutostatBaseModel):
    """Output location."""
    base_dir: Optional[str] = None


class LoggingConfig(AutostatBaseModel):
    """Logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


# =============================================================================
# Main ParamConfig
# =============================================================================

class ParamConfig(AutostatBaseModel):
    """Complete expert defaults for every pipeline section."""

    dataset: DatasetConfig = Field(default_factory=DatasetConfig)
    filter: FilterConfig = Field(default_factory=FilterConfig)
    tiers: TierConfig = Field(default_factory=TierConfig)
    summary: SummaryConfig = Field(default_factory=SummaryConfig)
    comparison: ComparisonConfig = Field(default_factory=ComparisonConfig)
    ranking: RankingConfig = Field(default_factory=RankingConfig)
    visualization: VisualizationConfig = Field(default_factory=VisualizationConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
