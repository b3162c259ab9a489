"""UserConfig: Forgiving, minimal user-facing configuration.

This schema accepts user inputs with aliases for common naming patterns
(e.g., SOURCE -> source, TOP_N -> top_n).

UserConfig is intentionally minimal - users only specify what they want
to override from the expert defaults. Validation is lenient: upper and
lower case keys are both accepted, integers are accepted where floats are
expected, and a single report format may be given as a plain string.
"""

from typing import Literal, Optional, Any
from pydantic import Field, field_validator
from autostat.schemas.base import AutostatBaseModel


class UserFilterConfig(AutostatBaseModel):
    """User-facing filter config."""
    origin: Optional[str] = None
    min_horsepower: Optional[float] = None


class UserTierConfig(AutostatBaseModel):
    """User-facing tier config."""
    high_min: Optional[float] = None
    medium_min: Optional[float] = None


class UserSummaryConfig(AutostatBaseModel):
    """User-facing summary config."""
    numeric_columns: Optional[list[str]] = None
    categorical_columns: Optional[list[str]] = None
    sample_rows: Optional[int] = None


class UserComparisonConfig(AutostatBaseModel):
    """User-facing comparison config."""
    group_column: Optional[str] = None
    value_columns: Optional[list[str]] = None
    correlation_columns: Optional[list[str]] = None
    equal_var: Optional[bool] = None


class UserRankingConfig(AutostatBaseModel):
    """User-facing ranking config."""
    metric: Optional[str] = None
    top_n: Optional[int] = None
    descending: Optional[bool] = None


class UserVisualizationConfig(AutostatBaseModel):
    """User-facing visualization config."""
    enabled: Optional[bool] = None
    dpi: Optional[int] = None
    figsize: Optional[tuple[float, float]] = None
    output_format: Optional[str] = None
    bins: Optional[int] = None

    @field_validator("output_format", mode="before")
    @classmethod
    def normalize_format(cls, v):
        """Normalize format names to lowercase."""
        if isinstance(v, str):
            return v.lower().strip().lstrip(".")
        return v


class UserReportConfig(AutostatBaseModel):
    """User-facing report config."""
    title: Optional[str] = None
    formats: Optional[list[str]] = None
    basename: Optional[str] = None


class UserConfig(AutostatBaseModel):
    """User-facing configuration schema.

    Minimal, forgiving, and uses common aliases. Users only specify
    what they want to override from ParamConfig defaults.

    This config is converted to internal overrides during resolution.

    Usage
    -----
        user_cfg = UserConfig(
            source="data/cars.csv",
            base_dir="/tmp/autostat",
            min_horsepower=250,
            top_n=5,
        )

        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    # Top-level settings
    source: Optional[str] = Field(None, alias="SOURCE")
    base_dir: Optional[str] = Field(None, alias="BASE_DIR")
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = Field(None, alias="LOG_LEVEL")

    # Filter and tiers (flat aliases)
    origin: Optional[str] = Field(None, alias="ORIGIN")
    min_horsepower: Optional[float] = Field(None, alias="MIN_HORSEPOWER")
    high_tier_min: Optional[float] = Field(None, alias="HIGH_TIER_MIN")
    medium_tier_min: Optional[float] = Field(None, alias="MEDIUM_TIER_MIN")

    # Summary / ranking (flat aliases)
    sample_rows: Optional[int] = Field(None, alias="SAMPLE_ROWS")
    top_n: Optional[int] = Field(None, alias="TOP_N")

    # Output (flat aliases)
    plots: Optional[bool] = Field(None, alias="PLOTS")
    report_title: Optional[str] = Field(None, alias="REPORT_TITLE")
    report_formats: Optional[list[str]] = Field(None, alias="REPORT_FORMATS")

    # Nested overrides (advanced users)
    filter: Optional[UserFilterConfig] = None
    tiers: Optional[UserTierConfig] = None
    summary: Optional[UserSummaryConfig] = None
    comparison: Optional[UserComparisonConfig] = None
    ranking: Optional[UserRankingConfig] = None
    visualization: Optional[UserVisualizationConfig] = None
    report: Optional[UserReportConfig] = None

    model_config = AutostatBaseModel.model_config.copy()
    # Allow forgiving input dictionaries (ignore unknown keys)
    model_config.update({"populate_by_name": True, "extra": "ignore"})

    @field_validator("min_horsepower", "high_tier_min", "medium_tier_min", mode="before")
    @classmethod
    def coerce_numeric_fields(cls, v):
        """Accept int or float for numeric fields."""
        if v is not None:
            return float(v)
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept lowercase log levels."""
        if isinstance(v, str):
            return v.upper().strip()
        return v

    @field_validator("report_formats", mode="before")
    @classmethod
    def normalize_formats(cls, v):
        """Accept a single format string and any casing."""
        if isinstance(v, str):
            v = [v]
        if v is not None:
            return [str(f).lower().strip().lstrip(".") for f in v]
        return v

    def to_internal_overrides(self) -> dict:
        """Convert flat UserConfig to nested InternalConfig structure.

        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides: dict[str, Any] = {}

        if self.source is not None:
            overrides["dataset"] = {"source": self.source}

        if self.base_dir is not None:
            overrides["output"] = {"base_dir": str(self.base_dir)}

        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}

        # Filter section
        filter_cfg = {}
        if self.origin is not None:
            filter_cfg["origin"] = self.origin
        if self.min_horsepower is not None:
            filter_cfg["min_horsepower"] = self.min_horsepower
        if self.filter is not None:
            filter_cfg.update(self.filter.model_dump(exclude_none=True))
        if filter_cfg:
            overrides["filter"] = filter_cfg

        # Tier section
        tiers = {}
        if self.high_tier_min is not None:
            tiers["high_min"] = self.high_tier_min
        if self.medium_tier_min is not None:
            tiers["medium_min"] = self.medium_tier_min
        if self.tiers is not None:
            tiers.update(self.tiers.model_dump(exclude_none=True))
        if tiers:
            overrides["tiers"] = tiers

        # Summary section
        summary = {}
        if self.sample_rows is not None:
            summary["sample_rows"] = self.sample_rows
        if self.summary is not None:
            summary.update(self.summary.model_dump(exclude_none=True))
        if summary:
            overrides["summary"] = summary

        if self.comparison is not None:
            comparison = self.comparison.model_dump(exclude_none=True)
            if comparison:
                overrides["comparison"] = comparison

        # Ranking section
        ranking = {}
        if self.top_n is not None:
            ranking["top_n"] = self.top_n
        if self.ranking is not None:
            ranking.update(self.ranking.model_dump(exclude_none=True))
        if ranking:
            overrides["ranking"] = ranking

        # Visualization section
        visualization = {}
        if self.plots is not None:
            visualization["enabled"] = self.plots
        if self.visualization is not None:
            visualization.update(self.visualization.model_dump(exclude_none=True))
        if visualization:
            overrides["visualization"] = visualization

        # Report section
        report = {}
        if self.report_title is not None:
            report["title"] = self.report_title
        if self.report_formats is not None:
            report["formats"] = self.report_formats
        if self.report is not None:
            report.update(self.report.model_dump(exclude_none=True))
        if report:
            overrides["report"] = report

        return overrides
