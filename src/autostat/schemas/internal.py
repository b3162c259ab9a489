"""InternalConfig: Authoritative runtime configuration.

This is the ONLY config schema that runtime code sees. It is fully validated,
normalized, and immutable.

All .get() calls, fallback defaults, and validation logic are FORBIDDEN in
runtime code - everything is explicit here.
"""

from typing import Literal, Optional
from pydantic import ConfigDict, Field, model_validator
from autostat.schemas.base import AutostatBaseModel


# =============================================================================
# Nested Configuration Models (Runtime)
# =============================================================================

class InternalDatasetConfig(AutostatBaseModel):
    """Runtime dataset configuration."""
    source: str


class InternalFilterConfig(AutostatBaseModel):
    """Runtime filter configuration."""
    origin: str
    min_horsepower: float = Field(ge=0)


class InternalTierConfig(AutostatBaseModel):
    """Runtime tier thresholds."""
    high_min: float
    medium_min: float

    @model_validator(mode="after")
    def check_ordering(self):
        if self.medium_min >= self.high_min:
            raise ValueError(
                f"medium_min ({self.medium_min}) must be < high_min ({self.high_min})"
            )
        return self


class InternalSummaryConfig(AutostatBaseModel):
    """Runtime summary configuration."""
    numeric_columns: list[str]
    categorical_columns: list[str]
    sample_rows: int = Field(ge=0)


class InternalComparisonConfig(AutostatBaseModel):
    """Runtime comparison configuration."""
    group_column: str
    value_columns: list[str]
    correlation_columns: list[str]
    equal_var: bool


class InternalRankingConfig(AutostatBaseModel):
    """Runtime ranking configuration."""
    metric: str
    top_n: int = Field(ge=0)
    descending: bool


class InternalVisualizationConfig(AutostatBaseModel):
    """Runtime visualization settings."""
    enabled: bool
    dpi: int
    figsize: tuple[float, float]
    output_format: Literal["png", "pdf", "svg"]
    bins: int = Field(ge=1)


class InternalReportConfig(AutostatBaseModel):
    """Runtime report settings."""
    title: str
    formats: list[Literal["html", "pdf"]]
    basename: str


class InternalOutputConfig(AutostatBaseModel):
    """Runtime output configuration."""
    base_dir: Optional[str]


class InternalLoggingConfig(AutostatBaseModel):
    """Runtime logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


# =============================================================================
# Main InternalConfig
# =============================================================================

class InternalConfig(AutostatBaseModel):
    """Authoritative runtime configuration.

    This is the only configuration schema that processing code sees.
    It is fully validated, immutable, and contains explicit values for
    all parameters.

    Usage
    -----
    Runtime modules receive InternalConfig and access fields directly:

        def __init__(self, config: InternalConfig):
            self.origin = config.filter.origin  # NOT .get()
            self.top_n = config.ranking.top_n
    """

    dataset: InternalDatasetConfig
    filter: InternalFilterConfig
    tiers: InternalTierConfig
    summary: InternalSummaryConfig
    comparison: InternalComparisonConfig
    ranking: InternalRankingConfig
    visualization: InternalVisualizationConfig
    report: InternalReportConfig
    output: InternalOutputConfig
    logging: InternalLoggingConfig

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
        frozen=True,  # Immutable after construction
    )
