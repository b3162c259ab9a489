"""CLIConfig: Command-line operational overrides.

Minimal configuration for parameters that commonly change between runs:
data source, output directory, report formats, verbosity.

This schema handles command-line arguments parsed by argparse.
"""

from typing import Literal, Optional
from pydantic import field_validator
from autostat.schemas.base import AutostatBaseModel


class CLIConfig(AutostatBaseModel):
    """Command-line configuration overrides.

    Operational-only settings that override user and param configs.
    Highest priority in config resolution.

    Usage
    -----
        cli_cfg = CLIConfig(
            source="data/cars.csv",
            base_dir="/scratch/autostat_output",
            formats=["html"],
        )

        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    source: Optional[str] = None
    base_dir: Optional[str] = None
    formats: Optional[list[Literal["html", "pdf"]]] = None
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = None

    @field_validator("formats", mode="before")
    @classmethod
    def normalize_formats(cls, v):
        """Lowercase formats; an empty list means no override."""
        if isinstance(v, str):
            v = [v]
        if v is not None:
            v = [str(f).lower().strip() for f in v]
            return v or None
        return v

    def to_internal_overrides(self) -> dict:
        """Convert CLI config to internal config structure.

        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}

        if self.source is not None:
            overrides["dataset"] = {"source": self.source}

        if self.base_dir is not None:
            overrides["output"] = {"base_dir": str(self.base_dir)}

        if self.formats is not None:
            overrides["report"] = {"formats": list(self.formats)}

        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}

        return overrides
