"""Distribution and relationship plots of the automobile tables.

Renders box plots, scatter plots and histogram/density overlays, grouped or
colored by a categorical column, to image files. The plotter only reads the
tables it is given.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple, TYPE_CHECKING

import numpy as np
import pandas as pd
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from scipy.stats import gaussian_kde

from autostat.data.schema import ensure_columns

if TYPE_CHECKING:
    from autostat.schemas import InternalConfig

__all__ = ['CarsPlotter']

logger = logging.getLogger(__name__)


class CarsPlotter:
    """Generates the figures of the analysis report.

    **Plot types:**

    - Box plot of a numeric column per category
    - Scatter plot of two numeric columns, colored by category
    - Histogram with a Gaussian KDE overlay per category

    **Configuration:**

    DPI, figure size, histogram bins and output format come from
    ``config.visualization``.

    **Output:**

    Saves ``{output_dir}/{name}.{format}`` and returns the path.

    Example usage::

        plotter = CarsPlotter(config, output_dirs["plots"])
        path = plotter.box_plot(cars, "MPG_Highway", "Origin_US")
    """

    def __init__(self, config: "InternalConfig", output_dir: Path):
        """Initialize plotter.

        Parameters
        ----------
        config : InternalConfig
            Resolved configuration; only the visualization section is read.
        output_dir : Path
            Directory the figures are written to (created if missing).
        """
        viz = config.visualization
        self.dpi = viz.dpi
        self.figsize = tuple(viz.figsize)
        self.output_format = viz.output_format
        self.bins = viz.bins
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

        logger.info("CarsPlotter initialized (format=%s, dpi=%s)", self.output_format, self.dpi)

    def _save(self, fig: plt.Figure, name: str) -> Path:
        path = self.output_dir / f"{name}.{self.output_format}"
        fig.tight_layout()
        fig.savefig(path, dpi=self.dpi, bbox_inches="tight")
        plt.close(fig)
        logger.debug("Saved plot: %s", path)
        return path

    @staticmethod
    def _groups(df: pd.DataFrame, group: str) -> List[Tuple[str, pd.DataFrame]]:
        """Non-missing groups in sorted order."""
        keys = sorted(df[group].dropna().unique().tolist(), key=str)
        return [(str(k), df[df[group] == k]) for k in keys]

    def box_plot(self, df: pd.DataFrame, value: str, group: str,
                 name: Optional[str] = None, title: Optional[str] = None) -> Path:
        """Box plot of ``value`` per ``group`` category."""
        ensure_columns(df, [value], numeric=True)
        ensure_columns(df, [group])

        groups = self._groups(df, group)
        data = [g[value].dropna().to_numpy() for _, g in groups]
        labels = [k for k, _ in groups]

        fig, ax = plt.subplots(figsize=self.figsize)
        if groups:
            ax.boxplot(data, showmeans=True)
            ax.set_xticks(range(1, len(labels) + 1))
            ax.set_xticklabels(labels)
        ax.set_xlabel(group)
        ax.set_ylabel(value)
        ax.set_title(title or f"{value} by {group}")
        ax.grid(axis="y", alpha=0.3)
        return self._save(fig, name or f"box_{value}_by_{group}")

    def scatter_plot(self, df: pd.DataFrame, x: str, y: str, hue: Optional[str] = None,
                     name: Optional[str] = None, title: Optional[str] = None) -> Path:
        """Scatter plot of ``y`` against ``x``, one color per ``hue`` category."""
        ensure_columns(df, [x, y], numeric=True)

        fig, ax = plt.subplots(figsize=self.figsize)
        if hue is None:
            ax.scatter(df[x], df[y], alpha=0.7, s=20)
        else:
            ensure_columns(df, [hue])
            for label, g in self._groups(df, hue):
                ax.scatter(g[x], g[y], alpha=0.7, s=20, label=label)
            ax.legend(title=hue)
        ax.set_xlabel(x)
        ax.set_ylabel(y)
        ax.set_title(title or f"{y} vs {x}")
        ax.grid(alpha=0.3)
        return self._save(fig, name or f"scatter_{y}_vs_{x}")

    def distribution_plot(self, df: pd.DataFrame, value: str, group: str,
                          name: Optional[str] = None, title: Optional[str] = None) -> Path:
        """Density-normalized histogram of ``value`` per group, with a KDE curve.

        The KDE is skipped for a group with fewer than two distinct values.
        """
        ensure_columns(df, [value], numeric=True)
        ensure_columns(df, [group])

        valid = df[value].dropna()
        fig, ax = plt.subplots(figsize=self.figsize)
        if not valid.empty:
            edges = np.histogram_bin_edges(valid, bins=self.bins)
            grid = np.linspace(valid.min(), valid.max(), 200)
            for label, g in self._groups(df, group):
                values = g[value].dropna().to_numpy()
                if values.size == 0:
                    continue
                ax.hist(values, bins=edges, density=True, alpha=0.4, label=label)
                if np.unique(values).size > 1:
                    ax.plot(grid, gaussian_kde(values)(grid), linewidth=1.5)
            ax.legend(title=group)
        ax.set_xlabel(value)
        ax.set_ylabel("Density")
        ax.set_title(title or f"Distribution of {value} by {group}")
        return self._save(fig, name or f"dist_{value}_by_{group}")

    def plot_standard_set(self, labelled: pd.DataFrame, us_cars: pd.DataFrame) -> Dict[str, Path]:
        """Render the report figures.

        Parameters
        ----------
        labelled : pd.DataFrame
            Full table with ``Origin_US``.
        us_cars : pd.DataFrame
            Derived US table with ``Power_to_Weight`` and ``HP_Tier``.

        Returns
        -------
        dict
            Figure caption -> written path.
        """
        figures = {
            "Highway MPG by Origin": self.box_plot(
                labelled, "MPG_Highway", "Origin_US", name="mpg_highway_by_origin"),
            "Horsepower vs Weight by Origin": self.scatter_plot(
                labelled, "Weight", "Horsepower", hue="Origin_US", name="horsepower_vs_weight"),
            "Horsepower Distribution by Origin": self.distribution_plot(
                labelled, "Horsepower", "Origin_US", name="horsepower_distribution"),
            "Power-to-Weight by Horsepower Tier (US Cars)": self.box_plot(
                us_cars, "Power_to_Weight", "HP_Tier", name="power_to_weight_by_tier"),
        }
        logger.info("Rendered %d figures to %s", len(figures), self.output_dir)
        return figures
