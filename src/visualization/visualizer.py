import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np

from simulation.config import (
    OUTPUT_DIR, CARBON_CHART_FILENAME, SHARE_CHART_FILENAME, FIGURE_DPI,
)
from simulation.simulation import SimulationOutcome
from .labels import PEAK, MINIMUM, format_emission_label, format_share_label

logger = logging.getLogger(__name__)


class RenderingError(RuntimeError):
    """A chart could not be written to disk."""


@dataclass(frozen=True)
class LabeledPoint:
    x: float
    y: float
    label: str
    color: str = "red"


def save_line_chart(
    path,
    x,
    series: Sequence[Tuple[Sequence[float], str]],
    points: Sequence[LabeledPoint] = (),
    title: str = "",
    xlabel: str = "",
    ylabel: str = "",
    yticks: Optional[Sequence[float]] = None,
    dpi: int = FIGURE_DPI,
) -> Path:
    """Plot one or more series against ``x``, annotate points and save to ``path``.

    ``series`` is a sequence of ``(values, legend label)`` pairs.  The figure
    is always closed, even when saving fails.
    """
    path = Path(path)
    fig, ax = plt.subplots(figsize=(10, 6))
    try:
        for values, label in series:
            ax.plot(x, values, linewidth=2, label=label)

        for point in points:
            ax.scatter([point.x], [point.y], c=point.color, s=60, zorder=3)
            ax.annotate(
                point.label, xy=(point.x, point.y), xytext=(10, 10),
                textcoords="offset points", fontsize=9,
                bbox=dict(boxstyle="round", fc="white", alpha=0.8),
                arrowprops=dict(arrowstyle="->", color=point.color),
            )

        if yticks is not None:
            ax.set_yticks(yticks)
        ax.set_title(title)
        ax.set_xlabel(xlabel)
        ax.set_ylabel(ylabel)
        if len(series) > 1:
            ax.legend(loc="best")
        ax.grid(True, alpha=0.3)
        fig.tight_layout()

        try:
            fig.savefig(path, dpi=dpi)
        except OSError as exc:
            raise RenderingError(f"Could not write chart to {path}: {exc}") from exc
    finally:
        plt.close(fig)

    logger.info("Chart saved to %s", path)
    return path


class MarketCompetitionVisualization:
    def __init__(self, output_dir=OUTPUT_DIR, dpi: int = FIGURE_DPI):
        self.output_dir = Path(output_dir)
        self.dpi = dpi

    def plot_carbon_vs_market_ratio(self, outcome: SimulationOutcome) -> Path:
        """Total emissions against the ride-sourcing/cruise taxi fleet ratio"""
        derived = outcome.derived
        points = [
            LabeledPoint(
                extremum.market_ratio, extremum.total_emissions,
                format_emission_label(kind, extremum.market_ratio, extremum.total_emissions),
                color,
            )
            for kind, extremum, color in (
                (PEAK, outcome.peak, "red"),
                (MINIMUM, outcome.trough, "green"),
            )
        ]
        return save_line_chart(
            self.output_dir / CARBON_CHART_FILENAME,
            derived.market_ratio,
            [(derived.total_emissions, "Total carbon emissions")],
            points,
            title="Carbon Emissions vs Market Ratio",
            xlabel="Market ratio (ride-sourcing / cruise taxi)",
            ylabel="Total carbon emissions (tons)",
            dpi=self.dpi,
        )

    def plot_market_share_evolution(self, outcome: SimulationOutcome) -> Path:
        """Market share of both segments over time, in percent"""
        trajectory = outcome.trajectory
        derived = outcome.derived
        points = [
            LabeledPoint(
                extremum.t, extremum.ride_share * 100,
                format_share_label(kind, extremum.t, extremum.ride_share),
                color,
            )
            for kind, extremum, color in (
                (PEAK, outcome.peak, "red"),
                (MINIMUM, outcome.trough, "green"),
            )
        ]
        return save_line_chart(
            self.output_dir / SHARE_CHART_FILENAME,
            trajectory.t,
            [
                (derived.ride_share * 100, "Ride-sourcing"),
                (derived.cruise_share * 100, "Cruise taxi"),
            ],
            points,
            title="Market Share Evolution",
            xlabel="Time (years)",
            ylabel="Market share (%)",
            yticks=np.arange(0, 101, 10),
            dpi=self.dpi,
        )

    def render(self, outcome: SimulationOutcome) -> Tuple[Path, Path]:
        return (
            self.plot_carbon_vs_market_ratio(outcome),
            self.plot_market_share_evolution(outcome),
        )
