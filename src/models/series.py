from dataclasses import dataclass, fields
from typing import Tuple

import numpy as np


def _freeze(instance, names):
    """Replace the named attributes with read-only float arrays."""
    for name in names:
        array = np.array(getattr(instance, name), dtype=float)
        array.setflags(write=False)
        object.__setattr__(instance, name, array)


@dataclass(frozen=True)
class Trajectory:
    """Samples ``(t_i, x1_i, x2_i)`` produced by the integrator.

    Sample count and spacing are chosen by the solver's error control.  The
    time vector is strictly increasing; the first sample is the initial state.
    """

    t: np.ndarray
    x1: np.ndarray
    x2: np.ndarray

    def __post_init__(self) -> None:
        _freeze(self, ("t", "x1", "x2"))
        if self.t.ndim != 1 or len(self.t) == 0:
            raise ValueError("Trajectory needs at least one sample.")
        if len(self.x1) != len(self.t) or len(self.x2) != len(self.t):
            raise ValueError(
                f"State series lengths ({len(self.x1)}, {len(self.x2)}) "
                f"must match time series length {len(self.t)}."
            )
        if np.any(np.diff(self.t) <= 0):
            raise ValueError("Trajectory times must be strictly increasing.")

    def __len__(self) -> int:
        return len(self.t)

    @property
    def initial_state(self) -> Tuple[float, float, float]:
        return float(self.t[0]), float(self.x1[0]), float(self.x2[0])

    @property
    def final_state(self) -> Tuple[float, float, float]:
        return float(self.t[-1]), float(self.x1[-1]), float(self.x2[-1])


@dataclass(frozen=True)
class DerivedSeries:
    """Per-sample distances, emissions and market shares."""

    ride_distance: np.ndarray  # DR
    cruise_distance: np.ndarray  # DT
    total_emissions: np.ndarray  # TCE
    ride_share: np.ndarray
    cruise_share: np.ndarray
    market_ratio: np.ndarray

    def __post_init__(self) -> None:
        names = [f.name for f in fields(self)]
        _freeze(self, names)
        lengths = {len(getattr(self, name)) for name in names}
        if len(lengths) != 1:
            raise ValueError("All derived series must have the same length.")

    def __len__(self) -> int:
        return len(self.total_emissions)


@dataclass(frozen=True)
class ExtremaRecord:
    """Location of a global TCE extremum along the trajectory."""

    index: int
    t: float
    market_ratio: float
    ride_share: float
    total_emissions: float
