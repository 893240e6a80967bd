import math
from dataclasses import dataclass, fields

from simulation.config import (
    RIDE_GROWTH_RATE, CRUISE_GROWTH_RATE, RIDE_CAPACITY, CRUISE_CAPACITY,
    RIDE_COMPETITION, CRUISE_COMPETITION, DISTANCE_A, DISTANCE_B, DISTANCE_C,
    EMISSION_FACTOR, ELECTRIC_EMISSION_FACTOR, ENERGY_FACTOR,
    RIDE_GASOLINE_SHARE, RIDE_ELECTRIC_SHARE, CRUISE_GASOLINE_SHARE,
    CRUISE_ELECTRIC_SHARE, INITIAL_RIDE_FLEET, INITIAL_CRUISE_FLEET,
    T_START, T_END,
)


@dataclass(frozen=True)
class ModelParameters:
    """Constants of one competition run.

    - r1, r2: intrinsic growth rates of the ride-sourcing and cruise taxi fleets.
    - N1, N2: carrying capacities (thousand vehicles, must be > 0).
    - mu1, mu2: competition coefficients.
    - a, b, c: coefficients of the driving distance saturation model.
    - EF, EEF, E: gasoline emission, electric emission and energy factors.
    - *_gasoline_share / *_electric_share: fleet composition per segment.
    """

    r1: float = RIDE_GROWTH_RATE
    r2: float = CRUISE_GROWTH_RATE
    N1: float = RIDE_CAPACITY
    N2: float = CRUISE_CAPACITY
    mu1: float = RIDE_COMPETITION
    mu2: float = CRUISE_COMPETITION
    a: float = DISTANCE_A
    b: float = DISTANCE_B
    c: float = DISTANCE_C
    EF: float = EMISSION_FACTOR
    EEF: float = ELECTRIC_EMISSION_FACTOR
    E: float = ENERGY_FACTOR
    ride_gasoline_share: float = RIDE_GASOLINE_SHARE
    ride_electric_share: float = RIDE_ELECTRIC_SHARE
    cruise_gasoline_share: float = CRUISE_GASOLINE_SHARE
    cruise_electric_share: float = CRUISE_ELECTRIC_SHARE

    def __post_init__(self) -> None:
        for f in fields(self):
            if not math.isfinite(getattr(self, f.name)):
                raise ValueError(f"Parameter '{f.name}' must be finite.")
        if self.N1 <= 0 or self.N2 <= 0:
            raise ValueError("Carrying capacities must be positive.")


@dataclass(frozen=True)
class InitialState:
    """Starting fleet sizes (thousand vehicles)."""

    x1: float = INITIAL_RIDE_FLEET
    x2: float = INITIAL_CRUISE_FLEET

    def __post_init__(self) -> None:
        if self.x1 < 0 or self.x2 < 0:
            raise ValueError("Initial fleet sizes cannot be negative.")

    def as_list(self):
        return [self.x1, self.x2]


@dataclass(frozen=True)
class TimeSpan:
    """Simulated horizon in years."""

    t_start: float = T_START
    t_end: float = T_END

    def __post_init__(self) -> None:
        if not self.t_start < self.t_end:
            raise ValueError("t_start must be strictly less than t_end.")

    @property
    def duration(self) -> float:
        return self.t_end - self.t_start
