import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
from scipy.integrate import RK45

from models.parameters import InitialState, ModelParameters, TimeSpan
from models.series import DerivedSeries, ExtremaRecord, Trajectory
from .config import RTOL, ATOL, MAX_STEP, MAX_STEPS
from .metrics import derive_series, find_emission_extrema

logger = logging.getLogger(__name__)


class IntegrationError(RuntimeError):
    """The solver could not reach the end of the time span."""


def competition_rates(t, state, params: ModelParameters):
    """Right-hand side of the Lotka-Volterra competition model.

    Evaluated as written for any state, including negative fleet sizes
    produced by overshoot.
    """
    x1, x2 = state
    dx1dt = params.r1 * x1 * (1 - x1 / params.N1 - params.mu1 * x2 / params.N2)
    dx2dt = params.r2 * x2 * (1 - x2 / params.N2 - params.mu2 * x1 / params.N1)
    return np.array([dx1dt, dx2dt])


def coexistence_equilibrium(params: ModelParameters) -> Tuple[float, float]:
    """Interior fixed point of the competition model.

    Returns NaN components when ``mu1 * mu2 == 1`` (no isolated equilibrium).
    """
    denominator = 1 - params.mu1 * params.mu2
    if denominator == 0:
        return float("nan"), float("nan")
    return (
        params.N1 * (1 - params.mu1) / denominator,
        params.N2 * (1 - params.mu2) / denominator,
    )


class MarketCompetitionSimulation:
    def __init__(
        self,
        params: ModelParameters,
        initial_state: InitialState,
        time_span: TimeSpan,
        rtol: float = RTOL,
        atol: float = ATOL,
        max_step: float = MAX_STEP,
        max_steps: int = MAX_STEPS,
    ):
        """Initialize the solver
        Args:
            params: Model parameters
            initial_state: Fleet sizes at ``time_span.t_start``
            time_span: Integration interval in years
            rtol, atol: Error control tolerances of the RK45 stepper
            max_step: Largest step the solver may take
            max_steps: Step budget; exceeding it raises IntegrationError
        """
        if max_steps < 1:
            raise ValueError("max_steps must be a positive integer.")

        self.params = params
        self.initial_state = initial_state
        self.time_span = time_span
        self.max_steps = max_steps
        self.steps_taken = 0

        self.solver = RK45(
            lambda t, y: competition_rates(t, y, params),
            time_span.t_start,
            initial_state.as_list(),
            time_span.t_end,
            max_step=max_step,
            rtol=rtol,
            atol=atol,
        )

        # Accepted samples, starting with the initial condition
        self.times = [time_span.t_start]
        self.ride_fleet = [initial_state.x1]
        self.cruise_fleet = [initial_state.x2]

    @property
    def current_time(self) -> float:
        return self.times[-1]

    @property
    def finished(self) -> bool:
        return self.solver.status == "finished"

    def step(self):
        """Advance by one adaptive step and record the accepted sample"""
        if self.finished:
            return
        if self.steps_taken >= self.max_steps:
            raise IntegrationError(
                f"Step budget of {self.max_steps} exhausted at t={self.current_time:.6g} "
                f"before reaching t={self.time_span.t_end:.6g}."
            )

        message = self.solver.step()
        if self.solver.status == "failed":
            raise IntegrationError(
                f"RK45 failed at t={self.solver.t:.6g}: {message}"
            )

        self.steps_taken += 1
        self.times.append(self.solver.t)
        self.ride_fleet.append(self.solver.y[0])
        self.cruise_fleet.append(self.solver.y[1])

    def run(self) -> Trajectory:
        """Integrate until the end of the time span"""
        while not self.finished:
            self.step()

        logger.debug(
            "Integrated [%g, %g] in %d steps (%d right-hand side evaluations)",
            self.time_span.t_start, self.time_span.t_end,
            self.steps_taken, self.solver.nfev,
        )
        return Trajectory(t=self.times, x1=self.ride_fleet, x2=self.cruise_fleet)


@dataclass(frozen=True)
class SimulationOutcome:
    trajectory: Trajectory
    derived: DerivedSeries
    peak: ExtremaRecord
    trough: ExtremaRecord


def run_market_simulation(
    params: Optional[ModelParameters] = None,
    initial_state: Optional[InitialState] = None,
    time_span: Optional[TimeSpan] = None,
    **solver_options,
) -> SimulationOutcome:
    """Integrate the model, derive emissions and shares, and locate the extrema."""
    params = params or ModelParameters()
    initial_state = initial_state or InitialState()
    time_span = time_span or TimeSpan()

    simulation = MarketCompetitionSimulation(params, initial_state, time_span, **solver_options)
    trajectory = simulation.run()
    derived = derive_series(trajectory, params)
    peak, trough = find_emission_extrema(trajectory, derived)

    logger.info(
        "Simulated %d samples over %g years [%g, %g]", len(trajectory),
        time_span.duration, time_span.t_start, time_span.t_end,
    )
    return SimulationOutcome(trajectory=trajectory, derived=derived, peak=peak, trough=trough)
