import logging
import sys

from models.parameters import InitialState, ModelParameters, TimeSpan
from simulation.config import LOG_LEVEL, LOG_FORMAT, OUTPUT_DIR
from simulation.simulation import IntegrationError, coexistence_equilibrium, run_market_simulation
from visualization.visualizer import MarketCompetitionVisualization, RenderingError

logger = logging.getLogger(__name__)


def log_summary(outcome, params):
    t_end, ride_fleet, cruise_fleet = outcome.trajectory.final_state
    ride_eq, cruise_eq = coexistence_equilibrium(params)
    logger.info(
        "Final fleets at t=%.1f: ride-sourcing %.3f, cruise taxi %.3f (equilibrium %.3f, %.3f)",
        t_end, ride_fleet, cruise_fleet, ride_eq, cruise_eq,
    )
    for name, extremum in (("Peak", outcome.peak), ("Minimum", outcome.trough)):
        logger.info(
            "%s emissions %.1f tons at t=%.2f years (market ratio %.3f, ride share %.1f%%)",
            name, extremum.total_emissions, extremum.t,
            extremum.market_ratio, extremum.ride_share * 100,
        )


def main():
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    logging.getLogger("matplotlib").setLevel(logging.WARNING)

    params = ModelParameters()
    try:
        outcome = run_market_simulation(params, InitialState(), TimeSpan())
    except IntegrationError:
        logger.exception("Integration failed; no charts were rendered")
        return 1
    log_summary(outcome, params)

    vis = MarketCompetitionVisualization(OUTPUT_DIR)
    try:
        vis.render(outcome)
    except RenderingError:
        logger.exception("Rendering failed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
