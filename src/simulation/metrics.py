import logging
from typing import Tuple

import numpy as np

from models.parameters import ModelParameters
from models.series import DerivedSeries, ExtremaRecord, Trajectory

logger = logging.getLogger(__name__)


def driving_distance(x, params: ModelParameters):
    """Average driving distance of a fleet of size ``x``.

    Uses the saturation model ``D(x) = c - b^2 / (a*x + b)``.  Where
    ``a*x + b`` vanishes the result is inf/NaN and is returned unmasked.
    """
    x = np.asarray(x, dtype=float)
    with np.errstate(divide="ignore", invalid="ignore"):
        return params.c - np.divide(params.b ** 2, params.a * x + params.b)


def total_carbon_emissions(x1, x2, params: ModelParameters):
    """Total carbon emissions (tons) of both fleets.

    Each segment contributes a gasoline term scaled by ``EF`` and an electric
    term scaled by ``E * EEF``, weighted by the segment's fleet composition.
    """
    x1 = np.asarray(x1, dtype=float)
    x2 = np.asarray(x2, dtype=float)
    ride_distance = driving_distance(x1, params)
    cruise_distance = driving_distance(x2, params)

    with np.errstate(invalid="ignore", over="ignore"):
        gasoline = (
            params.EF * x1 * params.ride_gasoline_share * ride_distance
            + params.EF * x2 * params.cruise_gasoline_share * params.E * cruise_distance
        )
        electric = (
            params.E * params.EEF * x1 * params.ride_electric_share * ride_distance
            + params.E * params.EEF * x2 * params.cruise_electric_share * cruise_distance
        )
        return gasoline + electric


def market_shares(x1, x2):
    """Return ``(ride_share, cruise_share, market_ratio)``.

    Empty markets (``x1 + x2 == 0``) give NaN shares and ``x2 == 0`` gives an
    infinite or NaN ratio.
    """
    x1 = np.asarray(x1, dtype=float)
    x2 = np.asarray(x2, dtype=float)
    with np.errstate(divide="ignore", invalid="ignore"):
        total = x1 + x2
        return np.divide(x1, total), np.divide(x2, total), np.divide(x1, x2)


def derive_series(trajectory: Trajectory, params: ModelParameters) -> DerivedSeries:
    """Compute distances, emissions and shares for every trajectory sample."""
    ride_share, cruise_share, market_ratio = market_shares(trajectory.x1, trajectory.x2)
    derived = DerivedSeries(
        ride_distance=driving_distance(trajectory.x1, params),
        cruise_distance=driving_distance(trajectory.x2, params),
        total_emissions=total_carbon_emissions(trajectory.x1, trajectory.x2, params),
        ride_share=ride_share,
        cruise_share=cruise_share,
        market_ratio=market_ratio,
    )

    non_finite = int(np.count_nonzero(~np.isfinite(derived.total_emissions)))
    if non_finite:
        logger.warning(
            "%d of %d emission samples are not finite; parameters hit a model singularity",
            non_finite, len(derived),
        )
    return derived


def _extremum_at(index: int, trajectory: Trajectory, derived: DerivedSeries) -> ExtremaRecord:
    return ExtremaRecord(
        index=index,
        t=float(trajectory.t[index]),
        market_ratio=float(derived.market_ratio[index]),
        ride_share=float(derived.ride_share[index]),
        total_emissions=float(derived.total_emissions[index]),
    )


def find_emission_extrema(
    trajectory: Trajectory, derived: DerivedSeries
) -> Tuple[ExtremaRecord, ExtremaRecord]:
    """Locate the global maximum and minimum of total emissions.

    Ties resolve to the earliest sample.  NaN samples are skipped; when every
    sample is NaN both records point at the first sample and carry the NaN.
    """
    if len(derived) != len(trajectory):
        raise ValueError(
            f"Derived series length {len(derived)} does not match "
            f"trajectory length {len(trajectory)}."
        )

    emissions = derived.total_emissions
    missing = np.isnan(emissions)
    if missing.all():
        logger.warning("Total emissions are NaN at every sample; extrema are undefined")
        return _extremum_at(0, trajectory, derived), _extremum_at(0, trajectory, derived)
    if missing.any():
        logger.warning("Skipping %d NaN emission samples in extrema search", int(missing.sum()))

    peak = _extremum_at(int(np.nanargmax(emissions)), trajectory, derived)
    trough = _extremum_at(int(np.nanargmin(emissions)), trajectory, derived)
    logger.debug("Emission peak at index %d, minimum at index %d", peak.index, trough.index)
    return peak, trough
