"""Unit tests for the parameter and series containers.

Covers:
- Defaults taken from the configuration module
- Validation of parameters, initial states and time spans
- Immutability of trajectories and derived series
"""

import dataclasses
import math
import unittest

import numpy as np

from models.parameters import InitialState, ModelParameters, TimeSpan
from models.series import DerivedSeries, Trajectory
from simulation import config


class TestModelParameters(unittest.TestCase):
    """Test ModelParameters defaults and validation."""

    def test_defaults_match_config(self):
        """Test that the default parameters come from the config module."""
        params = ModelParameters()
        self.assertEqual(params.r1, config.RIDE_GROWTH_RATE)
        self.assertEqual(params.r2, config.CRUISE_GROWTH_RATE)
        self.assertEqual(params.N1, 17.5)
        self.assertEqual(params.N2, 17.5)
        self.assertEqual(params.mu1, 0.2)
        self.assertEqual(params.mu2, 0.1)
        self.assertEqual(params.a, -0.002404)
        self.assertEqual(params.b, 46.184166)
        self.assertEqual(params.c, 534.469131)
        self.assertEqual(params.EF, 0.184)
        self.assertEqual(params.EEF, 0.607)
        self.assertEqual(params.E, 0.12)

    def test_fleet_splits(self):
        """Test that the fleet composition splits keep their fixed values."""
        params = ModelParameters()
        self.assertEqual(params.ride_gasoline_share, 0.15)
        self.assertEqual(params.ride_electric_share, 0.85)
        self.assertEqual(params.cruise_gasoline_share, 0.526)
        self.assertEqual(params.cruise_electric_share, 0.474)

    def test_frozen(self):
        """Test that parameters cannot be mutated after creation."""
        params = ModelParameters()
        with self.assertRaises(dataclasses.FrozenInstanceError):
            params.r1 = 1.0

    def test_nonpositive_capacity(self):
        """Test that zero or negative carrying capacities raise ValueError."""
        with self.assertRaises(ValueError):
            ModelParameters(N1=0.0)
        with self.assertRaises(ValueError):
            ModelParameters(N2=-1.0)

    def test_non_finite_parameter(self):
        """Test that NaN or infinite parameters raise ValueError."""
        with self.assertRaises(ValueError):
            ModelParameters(EF=math.nan)
        with self.assertRaises(ValueError):
            ModelParameters(r2=math.inf)


class TestInitialStateAndTimeSpan(unittest.TestCase):
    """Test InitialState and TimeSpan validation."""

    def test_default_initial_state(self):
        """Test the default starting fleet sizes."""
        state = InitialState()
        self.assertEqual(state.as_list(), [14.5, 15.5])

    def test_zero_fleet_allowed(self):
        """Test that an empty segment is a valid starting point."""
        state = InitialState(0.0, 15.5)
        self.assertEqual(state.x1, 0.0)

    def test_above_capacity_allowed(self):
        """Test that fleets above carrying capacity are accepted."""
        state = InitialState(30.0, 40.0)
        self.assertEqual(state.x2, 40.0)

    def test_negative_initial_state(self):
        """Test that negative fleet sizes raise ValueError."""
        with self.assertRaises(ValueError):
            InitialState(-0.1, 15.5)

    def test_default_time_span(self):
        """Test the default simulated horizon."""
        span = TimeSpan()
        self.assertEqual((span.t_start, span.t_end), (0.0, 50.0))
        self.assertEqual(span.duration, 50.0)

    def test_reversed_time_span(self):
        """Test that t_start >= t_end raises ValueError."""
        with self.assertRaises(ValueError):
            TimeSpan(10.0, 5.0)
        with self.assertRaises(ValueError):
            TimeSpan(5.0, 5.0)


class TestTrajectory(unittest.TestCase):
    """Test Trajectory construction rules."""

    def test_valid_trajectory(self):
        """Test construction and state accessors."""
        trajectory = Trajectory(t=[0.0, 1.0, 2.5], x1=[1.0, 2.0, 3.0], x2=[4.0, 5.0, 6.0])
        self.assertEqual(len(trajectory), 3)
        self.assertEqual(trajectory.initial_state, (0.0, 1.0, 4.0))
        self.assertEqual(trajectory.final_state, (2.5, 3.0, 6.0))

    def test_non_increasing_times(self):
        """Test that repeated or decreasing times raise ValueError."""
        with self.assertRaises(ValueError):
            Trajectory(t=[0.0, 1.0, 1.0], x1=[1.0, 1.0, 1.0], x2=[1.0, 1.0, 1.0])
        with self.assertRaises(ValueError):
            Trajectory(t=[0.0, 2.0, 1.0], x1=[1.0, 1.0, 1.0], x2=[1.0, 1.0, 1.0])

    def test_length_mismatch(self):
        """Test that state series must match the time series length."""
        with self.assertRaises(ValueError):
            Trajectory(t=[0.0, 1.0], x1=[1.0], x2=[1.0, 2.0])

    def test_empty_trajectory(self):
        """Test that a trajectory needs at least one sample."""
        with self.assertRaises(ValueError):
            Trajectory(t=[], x1=[], x2=[])

    def test_arrays_are_read_only(self):
        """Test that stored arrays cannot be modified in place."""
        source = np.array([1.0, 2.0])
        trajectory = Trajectory(t=[0.0, 1.0], x1=source, x2=[3.0, 4.0])
        with self.assertRaises(ValueError):
            trajectory.x1[0] = 10.0
        # The caller's array is copied, not frozen
        source[0] = 10.0
        self.assertEqual(trajectory.x1[0], 1.0)


class TestDerivedSeries(unittest.TestCase):
    """Test DerivedSeries construction rules."""

    def test_length_mismatch(self):
        """Test that all derived series must share one length."""
        with self.assertRaises(ValueError):
            DerivedSeries(
                ride_distance=[1.0, 2.0],
                cruise_distance=[1.0, 2.0],
                total_emissions=[1.0],
                ride_share=[0.5, 0.5],
                cruise_share=[0.5, 0.5],
                market_ratio=[1.0, 1.0],
            )


if __name__ == "__main__":
    unittest.main()
