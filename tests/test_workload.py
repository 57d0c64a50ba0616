"""Tests for interval generation and run configuration."""

import math
import unittest

import numpy as np

from simqueue.core.simulation_config import SimulationConfig
from simqueue.workload.interval_generator import (
    ExponentialIntervalGenerator,
    MeanIntervalGenerator,
    SequenceIntervalGenerator,
    build_interval_generator,
)


class _ScriptedRng:
    """Stand-in for numpy's Generator returning fixed uniform draws."""

    def __init__(self, values):
        self.values = list(values)

    def random(self):
        return self.values.pop(0)


class TestExponentialIntervalGenerator(unittest.TestCase):
    """Test cases for ExponentialIntervalGenerator."""

    def test_samples_positive_and_finite(self):
        """Test every sample is a positive finite number."""
        generator = ExponentialIntervalGenerator(seed=1)
        samples = [generator.sample(3.0) for _ in range(5000)]

        self.assertTrue(all(s > 0 for s in samples))
        self.assertTrue(all(math.isfinite(s) for s in samples))

    def test_empirical_mean(self):
        """Test the sample mean converges to 1/rate."""
        generator = ExponentialIntervalGenerator(seed=123)
        samples = [generator.sample(2.0) for _ in range(20000)]

        self.assertAlmostEqual(np.mean(samples), 0.5, delta=0.02)

    def test_zero_uniform_draw_is_redrawn(self):
        """Test an exact zero uniform draw never reaches the log."""
        generator = ExponentialIntervalGenerator(rng=_ScriptedRng([0.0, 0.25]))

        self.assertAlmostEqual(generator.sample(1.0), -math.log(0.25))

    def test_inverse_transform(self):
        """Test -ln(u)/rate mapping."""
        generator = ExponentialIntervalGenerator(rng=_ScriptedRng([0.5]))

        self.assertAlmostEqual(generator.sample(4.0), math.log(2.0) / 4.0)

    def test_same_seed_same_sequence(self):
        """Test seeding reproduces the sequence."""
        first = ExponentialIntervalGenerator(seed=9)
        second = ExponentialIntervalGenerator(seed=9)

        self.assertEqual(
            [first.sample(1.0) for _ in range(10)],
            [second.sample(1.0) for _ in range(10)],
        )

    def test_invalid_rate(self):
        """Test non-positive rates are rejected."""
        generator = ExponentialIntervalGenerator(seed=1)
        for rate in (0.0, -1.0, float('inf'), float('nan')):
            with self.assertRaises(ValueError):
                generator.sample(rate)


class TestDeterministicGenerators(unittest.TestCase):
    """Test cases for deterministic generators."""

    def test_mean_generator(self):
        """Test mean generator returns 1/rate for both kinds."""
        generator = MeanIntervalGenerator()

        self.assertEqual(generator.sample_arrival(4.0), 0.25)
        self.assertEqual(generator.sample_service(2.0), 0.5)
        with self.assertRaises(ValueError):
            generator.sample(0.0)

    def test_sequence_generator_cycles(self):
        """Test sequences are replayed independently per kind."""
        generator = SequenceIntervalGenerator([1.0, 2.0], [0.5])

        self.assertEqual(
            [generator.sample_arrival(1.0) for _ in range(5)],
            [1.0, 2.0, 1.0, 2.0, 1.0],
        )
        self.assertEqual([generator.sample_service(1.0) for _ in range(2)], [0.5, 0.5])

    def test_sequence_generator_validation(self):
        """Test invalid sequences are rejected."""
        with self.assertRaises(ValueError):
            SequenceIntervalGenerator([], [1.0])
        with self.assertRaises(ValueError):
            SequenceIntervalGenerator([1.0], [-0.5])
        with self.assertRaises(ValueError):
            SequenceIntervalGenerator([0.0], [1.0])
        with self.assertRaises(ValueError):
            SequenceIntervalGenerator([1.0], [0.0])
        with self.assertRaises(ValueError):
            SequenceIntervalGenerator([1.0, 0.0], [1.0])

    def test_build_interval_generator(self):
        """Test factory dispatch on the configured distribution."""
        exponential = build_interval_generator({'workload': {'distribution': 'exponential'}})
        deterministic = build_interval_generator({'workload': {'distribution': 'deterministic'}})

        self.assertIsInstance(exponential, ExponentialIntervalGenerator)
        self.assertIsInstance(deterministic, MeanIntervalGenerator)
        with self.assertRaises(ValueError):
            build_interval_generator({'workload': {'distribution': 'pareto'}})


class TestSimulationConfig(unittest.TestCase):
    """Test cases for SimulationConfig."""

    def setUp(self):
        """Set up test fixtures."""
        self.config = {
            'simulation': {'target_completions': 100, 'random_seed': 5},
            'workload': {'arrival_rate': 1.0, 'service_rate': 2.0},
        }

    def test_from_dict(self):
        """Test values and defaults are read from the nested layout."""
        config = SimulationConfig.from_dict(self.config)

        self.assertEqual(config.arrival_rate, 1.0)
        self.assertEqual(config.service_rate, 2.0)
        self.assertEqual(config.target_completions, 100)
        self.assertEqual(config.random_seed, 5)
        self.assertEqual(config.distribution, 'exponential')
        self.assertTrue(config.check_invariants)
        self.assertFalse(config.record_trace)

    def test_round_trip(self):
        """Test to_dict produces a layout from_dict accepts."""
        config = SimulationConfig.from_dict(self.config)

        self.assertEqual(SimulationConfig.from_dict(config.to_dict()), config)

    def test_default_target(self):
        """Test the default completion target."""
        del self.config['simulation']['target_completions']

        self.assertEqual(SimulationConfig.from_dict(self.config).target_completions, 10000)

    def test_missing_rate(self):
        """Test a missing rate is reported."""
        del self.config['workload']['service_rate']

        with self.assertRaises(ValueError):
            SimulationConfig.from_dict(self.config)

    def test_invalid_values(self):
        """Test invalid parameters are rejected before a run."""
        invalid = [
            ('workload', 'arrival_rate', 0),
            ('workload', 'arrival_rate', -2.0),
            ('workload', 'service_rate', 'fast'),
            ('workload', 'service_rate', float('inf')),
            ('workload', 'distribution', 'pareto'),
            ('simulation', 'target_completions', 0),
            ('simulation', 'target_completions', -10),
            ('simulation', 'target_completions', 2.5),
            ('metrics', 'percentiles', ['p50']),
            ('metrics', 'percentiles', [150]),
        ]
        for section, key, value in invalid:
            config = {
                'simulation': dict(self.config['simulation']),
                'workload': dict(self.config['workload']),
                'metrics': {},
            }
            config[section][key] = value
            with self.subTest(key=key, value=value):
                with self.assertRaises(ValueError):
                    SimulationConfig.from_dict(config)


if __name__ == '__main__':
    unittest.main()
