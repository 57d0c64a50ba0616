"""Arrival and service interval generation."""

from .interval_generator import (
    IntervalGenerator,
    ExponentialIntervalGenerator,
    MeanIntervalGenerator,
    SequenceIntervalGenerator,
    build_interval_generator,
)

__all__ = [
    "IntervalGenerator",
    "ExponentialIntervalGenerator",
    "MeanIntervalGenerator",
    "SequenceIntervalGenerator",
    "build_interval_generator",
]
