"""Distributions and random-variate streams."""

from clinicsim.distributions.distribution import Constant, Distribution, Exponential, Normal, Uniform
from clinicsim.distributions.random_variates import MAX_RESAMPLE_ATTEMPTS, RandomVariateGenerator

__all__ = [
    "Constant",
    "Distribution",
    "Exponential",
    "MAX_RESAMPLE_ATTEMPTS",
    "Normal",
    "RandomVariateGenerator",
    "Uniform",
]
