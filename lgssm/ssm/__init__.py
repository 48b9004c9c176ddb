"""State Space Model implementations."""
from .linear_gaussian import SSMConfig, LinearGaussianSSM, linear_gaussian_ssm
from .noise import DiagonalNoise, FullCovarianceNoise, NoiseSpec, noise_spec_from_array

__all__ = [
    'SSMConfig',
    'LinearGaussianSSM',
    'linear_gaussian_ssm',
    'DiagonalNoise',
    'FullCovarianceNoise',
    'NoiseSpec',
    'noise_spec_from_array',
]
