"""
lgssm: Linear Gaussian State Space Model with a Kalman filter.

This package contains:
- A linear Gaussian SSM that simulates a hidden state and noisy measurements
- A one-step Kalman update and a loop over measurement streams
- Metrics and plotting utilities
"""
from .exceptions import (
    LGSSMError,
    InvalidShapeError,
    SingularInnovationCovarianceError,
    ConfigError,
)
from .ssm import (
    SSMConfig,
    LinearGaussianSSM,
    linear_gaussian_ssm,
    DiagonalNoise,
    FullCovarianceNoise,
)
from .filters import kalman_filter, kalman_step, steady_state_covariance

__version__ = '0.1.0'

__all__ = [
    # errors
    'LGSSMError',
    'InvalidShapeError',
    'SingularInnovationCovarianceError',
    'ConfigError',
    # model
    'SSMConfig',
    'LinearGaussianSSM',
    'linear_gaussian_ssm',
    'DiagonalNoise',
    'FullCovarianceNoise',
    # filtering
    'kalman_filter',
    'kalman_step',
    'steady_state_covariance',
]
