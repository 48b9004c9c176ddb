"""Kalman filtering for the linear Gaussian SSM."""
from .kf import kalman_filter, kalman_gain, kalman_step, steady_state_covariance
from .common import joseph_update, standard_update

__all__ = [
    # Main filter
    'kalman_filter',
    'kalman_step',
    'kalman_gain',
    'steady_state_covariance',
    # Utilities
    'joseph_update',
    'standard_update',
]
