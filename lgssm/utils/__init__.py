"""
Utility Functions.

This module contains utility functions for:
- Metrics computation
- Visualization (organized in visualization/ subfolder)
- Logging and timing for experiment scripts
"""
from .metrics import compute_mse, compute_rmse, compute_nees, compute_min_eigenvalues, stability_summary
from .utils import setup_logging, measure_time

from .visualization import (
    tight_layout,
    plot_kalman_filter,
    plot_covariance_convergence,
    plot_stability_analysis,
)

__all__ = [
    # metrics
    'compute_mse',
    'compute_rmse',
    'compute_nees',
    'compute_min_eigenvalues',
    'stability_summary',
    # utils
    'setup_logging',
    'measure_time',
    # visualization
    'tight_layout',
    'plot_kalman_filter',
    'plot_covariance_convergence',
    'plot_stability_analysis',
]
