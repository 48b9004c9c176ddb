"""
Visualization utilities for simulated trajectories and filter results.

This module provides:
- layout: tight_layout for trimming whitespace around axes
- filters: Kalman filter estimate, covariance and stability plots
"""
from .layout import tight_layout, LAYOUT_PAD, BASE_FIGSIZE

from .filters import (
    plot_kalman_filter,
    plot_covariance_convergence,
    plot_stability_analysis,
)

__all__ = [
    # layout
    'tight_layout',
    'LAYOUT_PAD',
    'BASE_FIGSIZE',
    # filters
    'plot_kalman_filter',
    'plot_covariance_convergence',
    'plot_stability_analysis',
]
