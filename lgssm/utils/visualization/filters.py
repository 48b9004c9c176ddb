"""
Visualization functions for Kalman filter results.
"""
import os

import numpy as np
import matplotlib.pyplot as plt

from ..metrics import compute_min_eigenvalues
from .layout import tight_layout


def plot_kalman_filter(T, xs, ys, m_filt, P_filt, save_path=None, title="Kalman Filter"):
    """
    Plot Kalman filter results.

    Parameters
    ----------
    T : int
        Number of time steps
    xs : ndarray [T, n_x]
        True states
    ys : ndarray [T, n_y]
        Observations (plotted against state 1 when n_y == 1)
    m_filt : ndarray [T, n_x]
        Filtered means
    P_filt : ndarray [T, n_x, n_x]
        Filtered covariances
    save_path : str, optional
        Path to save figure
    title : str
        Plot title

    Returns
    -------
    matplotlib.figure.Figure
    """
    t = np.arange(T)
    n_x = xs.shape[1] if xs.ndim > 1 else 1

    if n_x == 1:
        xs = xs.reshape(-1, 1)
        m_filt = m_filt.reshape(-1, 1)

    fig, axes = plt.subplots(n_x, 1, figsize=(12, 4*n_x))
    if n_x == 1:
        axes = [axes]

    for i in range(n_x):
        ax = axes[i]
        std_filt = np.sqrt(P_filt[:, i, i])

        ax.plot(t, xs[:, i], 'k-', linewidth=2, label='True State', alpha=0.8)
        if i == 0 and ys is not None and ys.reshape(T, -1).shape[1] == 1:
            ax.plot(t, ys.reshape(-1), 'g.', markersize=4, label='Measurement', alpha=0.6)
        ax.plot(t, m_filt[:, i], 'b--', linewidth=1.5, label='Filter Mean', alpha=0.8)
        ax.fill_between(t, m_filt[:, i] - 2*std_filt, m_filt[:, i] + 2*std_filt,
                        alpha=0.2, color='blue', label='+/-2sigma')

        ax.set_xlabel('Time')
        ax.set_ylabel(f'State {i+1}')
        ax.set_title(f'{title} - State {i+1}')
        ax.legend()
        ax.grid(True, alpha=0.3)

    tight_layout(fig)

    if save_path:
        fig.savefig(save_path, dpi=150)
        print(f"Saved: {os.path.basename(save_path)}")
        plt.close(fig)
    return fig


def plot_covariance_convergence(P_filt, P_steady, save_path=None, title="Posterior Covariance"):
    """
    Plot the diagonal of the filtered covariance against its steady state.

    Parameters
    ----------
    P_filt : ndarray [T, n_x, n_x]
        Filtered covariances
    P_steady : ndarray [n_x, n_x]
        Fixed point of the covariance recursion
    save_path : str, optional
        Path to save figure
    title : str
        Plot title

    Returns
    -------
    matplotlib.figure.Figure
    """
    T, n_x = P_filt.shape[0], P_filt.shape[1]
    t = np.arange(T)

    fig, ax = plt.subplots(1, 1, figsize=(10, 4))
    for i in range(n_x):
        line, = ax.semilogy(t, P_filt[:, i, i], linewidth=1.5, label=f'P[{i},{i}]')
        ax.axhline(P_steady[i, i], color=line.get_color(), linestyle='--', alpha=0.6)

    ax.set_xlabel('Time')
    ax.set_ylabel('Variance')
    ax.set_title(title)
    ax.legend()
    ax.grid(True, alpha=0.3)

    tight_layout(fig)

    if save_path:
        fig.savefig(save_path, dpi=150)
        print(f"Saved: {os.path.basename(save_path)}")
        plt.close(fig)
    return fig


def plot_stability_analysis(xs, runs, save_path=None):
    """
    Compare covariance update forms on one simulated trajectory.

    Panels: condition number of P, smallest eigenvalue of P (negative means
    P lost positive semi-definiteness) and the estimation error norm over
    all state components.

    Parameters
    ----------
    xs : ndarray [T, n_x]
        True states
    runs : dict
        Label -> {'m': ndarray [T, n_x], 'P': ndarray [T, n_x, n_x],
        'cond': ndarray [T]}
    save_path : str, optional
        Path to save figure

    Returns
    -------
    matplotlib.figure.Figure
    """
    t = np.arange(xs.shape[0])
    fig, (ax_cond, ax_eig, ax_err) = plt.subplots(1, 3, figsize=(16, 4.5))

    for (label, run), style in zip(runs.items(), ('-', '--', ':', '-.')):
        ax_cond.semilogy(t, run['cond'], linestyle=style, label=label)
        ax_eig.plot(t, compute_min_eigenvalues(run['P']), linestyle=style, label=label)
        ax_err.plot(t, np.linalg.norm(run['m'] - xs, axis=1), linestyle=style, label=label)

    ax_eig.axhline(0.0, color='k', linewidth=0.8)
    for ax, ylabel, title in ((ax_cond, 'cond(P)', 'Condition Number'),
                              (ax_eig, 'min eig(P)', 'Positive Definiteness'),
                              (ax_err, '||m - x||', 'Estimation Error')):
        ax.set_xlabel('Time')
        ax.set_ylabel(ylabel)
        ax.set_title(title)
        ax.legend()
        ax.grid(True, alpha=0.3)

    tight_layout(fig)

    if save_path:
        fig.savefig(save_path, dpi=150)
        print(f"Saved: {os.path.basename(save_path)}")
        plt.close(fig)
    return fig
