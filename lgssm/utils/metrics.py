"""
Metrics for evaluating filter performance.
"""
import numpy as np


def compute_mse(estimated, true):
    """
    Compute Mean Squared Error.

    Parameters
    ----------
    estimated : ndarray
        Estimated values
    true : ndarray
        True values

    Returns
    -------
    float
        Mean squared error
    """
    return np.mean((estimated - true)**2)


def compute_rmse(estimated, true):
    """Root Mean Squared Error."""
    return np.sqrt(compute_mse(estimated, true))


def compute_nees(m_filt, P_filt, xs, regularize=1e-8):
    """
    Compute Normalized Estimation Error Squared (NEES).

    NEES = (x - m)' * P^{-1} * (x - m)

    For a consistent filter, NEES should follow chi-squared(n_x) distribution.

    Parameters
    ----------
    m_filt : ndarray [T, n_x]
        Filtered means
    P_filt : ndarray [T, n_x, n_x]
        Filtered covariances
    xs : ndarray [T, n_x]
        True states
    regularize : float
        Small value added to diagonal for numerical stability

    Returns
    -------
    ndarray [T]
        NEES values at each time step
    """
    n_x = m_filt.shape[1]
    errors = (xs - m_filt)[..., None]
    P_reg = P_filt + regularize * np.eye(n_x)
    return np.einsum('tij,tij->t', errors, np.linalg.solve(P_reg, errors))


def compute_min_eigenvalues(P_filt):
    """
    Minimum eigenvalue of P at each time step.

    Negative values indicate loss of positive semi-definiteness.

    Parameters
    ----------
    P_filt : ndarray [T, n_x, n_x]
        Covariance matrices

    Returns
    -------
    ndarray [T]
    """
    sym = 0.5 * (P_filt + np.swapaxes(P_filt, -1, -2))
    return np.linalg.eigvalsh(sym).min(axis=-1)


def stability_summary(cond_nums, mse=None):
    """
    Summary statistics for numerical stability metrics.

    Parameters
    ----------
    cond_nums : ndarray
        Condition numbers
    mse : float, optional
        Mean squared error

    Returns
    -------
    dict
        Summary statistics
    """
    summary = {
        'mean_cond': float(np.mean(cond_nums)),
        'max_cond': float(np.max(cond_nums)),
    }
    if mse is not None:
        summary['mse'] = float(mse)
    return summary
