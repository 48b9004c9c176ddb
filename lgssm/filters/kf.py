"""Kalman Filter (KF) implementation."""
import logging

import numpy as np
from scipy import linalg as sla

from ..config import FILTER_PARAMS, resolve_filter_params
from ..exceptions import ConfigError, SingularInnovationCovarianceError
from .common import joseph_update, standard_update

logger = logging.getLogger(__name__)


def _solve_lu(S, B):
    """Solve S @ X = B using LU factorization (np.linalg.solve)."""
    return np.linalg.solve(S, B)


def _solve_cholesky(S, B):
    """Solve S @ X = B using Cholesky factorization (assumes S is SPD)."""
    c, lower = sla.cho_factor(S, lower=True)
    return sla.cho_solve((c, lower), B)


def _solve_inv(S, B):
    """Solve S @ X = B using explicit matrix inversion (least stable)."""
    return np.linalg.inv(S) @ B


_SOLVERS = {
    'lu': _solve_lu,
    'cholesky': _solve_cholesky,
    'inv': _solve_inv,
}


def _get_solver(name):
    try:
        return _SOLVERS[name]
    except KeyError:
        raise ConfigError(f"Unknown solver '{name}', expected one of {tuple(_SOLVERS)}") from None


def kalman_gain(P_pred, C, S, solver='lu', cond_limit=None):
    """
    Kalman gain K = P_pred C' S^{-1}, computed as a right division.

    K S = P_pred C'  <=>  S' K' = C P_pred'

    Raises
    ------
    SingularInnovationCovarianceError
        If S is singular or worse conditioned than cond_limit
    """
    if cond_limit is None:
        cond_limit = FILTER_PARAMS['cond_limit']

    cond = np.linalg.cond(S)
    if not np.isfinite(cond) or cond > cond_limit:
        logger.warning("Innovation covariance is singular (cond=%.3g)", cond)
        raise SingularInnovationCovarianceError(
            f"Innovation covariance S is singular to working precision (cond={cond:.3g})",
            condition_number=cond,
        )

    solve_fn = _get_solver(solver)
    try:
        return solve_fn(S.T, C @ P_pred.T).T
    except np.linalg.LinAlgError as err:
        logger.warning("Solving for the Kalman gain failed: %s", err)
        raise SingularInnovationCovarianceError(
            f"Could not solve innovation covariance with '{solver}': {err}",
            condition_number=cond,
        ) from err


def kalman_step(A, C, Q, R, m, P, y, solver='lu', joseph=False, cond_limit=None):
    """
    One predict/update step of the Kalman filter.

    Parameters
    ----------
    A : ndarray [n_x, n_x]
        State transition matrix
    C : ndarray [n_y, n_x]
        Observation matrix
    Q : ndarray [n_x, n_x]
        Process noise covariance (already mapped through B if needed)
    R : ndarray [n_y, n_y]
        Measurement noise covariance (already mapped through D if needed)
    m : ndarray [n_x, 1]
        Mean for the current step
    P : ndarray [n_x, n_x]
        Covariance for the current step
    y : ndarray [n_y, 1]
        Measurement of the next step
    solver : str
        Solver for Kalman gain: 'lu', 'cholesky', or 'inv' (default: 'lu')
    joseph : bool
        Use Joseph stabilized covariance update (default: False)
    cond_limit : float, optional
        Largest accepted condition number of S

    Returns
    -------
    m_post : ndarray [n_x, 1]
        Posterior mean for the next step
    P_post : ndarray [n_x, n_x]
        Posterior covariance for the next step
    """
    # Predict
    m_pred = A @ m
    P_pred = A @ P @ A.T + Q

    # Update
    S = C @ P_pred @ C.T + R
    K = kalman_gain(P_pred, C, S, solver=solver, cond_limit=cond_limit)
    m_post = m_pred + K @ (y - C @ m_pred)
    P_post = joseph_update(P_pred, K, C, R) if joseph else standard_update(P_pred, K, S)

    return m_post, P_post


def kalman_filter(model, m0, P0, ys):
    """
    Run the model's Kalman update over a measurement stream.

    Each ys[t] is treated as the measurement of the step following the
    current estimate, so m_filt[t] is the estimate after seeing ys[t].

    Parameters
    ----------
    model : LinearGaussianSSM
        Model providing A, C, Q, R and filter options
    m0 : ndarray [n_x] or [n_x, 1]
        Initial mean
    P0 : ndarray [n_x, n_x]
        Initial covariance
    ys : ndarray [T, n_y]
        Observations

    Returns
    -------
    m_filt : ndarray [T, n_x]
        Filtered state means
    P_filt : ndarray [T, n_x, n_x]
        Filtered state covariances
    cond_nums : ndarray [T]
        Condition numbers of P
    """
    n_x = model.config.n_x
    ys = np.asarray(ys, dtype=float)
    T = ys.shape[0]

    m = np.asarray(m0, dtype=float).reshape(-1, 1)
    P = np.array(P0, dtype=float)
    m_filt = np.zeros((T, n_x))
    P_filt = np.zeros((T, n_x, n_x))
    cond_nums = np.zeros(T)

    for t in range(T):
        m, P = model.estimate(m, P, ys[t])
        m_filt[t], P_filt[t] = m[:, 0], P
        cond_nums[t] = np.linalg.cond(P)

    return m_filt, P_filt, cond_nums


def steady_state_covariance(model, **filter_params):
    """
    Fixed point of the posterior covariance recursion.

    Solves the filtering DARE for the predicted covariance
        P = A P A' - A P C' (C P C' + R)^{-1} C P A' + Q
    and applies one measurement update to it.

    Parameters
    ----------
    model : LinearGaussianSSM
        Model providing A, C, Q, R
    **filter_params
        Overrides for the model's filter parameters (square_full_covariance,
        map_noise_loading and cond_limit are used)

    Returns
    -------
    ndarray [n_x, n_x]
        Steady-state posterior covariance
    """
    params = resolve_filter_params(**{**model.filter_params, **filter_params})
    A, C = model.config.A, model.config.C
    Q, R = model.noise_covariances(params['square_full_covariance'], params['map_noise_loading'])

    P_pred = sla.solve_discrete_are(A.T, C.T, Q, R)
    S = C @ P_pred @ C.T + R
    K = kalman_gain(P_pred, C, S, cond_limit=params['cond_limit'])
    return standard_update(P_pred, K, S)
