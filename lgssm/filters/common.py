"""Covariance update forms for the Kalman measurement step."""
import numpy as np


def joseph_update(P_pred, K, C, R):
    """
    Compute Joseph-stabilized covariance update.

    Parameters
    ----------
    P_pred : ndarray [n_x, n_x]
        Predicted covariance
    K : ndarray [n_x, n_y]
        Kalman gain
    C : ndarray [n_y, n_x]
        Observation matrix
    R : ndarray [n_y, n_y]
        Measurement noise covariance

    Returns
    -------
    ndarray [n_x, n_x]
        Updated covariance
    """
    n_x = P_pred.shape[0]
    I = np.eye(n_x)
    IKC = I - K @ C
    return IKC @ P_pred @ IKC.T + K @ R @ K.T


def standard_update(P_pred, K, S):
    """
    Compute covariance update P = P_pred - K S K'.

    Parameters
    ----------
    P_pred : ndarray [n_x, n_x]
        Predicted covariance
    K : ndarray [n_x, n_y]
        Kalman gain
    S : ndarray [n_y, n_y]
        Innovation covariance

    Returns
    -------
    ndarray [n_x, n_x]
        Updated covariance
    """
    return P_pred - K @ S @ K.T
