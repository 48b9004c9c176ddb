"""Shared pytest fixtures for unit tests."""

import numpy as np
import pytest


@pytest.fixture
def system_2d():
    """2D system with std-dev noise specs (kwargs for LinearGaussianSSM)."""
    return {
        'initial_state': np.array([[1.0], [-0.5]]),
        'process_noise': np.array([[0.1], [0.2]]),
        'measurement_noise': np.array([[0.3]]),
        'A': np.array([[1.0, 0.1], [0.0, 0.95]]),
        'B': np.eye(2),
        'C': np.array([[1.0, 0.0]]),
        'D': np.array([[1.0]]),
    }


@pytest.fixture
def scalar_system():
    """Scalar system A=0.9, B=C=D=1 with noise std-devs 0.1."""
    return {
        'initial_state': np.array([[0.0]]),
        'process_noise': np.array([[0.1]]),
        'measurement_noise': np.array([[0.1]]),
        'A': np.array([[0.9]]),
        'B': np.array([[1.0]]),
        'C': np.array([[1.0]]),
        'D': np.array([[1.0]]),
    }


@pytest.fixture
def static_system():
    """Static, noiseless scalar system."""
    return {
        'initial_state': np.array([[0.0]]),
        'process_noise': np.array([[0.0]]),
        'measurement_noise': np.array([[0.0]]),
        'A': np.array([[1.0]]),
        'B': np.array([[0.0]]),
        'C': np.array([[1.0]]),
        'D': np.array([[0.0]]),
    }


def check_psd(matrix, tol=1e-10):
    """Check if matrix is positive semi-definite."""
    return np.all(np.linalg.eigvalsh(matrix) >= -tol)
