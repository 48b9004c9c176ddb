"""Noise specifications for the linear Gaussian SSM.

A noise spec is either a column of independent standard deviations or a full
covariance matrix. The representation is fixed when the noise object is built and
decides both how samples are drawn and how Q/R are reconstructed.
"""
from dataclasses import dataclass
from typing import Union

import numpy as np

from ..exceptions import InvalidShapeError


def _frozen(array):
    """Private read-only float copy of array."""
    out = np.array(array, dtype=float)
    out.setflags(write=False)
    return out


@dataclass(frozen=True, eq=False)
class DiagonalNoise:
    """Independent per-dimension noise.

    Parameters
    ----------
    std_devs : ndarray [K, 1]
        Standard deviation of each noise dimension

    Raises
    ------
    InvalidShapeError
        If std_devs is not a single column
    """
    std_devs: np.ndarray

    def __post_init__(self):
        object.__setattr__(self, 'std_devs', _frozen(self.std_devs))
        if self.std_devs.ndim != 2 or self.std_devs.shape[1] != 1:
            raise InvalidShapeError('std_devs', "a column vector [K, 1]", self.std_devs.shape)

    @property
    def dim(self) -> int:
        return self.std_devs.shape[0]

    @property
    def is_diagonal(self) -> bool:
        return True

    def sample(self, rng):
        """Draw one sample [K, 1] as std * standard_normal() per dimension."""
        return self.std_devs * rng.standard_normal(self.std_devs.shape)

    def covariance(self, square_full=False):
        """Covariance diag(std^2). square_full has no effect on this form."""
        return np.diag(self.std_devs[:, 0] ** 2)

    def as_array(self):
        return self.std_devs.copy()


@dataclass(frozen=True, eq=False)
class FullCovarianceNoise:
    """Correlated noise given by its covariance matrix.

    Parameters
    ----------
    covariance_matrix : ndarray [K, K]
        Noise covariance

    Raises
    ------
    InvalidShapeError
        If covariance_matrix is not square
    """
    covariance_matrix: np.ndarray

    def __post_init__(self):
        object.__setattr__(self, 'covariance_matrix', _frozen(self.covariance_matrix))
        shape = self.covariance_matrix.shape
        if len(shape) != 2 or shape[0] != shape[1]:
            raise InvalidShapeError('covariance_matrix', "a square matrix [K, K]", shape)

    @property
    def dim(self) -> int:
        return self.covariance_matrix.shape[0]

    @property
    def is_diagonal(self) -> bool:
        return False

    def sample(self, rng):
        """Draw one sample [K, 1] from N(0, covariance)."""
        draw = rng.multivariate_normal(np.zeros(self.dim), self.covariance_matrix)
        return draw.reshape(-1, 1)

    def covariance(self, square_full=False):
        """
        Covariance used by the Kalman update.

        The matrix is returned as supplied. With square_full=True it is
        squared elementwise instead, which is only meaningful if the caller
        passed a matrix of standard deviations.
        """
        if square_full:
            return self.covariance_matrix ** 2
        return self.covariance_matrix.copy()

    def as_array(self):
        return self.covariance_matrix.copy()


NoiseSpec = Union[DiagonalNoise, FullCovarianceNoise]


def noise_spec_from_array(spec, name='noise'):
    """
    Build a NoiseSpec from a raw array.

    A single column is read as standard deviations (this includes 1x1),
    any other square matrix as a covariance.

    Parameters
    ----------
    spec : array-like [K, 1] or [K, K], or a NoiseSpec
        Raw noise specification
    name : str
        Argument name used in error messages

    Returns
    -------
    NoiseSpec

    Raises
    ------
    InvalidShapeError
        If spec is neither a column vector nor a square matrix
    """
    if isinstance(spec, (DiagonalNoise, FullCovarianceNoise)):
        return spec

    arr = np.asarray(spec, dtype=float)
    if arr.ndim == 2 and arr.shape[1] == 1:
        return DiagonalNoise(arr)
    if arr.ndim == 2 and arr.shape[0] == arr.shape[1]:
        return FullCovarianceNoise(arr)
    raise InvalidShapeError(name, "a column vector [K, 1] or a square matrix [K, K]", arr.shape)
