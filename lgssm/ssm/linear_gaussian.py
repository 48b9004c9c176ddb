"""Linear Gaussian State Space Model (LGSSM).

    x_{t+1} = A x_t + B e_t,   e_t ~ N(0, Q)
    y_t     = C x_t + D n_t,   n_t ~ N(0, R)

All vectors are column vectors of shape [n, 1].
"""
import logging
from dataclasses import dataclass

import numpy as np

from ..config import resolve_filter_params
from ..exceptions import InvalidShapeError
from ..filters.kf import kalman_step
from .noise import DiagonalNoise, NoiseSpec, _frozen, noise_spec_from_array

logger = logging.getLogger(__name__)


def _as_matrix(name, value):
    arr = np.asarray(value, dtype=float)
    if arr.ndim != 2:
        raise InvalidShapeError(name, "a 2-D matrix", arr.shape)
    return arr


@dataclass(frozen=True, eq=False)
class SSMConfig:
    """
    Immutable configuration of a linear Gaussian SSM.

    Parameters
    ----------
    initial_state : ndarray [n_x, 1]
        Initial state
    process_noise : NoiseSpec
        Process noise, dimension n_e
    measurement_noise : NoiseSpec
        Measurement noise, dimension n_n
    A : ndarray [n_x, n_x]
        State transition matrix
    B : ndarray [n_x, n_e]
        Process noise coefficient
    C : ndarray [n_y, n_x]
        Observation matrix
    D : ndarray [n_y, n_n]
        Observation noise coefficient
    """
    initial_state: np.ndarray
    process_noise: NoiseSpec
    measurement_noise: NoiseSpec
    A: np.ndarray
    B: np.ndarray
    C: np.ndarray
    D: np.ndarray

    @classmethod
    def from_arrays(cls, initial_state, process_noise, measurement_noise, A, B, C, D):
        """
        Validate raw inputs and build a config.

        Raises
        ------
        InvalidShapeError
            On the first shape violation found
        """
        x0 = np.asarray(initial_state, dtype=float)
        if x0.ndim != 2 or x0.shape[1] != 1:
            raise InvalidShapeError('initial_state', "a column vector [n_x, 1]", x0.shape)

        process_noise = noise_spec_from_array(process_noise, 'process_noise')
        measurement_noise = noise_spec_from_array(measurement_noise, 'measurement_noise')

        n_x = x0.shape[0]
        n_e = process_noise.dim
        n_n = measurement_noise.dim

        A = _as_matrix('A', A)
        if A.shape != (n_x, n_x):
            raise InvalidShapeError('A', f"a {n_x} x {n_x} matrix", A.shape)

        B = _as_matrix('B', B)
        if B.shape != (n_x, n_e):
            raise InvalidShapeError('B', f"a {n_x} x {n_e} matrix", B.shape)

        C = _as_matrix('C', C)
        if C.shape[1] != n_x:
            raise InvalidShapeError('C', f"an N x {n_x} matrix", C.shape)

        n_y = C.shape[0]
        D = _as_matrix('D', D)
        if D.shape != (n_y, n_n):
            raise InvalidShapeError('D', f"a {n_y} x {n_n} matrix", D.shape)

        return cls(
            initial_state=_frozen(x0),
            process_noise=process_noise,
            measurement_noise=measurement_noise,
            A=_frozen(A), B=_frozen(B), C=_frozen(C), D=_frozen(D),
        )

    @property
    def n_x(self) -> int:
        return self.A.shape[0]

    @property
    def n_y(self) -> int:
        return self.C.shape[0]

    @property
    def n_e(self) -> int:
        return self.B.shape[1]

    @property
    def n_n(self) -> int:
        return self.D.shape[1]


class LinearGaussianSSM:
    """
    Linear Gaussian SSM with a simulated trajectory and a Kalman update.

    The configuration is immutable; the only mutable part is the current
    state of the simulated trajectory, advanced by forward().

    Parameters
    ----------
    initial_state : ndarray [n_x, 1]
        Initial state
    process_noise : ndarray [n_e, 1] or [n_e, n_e]
        Std-devs of independent process noise, or its covariance matrix
    measurement_noise : ndarray [n_n, 1] or [n_n, n_n]
        Std-devs of independent measurement noise, or its covariance matrix
    A, B, C, D : ndarray
        System matrices, see SSMConfig
    rng : numpy.random.Generator, optional
        Random source for noise draws (default: fresh default_rng())
    square_full_covariance : bool, optional
        Square full-matrix noise specs elementwise before use in estimate()
    solver : str, optional
        Kalman gain solver: 'lu', 'cholesky' or 'inv'
    joseph : bool, optional
        Use the Joseph form of the covariance update
    cond_limit : float, optional
        Largest accepted condition number of the innovation covariance
    map_noise_loading : bool, optional
        Use B Q B' and D R D' as the noise covariances in estimate()

    Raises
    ------
    InvalidShapeError
        If any input has an inconsistent shape
    """

    def __init__(self, initial_state, process_noise, measurement_noise, A, B, C, D,
                 rng=None, square_full_covariance=None, solver=None, joseph=None,
                 cond_limit=None, map_noise_loading=None):
        config = SSMConfig.from_arrays(initial_state, process_noise, measurement_noise, A, B, C, D)
        self._init(config, rng, resolve_filter_params(
            square_full_covariance=square_full_covariance,
            solver=solver, joseph=joseph, cond_limit=cond_limit,
            map_noise_loading=map_noise_loading,
        ))

    @classmethod
    def from_config(cls, config, rng=None, **filter_params):
        """Build a model around an existing SSMConfig without re-validating it."""
        model = cls.__new__(cls)
        model._init(config, rng, resolve_filter_params(**filter_params))
        return model

    def _init(self, config, rng, filter_params):
        self._config = config
        self._filter_params = filter_params
        self._rng = rng if rng is not None else np.random.default_rng()
        self._xt = config.initial_state.copy()
        logger.debug(
            "LGSSM n_x=%d n_y=%d n_e=%d n_n=%d process=%s measurement=%s",
            config.n_x, config.n_y, config.n_e, config.n_n,
            type(config.process_noise).__name__, type(config.measurement_noise).__name__,
        )

    @property
    def config(self) -> SSMConfig:
        return self._config

    @property
    def filter_params(self) -> dict:
        return dict(self._filter_params)

    @property
    def rng(self):
        return self._rng

    @property
    def current_state(self):
        """Current state of the simulated trajectory [n_x, 1] (a copy)."""
        return self._xt.copy()

    @property
    def process_noise_is_diagonal_form(self) -> bool:
        return self._config.process_noise.is_diagonal

    @property
    def measurement_noise_is_diagonal_form(self) -> bool:
        return self._config.measurement_noise.is_diagonal

    def noise_covariances(self, square_full_covariance=None, map_noise_loading=None):
        """
        Process and measurement noise covariances used by estimate().

        By default these are the covariances of e and n themselves. With
        map_noise_loading they are pushed through the loading matrices.

        Parameters
        ----------
        square_full_covariance : bool, optional
            Square full-matrix noise specs elementwise (default: model option)
        map_noise_loading : bool, optional
            Return B Q B' and D R D' (default: model option)

        Returns
        -------
        Q : ndarray [n_x, n_x]
        R : ndarray [n_y, n_y]

        Raises
        ------
        InvalidShapeError
            If the unmapped covariances do not match the state or
            measurement dimension
        """
        if square_full_covariance is None:
            square_full_covariance = self._filter_params['square_full_covariance']
        if map_noise_loading is None:
            map_noise_loading = self._filter_params['map_noise_loading']
        cfg = self._config
        Q = cfg.process_noise.covariance(square_full_covariance)
        R = cfg.measurement_noise.covariance(square_full_covariance)
        if map_noise_loading:
            return cfg.B @ Q @ cfg.B.T, cfg.D @ R @ cfg.D.T

        if Q.shape != (cfg.n_x, cfg.n_x):
            raise InvalidShapeError(
                'process_noise', f"{cfg.n_x}-dimensional without map_noise_loading", Q.shape)
        if R.shape != (cfg.n_y, cfg.n_y):
            raise InvalidShapeError(
                'measurement_noise', f"{cfg.n_y}-dimensional without map_noise_loading", R.shape)
        return Q, R

    def observe(self):
        """
        Noisy measurement of the current state.

        Returns
        -------
        ndarray [n_y, 1]
            y = C x_t + D n
        """
        cfg = self._config
        noise = cfg.measurement_noise.sample(self._rng)
        return cfg.C @ self._xt + cfg.D @ noise

    def forward(self):
        """
        Advance the trajectory by one step.

        Returns
        -------
        ndarray [n_x, 1]
            The new state x_{t+1} = A x_t + B e
        """
        cfg = self._config
        noise = cfg.process_noise.sample(self._rng)
        self._xt = cfg.A @ self._xt + cfg.B @ noise
        return self._xt.copy()

    def estimate(self, prior_mean, prior_covariance, next_measurement):
        """
        Kalman update from the estimate of the current step to the next one.

        Does not touch the simulated state or the random source.

        Parameters
        ----------
        prior_mean : ndarray [n_x, 1]
            Mean for the current step
        prior_covariance : ndarray [n_x, n_x]
            Covariance for the current step
        next_measurement : ndarray [n_y, 1]
            Measurement of the next step

        Returns
        -------
        posterior_mean : ndarray [n_x, 1]
        posterior_covariance : ndarray [n_x, n_x]

        Raises
        ------
        SingularInnovationCovarianceError
            If the innovation covariance cannot be solved
        InvalidShapeError
            If the noise dimensions do not fit the unmapped update
        """
        m = np.asarray(prior_mean, dtype=float).reshape(-1, 1)
        P = np.asarray(prior_covariance, dtype=float).reshape(self._config.n_x, self._config.n_x)
        y = np.asarray(next_measurement, dtype=float).reshape(-1, 1)

        Q, R = self.noise_covariances()
        params = self._filter_params
        return kalman_step(
            self._config.A, self._config.C, Q, R, m, P, y,
            solver=params['solver'], joseph=params['joseph'],
            cond_limit=params['cond_limit'],
        )

    def copy(self, rng=None):
        """
        New model with the same configuration and the trajectory reset
        to the initial state.

        Parameters
        ----------
        rng : numpy.random.Generator, optional
            Random source of the copy. Defaults to a child spawned from this
            model's generator, which leaves this model's stream untouched.
        """
        if rng is None:
            rng = self._rng.spawn(1)[0]
        logger.debug("Copying LGSSM, trajectory reset to initial state")
        return type(self).from_config(self._config, rng=rng, **self._filter_params)

    def simulate(self, T):
        """
        Simulate T steps from the current state.

        Each step calls forward() and then observe(), so ys[t] measures xs[t].

        Returns
        -------
        xs : ndarray [T, n_x]
            Latent states
        ys : ndarray [T, n_y]
            Observations
        """
        xs = np.zeros((T, self._config.n_x))
        ys = np.zeros((T, self._config.n_y))

        for t in range(T):
            xs[t] = self.forward()[:, 0]
            ys[t] = self.observe()[:, 0]

        return xs, ys


def linear_gaussian_ssm(A, B, C, D, T, rng, x0=None, process_noise=None, measurement_noise=None):
    """
    Simulate Linear Gaussian SSM.

    Parameters
    ----------
    A : ndarray [n_x, n_x]
        State transition matrix
    B : ndarray [n_x, n_v]
        Process noise coefficient
    C : ndarray [n_y, n_x]
        Observation matrix
    D : ndarray [n_y, n_w]
        Observation noise coefficient
    T : int
        Number of time steps
    rng : numpy.random.Generator
        Random number generator
    x0 : ndarray [n_x, 1], optional
        Initial state (default: zeros)
    process_noise, measurement_noise : ndarray, optional
        Noise specs (default: unit std-devs)

    Returns
    -------
    xs : ndarray [T, n_x]
        Latent states
    ys : ndarray [T, n_y]
        Observations
    """
    A, B, D = np.asarray(A), np.asarray(B), np.asarray(D)
    n_x = A.shape[0]
    n_v, n_w = B.shape[1], D.shape[1]

    if x0 is None:
        x0 = np.zeros((n_x, 1))
    if process_noise is None:
        process_noise = DiagonalNoise(np.ones((n_v, 1)))
    if measurement_noise is None:
        measurement_noise = DiagonalNoise(np.ones((n_w, 1)))

    model = LinearGaussianSSM(x0, process_noise, measurement_noise, A, B, C, D, rng=rng)
    return model.simulate(T)

