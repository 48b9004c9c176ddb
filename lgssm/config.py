"""
Default parameters for simulation and filtering.

Options left as None when constructing a model or calling a filter fall back
to the values in these dicts.
"""
import numpy as np

from .exceptions import ConfigError

SOLVERS = ('lu', 'cholesky', 'inv')

FILTER_PARAMS = {
    'solver': 'lu',
    'joseph': False,
    # Full-covariance noise specs are used as-is unless this is set, in which
    # case they are squared elementwise like the std-dev vector form.
    'square_full_covariance': False,
    # Q and R enter the update unmapped unless this is set, in which case the
    # filter uses B Q B' and D R D'.
    'map_noise_loading': False,
    'cond_limit': 1.0 / np.finfo(float).eps,
}

SIM_PARAMS = {
    'T': 100,
    'seed': 42,
}

"""
--------------------------------------------------------------------------------
FILTER_PARAMS
--------------------------------------------------------------------------------
- solver: How the Kalman gain K = P C' S^-1 is computed.
    * 'lu': np.linalg.solve (right division, default).
    * 'cholesky': scipy cho_factor/cho_solve, requires S positive definite.
    * 'inv': explicit inverse, least stable, kept for comparison.
- joseph: Use the Joseph form for the covariance update instead of
  P - K S K'.
- square_full_covariance: Square full-matrix noise specs before use as Q/R.
- map_noise_loading: Push Q/R through the loading matrices (B Q B', D R D')
  before use. Off by default, so noise dimensions must then match n_x and n_y.
- cond_limit: Largest condition number of S accepted before the update is
  rejected as singular.

--------------------------------------------------------------------------------
SIM_PARAMS
--------------------------------------------------------------------------------
- T: Default trajectory length for experiments.
- seed: Default seed for np.random.default_rng.
"""


def resolve_filter_params(**overrides):
    """
    Merge overrides onto FILTER_PARAMS.

    None values are ignored so callers can forward optional arguments
    untouched.

    Returns
    -------
    dict
        Resolved filter parameters

    Raises
    ------
    ConfigError
        On an unknown key or solver name
    """
    params = dict(FILTER_PARAMS)
    for key, value in overrides.items():
        if key not in FILTER_PARAMS:
            raise ConfigError(f"Unknown filter parameter '{key}'")
        if value is not None:
            params[key] = value

    if params['solver'] not in SOLVERS:
        raise ConfigError(
            f"Unknown solver '{params['solver']}', expected one of {SOLVERS}"
        )
    if params['cond_limit'] <= 0:
        raise ConfigError(f"cond_limit must be positive, got {params['cond_limit']}")
    return params
