"""Unit tests for noise specifications."""

import numpy as np
import pytest

from lgssm import InvalidShapeError, LinearGaussianSSM
from lgssm.ssm import DiagonalNoise, FullCovarianceNoise, noise_spec_from_array


class TestNoiseSpecFromArray:
    """Representation is derived from the array shape."""

    def test_column_is_diagonal(self):
        spec = noise_spec_from_array(np.array([[0.1], [0.2], [0.3]]))

        assert isinstance(spec, DiagonalNoise)
        assert spec.is_diagonal
        assert spec.dim == 3

    def test_square_is_full_covariance(self):
        spec = noise_spec_from_array(np.eye(3))

        assert isinstance(spec, FullCovarianceNoise)
        assert not spec.is_diagonal
        assert spec.dim == 3

    def test_one_by_one_is_diagonal(self):
        """A 1x1 spec is a single column and so reads as a std-dev."""
        assert isinstance(noise_spec_from_array(np.array([[0.5]])), DiagonalNoise)

    def test_spec_passes_through(self):
        spec = FullCovarianceNoise(np.eye(2))

        assert noise_spec_from_array(spec) is spec

    @pytest.mark.parametrize("shape", [(2, 3), (3,), (2, 2, 2)])
    def test_invalid_shape(self, shape):
        with pytest.raises(InvalidShapeError) as excinfo:
            noise_spec_from_array(np.zeros(shape), 'process_noise')

        assert excinfo.value.name == 'process_noise'


class TestCovariance:
    """Q/R reconstruction from a noise spec."""

    def test_diagonal_squares_std_devs(self):
        spec = DiagonalNoise(np.array([[0.1], [0.2]]))

        np.testing.assert_allclose(spec.covariance(), np.diag([0.01, 0.04]))
        np.testing.assert_allclose(spec.covariance(square_full=True), np.diag([0.01, 0.04]))

    def test_full_used_as_is_by_default(self):
        """A full matrix is already a covariance and is not squared."""
        cov = np.array([[0.2, 0.1], [0.1, 0.3]])
        spec = FullCovarianceNoise(cov)

        np.testing.assert_array_equal(spec.covariance(), cov)

    def test_full_squared_when_requested(self):
        """square_full treats the matrix like the std-dev vector form."""
        cov = np.array([[0.2, 0.1], [0.1, 0.3]])
        spec = FullCovarianceNoise(cov)

        np.testing.assert_allclose(spec.covariance(square_full=True), cov ** 2)

    def test_model_toggle(self):
        """The model option should switch the Q/R seen by estimate()."""
        system = dict(
            initial_state=np.zeros((2, 1)),
            process_noise=np.diag([0.2, 0.3]),
            measurement_noise=np.array([[0.5]]),
            A=np.eye(2), B=np.eye(2), C=np.array([[1.0, 0.0]]), D=np.array([[1.0]]),
        )
        as_is = LinearGaussianSSM(**system)
        squared = LinearGaussianSSM(**system, square_full_covariance=True)

        Q_as_is, R_as_is = as_is.noise_covariances()
        Q_squared, R_squared = squared.noise_covariances()

        np.testing.assert_allclose(Q_as_is, np.diag([0.2, 0.3]))
        np.testing.assert_allclose(Q_squared, np.diag([0.04, 0.09]))
        np.testing.assert_allclose(R_as_is, [[0.25]])
        np.testing.assert_allclose(R_squared, [[0.25]])

    def test_unmapped_by_default(self):
        """Q and R are the noise covariances themselves unless mapping is on."""
        system = dict(
            initial_state=np.zeros((1, 1)),
            process_noise=np.array([[0.1]]),
            measurement_noise=np.array([[0.1]]),
            A=np.array([[0.9]]), B=np.array([[2.0]]),
            C=np.array([[1.0]]), D=np.array([[3.0]]),
        )
        model = LinearGaussianSSM(**system)

        Q, R = model.noise_covariances()

        np.testing.assert_allclose(Q, [[0.01]])
        np.testing.assert_allclose(R, [[0.01]])

        Q_mapped, R_mapped = model.noise_covariances(map_noise_loading=True)
        np.testing.assert_allclose(Q_mapped, [[0.04]])
        np.testing.assert_allclose(R_mapped, [[0.09]])

    def test_loading_matrices(self):
        """With map_noise_loading, Q and R are mapped through B and D."""
        system = dict(
            initial_state=np.zeros((2, 1)),
            process_noise=np.array([[2.0]]),
            measurement_noise=np.array([[3.0]]),
            A=np.eye(2), B=np.array([[1.0], [0.5]]),
            C=np.array([[1.0, 0.0]]), D=np.array([[0.0]]),
        )
        mapped = LinearGaussianSSM(**system, map_noise_loading=True)

        Q, R = mapped.noise_covariances()

        np.testing.assert_allclose(Q, 4.0 * np.array([[1.0, 0.5], [0.5, 0.25]]))
        np.testing.assert_allclose(R, [[0.0]])

        unmapped = LinearGaussianSSM(**system)
        with pytest.raises(InvalidShapeError) as excinfo:
            unmapped.noise_covariances()

        assert excinfo.value.name == 'process_noise'
        assert excinfo.value.actual == (1, 1)


class TestVariantShapes:
    """Noise objects check their own shape when built directly."""

    @pytest.mark.parametrize("std_devs", [np.ones(2), np.ones((2, 2)), np.ones((2, 1, 1))])
    def test_diagonal_needs_column(self, std_devs):
        with pytest.raises(InvalidShapeError) as excinfo:
            DiagonalNoise(std_devs)

        assert excinfo.value.name == 'std_devs'
        assert excinfo.value.actual == std_devs.shape

    @pytest.mark.parametrize("covariance", [np.ones((2, 3)), np.ones(3), np.ones((2, 2, 2))])
    def test_full_needs_square(self, covariance):
        with pytest.raises(InvalidShapeError) as excinfo:
            FullCovarianceNoise(covariance)

        assert excinfo.value.name == 'covariance_matrix'
        assert excinfo.value.actual == covariance.shape

    def test_model_accepts_spec_objects(self, system_2d, rng):
        """Ready-built specs go straight into the model and keep the state a column."""
        system = {**system_2d, 'process_noise': DiagonalNoise(np.array([[0.1], [0.2]]))}
        model = LinearGaussianSSM(**system, rng=rng)

        assert model.forward().shape == (2, 1)
        assert model.config.process_noise is system['process_noise']


class TestSampling:
    """Sample shapes."""

    def test_diagonal_sample_shape(self, rng):
        assert DiagonalNoise(np.ones((3, 1))).sample(rng).shape == (3, 1)

    def test_full_sample_shape(self, rng):
        assert FullCovarianceNoise(np.eye(3)).sample(rng).shape == (3, 1)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
