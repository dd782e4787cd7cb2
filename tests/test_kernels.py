import numpy as np
import pytest

from filterlab.core import FilterParameterError
from filterlab.processing import box_kernel, sobel_kernel, sharpness_kernel, gaussian_kernel


def test_box_kernel_uniform():
    kernel = box_kernel()
    assert (kernel.width, kernel.height) == (3, 3)
    assert np.all(kernel.weights == np.float32(1.0 / 9))


def test_sobel_kernel_layout():
    assert sobel_kernel().to_list() == [
        [-1.0, 0.0, 1.0],
        [-2.0, 0.0, 2.0],
        [-1.0, 0.0, 1.0],
    ]


def test_sharpness_kernel_layout():
    kernel = sharpness_kernel()
    assert kernel.to_list() == [
        [0.0, -1.0, 0.0],
        [-1.0, 5.0, -1.0],
        [0.0, -1.0, 0.0],
    ]
    assert kernel.total() == pytest.approx(1.0)


@pytest.mark.parametrize("radius", [0, 1, 2, 3, 5])
@pytest.mark.parametrize("sigma", [1e-170, 0.3, 1.0, 2.0, 7.5, 1e200])
def test_gaussian_kernel_is_normalised(radius, sigma):
    kernel = gaussian_kernel(radius, sigma)
    assert kernel.width == kernel.height == 2 * radius + 1
    assert abs(kernel.total() - 1.0) < 1e-5


def test_gaussian_kernel_shape():
    kernel = gaussian_kernel(3, 2)
    weights = kernel.weights
    # peak at center, symmetric in both axes
    assert weights.argmax() == weights.size // 2
    assert np.allclose(weights, weights.T)
    assert np.allclose(weights, weights[::-1, ::-1])
    expected_ratio = np.exp(-1 / 4)
    assert kernel.weight(1, 0) / kernel.weight(0, 0) == pytest.approx(expected_ratio, rel=1e-5)


def test_gaussian_tiny_sigma_collapses_to_center():
    kernel = gaussian_kernel(1, 1e-170)
    assert kernel.to_list() == [
        [0.0, 0.0, 0.0],
        [0.0, 1.0, 0.0],
        [0.0, 0.0, 0.0],
    ]


def test_gaussian_radius_zero_is_identity():
    assert gaussian_kernel(0, 1.0).to_list() == [[1.0]]


@pytest.mark.parametrize("radius, sigma", [(-1, 1.0), (1, 0.0), (1, -2.0), (1.5, 1.0)])
def test_gaussian_kernel_rejects_bad_parameters(radius, sigma):
    with pytest.raises(FilterParameterError):
        gaussian_kernel(radius, sigma)
