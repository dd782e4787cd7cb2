import copy

import numpy as np
import pytest

from filterlab.core import Color, PixelBuffer, Kernel, KernelError, clamp


class TestClamp:
    def test_within_range(self):
        assert clamp(10, 0, 255) == 10

    def test_below_and_above(self):
        assert clamp(-5, 0, 255) == 0
        assert clamp(300, 0, 255) == 255


class TestColor:
    def test_rejects_out_of_range(self):
        with pytest.raises(ValueError):
            Color(256, 0, 0)
        with pytest.raises(ValueError):
            Color(0, -1, 0)

    def test_rejects_non_integer(self):
        with pytest.raises(ValueError):
            Color(1.5, 0, 0)
        with pytest.raises(ValueError):
            Color(True, 0, 0)

    def test_is_immutable(self):
        color = Color(1, 2, 3)
        with pytest.raises(AttributeError):
            color.r = 5

    def test_numpy_channels_normalised(self):
        color = Color(np.uint8(7), np.int64(8), 9)
        assert color == Color(7, 8, 9)
        assert type(color.r) is int

    def test_tuple_round_trip(self):
        assert Color.from_tuple((4, 5, 6)).as_tuple() == (4, 5, 6)


class TestPixelBuffer:
    def test_new_buffer_is_black(self):
        buffer = PixelBuffer(4, 2)
        assert buffer.size == (4, 2)
        assert all(color == Color(0, 0, 0) for _, _, color in buffer.pixels())

    @pytest.mark.parametrize("width, height", [(0, 1), (1, 0), (-2, 3)])
    def test_rejects_empty_dimensions(self, width, height):
        with pytest.raises(ValueError):
            PixelBuffer(width, height)

    def test_get_set_addresses_x_as_column(self):
        buffer = PixelBuffer(3, 2)
        buffer.set_pixel(2, 1, Color(10, 20, 30))
        assert buffer.get_pixel(2, 1) == Color(10, 20, 30)
        assert buffer.to_array()[1, 2].tolist() == [10, 20, 30]

    def test_out_of_bounds_raises(self):
        buffer = PixelBuffer(2, 2)
        with pytest.raises(IndexError):
            buffer.get_pixel(2, 0)
        with pytest.raises(IndexError):
            buffer.set_pixel(0, -1, Color(0, 0, 0))

    def test_from_array_copies(self):
        array = np.zeros((2, 2, 3), dtype=np.uint8)
        buffer = PixelBuffer.from_array(array)
        array[0, 0] = 255
        assert buffer.get_pixel(0, 0) == Color(0, 0, 0)

    def test_from_array_validates(self):
        with pytest.raises(ValueError):
            PixelBuffer.from_array(np.zeros((2, 2), dtype=np.uint8))
        with pytest.raises(ValueError):
            PixelBuffer.from_array(np.full((1, 1, 3), 300, dtype=np.int32))
        with pytest.raises(ValueError):
            PixelBuffer.from_array(np.zeros((1, 1, 3), dtype=np.float32))

    def test_freeze_blocks_writes(self):
        buffer = PixelBuffer(1, 1).freeze()
        assert buffer.frozen
        with pytest.raises(ValueError):
            buffer.set_pixel(0, 0, Color(1, 1, 1))
        with pytest.raises(ValueError):
            buffer.fill(Color(1, 1, 1))

    def test_copy_is_mutable_and_equal(self):
        buffer = PixelBuffer.filled(2, 2, Color(5, 5, 5)).freeze()
        clone = buffer.copy()
        assert clone == buffer
        assert not clone.frozen
        clone.set_pixel(0, 0, Color(0, 0, 0))
        assert clone != buffer


class TestKernel:
    def test_radius_and_indexing(self):
        kernel = Kernel([[1, 2, 3], [4, 5, 6], [7, 8, 9]])
        assert (kernel.width, kernel.height) == (3, 3)
        assert (kernel.radius_x, kernel.radius_y) == (1, 1)
        # first index is the horizontal offset
        assert kernel.weight(-1, 1) == 3.0
        assert kernel.weight(1, -1) == 7.0

    def test_rectangular(self):
        kernel = Kernel([[0], [0], [1]])
        assert (kernel.width, kernel.height) == (3, 1)
        assert (kernel.radius_x, kernel.radius_y) == (1, 0)

    def test_weights_are_float32_and_read_only(self):
        kernel = Kernel([[1]])
        assert kernel.weights.dtype == np.float32
        with pytest.raises(ValueError):
            kernel.weights[0, 0] = 2

    def test_source_array_is_copied(self):
        source = np.ones((3, 3), dtype=np.float32)
        kernel = Kernel(source)
        source[1, 1] = 9
        assert kernel.weight(0, 0) == 1.0

    def test_deepcopy_shares_immutable_kernel(self):
        kernel = Kernel([[1]])
        assert copy.deepcopy(kernel) is kernel

    @pytest.mark.parametrize("weights", [
        [[1, 2], [3, 4]],
        [[1, 1]],
        [],
        [[]],
        [1, 2, 3],
        [[[1]]],
        [[1], [1, 2]],
        [[float("nan")]],
        [["a"]],
    ])
    def test_malformed_kernels_rejected(self, weights):
        with pytest.raises(KernelError):
            Kernel(weights)

    def test_kernel_error_is_value_error(self):
        with pytest.raises(ValueError):
            Kernel([[1, 2]])
