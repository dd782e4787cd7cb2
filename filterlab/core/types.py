"""
Core data types for Filter Lab.

Colors, pixel buffers and convolution kernels. Value types are immutable;
a PixelBuffer is mutable only until it is frozen.
"""

from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple, Union

import numpy as np

from .errors import KernelError


CHANNEL_MIN = 0
CHANNEL_MAX = 255


def clamp(value, minimum, maximum):
    """Clamp value into [minimum, maximum]."""
    if value < minimum:
        return minimum
    if value > maximum:
        return maximum
    return value


@dataclass(frozen=True)
class Color:
    """8-bit RGB triple."""
    r: int
    g: int
    b: int

    def __post_init__(self):
        for channel_name in ("r", "g", "b"):
            value = getattr(self, channel_name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise ValueError(f"Channel {channel_name} must be an integer, got {value!r}")
            if not CHANNEL_MIN <= value <= CHANNEL_MAX:
                raise ValueError(
                    f"Channel {channel_name} must be in [{CHANNEL_MIN}, {CHANNEL_MAX}], got {value}"
                )
            # Normalise numpy scalars so equality and hashing behave
            object.__setattr__(self, channel_name, int(value))

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    @classmethod
    def from_tuple(cls, values: Sequence[int]) -> "Color":
        r, g, b = values
        return cls(int(r), int(g), int(b))


BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)


class PixelBuffer:
    """
    Addressable width x height grid of RGB pixels.

    Backed by a uint8 numpy array of shape (height, width, 3). Pixels are
    addressed as (x, y) with x the column and y the row.
    """

    def __init__(self, width: int, height: int):
        if width < 1 or height < 1:
            raise ValueError(f"PixelBuffer dimensions must be >= 1, got {width}x{height}")
        self._pixels = np.zeros((height, width, 3), dtype=np.uint8)
        self._frozen = False

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelBuffer":
        """Create a buffer from a (H, W, 3) array. The data is copied."""
        array = np.asarray(array)
        if array.ndim != 3 or array.shape[2] != 3:
            raise ValueError(f"Expected array of shape (H, W, 3), got {array.shape}")
        if array.dtype != np.uint8:
            if not np.issubdtype(array.dtype, np.integer):
                raise ValueError(f"Expected integer pixel data, got {array.dtype}")
            if array.size and (array.min() < CHANNEL_MIN or array.max() > CHANNEL_MAX):
                raise ValueError("Pixel values must be in [0, 255]")
        height, width = array.shape[:2]
        buffer = cls(width, height)
        buffer._pixels[...] = array.astype(np.uint8)
        return buffer

    @classmethod
    def filled(cls, width: int, height: int, color: Color) -> "PixelBuffer":
        buffer = cls(width, height)
        buffer.fill(color)
        return buffer

    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height)"""
        return (self.width, self.height)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _check_bounds(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} buffer")

    def get_pixel(self, x: int, y: int) -> Color:
        self._check_bounds(x, y)
        r, g, b = self._pixels[y, x]
        return Color(int(r), int(g), int(b))

    def get_rgb(self, x: int, y: int) -> Tuple[int, int, int]:
        """Channel tuple at (x, y) without building a Color."""
        self._check_bounds(x, y)
        r, g, b = self._pixels[y, x]
        return (int(r), int(g), int(b))

    def set_pixel(self, x: int, y: int, color: Color) -> None:
        if self._frozen:
            raise ValueError("PixelBuffer is frozen")
        self._check_bounds(x, y)
        self._pixels[y, x] = color.as_tuple()

    def fill(self, color: Color) -> None:
        if self._frozen:
            raise ValueError("PixelBuffer is frozen")
        self._pixels[...] = color.as_tuple()

    def freeze(self) -> "PixelBuffer":
        """Make the buffer read-only. Returns self."""
        self._frozen = True
        self._pixels.setflags(write=False)
        return self

    def copy(self) -> "PixelBuffer":
        """Mutable copy."""
        return PixelBuffer.from_array(self._pixels)

    def to_array(self) -> np.ndarray:
        return self._pixels.copy()

    def pixels(self) -> Iterator[Tuple[int, int, Color]]:
        """Iterate (x, y, color) in column-major order."""
        for x in range(self.width):
            for y in range(self.height):
                yield x, y, self.get_pixel(x, y)

    def __eq__(self, other) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return self.size == other.size and np.array_equal(self._pixels, other._pixels)

    def __repr__(self) -> str:
        state = ", frozen" if self._frozen else ""
        return f"PixelBuffer({self.width}x{self.height}{state})"


KernelLike = Union["Kernel", np.ndarray, Sequence[Sequence[float]]]


class Kernel:
    """
    Immutable 2D grid of float32 convolution weights.

    Weights are indexed [x, y]: the first index is the horizontal offset,
    the second the vertical one. Both dimensions must be odd so the kernel
    has a unique center cell.
    """

    def __init__(self, weights: KernelLike):
        if isinstance(weights, Kernel):
            array = weights._weights
        else:
            try:
                array = np.array(weights, dtype=np.float32)
            except (TypeError, ValueError) as e:
                raise KernelError(f"Kernel weights must be a 2D grid of numbers: {e}") from e

        if array.ndim != 2:
            raise KernelError(f"Kernel must be 2-dimensional, got {array.ndim} dimension(s)")
        if array.size == 0:
            raise KernelError("Kernel must not be empty")
        width, height = array.shape
        if width % 2 == 0 or height % 2 == 0:
            raise KernelError(f"Kernel dimensions must be odd, got {width}x{height}")
        if not np.all(np.isfinite(array)):
            raise KernelError("Kernel weights must be finite")

        self._weights = array.copy()
        self._weights.setflags(write=False)

    @property
    def width(self) -> int:
        return self._weights.shape[0]

    @property
    def height(self) -> int:
        return self._weights.shape[1]

    @property
    def radius_x(self) -> int:
        return self.width // 2

    @property
    def radius_y(self) -> int:
        return self.height // 2

    @property
    def weights(self) -> np.ndarray:
        """Read-only view of the weights."""
        return self._weights

    def weight(self, k: int, l: int) -> float:
        """Weight for horizontal offset k and vertical offset l."""
        if abs(k) > self.radius_x or abs(l) > self.radius_y:
            raise IndexError(f"Offset ({k}, {l}) outside kernel radius")
        return float(self._weights[k + self.radius_x, l + self.radius_y])

    def total(self) -> float:
        return float(self._weights.sum(dtype=np.float64))

    def to_list(self) -> List[List[float]]:
        return self._weights.tolist()

    def __copy__(self) -> "Kernel":
        return self

    def __deepcopy__(self, memo) -> "Kernel":
        return self

    def __eq__(self, other) -> bool:
        if not isinstance(other, Kernel):
            return NotImplemented
        return np.array_equal(self._weights, other._weights)

    def __repr__(self) -> str:
        return f"Kernel({self.width}x{self.height})"
