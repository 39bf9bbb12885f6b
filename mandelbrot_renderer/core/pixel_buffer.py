"""Raw RGB pixel buffer produced by a render."""

from dataclasses import dataclass

import numpy as np

BYTES_PER_PIXEL = 3


@dataclass(frozen=True)
class PixelBuffer:
    """Row-major RGB bytes, starting at the top-left pixel."""

    width: int
    height: int
    data: bytes

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Width and height must be positive")
        expected = self.width * self.height * BYTES_PER_PIXEL
        if len(self.data) != expected:
            raise ValueError(f"Expected {expected} bytes for {self.width}x{self.height} RGB, "
                             f"got {len(self.data)}")

    @property
    def size(self):
        return self.width, self.height

    def pixel(self, px: int, py: int):
        """RGB triple at column `px`, row `py`."""
        start = (py * self.width + px) * BYTES_PER_PIXEL
        return tuple(self.data[start:start + BYTES_PER_PIXEL])

    def to_array(self) -> np.ndarray:
        """Read-only (height, width, 3) uint8 view of the data."""
        return np.frombuffer(self.data, dtype=np.uint8).reshape(self.height, self.width, BYTES_PER_PIXEL)
