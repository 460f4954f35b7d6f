from __future__ import annotations

from dataclasses import dataclass
from typing import Union

import numpy as np

from .errors import DimensionError

CHANNELS = 3

BufferLike = Union[bytes, bytearray, memoryview]


@dataclass(frozen=True, slots=True)
class PixelBuffer:
    """
    Read-only view over interleaved 3-channel 8-bit pixels.

    Rows are stored top to bottom, each ``stride`` bytes long. Bytes past
    ``width * 3`` in a row are padding and never read.
    """

    width: int
    height: int
    stride: int
    data: BufferLike

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise DimensionError(f"pixel buffer must be non-empty, got {self.width}x{self.height}")
        if self.stride < self.width * CHANNELS:
            raise DimensionError(
                f"stride {self.stride} is smaller than a row of {self.width} pixels ({self.width * CHANNELS} bytes)"
            )
        nbytes = memoryview(self.data).nbytes
        if nbytes < self.stride * self.height:
            raise DimensionError(
                f"buffer holds {nbytes} bytes, expected at least {self.stride * self.height}"
            )

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelBuffer":
        """
        Wrap a ``(H, W, 3)`` uint8 array. The array is copied into a
        contiguous block first if needed.
        """
        if array.ndim != 3 or array.shape[2] != CHANNELS:
            raise DimensionError(f"expected an (H, W, {CHANNELS}) array, got shape {array.shape}")
        if array.dtype != np.uint8:
            raise ValueError(f"expected a uint8 array, got {array.dtype}")
        contiguous = np.ascontiguousarray(array)
        height, width = contiguous.shape[:2]
        return cls(width=width, height=height, stride=width * CHANNELS, data=contiguous.tobytes())

    def as_array(self) -> np.ndarray:
        """
        Return a ``(H, W, 3)`` uint8 view of the pixels with row padding removed.
        """
        raw = np.frombuffer(memoryview(self.data).cast("B"), dtype=np.uint8, count=self.stride * self.height)
        rows = raw.reshape(self.height, self.stride)
        return rows[:, : self.width * CHANNELS].reshape(self.height, self.width, CHANNELS)


__all__ = ["CHANNELS", "PixelBuffer"]
