from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

import numpy as np
from numpy.typing import NDArray


class ChannelSelector(Enum):
    R = 0
    G = 1
    B = 2
    A = 3


@dataclass(frozen=True)
class ChannelSource:
    slot: str # Texture slot the channel is read from, e.g., "albedo".
    channel: ChannelSelector # Channel extracted from that slot.


MASK_MAP_CHANNELS: Tuple[ChannelSource, ...] = (
    ChannelSource("albedo", ChannelSelector.R),
    ChannelSource("normal", ChannelSelector.G),
    ChannelSource("metallic", ChannelSelector.B),
    ChannelSource("roughness", ChannelSelector.R),
)
# Destination R, G, B, A in order. AO is accepted as an input but contributes no channel.


@dataclass(eq=False)
class PixelBuffer:
    pixels: NDArray[np.float32] # Row-major RGBA float pixels as a (height, width, 4) float32 array; values are not clamped.

    def __post_init__(self) -> None:
        pixels = np.asarray(self.pixels, dtype=np.float32)
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise ValueError(f"PixelBuffer expects a (height, width, 4) array, got shape {pixels.shape}")
        if pixels.shape[0] < 1 or pixels.shape[1] < 1:
            raise ValueError(f"PixelBuffer dimensions must be positive, got {pixels.shape[1]}x{pixels.shape[0]}")
        self.pixels = pixels

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def size(self) -> Tuple[int, int]:
        # Returns the size as (width, height), same order as Pillow.
        return self.width, self.height

    def pixel(self, x: int, y: int) -> Tuple[float, float, float, float]:
        r, g, b, a = self.pixels[y, x]
        return float(r), float(g), float(b), float(a)

    @classmethod
    def empty(cls, width: int, height: int) -> "PixelBuffer":
        return cls(np.zeros((height, width, 4), dtype=np.float32))

    @classmethod
    def filled(cls, width: int, height: int, rgba: Tuple[float, float, float, float]) -> "PixelBuffer":
    # Creates a buffer where every pixel has the same RGBA value.
        pixels = np.empty((height, width, 4), dtype=np.float32)
        pixels[...] = np.asarray(rgba, dtype=np.float32)
        return cls(pixels)

    @classmethod
    def from_pixels(cls, width: int, height: int, rgba_pixels) -> "PixelBuffer":
    # Builds a buffer from a flat row-major sequence of (r, g, b, a) tuples.
        data = np.asarray(list(rgba_pixels), dtype=np.float32)
        if data.shape != (width * height, 4):
            raise ValueError(f"Expected {width * height} RGBA pixels for {width}x{height}, got array of shape {data.shape}")
        return cls(data.reshape(height, width, 4))


@dataclass
class TextureSources:
    albedo: Optional[str] = None # Path to the albedo map; the red channel is used.
    normal: Optional[str] = None # Path to the normal map; the green channel is used.
    metallic: Optional[str] = None # Path to the metallic map; the blue channel is used.
    roughness: Optional[str] = None # Path to the roughness map; the red channel goes to alpha.
    ao: Optional[str] = None # Path to the ambient occlusion map; loaded but not packed.

    def as_dict(self) -> Dict[str, Optional[str]]:
        return {"albedo": self.albedo, "normal": self.normal, "metallic": self.metallic, "roughness": self.roughness, "ao": self.ao}


@dataclass
class MaskMapResult:
    mask_map_path: str # Absolute path of the saved full resolution mask map.
    resolution: Tuple[int, int] # Mask map resolution (width, height).
    preview_path: Optional[str] = None # Absolute path of the saved preview, if generated.
    source_resolutions: Dict[str, Tuple[int, int]] = field(default_factory=dict) # Resolution of every loaded slot.
