""" Nearest-neighbor resampler used to build a fixed-size preview from sources of any size. """

from typing import Dict, Optional

import numpy as np
from numpy.typing import NDArray

from backend.texture_classes import PixelBuffer
from core.compositor import combine_pixels, require_sources, run_row_bands, validate_brightness


def nearest_indices(source_length: int, target_length: int) -> NDArray[np.intp]:
# Maps every destination coordinate to floor(coordinate * source_length / target_length).
# Integer arithmetic keeps the floor exact; the result is always < source_length.
    return (np.arange(target_length, dtype=np.int64) * source_length) // target_length


def resample_and_compose(albedo: Optional[PixelBuffer], normal: Optional[PixelBuffer], metallic: Optional[PixelBuffer],
                         roughness: Optional[PixelBuffer], target_width: int, target_height: int,
                         brightness: float = 1.0, ao: Optional[PixelBuffer] = None,
                         workers: Optional[int] = None) -> PixelBuffer:
# Packs four buffers of independent sizes into a target_width x target_height mask map.
# Each source is mapped to the destination grid on its own, never relative to the other sources,
# then the same brightness and channel extraction as compose() is applied.

    sources = require_sources(albedo, normal, metallic, roughness)
    brightness = validate_brightness(brightness)
    _validate_target(target_width, target_height)

    column_indices: Dict[str, NDArray[np.intp]] = {slot: nearest_indices(buffer.width, target_width) for slot, buffer in sources.items()}
    row_indices: Dict[str, NDArray[np.intp]] = {slot: nearest_indices(buffer.height, target_height) for slot, buffer in sources.items()}
    output = PixelBuffer.empty(target_width, target_height)

    def resample_rows(row_start: int, row_end: int) -> None:
        row_sources = {
            slot: buffer.pixels[row_indices[slot][row_start:row_end, None], column_indices[slot][None, :]]
            for slot, buffer in sources.items()
        }
        combine_pixels(row_sources, brightness, output.pixels[row_start:row_end])

    run_row_bands(target_height, resample_rows, workers)
    return output


def _validate_target(target_width: int, target_height: int) -> None:
    if int(target_width) < 1 or int(target_height) < 1:
        raise ValueError(f"Target size must be at least 1x1, got {target_width}x{target_height}")
