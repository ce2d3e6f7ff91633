""" Channel compositor: packs albedo R, normal G, metallic B and roughness R into one RGBA buffer. """

import math
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from backend.texture_classes import MASK_MAP_CHANNELS, PixelBuffer
from core.errors import DimensionMismatchError, NullInputError
from settings import WORKERS


RowJob = Callable[[int, int], None] # Fills output rows [row_start, row_end).
FLOAT32_MAX: float = float(np.finfo(np.float32).max)



#                                           === Shared combine step ===

def combine_pixels(sources: Dict[str, NDArray[np.float32]], brightness: float, output: NDArray[np.float32]) -> None:
# Writes the packed channels of one block of pixels into output.
# Every source block must have the same (rows, columns, 4) shape as output.
# The brightness scales the whole sampled pixel first, then a single channel is extracted from it.

    scale = np.float32(brightness)
    for destination_channel, channel_source in enumerate(MASK_MAP_CHANNELS):
        scaled_pixels: NDArray[np.float32] = sources[channel_source.slot] * scale
        output[..., destination_channel] = scaled_pixels[..., channel_source.channel.value]


def validate_brightness(brightness: float) -> float:
# Pixels are multiplied in float32, so the factor must also be finite after the float32 cast.
    brightness = float(brightness)
    if not math.isfinite(brightness):
        raise ValueError(f"Brightness must be a finite number, got {brightness}")
    if abs(brightness) > FLOAT32_MAX:
        raise ValueError(f"Brightness {brightness} is outside the float32 range (±{FLOAT32_MAX:.6g})")
    return brightness


def require_sources(albedo: Optional[PixelBuffer], normal: Optional[PixelBuffer], metallic: Optional[PixelBuffer],
                    roughness: Optional[PixelBuffer]) -> Dict[str, PixelBuffer]:
# Maps slot names to buffers, failing on the first missing one in channel order.

    sources: Dict[str, Optional[PixelBuffer]] = {"albedo": albedo, "normal": normal, "metallic": metallic, "roughness": roughness}
    for slot, buffer in sources.items():
        if buffer is None:
            raise NullInputError(slot)
    return sources



#                                           === Row parallelism ===

def resolve_workers(workers: Optional[int] = None) -> int:
# None falls back to the configured WORKERS; zero or less means one worker per CPU.
    if workers is None:
        workers = WORKERS
    if workers <= 0:
        workers = os.cpu_count() or 1
    return workers


def split_rows(height: int, bands: int) -> List[Tuple[int, int]]:
# Splits [0, height) into at most `bands` contiguous, non-empty row ranges.

    bands = max(1, min(bands, height))
    band_height, remainder = divmod(height, bands)
    row_ranges: List[Tuple[int, int]] = []
    row_start = 0
    for band_index in range(bands):
        row_end = row_start + band_height + (1 if band_index < remainder else 0)
        row_ranges.append((row_start, row_end))
        row_start = row_end
    return row_ranges


def run_row_bands(height: int, row_job: RowJob, workers: Optional[int] = None) -> None:
# Fork-join over row bands. Each job owns a disjoint slice of the output, so no locking is needed.

    worker_count = resolve_workers(workers)
    row_ranges = split_rows(height, worker_count)

    if len(row_ranges) == 1:
        row_job(*row_ranges[0])
        return

    with ThreadPoolExecutor(max_workers=len(row_ranges)) as executor:
        futures = [executor.submit(row_job, row_start, row_end) for row_start, row_end in row_ranges]
        for future in futures:
            future.result()
    # result() re-raises the first failure from a worker.



#                                           === Compose ===

def compose(albedo: Optional[PixelBuffer], normal: Optional[PixelBuffer], metallic: Optional[PixelBuffer],
            roughness: Optional[PixelBuffer], brightness: float = 1.0, ao: Optional[PixelBuffer] = None,
            workers: Optional[int] = None) -> PixelBuffer:
# Packs four same-size buffers into a mask map at their native resolution.
# Output pixel i is (albedo.R, normal.G, metallic.B, roughness.R), each taken from the source pixel multiplied by brightness; results are not clamped.
# AO is accepted but not used. Raises NullInputError for a missing buffer and DimensionMismatchError for a size that differs from albedo's.

    sources = require_sources(albedo, normal, metallic, roughness)
    brightness = validate_brightness(brightness)

    expected_size: Tuple[int, int] = sources["albedo"].size
    for slot, buffer in sources.items():
        if buffer.size != expected_size:
            raise DimensionMismatchError(slot, expected_size, buffer.size)

    width, height = expected_size
    output = PixelBuffer.empty(width, height)

    def compose_rows(row_start: int, row_end: int) -> None:
        row_sources = {slot: buffer.pixels[row_start:row_end] for slot, buffer in sources.items()}
        combine_pixels(row_sources, brightness, output.pixels[row_start:row_end])

    run_row_bands(height, compose_rows, workers)
    return output
