""" Image processing backend. Currently implemented using Pillow (PIL). PIL exports 8bit images only."""



#                                           === Backend ===

from typing import Any, Tuple, TypeAlias

import numpy as np
from numpy.typing import NDArray

from PIL import Image as _PIL
from PIL.Image import Image as PILImage
from PIL import Image as PILImageModule

ImageObject: TypeAlias = PILImage


def close_image(image: object) -> None:
    close = getattr(image, "close", None)
    if callable(close):
        close()


def from_array_u8(data: Any, mode: str) -> ImageObject:
# Creates an image from a uint8 numpy array; Pillow infers the mode from the array shape.
    image = PILImageModule.fromarray(data)
    return image if image.mode == mode else image.convert(mode)


def get_image_mode(image: Any) -> str:
# Return the Pillow image mode: "RGB", "RGBA", "L"
    return image.mode


def get_size(image: ImageObject) -> Tuple[int, int]:
# Returns the image size as (width, height)
    return image.size


def open_image(path: str) -> ImageObject:
    return _PIL.open(path)


def save_image(image: Any, path: str, file_format: str) -> None:
    image.save(path, format=file_format.upper())




#                                           === Utils ===



def is_16bit_grayscale(image: ImageObject) -> bool:
    mode = get_image_mode(image)
    return mode == "I" or str(mode).startswith("I;16")


def image_to_rgba_floats(image: ImageObject) -> NDArray[np.float32]:
# Decodes an image into a (height, width, 4) float32 array in the 0-1 range.
# 16bit grayscale keeps its precision instead of being truncated to 8bit first.

    if is_16bit_grayscale(image):
        gray16 = np.asarray(image, dtype=np.float32) / 65535.0
        rgba = np.empty(gray16.shape + (4,), dtype=np.float32)
        rgba[..., :3] = gray16[..., None]
        rgba[..., 3] = 1.0
        return rgba
    # "I" images hold 16bit PNG data in Pillow.

    rgba_image = image if get_image_mode(image) == "RGBA" else image.convert("RGBA")
    try:
        return np.asarray(rgba_image, dtype=np.float32) / 255.0
    finally:
        if rgba_image is not image:
            close_image(rgba_image)


def rgba_floats_to_image(pixels: NDArray[np.float32]) -> ImageObject:
# Encodes float pixels to an 8bit RGBA image; values outside 0-1 are clipped only here, at encoding time.
    output_u8 = np.rint(np.clip(pixels, 0.0, 1.0) * 255.0).astype(np.uint8)
    return from_array_u8(output_u8, "RGBA")
