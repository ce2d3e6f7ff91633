""" Mask map composition engine: channel packing at full resolution and nearest-neighbor preview resampling. """

from core.compositor import compose
from core.errors import DimensionMismatchError, MaskMapError, NullInputError
from core.resampler import resample_and_compose

__all__ = ["compose", "resample_and_compose", "MaskMapError", "NullInputError", "DimensionMismatchError"]
