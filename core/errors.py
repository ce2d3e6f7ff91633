""" Errors raised by the composition engine. The engine only signals; callers decide how to report. """

from typing import Tuple


class MaskMapError(Exception):
    pass


class NullInputError(MaskMapError):
    def __init__(self, slot: str):
        self.slot = slot
        super().__init__(f"Missing required '{slot}' texture.")


class DimensionMismatchError(MaskMapError):
    def __init__(self, slot: str, expected: Tuple[int, int], actual: Tuple[int, int]):
        self.slot = slot
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"'{slot}' texture is {actual[0]}x{actual[1]}, expected {expected[0]}x{expected[1]} to match albedo.")
