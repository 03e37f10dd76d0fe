from .capture import CaptureSource, ImageFileSource, PillowImageSource, TextSource
from .dither import dither
from .grayscale import to_grayscale
from .renderer import image_to_bits
from .resize import resize
from .types import BitBuffer, GrayscaleBuffer, PixelBuffer

__all__ = [
    "BitBuffer",
    "CaptureSource",
    "GrayscaleBuffer",
    "ImageFileSource",
    "PillowImageSource",
    "PixelBuffer",
    "TextSource",
    "dither",
    "image_to_bits",
    "resize",
    "to_grayscale",
]
