from .base import CaptureSource, PillowCaptureSource
from .image import SUPPORTED_EXTENSIONS, ImageFileSource, PillowImageSource
from .text import TextSource

__all__ = [
    "CaptureSource",
    "ImageFileSource",
    "PillowCaptureSource",
    "PillowImageSource",
    "SUPPORTED_EXTENSIONS",
    "TextSource",
]
