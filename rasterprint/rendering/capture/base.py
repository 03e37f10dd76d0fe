from __future__ import annotations

from PIL import Image, ImageOps

from ...errors import CaptureInvalid
from ..types import PixelBuffer


class CaptureSource:
    """Supplies the image to print as a flat RGBA pixel buffer."""

    def capture(self) -> PixelBuffer:
        raise NotImplementedError


class PillowCaptureSource(CaptureSource):
    def capture(self) -> PixelBuffer:
        return self._to_pixels(self._render())

    def _render(self) -> Image.Image:
        raise NotImplementedError

    @staticmethod
    def _load_image(path: str) -> Image.Image:
        with Image.open(path) as img:
            img = ImageOps.exif_transpose(img)
            return img.copy()

    @staticmethod
    def _to_pixels(img: Image.Image) -> PixelBuffer:
        width, height = img.size
        if width <= 0 or height <= 0:
            raise CaptureInvalid(f"Captured image has zero width/height ({width}x{height})")
        if img.mode != "RGBA":
            img = img.convert("RGBA")
        return PixelBuffer(width, height, img.tobytes())
