from __future__ import annotations

import os

from PIL import Image

from ...errors import InvalidInput
from .base import PillowCaptureSource

SUPPORTED_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif", ".bmp"}


class ImageFileSource(PillowCaptureSource):
    def __init__(self, path: str) -> None:
        ext = os.path.splitext(path)[1].lower()
        if ext not in SUPPORTED_EXTENSIONS:
            raise InvalidInput("Supported formats: " + ", ".join(sorted(SUPPORTED_EXTENSIONS)))
        if not os.path.isfile(path):
            raise FileNotFoundError(f"File not found: {path}")
        self.path = path

    def _render(self) -> Image.Image:
        return self._load_image(self.path)


class PillowImageSource(PillowCaptureSource):
    """Wraps an image already rendered in memory."""

    def __init__(self, image: Image.Image) -> None:
        self.image = image

    def _render(self) -> Image.Image:
        return self.image
