from __future__ import annotations

import os
import shutil
import subprocess
from typing import Optional, Union

from PIL import ImageFont

FontLike = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]

FALLBACK_FONT_PATHS = (
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono-Bold.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationMono-Bold.ttf",
    "/usr/share/fonts/truetype/freefont/FreeMonoBold.ttf",
    "/usr/share/fonts/TTF/DejaVuSansMono-Bold.ttf",
    "/Library/Fonts/Andale Mono.ttf",
    "/System/Library/Fonts/Menlo.ttc",
    "C:\\Windows\\Fonts\\consolab.ttf",
    "C:\\Windows\\Fonts\\courbd.ttf",
)


def find_monospace_bold_font() -> Optional[str]:
    """Locate a bold monospace TrueType font, asking fontconfig first."""
    fc_match = shutil.which("fc-match")
    if fc_match:
        try:
            result = subprocess.run(
                [fc_match, "-f", "%{file}\n", "monospace:style=Bold"],
                check=False,
                capture_output=True,
                text=True,
            )
        except OSError:
            result = None
        path = (result.stdout if result else "").strip()
        if path and os.path.isfile(path):
            return path
    for path in FALLBACK_FONT_PATHS:
        if os.path.isfile(path):
            return path
    return None


def load_font(path: Optional[str], size: int) -> FontLike:
    if path:
        return ImageFont.truetype(path, size)
    return ImageFont.load_default()
