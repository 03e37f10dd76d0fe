from __future__ import annotations

from typing import List, Optional

from PIL import Image, ImageDraw

from ...errors import InvalidInput
from ..fonts import FontLike, find_monospace_bold_font, load_font
from .base import PillowCaptureSource

# 35 columns fill a 384-dot line; wider heads scale proportionally.
BASE_WIDTH = 384
BASE_COLUMNS = 35
MIN_FONT_SIZE = 6
MAX_FONT_SIZE = 80


class TextSource(PillowCaptureSource):
    """Renders plain text, black on an opaque white page of ``width`` dots."""

    def __init__(self, text: str, width: int, columns: Optional[int] = None) -> None:
        if width <= 0:
            raise InvalidInput("Text page width must be greater than zero")
        self.text = text.replace("\t", "    ")
        self.width = width
        self.columns = columns or columns_for_width(width)

    def _render(self) -> Image.Image:
        font = fit_font(find_monospace_bold_font(), self.width, self.columns)
        lines = wrap_lines(self.text, self.columns)
        line_height = font_line_height(font)
        img = Image.new("RGBA", (self.width, max(1, line_height * len(lines))), (255, 255, 255, 255))
        draw = ImageDraw.Draw(img)
        for row, line in enumerate(lines):
            draw.text((0, row * line_height), line, font=font, fill=(0, 0, 0, 255))
        return img


def columns_for_width(width: int) -> int:
    return max(1, int(round(width * BASE_COLUMNS / BASE_WIDTH)))


def wrap_lines(text: str, columns: int) -> List[str]:
    """Wrap each paragraph at ``columns``, keeping blank lines.

    Lines break at the last space that fits, or mid-word when there is none.
    Indentation and runs of spaces inside a line are printed as typed.
    """
    lines: List[str] = []
    for paragraph in text.split("\n"):
        while len(paragraph) > columns:
            cut = paragraph.rfind(" ", 0, columns + 1)
            if cut <= 0:
                lines.append(paragraph[:columns])
                paragraph = paragraph[columns:]
            else:
                lines.append(paragraph[:cut])
                paragraph = paragraph[cut + 1 :]
        lines.append(paragraph)
    return lines


def fit_font(path: Optional[str], width: int, columns: int) -> FontLike:
    """Largest font size for which ``columns`` glyphs still fit in ``width``."""
    if not path:
        return load_font(None, MIN_FONT_SIZE)
    sample = "M" * columns
    low, high = MIN_FONT_SIZE, MAX_FONT_SIZE
    best = None
    while low <= high:
        size = (low + high) // 2
        font = load_font(path, size)
        if font.getlength(sample) <= width:
            best = font
            low = size + 1
        else:
            high = size - 1
    return best or load_font(path, MIN_FONT_SIZE)


def font_line_height(font: FontLike) -> int:
    if hasattr(font, "getmetrics"):
        ascent, descent = font.getmetrics()
        return max(1, ascent + descent)
    _, top, _, bottom = font.getbbox("Ag")
    return max(1, bottom - top)
