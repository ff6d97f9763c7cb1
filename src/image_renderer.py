"""
PNG renderer for word search grids.
Draws one letter per cell, an outer border, and optional translucent
highlights over every placed word.
"""

import io
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from PIL import Image, ImageDraw, ImageFont

from models import Grid, Placement


RGBA = Tuple[int, int, int, int]

DEFAULT_FONT = "DejaVuSans.ttf"

# 0.3 opacity
HIGHLIGHT_ALPHA = 77

DEFAULT_PALETTE: List[RGBA] = [
    (255, 0, 0, HIGHLIGHT_ALPHA),
    (0, 255, 0, HIGHLIGHT_ALPHA),
    (0, 0, 255, HIGHLIGHT_ALPHA),
    (255, 255, 0, HIGHLIGHT_ALPHA),
    (255, 0, 255, HIGHLIGHT_ALPHA),
]

logger = logging.getLogger(__name__)


class RenderError(Exception):
    """Raised when a grid cannot be rendered."""
    pass


@dataclass
class RenderSettings:
    """Configuration for PNG rendering."""
    cell_size: int = 50
    font_scale: float = 0.8
    border_width: int = 2
    font_path: Optional[str] = None

    # Colors
    background: str = "white"
    text_color: str = "black"
    border_color: str = "black"
    palette: List[RGBA] = field(default_factory=lambda: list(DEFAULT_PALETTE))


def highlight_color(index: int, palette: Sequence[RGBA]) -> RGBA:
    """Colour for the index-th placed word, cycling through palette."""
    if not palette:
        raise RenderError("Highlight palette is empty")
    return tuple(palette[index % len(palette)])


class GridImageRenderer:
    """Renders word search grids as PNG images."""

    def __init__(self, settings: Optional[RenderSettings] = None):
        self.settings = settings or RenderSettings()
        self._font = None

    @property
    def font(self):
        if self._font is None:
            self._font = self._load_font()
        return self._font

    def _load_font(self):
        """Load the TrueType font, falling back to Pillow's built-in one."""
        size = max(1, int(self.settings.cell_size * self.settings.font_scale))
        path = self.settings.font_path or DEFAULT_FONT
        try:
            return ImageFont.truetype(path, size)
        except OSError:
            if self.settings.font_path:
                logger.warning(f"Could not load font {path}, using default font")
            else:
                logger.debug(f"{DEFAULT_FONT} not found, using default font")
            return ImageFont.load_default(size=size)

    def render(
        self,
        grid: Grid,
        placements: Optional[Dict[str, Placement]] = None,
        highlight: bool = False
    ) -> bytes:
        """
        Render grid to PNG bytes.

        Args:
            grid: Filled puzzle grid
            placements: Word placements, required when highlighting
            highlight: Whether to shade every placed word's cells

        Returns:
            PNG encoded image
        """
        cell = self.settings.cell_size
        if cell < 1:
            raise RenderError(f"cell_size must be positive, got {cell}")

        canvas_size = grid.size * cell
        image = Image.new("RGBA", (canvas_size, canvas_size), self.settings.background)
        draw = ImageDraw.Draw(image)

        for row, letters in enumerate(grid.rows()):
            for col, letter in enumerate(letters):
                center = (col * cell + cell / 2, row * cell + cell / 2)
                draw.text(
                    center, letter,
                    fill=self.settings.text_color,
                    font=self.font,
                    anchor="mm"
                )

        # Outer border
        draw.rectangle(
            [0, 0, canvas_size - 1, canvas_size - 1],
            outline=self.settings.border_color,
            width=self.settings.border_width
        )

        if highlight and placements:
            image = Image.alpha_composite(
                image, self._highlight_layer(image.size, placements)
            )

        buffer = io.BytesIO()
        image.convert("RGB").save(buffer, format="PNG")
        return buffer.getvalue()

    def _highlight_layer(self, size, placements: Dict[str, Placement]) -> Image.Image:
        """Transparent layer with one coloured square per placed cell."""
        cell = self.settings.cell_size
        layer = Image.new("RGBA", size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(layer)

        for index, cells in enumerate(placements.values()):
            color = highlight_color(index, self.settings.palette)
            for row, col in cells:
                x0, y0 = col * cell, row * cell
                draw.rectangle([x0, y0, x0 + cell - 1, y0 + cell - 1], fill=color)

        return layer

    def render_blank(self, grid: Grid) -> bytes:
        """Render the puzzle without answers."""
        return self.render(grid)

    def render_resolved(self, grid: Grid, placements: Dict[str, Placement]) -> bytes:
        """Render the answer key with every word highlighted."""
        return self.render(grid, placements, highlight=True)
