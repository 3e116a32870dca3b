"""Rendering helpers for visualising the bingo board."""

from __future__ import annotations

import html
import io
from dataclasses import dataclass
from typing import Sequence

from PIL import Image, ImageColor, ImageDraw, ImageFont

from ..services.sentences import SentenceCatalog
from ..state.models import GRID_SIZE, BoardState, Cell

COLOR_MARKERS: tuple[tuple[str, tuple[int, int, int]], ...] = (
    ("🟥", (255, 0, 0)),
    ("🟧", (255, 140, 0)),
    ("🟨", (255, 215, 0)),
    ("🟩", (0, 170, 0)),
    ("🟦", (0, 90, 255)),
    ("🟪", (140, 60, 200)),
    ("🟫", (140, 80, 40)),
    ("⬛", (0, 0, 0)),
    ("⬜", (255, 255, 255)),
)
UNKNOWN_COLOR_MARKER = "✅"
HEADER_LETTERS = "BINGO"


def parse_color(color: str) -> tuple[int, int, int] | None:
    """Return the RGB triple for ``color`` or ``None`` if Pillow cannot read it."""

    try:
        rgb = ImageColor.getrgb(color)
    except ValueError:
        return None
    return rgb[0], rgb[1], rgb[2]


def color_marker(color: str) -> str:
    """Pick the colored square emoji closest to ``color``."""

    rgb = parse_color(color)
    if rgb is None:
        return UNKNOWN_COLOR_MARKER

    def _distance(entry: tuple[str, tuple[int, int, int]]) -> int:
        reference = entry[1]
        return sum((a - b) ** 2 for a, b in zip(rgb, reference))

    return min(COLOR_MARKERS, key=_distance)[0]


@dataclass(slots=True)
class BingoRenderTheme:
    """Container describing the visual configuration of the board."""

    background: str = "#f4f1ea"
    panel: str = "#fffdf7"
    grid: str = "#c9bfa8"
    header_fill: str = "#2b3a55"
    header_text: str = "#ffffff"
    dark_text: str = "#1d1d1d"
    light_text: str = "#ffffff"


class BingoRenderer:
    """Render both the chat text and a Pillow image of the board."""

    CELL_SIZE = 140
    MARGIN = 30
    HEADER_HEIGHT = 110
    REGULAR_FONTS = (
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
    )
    BOLD_FONTS = (
        "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
    )

    def __init__(self, theme: BingoRenderTheme | None = None) -> None:
        self.theme = theme or BingoRenderTheme()
        self._font_cache: dict[tuple[int, bool], ImageFont.ImageFont] = {}

    # Text ---------------------------------------------------------------
    def cell_label(self, cell: Cell) -> str:
        if cell.highlight is None:
            return str(cell.number)
        return f"{color_marker(cell.highlight.color)} {cell.number}"

    def render_sentences(self, state: BoardState, catalog: SentenceCatalog) -> str:
        """Return one line per cell, in board order, with its sentence."""

        return "\n".join(
            f"<b>{cell.number}:</b> {html.escape(catalog.sentence_for(cell.number))}" for cell in state.cells
        )

    def render_board_text(self, state: BoardState, catalog: SentenceCatalog) -> str:
        color = state.active_color
        return (
            "<b>Bingo Board</b>\n"
            "Select a color, then tap a cell to apply it. Tap again to remove the color.\n"
            f"Active color: {color_marker(color)} <code>{html.escape(color)}</code>\n"
            "\n<b>Sentences</b>\n"
            f"{self.render_sentences(state, catalog)}"
        )

    # Image --------------------------------------------------------------
    @property
    def board_size(self) -> tuple[int, int]:
        side = self.MARGIN * 2 + self.CELL_SIZE * GRID_SIZE
        return side, side + self.HEADER_HEIGHT

    def render_board_image(self, state: BoardState) -> io.BytesIO:
        """Render the board as a PNG stored in an in-memory buffer."""

        image = Image.new("RGB", self.board_size, color=self.theme.background)
        draw = ImageDraw.Draw(image)
        self._draw_header(draw)
        self._draw_cells(draw, state.cells)
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        buffer.seek(0)
        return buffer

    def _draw_header(self, draw: ImageDraw.ImageDraw) -> None:
        top = self.MARGIN
        left = self.MARGIN
        right = left + self.CELL_SIZE * GRID_SIZE
        draw.rounded_rectangle(
            (left, top, right, top + self.HEADER_HEIGHT - 10), radius=24, fill=self.theme.header_fill
        )
        font = self._get_font(72, bold=True)
        height = self._font_height(font)
        for column, letter in enumerate(HEADER_LETTERS):
            width = draw.textlength(letter, font=font)
            x = left + column * self.CELL_SIZE + (self.CELL_SIZE - width) / 2
            y = top + (self.HEADER_HEIGHT - 10 - height) / 2
            draw.text((x, y), letter, font=font, fill=self.theme.header_text)

    def _draw_cells(self, draw: ImageDraw.ImageDraw, cells: Sequence[Cell]) -> None:
        font = self._get_font(56, bold=True)
        height = self._font_height(font)
        origin_y = self.MARGIN + self.HEADER_HEIGHT
        for index, cell in enumerate(cells):
            row, column = divmod(index, GRID_SIZE)
            x0 = self.MARGIN + column * self.CELL_SIZE
            y0 = origin_y + row * self.CELL_SIZE
            rect = (x0, y0, x0 + self.CELL_SIZE, y0 + self.CELL_SIZE)
            fill = self._cell_fill(cell)
            draw.rectangle(rect, fill=fill or self.theme.panel, outline=self.theme.grid, width=3)
            text = str(cell.number)
            width = draw.textlength(text, font=font)
            draw.text(
                (x0 + (self.CELL_SIZE - width) / 2, y0 + (self.CELL_SIZE - height) / 2),
                text,
                font=font,
                fill=self._text_color(fill),
            )

    def _cell_fill(self, cell: Cell) -> tuple[int, int, int] | None:
        if cell.highlight is None:
            return None
        return parse_color(cell.highlight.color)

    def _text_color(self, fill: tuple[int, int, int] | None) -> str:
        if fill is None:
            return self.theme.dark_text
        red, green, blue = fill
        luminance = 0.299 * red + 0.587 * green + 0.114 * blue
        return self.theme.dark_text if luminance > 150 else self.theme.light_text

    def _get_font(self, size: int, *, bold: bool = False) -> ImageFont.ImageFont:
        key = (size, bold)
        cached = self._font_cache.get(key)
        if cached:
            return cached
        candidates = self.BOLD_FONTS if bold else self.REGULAR_FONTS
        for path in candidates:
            try:
                font = ImageFont.truetype(path, size=size)
                self._font_cache[key] = font
                return font
            except OSError:
                continue
        fallback = ImageFont.load_default()
        self._font_cache[key] = fallback
        return fallback

    def _font_height(self, font: ImageFont.ImageFont) -> int:
        bbox = font.getbbox("0")
        return int(bbox[3] - bbox[1])
