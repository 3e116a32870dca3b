"""Rendering facade for the bingo board."""

from .board import BingoRenderer, BingoRenderTheme, color_marker, parse_color

__all__ = ["BingoRenderer", "BingoRenderTheme", "color_marker", "parse_color"]
