"""Telegram handlers for the bingo board."""

from .board import board_callback, color_cmd, help_cmd, newboard_cmd, snapshot_cmd, start_cmd
from .router import register_handlers, reset_for_chat

__all__ = [
    "register_handlers",
    "reset_for_chat",
    "start_cmd",
    "newboard_cmd",
    "color_cmd",
    "snapshot_cmd",
    "help_cmd",
    "board_callback",
]
