"""Registration helpers for bingo handlers."""

from __future__ import annotations

from typing import Optional

from telegram.ext import Application, CallbackQueryHandler, CommandHandler

from ..state.manager import STATE_MANAGER
from .board import (
    CALLBACK_PREFIX,
    board_callback,
    color_cmd,
    help_cmd,
    newboard_cmd,
    snapshot_cmd,
    start_cmd,
)


def reset_for_chat(chat_id: int) -> None:
    """Forget every board bound to the provided chat."""

    STATE_MANAGER.drop_chat(chat_id)


def register_handlers(application: Optional[Application]) -> None:
    """Attach bingo command and button handlers to the application."""

    if not application:
        return

    application.add_handler(CommandHandler("bingo", start_cmd))
    application.add_handler(CommandHandler("newboard", newboard_cmd))
    application.add_handler(CommandHandler("color", color_cmd))
    application.add_handler(CommandHandler("snapshot", snapshot_cmd, block=False))
    application.add_handler(CommandHandler("help", help_cmd, block=False))
    application.add_handler(CallbackQueryHandler(board_callback, pattern=f"^{CALLBACK_PREFIX}:"))
