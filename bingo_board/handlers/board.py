"""Command and button handlers that drive the bingo board."""

from __future__ import annotations

import html
import logging
from typing import Optional, Tuple

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, InputFile, Update
from telegram.error import BadRequest, TelegramError
from telegram.ext import ContextTypes

from ..errors import BingoError
from ..rendering import BingoRenderer, color_marker, parse_color
from ..services import CATALOG
from ..state import BoardState, CellClicked, ColorChanged, Intent, NewBoard
from ..state.manager import STATE_MANAGER
from ..state.models import GRID_SIZE

LOGGER = logging.getLogger(__name__)
RENDERER = BingoRenderer()

CALLBACK_PREFIX = "bingo"
PALETTE = ("#ffd700", "#ff0000", "#ff8c00", "#00aa00", "#005aff", "#8c3cc8")

HELP_TEXT = (
    "<b>Bingo board</b>\n"
    "Tap a number to mark it with the active color, tap it again to clear it.\n"
    "\nCommands:\n"
    "• /bingo — show your board.\n"
    "• /newboard — draw 25 new numbers and clear all marks.\n"
    "• /color &lt;value&gt; — set the active color, e.g. <code>/color #ff0000</code> or <code>/color teal</code>.\n"
    "• /snapshot — get a picture of the board.\n"
)


def parse_callback_data(data: str) -> Optional[Intent]:
    """Translate inline button payloads into board intents."""

    parts = data.split(":")
    if len(parts) < 2 or parts[0] != CALLBACK_PREFIX:
        return None
    action = parts[1]
    if action == "new" and len(parts) == 2:
        return NewBoard()
    if action == "cell" and len(parts) == 3 and parts[2].isascii() and parts[2].isdecimal():
        return CellClicked(int(parts[2]))
    if action == "color" and len(parts) == 3:
        color = f"#{parts[2]}"
        if len(parts[2]) == 6 and parse_color(color) is not None:
            return ColorChanged(color)
    return None


def to_hex(rgb: Tuple[int, int, int]) -> str:
    return "#{:02x}{:02x}{:02x}".format(*rgb)


def build_board_keyboard(state: BoardState) -> InlineKeyboardMarkup:
    """Lay out the 5x5 grid, the palette and the regenerate button."""

    rows = []
    for row_start in range(0, len(state.cells), GRID_SIZE):
        row = [
            InlineKeyboardButton(
                RENDERER.cell_label(cell),
                callback_data=f"{CALLBACK_PREFIX}:cell:{row_start + offset}",
            )
            for offset, cell in enumerate(state.cells[row_start : row_start + GRID_SIZE])
        ]
        rows.append(row)
    active = state.active_color.lower()
    palette_row = []
    for color in PALETTE:
        marker = color_marker(color)
        label = f"[{marker}]" if color == active else marker
        palette_row.append(InlineKeyboardButton(label, callback_data=f"{CALLBACK_PREFIX}:color:{color[1:]}"))
    rows.append(palette_row)
    rows.append([InlineKeyboardButton("🔄 New board", callback_data=f"{CALLBACK_PREFIX}:new")])
    return InlineKeyboardMarkup(rows)


def _chat_scope(update: Update) -> Tuple[Optional[int], Optional[int]]:
    chat = update.effective_chat
    message = update.effective_message
    chat_id = chat.id if chat else None
    thread_id = getattr(message, "message_thread_id", None) if message else None
    return chat_id, thread_id


async def _send_board(update: Update, state: BoardState) -> None:
    message = update.effective_message
    if not message:
        return
    await message.reply_text(
        RENDERER.render_board_text(state, CATALOG),
        parse_mode="HTML",
        reply_markup=build_board_keyboard(state),
    )


async def start_cmd(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Show the board bound to the current chat, creating it if needed."""

    chat_id, thread_id = _chat_scope(update)
    if chat_id is None:
        return
    state = STATE_MANAGER.get_or_create(chat_id, thread_id)
    await _send_board(update, state)


async def newboard_cmd(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    chat_id, thread_id = _chat_scope(update)
    if chat_id is None:
        return
    state = STATE_MANAGER.regenerate(chat_id, thread_id=thread_id)
    await _send_board(update, state)


async def color_cmd(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Set the active color from ``/color <value>``."""

    message = update.effective_message
    chat_id, thread_id = _chat_scope(update)
    if not message or chat_id is None:
        return
    value = " ".join(getattr(context, "args", None) or []).strip()
    rgb = parse_color(value) if value else None
    if rgb is None:
        state = STATE_MANAGER.get_or_create(chat_id, thread_id)
        await message.reply_text(
            "Usage: /color &lt;value&gt;, for example <code>/color #ff0000</code>.\n"
            f"Current color: {color_marker(state.active_color)} <code>{html.escape(state.active_color)}</code>",
            parse_mode="HTML",
        )
        return
    state = STATE_MANAGER.set_active_color(chat_id, to_hex(rgb), thread_id=thread_id)
    await _send_board(update, state)


async def snapshot_cmd(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Reply with a PNG picture of the board."""

    message = update.effective_message
    chat_id, thread_id = _chat_scope(update)
    if not message or chat_id is None:
        return
    state = STATE_MANAGER.get_or_create(chat_id, thread_id)
    buffer = RENDERER.render_board_image(state)
    marked = len(state.highlighted_indices())
    await message.reply_photo(
        photo=InputFile(buffer, filename="bingo_board.png"),
        caption=f"Marked cells: {marked}/{len(state.cells)}",
    )


async def help_cmd(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    message = update.effective_message
    if message:
        await message.reply_text(HELP_TEXT, parse_mode="HTML")


async def board_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Apply a button press to the board and redraw the message."""

    query = update.callback_query
    if not query:
        return
    intent = parse_callback_data(query.data or "")
    message = query.message
    if intent is None or message is None:
        await query.answer("Unknown action")
        return
    chat_id = message.chat.id
    thread_id = getattr(message, "message_thread_id", None)
    try:
        state = STATE_MANAGER.apply(chat_id, thread_id, intent)
    except BingoError as exc:
        LOGGER.info("Rejected %r in chat %s: %s", intent, chat_id, exc)
        await query.answer("This board is out of date, send /bingo to get a fresh one.")
        return
    await query.answer()
    await _refresh_board(query, state)


async def _refresh_board(query, state: BoardState) -> None:
    try:
        await query.edit_message_text(
            RENDERER.render_board_text(state, CATALOG),
            parse_mode="HTML",
            reply_markup=build_board_keyboard(state),
        )
    except BadRequest as exc:
        if "not modified" in str(exc).lower():
            LOGGER.debug("Board message unchanged: %s", exc)
            return
        LOGGER.warning("Failed to redraw bingo board: %s", exc)
    except TelegramError as exc:
        LOGGER.warning("Failed to redraw bingo board: %s", exc)
