"""Tests for the Telegram-facing handlers and the board renderer."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from telegram.error import BadRequest

import bingo_board
from bingo_board.handlers import board as board_handlers
from bingo_board.handlers import router
from bingo_board.rendering import BingoRenderer, color_marker
from bingo_board.services import CATALOG, BoardGenerator, RandomSampler
from bingo_board.state import BoardState, Cell, CellClicked, ColorChanged, Highlight, MemoryStorage, NewBoard
from bingo_board.state.manager import BoardStateManager


@pytest.fixture
def manager(monkeypatch: pytest.MonkeyPatch) -> BoardStateManager:
    """Swap the shared manager for an in-memory, seeded one."""

    instance = BoardStateManager(MemoryStorage(), BoardGenerator(RandomSampler(seed=21)))
    monkeypatch.setattr(board_handlers, "STATE_MANAGER", instance)
    monkeypatch.setattr(router, "STATE_MANAGER", instance)
    monkeypatch.setattr(bingo_board, "STATE_MANAGER", instance)
    return instance


def _sequential_board() -> BoardState:
    return BoardState(cells=[Cell(number=n) for n in range(1, 26)], active_color="#ff0000")


def _build_update(chat_id: int = 100, thread_id: int | None = None) -> SimpleNamespace:
    message = SimpleNamespace(
        chat=SimpleNamespace(id=chat_id),
        message_thread_id=thread_id,
        reply_text=AsyncMock(),
        reply_photo=AsyncMock(),
    )
    return SimpleNamespace(effective_chat=SimpleNamespace(id=chat_id), effective_message=message)


def _build_callback(data: str, chat_id: int = 100) -> SimpleNamespace:
    message = SimpleNamespace(chat=SimpleNamespace(id=chat_id), message_thread_id=None)
    query = SimpleNamespace(
        data=data,
        message=message,
        answer=AsyncMock(),
        edit_message_text=AsyncMock(),
    )
    return SimpleNamespace(callback_query=query)


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        ("bingo:cell:0", CellClicked(0)),
        ("bingo:cell:24", CellClicked(24)),
        ("bingo:new", NewBoard()),
        ("bingo:color:ff0000", ColorChanged("#ff0000")),
        ("bingo:cell:-1", None),
        ("bingo:cell:x", None),
        ("bingo:color:zzzzzz", None),
        ("bingo:color:fff", None),
        ("bingo:new:1", None),
        ("other:start:1", None),
        ("bingo:cell:²", None),
        ("bingo:cell:٣", None),
        ("", None),
    ],
)
def test_parse_callback_data(data: str, expected) -> None:
    assert board_handlers.parse_callback_data(data) == expected


def test_color_marker_picks_nearest_square() -> None:
    assert color_marker("#ff0000") == "🟥"
    assert color_marker("#ffd700") == "🟨"
    assert color_marker("blue") == "🟦"
    assert color_marker("#fefefe") == "⬜"
    assert color_marker("not-a-color") == "✅"


def test_board_text_lists_sentences_in_board_order() -> None:
    state = _sequential_board()
    state.cells.reverse()

    text = BingoRenderer().render_board_text(state, CATALOG)

    assert "<b>Bingo Board</b>" in text
    assert "🟥 <code>#ff0000</code>" in text
    assert text.index("<b>25:</b> This is sentence number 25.") < text.index("<b>1:</b> This is sentence number 1.")


def test_board_text_escapes_color() -> None:
    state = _sequential_board()
    state.set_active_color("<b>")

    text = BingoRenderer().render_board_text(state, CATALOG)

    assert "<code>&lt;b&gt;</code>" in text


def test_render_board_image_produces_png() -> None:
    state = _sequential_board()
    state.cells[0].highlight = Highlight("#ff0000")
    state.cells[1].highlight = Highlight("mystery")

    buffer = BingoRenderer().render_board_image(state)

    assert buffer.getvalue().startswith(b"\x89PNG")


def test_keyboard_layout_and_labels() -> None:
    state = _sequential_board()
    state.toggle_cell(6)

    markup = board_handlers.build_board_keyboard(state)
    rows = markup.inline_keyboard

    assert len(rows) == 7
    assert all(len(row) == 5 for row in rows[:5])
    assert rows[0][0].text == "1"
    assert rows[0][0].callback_data == "bingo:cell:0"
    assert rows[1][1].text == "🟥 7"
    assert rows[1][1].callback_data == "bingo:cell:6"
    assert rows[5][1].text == "[🟥]"
    assert rows[6][0].callback_data == "bingo:new"


@pytest.mark.anyio
async def test_start_cmd_sends_board(manager: BoardStateManager) -> None:
    update = _build_update(chat_id=5)

    await board_handlers.start_cmd(update, SimpleNamespace())

    state = manager.get(5)
    assert state is not None
    reply = update.effective_message.reply_text
    reply.assert_awaited_once()
    assert reply.await_args.kwargs["parse_mode"] == "HTML"
    keyboard = reply.await_args.kwargs["reply_markup"].inline_keyboard
    assert keyboard[0][0].text == str(state.cells[0].number)


@pytest.mark.anyio
async def test_board_callback_toggles_and_redraws(manager: BoardStateManager) -> None:
    state = manager.get_or_create(100)
    update = _build_callback("bingo:cell:3")

    await board_handlers.board_callback(update, SimpleNamespace())

    assert state.cells[3].color == state.active_color
    update.callback_query.answer.assert_awaited_once_with()
    update.callback_query.edit_message_text.assert_awaited_once()

    await board_handlers.board_callback(_build_callback("bingo:cell:3"), SimpleNamespace())
    assert state.cells[3].highlight is None


@pytest.mark.anyio
async def test_board_callback_changes_color_and_regenerates(manager: BoardStateManager) -> None:
    state = manager.get_or_create(100)
    state.toggle_cell(0)

    await board_handlers.board_callback(_build_callback("bingo:color:005aff"), SimpleNamespace())
    assert state.active_color == "#005aff"

    await board_handlers.board_callback(_build_callback("bingo:new"), SimpleNamespace())
    assert state.highlighted_indices() == []


@pytest.mark.anyio
async def test_board_callback_rejects_unknown_and_stale_data(manager: BoardStateManager) -> None:
    unknown = _build_callback("bingo:explode")
    await board_handlers.board_callback(unknown, SimpleNamespace())
    unknown.callback_query.answer.assert_awaited_once_with("Unknown action")
    unknown.callback_query.edit_message_text.assert_not_awaited()

    stale = _build_callback("bingo:cell:30")
    await board_handlers.board_callback(stale, SimpleNamespace())
    assert "out of date" in stale.callback_query.answer.await_args.args[0]
    stale.callback_query.edit_message_text.assert_not_awaited()


@pytest.mark.anyio
async def test_board_callback_ignores_not_modified(manager: BoardStateManager) -> None:
    update = _build_callback("bingo:color:ffd700")
    update.callback_query.edit_message_text.side_effect = BadRequest("Message is not modified")

    await board_handlers.board_callback(update, SimpleNamespace())

    update.callback_query.answer.assert_awaited_once_with()


@pytest.mark.anyio
async def test_color_cmd_normalizes_value(manager: BoardStateManager) -> None:
    update = _build_update()

    await board_handlers.color_cmd(update, SimpleNamespace(args=["Teal"]))

    assert manager.get(100).active_color == "#008080"
    update.effective_message.reply_text.assert_awaited_once()


@pytest.mark.anyio
async def test_color_cmd_without_valid_value_shows_usage(manager: BoardStateManager) -> None:
    update = _build_update()

    await board_handlers.color_cmd(update, SimpleNamespace(args=["blurple"]))

    assert manager.get(100).active_color == "#ffd700"
    assert "Usage" in update.effective_message.reply_text.await_args.args[0]


@pytest.mark.anyio
async def test_newboard_cmd_clears_marks(manager: BoardStateManager) -> None:
    manager.toggle_cell(100, 1)
    update = _build_update()

    await board_handlers.newboard_cmd(update, SimpleNamespace())

    assert manager.get(100).highlighted_indices() == []
    update.effective_message.reply_text.assert_awaited_once()


@pytest.mark.anyio
async def test_snapshot_cmd_sends_photo(manager: BoardStateManager) -> None:
    manager.toggle_cell(100, 0)
    update = _build_update()

    await board_handlers.snapshot_cmd(update, SimpleNamespace())

    reply_photo = update.effective_message.reply_photo
    reply_photo.assert_awaited_once()
    assert reply_photo.await_args.kwargs["caption"] == "Marked cells: 1/25"


def test_reset_for_chat_drops_board(manager: BoardStateManager) -> None:
    manager.get_or_create(100)

    router.reset_for_chat(100)

    assert manager.get(100) is None


def test_register_handlers_attaches_everything() -> None:
    application = SimpleNamespace(handlers=[])
    application.add_handler = lambda handler, *args, **kwargs: application.handlers.append(handler)

    router.register_handlers(application)
    router.register_handlers(None)

    assert len(application.handlers) == 6


@pytest.mark.anyio
async def test_board_callback_answers_non_ascii_digits(manager: BoardStateManager) -> None:
    update = _build_callback("bingo:cell:²")

    await board_handlers.board_callback(update, SimpleNamespace())

    update.callback_query.answer.assert_awaited_once_with("Unknown action")
    assert manager.get(100) is None


def test_get_board_reads_shared_manager(manager: BoardStateManager) -> None:
    assert bingo_board.get_board(100) is None

    state = manager.get_or_create(100, 7)

    assert bingo_board.get_board(100, 7) is state
    assert bingo_board.get_board(100) is None
