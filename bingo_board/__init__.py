"""Interactive bingo board served over Telegram."""

from .errors import BingoError, DeserializationError, IndexOutOfRangeError, InvalidArgumentError
from .handlers import register_handlers, reset_for_chat, start_cmd
from .state import BoardState, Cell, Highlight
from .state.manager import STATE_MANAGER


def get_board(chat_id: int, thread_id: int | None = None) -> BoardState | None:
    """Public helper that proxies to the shared state manager."""

    return STATE_MANAGER.get(chat_id, thread_id)


__all__ = [
    "BingoError",
    "BoardState",
    "Cell",
    "DeserializationError",
    "Highlight",
    "IndexOutOfRangeError",
    "InvalidArgumentError",
    "STATE_MANAGER",
    "get_board",
    "register_handlers",
    "reset_for_chat",
    "start_cmd",
]
