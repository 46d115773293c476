"""Различные вспомогательные функции."""

from __future__ import annotations

import html

_SOCKET_SCHEMES = ("unix://", "tcp://", "npipe://", "http://", "https://", "ssh://")
_BYTE_UNITS = ("B", "KB", "MB", "GB", "TB")


def normalize_socket_path(raw_value: str) -> str:
    """Возвращает путь сокета с корректным префиксом unix://."""

    value = raw_value.strip()
    if not value:
        return value
    lowered = value.lower()
    if lowered.startswith(_SOCKET_SCHEMES):
        return value
    if value.startswith("/"):
        return f"unix://{value}"
    return value


def sanitize_string(value: str) -> str:
    """Экранирует <, >, &, кавычки и апостроф."""

    return html.escape(value, quote=True)


def format_bytes(value: float) -> str:
    """Форматирует байты: 1536 -> '1.5 KB', 0 -> '0 B'."""

    size = float(value)
    if size <= 0:
        return "0 B"
    index = 0
    while size >= 1024 and index < len(_BYTE_UNITS) - 1:
        size /= 1024.0
        index += 1
    return f"{round(size, 2):g} {_BYTE_UNITS[index]}"
