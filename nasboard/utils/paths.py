"""Централизованное описание путей приложения."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

BASE_DIR_NAME = ".nasboard"


def resolve_base_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Базовая директория для config.json, bookmarks.json и логов.

    NASBOARD_HOME задаёт её напрямую, иначе ~/.nasboard.
    """

    env = os.environ if environ is None else environ
    override = env.get("NASBOARD_HOME")
    if override:
        return Path(override)
    return Path.home() / BASE_DIR_NAME
