# src/hederafmt/env.py
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

_LOADED = False


def load_dotenv_if_present(dotenv_path: Optional[str] = None) -> bool:
    """Populate HEDERAFMT_* settings from a .env file, once per process.

    The file is taken from `dotenv_path`, then HEDERAFMT_DOTENV_PATH, then
    ./.env. Variables already in the environment win over the file.

    Returns True only when a file was found and read.
    """
    global _LOADED
    if _LOADED:
        return False
    _LOADED = True

    path = Path(dotenv_path or os.getenv("HEDERAFMT_DOTENV_PATH", ".env")).expanduser()
    if not path.is_file():
        return False

    load_dotenv(dotenv_path=str(path), override=False)
    return True


def reset_dotenv_state() -> None:
    """Allow the next load_dotenv_if_present call to read again (tests)."""
    global _LOADED
    _LOADED = False
