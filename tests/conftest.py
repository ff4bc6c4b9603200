from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure local "src/" takes precedence over any globally-installed "hederafmt" package.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

src_str = str(SRC)
if src_str not in sys.path:
    sys.path.insert(0, src_str)

from hederafmt.config import default_formatter_config  # noqa: E402
from hederafmt.providers.formatter import Formatter  # noqa: E402


@pytest.fixture()
def fmt() -> Formatter:
    return Formatter(default_formatter_config())
