import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from boards import LOOP_ROWS, SPUR_ROWS, build  # noqa: E402


@pytest.fixture
def dungeons_dir():
    return ROOT / "dungeons"


@pytest.fixture
def loop_board():
    return build(LOOP_ROWS)


@pytest.fixture
def spur_board():
    return build(SPUR_ROWS)
