import sys
from pathlib import Path

import pytest

# Ensure the 'src' directory is on sys.path for imports in tests
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def bracket_hash(value: str) -> str:
    """H(x) = "H(" + x + ")": readable and injective enough for structure checks."""
    return f"H({value})"


@pytest.fixture
def h():
    return bracket_hash
