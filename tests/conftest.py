import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in (
        "ZOINKIES_REFERENCE_DATA_PATH",
        "ZOINKIES_RNG_SEED",
        "ZOINKIES_FREED_LEADERS_TO_WIN",
        "ZOINKIES_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
