import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

_OBJECTIVE_ENV_VARS = (
    "OBJECTIVES_RNG_SEED",
    "OBJECTIVES_RITUAL_RADIUS",
    "OBJECTIVES_NOTIFY_MS",
    "OBJECTIVES_STEP_NOTIFY_MS",
    "OBJECTIVES_PRISONERS",
    "OBJECTIVES_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def isolated_objective_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _OBJECTIVE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
