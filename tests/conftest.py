import os, sys
from pathlib import Path

import pytest

# Add project root to sys.path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

# Ensure required environment variables for Core()
os.environ.setdefault("BOT_TOKEN", "test-token")
os.environ["DEV_MODE"] = "false"

from hifumi import presence  # noqa: E402
from hifumi.memory import store  # noqa: E402
from hifumi.memory.state import BotState  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_state(monkeypatch):
    """Give every test its own BotState singleton and rotation task slot."""
    monkeypatch.setattr(BotState, "_instance", None)
    monkeypatch.setattr(presence, "_task", None)
    yield
    store.close()
