import os

import pytest

from querykit.settings import _reload_settings
from querykit.settings import main as settings_main


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Run every test against default settings, unaffected by the host environment."""
    for key in list(os.environ):
        if key.upper().startswith("QUERYKIT_"):
            monkeypatch.delenv(key, raising=False)
    _reload_settings()
    yield
    settings_main._settings = None
