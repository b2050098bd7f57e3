import time

import pytest


@pytest.fixture
def phnom_penh_time(monkeypatch):
    """Run the test with the host clock at UTC+7, where the shop is."""
    monkeypatch.setenv("TZ", "ICT-7")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()
