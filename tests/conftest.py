import os
import random

import pytest

from quantitykit.core import leapseconds
from quantitykit.core.config import reset_config


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Every test starts from the default configuration."""
    for name in list(os.environ):
        if name.startswith("QUANTITYKIT_"):
            monkeypatch.delenv(name, raising=False)
    reset_config()
    leapseconds.load_override_table.cache_clear()
    yield
    reset_config()
    leapseconds.load_override_table.cache_clear()


@pytest.fixture
def rng():
    """Seeded random source so sampled tests are reproducible."""
    return random.Random(20240521)
