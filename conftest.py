from datetime import date
from pathlib import Path

import pytest

from cue_the_line.models import QuotePool
from cue_the_line.pool import load_pool
from cue_the_line.storage import MemoryRunStore

PRESETS_DIR = Path(__file__).parent / "presets"
TODAY = date(2025, 3, 14)


@pytest.fixture
def quote_pool() -> QuotePool:
    """The bundled sample pool: 16 quotes over tiers 1–4, three closers."""
    return load_pool(PRESETS_DIR / "quotes.json")


@pytest.fixture
def store() -> MemoryRunStore:
    return MemoryRunStore()


@pytest.fixture
def today() -> date:
    return TODAY
