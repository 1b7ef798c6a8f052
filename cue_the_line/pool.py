"""Quote pool loading.

The pool lives in a single quotes.json document:

    {
      "pool": [{"id": ..., "quote": ..., "tier": 1, "answers": [...], ...}],
      "perfect_closers": [{"quote": ..., "source": ...}]
    }

A pool that cannot be read is fatal: there is nothing to play.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from cue_the_line.models import QuotePool

logger = logging.getLogger(__name__)


class PoolLoadError(Exception):
    """Raised when quotes.json is missing or unusable."""


def parse_pool(raw: str) -> QuotePool:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise PoolLoadError(f"quotes.json is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise PoolLoadError(f"quotes.json must be a JSON object, got {type(data).__name__}")
    try:
        return QuotePool.model_validate(data)
    except ValidationError as e:
        raise PoolLoadError(f"quotes.json has invalid entries: {e}") from e


def load_pool(path: Path) -> QuotePool:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise PoolLoadError(f"Could not read {path}: {e}") from e
    pool = parse_pool(raw)
    logger.info(
        "Loaded %d quotes and %d closers from %s",
        len(pool.pool), len(pool.perfect_closers), path,
    )
    return pool
