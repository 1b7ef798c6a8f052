"""Run persistence.

The whole store is one mapping of day-key → RunState, read and written as
a single JSON document. There is no partial update: every save rewrites
the full mapping, and the last writer wins.

    {base}/
      mq_v02_state.json   ← {"2025-03-14": {RunState}, ...}

Reads never raise. A missing, unreadable or malformed file loads as an
empty store; a malformed record is dropped and the rest kept. A failed
write is logged and the caller carries on with its in-memory state.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Protocol

from pydantic import ValidationError

from cue_the_line.models import RunState

logger = logging.getLogger(__name__)

STORE_FILENAME = "mq_v02_state.json"


class RunStore(Protocol):
    def load(self) -> dict[str, RunState]: ...

    def save(self, runs: dict[str, RunState]) -> None: ...


def decode_runs(data: Any) -> dict[str, RunState]:
    if not isinstance(data, dict):
        logger.warning("Run store is not a JSON object, treating as empty")
        return {}
    runs: dict[str, RunState] = {}
    for key, record in data.items():
        try:
            runs[key] = RunState.model_validate(record)
        except ValidationError as e:
            logger.warning("Dropping malformed run record %r: %s", key, e)
    return runs


def encode_runs(runs: dict[str, RunState]) -> dict[str, Any]:
    return {key: state.to_json_dict() for key, state in runs.items()}


class JsonRunStore:
    """Store backed by a single JSON file."""

    def __init__(self, base_path: Path, filename: str = STORE_FILENAME) -> None:
        self._path = base_path / filename

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[str, RunState]:
        if not self._path.is_file():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:  # JSONDecodeError, UnicodeDecodeError
            logger.warning("Could not read run store %s: %s", self._path, e)
            return {}
        return decode_runs(data)

    def save(self, runs: dict[str, RunState]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(
                json.dumps(encode_runs(runs), indent=2, ensure_ascii=False),
                encoding="utf-8",
            )
        except OSError as e:
            logger.warning("Could not save run store %s: %s", self._path, e)


class MemoryRunStore:
    """Store kept in process memory, serialised like the file store."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self.data: dict[str, Any] = data if data is not None else {}
        self.saves = 0

    def load(self) -> dict[str, RunState]:
        return decode_runs(self.data)

    def save(self, runs: dict[str, RunState]) -> None:
        self.data = json.loads(json.dumps(encode_runs(runs)))
        self.saves += 1
