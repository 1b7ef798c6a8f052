"""Core domain models.

The selector, matcher and session all operate on these types.
Pydantic is used for validation and serialisation at every data boundary:
the quote pool on the way in and the persisted run store in both directions.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

CORRECT_MARK = "✅"
WRONG_MARK = "❌"

Mark = Literal["✅", "❌"]

QUESTIONS_PER_RUN = 5


class Quote(BaseModel):
    """A single movie quote from the pool. Never mutated after loading."""

    model_config = ConfigDict(frozen=True)

    id: str
    quote: str
    tier: int = Field(default=2, ge=1, le=4)  # difficulty, 1 easiest
    answers: list[str] = Field(default_factory=list)
    hint1: str = ""
    hint2: str = ""
    display: str | None = None  # canonical title
    year: int | None = None

    @field_validator("tier", mode="before")
    @classmethod
    def _unset_tier(cls, value: Any) -> Any:
        # null or 0 counts as unset
        if value is None or value == 0:
            return 2
        return value


class Closer(BaseModel):
    """Flavor line shown after a perfect run."""

    model_config = ConfigDict(frozen=True)

    quote: str
    source: str


class QuotePool(BaseModel):
    """The whole quotes.json document."""

    pool: list[Quote] = Field(default_factory=list)
    perfect_closers: list[Closer] = Field(default_factory=list)

    def by_id(self, quote_id: str) -> Quote | None:
        return next((q for q in self.pool if q.id == quote_id), None)


class RunState(BaseModel):
    """Progress and score for one day-key.

    Stored with camelCase keys so the on-disk file matches the browser
    game's localStorage layout.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    started_at: int  # epoch ms
    correct_count: int = Field(default=0, ge=0, le=QUESTIONS_PER_RUN)
    marks: list[Mark] = Field(default_factory=list, max_length=QUESTIONS_PER_RUN)
    hints_used: int = Field(default=0, ge=0)
    hint1_shown: set[str] = Field(default_factory=set)
    hint2_shown: set[str] = Field(default_factory=set)
    completed: bool = False
    completed_at: int | None = None
    set_ids: list[str] = Field(default_factory=list)

    @field_validator("hint1_shown", "hint2_shown", mode="before")
    @classmethod
    def _legacy_shown_map(cls, value: Any) -> Any:
        # Older saves keep {quote_id: true}
        if isinstance(value, dict):
            return {k for k, v in value.items() if v}
        return value

    @property
    def index(self) -> int:
        """Number of quotes already answered."""
        return len(self.marks)

    def to_json_dict(self) -> dict[str, Any]:
        data = self.model_dump(mode="json", by_alias=True)
        data["hint1Shown"] = sorted(self.hint1_shown)
        data["hint2Shown"] = sorted(self.hint2_shown)
        return data
