"""Run state machine for one day's game.

A DailySession owns everything the browser game used to keep in globals:
the pool, today's selected set, the loaded store and today's RunState.

Lifecycle:
  open    : load the store once, select today's set, create or resume
            today's RunState (index = len(marks)), record set_ids, save.
  hint    : first reveal of a slot for the current quote costs one hint;
            repeats are free.
  answer  : empty input is rejected without using a turn. Otherwise the
            mark is appended and the run moves on, right or wrong. After
            the last quote the run is completed and frozen.

Every mutation saves the full store immediately. A failed save leaves the
in-memory run playable.
"""

from __future__ import annotations

import logging
import time
from datetime import date
from typing import Callable, Literal

from pydantic import BaseModel

from cue_the_line.days import DEFAULT_ANCHOR, day_index, day_key, run_number, yesterday_key
from cue_the_line.matcher import matches_answer
from cue_the_line.models import CORRECT_MARK, QUESTIONS_PER_RUN, WRONG_MARK, Closer, Quote, QuotePool, RunState
from cue_the_line.selector import pick_closer, select_daily_set
from cue_the_line.share import DEFAULT_PLAY_URL, build_share_card
from cue_the_line.storage import RunStore

logger = logging.getLogger(__name__)

ADVANCE_DELAY_MS = 450
UNKNOWN_TITLE = "Unknown"

EMPTY_ANSWER_STATUS = "Type a movie name first."
CORRECT_STATUS = "Correct."
WRONG_STATUS = "Not quite."
COMPLETE_STATUS = "Today’s run is complete."
NO_QUOTES_STATUS = "There are no quotes to play today."

Tone = Literal["muted", "ok", "bad"]


class SubmitResult(BaseModel):
    """Outcome of one answer submission."""

    accepted: bool  # False when no turn was used
    correct: bool | None = None
    status: str = ""
    tone: Tone = "muted"
    completed: bool = False
    advance_delay_ms: int = 0


class RevealItem(BaseModel):
    """One of yesterday's quotes, with its answer."""

    index: int
    quote: str
    title: str
    year: int | None = None


def _now_ms() -> int:
    return int(time.time() * 1000)


class DailySession:
    def __init__(
        self,
        pool: QuotePool,
        store: RunStore,
        today: date,
        *,
        anchor: date = DEFAULT_ANCHOR,
        clock: Callable[[], int] = _now_ms,
        play_url: str = DEFAULT_PLAY_URL,
    ) -> None:
        self.pool = pool
        self.today = today
        self.day_key = day_key(today)
        self.day_index = day_index(today, anchor)
        self.run_number = run_number(self.day_index)
        self.play_url = play_url
        self._store = store
        self._clock = clock

        self.daily_set: list[Quote] = select_daily_set(pool.pool, self.day_index)
        self._runs: dict[str, RunState] = store.load()
        self.state = self._begin()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _begin(self) -> RunState:
        state = self._runs.get(self.day_key)
        if state is None:
            state = RunState(started_at=self._clock())
            self._runs[self.day_key] = state
            logger.info("Started run #%d for %s", self.run_number, self.day_key)
        elif state.completed:
            logger.info("Run for %s already completed", self.day_key)
        else:
            logger.info("Resuming run for %s at quote %d", self.day_key, state.index + 1)
        state.set_ids = [q.id for q in self.daily_set]
        self.state = state
        if not state.completed and self.daily_set and state.index >= self._run_length():
            # Last mark was saved but the completion write was lost
            self._finish()
        else:
            self._save()
        return state

    def _run_length(self) -> int:
        return min(QUESTIONS_PER_RUN, len(self.daily_set))

    def _save(self) -> None:
        self._store.save(self._runs)

    def _finish(self) -> None:
        self.state.completed = True
        self.state.completed_at = self._clock()
        self._save()
        logger.info(
            "run_completed day=%s score=%d hints_used=%d",
            self.day_key, self.state.correct_count, self.state.hints_used,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def index(self) -> int:
        return self.state.index

    @property
    def completed(self) -> bool:
        return self.state.completed

    @property
    def current_quote(self) -> Quote | None:
        if self.state.completed or self.index >= len(self.daily_set):
            return None
        return self.daily_set[self.index]

    def is_hint_shown(self, slot: int) -> bool:
        q = self.current_quote
        return q is not None and q.id in self._shown(slot)

    def _shown(self, slot: int) -> set[str]:
        if slot == 1:
            return self.state.hint1_shown
        if slot == 2:
            return self.state.hint2_shown
        raise ValueError(f"Hint slot must be 1 or 2, got {slot}")

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def reveal_hint(self, slot: int) -> str | None:
        """Reveal a hint for the current quote and return its text.

        Returns None once the run is over.
        """
        shown = self._shown(slot)
        q = self.current_quote
        if q is None:
            return None
        if q.id not in shown:
            shown.add(q.id)
            self.state.hints_used += 1
            self._save()
            logger.info("hint_used hint=%d index=%d", slot, self.index + 1)
        return q.hint1 if slot == 1 else q.hint2

    def submit_answer(self, raw: str | None) -> SubmitResult:
        q = self.current_quote
        if q is None:
            if not self.completed:
                return SubmitResult(accepted=False, status=NO_QUOTES_STATUS)
            return SubmitResult(accepted=False, status=COMPLETE_STATUS, completed=True)
        if not (raw or "").strip():
            return SubmitResult(accepted=False, status=EMPTY_ANSWER_STATUS)

        number = self.index + 1
        ok = matches_answer(raw, q)
        self.state.marks.append(CORRECT_MARK if ok else WRONG_MARK)
        if ok:
            self.state.correct_count += 1
        self._save()
        logger.info("%s index=%d", "answer_correct" if ok else "answer_wrong", number)

        if self.index >= self._run_length():
            self._finish()
            return SubmitResult(accepted=True, correct=ok, completed=True)

        return SubmitResult(
            accepted=True,
            correct=ok,
            status=CORRECT_STATUS if ok else WRONG_STATUS,
            tone="ok" if ok else "bad",
            advance_delay_ms=ADVANCE_DELAY_MS,
        )

    # ------------------------------------------------------------------
    # End of run
    # ------------------------------------------------------------------

    def share_text(self) -> str | None:
        if not self.completed:
            return None
        return build_share_card(self.state, self.play_url)

    def closer(self) -> Closer | None:
        """Flavor line for a perfect run."""
        if not self.completed or self.state.correct_count != QUESTIONS_PER_RUN:
            return None
        return pick_closer(self.pool.perfect_closers, self.day_index)

    def yesterday_reveal(self) -> list[RevealItem] | None:
        """Yesterday's quotes with titles, or None when there is nothing to show."""
        previous = self._runs.get(yesterday_key(self.today))
        if previous is None or len(previous.set_ids) != QUESTIONS_PER_RUN:
            return None
        items = []
        for i, quote_id in enumerate(previous.set_ids, start=1):
            q = self.pool.by_id(quote_id)
            if q is None:
                items.append(RevealItem(index=i, quote="", title=UNKNOWN_TITLE))
                continue
            items.append(RevealItem(index=i, quote=q.quote, title=q.display or UNKNOWN_TITLE, year=q.year))
        return items
